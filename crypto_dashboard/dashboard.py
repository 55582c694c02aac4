"""Main Streamlit dashboard entry point for the Crypto Dashboard.

Run with: streamlit run crypto_dashboard/dashboard.py
"""

import logging
import sys
from pathlib import Path

import streamlit as st

# Ensure crypto_dashboard is importable
sys.path.insert(0, str(Path(__file__).parent.parent))

from crypto_dashboard.alignment import align_series, series_labels, to_frame
from crypto_dashboard.charts import comparison_figure, sparkline_figure
from crypto_dashboard.colors import StickyColorAssigner, color_map
from crypto_dashboard.config import (
    DEFAULT_PERIOD,
    MARKETS_QUERY_KEY,
    REFETCH_INTERVAL,
    STICKY_COLORS,
)
from crypto_dashboard.data_fetcher import QueryCache, fetch_snapshots, setup_logging
from crypto_dashboard.formatting import format_market_cap, format_percentage, format_price
from crypto_dashboard.models import AssetSnapshot, TimePeriod
from crypto_dashboard.selection import SelectionState
from crypto_dashboard.summary import period_label, summarize, summary_frame

logger = logging.getLogger(__name__)

st.set_page_config(
    page_title="Crypto Dashboard",
    page_icon="📈",
    layout="wide",
)

setup_logging()

# Custom CSS
st.markdown("""
<style>
    .main-header {
        font-size: 2.5rem;
        font-weight: 700;
        margin-bottom: 0.25rem;
    }
    .sub-header {
        font-size: 1.1rem;
        color: #888;
        margin-bottom: 1rem;
    }
    .dot {
        display: inline-block;
        width: 0.75rem;
        height: 0.75rem;
        border-radius: 50%;
        margin-right: 0.4rem;
    }
    .positive { color: hsl(142, 35%, 45%); font-weight: 700; }
    .negative { color: hsl(0, 50%, 55%); font-weight: 700; }
</style>
""", unsafe_allow_html=True)


@st.cache_resource
def get_query_cache() -> QueryCache:
    """Process-wide market data cache shared by every session."""
    return QueryCache(lambda _key: fetch_snapshots())


def get_selection() -> SelectionState:
    if "selection" not in st.session_state:
        st.session_state.selection = SelectionState()
    return st.session_state.selection


def get_colors(snapshots: list[AssetSnapshot]) -> dict[str, str]:
    if not STICKY_COLORS:
        return color_map(snapshots)
    if "color_assigner" not in st.session_state:
        st.session_state.color_assigner = StickyColorAssigner()
    return st.session_state.color_assigner.assign(snapshots)


def change_class(is_positive: bool) -> str:
    return "positive" if is_positive else "negative"


def refresh() -> None:
    logger.info("Manual refresh triggered")
    cache = get_query_cache()
    cache.invalidate(MARKETS_QUERY_KEY)
    cache.fetch(MARKETS_QUERY_KEY)
    st.toast("Refreshing data: fetching latest crypto prices...")


def render_error(error: Exception) -> None:
    """Error view, shown instead of the dashboard while a fetch is failing."""
    st.markdown("## ⚠️ Failed to load crypto data")
    st.markdown(str(error) or "An error occurred")
    st.button("🔄 Try Again", on_click=refresh, key="retry")


def render_comparison(snapshots: list[AssetSnapshot], period: TimePeriod,
                      colors: dict[str, str]) -> None:
    selection = get_selection()
    selection.sync(snapshots)

    st.subheader("Relative Performance Comparison")
    st.caption("7-day normalized performance chart (% change from start)")
    st.caption(f"Summary stats below show {period_label(period)} performance")

    # Coin selector pills
    pill_cols = st.columns(min(len(snapshots), 6) or 1)
    for i, snapshot in enumerate(snapshots):
        selected = selection.is_selected(snapshot.id)
        pill_cols[i % len(pill_cols)].button(
            f"{snapshot.symbol} ✕" if selected else snapshot.symbol,
            key=f"pill-{snapshot.id}",
            type="primary" if selected else "secondary",
            on_click=selection.toggle,
            args=(snapshot.id,),
            width="stretch",
        )

    if len(selection.selected(snapshots)) == 0:
        st.info("Select at least one coin to view performance comparison")
        return

    labels = series_labels(snapshots)
    selected_ids = selection.ids
    table = to_frame(align_series(snapshots, selected_ids), snapshots)
    label_colors = {labels[asset_id]: color for asset_id, color in colors.items()}
    st.plotly_chart(comparison_figure(table, label_colors), width="stretch")

    # Summary stats
    summary = summary_frame(summarize(snapshots, selected_ids, period, colors))
    stat_cols = st.columns(4)
    for i, row in enumerate(summary.itertuples(index=False)):
        stat_cols[i % 4].markdown(
            f'<div style="text-align:center">'
            f'<span class="dot" style="background-color:{row.color}"></span>'
            f'<b>{row.symbol}</b><br>'
            f'<span class="{change_class(row.is_positive)}">'
            f'{format_percentage(row.change)}</span></div>',
            unsafe_allow_html=True,
        )


def render_card(snapshot: AssetSnapshot) -> None:
    change_24h = snapshot.price_change_percentage_24h or 0
    with st.container(border=True):
        icon_col, title_col = st.columns([1, 4])
        if snapshot.image:
            icon_col.image(snapshot.image, width=48)
        title_col.markdown(f"**{snapshot.symbol}**  \n{snapshot.name}")

        st.metric(
            "Price",
            format_price(snapshot.current_price),
            delta=format_percentage(snapshot.price_change_percentage_24h)
            if snapshot.price_change_percentage_24h is not None else None,
            label_visibility="collapsed",
        )
        st.caption(f"Market Cap: {format_market_cap(snapshot.market_cap)}")

        if snapshot.has_sparkline:
            st.plotly_chart(
                sparkline_figure(snapshot.sparkline, change_24h >= 0),
                width="stretch",
                config={"displayModeBar": False, "staticPlot": True},
                key=f"spark-{snapshot.id}",
            )

        change_7d = snapshot.price_change_percentage_7d
        st.markdown(
            f'7d Change: <span class="{change_class(change_7d >= 0)}">'
            f'{format_percentage(change_7d)}</span>',
            unsafe_allow_html=True,
        )


@st.fragment(run_every=REFETCH_INTERVAL)
def render_market_view(period: TimePeriod) -> None:
    """Everything that depends on fetched data; reruns on every poll."""
    state = get_query_cache().fetch(MARKETS_QUERY_KEY)
    logger.debug("Dashboard render - status: %s, coins: %d",
                 state.status, len(state.data or []))

    if state.status == "error":
        render_error(state.error)
        return
    if state.status == "pending":
        st.info("Loading crypto data...")
        return

    snapshots = state.data
    colors = get_colors(snapshots)

    render_comparison(snapshots, period, colors)
    st.markdown("---")

    grid = st.columns(4)
    for i, snapshot in enumerate(snapshots):
        with grid[i % 4]:
            render_card(snapshot)

    st.markdown("---")
    st.caption("Data provided by CoinGecko API")
    st.caption(f"Showing top {len(snapshots)} cryptocurrencies by market cap")


# Header
header_col, button_col = st.columns([5, 1])
with header_col:
    st.markdown('<p class="main-header">📈 Crypto Dashboard</p>', unsafe_allow_html=True)
    st.markdown('<p class="sub-header">'
                'Real-time cryptocurrency prices and performance metrics'
                '</p>', unsafe_allow_html=True)
with button_col:
    st.button(
        "🔄 Refresh",
        on_click=refresh,
        disabled=get_query_cache().is_fetching(MARKETS_QUERY_KEY),
    )

period = st.radio(
    "Time Period",
    list(TimePeriod),
    index=list(TimePeriod).index(TimePeriod(DEFAULT_PERIOD)),
    format_func=lambda p: p.selector_label,
    horizontal=True,
)
st.caption(f"🟢 Live updates every {REFETCH_INTERVAL} seconds")

render_market_view(period)
