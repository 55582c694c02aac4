"""Display formatting for prices, market caps and percentage changes."""


def format_price(price: float | None) -> str:
    """Format a USD price.

    Two decimals, or up to six for prices below $1 (trailing zeros past
    the second decimal are dropped).
    """
    if price is None:
        return "N/A"
    sign = "-" if price < 0 else ""
    price = abs(price)
    if price < 1:
        text = f"{price:,.6f}".rstrip("0")
        whole, _, frac = text.partition(".")
        text = f"{whole}.{frac.ljust(2, '0')}"
    else:
        text = f"{price:,.2f}"
    return f"{sign}${text}"


def format_market_cap(market_cap: float | None) -> str:
    """Abbreviate a market cap: $1.23T, $4.56B, $7.89M, else whole dollars."""
    if market_cap is None:
        return "N/A"
    if market_cap >= 1e12:
        return f"${market_cap / 1e12:.2f}T"
    if market_cap >= 1e9:
        return f"${market_cap / 1e9:.2f}B"
    if market_cap >= 1e6:
        return f"${market_cap / 1e6:.2f}M"
    return f"${market_cap:.0f}"


def format_percentage(change: float | None) -> str:
    """Signed percentage with two decimals, e.g. "+1.50%"."""
    if change is None:
        return "N/A"
    return f"{change:+.2f}%"
