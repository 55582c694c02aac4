"""Unit tests for normalizer module."""

import math

from crypto_dashboard.normalizer import normalize_batch, normalize_record


class TestNormalizeRecord:
    """Tests for normalize_record function."""

    def test_maps_identity_and_pricing(self, sample_market_response) -> None:
        """Test basic field mapping."""
        snapshot = normalize_record(sample_market_response[0])

        assert snapshot.id == "bitcoin"
        assert snapshot.name == "Bitcoin"
        assert snapshot.current_price == 105.0
        assert snapshot.market_cap == 2_000_000_000_000
        assert snapshot.total_volume == 40_000_000_000
        assert snapshot.price_change_percentage_24h == 1.25
        assert snapshot.image.endswith("bitcoin.png")

    def test_symbol_upper_cased(self, sample_market_response) -> None:
        """Test that symbols are upper-cased on ingestion."""
        snapshot = normalize_record(sample_market_response[1])
        assert snapshot.symbol == "ETH"

    def test_period_changes_from_in_currency_fields(self, sample_market_response) -> None:
        """Test that *_in_currency fields feed the period changes."""
        snapshot = normalize_record(sample_market_response[0])

        assert snapshot.price_change_percentage_1d == 1.3
        assert snapshot.price_change_percentage_7d == 5.0
        assert snapshot.price_change_percentage_14d == -2.0
        assert snapshot.price_change_percentage_30d == 12.5
        assert snapshot.price_change_percentage_90d == 30.0
        assert snapshot.price_change_percentage_365d == 80.0

    def test_missing_7d_defaults_to_zero(self, sample_market_response) -> None:
        """Test that an absent 7d change becomes 0."""
        snapshot = normalize_record(sample_market_response[2])
        assert snapshot.price_change_percentage_7d == 0

    def test_null_7d_defaults_to_zero(self) -> None:
        """Test that an explicit null 7d change becomes 0."""
        snapshot = normalize_record({
            "id": "a", "symbol": "a",
            "price_change_percentage_7d_in_currency": None,
        })
        assert snapshot.price_change_percentage_7d == 0

    def test_other_periods_stay_none(self, sample_market_response) -> None:
        """Test that absent 1d/14d/30d/90d/365d changes are not defaulted."""
        snapshot = normalize_record(sample_market_response[2])

        assert snapshot.price_change_percentage_1d is None
        assert snapshot.price_change_percentage_14d is None
        assert snapshot.price_change_percentage_30d is None
        assert snapshot.price_change_percentage_90d is None
        assert snapshot.price_change_percentage_365d is None

    def test_partial_periods(self, sample_market_response) -> None:
        """Test a record with some periods present and others missing."""
        snapshot = normalize_record(sample_market_response[1])
        assert snapshot.price_change_percentage_30d == 4.0
        assert snapshot.price_change_percentage_14d is None

    def test_sparkline_as_tuple(self, sample_market_response) -> None:
        """Test sparkline prices are carried over in order."""
        snapshot = normalize_record(sample_market_response[1])
        assert snapshot.sparkline == (200.0, 220.0, 180.0)
        assert snapshot.has_sparkline

    def test_missing_sparkline(self) -> None:
        """Test that absent or null sparklines become empty."""
        assert normalize_record({"id": "a"}).sparkline == ()
        assert normalize_record({"id": "a", "sparkline_in_7d": None}).sparkline == ()
        assert normalize_record({"id": "a", "sparkline_in_7d": {}}).sparkline == ()

    def test_nan_passes_through(self) -> None:
        """Test that no range validation happens."""
        snapshot = normalize_record({
            "id": "weird", "symbol": "w",
            "current_price": float("nan"),
            "market_cap": -5,
        })
        assert math.isnan(snapshot.current_price)
        assert snapshot.market_cap == -5

    def test_nan_7d_change_not_defaulted(self) -> None:
        """Test only a missing 7d change defaults to 0, not a NaN one."""
        snapshot = normalize_record({
            "id": "a", "price_change_percentage_7d_in_currency": float("nan"),
        })
        assert math.isnan(snapshot.price_change_percentage_7d)

    def test_empty_record_does_not_raise(self) -> None:
        """Test that a record with no fields still normalizes."""
        snapshot = normalize_record({})
        assert snapshot.id == ""
        assert snapshot.symbol == ""
        assert snapshot.current_price is None
        assert snapshot.price_change_percentage_7d == 0


class TestNormalizeBatch:
    """Tests for normalize_batch function."""

    def test_preserves_order(self, sample_market_response) -> None:
        """Test that provider order is kept."""
        snapshots = normalize_batch(sample_market_response)
        assert [s.id for s in snapshots] == ["bitcoin", "ethereum", "tether", "zero-start"]

    def test_bad_record_does_not_fail_batch(self, sample_market_response) -> None:
        """Test that one malformed record is kept alongside good ones."""
        records = sample_market_response + [{"id": "broken"}]
        snapshots = normalize_batch(records)
        assert len(snapshots) == 5
        assert snapshots[-1].id == "broken"

    def test_empty_batch(self) -> None:
        """Test empty input."""
        assert normalize_batch([]) == []
