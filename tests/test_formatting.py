"""Unit tests for formatting module."""

from crypto_dashboard.formatting import format_market_cap, format_percentage, format_price


class TestFormatPrice:
    """Tests for format_price function."""

    def test_large_price(self) -> None:
        """Test large prices get thousands separators."""
        assert format_price(45000.1) == "$45,000.10"

    def test_whole_dollar(self) -> None:
        """Test whole dollars keep two decimals."""
        assert format_price(1) == "$1.00"

    def test_sub_dollar_keeps_six_decimals(self) -> None:
        """Test sub-dollar prices keep up to six decimals."""
        assert format_price(0.123456) == "$0.123456"

    def test_sub_dollar_trims_trailing_zeros(self) -> None:
        """Test at least two decimals are kept below $1."""
        assert format_price(0.5) == "$0.50"
        assert format_price(0.0125) == "$0.0125"

    def test_tiny_price(self) -> None:
        """Test tiny prices are rounded to six decimals."""
        assert format_price(0.00001234) == "$0.000012"

    def test_zero(self) -> None:
        """Test zero formats as two decimals."""
        assert format_price(0.0) == "$0.00"

    def test_negative(self) -> None:
        """Test the sign goes before the dollar sign."""
        assert format_price(-5) == "-$5.00"

    def test_none(self) -> None:
        """Test a missing price shows N/A."""
        assert format_price(None) == "N/A"


class TestFormatMarketCap:
    """Tests for format_market_cap function."""

    def test_trillions(self) -> None:
        """Test trillions use the T suffix."""
        assert format_market_cap(1.5e12) == "$1.50T"

    def test_billions(self) -> None:
        """Test billions use the B suffix."""
        assert format_market_cap(2.5e9) == "$2.50B"

    def test_millions(self) -> None:
        """Test millions use the M suffix."""
        assert format_market_cap(3e6) == "$3.00M"

    def test_small(self) -> None:
        """Test small caps show whole dollars."""
        assert format_market_cap(999) == "$999"

    def test_none(self) -> None:
        """Test a missing market cap shows N/A."""
        assert format_market_cap(None) == "N/A"


class TestFormatPercentage:
    """Tests for format_percentage function."""

    def test_positive_has_plus(self) -> None:
        """Test positive changes carry a plus sign."""
        assert format_percentage(1.5) == "+1.50%"

    def test_negative(self) -> None:
        """Test negative changes carry a minus sign."""
        assert format_percentage(-2.5) == "-2.50%"

    def test_zero_is_positive(self) -> None:
        """Test zero is shown as a positive change."""
        assert format_percentage(0) == "+0.00%"

    def test_none(self) -> None:
        """Test a missing change shows N/A."""
        assert format_percentage(None) == "N/A"
