"""Configuration and constants for the crypto dashboard."""

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# Paths
PROJECT_ROOT = Path(__file__).parent.parent
LOG_DIR = Path(os.getenv("LOG_DIR", PROJECT_ROOT / "logs"))

# CoinGecko markets endpoint
COINGECKO_API = os.getenv("COINGECKO_API", "https://api.coingecko.com/api/v3")
VS_CURRENCY = os.getenv("VS_CURRENCY", "usd")
MARKET_ORDER = "market_cap_desc"
PER_PAGE = int(os.getenv("PER_PAGE", "12"))
REQUEST_TIMEOUT = float(os.getenv("REQUEST_TIMEOUT", "10"))

# Every period is requested up front so switching periods never refetches
PRICE_CHANGE_PERIODS = ("1d", "7d", "14d", "30d", "90d", "365d")
DEFAULT_PERIOD = "7d"

# Polling
REFETCH_INTERVAL = int(os.getenv("REFETCH_INTERVAL", "30"))  # seconds
STALE_TIME = int(os.getenv("STALE_TIME", "25"))  # seconds
MARKETS_QUERY_KEY = "markets"

# Sparklines cover 7 days of history
SPARKLINE_HOURS = 168

# Keep one color per id across refreshes instead of recomputing by list index
STICKY_COLORS = os.getenv("STICKY_COLORS", "false").lower() in ("1", "true", "yes")
