import os
from dotenv import load_dotenv
load_dotenv()
# ---- Trading model ----
FEE = 0.001          # 0.1% per trade
MAX_HOPS = 3
HOPS_LIMIT = 6          # search is exponential in hops
TOP_RESULTS = 3

# ---- Currency universe ----
FIATS = ["USD", "AED", "INR", "EUR", "GBP", "JPY", "CHF"]
CRYPTOS = ["BTC", "ETH", "BNB", "XRP", "USDT"]
ALL_CURRENCIES = FIATS + CRYPTOS

# Manually restricted (src, dst) pairs
RESTRICTED_PAIRS = {
    ("AED", "XRP"), ("XRP", "AED"),
    ("INR", "BTC"), ("BTC", "INR"),
    ("INR", "ETH"), ("ETH", "INR"),
    ("IRR", "BTC"), ("BTC", "IRR"),
    ("RUB", "USD"), ("USD", "RUB"),
}

# ---- Upstream sources ----
EXCHANGERATE_API_KEY = os.environ.get("EXCHANGERATE_API_KEY")
EXCHANGERATE_BASE_URL = "https://v6.exchangerate-api.com/v6"
BINANCE_TICKER_URL = "https://api.binance.com/api/v3/ticker/price"
GEMINI_SYMBOLS_URL = "https://api.gemini.com/v1/symbols"

RATE_TIMEOUT_SEC = 5
RATE_MAX_RETRIES = 2
RATE_REQUESTS_PER_SEC = 5.0
FETCH_WORKERS = 8

# ---- Search ----
SEARCH_PROGRESS_EVERY = 100
SEARCH_CANCEL_CHECK_EVERY = 256

# Rebuild the cached graph after this many seconds
GRAPH_MAX_AGE_SEC = int(os.environ.get("GRAPH_MAX_AGE_SEC", "300"))

# ---- Logging ----
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
