"""
Constants for the Binance margin client.
"""

# API Configuration
DEFAULT_BASE_URL = "https://api.binance.com"
DEFAULT_TIMEOUT = 30.0

# Margin endpoints
MARGIN_LOAN_ENDPOINT = "/sapi/v1/margin/loan"
MARGIN_REPAY_ENDPOINT = "/sapi/v1/margin/repay"
MARGIN_ACCOUNT_ENDPOINT = "/sapi/v1/margin/account"
MARGIN_ORDER_ENDPOINT = "/sapi/v1/margin/order"
MARGIN_ASSET_ENDPOINT = "/sapi/v1/margin/asset"

# Authentication Configuration
API_KEY_HEADER = "X-MBX-APIKEY"

SESSION_HEADERS = {
    "User-Agent": "binance-margin-client/0.1",
    "Accept": "application/json",
}
MAX_CONNECTIONS_PER_HOST = 20

# Order quantity and price are sent with a fixed number of fractional digits
ORDER_PRICE_PRECISION = 3

# HTTP Status Codes
SUCCESS_STATUS_CODE = 200
