"""Core constants: cache key structure, pagination, and plan limits.

Single source of truth for literal values shared across layers (DRY).
"""

# Cache key prefixes
CACHE_PREFIX_REPORT = "report"

# Delimiter for composite keys
CACHE_KEY_SEP = ":"

# Default entry lifetime (seconds) when the caller does not pass a TTL.
CACHE_DEFAULT_TTL = 5 * 60

# Store column sizes
STORE_NAME_MAX_LENGTH = 100
STORE_URL_MAX_LENGTH = 500

# Pagination
DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100

# Plan store limits
MAX_STORES_FREE = 2
MAX_STORES_PRO = 5
MAX_STORES_ENTERPRISE = 10
# Sentinel limit for companies exempt from plan quotas.
UNLIMITED_STORES = 999
# Usage percentage at which a company is "near" its store limit.
NEAR_LIMIT_PERCENT = 80

# Products with fewer units than this show up in the low-stock list.
LOW_STOCK_THRESHOLD = 5
# WooCommerce REST paging
STORE_API_PAGE_SIZE = 100
STORE_API_MAX_PAGES = 50
