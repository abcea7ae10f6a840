"""Rate limiter instance for SlowAPI.

Shared so both main (app.state.limiter) and route modules (e.g. auth) can use
the same instance without circular imports. Central limit strings and decorators
keep rate limits DRY.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

limiter = Limiter(key_func=get_remote_address)

# Single source of truth for rate limit strings and decorators.
LOGIN_LIMIT = "10/minute"
REGISTER_LIMIT = "5/minute"
PASSWORD_RESET_LIMIT = "5/minute"
WRITE_ENDPOINT_LIMIT = "120/minute"
STORE_TEST_LIMIT = "20/minute"

limit_auth = limiter.limit(LOGIN_LIMIT)
limit_register = limiter.limit(REGISTER_LIMIT)
limit_password_reset = limiter.limit(PASSWORD_RESET_LIMIT)
limit_writes = limiter.limit(WRITE_ENDPOINT_LIMIT)
limit_store_test = limiter.limit(STORE_TEST_LIMIT)
