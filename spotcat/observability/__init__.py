# noqa: D104 - package initialization
from .logging import JsonFormatter, configure_logging  # noqa: F401
from .metrics import record_auth_exchange, record_auth_failure, record_cache_lookup, record_fetch_failure  # noqa: F401
