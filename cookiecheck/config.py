"""Runtime defaults for cookie-check, overridable from the environment."""

import os

from cookiecheck import __version__


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "")
    try:
        return int(raw) if raw.strip() else default
    except ValueError:
        return default


def _env_flag(name: str, default: bool) -> bool:
    raw = os.environ.get(name, "").strip().lower()
    if not raw:
        return default
    return raw in ("1", "true", "yes", "on")


DEFAULT_TIMEOUT_MS = _env_int("COOKIECHECK_TIMEOUT_MS", 10000)
DEFAULT_MAX_REDIRECTS = _env_int("COOKIECHECK_MAX_REDIRECTS", 5)
DEFAULT_MIN_GRADE = os.environ.get("COOKIECHECK_MIN_GRADE", "C").strip().upper() or "C"

# Broken certificates should not stop a cookie audit.
VERIFY_TLS = _env_flag("COOKIECHECK_VERIFY_TLS", False)

LOG_LEVEL = os.environ.get("COOKIECHECK_LOG_LEVEL", "WARNING").strip().upper() or "WARNING"

USER_AGENT = f"cookie-check/{__version__}"
ACCEPT = "text/html,application/xhtml+xml,*/*"
