from typing import Any, Mapping, Optional

from .config import config

DEFAULT_TIMEOUT = 30


def default_timeout() -> int:
    timeout = config.get('http', 'timeout', default=DEFAULT_TIMEOUT)
    if isinstance(timeout, bool) or not isinstance(timeout, int) or timeout <= 0:
        return DEFAULT_TIMEOUT
    return timeout


def resolve_timeout(options: Optional[Mapping[str, Any]] = None) -> int:
    """Timeout in seconds from options["timeout"].

    Missing, non-integer and non-positive values fall back to the configured
    default. Other option keys are ignored.
    """
    if not isinstance(options, Mapping):
        return default_timeout()
    timeout = options.get('timeout')
    if isinstance(timeout, bool) or not isinstance(timeout, int) or timeout <= 0:
        return default_timeout()
    return timeout
