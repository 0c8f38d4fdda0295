"""Shared API dependencies."""

from slowapi import Limiter
from slowapi.util import get_remote_address

from bikefit.config import get_settings


def current_rate_limit() -> str:
    """Limit string read per request, so a settings reload applies at once."""
    return get_settings().rate_limit


limiter = Limiter(
    key_func=get_remote_address,
    enabled=get_settings().rate_limit_enabled,
)
