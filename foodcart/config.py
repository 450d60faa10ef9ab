"""
Runtime configuration.

Values are read from environment variables once and frozen into a Settings
object. Use get_settings() everywhere; tests call get_settings.cache_clear()
after patching the environment.
"""
import os
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from functools import lru_cache

from foodcart.logging import get_logger

logger = get_logger(__name__)

DEFAULT_TAX_RATE = Decimal("0.15")
DEFAULT_DELIVERY_FEE = Decimal("4.99")
DEFAULT_PAYMENT_SUCCESS_RATE = 0.9
DEFAULT_PAYMENT_DELAY_SECONDS = 2.0
DEFAULT_LOCATION_MAX_AGE_SECONDS = 15 * 60


def _env_decimal(name: str, default: Decimal) -> Decimal:
    raw = os.environ.get(name)
    if raw is None or raw == "":
        return default
    try:
        value = Decimal(raw)
    except InvalidOperation:
        logger.warning(f"Invalid {name}={raw!r}, using default {default}")
        return default
    if value < 0:
        logger.warning(f"Negative {name}={raw!r}, using default {default}")
        return default
    return value


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if raw is None or raw == "":
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning(f"Invalid {name}={raw!r}, using default {default}")
        return default
    if value < 0:
        logger.warning(f"Negative {name}={raw!r}, using default {default}")
        return default
    return value


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or raw == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning(f"Invalid {name}={raw!r}, using default {default}")
        return default
    return max(value, 0)


@dataclass(frozen=True)
class Settings:
    """Application settings."""
    tax_rate: Decimal = DEFAULT_TAX_RATE
    delivery_fee: Decimal = DEFAULT_DELIVERY_FEE
    payment_success_rate: float = DEFAULT_PAYMENT_SUCCESS_RATE
    payment_delay_seconds: float = DEFAULT_PAYMENT_DELAY_SECONDS
    cart_ttl_seconds: int = 0  # 0 keeps the cart until cleared
    location_max_age_seconds: int = DEFAULT_LOCATION_MAX_AGE_SECONDS
    currency: str = "USD"
    redis_url: str = ""
    redis_token: str = ""

    @classmethod
    def from_env(cls) -> "Settings":
        success_rate = _env_float("PAYMENT_SUCCESS_RATE", DEFAULT_PAYMENT_SUCCESS_RATE)
        if success_rate > 1:
            logger.warning(f"PAYMENT_SUCCESS_RATE={success_rate} above 1, clamping")
            success_rate = 1.0
        return cls(
            tax_rate=_env_decimal("TAX_RATE", DEFAULT_TAX_RATE),
            delivery_fee=_env_decimal("DELIVERY_FEE", DEFAULT_DELIVERY_FEE),
            payment_success_rate=success_rate,
            payment_delay_seconds=_env_float("PAYMENT_DELAY_SECONDS", DEFAULT_PAYMENT_DELAY_SECONDS),
            cart_ttl_seconds=_env_int("CART_TTL_SECONDS", 0),
            location_max_age_seconds=_env_int("LOCATION_MAX_AGE_SECONDS", DEFAULT_LOCATION_MAX_AGE_SECONDS),
            currency=os.environ.get("CURRENCY", "USD").upper(),
            redis_url=os.environ.get("UPSTASH_REDIS_REST_URL", ""),
            redis_token=os.environ.get("UPSTASH_REDIS_REST_TOKEN", ""),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get settings singleton."""
    return Settings.from_env()
