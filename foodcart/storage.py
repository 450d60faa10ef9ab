"""
Storage Module - key-value persistence for cart, session and location data.

Provides:
- KeyValueStore, the get/set/remove contract the cart and services depend on
- RedisStore, an Upstash Redis implementation storing JSON strings
- StorageKeys / TTL constants
- Expiring-value helpers (value + epoch-millisecond expiry)
"""

import json
import time
from abc import ABC, abstractmethod
from typing import Any, Optional

from tenacity import retry, stop_after_attempt, wait_exponential
from upstash_redis.asyncio import Redis as AsyncRedis

from foodcart.config import get_settings
from foodcart.errors import ERROR_STORAGE_NOT_CONFIGURED, ERROR_STORAGE_UNAVAILABLE, PersistenceError
from foodcart.logging import get_logger

logger = get_logger(__name__)


class StorageKeys:
    """Keys used in the key-value store."""

    CART_ITEMS = "cart_items"
    ORDERS = "orders"

    # Session cache
    USER_NAME = "user_name"
    USER_EMAIL = "user_email"
    USER_PHONE = "user_phone"
    USER_PHOTO_URL = "user_photo_url"
    IS_LOGGED_IN = "is_logged_in"

    # Location
    USER_LOCATION = "user_location"
    DELIVERY_ADDRESS = "delivery_address"

    SESSION_KEYS = (USER_NAME, USER_EMAIL, USER_PHONE, USER_PHOTO_URL, IS_LOGGED_IN)


class TTL:
    """Time-to-live constants (seconds)."""

    DEFAULT_EXPIRY_MINUTES = 60
    ORDERS = 90 * 86400  # 90 days


class KeyValueStore(ABC):
    """Persistent key-value store holding JSON values."""

    @abstractmethod
    async def get(self, key: str) -> Any:
        """Return the decoded value for key, or None if absent."""

    @abstractmethod
    async def set(self, key: str, value: Any, ttl: Optional[int] = None) -> None:
        """Store value under key. ttl in seconds; None or 0 means no expiry."""

    @abstractmethod
    async def remove(self, key: str) -> None:
        """Delete key. Missing keys are not an error."""


def encode_value(value: Any) -> str:
    """Every value, strings included, is stored as JSON."""
    return json.dumps(value)


def decode_value(raw: Optional[str]) -> Any:
    """Decode a stored value; non-JSON strings come back unchanged."""
    if raw is None:
        return None
    try:
        return json.loads(raw)
    except (json.JSONDecodeError, TypeError):
        return raw


class RedisStore(KeyValueStore):
    """
    KeyValueStore backed by Upstash Redis (REST).

    Calls are retried with exponential backoff; the final failure is raised
    as PersistenceError.
    """

    def __init__(self, client: AsyncRedis, prefix: str = ""):
        self._client = client
        self._prefix = prefix

    def _key(self, key: str) -> str:
        return f"{self._prefix}{key}"

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.1, min=0.1, max=1),
        reraise=True,
    )
    async def _execute(self, operation: str, key: str, *args, **kwargs):
        method = getattr(self._client, operation)
        return await method(self._key(key), *args, **kwargs)

    async def get(self, key: str) -> Any:
        try:
            raw = await self._execute("get", key)
        except Exception as e:
            logger.error(f"Failed to read {key} from Redis: {e}")
            raise PersistenceError(f"{ERROR_STORAGE_UNAVAILABLE}: {e}", key=key, raw_error=e) from e
        return decode_value(raw)

    async def set(self, key: str, value: Any, ttl: Optional[int] = None) -> None:
        try:
            if ttl:
                await self._execute("set", key, encode_value(value), ex=ttl)
            else:
                await self._execute("set", key, encode_value(value))
        except Exception as e:
            logger.error(f"Failed to write {key} to Redis: {e}")
            raise PersistenceError(f"{ERROR_STORAGE_UNAVAILABLE}: {e}", key=key, raw_error=e) from e

    async def remove(self, key: str) -> None:
        try:
            await self._execute("delete", key)
        except Exception as e:
            logger.error(f"Failed to remove {key} from Redis: {e}")
            raise PersistenceError(f"{ERROR_STORAGE_UNAVAILABLE}: {e}", key=key, raw_error=e) from e


def _now_ms() -> int:
    return int(time.time() * 1000)


async def set_with_expiry(
    store: KeyValueStore,
    key: str,
    value: Any,
    expiry_minutes: int = TTL.DEFAULT_EXPIRY_MINUTES,
) -> None:
    """Store value wrapped with an absolute expiry timestamp (epoch ms)."""
    item = {
        "value": value,
        "expiry": _now_ms() + expiry_minutes * 60 * 1000,
    }
    await store.set(key, item)


async def get_with_expiry(store: KeyValueStore, key: str) -> Any:
    """
    Read a value stored by set_with_expiry.

    Expired entries are removed and None is returned. Values stored without
    an expiry wrapper are returned unchanged.
    """
    item = await store.get(key)
    if item is None:
        return None

    if not isinstance(item, dict) or "expiry" not in item:
        return item

    if _now_ms() > item["expiry"]:
        await store.remove(key)
        return None

    return item.get("value")


_store: Optional[RedisStore] = None


def get_store() -> RedisStore:
    """
    Get the Redis-backed store (singleton).

    Uses UPSTASH_REDIS_REST_URL and UPSTASH_REDIS_REST_TOKEN.
    """
    global _store

    if _store is None:
        settings = get_settings()
        if not settings.redis_url or not settings.redis_token:
            raise PersistenceError(ERROR_STORAGE_NOT_CONFIGURED)
        _store = RedisStore(AsyncRedis(url=settings.redis_url, token=settings.redis_token))

    return _store
