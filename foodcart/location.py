"""
Location Service

Pull-based access to the user's position and delivery address. Nothing here
refreshes on its own; callers decide when to ask for a fresh position.
"""
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, Optional

from foodcart.catalog.models import Coordinate
from foodcart.config import get_settings
from foodcart.logging import get_logger, sanitize_string_for_logging
from foodcart.storage import KeyValueStore, StorageKeys

logger = get_logger(__name__)


@dataclass(frozen=True)
class GeocodeResult:
    latitude: float
    longitude: float
    formatted_address: Optional[str] = None


class LocationProvider(ABC):
    """Device geolocation."""

    @abstractmethod
    async def current_position(self) -> Optional[Coordinate]:
        """Return the current position, or None if permission was denied."""


class Geocoder(ABC):
    """Address <-> coordinate lookups."""

    @abstractmethod
    async def geocode(self, address: str) -> Optional[GeocodeResult]:
        ...

    @abstractmethod
    async def reverse_geocode(self, coordinate: Coordinate) -> Optional[str]:
        ...


class LocationService:
    """Caches the user's position and saved delivery address in the store."""

    def __init__(
        self,
        provider: LocationProvider,
        store: KeyValueStore,
        geocoder: Optional[Geocoder] = None,
        max_age_seconds: Optional[int] = None,
        clock: Callable[[], float] = time.time,
    ):
        self.provider = provider
        self.geocoder = geocoder
        self._store = store
        self.max_age_seconds = (
            get_settings().location_max_age_seconds if max_age_seconds is None else max_age_seconds
        )
        self._clock = clock

    def _now_ms(self) -> int:
        return int(self._clock() * 1000)

    async def current_location(self) -> Optional[Coordinate]:
        """Ask the provider for a fresh position and cache it."""
        position = await self.provider.current_position()
        if position is None:
            logger.info("Location permission denied")
            return None

        await self._store.set(
            StorageKeys.USER_LOCATION,
            {"latitude": position.latitude, "longitude": position.longitude, "timestamp": self._now_ms()},
        )
        return position

    async def last_known_location(self) -> Optional[Coordinate]:
        """Cached position if fresh enough, otherwise a fresh one."""
        cached = await self._store.get(StorageKeys.USER_LOCATION)
        if not isinstance(cached, dict):
            return await self.current_location()

        oldest_allowed = self._now_ms() - self.max_age_seconds * 1000
        if cached.get("timestamp", 0) < oldest_allowed:
            return await self.current_location()

        try:
            return Coordinate(latitude=cached["latitude"], longitude=cached["longitude"])
        except (KeyError, ValueError) as e:
            logger.warning(f"Discarding malformed cached location: {e}")
            return await self.current_location()

    async def user_address(self) -> Optional[str]:
        """Reverse-geocoded address of the user's position."""
        if self.geocoder is None:
            return None
        location = await self.last_known_location()
        if location is None:
            return None
        return await self.geocoder.reverse_geocode(location)

    async def save_delivery_address(self, address: str) -> bool:
        """Geocode and store a delivery address. False if it cannot be geocoded."""
        if self.geocoder is None or not address or not address.strip():
            return False

        result = await self.geocoder.geocode(address)
        if result is None:
            logger.info(f"Could not geocode address: {sanitize_string_for_logging(address)}")
            return False

        await self._store.set(
            StorageKeys.DELIVERY_ADDRESS,
            {
                "formattedAddress": result.formatted_address or address,
                "latitude": result.latitude,
                "longitude": result.longitude,
                "timestamp": self._now_ms(),
            },
        )
        return True

    async def delivery_address(self) -> Optional[dict]:
        data = await self._store.get(StorageKeys.DELIVERY_ADDRESS)
        if not isinstance(data, dict):
            return None
        return {
            "address": data.get("formattedAddress"),
            "latitude": data.get("latitude"),
            "longitude": data.get("longitude"),
        }
