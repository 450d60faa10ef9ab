"""Pytest configuration and fixtures"""
import json
import os
import random
from typing import Any, Optional

import pytest

# Set test environment variables before foodcart reads its settings
os.environ.setdefault("PAYMENT_DELAY_SECONDS", "0")
os.environ.setdefault("TAX_RATE", "0.15")
os.environ.setdefault("DELIVERY_FEE", "4.99")

from foodcart.cart import CartLedger
from foodcart.catalog import Coordinate, MenuItem
from foodcart.checkout import PaymentInfo
from foodcart.config import get_settings
from foodcart.location import GeocodeResult, Geocoder, LocationProvider
from foodcart.storage import KeyValueStore


class MemoryStore(KeyValueStore):
    """In-memory store that keeps JSON text, like the real backend."""

    def __init__(self):
        self.data: dict[str, str] = {}
        self.ttls: dict[str, Optional[int]] = {}
        self.writes = 0

    async def get(self, key: str) -> Any:
        raw = self.data.get(key)
        return None if raw is None else json.loads(raw)

    async def set(self, key: str, value: Any, ttl: Optional[int] = None) -> None:
        self.data[key] = json.dumps(value)
        self.ttls[key] = ttl
        self.writes += 1

    async def remove(self, key: str) -> None:
        self.data.pop(key, None)


class FailingStore(MemoryStore):
    """Store whose writes (and optionally reads) raise."""

    def __init__(self, fail_reads: bool = False):
        super().__init__()
        self.fail_reads = fail_reads
        self.fail_writes = True

    async def get(self, key: str) -> Any:
        if self.fail_reads:
            raise ConnectionError("store offline")
        return await super().get(key)

    async def set(self, key: str, value: Any, ttl: Optional[int] = None) -> None:
        if self.fail_writes:
            raise ConnectionError("store offline")
        await super().set(key, value, ttl)


class FakeLocationProvider(LocationProvider):
    def __init__(self, position: Optional[Coordinate]):
        self.position = position
        self.calls = 0

    async def current_position(self) -> Optional[Coordinate]:
        self.calls += 1
        return self.position


class FakeGeocoder(Geocoder):
    def __init__(self, known: Optional[dict[str, GeocodeResult]] = None, address: Optional[str] = None):
        self.known = known or {}
        self.address = address

    async def geocode(self, address: str) -> Optional[GeocodeResult]:
        return self.known.get(address)

    async def reverse_geocode(self, coordinate: Coordinate) -> Optional[str]:
        return self.address


@pytest.fixture(autouse=True)
def _reset_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def ledger(store):
    return CartLedger(store)


@pytest.fixture
def item_a():
    return MenuItem(id="A", name="Margherita Pizza", price=10.00, image="https://example.com/pizza.jpg")


@pytest.fixture
def item_b():
    return MenuItem(id="B", name="Garlic Naan", price=5.00)


@pytest.fixture
def valid_payment():
    return PaymentInfo(
        card_number="4111 1111 1111 1111",
        expiry_date="12/99",
        cvv="123",
        cardholder_name="Jamie Doe",
    )


@pytest.fixture
def rng():
    return random.Random(42)


@pytest.fixture
def failing_store():
    """Writes fail, reads work."""
    return FailingStore()


@pytest.fixture
def offline_store():
    """Reads and writes fail."""
    return FailingStore(fail_reads=True)


@pytest.fixture
def make_provider():
    return FakeLocationProvider


@pytest.fixture
def make_geocoder():
    return FakeGeocoder
