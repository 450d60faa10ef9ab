"""
Distance and store ranking.

All functions are pure and operate on immutable snapshots of the catalog.
"""
import math
from typing import Iterable, Optional

from foodcart.catalog.models import Coordinate, Store, StoreDistance

EARTH_RADIUS_KM = 6371.0

SORT_BY_DISTANCE = "distance"
SORT_BY_RATING = "rating"


def haversine_km(a: Coordinate, b: Coordinate) -> float:
    """Great-circle distance between two points in kilometers."""
    d_lat = math.radians(b.latitude - a.latitude)
    d_lon = math.radians(b.longitude - a.longitude)

    h = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(a.latitude)) * math.cos(math.radians(b.latitude)) * math.sin(d_lon / 2) ** 2
    )
    h = min(1.0, h)
    return EARTH_RADIUS_KM * 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))


def format_distance(distance_km: float) -> str:
    """Meters below 1 km, otherwise kilometers with one decimal."""
    meters = round(distance_km * 1000)
    if meters < 1000:
        return f"{meters} m"
    return f"{distance_km:.1f} km"


def stores_with_distance(stores: Iterable[Store], origin: Optional[Coordinate]) -> list[StoreDistance]:
    """
    Annotate stores with their distance from origin, nearest first.

    When origin is unknown every store is returned without a distance, in
    catalog order.
    """
    if origin is None:
        return [StoreDistance(store=store) for store in stores]

    annotated = []
    for store in stores:
        distance = haversine_km(origin, store.coordinate)
        annotated.append(
            StoreDistance(store=store, distance_km=distance, formatted_distance=format_distance(distance))
        )
    return sort_stores(annotated, SORT_BY_DISTANCE)


def _matches(store: Store, query: str) -> bool:
    if query in store.name.lower() or query in store.description.lower():
        return True
    return any(query in item.name.lower() for item in store.items)


def search_stores(entries: Iterable[StoreDistance], query: Optional[str]) -> list[StoreDistance]:
    """Case-insensitive match on store name, description or any menu item."""
    entries = list(entries)
    needle = (query or "").strip().lower()
    if not needle:
        return entries
    return [entry for entry in entries if _matches(entry.store, needle)]


def sort_stores(entries: Iterable[StoreDistance], by: str = SORT_BY_DISTANCE) -> list[StoreDistance]:
    """Sort by distance (unknown last) or by rating (highest first)."""
    if by == SORT_BY_DISTANCE:
        return sorted(entries, key=lambda e: math.inf if e.distance_km is None else e.distance_km)
    if by == SORT_BY_RATING:
        return sorted(entries, key=lambda e: e.store.rating, reverse=True)
    raise ValueError(f"Unknown sort key: {by}")


def find_store(stores: Iterable[Store], store_id: str) -> Optional[Store]:
    return next((store for store in stores if store.id == store_id), None)


def find_menu_item(store: Store, item_id: str):
    return next((item for item in store.items if item.id == item_id), None)
