"""Catalog package: store/menu models, sample data, distance and ranking."""
from .models import Category, Coordinate, MenuItem, Store, StoreDistance
from .geo import (
    SORT_BY_DISTANCE,
    SORT_BY_RATING,
    find_menu_item,
    find_store,
    format_distance,
    haversine_km,
    search_stores,
    sort_stores,
    stores_with_distance,
)
from .sample import SAMPLE_CATEGORIES, SAMPLE_STORES

__all__ = [
    "Category",
    "Coordinate",
    "MenuItem",
    "Store",
    "StoreDistance",
    "SORT_BY_DISTANCE",
    "SORT_BY_RATING",
    "find_menu_item",
    "find_store",
    "format_distance",
    "haversine_km",
    "search_stores",
    "sort_stores",
    "stores_with_distance",
    "SAMPLE_CATEGORIES",
    "SAMPLE_STORES",
]
