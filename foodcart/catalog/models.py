"""Catalog models - stores, menu items, categories."""
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from foodcart.money import to_decimal


class Coordinate(BaseModel):
    """Geographic point in decimal degrees."""
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)


class MenuItem(BaseModel):
    """Item on a store's menu."""
    model_config = ConfigDict(extra="ignore")

    id: str
    name: str
    price: Decimal = Field(ge=0)
    image: Optional[str] = None

    @field_validator("price", mode="before")
    @classmethod
    def convert_to_decimal(cls, v):
        return to_decimal(v) if v is not None else v


class Category(BaseModel):
    id: str
    name: str
    icon: str


class Store(BaseModel):
    """Restaurant with its menu."""
    model_config = ConfigDict(extra="ignore")

    id: str
    name: str
    description: str = ""
    address: str = ""
    image: Optional[str] = None
    rating: float = 0.0
    coordinate: Coordinate
    items: list[MenuItem] = Field(default_factory=list)


class StoreDistance(BaseModel):
    """Store annotated with its distance from the user."""
    store: Store
    distance_km: Optional[float] = None
    formatted_distance: Optional[str] = None
