"""Cart models with Decimal-based pricing."""
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Optional

from foodcart.money import multiply, round_money, to_decimal, to_float


def parse_price(value: Any) -> Decimal:
    """
    Strict price parsing for stored cart entries.

    Raises decimal.InvalidOperation for unparseable input and ValueError for
    non-finite or negative prices.
    """
    price = Decimal(str(value))
    if not price.is_finite() or price < 0:
        raise ValueError(f"invalid price: {value!r}")
    return price


@dataclass
class LineItem:
    """One catalog item in the cart, with quantity and originating store."""
    item_id: str
    name: str
    unit_price: Decimal
    quantity: int
    store_id: str
    store_name: str
    image_ref: Optional[str] = None

    def __post_init__(self):
        self.unit_price = to_decimal(self.unit_price)

    @property
    def line_total(self) -> Decimal:
        """Unit price times quantity, unrounded."""
        return multiply(self.unit_price, self.quantity)

    def to_dict(self) -> dict:
        """Convert to the persisted cart entry shape."""
        return {
            "id": self.item_id,
            "name": self.name,
            "price": to_float(self.unit_price),
            "quantity": self.quantity,
            "storeId": self.store_id,
            "storeName": self.store_name,
            "image": self.image_ref,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "LineItem":
        """Create from a persisted cart entry."""
        return cls(
            item_id=str(data["id"]),
            name=data.get("name", ""),
            unit_price=parse_price(data["price"]),
            quantity=int(data["quantity"]),
            store_id=str(data["storeId"]),
            store_name=data.get("storeName", ""),
            image_ref=data.get("image"),
        )


@dataclass(frozen=True)
class OrderTotals:
    """Totals derived from the cart. Never stored."""
    subtotal: Decimal
    tax: Decimal
    delivery_fee: Decimal
    total: Decimal

    @classmethod
    def compute(cls, subtotal: Decimal, tax_rate: Decimal, delivery_fee: Decimal) -> "OrderTotals":
        tax = round_money(multiply(subtotal, tax_rate))
        fee = to_decimal(delivery_fee)
        return cls(
            subtotal=subtotal,
            tax=tax,
            delivery_fee=fee,
            total=subtotal + tax + fee,
        )

    def to_dict(self) -> dict:
        return {
            "subtotal": to_float(round_money(self.subtotal)),
            "tax": to_float(self.tax),
            "delivery_fee": to_float(self.delivery_fee),
            "total": to_float(round_money(self.total)),
        }
