"""CartLedger - the cart's line items, totals and persistence."""
from decimal import Decimal, InvalidOperation
from typing import Iterator, Optional

from foodcart.catalog.models import MenuItem
from foodcart.config import Settings, get_settings
from foodcart.errors import ERROR_STORE_REQUIRED, NotFoundError, PersistenceError
from foodcart.logging import get_logger, sanitize_id_for_logging
from foodcart.money import to_decimal, to_float
from foodcart.storage import KeyValueStore, StorageKeys

from .models import LineItem, OrderTotals

logger = get_logger(__name__)


class CartLedger:
    """
    Owns the cart line items for the current session.

    Invariants:
    - item_id is unique across line items (adding again bumps the quantity)
    - every line item has quantity >= 1

    Every mutation is persisted under StorageKeys.CART_ITEMS before the call
    returns. If the write fails the in-memory change is kept and
    PersistenceError is raised.
    """

    def __init__(
        self,
        store: KeyValueStore,
        items: Optional[list[LineItem]] = None,
        settings: Optional[Settings] = None,
    ):
        self._store = store
        self._settings = settings or get_settings()
        self._items: list[LineItem] = []
        for item in items or []:
            self._absorb(item)

    @classmethod
    async def load(cls, store: KeyValueStore, settings: Optional[Settings] = None) -> "CartLedger":
        """
        Hydrate a ledger from the store.

        A missing key gives an empty ledger. Corrupted data is logged, removed
        and also gives an empty ledger. Read failures raise PersistenceError.
        """
        try:
            data = await store.get(StorageKeys.CART_ITEMS)
        except PersistenceError:
            raise
        except Exception as e:
            logger.error(f"Failed to load cart: {e}")
            raise PersistenceError(key=StorageKeys.CART_ITEMS, raw_error=e) from e

        if not data:
            return cls(store, settings=settings)

        try:
            items = cls.from_list(data)
        except (KeyError, TypeError, ValueError, InvalidOperation) as e:
            logger.warning(f"Corrupted cart data, discarding: {e}")
            await store.remove(StorageKeys.CART_ITEMS)
            return cls(store, settings=settings)

        ledger = cls(store, items=items, settings=settings)
        logger.info(f"Cart loaded with {len(ledger)} line items")
        return ledger

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_list(self) -> list[dict]:
        return [item.to_dict() for item in self._items]

    @staticmethod
    def from_list(data: list) -> list[LineItem]:
        if not isinstance(data, list):
            raise TypeError(f"cart payload must be a list, got {type(data).__name__}")
        return [LineItem.from_dict(entry) for entry in data]

    def _absorb(self, item: LineItem) -> None:
        """Add a hydrated item, merging duplicates and dropping empty rows."""
        if item.quantity < 1:
            return
        existing = self._find(item.item_id)
        if existing is None:
            self._items.append(item)
        else:
            existing.quantity += item.quantity

    async def _persist(self) -> None:
        ttl = self._settings.cart_ttl_seconds or None
        try:
            await self._store.set(StorageKeys.CART_ITEMS, self.to_list(), ttl=ttl)
        except PersistenceError:
            logger.error("Failed to persist cart, keeping in-memory state")
            raise
        except Exception as e:
            logger.error(f"Failed to persist cart, keeping in-memory state: {e}")
            raise PersistenceError(key=StorageKeys.CART_ITEMS, raw_error=e) from e

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    async def add_item(self, item: MenuItem, store_id: str, store_name: str) -> LineItem:
        """Add one unit of a menu item, merging into an existing row for the same id."""
        if not store_id or not store_name:
            raise ValueError(ERROR_STORE_REQUIRED)

        line = self._find(item.id)
        if line is not None:
            line.quantity += 1
        else:
            line = LineItem(
                item_id=item.id,
                name=item.name,
                unit_price=to_decimal(item.price),
                quantity=1,
                store_id=store_id,
                store_name=store_name,
                image_ref=item.image,
            )
            self._items.append(line)

        logger.info(f"Added item {sanitize_id_for_logging(item.id)} (qty {line.quantity})")
        await self._persist()
        return line

    async def update_quantity(self, item_id: str, new_quantity: int) -> None:
        """Set a quantity in place. Below 1 removes the row; unknown ids are ignored."""
        if new_quantity < 1:
            await self.remove_item(item_id)
            return

        try:
            line = self.get(item_id)
        except NotFoundError:
            logger.debug(f"update_quantity on missing item {sanitize_id_for_logging(item_id)}")
            return

        line.quantity = new_quantity
        await self._persist()

    async def remove_item(self, item_id: str) -> None:
        if self._find(item_id) is None:
            logger.debug(f"remove_item on missing item {sanitize_id_for_logging(item_id)}")
            return
        self._items = [item for item in self._items if item.item_id != item_id]
        logger.info(f"Removed item {sanitize_id_for_logging(item_id)}")
        await self._persist()

    async def clear(self) -> None:
        self._items = []
        await self._persist()

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def _find(self, item_id: str) -> Optional[LineItem]:
        return next((item for item in self._items if item.item_id == item_id), None)

    def get(self, item_id: str) -> LineItem:
        line = self._find(item_id)
        if line is None:
            raise NotFoundError(item_id)
        return line

    @property
    def items(self) -> tuple[LineItem, ...]:
        return tuple(self._items)

    @property
    def is_empty(self) -> bool:
        return self.item_count() == 0

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[LineItem]:
        return iter(tuple(self._items))

    def item_count(self) -> int:
        """Total units across all rows."""
        return sum(item.quantity for item in self._items)

    def is_in_cart(self, item_id: str) -> bool:
        return self._find(item_id) is not None

    def quantity_of(self, item_id: str) -> int:
        line = self._find(item_id)
        return line.quantity if line else 0

    def subtotal(self) -> Decimal:
        total = Decimal("0")
        for item in self._items:  # insertion order
            total += item.line_total
        return total

    def compute_totals(
        self,
        tax_rate: Optional[Decimal] = None,
        delivery_fee: Optional[Decimal] = None,
    ) -> OrderTotals:
        """
        Derive subtotal, tax, delivery fee and total from the current rows.

        Tax is rounded half-up to cents; the subtotal is exact. Defaults come
        from settings (15% tax, 4.99 delivery).
        """
        rate = self._settings.tax_rate if tax_rate is None else to_decimal(tax_rate)
        fee = self._settings.delivery_fee if delivery_fee is None else to_decimal(delivery_fee)
        return OrderTotals.compute(self.subtotal(), rate, fee)

    def summary(self) -> dict:
        """Cart summary for display."""
        if self.is_empty:
            return {"is_empty": True, "total_items": 0, "items": [], "subtotal": 0, "total": 0}

        totals = self.compute_totals()
        return {
            "is_empty": False,
            "total_items": self.item_count(),
            "items": [
                {
                    "id": item.item_id,
                    "name": item.name,
                    "store_name": item.store_name,
                    "quantity": item.quantity,
                    "unit_price": to_float(item.unit_price),
                    "total": to_float(item.line_total),
                }
                for item in self._items
            ],
            **totals.to_dict(),
        }
