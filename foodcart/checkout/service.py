"""Checkout service - validate, pay, record the order, clear the cart."""
from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional, Union

from foodcart.cart import CartLedger, LineItem, OrderTotals
from foodcart.errors import EmptyCartError, PaymentDeclined, PersistenceError, ValidationError
from foodcart.logging import get_logger
from foodcart.money import format_money, to_decimal, to_float
from foodcart.storage import TTL, KeyValueStore, StorageKeys

from .gateway import PaymentFailure, PaymentMethod, PaymentProcessor
from .validation import PaymentInfo, validate_payment_form

logger = get_logger(__name__)

ORDER_STATUS_PROCESSING = "Processing"
MAX_ORDER_HISTORY = 50


@dataclass
class OrderRecord:
    """Completed order as shown in the order history."""
    id: str
    date: str
    total: Decimal
    status: str
    items: list[dict] = field(default_factory=list)
    store_names: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "date": self.date,
            "total": to_float(self.total),
            "status": self.status,
            "items": self.items,
            "storeNames": self.store_names,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "OrderRecord":
        return cls(
            id=data["id"],
            date=data.get("date", ""),
            total=to_decimal(data.get("total")),
            status=data.get("status", ORDER_STATUS_PROCESSING),
            items=list(data.get("items", [])),
            store_names=list(data.get("storeNames", [])),
        )


@dataclass(frozen=True)
class OrderReceipt:
    order_id: str
    method: PaymentMethod
    totals: OrderTotals
    items: tuple[LineItem, ...]


class CheckoutService:
    """
    Runs a checkout against a ledger.

    The ledger is cleared only after the processor reports success. A decline
    leaves it untouched so the user can retry.
    """

    def __init__(self, processor: PaymentProcessor, store: KeyValueStore):
        self.processor = processor
        self._store = store

    async def place_order(
        self,
        ledger: CartLedger,
        payment_info: Optional[PaymentInfo] = None,
        method: Union[PaymentMethod, str] = PaymentMethod.CREDIT_CARD,
    ) -> OrderReceipt:
        method = PaymentMethod(method)

        if ledger.is_empty:
            raise EmptyCartError()

        if method == PaymentMethod.CREDIT_CARD:
            result = validate_payment_form(payment_info or PaymentInfo())
            if not result.is_valid:
                logger.info(f"Payment form rejected: {sorted(result.errors)}")
                raise ValidationError(result.errors)

        totals = ledger.compute_totals()
        items = tuple(
            LineItem(
                item_id=item.item_id,
                name=item.name,
                unit_price=item.unit_price,
                quantity=item.quantity,
                store_id=item.store_id,
                store_name=item.store_name,
                image_ref=item.image_ref,
            )
            for item in ledger
        )

        outcome = await self.processor.attempt_payment(totals.total)
        if isinstance(outcome, PaymentFailure):
            raise PaymentDeclined(totals.total, outcome.reason)

        logger.info(f"Order {outcome.order_id} paid: {format_money(totals.total)} via {method.value}")

        await self._record_order(outcome.order_id, totals, items)

        try:
            await ledger.clear()
        except PersistenceError:
            logger.warning(f"Order {outcome.order_id} placed but cleared cart was not persisted")

        return OrderReceipt(order_id=outcome.order_id, method=method, totals=totals, items=items)

    async def _record_order(self, order_id: str, totals: OrderTotals, items: tuple[LineItem, ...]) -> None:
        record = OrderRecord(
            id=order_id,
            date=datetime.now(timezone.utc).date().isoformat(),
            total=totals.total,
            status=ORDER_STATUS_PROCESSING,
            items=[
                {"id": i.item_id, "name": i.name, "price": to_float(i.unit_price), "quantity": i.quantity}
                for i in items
            ],
            store_names=list(dict.fromkeys(i.store_name for i in items)),
        )
        try:
            history = await self._store.get(StorageKeys.ORDERS) or []
            history = [record.to_dict(), *history][:MAX_ORDER_HISTORY]
            await self._store.set(StorageKeys.ORDERS, history, ttl=TTL.ORDERS)
        except Exception as e:
            logger.error(f"Failed to record order {order_id} in history: {e}")

    async def order_history(self) -> list[OrderRecord]:
        """Recorded orders, newest first."""
        data = await self._store.get(StorageKeys.ORDERS)
        if not isinstance(data, list):
            return []
        return [OrderRecord.from_dict(entry) for entry in data]
