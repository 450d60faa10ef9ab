"""Cart package: line items, totals and the ledger."""
from .models import LineItem, OrderTotals
from .service import CartLedger

__all__ = [
    "LineItem",
    "OrderTotals",
    "CartLedger",
]
