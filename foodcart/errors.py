"""
Error constants and exception types.

Message strings are centralized to avoid duplication between the raising
site and the tests.
"""
from decimal import Decimal
from typing import Any

# Cart errors
ERROR_ITEM_NOT_FOUND = "Item not in cart"
ERROR_STORE_REQUIRED = "store_id and store_name are required"
ERROR_CART_EMPTY = "Cart is empty"

# Storage errors
ERROR_STORAGE_UNAVAILABLE = "Storage unavailable"
ERROR_STORAGE_NOT_CONFIGURED = "UPSTASH_REDIS_REST_URL and UPSTASH_REDIS_REST_TOKEN must be set"

# Checkout errors
ERROR_PAYMENT_DECLINED = "Payment declined"
ERROR_INVALID_PAYMENT_FORM = "Invalid payment details"

# Payment form field messages
ERROR_CARD_NUMBER = "Please enter a valid card number"
ERROR_EXPIRY_DATE = "Please enter a valid expiry date (MM/YY)"
ERROR_CVV = "CVV should be 3 or 4 digits"
ERROR_CARDHOLDER_NAME = "Please enter the cardholder name"


class FoodCartError(Exception):
    """Base error for foodcart."""

    code = "ERROR"

    def __init__(self, message: str, *, raw_error: Any = None) -> None:
        super().__init__(message)
        self.message = message
        self.raw_error = raw_error


class NotFoundError(FoodCartError):
    """Referenced item id is not in the ledger."""

    code = "NOT_FOUND"

    def __init__(self, item_id: str) -> None:
        super().__init__(f"{ERROR_ITEM_NOT_FOUND}: {item_id}")
        self.item_id = item_id


class PersistenceError(FoodCartError):
    """Key-value store read or write failed."""

    code = "PERSISTENCE"

    def __init__(self, message: str = ERROR_STORAGE_UNAVAILABLE, *, key: str | None = None, raw_error: Any = None) -> None:
        super().__init__(message, raw_error=raw_error)
        self.key = key


class ValidationError(FoodCartError):
    """Checkout form failed validation."""

    code = "VALIDATION"

    def __init__(self, errors: dict[str, str]) -> None:
        super().__init__(ERROR_INVALID_PAYMENT_FORM)
        self.errors = errors


class EmptyCartError(FoodCartError):
    """Checkout attempted with nothing in the cart."""

    code = "CART_EMPTY"

    def __init__(self) -> None:
        super().__init__(ERROR_CART_EMPTY)


class PaymentDeclined(FoodCartError):
    """Payment processor returned a failure outcome."""

    code = "PAYMENT_DECLINED"

    def __init__(self, total: Decimal, reason: str | None = None) -> None:
        super().__init__(reason or ERROR_PAYMENT_DECLINED)
        self.total = total
