"""Checkout package: form validation, payment processors and the checkout flow."""
from .gateway import (
    CheckoutSimulator,
    PaymentFailure,
    PaymentMethod,
    PaymentOutcome,
    PaymentProcessor,
    PaymentSuccess,
    generate_order_id,
)
from .service import CheckoutService, OrderReceipt, OrderRecord
from .validation import (
    PaymentFormResult,
    PaymentInfo,
    format_card_number,
    format_expiry_input,
    validate_card_number,
    validate_cardholder_name,
    validate_cvv,
    validate_expiry_date,
    validate_payment_form,
)

__all__ = [
    "CheckoutSimulator",
    "PaymentFailure",
    "PaymentMethod",
    "PaymentOutcome",
    "PaymentProcessor",
    "PaymentSuccess",
    "generate_order_id",
    "CheckoutService",
    "OrderReceipt",
    "OrderRecord",
    "PaymentFormResult",
    "PaymentInfo",
    "format_card_number",
    "format_expiry_input",
    "validate_card_number",
    "validate_cardholder_name",
    "validate_cvv",
    "validate_expiry_date",
    "validate_payment_form",
]
