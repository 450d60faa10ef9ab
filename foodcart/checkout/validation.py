"""Payment form validation and input formatting."""
import re
from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from foodcart.errors import (
    ERROR_CARD_NUMBER,
    ERROR_CARDHOLDER_NAME,
    ERROR_CVV,
    ERROR_EXPIRY_DATE,
)

_NON_DIGITS = re.compile(r"\D", re.ASCII)
_EXPIRY = re.compile(r"(\d{2})/(\d{2})", re.ASCII)

CARD_MIN_DIGITS = 13
CARD_MAX_DIGITS = 19
NAME_MIN_LENGTH = 3


@dataclass
class PaymentInfo:
    """Card details entered at checkout."""
    card_number: str = ""
    expiry_date: str = ""
    cvv: str = ""
    cardholder_name: str = ""


@dataclass
class PaymentFormResult:
    is_valid: bool
    errors: dict[str, str] = field(default_factory=dict)


def _digits(value: Optional[str]) -> str:
    return _NON_DIGITS.sub("", value or "")


def validate_card_number(card_number: Optional[str]) -> bool:
    """13-19 digits once spaces and separators are stripped."""
    digits = _digits(card_number)
    return CARD_MIN_DIGITS <= len(digits) <= CARD_MAX_DIGITS


def validate_expiry_date(expiry_date: Optional[str], today: Optional[date] = None) -> bool:
    """MM/YY, month 01-12, not earlier than the current month."""
    match = _EXPIRY.fullmatch(expiry_date or "")
    if match is None:
        return False

    month = int(match.group(1))
    year = 2000 + int(match.group(2))
    if month < 1 or month > 12:
        return False

    today = today or date.today()
    return (year, month) >= (today.year, today.month)


def validate_cvv(cvv: Optional[str]) -> bool:
    return 3 <= len(_digits(cvv)) <= 4


def validate_cardholder_name(name: Optional[str]) -> bool:
    return len((name or "").strip()) >= NAME_MIN_LENGTH


def validate_payment_form(info: PaymentInfo, today: Optional[date] = None) -> PaymentFormResult:
    """Validate every field, collecting one message per invalid field."""
    errors: dict[str, str] = {}

    if not validate_card_number(info.card_number):
        errors["card_number"] = ERROR_CARD_NUMBER
    if not validate_expiry_date(info.expiry_date, today=today):
        errors["expiry_date"] = ERROR_EXPIRY_DATE
    if not validate_cvv(info.cvv):
        errors["cvv"] = ERROR_CVV
    if not validate_cardholder_name(info.cardholder_name):
        errors["cardholder_name"] = ERROR_CARDHOLDER_NAME

    return PaymentFormResult(is_valid=not errors, errors=errors)


def format_card_number(card_number: str) -> str:
    """Group digits in blocks of four: '4111111111111111' -> '4111 1111 1111 1111'."""
    digits = _digits(card_number)
    return " ".join(digits[i:i + 4] for i in range(0, len(digits), 4))


def format_expiry_input(text: str) -> str:
    """Turn typed digits into MM/YY as the user types."""
    digits = _digits(text)
    if len(digits) <= 2:
        return digits
    return f"{digits[:2]}/{digits[2:4]}"
