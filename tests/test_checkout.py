"""Tests for checkout: form validation, simulated payments and the order flow"""
import random
import re
from datetime import date
from decimal import Decimal

import pytest

from foodcart.cart import CartLedger
from foodcart.checkout import (
    CheckoutService,
    CheckoutSimulator,
    PaymentFailure,
    PaymentInfo,
    PaymentMethod,
    PaymentProcessor,
    PaymentSuccess,
    format_card_number,
    format_expiry_input,
    generate_order_id,
    validate_card_number,
    validate_cvv,
    validate_expiry_date,
    validate_payment_form,
)
from foodcart.errors import (
    ERROR_CARD_NUMBER,
    ERROR_CVV,
    ERROR_EXPIRY_DATE,
    EmptyCartError,
    PaymentDeclined,
    ValidationError,
)
from foodcart.storage import StorageKeys


class _FixedRandom(random.Random):
    def __init__(self, value: float):
        super().__init__(7)
        self.value = value

    def random(self):
        return self.value


class _RecordingProcessor(PaymentProcessor):
    def __init__(self, succeed: bool = True):
        self.succeed = succeed
        self.totals = []

    async def attempt_payment(self, total):
        self.totals.append(total)
        if self.succeed:
            return PaymentSuccess(order_id="ORD-123456", total=total)
        return PaymentFailure(total=total, reason="Card declined")


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------

def test_card_number_length_bounds():
    assert validate_card_number("4111 1111 1111 1") is True  # 13 digits
    assert validate_card_number("4111-1111-1111-1111") is True
    assert validate_card_number("4111 1111 1111") is False  # 12 digits
    assert validate_card_number("4" * 20) is False
    assert validate_card_number("") is False


def test_expiry_date_format_and_range():
    today = date(2025, 6, 15)

    assert validate_expiry_date("06/25", today=today) is True
    assert validate_expiry_date("12/30", today=today) is True
    assert validate_expiry_date("05/25", today=today) is False
    assert validate_expiry_date("13/30", today=today) is False
    assert validate_expiry_date("00/30", today=today) is False
    assert validate_expiry_date("6/25", today=today) is False
    assert validate_expiry_date("0625", today=today) is False
    assert validate_expiry_date("ab/cd", today=today) is False


@pytest.mark.parametrize("expiry", ["1²/99", "12/9²", "١٢/٩٩", "１２/９９"])
def test_expiry_date_rejects_non_ascii_digits(expiry):
    assert validate_expiry_date(expiry) is False


def test_non_ascii_digits_do_not_count_as_card_digits():
    assert validate_card_number("٤١١١٤١١١٤١١١٤١١١") is False
    assert validate_cvv("١٢٣") is False
    assert format_card_number("4111²2222") == "4111 2222"


def test_cvv_length():
    assert validate_cvv("123") is True
    assert validate_cvv("1234") is True
    assert validate_cvv("12") is False
    assert validate_cvv("12345") is False


def test_validate_payment_form_collects_field_errors():
    info = PaymentInfo(card_number="1234", expiry_date="12/99", cvv="1", cardholder_name="  Al ")

    result = validate_payment_form(info)

    assert result.is_valid is False
    assert result.errors["card_number"] == ERROR_CARD_NUMBER
    assert result.errors["cvv"] == ERROR_CVV
    assert "cardholder_name" in result.errors
    assert "expiry_date" not in result.errors


def test_validate_payment_form_valid(valid_payment):
    result = validate_payment_form(valid_payment)

    assert result.is_valid is True
    assert result.errors == {}


def test_format_helpers():
    assert format_card_number("4111111111111111") == "4111 1111 1111 1111"
    assert format_card_number("41111") == "4111 1"
    assert format_expiry_input("1") == "1"
    assert format_expiry_input("1229") == "12/29"
    assert format_expiry_input("12/299") == "12/29"


# ---------------------------------------------------------------------------
# Simulator
# ---------------------------------------------------------------------------

def test_generate_order_id_format(rng):
    for _ in range(20):
        assert re.fullmatch(r"ORD-[1-9]\d{5}", generate_order_id(rng))


@pytest.mark.asyncio
async def test_simulator_success():
    simulator = CheckoutSimulator(success_rate=0.9, delay_seconds=0, rng=_FixedRandom(0.5))

    outcome = await simulator.attempt_payment(Decimal("27.99"))

    assert isinstance(outcome, PaymentSuccess)
    assert outcome.total == Decimal("27.99")
    assert outcome.order_id.startswith("ORD-")


@pytest.mark.asyncio
async def test_simulator_failure():
    simulator = CheckoutSimulator(success_rate=0.9, delay_seconds=0, rng=_FixedRandom(0.95))

    outcome = await simulator.attempt_payment(Decimal("27.99"))

    assert isinstance(outcome, PaymentFailure)


@pytest.mark.asyncio
async def test_simulator_reads_settings(monkeypatch):
    monkeypatch.setenv("PAYMENT_SUCCESS_RATE", "0")
    monkeypatch.setenv("PAYMENT_DELAY_SECONDS", "0")

    simulator = CheckoutSimulator()

    assert simulator.success_rate == 0
    assert isinstance(await simulator.attempt_payment(10), PaymentFailure)


# ---------------------------------------------------------------------------
# Checkout flow
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_place_order_success_clears_cart(ledger, store, item_a, item_b, valid_payment):
    await ledger.add_item(item_a, "1", "Taste of Italy")
    await ledger.add_item(item_b, "2", "Spice Garden")
    await ledger.add_item(item_b, "2", "Spice Garden")
    processor = _RecordingProcessor()
    service = CheckoutService(processor, store)

    receipt = await service.place_order(ledger, valid_payment)

    assert receipt.order_id == "ORD-123456"
    assert receipt.totals.total == Decimal("27.99")
    assert processor.totals == [Decimal("27.99")]
    assert [item.item_id for item in receipt.items] == ["A", "B"]
    assert ledger.is_empty
    assert await store.get(StorageKeys.CART_ITEMS) == []


@pytest.mark.asyncio
async def test_place_order_records_history(ledger, store, item_a, valid_payment):
    await ledger.add_item(item_a, "1", "Taste of Italy")
    service = CheckoutService(_RecordingProcessor(), store)

    await service.place_order(ledger, valid_payment)
    history = await service.order_history()

    assert len(history) == 1
    assert history[0].id == "ORD-123456"
    assert history[0].total == Decimal("16.49")
    assert history[0].store_names == ["Taste of Italy"]
    assert history[0].items[0]["quantity"] == 1


@pytest.mark.asyncio
async def test_place_order_declined_leaves_cart(ledger, store, item_a, valid_payment):
    await ledger.add_item(item_a, "1", "Taste of Italy")
    service = CheckoutService(_RecordingProcessor(succeed=False), store)

    with pytest.raises(PaymentDeclined) as exc_info:
        await service.place_order(ledger, valid_payment)

    assert exc_info.value.total == Decimal("16.49")
    assert ledger.quantity_of("A") == 1
    assert await service.order_history() == []


@pytest.mark.asyncio
async def test_place_order_invalid_form_skips_processor(ledger, store, item_a):
    await ledger.add_item(item_a, "1", "Taste of Italy")
    processor = _RecordingProcessor()
    service = CheckoutService(processor, store)

    with pytest.raises(ValidationError) as exc_info:
        await service.place_order(ledger, PaymentInfo(card_number="123"))

    assert "card_number" in exc_info.value.errors
    assert processor.totals == []
    assert ledger.quantity_of("A") == 1


@pytest.mark.asyncio
async def test_place_order_non_ascii_expiry_is_validation_error(ledger, store, item_a, valid_payment):
    await ledger.add_item(item_a, "1", "Taste of Italy")
    processor = _RecordingProcessor()
    service = CheckoutService(processor, store)
    valid_payment.expiry_date = "1²/99"

    with pytest.raises(ValidationError) as exc_info:
        await service.place_order(ledger, valid_payment)

    assert exc_info.value.errors == {"expiry_date": ERROR_EXPIRY_DATE}
    assert processor.totals == []
    assert ledger.quantity_of("A") == 1


@pytest.mark.asyncio
async def test_place_order_paypal_needs_no_card(ledger, store, item_a):
    await ledger.add_item(item_a, "1", "Taste of Italy")
    service = CheckoutService(_RecordingProcessor(), store)

    receipt = await service.place_order(ledger, method="paypal")

    assert receipt.method is PaymentMethod.PAYPAL
    assert ledger.is_empty


@pytest.mark.asyncio
async def test_place_order_empty_cart(ledger, store, valid_payment):
    processor = _RecordingProcessor()
    service = CheckoutService(processor, store)

    with pytest.raises(EmptyCartError):
        await service.place_order(ledger, valid_payment)

    assert processor.totals == []


@pytest.mark.asyncio
async def test_history_write_failure_does_not_fail_order(failing_store, item_a, valid_payment):
    failing_store.fail_writes = False
    ledger = CartLedger(failing_store)
    await ledger.add_item(item_a, "1", "Taste of Italy")
    failing_store.fail_writes = True
    service = CheckoutService(_RecordingProcessor(), failing_store)

    receipt = await service.place_order(ledger, valid_payment)

    assert receipt.order_id == "ORD-123456"
    assert ledger.is_empty
