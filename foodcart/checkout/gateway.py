"""Payment processors.

Defines the interface checkout talks to and the simulated processor used
until a real gateway is wired in.
"""
import asyncio
import random
from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Optional, Union

from foodcart.config import get_settings
from foodcart.logging import get_logger
from foodcart.money import format_money, to_decimal

logger = get_logger(__name__)

ORDER_ID_PREFIX = "ORD-"


class PaymentMethod(str, Enum):
    """Payment methods offered at checkout."""
    CREDIT_CARD = "credit_card"
    PAYPAL = "paypal"


@dataclass(frozen=True)
class PaymentSuccess:
    order_id: str
    total: Decimal


@dataclass(frozen=True)
class PaymentFailure:
    total: Decimal
    reason: Optional[str] = None


PaymentOutcome = Union[PaymentSuccess, PaymentFailure]


class PaymentProcessor(ABC):
    """Anything that can take a payment for an order total."""

    @abstractmethod
    async def attempt_payment(self, total: Decimal) -> PaymentOutcome:
        """Charge total and return a terminal outcome."""


def generate_order_id(rng: Optional[random.Random] = None) -> str:
    """ORD- followed by six digits (100000-999999)."""
    rng = rng or random
    return f"{ORDER_ID_PREFIX}{rng.randint(100000, 999999)}"


class CheckoutSimulator(PaymentProcessor):
    """
    Stand-in payment processor.

    Waits a fixed delay, then succeeds with probability success_rate.
    """

    def __init__(
        self,
        success_rate: Optional[float] = None,
        delay_seconds: Optional[float] = None,
        rng: Optional[random.Random] = None,
    ):
        settings = get_settings()
        self.success_rate = settings.payment_success_rate if success_rate is None else success_rate
        self.delay_seconds = settings.payment_delay_seconds if delay_seconds is None else delay_seconds
        self._rng = rng or random.Random()

    async def attempt_payment(self, total: Decimal) -> PaymentOutcome:
        total = to_decimal(total)
        if self.delay_seconds > 0:
            await asyncio.sleep(self.delay_seconds)

        if self._rng.random() < self.success_rate:
            order_id = generate_order_id(self._rng)
            logger.info(f"Simulated payment of {format_money(total)} succeeded: {order_id}")
            return PaymentSuccess(order_id=order_id, total=total)

        logger.warning(f"Simulated payment of {format_money(total)} declined")
        return PaymentFailure(total=total, reason="Simulated decline")
