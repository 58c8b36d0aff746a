"""Payment simulation.

Payment is a pluggable strategy: anything with a ``charge`` method works as
a gateway. Production code uses ``SimulatedPaymentGateway``; tests pass a
``FixedOutcomeGateway`` or set ``PaymentOptions.simulate``.
"""

import logging
import random
import string
from decimal import Decimal, InvalidOperation
from typing import Any, Mapping, Optional, Protocol

from pydantic import ValidationError

from patterns.domain_config import PaymentConfig
from verticals.bookstore.errors import InvalidInputError
from verticals.bookstore.models.schemas import PaymentOptions, PaymentResult

logger = logging.getLogger(__name__)

_TX_ALPHABET = string.digits + string.ascii_lowercase
_TX_LENGTH = 9

SIMULATED_FAILURE = "Simulated failure"


def new_transaction_id(rng: random.Random, prefix: str = "tx-") -> str:
    """``prefix`` followed by 9 random base-36 characters."""
    return prefix + "".join(rng.choices(_TX_ALPHABET, k=_TX_LENGTH))


def coerce_options(options: PaymentOptions | Mapping[str, Any] | None) -> PaymentOptions:
    if options is None:
        return PaymentOptions()
    if isinstance(options, PaymentOptions):
        return options
    try:
        return PaymentOptions.model_validate(dict(options))
    except ValidationError as e:
        raise InvalidInputError(f"Invalid payment options: {e.errors()[0]['msg']}") from e


# ---------------------------------------------------------------------------
# Gateways
# ---------------------------------------------------------------------------

class PaymentGateway(Protocol):
    def charge(self, amount: Decimal, options: PaymentOptions) -> PaymentResult:
        ...


class SimulatedPaymentGateway:
    """Succeeds with a fixed probability using non-cryptographic randomness."""

    def __init__(
        self,
        success_rate: float = 0.9,
        rng: Optional[random.Random] = None,
        transaction_prefix: str = "tx-",
    ):
        if not 0.0 <= success_rate <= 1.0:
            raise ValueError(f"success_rate must be within [0, 1], got {success_rate}")
        self.success_rate = success_rate
        self.rng = rng or random.Random()
        self.transaction_prefix = transaction_prefix

    @classmethod
    def from_config(cls, config: PaymentConfig, rng: Optional[random.Random] = None) -> "SimulatedPaymentGateway":
        return cls(
            success_rate=config.success_rate,
            rng=rng,
            transaction_prefix=config.transaction_prefix,
        )

    def charge(self, amount: Decimal, options: PaymentOptions) -> PaymentResult:
        success = self.rng.random() >= 1.0 - self.success_rate
        if not success:
            return PaymentResult(success=False, error="Payment declined")
        return PaymentResult(
            success=True,
            transaction_id=new_transaction_id(self.rng, self.transaction_prefix),
        )


class FixedOutcomeGateway:
    """Always succeeds or always fails."""

    def __init__(self, succeed: bool, transaction_prefix: str = "tx-"):
        self.succeed = succeed
        self.transaction_prefix = transaction_prefix
        self._rng = random.Random()

    def charge(self, amount: Decimal, options: PaymentOptions) -> PaymentResult:
        if not self.succeed:
            return PaymentResult(success=False, error=SIMULATED_FAILURE)
        return PaymentResult(
            success=True,
            transaction_id=new_transaction_id(self._rng, self.transaction_prefix),
        )


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def process_payment(
    total: Decimal | float | int,
    options: PaymentOptions | Mapping[str, Any] | None = None,
    gateway: Optional[PaymentGateway] = None,
) -> PaymentResult:
    """Charge ``total``.

    An explicit ``simulate`` override wins over ``gateway``; with neither,
    a default ``SimulatedPaymentGateway`` is used.
    """
    opts = coerce_options(options)
    try:
        amount = Decimal(str(total))
    except InvalidOperation as e:
        raise InvalidInputError(f"Payment total must be a number, got {total!r}") from e
    if not amount.is_finite():
        raise InvalidInputError(f"Payment total must be finite, got {total!r}")
    if amount < 0:
        raise InvalidInputError(f"Payment total must not be negative, got {amount}")

    if opts.simulate == "success":
        gateway = FixedOutcomeGateway(succeed=True)
    elif opts.simulate == "fail":
        gateway = FixedOutcomeGateway(succeed=False)
    elif gateway is None:
        gateway = SimulatedPaymentGateway()

    result = gateway.charge(amount, opts)
    logger.debug(
        "Payment of %s via %s: success=%s", amount, opts.method, result.success
    )
    return result
