"""
gp2p.engine.reward — Earnings & Payout Calculation Pipeline
=============================================================

Pure calculation pipeline.  No DB, network, or payment-processor I/O
inside the engine.

Pipeline stages:
  ScoreSubmission → Validate → Base Rate → Bonus Multipliers → Round → EarningsResult

Payout stages (independent of earnings):
  requested amount → Eligibility check against minimum
  gross amount     → Platform fee split → PayoutSplit
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from decimal import Decimal, localcontext

from gp2p.constants import (
    DEFAULT_CURRENCY,
    FEE_QUANTUM,
    precision_for,
    round_money,
    to_decimal,
)
from gp2p.engine.errors import InvalidAmount, InvalidScore, UnknownPlatform
from gp2p.engine.models import (
    EarningsResult,
    PayoutSplit,
    Platform,
    RateTable,
    ScoreSubmission,
)

logger = logging.getLogger(__name__)

__all__ = [
    "RewardEngine",
    "apply_bonus_multipliers",
    "apply_platform_fee",
    "base_earnings",
    "is_payout_eligible",
]

Number = Decimal | int | float | str

_HUNDRED = Decimal(100)


def _amount(value: Number, name: str) -> Decimal:
    """Coerce a monetary input, mapping bad values to InvalidAmount."""
    try:
        amount = to_decimal(value)
    except ValueError as exc:
        raise InvalidAmount(f"{name} is not a valid amount: {value!r}") from exc
    if amount < 0:
        raise InvalidAmount(f"{name} must be non-negative, got {amount}")
    return amount


# ---------------------------------------------------------------------------
# Stage 1: Base earnings
# ---------------------------------------------------------------------------
def base_earnings(score: int, platform: str, rates: RateTable) -> Decimal:
    """Unrounded ``score * base_rates[platform]``."""
    if isinstance(score, bool) or not isinstance(score, int):
        raise InvalidScore(f"Score must be an integer, got {score!r}")
    if score < 0:
        raise InvalidScore(f"Score must be non-negative, got {score}")

    if isinstance(platform, Platform):
        platform = platform.value
    rate = rates.base_rates.get(platform)
    if rate is None:
        raise UnknownPlatform(platform, rates.platforms)

    try:
        prec = precision_for(Decimal(score), rate)
    except ValueError as exc:
        raise InvalidScore(f"Score is too large: {exc}") from exc
    with localcontext() as ctx:
        ctx.prec = prec
        return score * rate


# ---------------------------------------------------------------------------
# Stage 2: Bonus multipliers
# ---------------------------------------------------------------------------
def apply_bonus_multipliers(
    amount: Decimal, bonuses: Iterable[str], rates: RateTable
) -> tuple[Decimal, tuple[str, ...]]:
    """Multiply *amount* once per bonus occurrence.

    Returns (amount, applied_tags).  Unknown tags leave the amount
    unchanged and are not reported as applied.

    Raises
    ------
    InvalidScore
        If the product is too large to compute exactly.
    """
    applied = tuple(tag for tag in bonuses if tag in rates.multipliers)
    factors = [rates.multipliers[tag] for tag in applied]
    try:
        prec = precision_for(amount, *factors)
    except ValueError as exc:
        raise InvalidScore(f"Earnings are too large: {exc}") from exc
    with localcontext() as ctx:
        ctx.prec = prec
        for factor in factors:
            amount *= factor
    return amount, applied


# ---------------------------------------------------------------------------
# Payout checks
# ---------------------------------------------------------------------------
def is_payout_eligible(requested_amount: Number, minimum_payout: Number) -> bool:
    """True iff *requested_amount* meets *minimum_payout* (boundary inclusive).

    Both values are compared as exact decimals; no rounding is applied.
    """
    requested = _amount(requested_amount, "Requested amount")
    minimum = _amount(minimum_payout, "Minimum payout")
    return requested >= minimum


def apply_platform_fee(amount: Number, fee_percentage: Number) -> PayoutSplit:
    """Split *amount* into (net_amount, fee_amount).

    The fee is rounded to cents; the net amount is the remainder so that
    ``net_amount + fee_amount == amount`` always holds.
    """
    gross = _amount(amount, "Amount")
    try:
        pct = to_decimal(fee_percentage)
    except ValueError as exc:
        raise InvalidAmount(f"Fee percentage is not a number: {fee_percentage!r}") from exc
    if not 0 <= pct <= _HUNDRED:
        raise InvalidAmount(f"Fee percentage must be within [0, 100], got {pct}")

    try:
        prec = precision_for(gross, pct, _HUNDRED, FEE_QUANTUM)
    except ValueError as exc:
        raise InvalidAmount(f"Amount is too large: {exc}") from exc
    with localcontext() as ctx:
        ctx.prec = prec
        fee = round_money(gross * pct / _HUNDRED, FEE_QUANTUM)
        return PayoutSplit(net_amount=gross - fee, fee_amount=fee)


# ---------------------------------------------------------------------------
# RewardEngine — holds the injected rate table
# ---------------------------------------------------------------------------
class RewardEngine:
    """Stateless calculator bound to one immutable :class:`RateTable`.

    Safe to share between threads and request handlers.

    Usage::

        engine = RewardEngine(RateTable({"mobile": "0.001"}, {"daily_bonus": "1.5"}))
        engine.calculate_earnings(1000, "mobile", ["daily_bonus"]).amount  # Decimal("1.5000")
    """

    def __init__(self, rates: RateTable, *, currency: str = DEFAULT_CURRENCY) -> None:
        self._rates = rates
        self._currency = currency

    @property
    def rates(self) -> RateTable:
        return self._rates

    @property
    def currency(self) -> str:
        return self._currency

    def calculate_earnings(
        self, score: int, platform: str, bonuses: Iterable[str] = ()
    ) -> EarningsResult:
        """Run the earnings pipeline for one finished game session.

        Raises
        ------
        InvalidScore
            If *score* is negative, not an integer, or so large the
            earnings would need more than ``MAX_PRECISION`` digits.
        UnknownPlatform
            If *platform* has no base rate.
        """
        if isinstance(platform, Platform):
            platform = platform.value
        bonuses = tuple(bonuses)
        amount = base_earnings(score, platform, self._rates)
        amount, applied = apply_bonus_multipliers(amount, bonuses, self._rates)
        try:
            amount = round_money(amount)
        except ValueError as exc:
            raise InvalidScore(f"Earnings are too large: {exc}") from exc

        logger.debug(
            "Earnings: score=%d platform=%s bonuses=%s applied=%s → %s %s",
            score, platform, list(bonuses), list(applied), amount, self._currency,
        )
        return EarningsResult(
            amount=amount,
            platform=platform,
            bonuses_applied=applied,
            currency=self._currency,
        )

    def calculate_submission(self, submission: ScoreSubmission) -> EarningsResult:
        return self.calculate_earnings(
            submission.raw_score, submission.platform, submission.bonuses
        )

    def is_payout_eligible(self, requested_amount: Number, minimum_payout: Number) -> bool:
        return is_payout_eligible(requested_amount, minimum_payout)

    def apply_platform_fee(self, amount: Number, fee_percentage: Number) -> PayoutSplit:
        return apply_platform_fee(amount, fee_percentage)
