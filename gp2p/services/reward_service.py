"""
gp2p.services.reward_service — Boundary adapters for the reward engine
========================================================================

Shared service module callable by the API and by batch jobs.  Turns the
payloads exchanged with the game-session reporter and the ledger/payout
service into engine calls, and shapes the results back into plain dicts.

Monetary values leave this module as decimal strings so no caller ever
sees a binary float.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from decimal import Decimal

from gp2p.engine.errors import InvalidAmount
from gp2p.engine.reward import RewardEngine

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SessionReport:
    """End-of-session report from a game client."""

    game_id: str
    platform: str
    final_score: int
    duration: float = 0.0
    bonuses: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True, slots=True)
class PayoutRequest:
    """Withdrawal request from the ledger."""

    amount: Decimal | int | float | str
    currency: str


def report_session(engine: RewardEngine, report: SessionReport) -> dict:
    """Compute earnings for a finished session.

    Returns ``{"amount": str, "currency": str}``.
    """
    result = engine.calculate_earnings(
        report.final_score, report.platform, report.bonuses
    )
    logger.info(
        "Session %s on %s: score=%d duration=%.1fs → %s %s",
        report.game_id,
        result.platform,
        report.final_score,
        report.duration,
        result.amount,
        result.currency,
    )
    return {"amount": str(result.amount), "currency": result.currency}


def quote_payout(
    engine: RewardEngine,
    request: PayoutRequest,
    *,
    minimum_payout: Decimal,
    fee_percentage: Decimal | None = None,
) -> dict:
    """Decide eligibility for a withdrawal and, if fee-bearing, split the fee.

    The fee split is included only when *fee_percentage* is positive and
    the request is eligible.

    Raises
    ------
    InvalidAmount
        If the amount is malformed/negative or the currency differs from the
        engine's configured currency.
    """
    currency = request.currency.lower()
    if currency != engine.currency:
        raise InvalidAmount(
            f"Currency {request.currency!r} not supported (expected {engine.currency!r})"
        )

    eligible = engine.is_payout_eligible(request.amount, minimum_payout)
    quote: dict = {"eligible": eligible, "currency": currency}
    if not eligible:
        logger.info(
            "Payout of %s %s below minimum %s", request.amount, currency, minimum_payout
        )
        return quote

    if fee_percentage:
        split = engine.apply_platform_fee(request.amount, fee_percentage)
        quote["net_amount"] = str(split.net_amount)
        quote["fee_amount"] = str(split.fee_amount)
    return quote
