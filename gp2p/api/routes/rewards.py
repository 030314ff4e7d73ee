"""
gp2p.api.routes.rewards — Earnings & payout endpoints
=======================================================

Stateless wrappers around :mod:`gp2p.services.reward_service`.  Nothing is
persisted; crediting balances and moving money belong to the ledger.
"""

from __future__ import annotations

from decimal import Decimal

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from gp2p.api.deps import get_config, get_engine
from gp2p.config import RewardConfig
from gp2p.engine.reward import RewardEngine
from gp2p.services import reward_service

router = APIRouter(tags=["rewards"])


# ---------------------------------------------------------------------------
# Pydantic schemas
# ---------------------------------------------------------------------------
class SessionReportIn(BaseModel):
    game_id: str
    platform: str
    final_score: int
    duration: float = Field(0.0, ge=0)
    bonuses: list[str] = Field(default_factory=list)


class PayoutRequestIn(BaseModel):
    amount: Decimal
    currency: str | None = None
    apply_fee: bool = True


# ---------------------------------------------------------------------------
# POST /sessions/earnings
# ---------------------------------------------------------------------------
@router.post("/sessions/earnings")
def session_earnings(
    body: SessionReportIn,
    engine: RewardEngine = Depends(get_engine),
):
    """Earnings for one finished game session."""
    report = reward_service.SessionReport(
        game_id=body.game_id,
        platform=body.platform,
        final_score=body.final_score,
        duration=body.duration,
        bonuses=tuple(body.bonuses),
    )
    return reward_service.report_session(engine, report)


# ---------------------------------------------------------------------------
# POST /payouts/quote
# ---------------------------------------------------------------------------
@router.post("/payouts/quote")
def payout_quote(
    body: PayoutRequestIn,
    engine: RewardEngine = Depends(get_engine),
    cfg: RewardConfig = Depends(get_config),
):
    """Eligibility and fee split for a requested withdrawal."""
    request = reward_service.PayoutRequest(
        amount=body.amount,
        currency=body.currency or engine.currency,
    )
    return reward_service.quote_payout(
        engine,
        request,
        minimum_payout=cfg.minimum_payout_amount,
        fee_percentage=cfg.platform_fee_percentage if body.apply_fee else None,
    )


# ---------------------------------------------------------------------------
# GET /rates
# ---------------------------------------------------------------------------
@router.get("/rates")
def get_rates(cfg: RewardConfig = Depends(get_config)):
    """The loaded rate table and payout settings."""
    return {
        **cfg.rates.to_dict(),
        "minimum_payout_amount": str(cfg.minimum_payout_amount),
        "platform_fee_percentage": str(cfg.platform_fee_percentage),
        "currency": cfg.currency,
    }
