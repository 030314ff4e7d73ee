"""
tests/conftest.py — Shared Test Fixtures
=========================================
"""

from __future__ import annotations

from decimal import Decimal

import pytest

from gp2p.config import RewardConfig
from gp2p.engine.models import RateTable
from gp2p.engine.reward import RewardEngine

_OVERRIDE_ENV = (
    "GP2P_CONFIG",
    "MINIMUM_PAYOUT_AMOUNT",
    "PLATFORM_FEE_PERCENTAGE",
    "PAYOUT_CURRENCY",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    """Keep a developer's .env overrides out of the test run."""
    for key in _OVERRIDE_ENV:
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def rates() -> RateTable:
    return RateTable(
        base_rates={"mobile": "0.001", "web": "0.0008"},
        multipliers={"daily_bonus": "1.5", "streak_bonus": "1.2"},
    )


@pytest.fixture
def engine(rates: RateTable) -> RewardEngine:
    return RewardEngine(rates)


@pytest.fixture
def reward_config(rates: RateTable) -> RewardConfig:
    return RewardConfig(
        rates=rates,
        minimum_payout_amount=Decimal("5.00"),
        platform_fee_percentage=Decimal("10"),
    )


@pytest.fixture
def client(reward_config: RewardConfig):
    """FastAPI TestClient wired to the fixture config (no config.yaml needed)."""
    from fastapi.testclient import TestClient

    from gp2p.api.deps import get_config, get_engine
    from gp2p.api.main import app

    app.dependency_overrides[get_config] = lambda: reward_config
    app.dependency_overrides[get_engine] = reward_config.build_engine
    yield TestClient(app, raise_server_exceptions=False)
    app.dependency_overrides.clear()
