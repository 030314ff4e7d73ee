"""
tests/test_api_routes.py — FastAPI Route Integration Tests
============================================================
Exercises the earnings, payout-quote and rates endpoints with the FastAPI
TestClient against an in-memory config.
"""

from __future__ import annotations

from decimal import Decimal

import pytest


# ===========================================================================
# Health endpoint
# ===========================================================================
class TestHealthEndpoint:
    def test_health_returns_ok(self, client):
        resp = client.get("/api/health")
        assert resp.status_code == 200
        assert resp.json() == {"status": "ok"}


# ===========================================================================
# POST /api/sessions/earnings
# ===========================================================================
class TestSessionEarnings:
    def test_earnings_with_bonus(self, client):
        resp = client.post(
            "/api/sessions/earnings",
            json={
                "game_id": "snake-1",
                "platform": "mobile",
                "final_score": 1000,
                "duration": 61,
                "bonuses": ["daily_bonus"],
            },
        )
        assert resp.status_code == 200
        assert resp.json() == {"amount": "1.5000", "currency": "usd"}

    def test_bonuses_optional(self, client):
        resp = client.post(
            "/api/sessions/earnings",
            json={"game_id": "snake-1", "platform": "web", "final_score": 2500},
        )
        assert resp.status_code == 200
        assert resp.json()["amount"] == "2.0000"

    def test_negative_score_is_422(self, client):
        resp = client.post(
            "/api/sessions/earnings",
            json={"game_id": "g", "platform": "mobile", "final_score": -1},
        )
        assert resp.status_code == 422
        assert resp.json()["error"] == "InvalidScore"

    def test_unknown_platform_is_422(self, client):
        resp = client.post(
            "/api/sessions/earnings",
            json={"game_id": "g", "platform": "console", "final_score": 10},
        )
        assert resp.status_code == 422
        body = resp.json()
        assert body["error"] == "UnknownPlatform"
        assert "console" in body["detail"]

    def test_large_score(self, client):
        resp = client.post(
            "/api/sessions/earnings",
            json={"game_id": "g", "platform": "mobile", "final_score": 10**27},
        )
        assert resp.status_code == 200
        assert Decimal(resp.json()["amount"]) == Decimal(10**24)

    def test_missing_fields_is_422(self, client):
        resp = client.post("/api/sessions/earnings", json={"platform": "mobile"})
        assert resp.status_code == 422


# ===========================================================================
# POST /api/payouts/quote
# ===========================================================================
class TestPayoutQuote:
    def test_eligible_quote_includes_fee(self, client):
        resp = client.post("/api/payouts/quote", json={"amount": "100.00", "currency": "usd"})
        assert resp.status_code == 200
        assert resp.json() == {
            "eligible": True,
            "currency": "usd",
            "net_amount": "90.00",
            "fee_amount": "10.00",
        }

    @pytest.mark.parametrize("amount, eligible", [("4.99", False), ("5.00", True)])
    def test_minimum_boundary(self, client, amount, eligible):
        resp = client.post("/api/payouts/quote", json={"amount": amount})
        assert resp.status_code == 200
        assert resp.json()["eligible"] is eligible

    def test_fee_can_be_skipped(self, client):
        resp = client.post("/api/payouts/quote", json={"amount": "100", "apply_fee": False})
        assert resp.status_code == 200
        assert resp.json() == {"eligible": True, "currency": "usd"}

    def test_negative_amount_is_422(self, client):
        resp = client.post("/api/payouts/quote", json={"amount": "-3"})
        assert resp.status_code == 422
        assert resp.json()["error"] == "InvalidAmount"

    def test_huge_amount_quoted_exactly(self, client):
        resp = client.post("/api/payouts/quote", json={"amount": "1e30"})
        assert resp.status_code == 200
        body = resp.json()
        assert body["eligible"] is True
        assert Decimal(body["net_amount"]) == Decimal("9e29")
        assert Decimal(body["fee_amount"]) == Decimal("1e29")

    def test_absurd_amount_is_422(self, client):
        resp = client.post("/api/payouts/quote", json={"amount": "1e5000"})
        assert resp.status_code == 422
        assert resp.json()["error"] == "InvalidAmount"

    def test_wrong_currency_is_422(self, client):
        resp = client.post("/api/payouts/quote", json={"amount": "30", "currency": "jpy"})
        assert resp.status_code == 422
        assert resp.json()["error"] == "InvalidAmount"


# ===========================================================================
# GET /api/rates
# ===========================================================================
class TestRates:
    def test_rates_payload(self, client):
        resp = client.get("/api/rates")
        assert resp.status_code == 200
        assert resp.json() == {
            "base_rates": {"mobile": "0.001", "web": "0.0008"},
            "multipliers": {"daily_bonus": "1.5", "streak_bonus": "1.2"},
            "minimum_payout_amount": "5.00",
            "platform_fee_percentage": "10",
            "currency": "usd",
        }
