"""
tests/test_api_startup — Config Validation at API Startup
===========================================================
The API must refuse to start when ``config.yaml`` is missing or malformed,
and serve the loaded config when it is valid.
"""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from gp2p.api.deps import get_config, get_engine
from gp2p.api.main import app
from gp2p.engine.errors import ConfigError


@pytest.fixture(autouse=True)
def _fresh_caches():
    """Force the lifespan to read the config file again."""
    get_config.cache_clear()
    get_engine.cache_clear()
    yield
    get_config.cache_clear()
    get_engine.cache_clear()


def _write(tmp_path, text: str):
    path = tmp_path / "config.yaml"
    path.write_text(text, encoding="utf-8")
    return path


class TestStartupValidation:
    def test_negative_rate_aborts_startup(self, tmp_path, monkeypatch):
        path = _write(tmp_path, 'base_rates:\n  mobile: "-0.1"\n')
        monkeypatch.setenv("GP2P_CONFIG", str(path))
        with pytest.raises(ConfigError, match="non-negative"):
            with TestClient(app):
                pass

    def test_out_of_range_fee_aborts_startup(self, tmp_path, monkeypatch):
        path = _write(tmp_path, "platform_fee_percentage: 150\n")
        monkeypatch.setenv("GP2P_CONFIG", str(path))
        with pytest.raises(ConfigError, match="platform_fee_percentage"):
            with TestClient(app):
                pass

    def test_missing_file_aborts_startup(self, tmp_path, monkeypatch):
        monkeypatch.setenv("GP2P_CONFIG", str(tmp_path / "missing.yaml"))
        with pytest.raises(FileNotFoundError, match="config.yaml.example"):
            with TestClient(app):
                pass

    def test_valid_config_starts(self, tmp_path, monkeypatch):
        path = _write(
            tmp_path,
            'minimum_payout_amount: "2.50"\nbase_rates:\n  web: "0.002"\n',
        )
        monkeypatch.setenv("GP2P_CONFIG", str(path))
        with TestClient(app) as client:
            resp = client.get("/api/rates")
            assert resp.status_code == 200
            assert resp.json()["base_rates"] == {"web": "0.002"}
            assert resp.json()["minimum_payout_amount"] == "2.50"
