"""
gp2p.api.deps — FastAPI dependency injection
==============================================
"""

from __future__ import annotations

from functools import lru_cache

from gp2p.config import RewardConfig, load_config
from gp2p.engine.reward import RewardEngine


@lru_cache(maxsize=1)
def get_config() -> RewardConfig:
    return load_config()


@lru_cache(maxsize=1)
def get_engine() -> RewardEngine:
    return get_config().build_engine()
