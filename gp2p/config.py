"""
gp2p.config — YAML Configuration Loader
=========================================

**Why this file exists:**
This module reads ``config.yaml`` for the reward economy: per-platform base
rates, bonus multipliers, the minimum payout and the platform fee.  It is
read once at process start; the resulting objects are immutable.

A handful of payout knobs can be overridden from the environment (usually a
``.env`` file loaded by the API entry point):

* ``MINIMUM_PAYOUT_AMOUNT``
* ``PLATFORM_FEE_PERCENTAGE``
* ``PAYOUT_CURRENCY``

Usage::

    from gp2p.config import load_config

    cfg = load_config()                 # reads ./config.yaml by default
    print(cfg.minimum_payout_amount)    # Decimal("5.00")
    engine = cfg.build_engine()
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from decimal import Decimal
from pathlib import Path

import yaml

from gp2p.constants import (
    DEFAULT_BASE_RATES,
    DEFAULT_CURRENCY,
    DEFAULT_MINIMUM_PAYOUT,
    DEFAULT_PLATFORM_FEE_PERCENTAGE,
    to_decimal,
)
from gp2p.engine.errors import ConfigError
from gp2p.engine.models import RateTable
from gp2p.engine.reward import RewardEngine

logger = logging.getLogger(__name__)

CONFIG_PATH_ENV = "GP2P_CONFIG"
DEFAULT_CONFIG_PATH = "config.yaml"


# ---------------------------------------------------------------------------
# Typed settings object
# ---------------------------------------------------------------------------
@dataclass(frozen=True, slots=True)
class RewardConfig:
    """Immutable configuration loaded from ``config.yaml``."""

    rates: RateTable
    minimum_payout_amount: Decimal = DEFAULT_MINIMUM_PAYOUT
    platform_fee_percentage: Decimal = DEFAULT_PLATFORM_FEE_PERCENTAGE
    currency: str = DEFAULT_CURRENCY

    def build_engine(self) -> RewardEngine:
        return RewardEngine(self.rates, currency=self.currency)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------
def _decimal_setting(raw: Mapping, key: str, default: Decimal) -> Decimal:
    env_value = os.getenv(key.upper())
    value = env_value if env_value not in (None, "") else raw.get(key)
    if value is None:
        return default
    try:
        number = to_decimal(value)
    except ValueError as exc:
        raise ConfigError(f"{key} is not a number: {value!r}") from exc
    if number < 0:
        raise ConfigError(f"{key} must be non-negative, got {number}")
    return number


def _mapping_setting(raw: Mapping, key: str, default: Mapping | None = None) -> Mapping:
    value = raw.get(key)
    if value is None:
        return dict(default or {})
    if not isinstance(value, Mapping):
        raise ConfigError(f"{key} must be a mapping, got {type(value).__name__}")
    return value


def config_from_mapping(raw: Mapping) -> RewardConfig:
    """Build a :class:`RewardConfig` from already-parsed YAML.

    Raises
    ------
    ConfigError
        If any value is malformed.
    """
    if not isinstance(raw, Mapping):
        raise ConfigError("Configuration root must be a mapping")

    rates = RateTable(
        base_rates=_mapping_setting(raw, "base_rates", DEFAULT_BASE_RATES),
        multipliers=_mapping_setting(raw, "multipliers"),
    )

    fee = _decimal_setting(
        raw, "platform_fee_percentage", DEFAULT_PLATFORM_FEE_PERCENTAGE
    )
    if fee > 100:
        raise ConfigError(f"platform_fee_percentage must be within [0, 100], got {fee}")

    currency = os.getenv("PAYOUT_CURRENCY") or raw.get("currency") or DEFAULT_CURRENCY

    return RewardConfig(
        rates=rates,
        minimum_payout_amount=_decimal_setting(
            raw, "minimum_payout_amount", DEFAULT_MINIMUM_PAYOUT
        ),
        platform_fee_percentage=fee,
        currency=str(currency).lower(),
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------
def load_config(path: str | Path | None = None) -> RewardConfig:
    """Read *path* and return a :class:`RewardConfig` instance.

    Parameters
    ----------
    path:
        Filesystem path to the YAML configuration file.  Defaults to the
        ``GP2P_CONFIG`` environment variable, then ``config.yaml`` in the
        current working directory.

    Raises
    ------
    FileNotFoundError
        If the YAML file doesn't exist.
    ConfigError
        If a rate, multiplier, or payout setting is malformed.
    """
    config_path = Path(path or os.getenv(CONFIG_PATH_ENV) or DEFAULT_CONFIG_PATH)
    if not config_path.exists():
        raise FileNotFoundError(
            f"Configuration file not found: {config_path.resolve()}\n"
            "Hint: copy config.yaml.example → config.yaml and edit it."
        )

    with open(config_path, encoding="utf-8") as fh:
        raw = yaml.safe_load(fh) or {}

    cfg = config_from_mapping(raw)
    logger.info(
        "Config loaded — %d platforms, %d multipliers, minimum payout %s %s, fee %s%%",
        len(cfg.rates.base_rates),
        len(cfg.rates.multipliers),
        cfg.minimum_payout_amount,
        cfg.currency,
        cfg.platform_fee_percentage,
    )
    return cfg
