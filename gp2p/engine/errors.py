"""
gp2p.engine.errors — Validation error taxonomy
================================================

All errors are local validation failures raised synchronously by the
engine.  They subclass :class:`ValueError` so callers that only care about
"bad input" can catch the builtin.
"""

from __future__ import annotations

from collections.abc import Iterable

__all__ = [
    "ConfigError",
    "InvalidAmount",
    "InvalidScore",
    "RewardError",
    "UnknownPlatform",
]


class RewardError(ValueError):
    """Base class for every reward engine failure."""


class InvalidScore(RewardError):
    """Raw score is negative or not an integer."""


class InvalidAmount(RewardError):
    """Monetary amount is negative or malformed, or a fee is out of range."""


class UnknownPlatform(RewardError):
    """Platform tag has no base rate in the rate table."""

    def __init__(self, platform: str, known: Iterable[str] = ()) -> None:
        self.platform = platform
        self.known = tuple(sorted(known))
        hint = f" (known: {', '.join(self.known)})" if self.known else ""
        super().__init__(f"Unknown platform: {platform!r}{hint}")


class ConfigError(RewardError):
    """Rate table or payout settings are malformed."""
