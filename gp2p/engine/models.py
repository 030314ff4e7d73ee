"""
gp2p.engine.models — Value types crossing the reward engine boundary
======================================================================

``ScoreSubmission`` is the sole input to the earnings pipeline;
``RateTable`` is the immutable configuration injected into the engine;
``EarningsResult`` and ``PayoutSplit`` are what comes back out.
"""

from __future__ import annotations

import enum
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field, replace
from decimal import Decimal
from types import MappingProxyType

from gp2p.constants import DEFAULT_CURRENCY, to_decimal
from gp2p.engine.errors import ConfigError

__all__ = [
    "EarningsResult",
    "PayoutSplit",
    "Platform",
    "RateTable",
    "ScoreSubmission",
]

_IDENTITY = Decimal(1)


class Platform(str, enum.Enum):
    """Platforms shipped in the default rate table.

    Additional platforms are plain string keys in ``base_rates``.
    """

    MOBILE = "mobile"
    WEB = "web"


# ---------------------------------------------------------------------------
# ScoreSubmission — produced by a game client at session end
# ---------------------------------------------------------------------------
@dataclass(frozen=True, slots=True)
class ScoreSubmission:
    raw_score: int
    platform: str
    bonuses: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if isinstance(self.platform, Platform):
            object.__setattr__(self, "platform", self.platform.value)
        object.__setattr__(self, "bonuses", tuple(self.bonuses))


# ---------------------------------------------------------------------------
# RateTable — loaded once at startup, read-only afterwards
# ---------------------------------------------------------------------------
def _freeze_decimals(raw: Mapping[str, object], what: str) -> Mapping[str, Decimal]:
    frozen: dict[str, Decimal] = {}
    for key, value in raw.items():
        tag = key.value if isinstance(key, Platform) else str(key)
        try:
            number = to_decimal(value)  # type: ignore[arg-type]
        except ValueError as exc:
            raise ConfigError(f"{what} for {tag!r} is not a number: {value!r}") from exc
        if number < 0:
            raise ConfigError(f"{what} for {tag!r} must be non-negative, got {number}")
        frozen[tag] = number
    return MappingProxyType(frozen)


@dataclass(frozen=True)
class RateTable:
    """Per-platform base rates and per-bonus multipliers.

    Values are coerced to :class:`Decimal` and the mappings are wrapped in
    read-only proxies so the table can be shared across threads.

    Raises
    ------
    ConfigError
        If a rate or multiplier is negative or not a number, or if no
        platform is configured.
    """

    base_rates: Mapping[str, Decimal]
    multipliers: Mapping[str, Decimal] = field(default_factory=dict)

    def __post_init__(self) -> None:
        rates = _freeze_decimals(self.base_rates, "Base rate")
        if not rates:
            raise ConfigError("Rate table must define at least one platform")
        object.__setattr__(self, "base_rates", rates)
        object.__setattr__(
            self, "multipliers", _freeze_decimals(self.multipliers, "Multiplier")
        )

    @property
    def platforms(self) -> tuple[str, ...]:
        return tuple(self.base_rates)

    def multiplier(self, tag: str) -> Decimal:
        """Factor for *tag*; unknown tags are the identity."""
        return self.multipliers.get(tag, _IDENTITY)

    def to_dict(self) -> dict[str, dict[str, str]]:
        return {
            "base_rates": {k: str(v) for k, v in self.base_rates.items()},
            "multipliers": {k: str(v) for k, v in self.multipliers.items()},
        }


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------
@dataclass(frozen=True, slots=True)
class EarningsResult:
    """Output of :meth:`RewardEngine.calculate_earnings`.

    ``eligible_for_payout`` stays ``None`` until a caller decides
    eligibility against a minimum (see :meth:`with_eligibility`).
    """

    amount: Decimal
    platform: str
    bonuses_applied: tuple[str, ...] = ()
    currency: str = DEFAULT_CURRENCY
    eligible_for_payout: bool | None = None

    def with_eligibility(self, minimum_payout: Decimal) -> EarningsResult:
        from gp2p.engine.reward import is_payout_eligible

        return replace(
            self, eligible_for_payout=is_payout_eligible(self.amount, minimum_payout)
        )


@dataclass(frozen=True, slots=True)
class PayoutSplit:
    """Gross amount split into what the user receives and the platform keeps."""

    net_amount: Decimal
    fee_amount: Decimal

    def __iter__(self) -> Iterator[Decimal]:
        yield self.net_amount
        yield self.fee_amount
