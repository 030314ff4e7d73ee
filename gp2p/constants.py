"""
gp2p.constants — Shared Constants & Money Helpers
===================================================

Single source of truth for currency defaults, monetary precision and the
rounding rule.  Import from here instead of duplicating in the engine,
services, and API.
"""

from __future__ import annotations

from decimal import ROUND_HALF_EVEN, Decimal, InvalidOperation, localcontext

# ---------------------------------------------------------------------------
# Currency & payout defaults
# ---------------------------------------------------------------------------
DEFAULT_CURRENCY = "usd"
DEFAULT_MINIMUM_PAYOUT = Decimal("5.00")
DEFAULT_PLATFORM_FEE_PERCENTAGE = Decimal("0")

DEFAULT_BASE_RATES: dict[str, Decimal] = {
    "mobile": Decimal("0.001"),
    "web": Decimal("0.001"),
}

# ---------------------------------------------------------------------------
# Precision — THE single canonical rounding rule
# ---------------------------------------------------------------------------
EARNINGS_QUANTUM = Decimal("0.0001")  # 4 fractional digits
FEE_QUANTUM = Decimal("0.01")         # cents
ROUNDING = ROUND_HALF_EVEN

# Upper bound on the digits an exact calculation may need.  Larger inputs
# are rejected rather than rounded by the decimal context.
MAX_PRECISION = 1000


def precision_for(*values: Decimal) -> int:
    """Digits needed to multiply *values*, shift by powers of ten, and
    quantize the result without the decimal context rounding anything.

    Raises
    ------
    ValueError
        If more than :data:`MAX_PRECISION` digits would be needed.
    """
    needed = 8
    for value in values:
        _, digits, exponent = value.as_tuple()
        needed += len(digits) + abs(exponent)
    if needed > MAX_PRECISION:
        raise ValueError(
            f"Value too large to compute exactly ({needed} digits, max {MAX_PRECISION})"
        )
    return needed


def round_money(value: Decimal, quantum: Decimal = EARNINGS_QUANTUM) -> Decimal:
    """Round *value* to *quantum* using banker's rounding.

    Raises :class:`ValueError` if *value* is beyond :data:`MAX_PRECISION`.
    """
    with localcontext() as ctx:
        ctx.prec = precision_for(value, quantum)
        return value.quantize(quantum, rounding=ROUNDING)


def to_decimal(value: Decimal | int | float | str) -> Decimal:
    """Coerce *value* to a finite :class:`Decimal`.

    Floats go through ``str()`` so ``0.1`` becomes ``Decimal("0.1")``
    rather than its binary expansion.

    Raises
    ------
    ValueError
        If *value* is a bool, unparseable, or not finite.
    """
    if isinstance(value, bool):
        raise ValueError(f"Expected a number, got {value!r}")
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, float):
        result = Decimal(str(value))
    else:
        try:
            result = Decimal(value.strip() if isinstance(value, str) else value)
        except (InvalidOperation, TypeError) as exc:
            raise ValueError(f"Not a decimal number: {value!r}") from exc
    if not result.is_finite():
        raise ValueError(f"Not a finite number: {value!r}")
    return result
