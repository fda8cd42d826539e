"""
Money primitive.

Currency arithmetic happens in integer minor units (cents) so that sums and
comparisons never pick up binary floating point drift (0.1 + 0.2 problems).
Decimal major units only appear at the edges: coming in from callers and
going out in snapshots.

Malformed amounts are never an error here. Anything that is not a finite
number counts as zero, so a financial summary can always be produced from
dirty upstream data.
"""

from decimal import (
    Context,
    Decimal,
    InvalidOperation,
    MAX_EMAX,
    MAX_PREC,
    MIN_EMIN,
    Overflow,
    ROUND_HALF_UP,
    localcontext,
)
from typing import Any, Iterable

MINOR_UNIT_FACTOR = 100

_ZERO = Decimal(0)

# Larger amounts are not money; converting them to int would take
# noticeable time and memory.
_MAX_MINOR_DIGITS = 10_000


def coerce_amount(value: Any) -> Decimal:
    """
    Normalize an arbitrary amount into a finite Decimal.

    int, float and Decimal values pass through when finite. Strings, None,
    booleans, NaN, infinities and any other object become 0.
    """
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
        return _ZERO

    # str() keeps the float's shortest repr: 0.1 -> Decimal("0.1")
    amount = Decimal(str(value)) if isinstance(value, float) else Decimal(value)
    if not amount.is_finite():
        return _ZERO
    return amount


def _money_context() -> Context:
    # Exact arithmetic: no rounding of long coefficients, no overflow on scaling back.
    return Context(prec=MAX_PREC, Emax=MAX_EMAX, Emin=MIN_EMIN, traps=[Overflow, InvalidOperation])


def _places(factor: int) -> int:
    places = len(str(factor)) - 1
    if factor < 1 or 10 ** places != factor:
        raise ValueError(f"Minor unit factor must be a power of ten, got {factor}")
    return places


def to_minor_units(amount: Any, factor: int = MINOR_UNIT_FACTOR) -> int:
    """
    Convert a major-unit amount to integer minor units.

    Rounds half away from zero: 10.005 -> 1001. Amounts too large to scale
    (more than ten thousand digits in minor units) count as malformed
    and become 0.
    """
    places = _places(factor)
    with localcontext(_money_context()):
        try:
            scaled = coerce_amount(amount).scaleb(places)
            if scaled.adjusted() > _MAX_MINOR_DIGITS:
                return 0
            return int(scaled.to_integral_value(rounding=ROUND_HALF_UP))
        except (Overflow, InvalidOperation):
            return 0


def to_major_units(minor_units: int, factor: int = MINOR_UNIT_FACTOR) -> Decimal:
    """Convert integer minor units back to an exact Decimal with the factor's number of places."""
    places = _places(factor)
    with localcontext(_money_context()):
        return Decimal(minor_units).scaleb(-places)


def sum_minor_units(amounts: Iterable[Any], factor: int = MINOR_UNIT_FACTOR) -> int:
    """Sum amounts in minor units. Each amount is rounded before it is added."""
    return sum(to_minor_units(amount, factor) for amount in amounts)
