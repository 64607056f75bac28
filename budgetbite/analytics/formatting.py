"""Mini README: Number formatting shared by analytics and exports.

Percentages are rounded half away from zero on the exact binary value of
the float, the same way browser ``Number.prototype.toFixed`` behaves, so a
share shown on the dashboard and written to a report never disagree.
Non-finite values are spelled ``Infinity``, ``-Infinity`` and ``NaN``.
"""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Optional


def _non_finite_label(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    return "Infinity" if value > 0 else "-Infinity"


def to_fixed(value: float, digits: int) -> str:
    """Format ``value`` with exactly ``digits`` decimals."""

    if not math.isfinite(value):
        return _non_finite_label(value)
    exact = Decimal(value)
    with localcontext() as context:
        # quantize needs room for every integral digit plus the decimals
        context.prec = max(28, exact.adjusted() + digits + 2)
        rounded = exact.quantize(Decimal(1).scaleb(-digits), rounding=ROUND_HALF_UP)
    if rounded == 0:
        rounded = abs(rounded)
    return format(rounded, "f")


def round_to(value: float, digits: int) -> float:
    """Round like :func:`to_fixed` but return a float; non-finite values pass through."""

    if not math.isfinite(value):
        return value
    return float(to_fixed(value, digits))


def json_number(value: float) -> Optional[float]:
    """JSON-safe number: non-finite values become ``None`` (``null``)."""

    return value if math.isfinite(value) else None


def format_amount(amount: float) -> str:
    """Render an amount without a trailing ``.0``; huge values use exponent form."""

    if not math.isfinite(amount):
        return _non_finite_label(amount)
    if float(amount).is_integer() and abs(amount) < 1e21:
        return str(int(amount))
    return repr(float(amount))
