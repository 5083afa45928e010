"""Half-up rounding for monetary, price and percentage outputs."""

import math


def round2(value: float) -> float:
    """
    Round to 2 decimals, ties toward positive infinity.

    The value is scaled once and the fractional part compared against 0.5,
    so ``2.675`` (stored as ``2.67499...``) gives 2.67, the same as
    ``Math.round(x * 100) / 100``. Python's built-in ``round`` uses banker's
    rounding and is not used for emitted values.

    Non-finite values are returned unchanged.
    """
    if not math.isfinite(value):
        return value

    scaled = value * 100
    rounded = math.floor(scaled)
    if scaled - rounded >= 0.5:
        rounded += 1

    return rounded / 100
