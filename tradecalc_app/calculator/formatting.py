"""Display formatting for calculator results."""

import math
from typing import Optional

UNAVAILABLE = "-"


def _is_displayable(value: Optional[float]) -> bool:
    return value is not None and math.isfinite(value)


def format_currency(value: Optional[float]) -> str:
    """
    Format a USD amount.

    Values with magnitude below 0.01 (other than zero) use scientific
    notation with 4 decimals; everything else is ``$1,234.56`` style.
    """
    if not _is_displayable(value):
        return UNAVAILABLE

    if value != 0 and abs(value) < 0.01:
        return f"{value:.4e}"

    sign = "-" if value < 0 else ""
    return f"{sign}${abs(value):,.2f}"


def format_percentage(value: Optional[float]) -> str:
    """Format a value already expressed in percent units (2.85 -> ``2.85%``)."""
    if not _is_displayable(value):
        return UNAVAILABLE

    return f"{value:,.2f}%"


def format_price_change(change: Optional[float], percent: Optional[float]) -> str:
    """Format a price delta with its percentage, e.g. ``$1,425.00 (2.85%)``."""
    if not _is_displayable(change):
        return UNAVAILABLE

    return f"{format_currency(change)} ({format_percentage(percent)})"
