"""Calculation engine: risk-based targets, P&L and input normalization"""

from .expression import evaluate_expression, normalize_numeric_input
from .formatting import format_currency, format_percentage, format_price_change
from .pnl import PnLCalculator, PnLResult, TradeInputs, compute_pnl
from .rounding import round2
from .targets import RiskTargetCalculator, TargetPrices, compute_targets

__all__ = [
    "PnLCalculator",
    "PnLResult",
    "RiskTargetCalculator",
    "TargetPrices",
    "TradeInputs",
    "compute_pnl",
    "compute_targets",
    "evaluate_expression",
    "normalize_numeric_input",
    "format_currency",
    "format_percentage",
    "format_price_change",
    "round2",
]
