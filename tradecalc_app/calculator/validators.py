"""Field-level checks applied by callers when a user leaves an input."""

from ..config.defaults import Messages, ValidationLimits
from ..config.validation import ValidationError
from .pnl import TradeInputs


def clamp_leverage(value: float, limits: ValidationLimits) -> float:
    """Clamp leverage into the configured [min, max] range."""
    return min(max(value, limits.leverage.min), limits.leverage.max)


def check_positive_fields(inputs: TradeInputs, messages: Messages) -> list[ValidationError]:
    """
    Check the price fields a user must fill with positive values.

    Args:
        inputs: Trade inputs after expression normalization
        messages: Configured user-facing messages

    Returns:
        One ValidationError per non-positive field, carrying its message
    """
    checks = (
        ("entry_price", inputs.entry_price, messages.entry_price_error),
        ("take_profit", inputs.take_profit, messages.take_profit_error),
        ("stop_loss", inputs.stop_loss, messages.stop_loss_error),
    )

    return [
        ValidationError(field=name, message=message, value=value)
        for name, value, message in checks
        if value <= 0
    ]


def check_capital(capital: float, limits: ValidationLimits) -> list[ValidationError]:
    """Warn when capital is below the configured minimum."""
    if capital < limits.capital.min:
        return [ValidationError(
            field="capital",
            message=f"Must be at least {limits.capital.min:g}",
            value=capital,
        )]
    return []
