"""Position P&L, fee and ROI calculations for the profit and loss scenarios"""

import math
from dataclasses import dataclass, fields
from typing import Optional, Union

from ..config.defaults import FeeSchedule, FeeTier, PositionType
from ..errors import InvalidInputError
from ..logging.config import get_logger
from .rounding import round2

logger = get_logger(__name__)


@dataclass(frozen=True)
class TradeInputs:
    """Validated numeric inputs for a single calculation."""
    entry_price: float
    capital: float
    leverage: float
    position_type: PositionType
    fee_tier: Union[FeeTier, str]
    take_profit: float
    stop_loss: float


@dataclass(frozen=True)
class PnLResult:
    """Fees, price deltas, P&L and ROI for both exit scenarios.

    All numeric fields are None in the unavailable state.
    """
    position_size: Optional[float] = None
    entry_fee: Optional[float] = None
    exit_fee: Optional[float] = None
    total_fees: Optional[float] = None

    profit_price_change: Optional[float] = None
    profit_price_change_percent: Optional[float] = None
    profit_pnl: Optional[float] = None
    profit_roi: Optional[float] = None
    profit_leveraged_roi: Optional[float] = None

    loss_price_change: Optional[float] = None
    loss_price_change_percent: Optional[float] = None
    loss_pnl: Optional[float] = None
    loss_roi: Optional[float] = None
    loss_leveraged_roi: Optional[float] = None

    position_type: Optional[PositionType] = None

    @classmethod
    def unavailable(cls) -> "PnLResult":
        """Empty result returned when inputs are invalid."""
        return cls()

    @property
    def available(self) -> bool:
        return self.position_size is not None

    def to_dict(self) -> dict:
        return {f.name: getattr(self, f.name) for f in fields(self)}


@dataclass(frozen=True)
class ScenarioResult:
    """P&L figures for one exit price."""
    price_change: float
    price_change_percent: float
    pnl: float
    roi: float
    leveraged_roi: float


REQUIRED_POSITIVE = ("leverage", "entry_price", "capital", "take_profit", "stop_loss")


def _require_positive(inputs: TradeInputs) -> None:
    for name in REQUIRED_POSITIVE:
        value = getattr(inputs, name)
        if value is None or not math.isfinite(value) or value <= 0:
            raise InvalidInputError(
                f"{name} must be greater than 0",
                field=name,
                value=value,
            )


def calculate_scenario(
    price_change: float,
    entry_price: float,
    capital: float,
    leverage: float,
    total_fees: float,
) -> ScenarioResult:
    """
    Compute P&L for a signed favorable price change.

    Fees are subtracted in both scenarios, so a losing exit shows the
    loss plus fees.
    """
    change_ratio = price_change / entry_price
    price_change_percent = round2(change_ratio * 100)

    gross_pnl = round2(capital * leverage * change_ratio)
    net_pnl = round2(gross_pnl - total_fees)

    roi = round2((net_pnl / capital) * 100)
    # ROI is already against margin; multiplying by leverage again is an
    # informational figure carried over from the web calculator
    leveraged_roi = round2(roi * leverage)

    return ScenarioResult(
        price_change=round2(price_change),
        price_change_percent=price_change_percent,
        pnl=net_pnl,
        roi=roi,
        leveraged_roi=leveraged_roi,
    )


def calculate_pnl_strict(inputs: TradeInputs, fees: FeeSchedule) -> PnLResult:
    """
    Compute the full P&L result.

    Take profit and stop loss are not checked against the direction; a
    target on the wrong side of the entry yields a negative "profit".

    Raises:
        InvalidInputError: If leverage, entry price, capital, take profit
            or stop loss is not positive, or a result overflows
        UnknownFeeTierError: If the fee tier is not in the schedule
    """
    _require_positive(inputs)

    position_type = PositionType(inputs.position_type)
    entry_price = inputs.entry_price
    capital = inputs.capital
    leverage = inputs.leverage

    position_size = round2(capital * leverage)

    fee_rate_decimal = fees.rate_for(inputs.fee_tier) / 100
    entry_fee = round2(position_size * fee_rate_decimal)
    exit_fee = round2(position_size * fee_rate_decimal)
    total_fees = round2(entry_fee + exit_fee)

    if position_type is PositionType.LONG:
        profit_change = inputs.take_profit - entry_price
        loss_change = inputs.stop_loss - entry_price
    else:
        profit_change = entry_price - inputs.take_profit
        loss_change = entry_price - inputs.stop_loss

    profit = calculate_scenario(profit_change, entry_price, capital, leverage, total_fees)
    loss = calculate_scenario(loss_change, entry_price, capital, leverage, total_fees)

    result = PnLResult(
        position_size=position_size,
        entry_fee=entry_fee,
        exit_fee=exit_fee,
        total_fees=total_fees,
        profit_price_change=profit.price_change,
        profit_price_change_percent=profit.price_change_percent,
        profit_pnl=profit.pnl,
        profit_roi=profit.roi,
        profit_leveraged_roi=profit.leveraged_roi,
        loss_price_change=loss.price_change,
        loss_price_change_percent=loss.price_change_percent,
        loss_pnl=loss.pnl,
        loss_roi=loss.roi,
        loss_leveraged_roi=loss.leveraged_roi,
        position_type=position_type,
    )

    for f in fields(result):
        value = getattr(result, f.name)
        if isinstance(value, float) and not math.isfinite(value):
            raise InvalidInputError(
                f"{f.name} is out of range",
                field=f.name,
                value=value,
            )

    return result


def compute_pnl(inputs: TradeInputs, fees: FeeSchedule) -> PnLResult:
    """
    Compute the P&L result, or the unavailable result for invalid inputs.

    Args:
        inputs: Trade inputs
        fees: Fee schedule (percent rates)

    Returns:
        Fully populated PnLResult, or PnLResult.unavailable()
    """
    try:
        return calculate_pnl_strict(inputs, fees)
    except InvalidInputError as e:
        logger.debug(
            "Skipping P&L calculation",
            field=e.field,
            value=e.value,
            reason=str(e),
        )
        return PnLResult.unavailable()


class PnLCalculator:
    """P&L calculator bound to a fee schedule"""

    def __init__(self, fees: FeeSchedule):
        self.fees = fees

    def compute(self, inputs: TradeInputs) -> PnLResult:
        return compute_pnl(inputs, self.fees)
