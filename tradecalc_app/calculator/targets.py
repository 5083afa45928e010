"""Risk-based take-profit and stop-loss suggestions"""

import math
from dataclasses import dataclass
from typing import Union

from ..config.defaults import FeeSchedule, FeeTier, RiskSettings
from .rounding import round2

# Max-loss fraction hard-coded by the first version of the web calculator.
# The configured RiskSettings value is authoritative.
LEGACY_MAX_LOSS_PERCENTAGE = 0.06


@dataclass(frozen=True)
class TargetPrices:
    """Suggested exit prices."""
    take_profit: float
    stop_loss: float


def compute_targets(
    entry_price: float,
    capital: float,
    leverage: float,
    fee_tier: Union[FeeTier, str],
    fees: FeeSchedule,
    risk: RiskSettings,
) -> TargetPrices:
    """
    Derive take-profit and stop-loss prices from the risk policy.

    The loss budget is ``capital * max_loss_percentage`` including one entry
    and one exit fee. The stop sits where the remaining budget is lost on the
    leveraged position; the target sits ``risk_reward_ratio`` times that
    distance on the other side of the entry.

    Always places the stop below and the target above the entry; direction
    is applied by the P&L step. A fee bill larger than the loss budget makes
    the distance negative and flips both levels across the entry.

    Args:
        entry_price: Entry price
        capital: Margin committed to the trade
        leverage: Leverage multiplier
        fee_tier: Fee tier used for both entry and exit
        fees: Fee schedule (percent rates)
        risk: Risk policy

    Returns:
        TargetPrices; both equal to entry_price if any input is non-positive
        or not finite, or if the levels overflow
    """
    unchanged = TargetPrices(take_profit=entry_price, stop_loss=entry_price)

    if not all(math.isfinite(v) and v > 0 for v in (entry_price, capital, leverage)):
        return unchanged

    max_loss_amount = capital * risk.max_loss_percentage
    position_size = capital * leverage

    fee_rate = fees.rate_for(fee_tier) / 100
    total_fee_rate = fee_rate * 2  # Entry + exit
    total_fees = position_size * total_fee_rate

    net_loss_amount = max_loss_amount - total_fees
    price_change_for_loss = (net_loss_amount / position_size) * entry_price
    stop_loss = round2(entry_price - price_change_for_loss)

    price_change_for_profit = price_change_for_loss * risk.risk_reward_ratio
    take_profit = round2(entry_price + price_change_for_profit)

    if not (math.isfinite(stop_loss) and math.isfinite(take_profit)):
        return unchanged

    return TargetPrices(take_profit=take_profit, stop_loss=stop_loss)


class RiskTargetCalculator:
    """Target calculator bound to a fee schedule and risk policy"""

    def __init__(self, fees: FeeSchedule, risk: RiskSettings):
        self.fees = fees
        self.risk = risk

    def compute(
        self,
        entry_price: float,
        capital: float,
        leverage: float,
        fee_tier: Union[FeeTier, str],
    ) -> TargetPrices:
        return compute_targets(entry_price, capital, leverage, fee_tier, self.fees, self.risk)
