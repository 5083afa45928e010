"""
Calculator engine coordinator.

Wires the target and P&L calculators to the configuration snapshot that is
resident in a ConfigProvider. Callers (the CLI, or any other front end) own
their input state and hand the engine plain values; the engine returns
plain result values.
"""

from typing import Optional, Union

import structlog

from .calculator.expression import normalize_numeric_input
from .calculator.pnl import PnLResult, TradeInputs, compute_pnl
from .calculator.targets import TargetPrices, compute_targets
from .calculator.validators import check_positive_fields, clamp_leverage
from .config.defaults import FeeTier, PositionType
from .config.provider import ConfigProvider, ConfigSnapshot
from .config.validation import ValidationError
from .errors import UnknownFeeTierError

logger = structlog.get_logger(__name__)


class TradeCalculatorEngine:
    """
    Main coordinator for the leverage P&L calculator.

    Every call reads the snapshot that is current at call time; a refresh
    in flight never blocks a calculation.
    """

    def __init__(self, provider: Optional[ConfigProvider] = None) -> None:
        self.provider = provider or ConfigProvider()
        self.logger = logger

    @property
    def snapshot(self) -> ConfigSnapshot:
        return self.provider.snapshot

    def suggest_targets(
        self,
        entry_price: float,
        capital: float,
        leverage: float,
        fee_tier: Union[FeeTier, str],
    ) -> TargetPrices:
        """Suggest take-profit and stop-loss levels from the risk policy."""
        config = self.snapshot.config

        try:
            return compute_targets(
                entry_price, capital, leverage, fee_tier, config.fees, config.risk
            )
        except UnknownFeeTierError as e:
            self.logger.warning(
                "Unknown fee tier, keeping targets at entry price",
                fee_tier=e.fee_tier,
            )
            return TargetPrices(take_profit=entry_price, stop_loss=entry_price)

    def calculate(self, inputs: TradeInputs) -> PnLResult:
        """Compute the P&L result with the current fee schedule."""
        config = self.snapshot.config

        try:
            return compute_pnl(inputs, config.fees)
        except UnknownFeeTierError as e:
            self.logger.warning(
                "Unknown fee tier, result unavailable",
                fee_tier=e.fee_tier,
            )
            return PnLResult.unavailable()

    def normalize_target_input(self, raw: str, previous: float) -> float:
        """Evaluate a take-profit/stop-loss field that may hold a + / - expression."""
        return normalize_numeric_input(raw, previous)

    def clamp_leverage(self, leverage: float) -> float:
        return clamp_leverage(leverage, self.snapshot.config.limits)

    def validate_inputs(self, inputs: TradeInputs) -> list[ValidationError]:
        """Field-exit checks with the configured messages."""
        return check_positive_fields(inputs, self.snapshot.config.messages)

    def default_inputs(self) -> TradeInputs:
        """Seed inputs from the configured defaults with suggested targets."""
        defaults = self.snapshot.config.defaults
        targets = self.suggest_targets(
            defaults.entry_price,
            defaults.capital,
            defaults.leverage,
            defaults.fee_type,
        )

        return TradeInputs(
            entry_price=defaults.entry_price,
            capital=defaults.capital,
            leverage=defaults.leverage,
            position_type=PositionType(defaults.position_type),
            fee_tier=FeeTier(defaults.fee_type),
            take_profit=targets.take_profit,
            stop_loss=targets.stop_loss,
        )
