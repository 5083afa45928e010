"""Pytest configuration and shared fixtures."""

import pytest

from tradecalc_app.calculator.pnl import TradeInputs
from tradecalc_app.config.defaults import (
    FeeSchedule,
    FeeTier,
    PositionType,
    RiskSettings,
    get_default_config,
)


class FakeClock:
    """Controllable replacement for time.time."""

    def __init__(self, now: float = 1_700_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def fee_schedule() -> FeeSchedule:
    """Built-in Bybit fee schedule."""
    return get_default_config().fees


@pytest.fixture
def six_percent_risk() -> RiskSettings:
    """Risk policy with a 6% loss budget and 1:2 reward ratio."""
    return RiskSettings(max_loss_percentage=0.06, risk_reward_ratio=2)


@pytest.fixture
def long_inputs() -> TradeInputs:
    """Long BTC position with targets derived from the 6% / 1:2 policy."""
    return TradeInputs(
        entry_price=50000.0,
        capital=400.0,
        leverage=4.0,
        position_type=PositionType.LONG,
        fee_tier=FeeTier.OPEN_MAKER_CLOSE_TAKER,
        take_profit=51425.0,
        stop_loss=49287.5,
    )


@pytest.fixture
def sheet_csv() -> str:
    """Configuration sheet export using the web calculator section names."""
    return (
        "key,value,type\n"
        "BYBIT_FEES.taker,0.06,number\n"
        "BYBIT_FEES.openMakerCloseTaker,0.04,number\n"
        "RISK_SETTINGS.maxLossPercentage,0.05,number\n"
        "VALIDATION_LIMITS.leverage.max,50,number\n"
        "MESSAGES.stopLossError,Stop loss must be positive,string\n"
    )
