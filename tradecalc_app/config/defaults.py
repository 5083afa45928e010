"""Default configuration parameters for the trading calculator."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Union

from ..errors import UnknownFeeTierError


class FeeTier(str, Enum):
    """Fee tier identifiers, keyed the way the configuration sheet names them."""
    TAKER = "taker"                                  # Open taker - close taker
    OPEN_MAKER_CLOSE_TAKER = "openMakerCloseTaker"   # Open maker - close taker
    MAKER = "maker"                                  # Open maker - close maker


class PositionType(str, Enum):
    """Position direction."""
    LONG = "long"
    SHORT = "short"


@dataclass(frozen=True)
class FeeSchedule:
    """Per-side fee rates in percent (0.055 means 0.055%)."""
    # Bybit inverse perpetual & futures contract rates
    taker: float = 0.055
    open_maker_close_taker: float = 0.0375
    maker: float = 0.02

    def rate_for(self, fee_tier: Union[FeeTier, str]) -> float:
        """Look up the percent rate for a fee tier or its identifier."""
        try:
            tier = FeeTier(fee_tier)
        except ValueError:
            raise UnknownFeeTierError(
                f"Unknown fee tier: {fee_tier}", fee_tier=str(fee_tier)
            ) from None

        return {
            FeeTier.TAKER: self.taker,
            FeeTier.OPEN_MAKER_CLOSE_TAKER: self.open_maker_close_taker,
            FeeTier.MAKER: self.maker,
        }[tier]


@dataclass(frozen=True)
class RiskSettings:
    """Risk policy used to suggest take-profit and stop-loss levels."""
    max_loss_percentage: float = 0.03    # Fraction of capital, fees included
    risk_reward_ratio: float = 2.0       # Profit distance / loss distance


@dataclass(frozen=True)
class DefaultValues:
    """Seed values for a fresh calculation."""
    leverage: float = 4
    entry_price: float = 50000
    capital: float = 400
    position_type: str = PositionType.LONG.value
    fee_type: str = FeeTier.OPEN_MAKER_CLOSE_TAKER.value


@dataclass(frozen=True)
class LeverageLimits:
    min: float = 1
    max: float = 100


@dataclass(frozen=True)
class PriceLimits:
    min: float = 0.000001


@dataclass(frozen=True)
class CapitalLimits:
    min: float = 100


@dataclass(frozen=True)
class ValidationLimits:
    """Input validation limits."""
    leverage: LeverageLimits = field(default_factory=LeverageLimits)
    price: PriceLimits = field(default_factory=PriceLimits)
    capital: CapitalLimits = field(default_factory=CapitalLimits)


@dataclass(frozen=True)
class Messages:
    """User-facing validation messages."""
    entry_price_error: str = "Giá vào lệnh phải lớn hơn 0."
    take_profit_error: str = "Take Profit phải lớn hơn 0."
    stop_loss_error: str = "Stop Loss phải lớn hơn 0."


@dataclass(frozen=True)
class SourceParams:
    """Where configuration comes from and how long copies stay valid."""
    sheet_url: str = (
        "https://docs.google.com/spreadsheets/d/"
        "14wIYWZ_QSJN0bFQTeQxD8IYSN4J3UZ9tMcBUO-Cio3w/export?format=csv&gid=0"
    )
    timeout_seconds: int = 10
    use_local_storage: bool = True
    local_store_path: str = "~/.tradecalc/config.json"
    local_store_max_age_seconds: int = 24 * 60 * 60
    use_cache: bool = False              # Always fetch fresh config by default
    cache_duration_seconds: int = 5 * 60


@dataclass(frozen=True)
class CalculatorConfig:
    """Complete calculator configuration."""
    fees: FeeSchedule
    defaults: DefaultValues
    risk: RiskSettings
    limits: ValidationLimits
    messages: Messages
    source: SourceParams


def get_default_config() -> CalculatorConfig:
    """Get the built-in default configuration instance."""
    return CalculatorConfig(
        fees=FeeSchedule(),
        defaults=DefaultValues(),
        risk=RiskSettings(),
        limits=ValidationLimits(),
        messages=Messages(),
        source=SourceParams(),
    )
