"""Unit tests for the calculator engine."""

from dataclasses import replace

import pytest

from tradecalc_app.config.defaults import FeeTier, PositionType
from tradecalc_app.config.loader import ConfigLoader
from tradecalc_app.config.provider import ConfigProvider, ConfigSource
from tradecalc_app.engine import TradeCalculatorEngine
from tradecalc_app.errors import ConfigFetchError
from tradecalc_app.persistence.config_store import LocalConfigStore


def _offline(url, timeout):
    raise ConfigFetchError("offline", url=url)


@pytest.fixture
def provider(tmp_path, fake_clock):
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    (config_dir / "calculator.yaml").write_text("risk:\n  max_loss_percentage: 0.06\n")
    store = LocalConfigStore(str(tmp_path / "config.json"), clock=fake_clock)
    return ConfigProvider(
        loader=ConfigLoader.create(config_dir),
        store=store,
        fetcher=_offline,
        clock=fake_clock,
    )


@pytest.fixture
def engine(provider):
    return TradeCalculatorEngine(provider)


class TestTradeCalculatorEngine:
    """Test suite for the engine coordinator."""

    def test_engine_uses_provider_snapshot(self, engine, provider) -> None:
        assert engine.snapshot is provider.snapshot
        assert engine.snapshot.source is ConfigSource.DEFAULTS

    def test_suggest_targets(self, engine) -> None:
        targets = engine.suggest_targets(50000, 400, 4, FeeTier.OPEN_MAKER_CLOSE_TAKER)
        assert targets.stop_loss == 49287.5
        assert targets.take_profit == 51425.0

    def test_suggest_targets_unknown_tier(self, engine) -> None:
        targets = engine.suggest_targets(50000, 400, 4, "vip")
        assert targets.take_profit == 50000
        assert targets.stop_loss == 50000

    def test_calculate(self, engine, long_inputs) -> None:
        result = engine.calculate(long_inputs)

        assert result.available
        assert result.total_fees == 1.2
        assert result.profit_pnl == 44.4
        assert result.loss_pnl == -24.0

    def test_calculate_unknown_tier(self, engine, long_inputs) -> None:
        inputs = replace(long_inputs, fee_tier="vip")
        assert not engine.calculate(inputs).available

    def test_calculate_invalid_inputs(self, engine, long_inputs) -> None:
        inputs = replace(long_inputs, capital=0)
        result = engine.calculate(inputs)

        assert not result.available
        assert result.profit_pnl is None

    def test_calculation_follows_config_refresh(self, engine, provider, long_inputs) -> None:
        provider.save(provider.loader.build_config(
            {"fees": {"open_maker_close_taker": 0.05}},
            base=provider.config,
        ))

        result = engine.calculate(long_inputs)
        assert result.entry_fee == 0.8
        assert result.total_fees == 1.6

    def test_normalize_target_input(self, engine) -> None:
        assert engine.normalize_target_input("50000+1500", 49000.0) == 51500
        assert engine.normalize_target_input("", 49000.0) == 49000.0

    def test_clamp_leverage(self, engine) -> None:
        assert engine.clamp_leverage(0) == 1
        assert engine.clamp_leverage(250) == 100
        assert engine.clamp_leverage(10) == 10

    def test_validate_inputs(self, engine, long_inputs) -> None:
        assert engine.validate_inputs(long_inputs) == []

        inputs = replace(long_inputs, stop_loss=-1)
        problems = engine.validate_inputs(inputs)
        assert [p.field for p in problems] == ["stop_loss"]
        assert problems[0].message == engine.snapshot.config.messages.stop_loss_error

    def test_default_inputs(self, engine) -> None:
        inputs = engine.default_inputs()

        assert inputs.entry_price == 50000
        assert inputs.capital == 400
        assert inputs.leverage == 4
        assert inputs.position_type is PositionType.LONG
        assert inputs.fee_tier is FeeTier.OPEN_MAKER_CLOSE_TAKER
        assert inputs.stop_loss == 49287.5
        assert inputs.take_profit == 51425.0
