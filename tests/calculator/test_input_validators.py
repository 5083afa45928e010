"""Tests for field-exit input checks"""

from dataclasses import replace

from tradecalc_app.calculator.validators import (
    check_capital,
    check_positive_fields,
    clamp_leverage,
)
from tradecalc_app.config.defaults import (
    LeverageLimits,
    Messages,
    ValidationLimits,
    get_default_config,
)


class TestClampLeverage:
    """Test leverage clamping"""

    def test_within_range(self):
        assert clamp_leverage(4, ValidationLimits()) == 4

    def test_below_min(self):
        assert clamp_leverage(0, ValidationLimits()) == 1

    def test_above_max(self):
        assert clamp_leverage(250, ValidationLimits()) == 100

    def test_custom_limits(self):
        limits = ValidationLimits(leverage=LeverageLimits(min=2, max=20))
        assert clamp_leverage(1, limits) == 2
        assert clamp_leverage(25, limits) == 20


class TestCheckPositiveFields:
    """Test positive price checks with configured messages"""

    def test_valid_inputs(self, long_inputs):
        assert check_positive_fields(long_inputs, Messages()) == []

    def test_reports_each_bad_field(self, long_inputs):
        inputs = replace(long_inputs, entry_price=0, stop_loss=-1)
        errors = check_positive_fields(inputs, Messages())

        assert [e.field for e in errors] == ["entry_price", "stop_loss"]
        assert errors[0].message == "Giá vào lệnh phải lớn hơn 0."
        assert errors[1].message == "Stop Loss phải lớn hơn 0."
        assert errors[1].value == -1

    def test_custom_message(self, long_inputs):
        messages = Messages(take_profit_error="Take profit must be positive")
        inputs = replace(long_inputs, take_profit=0)
        errors = check_positive_fields(inputs, messages)

        assert len(errors) == 1
        assert errors[0].message == "Take profit must be positive"


class TestCheckCapital:
    """Test minimum capital check"""

    def test_above_minimum(self):
        assert check_capital(400, get_default_config().limits) == []

    def test_below_minimum(self):
        errors = check_capital(50, get_default_config().limits)
        assert len(errors) == 1
        assert errors[0].field == "capital"
        assert errors[0].message == "Must be at least 100"
