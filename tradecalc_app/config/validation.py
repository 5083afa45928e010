"""Configuration validation utilities."""

import math
from dataclasses import dataclass
from typing import Any

from .defaults import FeeTier, PositionType


@dataclass(frozen=True)
class ValidationError:
    """Represents a configuration or input validation error."""
    field: str
    message: str
    value: Any


def _is_number(value: Any) -> bool:
    return (
        isinstance(value, (int, float))
        and not isinstance(value, bool)
        and math.isfinite(value)
    )


class ConfigValidator:
    """Validates configuration parameters."""

    @staticmethod
    def validate_fees(params: dict[str, Any]) -> list[ValidationError]:
        """Validate fee rates: every tier rate must be a non-negative number."""
        errors = []

        for tier in ("taker", "open_maker_close_taker", "maker"):
            if tier in params:
                value = params[tier]
                if not _is_number(value) or value < 0:
                    errors.append(ValidationError(
                        field=f"fees.{tier}",
                        message="Must be a non-negative number",
                        value=value
                    ))

        return errors

    @staticmethod
    def validate_risk(params: dict[str, Any]) -> list[ValidationError]:
        """Validate risk policy parameters."""
        errors = []

        if "max_loss_percentage" in params:
            value = params["max_loss_percentage"]
            if not _is_number(value) or value <= 0 or value > 1:
                errors.append(ValidationError(
                    field="risk.max_loss_percentage",
                    message="Must be a positive number between 0 and 1",
                    value=value
                ))

        if "risk_reward_ratio" in params:
            value = params["risk_reward_ratio"]
            if not _is_number(value) or value <= 0:
                errors.append(ValidationError(
                    field="risk.risk_reward_ratio",
                    message="Must be a positive number",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_limits(params: dict[str, Any]) -> list[ValidationError]:
        """Validate input validation limits."""
        errors = []

        leverage = params.get("leverage", {})
        lev_min = leverage.get("min")
        lev_max = leverage.get("max")

        if lev_min is not None and (not _is_number(lev_min) or lev_min < 1):
            errors.append(ValidationError(
                field="limits.leverage.min",
                message="Must be a number >= 1",
                value=lev_min
            ))
        if lev_max is not None and not _is_number(lev_max):
            errors.append(ValidationError(
                field="limits.leverage.max",
                message="Must be a number",
                value=lev_max
            ))
        elif _is_number(lev_min) and _is_number(lev_max) and lev_max < lev_min:
            errors.append(ValidationError(
                field="limits.leverage.max",
                message="Must be greater than or equal to limits.leverage.min",
                value=lev_max
            ))

        price_min = params.get("price", {}).get("min")
        if price_min is not None and (not _is_number(price_min) or price_min <= 0):
            errors.append(ValidationError(
                field="limits.price.min",
                message="Must be a positive number",
                value=price_min
            ))

        capital_min = params.get("capital", {}).get("min")
        if capital_min is not None and (not _is_number(capital_min) or capital_min <= 0):
            errors.append(ValidationError(
                field="limits.capital.min",
                message="Must be a positive number",
                value=capital_min
            ))

        return errors

    @staticmethod
    def validate_defaults(params: dict[str, Any]) -> list[ValidationError]:
        """Validate seed values: positive numbers and known enum identifiers."""
        errors = []

        for name in ("leverage", "entry_price", "capital"):
            if name in params:
                value = params[name]
                if not _is_number(value) or value <= 0:
                    errors.append(ValidationError(
                        field=f"defaults.{name}",
                        message="Must be a positive number",
                        value=value
                    ))

        if "position_type" in params:
            value = params["position_type"]
            if value not in [p.value for p in PositionType]:
                errors.append(ValidationError(
                    field="defaults.position_type",
                    message="Must be one of: long, short",
                    value=value
                ))

        if "fee_type" in params:
            value = params["fee_type"]
            if value not in [t.value for t in FeeTier]:
                errors.append(ValidationError(
                    field="defaults.fee_type",
                    message="Must be a known fee tier",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_messages(params: dict[str, Any]) -> list[ValidationError]:
        """Validate user-facing messages are strings."""
        return [
            ValidationError(field=f"messages.{name}", message="Must be a string", value=value)
            for name, value in params.items()
            if not isinstance(value, str)
        ]

    @staticmethod
    def validate_source(params: dict[str, Any]) -> list[ValidationError]:
        """Validate where configuration comes from and how long copies stay valid."""
        errors = []

        for name in ("sheet_url", "local_store_path"):
            if name in params and not isinstance(params[name], str):
                errors.append(ValidationError(
                    field=f"source.{name}",
                    message="Must be a string",
                    value=params[name]
                ))

        for name in ("use_local_storage", "use_cache"):
            if name in params and not isinstance(params[name], bool):
                errors.append(ValidationError(
                    field=f"source.{name}",
                    message="Must be a boolean",
                    value=params[name]
                ))

        for name in ("timeout_seconds", "local_store_max_age_seconds"):
            if name in params:
                value = params[name]
                if not _is_number(value) or value <= 0:
                    errors.append(ValidationError(
                        field=f"source.{name}",
                        message="Must be a positive number",
                        value=value
                    ))

        if "cache_duration_seconds" in params:
            value = params["cache_duration_seconds"]
            if not _is_number(value) or value < 0:
                errors.append(ValidationError(
                    field="source.cache_duration_seconds",
                    message="Must be a non-negative number",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_config(config: dict[str, Any]) -> list[ValidationError]:
        """Validate complete configuration."""
        errors = []

        if "fees" in config:
            errors.extend(ConfigValidator.validate_fees(config["fees"]))

        if "risk" in config:
            errors.extend(ConfigValidator.validate_risk(config["risk"]))

        if "limits" in config:
            errors.extend(ConfigValidator.validate_limits(config["limits"]))

        if "defaults" in config:
            errors.extend(ConfigValidator.validate_defaults(config["defaults"]))

        if "messages" in config:
            errors.extend(ConfigValidator.validate_messages(config["messages"]))

        if "source" in config:
            errors.extend(ConfigValidator.validate_source(config["source"]))

        return errors
