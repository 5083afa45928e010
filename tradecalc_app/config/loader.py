"""Configuration loader: defaults, local YAML overrides and sheet overrides."""

from dataclasses import dataclass, fields, is_dataclass
from pathlib import Path
from typing import Any, Optional

import yaml

from ..logging.config import get_config_logger
from .defaults import CalculatorConfig, get_default_config

logger = get_config_logger(__name__)


@dataclass(frozen=True)
class ConfigLoader:
    """Manages configuration merging on top of the built-in defaults."""

    config_dir: Path
    defaults: CalculatorConfig

    @classmethod
    def create(cls, config_dir: Optional[Path] = None) -> "ConfigLoader":
        """Create a ConfigLoader instance."""
        if config_dir is None:
            config_dir = Path(__file__).parent.parent.parent / "config"

        return cls(
            config_dir=Path(config_dir),
            defaults=get_default_config(),
        )

    def load_local_overrides(self) -> dict[str, Any]:
        """Load operator overrides from ``calculator.yaml`` if present."""
        overrides_file = self.config_dir / "calculator.yaml"

        if not overrides_file.exists():
            return {}

        with open(overrides_file) as f:
            overrides = yaml.safe_load(f) or {}

        if not isinstance(overrides, dict):
            logger.warning(
                "Ignoring calculator.yaml: top level is not a mapping",
                path=str(overrides_file),
            )
            return {}

        return overrides

    def base_config(self) -> CalculatorConfig:
        """Built-in defaults with the local YAML overrides applied."""
        return self.build_config(self.load_local_overrides())

    def merge_config(
        self,
        overrides: Optional[dict[str, Any]] = None,
        base: Optional[CalculatorConfig] = None,
    ) -> dict[str, Any]:
        """
        Merge overrides into a base configuration.

        Nested sections (fees, risk, limits and its sub-limits, messages)
        are merged field by field, never replaced wholesale.

        Args:
            overrides: Nested override dict (from the sheet or a saved copy)
            base: Configuration to merge into, defaults when omitted

        Returns:
            Merged configuration as a nested dict
        """
        config = self.to_dict(base if base is not None else self.defaults)

        if overrides:
            config = self._deep_merge(config, overrides)

        return config

    def build_config(
        self,
        overrides: Optional[dict[str, Any]] = None,
        base: Optional[CalculatorConfig] = None,
    ) -> CalculatorConfig:
        """Merge overrides and rebuild the frozen configuration dataclasses."""
        merged = self.merge_config(overrides, base)
        return self._from_dict(CalculatorConfig, merged)

    def to_dict(self, obj: Any) -> dict[str, Any]:
        """Convert nested dataclasses to dictionary."""
        if hasattr(obj, '__dataclass_fields__'):
            result = {}
            for field_name, _field in obj.__dataclass_fields__.items():
                value = getattr(obj, field_name)
                if hasattr(value, '__dataclass_fields__'):
                    result[field_name] = self.to_dict(value)
                else:
                    result[field_name] = value
            return result
        return obj  # type: ignore[no-any-return]

    def _from_dict(self, cls: type, data: dict[str, Any], path: str = "") -> Any:
        """Build a dataclass from a merged dict, ignoring unknown keys."""
        kwargs = {}
        known = {f.name: f for f in fields(cls)}

        for key in data:
            if key not in known:
                logger.debug("Ignoring unknown config key", key=f"{path}{key}")

        for name, field_def in known.items():
            if name not in data:
                continue
            value = data[name]
            if is_dataclass(field_def.type) and isinstance(value, dict):
                kwargs[name] = self._from_dict(field_def.type, value, f"{path}{name}.")
            else:
                kwargs[name] = value

        return cls(**kwargs)

    def _deep_merge(self, base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
        """Deep merge two dictionaries."""
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict):
                if isinstance(value, dict):
                    result[key] = self._deep_merge(result[key], value)
                else:
                    logger.warning(
                        "Ignoring scalar override for config section",
                        key=key,
                        value=repr(value),
                    )
            else:
                result[key] = value

        return result
