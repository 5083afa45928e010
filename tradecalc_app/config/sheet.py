"""
Parser for the tabular configuration sheet.

The sheet is exported as CSV with a header row followed by ``key,value,type``
rows. Keys are dotted paths (``fees.taker``, ``limits.leverage.max``); the
section and field names used by the web calculator sheet
(``BYBIT_FEES.openMakerCloseTaker``, ``RISK_SETTINGS.maxLossPercentage``) are
accepted and mapped onto the Python names.
"""

import csv
import io
import json
import math
import re
from typing import Any

from ..errors import MalformedDataError
from ..logging.config import get_config_logger

logger = get_config_logger(__name__)

SECTION_ALIASES = {
    "BYBIT_FEES": "fees",
    "FEES": "fees",
    "DEFAULT_VALUES": "defaults",
    "RISK_SETTINGS": "risk",
    "VALIDATION_LIMITS": "limits",
    "MESSAGES": "messages",
    "GOOGLE_SHEETS_CONFIG": "source",
}

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")


def to_snake_case(name: str) -> str:
    """Convert a camelCase identifier to snake_case."""
    return _CAMEL_BOUNDARY.sub("_", name).lower()


def normalize_key(key: str) -> list[str]:
    """
    Split a dotted sheet key into Python attribute names.

    Args:
        key: Dotted key path as written in the sheet

    Returns:
        List of path segments, section alias applied and camelCase converted
    """
    parts = [part.strip() for part in key.split(".") if part.strip()]
    if not parts:
        return []

    head = SECTION_ALIASES.get(parts[0], parts[0])
    return [to_snake_case(head)] + [to_snake_case(part) for part in parts[1:]]


def parse_value(value: str, value_type: str) -> Any:
    """
    Parse a raw cell according to its declared type.

    Raises:
        MalformedDataError: If the value cannot be parsed as the declared type
    """
    value_type = (value_type or "").strip().lower()

    if value_type == "number":
        try:
            number = float(value)
        except ValueError:
            number = math.nan
        if not math.isfinite(number):
            raise MalformedDataError(
                f"Invalid number: {value}", raw_data=value, expected_format="number"
            )
        return number

    if value_type == "boolean":
        return value.strip().lower() == "true"

    if value_type == "object":
        try:
            return json.loads(value)
        except json.JSONDecodeError as e:
            raise MalformedDataError(
                f"Invalid JSON object: {e}", raw_data=value, expected_format="json"
            ) from None

    return value


def snake_case_keys(value: Any) -> Any:
    """Recursively convert dict keys of a JSON object cell to snake_case."""
    if isinstance(value, dict):
        return {to_snake_case(str(k)): snake_case_keys(v) for k, v in value.items()}
    return value


def set_nested(target: dict[str, Any], path: list[str], value: Any) -> None:
    """Set a value in a nested dict, creating intermediate dicts as needed."""
    current = target
    for key in path[:-1]:
        existing = current.get(key)
        if not isinstance(existing, dict):
            existing = {}
            current[key] = existing
        current = existing

    current[path[-1]] = value


def parse_sheet_csv(csv_text: str) -> dict[str, Any]:
    """
    Parse the CSV export of the configuration sheet into a nested dict.

    The first row is a header and is skipped. Rows without a key or value,
    and rows whose value does not parse as the declared type, are skipped.

    Args:
        csv_text: Raw CSV document

    Returns:
        Nested override dict keyed by Python config names
    """
    overrides: dict[str, Any] = {}
    reader = csv.reader(io.StringIO(csv_text.strip()))

    for line_no, row in enumerate(reader, start=1):
        if line_no == 1:
            continue

        cells = [cell.strip() for cell in row] + ["", "", ""]
        key, value, value_type = cells[0], cells[1], cells[2]

        if not key or not value:
            continue

        path = normalize_key(key)
        if not path:
            continue

        try:
            parsed = parse_value(value, value_type)
        except MalformedDataError as e:
            logger.warning(
                "Skipping malformed config row",
                line=line_no,
                key=key,
                error=str(e),
            )
            continue

        set_nested(overrides, path, snake_case_keys(parsed))

    return overrides
