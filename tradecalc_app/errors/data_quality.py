"""
Data quality error classifications for calculator inputs and config rows.

These exceptions describe bad values that are handled gracefully: the
calculation is skipped or the offending row is dropped.
"""

from typing import Optional, Dict, Any


class DataQualityError(Exception):
    """Base class for data quality issues that can be handled gracefully."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = True


class InvalidInputError(DataQualityError):
    """A required numeric input is missing or non-positive."""

    def __init__(self, message: str, field: Optional[str] = None,
                 value: Optional[float] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.field = field
        self.value = value


class MalformedDataError(DataQualityError):
    """Data exists but is in incorrect format."""

    def __init__(self, message: str, raw_data: Optional[str] = None,
                 expected_format: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.raw_data = raw_data
        self.expected_format = expected_format


class UnknownFeeTierError(DataQualityError):
    """Fee tier identifier is not present in the fee schedule."""

    def __init__(self, message: str, fee_tier: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.fee_tier = fee_tier
