"""
Error classification for the calculator and its configuration layer.

Every failure in this package is recoverable: invalid inputs produce an
unavailable result, and configuration failures fall through to the next
configuration tier.
"""

from .data_quality import (
    DataQualityError,
    InvalidInputError,
    MalformedDataError,
    UnknownFeeTierError,
)
from .system_failures import (
    SystemFailureError,
    PersistenceError,
)
from .recovery import (
    GracefulDegradationError,
    ConfigFetchError,
)

__all__ = [
    # Data Quality Errors
    "DataQualityError",
    "InvalidInputError",
    "MalformedDataError",
    "UnknownFeeTierError",
    # System Failures
    "SystemFailureError",
    "PersistenceError",
    # Recovery Categories
    "GracefulDegradationError",
    "ConfigFetchError",
]
