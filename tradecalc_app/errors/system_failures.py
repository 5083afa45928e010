"""
System failure error classifications.

Raised for file system problems around the local configuration store.
Callers log them and carry on with the configuration already resident.
"""

from typing import Optional, Dict, Any


class SystemFailureError(Exception):
    """Base class for system-level failures."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = False


class PersistenceError(SystemFailureError):
    """File system persistence failures."""

    def __init__(self, message: str, operation: Optional[str] = None,
                 target: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.operation = operation
        self.target = target
