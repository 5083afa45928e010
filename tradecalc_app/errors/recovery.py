"""
Recovery strategy classifications for error handling.
"""

from typing import Optional


class GracefulDegradationError(Exception):
    """Mixin for errors that allow continued operation with reduced functionality."""

    def __init__(self, message: str, degraded_functionality: Optional[str] = None,
                 fallback_strategy: Optional[str] = None, **kwargs):
        super().__init__(message)
        self.degraded_functionality = degraded_functionality
        self.fallback_strategy = fallback_strategy
        self.allows_degradation = True


class ConfigFetchError(GracefulDegradationError):
    """Remote configuration could not be fetched or parsed."""

    def __init__(self, message: str, url: Optional[str] = None,
                 status_code: Optional[int] = None, **kwargs):
        kwargs.setdefault("degraded_functionality", "remote_config")
        kwargs.setdefault("fallback_strategy", "local_store_then_defaults")
        super().__init__(message, **kwargs)
        self.url = url
        self.status_code = status_code
