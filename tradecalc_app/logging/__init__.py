"""
Logging configuration and utilities for the TradeCalc calculator.
"""
from .config import configure_logging, get_config_logger, get_logger, log_config_transition

__all__ = ["configure_logging", "get_logger", "get_config_logger", "log_config_transition"]
