"""
Logging configuration and utilities for the coinpurse engine.
"""
from .config import configure_logging, get_logger, get_settlement_logger, log_settlement

__all__ = ["configure_logging", "get_logger", "get_settlement_logger", "log_settlement"]
