from __future__ import annotations

from .LogManager import (
    LogManager,
    LogChannel,
    LogLevel,
    LaravelFormatter,
    JsonFormatter,
    get_log_manager,
    logger,
    parse_level,
)

__all__ = [
    'LogManager',
    'LogChannel',
    'LogLevel',
    'LaravelFormatter',
    'JsonFormatter',
    'get_log_manager',
    'logger',
    'parse_level',
]
