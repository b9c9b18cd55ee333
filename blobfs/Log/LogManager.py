from __future__ import annotations

import logging
import logging.handlers
from typing import Any, Dict, Optional, Union, List
from pathlib import Path
from datetime import datetime
import json
import sys
from enum import Enum


class LogLevel(Enum):
    """Log levels enum."""
    DEBUG = 'debug'
    INFO = 'info'
    WARNING = 'warning'
    ERROR = 'error'
    CRITICAL = 'critical'


def parse_level(level: Union[str, int, LogLevel]) -> int:
    """Turn a configured level ('debug', 'INFO', LogLevel.ERROR, 10) into a logging level."""
    if isinstance(level, LogLevel):
        level = level.value
    if isinstance(level, str):
        value = logging.getLevelName(level.upper())
        if not isinstance(value, int):
            raise ValueError(f"Unknown log level '{level}'")
        return value
    return level


class LogChannel:
    """Laravel-style log channel wrapping a named stdlib logger."""

    def __init__(self, name: str, handler: logging.Handler, level: Union[str, int] = logging.INFO) -> None:
        self.name = name
        self.logger = logging.getLogger(name)
        self.logger.setLevel(parse_level(level))
        self.logger.addHandler(handler)
        self.logger.propagate = False

    def debug(self, message: str, context: Optional[Dict[str, Any]] = None) -> None:
        self._log(logging.DEBUG, message, context)

    def info(self, message: str, context: Optional[Dict[str, Any]] = None) -> None:
        self._log(logging.INFO, message, context)

    def warning(self, message: str, context: Optional[Dict[str, Any]] = None) -> None:
        self._log(logging.WARNING, message, context)

    def error(self, message: str, context: Optional[Dict[str, Any]] = None) -> None:
        self._log(logging.ERROR, message, context)

    def _log(self, level: int, message: str, context: Optional[Dict[str, Any]] = None) -> None:
        extra = {'context': context} if context else {}
        self.logger.log(level, message, extra=extra)


class LaravelFormatter(logging.Formatter):
    """Formats records as '[time] channel.LEVEL: message {context}'."""

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created).strftime('%Y-%m-%d %H:%M:%S')
        log_line = f"[{timestamp}] {record.name}.{record.levelname}: {record.getMessage()}"

        context = getattr(record, 'context', {})
        if context:
            log_line += f" {json.dumps(context, default=str)}"

        if record.exc_info:
            log_line += f"\n{self.formatException(record.exc_info)}"

        return log_line


class JsonFormatter(logging.Formatter):
    """JSON log formatter."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            'timestamp': datetime.fromtimestamp(record.created).isoformat(),
            'level': record.levelname,
            'channel': record.name,
            'message': record.getMessage(),
            'context': getattr(record, 'context', {}),
        }

        if record.exc_info:
            log_entry['exception'] = self.formatException(record.exc_info)

        return json.dumps(log_entry, default=str)


class LogManager:
    """
    Builds log channels from configuration.

    A channel named after a package ('blobfs') attaches its handlers to that
    package's logger, so every module logger below it is routed there.
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None) -> None:
        self._config = config or {}
        self._channels: Dict[str, LogChannel] = {}
        self._default_channel = self._config.get('default', 'blobfs')

    def channel(self, name: Optional[str] = None) -> LogChannel:
        """Get a log channel."""
        if name is None:
            name = self._default_channel

        if name not in self._channels:
            self._create_channel(name)

        return self._channels[name]

    def _create_channel(self, name: str) -> None:
        config = self._config.get('channels', {}).get(name, {})
        driver = config.get('driver', 'stderr')

        if driver == 'single':
            self._create_single_channel(name, config)
        elif driver == 'daily':
            self._create_daily_channel(name, config)
        elif driver == 'stack':
            self._create_stack_channel(name, config)
        elif driver == 'stderr':
            self._create_stderr_channel(name, config)
        else:
            raise ValueError(f"Log driver '{driver}' not supported")

    def _create_single_channel(self, name: str, config: Dict[str, Any]) -> None:
        path = config.get('path', f'storage/logs/{name}.log')
        Path(path).parent.mkdir(parents=True, exist_ok=True)

        handler = logging.FileHandler(path)
        handler.setFormatter(self._get_formatter(config))
        self._channels[name] = LogChannel(name, handler, config.get('level', logging.INFO))

    def _create_daily_channel(self, name: str, config: Dict[str, Any]) -> None:
        path = config.get('path', f'storage/logs/{name}.log')
        Path(path).parent.mkdir(parents=True, exist_ok=True)

        handler = logging.handlers.TimedRotatingFileHandler(
            path, when='midnight', interval=1, backupCount=config.get('days', 14)
        )
        handler.setFormatter(self._get_formatter(config))
        self._channels[name] = LogChannel(name, handler, config.get('level', logging.INFO))

    def _create_stack_channel(self, name: str, config: Dict[str, Any]) -> None:
        """Create a channel writing to the handlers of several other channels."""
        handlers: List[logging.Handler] = []
        for channel_name in config.get('channels', ['stderr']):
            if channel_name not in self._channels:
                self._create_channel(channel_name)
            handlers.extend(self._channels[channel_name].logger.handlers)

        channel = LogChannel(name, logging.NullHandler(), config.get('level', logging.INFO))
        for handler in handlers:
            channel.logger.addHandler(handler)
        self._channels[name] = channel

    def _create_stderr_channel(self, name: str, config: Dict[str, Any]) -> None:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(self._get_formatter(config))
        self._channels[name] = LogChannel(name, handler, config.get('level', logging.INFO))

    def _get_formatter(self, config: Dict[str, Any]) -> logging.Formatter:
        if config.get('formatter', 'laravel') == 'json':
            return JsonFormatter()
        return LaravelFormatter()

    def get_default_driver(self) -> str:
        return self._default_channel

    def set_default_driver(self, name: str) -> None:
        self._default_channel = name

    def get_channels(self) -> Dict[str, LogChannel]:
        return self._channels

    def forget_channel(self, name: str) -> None:
        """Remove a channel and detach its handlers."""
        channel = self._channels.pop(name, None)
        if channel is not None:
            for handler in list(channel.logger.handlers):
                channel.logger.removeHandler(handler)


# Global log manager instance
log_manager_instance: Optional[LogManager] = None


def get_log_manager() -> LogManager:
    """Get the global log manager instance, configured from config.logging."""
    global log_manager_instance
    if log_manager_instance is None:
        from config import logging as logging_config

        log_manager_instance = LogManager({
            'default': logging_config.default,
            'channels': logging_config.channels,
        })
    return log_manager_instance


def logger(channel: Optional[str] = None) -> LogChannel:
    """Get a log channel."""
    return get_log_manager().channel(channel)
