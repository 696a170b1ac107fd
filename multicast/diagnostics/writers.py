"""
Multicast Diagnostics — Log Writers
======================================
The Log Sink contract and its stdlib logging adapter.

A writer accepts severity-tagged text and returns nothing. Writers never
signal failure back to the caller; the logging module already routes
handler failures to Handler.handleError().
"""

from __future__ import annotations

import logging
from typing import Optional, Protocol, Union

from multicast.config import DiagnosticsConfig


class LogWriter(Protocol):
    """Severity-tagged text sink."""

    def debug(self, tag: str, message: str) -> None: ...

    def info(self, tag: str, message: str) -> None: ...

    def warn(self, tag: str, message: str) -> None: ...

    def error(self, tag: str, message: Union[str, BaseException]) -> None: ...


class Flushable(Protocol):
    """Writer that buffers output and can be asked to flush it."""

    def flush(self) -> None: ...


class LoggingLogWriter:
    """LogWriter that forwards to stdlib logging, one logger per tag."""

    def __init__(self, config: Optional[DiagnosticsConfig] = None):
        self._config = config or DiagnosticsConfig()

    def _logger(self, tag: str) -> logging.Logger:
        return logging.getLogger(self._config.logger_name(tag))

    def debug(self, tag: str, message: str) -> None:
        self._logger(tag).debug(message)

    def info(self, tag: str, message: str) -> None:
        self._logger(tag).info(message)

    def warn(self, tag: str, message: str) -> None:
        self._logger(tag).warning(message)

    def error(self, tag: str, message: Union[str, BaseException]) -> None:
        if isinstance(message, BaseException):
            text = str(message) or type(message).__name__
            self._logger(tag).error(text, exc_info=message)
        else:
            self._logger(tag).error(message)
