"""
Multicast Diagnostics — Log Facade
=====================================
Fans each log call out to every registered LogWriter.

Writers live in a MulticastDelegate, so they are held weakly: keep a
reference to any writer you add. The facade owns one LoggingLogWriter
of its own unless built with `default_writer=False`.

A writer that raises is reported on the "multicast.diagnostics" logger
and skipped (DiagnosticsConfig.swallow_errors), so one broken sink can
never break the caller or starve the other sinks.
"""

from __future__ import annotations

import logging
from typing import Optional, Union

from multicast.config import DiagnosticsConfig
from multicast.delegates import MulticastDelegate
from multicast.diagnostics.writers import Flushable, LoggingLogWriter, LogWriter

logger = logging.getLogger("multicast.diagnostics")


class Log:
    """
    Logger facade over any number of LogWriters.

    Usage:
        log = Log()
        log.info("camera", "Picture taken")
        log.error("camera", exc)

        memory = MemoryWriter()
        log.add_writer(memory)   # keep `memory` referenced
    """

    def __init__(
        self,
        config: Optional[DiagnosticsConfig] = None,
        default_writer: bool = True,
    ):
        self._config = config or DiagnosticsConfig()
        self._writers = MulticastDelegate()
        self._default_writer: Optional[LoggingLogWriter] = None
        if default_writer:
            self._default_writer = LoggingLogWriter(self._config)
            self._writers.add(self._default_writer)

    def add_writer(self, writer: LogWriter) -> None:
        self._writers.add(writer)

    def remove_writer(self, writer: LogWriter) -> None:
        self._writers.discard(writer)

    def clear_writers(self) -> None:
        """Detach every writer, including the default one."""
        self._writers.clear()

    def writers(self) -> list[LogWriter]:
        return self._writers.get(LogWriter)

    # ── Severity calls ────────────────────────────────────────

    def debug(self, tag: str, message: str) -> None:
        self._emit("debug", tag, message)

    def info(self, tag: str, message: str) -> None:
        self._emit("info", tag, message)

    def warn(self, tag: str, message: str) -> None:
        self._emit("warn", tag, message)

    def error(self, tag: str, message: Union[str, BaseException]) -> None:
        self._emit("error", tag, message)

    def flush(self) -> int:
        """Flush every writer that buffers. Returns how many were flushed."""
        flushed = 0
        for writer in self._writers.get(Flushable):
            if self._deliver(writer, "flush"):
                flushed += 1
        return flushed

    # ── Delivery ──────────────────────────────────────────────

    def _emit(self, level: str, tag: str, message) -> None:
        for writer in self._writers.get(LogWriter):
            self._deliver(writer, level, tag, message)

    def _deliver(self, writer, method_name: str, *args) -> bool:
        try:
            getattr(writer, method_name)(*args)
        except Exception:
            if not self._config.swallow_errors:
                raise
            logger.warning(
                f"Log writer {type(writer).__name__}.{method_name} failed",
                exc_info=True,
            )
            return False
        return True
