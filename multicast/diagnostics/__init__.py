"""
Multicast Diagnostics — Public API
=====================================
Log Sink contract, logging adapter and fan-out facade.
"""

from multicast.diagnostics.log import Log
from multicast.diagnostics.writers import Flushable, LoggingLogWriter, LogWriter

__all__ = [
    "Log",
    "LogWriter",
    "Flushable",
    "LoggingLogWriter",
]
