"""
Multicast — Public API
=========================
Weakly-held, capability-filtered listener registry with fan-out
invocation by method name.
"""

from multicast.config import DelegateConfig, DiagnosticsConfig
from multicast.delegates import (
    InvalidCapabilityError,
    InvocationFailure,
    MethodNotFound,
    MulticastDelegate,
    MulticastError,
    UnreferenceableListenerError,
)
from multicast.diagnostics import Log, LoggingLogWriter, LogWriter

__all__ = [
    "MulticastDelegate",
    "DelegateConfig",
    "DiagnosticsConfig",
    "MulticastError",
    "MethodNotFound",
    "InvocationFailure",
    "InvalidCapabilityError",
    "UnreferenceableListenerError",
    "Log",
    "LogWriter",
    "LoggingLogWriter",
]
