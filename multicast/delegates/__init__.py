"""
Multicast Delegates — Public API
===================================
Register listeners once. Ask for them by capability later.
"""

from multicast.delegates.capabilities import satisfies
from multicast.delegates.delegate import MulticastDelegate
from multicast.delegates.errors import (
    InvalidCapabilityError,
    InvocationFailure,
    MethodNotFound,
    MulticastError,
    UnreferenceableListenerError,
)
from multicast.delegates.handles import ListenerHandle
from multicast.delegates.resolver import MethodResolver, ResolvedMethod

__all__ = [
    "MulticastDelegate",
    "ListenerHandle",
    "MethodResolver",
    "ResolvedMethod",
    "satisfies",
    "MulticastError",
    "MethodNotFound",
    "InvocationFailure",
    "InvalidCapabilityError",
    "UnreferenceableListenerError",
]
