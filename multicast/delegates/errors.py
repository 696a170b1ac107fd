"""
Multicast Delegates — Errors
===============================
Error types for registration, capability queries and dynamic invocation.

"No listener satisfies the capability" is NOT an error; it is an
empty result. Re-adding, clearing and discarding are never errors either.
"""

from __future__ import annotations

from typing import Any


def _type_name(obj: Any) -> str:
    return getattr(obj, "__qualname__", None) or type(obj).__name__


class MulticastError(Exception):
    """Base error for multicast delegate operations."""
    pass


class InvalidCapabilityError(MulticastError, TypeError):
    """Capability passed to get()/invoke() is not a class."""

    def __init__(self, capability: Any):
        self.capability = capability
        super().__init__(
            f"Capability must be a class or Protocol, "
            f"got {type(capability).__name__} ({capability!r})."
        )


class UnreferenceableListenerError(MulticastError, TypeError):
    """Listener cannot be weakly referenced, so it cannot be held."""

    def __init__(self, listener: Any):
        self.listener_type = type(listener)
        super().__init__(
            f"Listener of type '{type(listener).__name__}' does not "
            f"support weak references and cannot be registered."
        )


class MethodNotFound(MulticastError):
    """No declared method matches the name, arity and argument types."""

    def __init__(
        self,
        capability: type,
        method_name: str,
        argument_types: tuple[type, ...],
    ):
        self.capability = capability
        self.method_name = method_name
        self.argument_types = argument_types
        rendered = ", ".join(t.__name__ for t in argument_types)
        super().__init__(
            f"No method '{method_name}({rendered})' declared on "
            f"'{_type_name(capability)}'."
        )


class InvocationFailure(MulticastError):
    """A resolved method raised while being invoked on a listener."""

    def __init__(
        self,
        capability: type,
        method_name: str,
        listener: Any,
        cause: BaseException,
    ):
        self.capability = capability
        self.method_name = method_name
        self.listener = listener
        self.cause = cause
        super().__init__(
            f"'{_type_name(capability)}.{method_name}' failed on "
            f"{type(listener).__name__}: "
            f"{type(cause).__name__}: {cause}"
        )
