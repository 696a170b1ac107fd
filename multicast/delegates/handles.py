"""
Multicast Delegates — Listener Handles
=========================================
A handle is the registry's non-owning reference to one listener.

Rules:
- A handle never keeps its listener alive
- Identity is compared with `is`, never with `==`
- Bound methods are held through WeakMethod (they live as long as
  their receiver, not as long as the temporary method object)
- invalidate() is the owner-side liveness flag: once flipped the
  handle is dead even if the listener is still reachable
"""

from __future__ import annotations

import inspect
import weakref
from typing import Any, Optional

from multicast.delegates.errors import UnreferenceableListenerError


class ListenerHandle:
    """Weak reference to a registered listener plus liveness state."""

    __slots__ = ("_ref", "_is_method", "_invalidated", "__weakref__")

    def __init__(self, listener: Any):
        self._is_method = inspect.ismethod(listener)
        self._invalidated = False
        try:
            if self._is_method:
                self._ref = weakref.WeakMethod(listener)
            else:
                self._ref = weakref.ref(listener)
        except TypeError as exc:
            raise UnreferenceableListenerError(listener) from exc

    def resolve(self) -> Optional[Any]:
        """Return the listener, or None if reclaimed or invalidated."""
        if self._invalidated:
            return None
        return self._ref()

    @property
    def is_alive(self) -> bool:
        return self.resolve() is not None

    def refers_to(self, obj: Any) -> bool:
        """True if this live handle references exactly `obj`."""
        target = self.resolve()
        if target is None:
            return False
        if self._is_method:
            return (
                inspect.ismethod(obj)
                and obj.__self__ is target.__self__
                and obj.__func__ is target.__func__
            )
        return target is obj

    def invalidate(self) -> None:
        self._invalidated = True

    def __repr__(self) -> str:
        target = self.resolve()
        if target is None:
            return "<ListenerHandle dead>"
        return f"<ListenerHandle to {type(target).__name__}>"
