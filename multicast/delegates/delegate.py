"""
Multicast Delegates — MulticastDelegate
==========================================
Attach any number of listener objects once; query them later by
capability, or invoke a named method on every listener that fits.

Benefits:
- No null checks. A query nobody satisfies returns an empty list.
- No explicit subscribe per event. Listeners that fit are found at
  query time from their type or shape.
- Many listeners can receive the same call.
- Listeners only need to be added once.

Rules:
- Listeners are held by weak reference. A reclaimed listener silently
  disappears from every later result.
- Deduplication is by identity, never by equality.
- Dead handles are purged lazily, only during get()/invoke().
- Result order is NOT guaranteed.
- Not thread-safe. Callers sharing a delegate across threads must
  supply their own lock.

Usage:
    class OnPictureTaken(Protocol):
        def on_picture_taken(self, picture: bytes) -> None: ...

    class Camera:
        def __init__(self):
            self.listeners = MulticastDelegate()

        # Fire and forget.
        def take_picture_lazily(self):
            picture = self._capture()
            self.listeners.invoke(OnPictureTaken, "on_picture_taken", picture)

        # Full control over how each listener is called.
        def take_picture(self):
            picture = self._capture()
            for listener in self.listeners.get(OnPictureTaken):
                listener.on_picture_taken(picture)
"""

from __future__ import annotations

import logging
from typing import Any, Optional, TypeVar

from multicast.config import DelegateConfig
from multicast.delegates.capabilities import check_capability, satisfies
from multicast.delegates.errors import InvocationFailure
from multicast.delegates.handles import ListenerHandle
from multicast.delegates.resolver import MethodResolver

logger = logging.getLogger("multicast.delegates")

T = TypeVar("T")


class MulticastDelegate:
    """
    Weakly-held, capability-filtered set of listeners.
    """

    def __init__(self, config: Optional[DelegateConfig] = None):
        self._config = config or DelegateConfig()
        self._handles: list[ListenerHandle] = []
        self._resolver = MethodResolver(
            numeric_tower=self._config.numeric_tower,
            cache=self._config.cache_resolutions,
        )

    @property
    def config(self) -> DelegateConfig:
        return self._config

    # ══════════════════════════════════════════════════════════
    # REGISTRY
    # ══════════════════════════════════════════════════════════

    def add(self, listener: Any) -> None:
        """
        Add a listener. Adding the same object again is a no-op.

        Raises:
            UnreferenceableListenerError: If the listener does not
                support weak references.
        """
        for handle in self._handles:
            if handle.refers_to(listener):
                return

        self._handles.append(ListenerHandle(listener))
        logger.debug(
            f"Listener added: {type(listener).__name__} "
            f"({len(self._handles)} handles)"
        )

    def discard(self, listener: Any) -> None:
        """
        Invalidate the handle for `listener`, if registered.
        The handle is purged by the next get()/invoke().
        """
        for handle in self._handles:
            if handle.refers_to(listener):
                handle.invalidate()
                return

    def clear(self) -> None:
        """Remove every listener, live or not."""
        self._handles.clear()

    def __len__(self) -> int:
        """Stored handles, including dead ones not yet compacted."""
        return len(self._handles)

    def __contains__(self, listener: Any) -> bool:
        return any(handle.refers_to(listener) for handle in self._handles)

    # ══════════════════════════════════════════════════════════
    # CAPABILITY QUERY
    # ══════════════════════════════════════════════════════════

    def get(self, capability: type[T]) -> list[T]:
        """
        Return every live listener that satisfies `capability`.

        The result is a new list; mutating it never touches the registry.
        Dead handles seen during the scan are compacted afterwards.

        Raises:
            InvalidCapabilityError: If `capability` is not a class.
        """
        check_capability(capability)

        matches: list[T] = []
        dead: list[ListenerHandle] = []

        for handle in self._handles:
            listener = handle.resolve()
            if listener is None:
                dead.append(handle)
            elif satisfies(listener, capability):
                matches.append(listener)

        self._compact(dead)
        return matches

    def _compact(self, dead: list[ListenerHandle]) -> None:
        if not dead:
            return
        purged = set(dead)
        self._handles[:] = [h for h in self._handles if h not in purged]
        logger.debug(
            f"Compacted {len(purged)} dead handle(s), "
            f"{len(self._handles)} remaining"
        )

    # ══════════════════════════════════════════════════════════
    # DYNAMIC INVOKER
    # ══════════════════════════════════════════════════════════

    def invoke(self, capability: type, method_name: str, *args: Any) -> int:
        """
        Call `method_name` with `args` on every listener satisfying
        `capability`. Returns the number of listeners called.

        The method is resolved once on the capability, first declared
        match wins. The first listener that raises aborts the broadcast;
        listeners already called are not rolled back.

        Raises:
            InvalidCapabilityError: If `capability` is not a class.
            MethodNotFound: No declared method fits. Nothing was called.
            InvocationFailure: A listener raised. Wraps the original.
        """
        listeners = self.get(capability)
        method = self._resolver.resolve(capability, method_name, args)

        for listener in listeners:
            try:
                method.call(listener, args)
            except Exception as exc:
                logger.error(
                    f"Invocation failed: {capability.__qualname__}."
                    f"{method_name} on {type(listener).__name__}: {exc}",
                    exc_info=True,
                )
                raise InvocationFailure(
                    capability, method_name, listener, exc
                ) from exc

        return len(listeners)
