"""
Multicast Adapters — Django Signal Bridge
============================================
Thin glue that turns a django.dispatch.Signal into a MulticastDelegate
fan-out: every send() becomes one invoke().

The bridge is connected weakly (through its own bound method), so the
signal never keeps the bridge alive. Keep a reference to it for as long
as the bridge should stay connected.

Usage:
    picture_taken = Signal()
    bridge = SignalBridge(
        picture_taken, listeners, OnPictureTaken, "on_picture_taken",
        arguments=("picture",),
    )
    picture_taken.send(sender=Camera, picture=data)
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Optional

from django.dispatch import Signal

from multicast.delegates import MulticastDelegate, MulticastError

logger = logging.getLogger("multicast.adapters")


class SignalArgumentMissing(MulticastError):
    """A bridged signal was sent without an argument the bridge forwards."""

    def __init__(self, method_name: str, argument: str):
        self.method_name = method_name
        self.argument = argument
        super().__init__(
            f"Signal sent without '{argument}', required to "
            f"invoke '{method_name}'."
        )


class SignalBridge:
    """Forwards a Django signal to every listener that fits a capability."""

    def __init__(
        self,
        signal: Signal,
        delegate: MulticastDelegate,
        capability: type,
        method_name: str,
        arguments: Iterable[str] = (),
        sender: Optional[Any] = None,
    ):
        self._signal = signal
        self._delegate = delegate
        self._capability = capability
        self._method_name = method_name
        self._arguments = tuple(arguments)
        self._sender = sender
        self._dispatch_uid = (
            f"multicast.bridge.{capability.__qualname__}."
            f"{method_name}.{id(self)}"
        )
        signal.connect(
            self._receive,
            sender=sender,
            weak=True,
            dispatch_uid=self._dispatch_uid,
        )
        logger.debug(
            f"Bridge connected: {capability.__qualname__}.{method_name} "
            f"<- {self._arguments}"
        )

    def _receive(self, sender: Any, **kwargs: Any) -> int:
        args = []
        for name in self._arguments:
            if name not in kwargs:
                raise SignalArgumentMissing(self._method_name, name)
            args.append(kwargs[name])
        return self._delegate.invoke(
            self._capability, self._method_name, *args
        )

    def disconnect(self) -> bool:
        """Detach from the signal. Returns False if already detached."""
        return self._signal.disconnect(
            sender=self._sender, dispatch_uid=self._dispatch_uid
        )
