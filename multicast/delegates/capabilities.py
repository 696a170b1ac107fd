"""
Multicast Delegates — Capability Checks
==========================================
Decides, at query time, whether a listener satisfies a capability.

A capability is any class:
- typing.Protocol classes are checked structurally: every protocol
  member must exist on the listener, and members declared as methods
  must be callable. Members are looked up statically, so a listener's
  own code never runs during a query. @runtime_checkable is not required.
- Every other class (plain class, ABC) is checked with isinstance().
"""

from __future__ import annotations

import inspect
import typing
from functools import lru_cache
from typing import Any

from multicast.delegates.errors import InvalidCapabilityError

_PROTOCOL_BASES = (object, typing.Protocol, typing.Generic)

# Attributes typing itself places on every Protocol class body.
_NON_MEMBERS = frozenset({
    "__abstractmethods__",
    "__annotations__",
    "__annotate__",
    "__annotate_func__",
    "__annotations_cache__",
    "__callable_proto_members_only__",
    "__class_getitem__",
    "__dict__",
    "__doc__",
    "__firstlineno__",
    "__init__",
    "__init_subclass__",
    "__module__",
    "__new__",
    "__non_callable_proto_members__",
    "__orig_bases__",
    "__parameters__",
    "__protocol_attrs__",
    "__qualname__",
    "__slots__",
    "__static_attributes__",
    "__subclasshook__",
    "__type_params__",
    "__weakref__",
})


def check_capability(capability: Any) -> None:
    """Raise InvalidCapabilityError unless `capability` is a class."""
    if not isinstance(capability, type):
        raise InvalidCapabilityError(capability)


def is_protocol(capability: type) -> bool:
    return (
        getattr(capability, "_is_protocol", False)
        and capability is not typing.Protocol
    )


@lru_cache(maxsize=None)
def protocol_members(capability: type) -> tuple[tuple[str, bool], ...]:
    """
    Return (name, must_be_callable) for every member a Protocol declares,
    including members inherited from parent protocols.
    """
    members: dict[str, bool] = {}
    for klass in capability.__mro__:
        if klass in _PROTOCOL_BASES:
            continue
        for name in inspect.get_annotations(klass):
            members.setdefault(name, False)
        for name, value in vars(klass).items():
            if name in _NON_MEMBERS or name.startswith("_abc_"):
                continue
            if name in ("_is_protocol", "_is_runtime_protocol"):
                continue
            if isinstance(value, property):
                members.setdefault(name, False)
            elif isinstance(value, (staticmethod, classmethod)) or callable(value):
                members.setdefault(name, True)
            else:
                members.setdefault(name, False)
    return tuple(members.items())


def satisfies(listener: Any, capability: type) -> bool:
    """True if `listener` currently satisfies `capability`."""
    if not is_protocol(capability):
        return isinstance(listener, capability)

    # Static lookup: listener properties and __getattr__ are never run.
    for name, must_be_callable in protocol_members(capability):
        try:
            value = inspect.getattr_static(listener, name)
        except AttributeError:
            return False
        if must_be_callable and not _is_method_like(value):
            return False
    return True


def _is_method_like(value: Any) -> bool:
    return isinstance(value, (staticmethod, classmethod)) or callable(value)
