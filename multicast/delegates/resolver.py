"""
Multicast Delegates — Method Resolution
==========================================
Resolves a method declared on a capability by name and argument shape.

Resolution rules:
1. Candidates are scanned in declaration order: the capability's own
   class body first, then its bases in MRO order. A name declared with
   @typing.overload contributes each overload signature, in order,
   followed by its implementation.
2. A candidate matches when its positional parameter count (receiver
   excluded) equals the number of arguments and every argument is
   assignable to the declared parameter type.
3. The FIRST matching candidate wins, not the most specific one.
4. No match → MethodNotFound.

Assignability:
- unannotated, Any, object        → anything
- None                            → only None
- Optional / Union                → any member
- list[int], dict[str, X], ...    → isinstance() of the origin
- Literal[...]                    → one of the literal values
- Callable                        → callable()
- TypeVar                         → its bound or constraints
- Protocol                        → structural check
- float / complex                 → PEP 484 numeric tower (optional)
- any other class                 → isinstance()
- anything unrecognised           → accepted
"""

from __future__ import annotations

import collections.abc
import inspect
import logging
import types
import typing
from dataclasses import dataclass
from typing import Any, Callable, Iterator, Optional

from multicast.delegates.capabilities import is_protocol, satisfies
from multicast.delegates.errors import MethodNotFound

logger = logging.getLogger("multicast.delegates")

_SKIPPED_BASES = (object, typing.Protocol, typing.Generic)

_POSITIONAL = (
    inspect.Parameter.POSITIONAL_ONLY,
    inspect.Parameter.POSITIONAL_OR_KEYWORD,
)

_NUMERIC_TOWER = {
    float: (int, float),
    complex: (int, float, complex),
}


# ══════════════════════════════════════════════════════════════
# RESOLVED METHOD
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class ResolvedMethod:
    """A method picked by the resolver, ready to call on listeners."""

    capability: type
    name: str
    declared_on: type
    signature: inspect.Signature

    def call(self, listener: Any, args: tuple) -> Any:
        """Call the listener's own implementation of this method."""
        return getattr(listener, self.name)(*args)


# ══════════════════════════════════════════════════════════════
# CANDIDATE SCAN
# ══════════════════════════════════════════════════════════════

def _unwrap(member: Any) -> tuple[Optional[Callable], bool]:
    """Return (function, has_receiver) for a class-body member."""
    if isinstance(member, staticmethod):
        return member.__func__, False
    if isinstance(member, classmethod):
        return member.__func__, True
    if inspect.isfunction(member):
        return member, True
    return None, False


def _candidates(
    capability: type, method_name: str
) -> Iterator[tuple[type, Callable, bool]]:
    for klass in capability.__mro__:
        if klass in _SKIPPED_BASES:
            continue
        func, has_receiver = _unwrap(vars(klass).get(method_name))
        if func is None:
            continue
        for overload in typing.get_overloads(func):
            yield klass, overload, has_receiver
        yield klass, func, has_receiver


def _type_hints(func: Callable) -> dict[str, Any]:
    try:
        return typing.get_type_hints(func)
    except (NameError, TypeError) as exc:
        # Unresolvable forward references stay as strings and accept anything.
        logger.debug(
            f"Could not resolve annotations of "
            f"{getattr(func, '__qualname__', func)!r}: {exc}"
        )
        return inspect.get_annotations(func)


def _value_sensitive(annotation: Any) -> bool:
    """True if checking `annotation` depends on the value, not just its type."""
    if isinstance(annotation, typing.TypeVar):
        return any(
            _value_sensitive(c)
            for c in (annotation.__bound__, *annotation.__constraints__)
            if c is not None
        )
    origin = typing.get_origin(annotation)
    if origin is typing.Literal:
        return True
    if origin in (typing.Union, types.UnionType, typing.Annotated):
        return any(_value_sensitive(a) for a in typing.get_args(annotation))
    return isinstance(annotation, type) and is_protocol(annotation)


# ══════════════════════════════════════════════════════════════
# RESOLVER
# ══════════════════════════════════════════════════════════════

class MethodResolver:
    """
    Resolves methods on capabilities, first match wins.

    With caching enabled, results are memoised per
    (capability, method name, argument types), but only when no candidate
    examined has a Literal or Protocol parameter.
    """

    def __init__(self, numeric_tower: bool = True, cache: bool = True):
        self._numeric_tower = numeric_tower
        self._cache: Optional[dict[tuple, ResolvedMethod]] = (
            {} if cache else None
        )

    def resolve(
        self, capability: type, method_name: str, args: tuple
    ) -> ResolvedMethod:
        """
        Resolve `method_name` on `capability` for the given arguments.

        Raises:
            MethodNotFound: If no declared candidate matches.
        """
        argument_types = tuple(type(arg) for arg in args)
        key = (capability, method_name, argument_types)

        if self._cache is not None and key in self._cache:
            return self._cache[key]

        # Only resolutions decided by argument types alone are memoised.
        cacheable = self._cache is not None

        for declared_on, func, has_receiver in _candidates(
            capability, method_name
        ):
            signature = inspect.signature(func)
            if cacheable and any(
                _value_sensitive(hint) for hint in _type_hints(func).values()
            ):
                cacheable = False
            if self._matches(func, signature, has_receiver, args):
                resolved = ResolvedMethod(
                    capability=capability,
                    name=method_name,
                    declared_on=declared_on,
                    signature=signature,
                )
                logger.debug(
                    f"Resolved {capability.__qualname__}.{method_name}"
                    f"{signature} for {len(args)} argument(s)"
                )
                if cacheable:
                    self._cache[key] = resolved
                return resolved

        raise MethodNotFound(capability, method_name, argument_types)

    def clear_cache(self) -> None:
        if self._cache is not None:
            self._cache.clear()

    # ── Matching ──────────────────────────────────────────────

    def _matches(
        self,
        func: Callable,
        signature: inspect.Signature,
        has_receiver: bool,
        args: tuple,
    ) -> bool:
        params = list(signature.parameters.values())
        if has_receiver and params and params[0].kind in _POSITIONAL:
            params = params[1:]

        positional = [p for p in params if p.kind in _POSITIONAL]
        variadic = next(
            (p for p in params if p.kind is inspect.Parameter.VAR_POSITIONAL),
            None,
        )
        required_keywords = [
            p for p in params
            if p.kind is inspect.Parameter.KEYWORD_ONLY
            and p.default is inspect.Parameter.empty
        ]

        if required_keywords:
            return False
        if variadic is None and len(args) != len(positional):
            return False
        if variadic is not None and len(args) < len(positional):
            return False

        hints = _type_hints(func)
        for param, arg in zip(positional, args):
            if not self.accepts(hints.get(param.name, Any), arg):
                return False
        if variadic is not None:
            extra_hint = hints.get(variadic.name, Any)
            for arg in args[len(positional):]:
                if not self.accepts(extra_hint, arg):
                    return False
        return True

    def accepts(self, annotation: Any, value: Any) -> bool:
        """True if `value` is assignable to the declared `annotation`."""
        if annotation in (Any, object, inspect.Parameter.empty):
            return True
        if annotation is None or annotation is type(None):
            return value is None
        if isinstance(annotation, str):
            return True
        if isinstance(annotation, typing.TypeVar):
            if annotation.__bound__ is not None:
                return self.accepts(annotation.__bound__, value)
            if annotation.__constraints__:
                return any(
                    self.accepts(c, value) for c in annotation.__constraints__
                )
            return True

        origin = typing.get_origin(annotation)
        if origin is typing.Union or origin is types.UnionType:
            return any(
                self.accepts(arg, value) for arg in typing.get_args(annotation)
            )
        if origin is typing.Literal:
            return any(
                type(value) is type(v) and value == v
                for v in typing.get_args(annotation)
            )
        if origin is typing.Annotated:
            return self.accepts(typing.get_args(annotation)[0], value)
        if origin is collections.abc.Callable:
            return callable(value)
        if isinstance(origin, type):
            return isinstance(value, origin)

        if isinstance(annotation, type):
            if is_protocol(annotation):
                return satisfies(value, annotation)
            if self._numeric_tower and annotation in _NUMERIC_TOWER:
                return isinstance(value, _NUMERIC_TOWER[annotation])
            return isinstance(value, annotation)

        return True
