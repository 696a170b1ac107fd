"""
Multicast Delegates — Capability Query Tests
===============================================
Covers:
- Nominal filtering (classes, ABCs)
- Structural filtering (Protocols, runtime_checkable or not)
- Results are snapshots
- Empty results are not errors
- Non-class capabilities rejected
"""

from __future__ import annotations

import abc
import gc
from typing import Protocol, runtime_checkable

import pytest

from multicast.delegates import InvalidCapabilityError, MulticastDelegate
from multicast.delegates.capabilities import protocol_members, satisfies


# ══════════════════════════════════════════════════════════════
# CAPABILITIES
# ══════════════════════════════════════════════════════════════

class Foo(Protocol):
    def on_foo(self) -> None: ...


@runtime_checkable
class Bar(Protocol):
    def on_bar(self, value: int) -> None: ...


class Named(Protocol):
    name: str


class Closeable(abc.ABC):
    @abc.abstractmethod
    def close(self) -> None: ...


class FooBar(Foo, Bar, Protocol):
    pass


# ══════════════════════════════════════════════════════════════
# LISTENERS
# ══════════════════════════════════════════════════════════════

class OnlyFoo:
    def on_foo(self):
        pass


class OnlyBar:
    def on_bar(self, value):
        pass


class Both:
    def on_foo(self):
        pass

    def on_bar(self, value):
        pass


class NotCallableFoo:
    on_foo = "not a method"


class Resource(Closeable):
    def close(self):
        pass


class HasName:
    def __init__(self):
        self.name = "named"


@pytest.fixture
def delegate():
    return MulticastDelegate()


def _ids(items):
    return {id(item) for item in items}


# ══════════════════════════════════════════════════════════════
# FILTERING
# ══════════════════════════════════════════════════════════════

class TestFiltering:
    @pytest.mark.parametrize("order", [(0, 1, 2), (2, 1, 0), (1, 2, 0)])
    def test_filter_regardless_of_order(self, delegate, order):
        a, b, c = OnlyFoo(), OnlyBar(), Both()
        listeners = [a, b, c]
        for index in order:
            delegate.add(listeners[index])

        assert _ids(delegate.get(Foo)) == _ids([a, c])
        assert _ids(delegate.get(Bar)) == _ids([b, c])
        assert _ids(delegate.get(FooBar)) == _ids([c])

    def test_non_callable_member_does_not_satisfy_method(self, delegate):
        listener = NotCallableFoo()
        delegate.add(listener)
        assert delegate.get(Foo) == []

    def test_data_member_protocol(self, delegate):
        named = HasName()
        delegate.add(named)
        delegate.add(OnlyFoo())
        assert delegate.get(Named) == [named]

    def test_abc_is_nominal(self, delegate):
        resource = Resource()
        duck = type("Duck", (), {"close": lambda self: None})()
        delegate.add(resource)
        delegate.add(duck)
        assert delegate.get(Closeable) == [resource]

    def test_plain_class_capability(self, delegate):
        listener = Both()
        delegate.add(listener)
        delegate.add(OnlyFoo())
        assert delegate.get(Both) == [listener]

    def test_object_matches_everything(self, delegate):
        items = [OnlyFoo(), OnlyBar(), Both()]
        for item in items:
            delegate.add(item)
        assert _ids(delegate.get(object)) == _ids(items)


# ══════════════════════════════════════════════════════════════
# SNAPSHOTS & EMPTY RESULTS
# ══════════════════════════════════════════════════════════════

class TestResults:
    def test_empty_registry_returns_empty(self, delegate):
        assert delegate.get(Foo) == []

    def test_no_match_returns_empty(self, delegate):
        listener = OnlyBar()
        delegate.add(listener)
        assert delegate.get(Foo) == []

    def test_result_is_snapshot(self, delegate):
        a = OnlyFoo()
        delegate.add(a)
        result = delegate.get(Foo)

        later = OnlyFoo()
        delegate.add(later)
        assert result == [a]

        result.clear()
        assert delegate.get(Foo) != []

    def test_non_class_capability_rejected(self, delegate):
        with pytest.raises(InvalidCapabilityError):
            delegate.get("Foo")
        with pytest.raises(TypeError):
            delegate.get(OnlyFoo())


# ══════════════════════════════════════════════════════════════
# STRUCTURAL CHECK
# ══════════════════════════════════════════════════════════════

class TestProtocolMembers:
    def test_members_include_parents(self):
        names = {name for name, _ in protocol_members(FooBar)}
        assert names == {"on_foo", "on_bar"}

    def test_data_members_not_required_callable(self):
        assert protocol_members(Named) == (("name", False),)

    def test_satisfies_matches_isinstance_for_runtime_protocol(self):
        for listener in (OnlyFoo(), OnlyBar(), Both()):
            assert satisfies(listener, Bar) == isinstance(listener, Bar)


class Valued(Protocol):
    value: int


class Fine:
    value = 1


class NotReady:
    @property
    def value(self):
        raise ValueError("not ready")


class TestListenerCodeNotRun:
    def test_raising_property_does_not_abort_query(self, delegate):
        fine = Fine()
        delegate.add(fine)
        not_ready = NotReady()
        delegate.add(not_ready)
        del fine
        gc.collect()

        assert delegate.get(Valued) == [not_ready]
        assert len(delegate) == 1

    def test_dynamic_getattr_not_consulted(self):
        class Dynamic:
            def __getattr__(self, name):
                return lambda: None

        assert not satisfies(Dynamic(), Foo)
