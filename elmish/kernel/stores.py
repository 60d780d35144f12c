"""
Elmish Kernel — Stores

The hook-style alternative to list_of: components that keep their state in a
Store. A store is a value plus a setter. A component either creates its own
stores or binds to stores handed in by its parent, which is how state gets
"lifted". The choice is made once, at construction.

Props (label, delta) arrive on every render; stores persist between renders.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Generic, TypeVar

from elmish.kernel.ui import Node, button, div, span

T = TypeVar("T")


class Store(Generic[T]):
    """A value and its setter. Listeners run after every change."""

    def __init__(self, value: T):
        self.value = value
        self._listeners: list[Callable[[T], None]] = []

    def set_value(self, value: T) -> None:
        if value == self.value:
            return
        self.value = value
        for listener in list(self._listeners):
            listener(value)

    def subscribe(self, listener: Callable[[T], None]) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def __repr__(self) -> str:  # pragma: no cover
        return f"Store({self.value!r})"


def with_stores(initial_values: dict[str, Any], **supplied: Store | None) -> dict[str, Store]:
    """
    One store per key of `initial_values`: the supplied store when given,
    otherwise a fresh one holding the initial value.
    """
    stores: dict[str, Store] = {}
    for key, initial in initial_values.items():
        store = supplied.get(key)
        stores[key] = store if store is not None else Store(initial)
    return stores


# ---------------------------------------------------------------------------
# Counters
# ---------------------------------------------------------------------------


class Counter:
    """A counter whose count lives in `count_store`, owned or lifted."""

    def __init__(self, count_store: Store[int] | None = None):
        self.count_store: Store[int] = with_stores({"count_store": 0}, count_store=count_store)["count_store"]

    def render(self, label: str, delta: int = 1) -> Node:
        store = self.count_store
        return div(
            button("-", lambda: store.set_value(store.value - delta)),
            span(f"{label}: {store.value}"),
            button("+", lambda: store.set_value(store.value + delta)),
        )


class TwoCounters:
    """Two independent counters. Each owns its state."""

    def __init__(self) -> None:
        self.one = Counter()
        self.two = Counter()

    def render(self) -> Node:
        return div(self.one.render("one"), self.two.render("two"))


class DualCounters:
    """
    Two counters on the same store. Their count is always the same, but they
    add different amounts to it.
    """

    def __init__(self, count_store: Store[int] | None = None):
        self.count_store = with_stores({"count_store": 0}, count_store=count_store)["count_store"]
        self.plus_one = Counter(count_store=self.count_store)
        self.plus_ten = Counter(count_store=self.count_store)

    def render(self) -> Node:
        return div(
            self.plus_one.render("+1", delta=1),
            self.plus_ten.render("+10", delta=10),
        )


class DeltaCounters:
    """
    One counter dictates the step of the other. Only the delta is lifted;
    the stepped counter keeps its own count.
    """

    def __init__(self, delta: Store[int] | None = None):
        self.delta = with_stores({"delta": 1}, delta=delta)["delta"]
        self.stepped = Counter()
        self.delta_counter = Counter(count_store=self.delta)

    def render(self) -> Node:
        step = self.delta.value
        return div(
            self.stepped.render(f"+{step}", delta=step),
            self.delta_counter.render("delta", delta=1),
        )
