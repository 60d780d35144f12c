"""
Elmish Kernel — Shared Types

Data classes used across components, the list combinator, renderer and mount.
These are the contracts that bind the kernel together.

Every state and action value is immutable (frozen dataclasses, tuples).
Reducers build new values and reuse unchanged substructure by reference.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any, ClassVar, Generic, TypeVar

S = TypeVar("S")
A = TypeVar("A")


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class ElmishError(Exception):
    """Base class for every error raised by the kernel or its host."""


class UnknownActionError(ElmishError):
    """An action outside a component's closed action union reached its reducer."""


# ---------------------------------------------------------------------------
# Component contract
# ---------------------------------------------------------------------------


def accept_any(state: Any) -> bool:
    return True


@dataclass(frozen=True)
class Component(Generic[S, A]):
    """
    A component described with pure functions in the style of Elm (or Redux).

    init    — () → S
    reducer — (S, A) → S, total over the action union, never mutates S
    render  — (S, dispatch) → UI tree
    accepts — (state) → bool, whether a value has this component's state shape;
              used by hosts restoring state from outside

    The descriptor holds no state of its own; a host (see mount.py) does.
    """

    init: Callable[[], S]
    reducer: Callable[[S, A], S]
    render: Callable[[S, Callable[[A], None]], Any]
    name: str = "component"
    accepts: Callable[[Any], bool] = accept_any


# ---------------------------------------------------------------------------
# Actions
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Action:
    """Base for the tagged action union. `type` is the wire tag."""

    type: ClassVar[str] = ""

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type}


@dataclass(frozen=True)
class Insert(Action):
    type: ClassVar[str] = "insert"


@dataclass(frozen=True)
class Remove(Action):
    type: ClassVar[str] = "remove"

    id: int

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "id": self.id}


@dataclass(frozen=True)
class ChildAction(Action):
    """Routes `inner` to the item with the given id. `inner` may itself be a ChildAction."""

    type: ClassVar[str] = "childAction"

    id: int
    inner: Action

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "id": self.id, "childAction": self.inner.to_dict()}


@dataclass(frozen=True)
class Increment(Action):
    type: ClassVar[str] = "increment"


@dataclass(frozen=True)
class Decrement(Action):
    type: ClassVar[str] = "decrement"


# ---------------------------------------------------------------------------
# Collection state
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Item(Generic[S]):
    """One child instance inside a ListOfState."""

    id: int
    state: S

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "state": state_to_data(self.state)}

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Item:
        return cls(id=int(d["id"]), state=state_from_data(d["state"]))


@dataclass(frozen=True)
class ListOfState(Generic[S]):
    """
    The state of a list_of(child) component.

    items   — insertion-ordered (id, child state) pairs
    next_id — strictly greater than every id ever issued
    """

    items: tuple[Item[S], ...] = ()
    next_id: int = 0

    def ids(self) -> list[int]:
        return [item.id for item in self.items]

    def get(self, item_id: int) -> Item[S] | None:
        for item in self.items:
            if item.id == item_id:
                return item
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "items": [item.to_dict() for item in self.items],
            "nextId": self.next_id,
        }

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> ListOfState:
        return cls(
            items=tuple(Item.from_dict(i) for i in d.get("items", [])),
            next_id=int(d.get("nextId", 0)),
        )


def state_to_data(state: Any) -> Any:
    """Convert a state value into plain JSON-compatible data."""
    if isinstance(state, ListOfState):
        return state.to_dict()
    return state


def state_from_data(data: Any) -> Any:
    """Inverse of state_to_data. Collections are recognised by their keys."""
    if isinstance(data, dict) and "items" in data and "nextId" in data:
        return ListOfState.from_dict(data)
    return data


# ---------------------------------------------------------------------------
# Host records
# ---------------------------------------------------------------------------


@dataclass
class ActionRecord:
    """One entry of a mount's append-only action log."""

    sequence: int
    timestamp: str  # ISO 8601 UTC
    action: Action

    def to_dict(self) -> dict[str, Any]:
        return {
            "sequence": self.sequence,
            "timestamp": self.timestamp,
            "action": self.action.to_dict(),
        }


@dataclass
class RenderOptions:
    """Options controlling what render_page includes in output."""

    title: str = "elmish"
    include_actions: bool = True


@dataclass
class ParsedPage:
    """Result of parsing a saved page."""

    version: int | None
    state: Any
    records: list[ActionRecord] = field(default_factory=list)
    parse_errors: list[str] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def now_iso() -> str:
    """Current UTC time as ISO 8601 string."""
    return datetime.now(UTC).strftime("%Y-%m-%dT%H:%M:%SZ")
