"""
Elmish Kernel — Action Construction and Codec

Factory functions for building actions concisely, plus the dict codec used by
the mount's action log and saved pages.

The action union is closed: decoding an unknown `type` raises
UnknownActionError rather than silently dropping the input.
"""

from __future__ import annotations

from typing import Any

from elmish.kernel.types import (
    Action,
    ActionRecord,
    ChildAction,
    Decrement,
    Increment,
    Insert,
    Remove,
    UnknownActionError,
    now_iso,
)

ACTION_TYPES: dict[str, type[Action]] = {
    cls.type: cls for cls in (Insert, Remove, ChildAction, Increment, Decrement)
}


# ---------------------------------------------------------------------------
# Constructors
# ---------------------------------------------------------------------------


def insert() -> Insert:
    return Insert()


def remove(item_id: int) -> Remove:
    return Remove(id=item_id)


def child(item_id: int, inner: Action) -> ChildAction:
    return ChildAction(id=item_id, inner=inner)


def at_path(path: list[int], inner: Action) -> Action:
    """
    Wrap `inner` in one ChildAction per id in `path`, outermost first.

    at_path([2, 0], Increment()) → ChildAction(2, ChildAction(0, Increment()))
    """
    action = inner
    for item_id in reversed(path):
        action = ChildAction(id=item_id, inner=action)
    return action


# ---------------------------------------------------------------------------
# Codec
# ---------------------------------------------------------------------------


def action_to_dict(action: Action) -> dict[str, Any]:
    return action.to_dict()


def action_from_dict(d: dict[str, Any]) -> Action:
    """Decode a wire dict into an Action. Recurses into childAction payloads."""
    action_type = d.get("type")
    cls = ACTION_TYPES.get(action_type)
    if cls is None:
        raise UnknownActionError(f"UNKNOWN_ACTION: {action_type!r}")

    if cls is Remove:
        return Remove(id=int(d["id"]))
    if cls is ChildAction:
        return ChildAction(id=int(d["id"]), inner=action_from_dict(d["childAction"]))
    return cls()


def make_record(
    seq: int,
    action: Action,
    *,
    timestamp: str | None = None,
) -> ActionRecord:
    """Build an ActionRecord. Timestamp defaults to now."""
    return ActionRecord(sequence=seq, timestamp=timestamp or now_iso(), action=action)


def record_from_dict(d: dict[str, Any]) -> ActionRecord:
    return ActionRecord(
        sequence=int(d["sequence"]),
        timestamp=d["timestamp"],
        action=action_from_dict(d["action"]),
    )
