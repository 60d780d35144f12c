"""
Elmish Kernel — list_of combinator

list_of(child) → Component[ListOfState[S], ListOfAction[A]]

Lifts one component into a component managing a dynamic, uniquely
identified collection of instances of it.

Ids come from ListOfState.next_id, which only ever grows. A removed id is
never handed out again, so an action captured before a removal either
finds its own item or is ignored; it can never land on a newer item.

Stale references (remove / childAction for an id that is not present) return
the input state object unchanged. No exception, no log line.

Pure. No side effects. No IO.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from elmish.kernel.types import (
    Action,
    ChildAction,
    Component,
    Insert,
    Item,
    ListOfState,
    Remove,
    UnknownActionError,
)
from elmish.kernel.ui import Node, button, div, h

# ---------------------------------------------------------------------------
# Reducer
# ---------------------------------------------------------------------------


def _insert(child: Component, state: ListOfState, action: Insert) -> ListOfState:
    new_item = Item(id=state.next_id, state=child.init())
    return ListOfState(items=state.items + (new_item,), next_id=state.next_id + 1)


def _remove(child: Component, state: ListOfState, action: Remove) -> ListOfState:
    items = tuple(item for item in state.items if item.id != action.id)
    if len(items) == len(state.items):
        return state
    return ListOfState(items=items, next_id=state.next_id)


def _child_action(child: Component, state: ListOfState, action: ChildAction) -> ListOfState:
    for index, item in enumerate(state.items):
        if item.id == action.id:
            updated = Item(id=item.id, state=child.reducer(item.state, action.inner))
            items = state.items[:index] + (updated,) + state.items[index + 1 :]
            return ListOfState(items=items, next_id=state.next_id)
    return state


_HANDLERS: dict[type[Action], Callable[[Component, ListOfState, Any], ListOfState]] = {
    Insert: _insert,
    Remove: _remove,
    ChildAction: _child_action,
}


def list_of_reducer(child: Component) -> Callable[[ListOfState, Action], ListOfState]:
    def reducer(state: ListOfState, action: Action) -> ListOfState:
        handler = _HANDLERS.get(type(action))
        if handler is None:
            raise UnknownActionError(f"UNKNOWN_ACTION: list_of({child.name}) cannot handle {action!r}")
        return handler(child, state, action)

    return reducer


# ---------------------------------------------------------------------------
# Render
# ---------------------------------------------------------------------------


def _item_dispatch(dispatch: Callable[[Action], None], item_id: int) -> Callable[[Action], None]:
    return lambda a: dispatch(ChildAction(id=item_id, inner=a))


def list_of_render(child: Component) -> Callable[[ListOfState, Callable[[Action], None]], Node]:
    def render(state: ListOfState, dispatch: Callable[[Action], None]) -> Node:
        rows = []
        for item in state.items:
            item_id = item.id
            rows.append(
                h(
                    "div",
                    {"key": item_id, "style": "display: flex"},
                    child.render(item.state, _item_dispatch(dispatch, item_id)),
                    button("x", lambda item_id=item_id: dispatch(Remove(id=item_id))),
                )
            )
        return div(
            button("insert", lambda: dispatch(Insert())),
            *rows,
        )

    return render


# ---------------------------------------------------------------------------
# Combinator
# ---------------------------------------------------------------------------


def list_of_accepts(child: Component) -> Callable[[Any], bool]:
    def accepts(state: Any) -> bool:
        if not isinstance(state, ListOfState):
            return False
        ids = state.ids()
        if len(set(ids)) != len(ids) or any(i >= state.next_id for i in ids):
            return False
        return all(child.accepts(item.state) for item in state.items)

    return accepts


def list_of_init() -> ListOfState:
    return ListOfState(items=(), next_id=0)


def list_of(child: Component) -> Component[ListOfState, Action]:
    return Component(
        init=list_of_init,
        reducer=list_of_reducer(child),
        render=list_of_render(child),
        name=f"list_of({child.name})",
        accepts=list_of_accepts(child),
    )
