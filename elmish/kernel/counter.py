"""
Elmish Kernel — Counter

The leaf component: an int that goes up and down.
"""

from __future__ import annotations

from collections.abc import Callable

from elmish.kernel.types import Action, Component, Decrement, Increment, UnknownActionError
from elmish.kernel.ui import Node, button, div, span


def counter_init() -> int:
    return 0


def counter_reducer(state: int, action: Action) -> int:
    if isinstance(action, Increment):
        return state + 1
    if isinstance(action, Decrement):
        return state - 1
    raise UnknownActionError(f"UNKNOWN_ACTION: counter cannot handle {action!r}")


def counter_accepts(state: object) -> bool:
    return isinstance(state, int) and not isinstance(state, bool)


def counter_render(state: int, dispatch: Callable[[Action], None]) -> Node:
    return div(
        button("-", lambda: dispatch(Decrement())),
        span(str(state)),
        button("+", lambda: dispatch(Increment())),
    )


counter: Component[int, Action] = Component(
    init=counter_init,
    reducer=counter_reducer,
    render=counter_render,
    name="counter",
    accepts=counter_accepts,
)
