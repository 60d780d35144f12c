"""
Elmish Kernel — the pure engine.

  types     — Component contract, actions, ListOfState
  list_of   — lifts one component into a dynamic, id-addressed collection
  counter   — the leaf component
  renderer  — UI tree → HTML / text / saved page
  mount     — host: holds state, dispatches, re-renders, logs actions
  stores    — lifted-state counters
"""

from elmish.kernel.counter import counter
from elmish.kernel.events import action_from_dict, action_to_dict, at_path, child, insert, remove
from elmish.kernel.list_of import list_of
from elmish.kernel.mount import Mount, parse_page, replay
from elmish.kernel.renderer import render_html, render_page, render_text
from elmish.kernel.stores import Store
from elmish.kernel.types import (
    ChildAction,
    Component,
    Decrement,
    Increment,
    Insert,
    Item,
    ListOfState,
    Remove,
    UnknownActionError,
)

__all__ = [
    "Component",
    "ListOfState",
    "Item",
    "Insert",
    "Remove",
    "ChildAction",
    "Increment",
    "Decrement",
    "UnknownActionError",
    "list_of",
    "counter",
    "insert",
    "remove",
    "child",
    "at_path",
    "action_to_dict",
    "action_from_dict",
    "render_html",
    "render_text",
    "render_page",
    "Mount",
    "parse_page",
    "replay",
    "Store",
]
