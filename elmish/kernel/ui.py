"""
Elmish Kernel — UI Tree

The value every render function returns. The core treats it as opaque;
renderer.py and mount.py are the only readers.

A Node is an element: tag, props, children. Children are Nodes or strings.
Props whose name starts with "on_" hold zero-argument callables (handlers).
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from typing import Any, Union

Child = Union["Node", str]


@dataclass(frozen=True)
class Node:
    tag: str
    props: dict[str, Any] = field(default_factory=dict)
    children: tuple[Child, ...] = ()

    def text(self) -> str:
        """Concatenated text content of this subtree."""
        parts: list[str] = []
        for c in self.children:
            parts.append(c if isinstance(c, str) else c.text())
        return "".join(parts)


def h(tag: str, props: dict[str, Any] | None = None, *children: Child) -> Node:
    return Node(tag=tag, props=dict(props or {}), children=tuple(children))


def div(*children: Child, **props: Any) -> Node:
    return h("div", props, *children)


def span(*children: Child, **props: Any) -> Node:
    return h("span", props, *children)


def button(label: str, on_click: Callable[[], None], **props: Any) -> Node:
    return h("button", {**props, "on_click": on_click}, label)


def is_handler_prop(name: str) -> bool:
    return name.startswith("on_")


# ---------------------------------------------------------------------------
# Tree walking
# ---------------------------------------------------------------------------


def walk(tree: Child) -> Iterator[Node]:
    """Depth-first, document-order traversal of element nodes."""
    if isinstance(tree, str):
        return
    yield tree
    for c in tree.children:
        yield from walk(c)


def iter_handlers(tree: Node) -> Iterator[tuple[str, str, Callable[[], None]]]:
    """
    Yield (handler_id, label, callable) for every handler in document order.

    Ids are "h0", "h1", ... and depend only on tree shape, so the same state
    always yields the same ids.
    """
    n = 0
    for node in walk(tree):
        for name in sorted(node.props):
            if is_handler_prop(name):
                yield f"h{n}", node.text(), node.props[name]
                n += 1


def find_buttons(tree: Node, label: str) -> list[Node]:
    """All button nodes whose text equals `label`, in document order."""
    return [n for n in walk(tree) if n.tag == "button" and n.text() == label]
