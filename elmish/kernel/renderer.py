"""
Elmish Kernel — Renderer

Pure functions: UI tree → HTML string (or text string).
No IO. Deterministic: same tree shape → same output, always.

Handlers never leave the process. In HTML they become data-on-<event>="hN"
attributes whose ids match ui.iter_handlers, so a host can route a clicked id
back to the live callable.

render_page wraps a tree into a full document with the state and action log
embedded as JSON, which mount.parse_page reads back.
"""

from __future__ import annotations

import json
from html import escape as _html_escape
from typing import Any

import chevron

from elmish.kernel.types import ActionRecord, RenderOptions, state_to_data
from elmish.kernel.ui import Child, Node, is_handler_prop

PAGE_VERSION = 1

_INLINE_TAGS = {"button", "span"}

_PAGE_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <title>{{title}}</title>
  <script type="application/elmish-state+json" id="elmish-state">
  {{{state_json}}}
  </script>
{{#include_actions}}
  <script type="application/elmish-actions+json" id="elmish-actions">
  {{{actions_json}}}
  </script>
{{/include_actions}}
</head>
<body>
  <main class="elmish-root">
{{{body}}}
  </main>
</body>
</html>
"""


def escape(text: str) -> str:
    return _html_escape(text, quote=True)


def _json(value: Any) -> str:
    # "</" would close the surrounding script tag
    return json.dumps(value, sort_keys=True, ensure_ascii=False).replace("</", "<\\/")


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def render_html(tree: Child) -> str:
    """
    Render a UI tree as an HTML fragment.
    Pure function. No side effects. No IO.
    """
    return _render_node(tree, [0])


def render_text(tree: Child) -> str:
    """
    Render a UI tree for a terminal: one line per block, buttons as [label].
    """
    if isinstance(tree, str):
        return tree
    return "\n".join(_text_lines(tree, 0))


def render_page(
    tree: Node,
    state: Any,
    records: list[ActionRecord] | None = None,
    options: RenderOptions | None = None,
) -> str:
    """
    Render a complete HTML page with embedded state and action log.
    """
    opts = options or RenderOptions()
    records = records or []

    actions_json = ""
    if opts.include_actions and records:
        actions_json = _json([r.to_dict() for r in records])

    return chevron.render(
        _PAGE_TEMPLATE,
        {
            "title": opts.title,
            "state_json": _json({"version": PAGE_VERSION, "state": state_to_data(state)}),
            "actions_json": actions_json,
            "include_actions": bool(actions_json),
            "body": render_html(tree),
        },
    )


# ---------------------------------------------------------------------------
# HTML
# ---------------------------------------------------------------------------


def _attr_name(prop: str) -> str:
    if prop == "key":
        return "data-key"
    if is_handler_prop(prop):
        return "data-on-" + prop[3:].replace("_", "-")
    return prop.replace("_", "-")


def _render_node(node: Child, counter: list[int]) -> str:
    if isinstance(node, str):
        return escape(node)

    attrs: list[str] = []
    for name in sorted(node.props):
        value = node.props[name]
        if is_handler_prop(name):
            value = f"h{counter[0]}"
            counter[0] += 1
        elif value is None or value is False:
            continue
        attrs.append(f'{_attr_name(name)}="{escape(str(value))}"')

    open_tag = " ".join([node.tag, *attrs])
    inner = "".join(_render_node(c, counter) for c in node.children)
    return f"<{open_tag}>{inner}</{node.tag}>"


# ---------------------------------------------------------------------------
# Text
# ---------------------------------------------------------------------------


def _is_row(node: Node) -> bool:
    return "display: flex" in str(node.props.get("style", ""))


def _inline(node: Child) -> str:
    if isinstance(node, str):
        return node
    if node.tag == "button":
        return f"[{node.text()}]"
    return " ".join(p for p in (_inline(c) for c in node.children) if p)


def _text_lines(node: Node, depth: int) -> list[str]:
    indent = "  " * depth
    if _is_row(node):
        return [indent + _inline(node)]

    lines: list[str] = []
    run: list[str] = []
    for c in node.children:
        if isinstance(c, str) or c.tag in _INLINE_TAGS:
            run.append(_inline(c))
            continue
        if run:
            lines.append(indent + " ".join(run))
            run = []
        lines.extend(_text_lines(c, depth + 1))
    if run:
        lines.append(indent + " ".join(run))
    return lines
