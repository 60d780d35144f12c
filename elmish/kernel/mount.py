"""
Elmish Kernel — Mount

The host that brings a component to life. Sits between the pure functions
(reducer, render) and the outside world (UI events, saved pages).

    mount = Mount(list_of(counter))
    mount.dispatch(Insert())
    mount.click("h1")

Holds the current state, applies the reducer on every dispatch, re-renders,
and keeps an append-only action log.

Dispatch is synchronous and serialized. A dispatch issued while another is
being applied (e.g. from a listener) is queued and applied afterwards, in
order. Nothing is ever interleaved.
"""

from __future__ import annotations

import functools
import json
import logging
import re
from collections import deque
from collections.abc import Callable, Iterable
from typing import Any

from pydantic import ValidationError

from elmish.config import settings
from elmish.kernel.events import make_record, record_from_dict
from elmish.kernel.renderer import PAGE_VERSION, render_page
from elmish.kernel.types import (
    Action,
    ActionRecord,
    Component,
    ElmishError,
    ParsedPage,
    RenderOptions,
    UnknownActionError,
    state_from_data,
    state_to_data,
)
from elmish.kernel.ui import Node, iter_handlers
from elmish.models import ActionRecordModel, PageStateModel

logger = logging.getLogger(__name__)

Listener = Callable[[Any, Node], None]


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class HandlerNotFound(ElmishError):
    """No handler with that id in the current tree."""


class PageParseError(ElmishError):
    """Saved page exists but embedded JSON is missing or malformed."""


class VersionNotSupported(ElmishError):
    """Saved page is from a future format."""


# ---------------------------------------------------------------------------
# Page parsing
# ---------------------------------------------------------------------------


def _script_body(html: str, script_id: str) -> str | None:
    match = re.search(
        rf'<script[^>]*id="{script_id}"[^>]*>(.*?)</script>',
        html,
        re.DOTALL,
    )
    if match is None:
        return None
    return match.group(1).strip()


def parse_page(html: str) -> ParsedPage:
    """
    Extract state and action log from a page produced by render_page.
    Problems are collected in parse_errors, never raised.
    """
    errors: list[str] = []
    version: int | None = None
    state: Any = None
    records: list[ActionRecord] = []

    state_body = _script_body(html, "elmish-state")
    if state_body is None:
        errors.append("Missing elmish-state script")
    else:
        try:
            page_state = PageStateModel.model_validate(json.loads(state_body))
            version = page_state.version
            state = state_from_data(page_state.state)
        except (json.JSONDecodeError, ValidationError, KeyError, TypeError, ValueError) as e:
            errors.append(f"Failed to parse state: {e}")

    actions_body = _script_body(html, "elmish-actions")
    if actions_body is not None:
        try:
            raw = json.loads(actions_body)
            if not isinstance(raw, list):
                raise ValueError("action log is not a list")
            for entry in raw:
                model = ActionRecordModel.model_validate(entry)
                records.append(record_from_dict(model.model_dump()))
        except (json.JSONDecodeError, ValidationError, UnknownActionError, KeyError, TypeError, ValueError) as e:
            errors.append(f"Failed to parse actions: {e}")

    return ParsedPage(version=version, state=state, records=records, parse_errors=errors)


# ---------------------------------------------------------------------------
# Replay
# ---------------------------------------------------------------------------


def replay(component: Component, actions: Iterable[Action]) -> Any:
    """Fold actions over component.init(). Deterministic: reducers are pure."""
    return functools.reduce(component.reducer, actions, component.init())


# ---------------------------------------------------------------------------
# Mount
# ---------------------------------------------------------------------------


class Mount:
    """
    Holds one running instance of a component.
    Coordinates reducer + render + action log.
    """

    def __init__(self, component: Component, *, history_limit: int | None = None):
        self.component = component
        self.state: Any = component.init()
        self.records: list[ActionRecord] = []
        self.last_sequence = 0
        self.history_limit = settings.HISTORY_LIMIT if history_limit is None else history_limit
        self._listeners: list[Listener] = []
        self._queue: deque[Action] = deque()
        self._dispatching = False
        self.tree: Node = self._render()

    def _render(self) -> Node:
        return self.component.render(self.state, self.dispatch)

    # -- dispatch --

    def dispatch(self, action: Action) -> None:
        """Apply `action` now, or after the dispatch currently in progress."""
        self._queue.append(action)
        if self._dispatching:
            return

        self._dispatching = True
        try:
            while self._queue:
                self._apply(self._queue.popleft())
        except Exception:
            self._queue.clear()
            raise
        finally:
            self._dispatching = False

    def _apply(self, action: Action) -> None:
        previous = self.state
        self.state = self.component.reducer(previous, action)

        self.last_sequence += 1
        self.records.append(make_record(self.last_sequence, action))
        if self.history_limit and len(self.records) > self.history_limit:
            self.compact(self.history_limit)

        if self.state is previous:
            if settings.TRACE_DROPPED:
                logger.debug("mount %s: action left state unchanged: %r", self.component.name, action)
            return

        self.tree = self._render()
        for listener in list(self._listeners):
            listener(self.state, self.tree)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call `listener(state, tree)` after every re-render. Returns an unsubscribe function."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # -- host events --

    def handlers(self) -> list[tuple[str, str]]:
        """(handler_id, label) pairs of the current tree."""
        return [(hid, label) for hid, label, _ in iter_handlers(self.tree)]

    def click(self, handler_id: str) -> None:
        for hid, _, fn in iter_handlers(self.tree):
            if hid == handler_id:
                fn()
                return
        raise HandlerNotFound(handler_id)

    # -- log maintenance --

    def compact(self, keep_recent: int = 50) -> None:
        """
        Keep the most recent N records.
        State already reflects every action, so older records are redundant.
        """
        if len(self.records) <= keep_recent:
            return
        self.records = self.records[-keep_recent:]

    def integrity_check(self) -> tuple[bool, list[str]]:
        """Verify the current state matches a replay of the action log."""
        if self.records and self.records[0].sequence != 1:
            return False, ["Action log was compacted; replay is incomplete"]

        replayed = replay(self.component, (r.action for r in self.records))
        stored = json.dumps(state_to_data(self.state), sort_keys=True)
        if stored == json.dumps(state_to_data(replayed), sort_keys=True):
            return True, []
        return False, ["State does not match action replay"]

    # -- pages --

    def to_page(self, options: RenderOptions | None = None) -> str:
        opts = options or RenderOptions(title=settings.PAGE_TITLE)
        return render_page(self.tree, self.state, self.records, opts)

    @classmethod
    def from_page(cls, component: Component, html: str, **kwargs: Any) -> Mount:
        """Resume a mount from a saved page."""
        parsed = parse_page(html)
        if parsed.parse_errors:
            raise PageParseError(f"Failed to parse page: {parsed.parse_errors}")
        if parsed.version is not None and parsed.version > PAGE_VERSION:
            raise VersionNotSupported(f"Page version {parsed.version} not supported")
        if parsed.state is not None and not component.accepts(parsed.state):
            raise PageParseError(f"Page state does not fit component {component.name}")

        mount = cls(component, **kwargs)
        if parsed.state is not None:
            mount.state = parsed.state
        mount.records = parsed.records
        mount.last_sequence = max((r.sequence for r in parsed.records), default=0)
        mount.tree = mount._render()
        logger.info("mount %s: restored %d action records", component.name, len(parsed.records))
        return mount
