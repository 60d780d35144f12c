"""REPL for driving a mounted component from a terminal."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from elmish.kernel.events import at_path
from elmish.kernel.mount import HandlerNotFound, Mount
from elmish.kernel.renderer import render_html, render_text
from elmish.kernel.types import Decrement, ElmishError, Increment, Insert, Remove, state_to_data

logger = logging.getLogger(__name__)


def parse_path(arg: str) -> list[int]:
    """ "2/0" → [2, 0]. Raises ValueError on anything else."""
    return [int(part) for part in arg.split("/")]


class Repl:
    """Interactive REPL over a Mount."""

    def __init__(self, mount: Mount, watch: bool = True):
        self.mount = mount
        self.running = True
        self.watch_mode = watch
        self._unsubscribe = mount.subscribe(self._on_render)

    def start(self):
        """Start the REPL."""
        print(f"elmish > {self.mount.component.name}. Type /help for commands.")
        self._view()

        while self.running:
            try:
                line = input("elmish > ").strip()
                if not line:
                    continue
                self._handle_command(line)
            except (EOFError, KeyboardInterrupt):
                print()
                break
            except Exception as e:
                print(f"Error: {e}")

        self._unsubscribe()

    def _on_render(self, state, tree):
        if self.watch_mode:
            print(render_text(tree))

    def _handle_command(self, line: str):
        """Handle REPL commands."""
        parts = line.split(maxsplit=1)
        cmd = parts[0].lower()
        arg = parts[1] if len(parts) > 1 else None

        try:
            if cmd == "/quit":
                self.running = False
                print("Goodbye.")
            elif cmd == "/insert":
                self.mount.dispatch(at_path(parse_path(arg), Insert()) if arg else Insert())
            elif cmd == "/remove":
                self._remove(arg)
            elif cmd in ("/inc", "/dec"):
                self._step(cmd, arg)
            elif cmd == "/click":
                if arg:
                    self.mount.click(arg)
                else:
                    print("Usage: /click <handler id>")
            elif cmd == "/view":
                self._view()
            elif cmd == "/html":
                print(render_html(self.mount.tree))
            elif cmd == "/state":
                print(json.dumps(state_to_data(self.mount.state), sort_keys=True))
            elif cmd == "/history":
                self._show_history(arg)
            elif cmd == "/save":
                self._save(arg)
            elif cmd == "/watch":
                self.watch_mode = arg.lower() == "on" if arg else not self.watch_mode
                print(f"  Watch {'on' if self.watch_mode else 'off'}.")
            elif cmd == "/help":
                self._show_help()
            else:
                print(f"Unknown command: {cmd}")
                print("Type /help for available commands.")
        except ValueError:
            print("  Invalid id. Use a number, or a path like 2/0 for nested lists.")
        except HandlerNotFound as e:
            print(f"  No handler {e}. Use /view to list handlers.")
        except ElmishError as e:
            logger.warning("repl: command %r failed: %s", line, e)
            print(f"  Error: {e}")

    def _remove(self, arg: str | None):
        if not arg:
            print("Usage: /remove <id>")
            return
        path = parse_path(arg)
        self.mount.dispatch(at_path(path[:-1], Remove(id=path[-1])))

    def _step(self, cmd: str, arg: str | None):
        if not arg:
            print(f"Usage: {cmd} <id>")
            return
        inner = Increment() if cmd == "/inc" else Decrement()
        self.mount.dispatch(at_path(parse_path(arg), inner))

    def _view(self):
        print(render_text(self.mount.tree))
        handlers = self.mount.handlers()
        if handlers:
            print("  " + "  ".join(f"{hid}={label}" for hid, label in handlers))

    def _show_history(self, arg: str | None):
        try:
            n = int(arg) if arg else 20
        except ValueError:
            print("Usage: /history [count]")
            return
        if n < 1:
            print("Usage: /history [count]")
            return
        records = self.mount.records[-n:]
        if not records:
            print("  No actions yet.")
            return
        for r in records:
            print(f"  {r.sequence:>4}  {r.timestamp}  {json.dumps(r.action.to_dict(), sort_keys=True)}")

    def _save(self, arg: str | None):
        if not arg:
            print("Usage: /save <path>")
            return
        try:
            Path(arg).write_text(self.mount.to_page(), encoding="utf-8")
        except OSError as e:
            print(f"  Failed to save {arg}: {e}")
            return
        print(f"  Saved to {arg}")

    def _show_help(self):
        print("""
Commands:
  /insert [path]      Insert a counter (into a nested list at path)
  /remove <path>      Remove item, e.g. /remove 3 or /remove 2/0
  /inc <path>         Increment a counter
  /dec <path>         Decrement a counter
  /click <hN>         Click a rendered button by handler id
  /view               Render current tree as text, with handler ids
  /html               Render current tree as HTML
  /state              Show current state as JSON
  /history [n]        Show the last n dispatched actions
  /save <path>        Save a page with embedded state and action log
  /watch [on|off]     Re-render after each change
  /help               Show this help
  /quit               Exit
""")
