"""Main entry point for the elmish CLI."""
from __future__ import annotations

import logging
import sys
from pathlib import Path

from elmish import __version__
from elmish.cli.repl import Repl
from elmish.config import settings
from elmish.kernel.counter import counter
from elmish.kernel.list_of import list_of
from elmish.kernel.mount import Mount
from elmish.kernel.types import ElmishError


def print_help():
    """Print help message."""
    print(f"""
elmish v{__version__}

Usage:
  elmish [options]

Options:
  --nested          Mount a list of lists of counters
  --load PATH       Resume from a page saved with /save
  -h, --help        Show this help
  -v, --version     Show version

Environment:
  ELMISH_LOG_LEVEL       Logging level (default WARNING)
  ELMISH_TRACE_DROPPED   "true" to log actions that hit removed items
  ELMISH_HISTORY_LIMIT   Max action records kept (0 = unlimited)
""")


def parse_args(args: list[str]) -> dict:
    """
    Parse command line arguments.

    Returns dict with:
        nested: bool
        load: str | None
        show_help: bool
        show_version: bool
    """
    result = {
        "nested": False,
        "load": None,
        "show_help": False,
        "show_version": False,
    }

    i = 0
    while i < len(args):
        arg = args[i]

        if arg == "--nested":
            result["nested"] = True
        elif arg == "--load":
            if i + 1 < len(args):
                result["load"] = args[i + 1]
                i += 1
            else:
                print("Error: --load requires a path")
                sys.exit(1)
        elif arg in ("--help", "-h"):
            result["show_help"] = True
        elif arg in ("--version", "-v"):
            result["show_version"] = True
        else:
            print(f"Unknown option: {arg}")
            print("Run 'elmish --help' for usage.")
            sys.exit(1)

        i += 1

    return result


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(sys.argv[1:] if argv is None else argv)

    if args["show_help"]:
        print_help()
        return 0

    if args["show_version"]:
        print(f"elmish {__version__}")
        return 0

    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    component = list_of(list_of(counter)) if args["nested"] else list_of(counter)

    if args["load"]:
        try:
            mount = Mount.from_page(component, Path(args["load"]).read_text(encoding="utf-8"))
        except (OSError, ElmishError) as e:
            print(f"Failed to load {args['load']}: {e}")
            return 1
    else:
        mount = Mount(component)

    Repl(mount).start()
    return 0
