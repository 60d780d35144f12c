"""
CLI -- argument parsing and REPL commands.
"""

import builtins

import pytest

from elmish.cli.main import main, parse_args
from elmish.cli.repl import Repl, parse_path
from elmish.kernel.mount import Mount
from elmish.kernel.types import Component
from elmish.kernel.ui import div


@pytest.fixture
def repl(mount):
    return Repl(mount, watch=False)


class TestParseArgs:
    def test_defaults(self):
        assert parse_args([]) == {"nested": False, "load": None, "show_help": False, "show_version": False}

    def test_flags(self):
        args = parse_args(["--nested", "--load", "page.html"])
        assert args["nested"] is True
        assert args["load"] == "page.html"

    def test_unknown_option_exits(self):
        with pytest.raises(SystemExit):
            parse_args(["--bogus"])

    def test_load_requires_path(self):
        with pytest.raises(SystemExit):
            parse_args(["--load"])


class TestParsePath:
    def test_single(self):
        assert parse_path("3") == [3]

    def test_nested(self):
        assert parse_path("2/0") == [2, 0]

    def test_invalid(self):
        with pytest.raises(ValueError):
            parse_path("a")


class TestReplCommands:
    def test_insert_inc_remove(self, repl, mount):
        repl._handle_command("/insert")
        repl._handle_command("/insert")
        repl._handle_command("/inc 1")
        repl._handle_command("/dec 0")
        repl._handle_command("/remove 0")
        assert mount.state.to_dict() == {"items": [{"id": 1, "state": 1}], "nextId": 2}

    def test_stale_id_is_silent(self, repl, mount, capsys):
        repl._handle_command("/inc 5")
        assert capsys.readouterr().out == ""
        assert len(mount.records) == 1

    def test_invalid_id(self, repl, capsys):
        repl._handle_command("/inc x")
        assert "Invalid id" in capsys.readouterr().out

    def test_click(self, repl, mount):
        repl._handle_command("/click h0")
        assert mount.state.ids() == [0]

    def test_click_unknown(self, repl, capsys):
        repl._handle_command("/click h7")
        assert "No handler h7" in capsys.readouterr().out

    def test_view_lists_handlers(self, repl, capsys):
        repl._handle_command("/insert")
        capsys.readouterr()
        repl._handle_command("/view")
        out = capsys.readouterr().out
        assert "[insert]" in out
        assert "h3=x" in out

    def test_state_json(self, repl, capsys):
        repl._handle_command("/insert")
        repl._handle_command("/state")
        assert capsys.readouterr().out.strip().endswith('{"items": [{"id": 0, "state": 0}], "nextId": 1}')

    def test_history(self, repl, capsys):
        repl._handle_command("/history")
        assert "No actions yet." in capsys.readouterr().out
        repl._handle_command("/insert")
        repl._handle_command("/history 1")
        assert '{"type": "insert"}' in capsys.readouterr().out

    def test_history_bad_count(self, repl, capsys):
        repl._handle_command("/history abc")
        out = capsys.readouterr().out
        assert "Usage: /history [count]" in out
        assert "Invalid id" not in out

    def test_history_zero_count(self, repl, capsys):
        repl._handle_command("/insert")
        repl._handle_command("/history 0")
        assert "Usage: /history [count]" in capsys.readouterr().out

    def test_watch_prints_after_change(self, mount, capsys):
        r = Repl(mount, watch=True)
        r._handle_command("/insert")
        assert "[-] 0 [+] [x]" in capsys.readouterr().out

    def test_quit(self, repl):
        repl._handle_command("/quit")
        assert repl.running is False

    def test_unknown_command(self, repl, capsys):
        repl._handle_command("/frobnicate")
        assert "Unknown command" in capsys.readouterr().out

    def test_nested_paths(self, nested, capsys):
        m = Mount(nested, history_limit=0)
        r = Repl(m, watch=False)
        r._handle_command("/insert")
        r._handle_command("/insert 0")
        r._handle_command("/inc 0/0")
        assert m.state.to_dict() == {
            "items": [{"id": 0, "state": {"items": [{"id": 0, "state": 1}], "nextId": 1}}],
            "nextId": 1,
        }
        r._handle_command("/remove 0/0")
        assert m.state.get(0).state.ids() == []


class TestMain:
    def test_save_and_load(self, repl, mount, tmp_path, monkeypatch, capsys):
        repl._handle_command("/insert")
        repl._handle_command("/inc 0")
        path = tmp_path / "page.html"
        repl._handle_command(f"/save {path}")
        assert path.exists()

        def eof(prompt=""):
            raise EOFError

        monkeypatch.setattr(builtins, "input", eof)
        capsys.readouterr()
        assert main(["--load", str(path)]) == 0
        assert "[-] 1 [+] [x]" in capsys.readouterr().out

    def test_load_missing_file(self, tmp_path, capsys):
        assert main(["--load", str(tmp_path / "missing.html")]) == 1
        assert "Failed to load" in capsys.readouterr().out

    def test_save_to_missing_directory(self, repl, mount, tmp_path, capsys):
        path = tmp_path / "missing" / "p.html"
        repl._handle_command(f"/save {path}")
        assert "Failed to save" in capsys.readouterr().out
        assert not path.exists()

        repl._handle_command("/insert")
        assert repl.running is True
        assert mount.state.ids() == [0]

    def test_loop_survives_failed_save(self, repl, mount, tmp_path, monkeypatch, capsys):
        lines = iter([f"/save {tmp_path / 'missing' / 'p.html'}", "/insert"])

        def next_line(prompt=""):
            try:
                return next(lines)
            except StopIteration:
                raise EOFError from None

        monkeypatch.setattr(builtins, "input", next_line)
        repl.start()
        assert "Failed to save" in capsys.readouterr().out
        assert mount.state.ids() == [0]

    def test_loop_reports_unexpected_errors(self, monkeypatch, capsys):
        def broken(state, action):
            raise RuntimeError("reducer blew up")

        m = Mount(Component(init=lambda: 0, reducer=broken, render=lambda s, d: div(str(s)), name="broken"))
        lines = iter(["/insert", "/quit"])
        monkeypatch.setattr(builtins, "input", lambda prompt="": next(lines))

        r = Repl(m, watch=False)
        r.start()
        out = capsys.readouterr().out
        assert "Error: reducer blew up" in out
        assert "Goodbye." in out

    def test_version(self, capsys):
        assert main(["--version"]) == 0
        assert capsys.readouterr().out.startswith("elmish ")
