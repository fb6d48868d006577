import io
import sys

import pytest

from syslab.shell import (
    CMD_MAX,
    INPUT_MAX,
    ShellError,
    main,
    parse_commands,
    read_command,
    run_command,
    split_arguments,
)


def test_read_command_strips_newline():
    stream = io.StringIO("ls -l\npwd\n")
    assert read_command(stream) == "ls -l"
    assert read_command(stream) == "pwd"


def test_read_command_without_newline_at_end():
    assert read_command(io.StringIO("echo hi")) == "echo hi"


def test_read_command_eof_raises():
    with pytest.raises(ShellError):
        read_command(io.StringIO(""))


def test_read_command_truncates_long_line():
    stream = io.StringIO("a" * 300 + "\n")
    first = read_command(stream)
    assert len(first) == INPUT_MAX - 1
    second = read_command(stream)
    assert first + second == "a" * 300


def test_parse_commands_splits_on_semicolon():
    assert parse_commands("ls;pwd;echo hi") == ["ls", "pwd", "echo hi"]


def test_parse_commands_skips_empty_parts():
    assert parse_commands(";;ls;;pwd;") == ["ls", "pwd"]


def test_parse_commands_accepts_maximum():
    line = ";".join(["ls"] * CMD_MAX)
    assert len(parse_commands(line)) == CMD_MAX


def test_parse_commands_too_many_raises():
    line = ";".join(["ls"] * (CMD_MAX + 1))
    with pytest.raises(ShellError, match="Too many commands"):
        parse_commands(line)


def test_split_arguments_ignores_extra_spaces():
    assert split_arguments("  echo   hello  world ") == ["echo", "hello", "world"]


def test_split_arguments_blank_is_empty():
    assert split_arguments("    ") == []


def test_run_command_returns_exit_status():
    assert run_command([sys.executable, "-c", "import sys; sys.exit(3)"]) == 3


def test_run_command_success():
    assert run_command([sys.executable, "-c", "pass"]) == 0


def test_run_command_not_found(capsys):
    status = run_command(["no-such-command-for-syslab-tests"])
    assert status == 1
    assert "Command not found: no-such-command-for-syslab-tests" in capsys.readouterr().out


def test_run_command_empty_raises():
    with pytest.raises(ShellError):
        run_command([])


def test_main_quit(monkeypatch, capsys):
    monkeypatch.setattr(sys, "stdin", io.StringIO("quit\n"))
    assert main([]) == 0
    out = capsys.readouterr().out
    assert out.startswith("$> ")
    assert "Quitting..." in out


def test_main_eof_is_error(monkeypatch, capsys):
    monkeypatch.setattr(sys, "stdin", io.StringIO(""))
    assert main([]) == 1
    assert "Unable to read user input" in capsys.readouterr().err


def test_main_too_many_commands(monkeypatch, capsys):
    line = ";".join(["ls"] * (CMD_MAX + 1))
    monkeypatch.setattr(sys, "stdin", io.StringIO(line + "\n"))
    assert main([]) == 1
    assert "Too many commands" in capsys.readouterr().err


def test_main_runs_commands_then_quits(monkeypatch, capsys):
    missing = "no-such-command-for-syslab-tests"
    monkeypatch.setattr(sys, "stdin", io.StringIO(f"{missing};{missing}\nquit\n"))
    assert main([]) == 0
    out = capsys.readouterr().out
    assert out.count(f"Command not found: {missing}") == 2
    assert out.count("$> ") == 2