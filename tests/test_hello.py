import platform
from types import SimpleNamespace

import pytest

from syslab.hello import NO_USER_MESSAGE, main, system_greeting, user_line


@pytest.fixture
def fake_uname(monkeypatch):
    info = SimpleNamespace(
        system="Linux", node="host", release="1.0", version="#1", machine="x86_64"
    )
    monkeypatch.setattr(platform, "uname", lambda: info)
    return info


def test_system_greeting_fields(fake_uname):
    assert system_greeting() == "Hello Linux:host:1.0:#1:zx86_64"


def test_system_greeting_real_system_starts_with_hello():
    greeting = system_greeting()
    assert greeting.startswith("Hello ")
    assert greeting.count(":") >= 4


def test_user_line_with_user(monkeypatch):
    monkeypatch.setenv("USER", "alice")
    assert user_line() == "alice"


def test_user_line_without_user(monkeypatch):
    monkeypatch.delenv("USER", raising=False)
    assert user_line() == NO_USER_MESSAGE
    assert NO_USER_MESSAGE == "User information not returned by the operating system."


def test_main_prints_greeting_and_user(fake_uname, monkeypatch, capsys):
    monkeypatch.setenv("USER", "bob")
    assert main([]) == 0
    out = capsys.readouterr().out
    assert out == "Hello Linux:host:1.0:#1:zx86_64\nbob\n"


def test_main_without_user(fake_uname, monkeypatch, capsys):
    monkeypatch.delenv("USER", raising=False)
    assert main([]) == 0
    out = capsys.readouterr().out
    assert out.endswith(NO_USER_MESSAGE)