"""Tests for keyboard decoding and terminal mode handling."""

import io
import os

import pytest

from app_state import Command
from services import terminal


@pytest.mark.parametrize(
    "chunk, expected",
    [
        ("q", Command.QUIT),
        ("j", Command.NEXT),
        ("\x1b[B", Command.NEXT),
        ("\x1bOB", Command.NEXT),
        ("k", Command.PREVIOUS),
        ("\x1b[A", Command.PREVIOUS),
        ("f", Command.TOGGLE_FILTER),
        ("l", Command.TOGGLE_LOGOS),
        ("x", None),
        ("\x1b[C", None),
        ("\x1b", None),
        ("", None),
    ],
)
def test_decode_key(chunk, expected):
    assert terminal.decode_key(chunk) is expected


@pytest.mark.parametrize(
    "chunk, expected",
    [
        ("jj", [Command.NEXT, Command.NEXT]),
        ("\x1b[B\x1b[B", [Command.NEXT, Command.NEXT]),
        ("j\x1b[Ak", [Command.NEXT, Command.PREVIOUS, Command.PREVIOUS]),
        ("xfq", [Command.TOGGLE_FILTER, Command.QUIT]),
        ("\x1b", []),
    ],
)
def test_decode_keys_keeps_every_key_in_a_burst(chunk, expected):
    assert terminal.decode_keys(chunk) == expected


class _FakeTty:
    def isatty(self):
        return True

    def fileno(self):
        return 7


@pytest.fixture
def fake_termios(monkeypatch):
    calls = []
    monkeypatch.setattr(terminal.termios, "tcgetattr", lambda fd: ["saved", fd])
    monkeypatch.setattr(terminal.termios, "tcsetattr", lambda fd, when, attrs: calls.append(("restore", fd, attrs)))
    monkeypatch.setattr(terminal.tty, "setcbreak", lambda fd: calls.append(("cbreak", fd)))
    return calls


def test_session_restores_terminal_on_error(fake_termios):
    with pytest.raises(RuntimeError):
        with terminal.TerminalSession(_FakeTty()):
            raise RuntimeError("boom")

    assert fake_termios == [("cbreak", 7), ("restore", 7, ["saved", 7])]


def test_read_command_decodes_ready_input(monkeypatch, fake_termios):
    monkeypatch.setattr(terminal, "_wait_readable", lambda fd, timeout: True)
    monkeypatch.setattr(terminal, "_read_chunk", lambda fd: "\x1b[A")

    with terminal.TerminalSession(_FakeTty()) as session:
        assert session.read_command(0.01) is Command.PREVIOUS


def test_read_command_times_out(monkeypatch, fake_termios):
    monkeypatch.setattr(terminal, "_wait_readable", lambda fd, timeout: False)

    with terminal.TerminalSession(_FakeTty()) as session:
        assert session.read_command(0.01) is None


def test_non_tty_session_is_inert(monkeypatch):
    monkeypatch.setattr(terminal.time, "sleep", lambda seconds: None)

    with terminal.TerminalSession(io.StringIO()) as session:
        assert session.read_command(0.5) is None


def test_burst_is_handed_out_one_key_per_call(monkeypatch, fake_termios):
    reads = []
    monkeypatch.setattr(terminal, "_wait_readable", lambda fd, timeout: True)
    monkeypatch.setattr(terminal, "_read_chunk", lambda fd: reads.append(fd) or "jj")

    with terminal.TerminalSession(_FakeTty()) as session:
        assert session.read_command(0.01) is Command.NEXT
        assert session.read_command(0.01) is Command.NEXT

    assert len(reads) == 1


def test_pipe_burst_loses_no_keys():
    read_fd, write_fd = os.pipe()
    try:
        os.write(write_fd, b"jj")
        session = terminal.TerminalSession(io.StringIO())
        session._fd = read_fd

        commands = [session.read_command(0.05), session.read_command(0.05), session.read_command(0.05)]
    finally:
        os.close(read_fd)
        os.close(write_fd)

    assert commands == [Command.NEXT, Command.NEXT, None]
