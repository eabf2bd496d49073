#!/usr/bin/env python3
"""
terminal.py

Raw keyboard input for the scoreboard. The terminal is put into cbreak
mode for the lifetime of a ``TerminalSession`` and always restored on the
way out, exceptions included.
"""

import logging
import os
import select
import sys
import termios
import time
import tty
from collections import deque
from typing import Deque, List, Optional, TextIO

import config
from app_state import Command

_LOGGER = logging.getLogger(__name__)

KEY_UP = "\x1b[A"
KEY_DOWN = "\x1b[B"
KEY_UP_APP = "\x1bOA"
KEY_DOWN_APP = "\x1bOB"

KEY_BINDINGS = {
    "q": Command.QUIT,
    "Q": Command.QUIT,
    "j": Command.NEXT,
    KEY_DOWN: Command.NEXT,
    KEY_DOWN_APP: Command.NEXT,
    "k": Command.PREVIOUS,
    KEY_UP: Command.PREVIOUS,
    KEY_UP_APP: Command.PREVIOUS,
    "f": Command.TOGGLE_FILTER,
    "l": Command.TOGGLE_LOGOS,
}


def split_keys(chunk: str) -> List[str]:
    """Split one read into key events: single characters and 3-byte arrow sequences."""
    keys = []
    index = 0
    while index < len(chunk):
        if chunk[index] == "\x1b" and chunk[index + 1 : index + 2] in ("[", "O") and index + 2 < len(chunk):
            keys.append(chunk[index : index + 3])
            index += 3
        else:
            keys.append(chunk[index])
            index += 1
    return keys


def decode_key(key: str) -> Optional[Command]:
    """Map one key event (a character or escape sequence) to a command."""
    return KEY_BINDINGS.get(key)


def decode_keys(chunk: str) -> List[Command]:
    commands = []
    for key in split_keys(chunk):
        command = decode_key(key)
        if command is not None:
            commands.append(command)
    return commands


def _wait_readable(fd: int, timeout: float) -> bool:
    ready, _, _ = select.select([fd], [], [], timeout)
    return bool(ready)


def _read_chunk(fd: int) -> str:
    return os.read(fd, 16).decode("utf-8", errors="ignore")


class TerminalSession:
    """Context manager holding the terminal in cbreak mode."""

    def __init__(self, stream: TextIO = sys.stdin) -> None:
        self.stream = stream
        self._fd: Optional[int] = None
        self._saved = None
        self._pending: Deque[Command] = deque()

    def __enter__(self) -> "TerminalSession":
        if self.stream.isatty():
            self._fd = self.stream.fileno()
            self._saved = termios.tcgetattr(self._fd)
            tty.setcbreak(self._fd)
            _LOGGER.debug("Terminal switched to cbreak mode")
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.restore()

    def restore(self) -> None:
        if self._fd is None or self._saved is None:
            return
        try:
            termios.tcsetattr(self._fd, termios.TCSADRAIN, self._saved)
            _LOGGER.debug("Terminal attributes restored")
        finally:
            self._fd = None
            self._saved = None

    def read_command(self, timeout: float = config.INPUT_POLL_SECONDS) -> Optional[Command]:
        """Next key command, waiting up to *timeout* seconds when none is queued.

        Keys that arrive together in one read are handed out one per call.
        """
        if self._pending:
            return self._pending.popleft()
        if self._fd is None:
            time.sleep(timeout)
            return None
        if not _wait_readable(self._fd, timeout):
            return None
        self._pending.extend(decode_keys(_read_chunk(self._fd)))
        return self._pending.popleft() if self._pending else None
