"""Interactive terminal loop for choosing one SSH host."""

from __future__ import annotations

import codecs
import os
import sys
import time
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional

from sshpick.config import SshHost
from sshpick.filter import HostMatch, filter_and_rank_hosts
from sshpick.renderer import render_ui

_ENTER_ALTERNATE_SCREEN = "\x1b[?1049h"
_LEAVE_ALTERNATE_SCREEN = "\x1b[?1049l"
_HIDE_CURSOR = "\x1b[?25l"
_SHOW_CURSOR = "\x1b[?25h"
_DRAIN_POLL_SECONDS = 0.05
_ESCAPE_WAIT_SECONDS = 0.02


class Key(Enum):
    """The keys the selector distinguishes."""

    CHAR = "char"
    ESC = "esc"
    UP = "up"
    DOWN = "down"
    ENTER = "enter"
    BACKSPACE = "backspace"
    OTHER = "other"


@dataclass(frozen=True)
class KeyEvent:
    """A keyboard event; ``char`` is set for ``Key.CHAR``.

    Only events with ``pressed`` true are acted upon; releases and repeats
    are ignored.
    """

    key: Key
    char: Optional[str] = None
    ctrl: bool = False
    pressed: bool = True


class SelectorState:
    """Query, ranked matches and selection of a running selector."""

    def __init__(self, hosts: Iterable[SshHost]) -> None:
        self.hosts: list[SshHost] = list(hosts)
        self.has_groups = any(host.group is not None for host in self.hosts)
        self.query = ""
        self.selected = 0
        self.matches: list[HostMatch] = filter_and_rank_hosts(self.hosts, self.query)
        self.finished = False
        self.result: Optional[str] = None

    def _refilter(self) -> None:
        self.matches = filter_and_rank_hosts(self.hosts, self.query)

    def _finish(self, result: Optional[str]) -> bool:
        self.finished = True
        self.result = result
        return True

    def handle_key(self, event: KeyEvent) -> bool:
        """Apply *event* and return True once the selection is over.

        After finishing, ``result`` holds the chosen host name, or None when
        the user cancelled with Esc or Ctrl+C.
        """
        if self.finished:
            return True
        if not event.pressed:
            return False

        key = event.key
        last_index = max(len(self.matches) - 1, 0)

        if key is Key.CHAR and event.ctrl and event.char == "c":
            return self._finish(None)
        if key is Key.ESC:
            return self._finish(None)
        if key is Key.UP:
            if self.selected > 0:
                self.selected -= 1
        elif key is Key.DOWN:
            if self.selected < last_index:
                self.selected += 1
        elif key is Key.ENTER:
            if self.matches:
                return self._finish(self.matches[self.selected].host.name)
        elif key is Key.BACKSPACE:
            self.query = self.query[:-1]
            self._refilter()
            self.selected = min(self.selected, max(len(self.matches) - 1, 0))
        elif key is Key.CHAR and event.char:
            self.query += event.char
            self._refilter()
            self.selected = 0
        return False


def _decode_char(char: str) -> KeyEvent:
    if char in ("\r", "\n"):
        return KeyEvent(Key.ENTER)
    if char in ("\x7f", "\x08"):
        return KeyEvent(Key.BACKSPACE)
    code = ord(char)
    if char == "\t" or code == 0:
        return KeyEvent(Key.OTHER)
    if 1 <= code <= 26:
        return KeyEvent(Key.CHAR, chr(code + 96), ctrl=True)
    if code < 0x20:
        return KeyEvent(Key.OTHER)
    return KeyEvent(Key.CHAR, char)


def _decode_keys(data: str) -> list[KeyEvent]:
    """Turn raw terminal input into key events."""
    events: list[KeyEvent] = []
    position = 0
    length = len(data)

    while position < length:
        char = data[position]
        if char != "\x1b":
            events.append(_decode_char(char))
            position += 1
            continue

        if position + 1 >= length or data[position + 1] == "\x1b":
            events.append(KeyEvent(Key.ESC))
            position += 1
            continue

        introducer = data[position + 1]
        if introducer not in "[O":
            events.append(_decode_char(introducer))
            position += 2
            continue

        end = position + 2
        while end < length and not ("@" <= data[end] <= "~"):
            end += 1
        if end >= length:
            events.append(KeyEvent(Key.OTHER))
            break
        final = data[end]
        events.append(KeyEvent({"A": Key.UP, "B": Key.DOWN}.get(final, Key.OTHER)))
        position = end + 1

    return events


class _Terminal:
    """Raw-mode, alternate-screen terminal session on standard input/output."""

    def __enter__(self) -> "_Terminal":
        self._raw_on()
        try:
            sys.stdout.write(_ENTER_ALTERNATE_SCREEN + _HIDE_CURSOR)
            sys.stdout.flush()
        except BaseException:
            self._raw_off()
            raise
        return self

    def __exit__(self, *exc_info: object) -> None:
        try:
            sys.stdout.write(_SHOW_CURSOR + _LEAVE_ALTERNATE_SCREEN)
            sys.stdout.flush()
        finally:
            self._raw_off()

    def _raw_on(self) -> None:
        raise NotImplementedError

    def _raw_off(self) -> None:
        raise NotImplementedError

    def drain(self) -> None:
        raise NotImplementedError

    def read_events(self) -> list[KeyEvent]:
        raise NotImplementedError


class _PosixTerminal(_Terminal):
    def __init__(self) -> None:
        self._fd = sys.stdin.fileno()
        self._saved: Optional[list] = None
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")

    def _raw_on(self) -> None:
        import termios
        import tty

        try:
            self._saved = termios.tcgetattr(self._fd)
            tty.setraw(self._fd)
        except termios.error as error:
            raise OSError(f"cannot switch terminal to raw mode: {error}") from error

    def _raw_off(self) -> None:
        import termios

        if self._saved is not None:
            termios.tcsetattr(self._fd, termios.TCSADRAIN, self._saved)
            self._saved = None

    def _ready(self, timeout: Optional[float]) -> bool:
        import select

        readable, _, _ = select.select([self._fd], [], [], timeout)
        return bool(readable)

    def drain(self) -> None:
        while self._ready(_DRAIN_POLL_SECONDS):
            if not os.read(self._fd, 1024):
                break

    def read_events(self) -> list[KeyEvent]:
        data = os.read(self._fd, 1024)
        if not data:
            raise OSError("standard input was closed")
        while data.endswith(b"\x1b") and self._ready(_ESCAPE_WAIT_SECONDS):
            more = os.read(self._fd, 1024)
            if not more:
                break
            data += more
        return _decode_keys(self._decoder.decode(data))


class _WindowsTerminal(_Terminal):
    def _raw_on(self) -> None:
        pass

    def _raw_off(self) -> None:
        pass

    def drain(self) -> None:
        import msvcrt

        while True:
            time.sleep(_DRAIN_POLL_SECONDS)
            if not msvcrt.kbhit():
                break
            while msvcrt.kbhit():
                msvcrt.getwch()

    def read_events(self) -> list[KeyEvent]:
        import msvcrt

        char = msvcrt.getwch()
        if char in ("\x00", "\xe0"):
            code = msvcrt.getwch()
            return [KeyEvent({"H": Key.UP, "P": Key.DOWN}.get(code, Key.OTHER))]
        if char == "\x1b":
            return [KeyEvent(Key.ESC)]
        return [_decode_char(char)]


def _open_terminal() -> _Terminal:
    if not sys.stdin.isatty():
        raise OSError("standard input is not a terminal")
    if sys.platform == "win32":
        return _WindowsTerminal()
    return _PosixTerminal()


def _draw(state: SelectorState) -> None:
    render_ui(state.matches, state.selected, state.query, state.has_groups)


def run_selector(hosts: Iterable[SshHost]) -> Optional[str]:
    """Let the user pick a host in a full-screen terminal list.

    Typing filters, Up/Down move, Enter picks and Esc or Ctrl+C cancels.
    Returns the chosen host name, or None when cancelled. Raises OSError
    when the terminal cannot be used.
    """
    state = SelectorState(hosts)
    with _open_terminal() as terminal:
        _draw(state)
        terminal.drain()
        try:
            while True:
                for event in terminal.read_events():
                    if not event.pressed:
                        continue
                    if state.handle_key(event):
                        return state.result
                    _draw(state)
        except KeyboardInterrupt:
            return None