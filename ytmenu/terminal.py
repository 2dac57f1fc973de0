"""
Terminal handling: raw keystroke input, full-screen redraws and prompts.
"""
import os
import select
import shutil
import signal
import sys
import termios
import tty
from contextlib import contextmanager
from typing import Any, Dict, Iterator, Optional

from .config import POLL_INTERVAL
from .logging_config import get_logger, TerminalError

logger = get_logger('terminal')

CLEAR = "\033[2J\033[H"
HIDE_CURSOR = "\033[?25l"
SHOW_CURSOR = "\033[?25h"

# Escape sequences emitted by common terminals
KEY_SEQUENCES: Dict[str, str] = {
    "\x1b[A": "up",
    "\x1b[B": "down",
    "\x1b[C": "right",
    "\x1b[D": "left",
    "\x1bOA": "up",
    "\x1bOB": "down",
    "\x1bOC": "right",
    "\x1bOD": "left",
    "\x1b[5~": "pageup",
    "\x1b[6~": "pagedown",
}

EXIT_SIGNALS = ("SIGINT", "SIGTERM", "SIGHUP")


def decode_key(data: str) -> str:
    """Map raw input to a key name.

    Arrow and paging sequences become "up", "down", "left", "right",
    "pageup" and "pagedown"; Enter becomes "enter", Tab "tab", a lone
    escape "escape". Anything else is returned unchanged.
    """
    if data in KEY_SEQUENCES:
        return KEY_SEQUENCES[data]
    if data in ("\r", "\n"):
        return "enter"
    if data == "\t":
        return "tab"
    if data == "\x1b":
        return "escape"
    return data


def _exit_on_signal(signum: int, frame: Any = None) -> None:
    """Turn termination signals into SystemExit so cleanup blocks run."""
    logger.info(f"Received signal {signum}, exiting")
    raise SystemExit(128 + signum)


def _leave_to_child(signum: int, frame: Any = None) -> None:
    logger.debug("Interrupt left to the foreground child")


@contextmanager
def interrupts_to_child() -> Iterator[None]:
    """Let Ctrl-C stop a foreground child without stopping the menu.

    The terminal sends SIGINT to the whole process group. A no-op handler
    (rather than SIG_IGN, which exec would pass on) keeps this process
    waiting for the child while the child gets its default behaviour.
    """
    previous = signal.signal(signal.SIGINT, _leave_to_child)
    try:
        yield
    finally:
        signal.signal(signal.SIGINT, previous)


class Terminal:
    """The controlling terminal, switched between raw and line mode."""

    def __init__(self, stdin=None, stdout=None):
        self.stdin = stdin if stdin is not None else sys.stdin
        self.stdout = stdout if stdout is not None else sys.stdout
        self._saved_attrs = None
        self._raw = False

    def check(self) -> None:
        if not self.stdin.isatty():
            raise TerminalError("ytmenu must run in an interactive terminal")

    @property
    def fd(self) -> int:
        return self.stdin.fileno()

    def width(self) -> int:
        return shutil.get_terminal_size().columns

    def write(self, text: str) -> None:
        self.stdout.write(text)
        self.stdout.flush()

    def _enter_raw(self) -> None:
        tty.setcbreak(self.fd)
        self.write(HIDE_CURSOR)
        self._raw = True

    def _leave_raw(self) -> None:
        if self._saved_attrs is not None:
            termios.tcsetattr(self.fd, termios.TCSADRAIN, self._saved_attrs)
        self.write(SHOW_CURSOR)
        self._raw = False

    @contextmanager
    def raw(self) -> Iterator["Terminal"]:
        """Keystroke mode for the duration of the block.

        The original line discipline is restored on every way out,
        including SIGINT, SIGTERM and SIGHUP.
        """
        self._saved_attrs = termios.tcgetattr(self.fd)
        previous = {}
        for name in EXIT_SIGNALS:
            signum = getattr(signal, name, None)
            if signum is not None:
                previous[signum] = signal.signal(signum, _exit_on_signal)
        try:
            self._enter_raw()
            yield self
        finally:
            self._leave_raw()
            for signum, handler in previous.items():
                signal.signal(signum, handler)
            self._saved_attrs = None

    @contextmanager
    def suspended(self) -> Iterator[None]:
        """Temporarily hand the terminal back in line mode."""
        was_raw = self._raw
        if was_raw:
            self._leave_raw()
        try:
            yield
        finally:
            if was_raw:
                self._enter_raw()

    @contextmanager
    def handed_off(self) -> Iterator[None]:
        """Line mode for a foreground child process that owns Ctrl-C."""
        with self.suspended(), interrupts_to_child():
            yield

    def read_key(self, timeout: float = POLL_INTERVAL) -> Optional[str]:
        """Wait up to ``timeout`` seconds for one key, None if nothing arrived."""
        if not select.select([self.fd], [], [], timeout)[0]:
            return None
        data = os.read(self.fd, 1)
        if not data:
            return None
        if data == b"\x1b":
            # Collect the rest of an escape sequence if it follows immediately
            while select.select([self.fd], [], [], 0.01)[0]:
                chunk = os.read(self.fd, 1)
                if not chunk:
                    break
                data += chunk
                if len(data) >= 6 or (len(data) >= 3 and (chunk.isalpha() or chunk == b"~")):
                    break
        return decode_key(data.decode("utf-8", errors="replace"))

    def draw(self, screen: str) -> None:
        self.write(CLEAR + screen)

    def clear(self) -> None:
        self.write(CLEAR)

    def prompt(self, text: str) -> str:
        """Read a line of input in line mode."""
        with self.suspended():
            self.write(text)
            return self.stdin.readline().rstrip("\n")

    def confirm(self, question: str) -> bool:
        answer = self.prompt(f"{question} [y/N] ")
        return answer.strip().lower() in ("y", "yes")
