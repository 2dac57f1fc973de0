import sys
from contextlib import contextmanager
from pathlib import Path
from typing import Dict, List, Optional

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from ytmenu.app import App
from ytmenu.audio import AudioDevice, AudioDeviceRegistry, Notifier
from ytmenu.config import SettingsStore
from ytmenu.runner import CommandResult, CommandRunner
from ytmenu.terminal import interrupts_to_child


class FakeRunner(CommandRunner):
    """Records invocations and replays canned results per program."""

    def __init__(self, outputs: Optional[Dict[str, object]] = None,
                 available: Optional[List[str]] = None):
        super().__init__()
        self.outputs = outputs or {}
        self.available = available
        self.calls: List[List[str]] = []

    def which(self, cmd):
        if self.available is None or cmd in self.available:
            return f"/usr/bin/{cmd}"
        return None

    def run(self, args, capture=False, background=False):
        args = list(args)
        self.calls.append(args)
        result = self.outputs.get(args[0], CommandResult(0))
        if isinstance(result, Exception):
            raise result
        return result

    def calls_to(self, program):
        return [call for call in self.calls if call[0] == program]


class FakeTerminal:
    """Scripted terminal: queued keys, prompt answers and confirmations."""

    def __init__(self, keys=None, answers=None, confirms=None):
        self.keys = list(keys or [])
        self.answers = list(answers or [])
        self.confirms = list(confirms or [])
        self.output: List[str] = []
        self.screens: List[str] = []
        self.raw_entered = 0
        self.raw_exited = 0
        self.suspensions = 0

    def check(self):
        pass

    def width(self):
        return 80

    def write(self, text):
        self.output.append(text)

    def draw(self, screen):
        self.screens.append(screen)

    def clear(self):
        pass

    @contextmanager
    def raw(self):
        self.raw_entered += 1
        try:
            yield self
        finally:
            self.raw_exited += 1

    @contextmanager
    def suspended(self):
        self.suspensions += 1
        yield

    @contextmanager
    def handed_off(self):
        with self.suspended(), interrupts_to_child():
            yield

    def read_key(self, timeout=0.0):
        if not self.keys:
            return "q"
        return self.keys.pop(0)

    def prompt(self, text):
        return self.answers.pop(0) if self.answers else ""

    def confirm(self, question):
        return self.confirms.pop(0) if self.confirms else False


def search_output(*entries):
    """yt-dlp --dump-json output for (title, url) pairs."""
    import json
    return "\n".join(json.dumps({"title": t, "url": u}) for t, u in entries) + "\n"


def make_results(count):
    return [(f"Video {i}", f"https://www.youtube.com/watch?v=id{i}") for i in range(count)]


@pytest.fixture
def config_dir(tmp_path, monkeypatch):
    """Isolated configuration directory."""
    path = tmp_path / "config"
    monkeypatch.setenv("YTMENU_CONFIG_DIR", str(path))
    return path


@pytest.fixture
def store(config_dir):
    return SettingsStore(config_dir / "settings.conf")


@pytest.fixture
def registry():
    return AudioDeviceRegistry([
        AudioDevice("default", is_default=True),
        AudioDevice("hw:0,0"),
        AudioDevice("hw:1,3"),
    ])


@pytest.fixture
def sound(config_dir):
    config_dir.mkdir(parents=True, exist_ok=True)
    path = config_dir / "done.wav"
    path.write_bytes(b"RIFF")
    return path


@pytest.fixture
def make_app(store, registry, sound, tmp_path):
    """Build an App wired to fakes."""
    def factory(runner=None, terminal=None, workdir=None):
        runner = runner or FakeRunner()
        terminal = terminal or FakeTerminal()
        workdir = workdir or tmp_path / "work"
        workdir.mkdir(exist_ok=True)
        return App(terminal, runner, store, registry, Notifier(runner, sound), workdir=workdir)
    return factory
