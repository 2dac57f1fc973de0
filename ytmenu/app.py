"""
ytmenu - search YouTube from the terminal and hand results to mpv / yt-dlp.

The App owns the interactive loop: it draws the result page, turns
navigation keys into page and cursor moves and hands every other key
to the command Dispatcher.
"""
import sys
from pathlib import Path
from typing import List, Optional

from . import __description__, __version__
from .audio import AudioDeviceRegistry, Notifier
from .commands import Dispatcher
from .config import SETTINGS_FILENAME, SOUND_FILENAME, SettingsStore, get_config_dir
from .deps import check_dependencies
from .logging_config import (YtMenuError, default_log_file, get_logger,
                             quiet_console, setup_logging)
from .render import render
from .runner import CommandRunner
from .search import SearchClient
from .state import AppState
from .terminal import Terminal

logger = get_logger('app')

# key -> (axis, direction)
NAVIGATION = {
    "up": ("cursor", -1),
    "k": ("cursor", -1),
    "down": ("cursor", 1),
    "j": ("cursor", 1),
    "left": ("page", -1),
    "h": ("page", -1),
    "pageup": ("page", -1),
    "right": ("page", 1),
    "pagedown": ("page", 1),
}


class App:
    """Interactive search-and-play menu."""

    def __init__(self, terminal: Terminal, runner: CommandRunner, store: SettingsStore,
                 registry: AudioDeviceRegistry, notifier: Notifier,
                 workdir: Optional[Path] = None):
        self.terminal = terminal
        self.runner = runner
        self.store = store
        self.registry = registry
        self.notifier = notifier
        self.state = AppState(settings=store.load())
        self.search_client = SearchClient(runner, on_complete=self.cue)
        self.dispatcher = Dispatcher(self, workdir)

    @property
    def device(self) -> str:
        return self.registry.current(self.state.settings.audio_device_index)

    def cue(self) -> None:
        self.notifier.play(self.device)

    def persist(self) -> None:
        self.store.save(self.state.settings)

    def redraw(self) -> None:
        self.terminal.draw(render(self.state, self.device, self.terminal.width()))

    # Searching -------------------------------------------------------------

    def search(self, query: str) -> bool:
        """Run one search; results replace the list only when there are some."""
        settings = self.state.settings
        self.terminal.clear()
        self.terminal.write(f"Searching for {query!r}...\n")
        titles, urls = self.search_client.search(query, settings.search_mode, settings.site)
        if not titles:
            return False
        self.state.load_results(query, titles, urls)
        return True

    def new_search(self, query: Optional[str] = None) -> bool:
        """Ask for a query until something is found or the user gives up.

        When the user gives up, the previous results and position are put
        back if there were any.

        Returns:
            False when the user chose to quit
        """
        snapshot = self.state.snapshot() if self.state.browsing else None
        while True:
            if query is None:
                self.terminal.clear()
                query = self.terminal.prompt("Search: ").strip()
            if query and self.search(query):
                return True

            question = f"No results for {query!r}. Try again?" if query else "Nothing to search. Try again?"
            if self.terminal.confirm(question):
                query = None
                continue
            if snapshot is not None:
                self.state.restore(snapshot)
                return True
            return False

    # Input -----------------------------------------------------------------

    def navigate(self, axis: str, direction: int) -> None:
        if axis == "cursor":
            self.state.move_cursor(direction)
        elif not self.state.change_page(direction):
            self.cue()

    def handle_key(self, key: str) -> bool:
        """Apply one key press. Returns False when the menu should close."""
        if key in NAVIGATION:
            self.navigate(*NAVIGATION[key])
            return True
        return self.dispatcher.dispatch(key)

    def run(self, initial_query: Optional[str] = None) -> int:
        """Main loop. Returns the process exit code."""
        try:
            with self.terminal.raw():
                if initial_query:
                    if not self.search(initial_query):
                        logger.info(f"Initial query {initial_query!r} found nothing")
                        self.terminal.clear()
                        self.terminal.write(f"No results for {initial_query!r}.\n")
                        return 1
                elif not self.new_search():
                    return 0

                self.redraw()
                while True:
                    key = self.terminal.read_key()
                    if key is None:
                        continue
                    if not self.handle_key(key):
                        break
                    self.redraw()
                self.terminal.clear()
        finally:
            self.persist()
        return 0


# =============================================================================
# Entry point
# =============================================================================
USAGE = """\
Usage:
  ytmenu [QUERY...]    # Search for QUERY, or ask for one
  ytmenu --version     # Show version info
  ytmenu --help        # Show this help
"""


def main(argv: Optional[List[str]] = None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    if "--version" in argv or "-v" in argv:
        print(f"ytmenu {__version__}")
        print(__description__)
        return 0
    if "--help" in argv or "-h" in argv:
        print(f"ytmenu {__version__}\n")
        print(USAGE, end="")
        return 0

    setup_logging(log_file=default_log_file())
    config_dir = get_config_dir()
    runner = CommandRunner()
    terminal = Terminal()
    notifier = Notifier(runner, config_dir / SOUND_FILENAME)

    try:
        terminal.check()
        check_dependencies(runner, need_tts=not notifier.sound_path.exists())
    except YtMenuError as e:
        logger.info(f"Startup failed: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 1

    notifier.ensure_sound()
    registry = AudioDeviceRegistry.detect(runner)
    app = App(terminal, runner, SettingsStore(config_dir / SETTINGS_FILENAME), registry, notifier)

    quiet_console()
    try:
        return app.run(" ".join(argv).strip() or None)
    except KeyboardInterrupt:
        return 0
