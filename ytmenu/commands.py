"""
Single-keystroke commands of the result menu.
"""
from pathlib import Path
from typing import TYPE_CHECKING, Callable, Dict, List, Optional

from .logging_config import get_logger, CommandError
from .media import download_command, player_command, playable, shuffle_command

if TYPE_CHECKING:
    from .app import App

logger = get_logger('commands')

# key -> Dispatcher method name
COMMANDS: Dict[str, str] = {
    "enter": "play",
    "d": "download",
    "l": "shuffle_local",
    "p": "toggle_search_mode",
    "c": "cycle_audio_device",
    "s": "new_search",
    "v": "toggle_audio_only",
    "tab": "toggle_site",
    "q": "quit",
}


class Dispatcher:
    """Runs the side effect bound to a key.

    Every handler returns True to keep the menu running and False to quit.
    """

    def __init__(self, app: "App", workdir: Optional[Path] = None):
        self.app = app
        self.workdir = workdir or Path.cwd()

    def lookup(self, key: str) -> Optional[Callable[[], bool]]:
        name = COMMANDS.get(key if len(key) > 1 else key.lower())
        return getattr(self, name) if name else None

    def dispatch(self, key: str) -> bool:
        handler = self.lookup(key)
        if handler is None:
            return True
        logger.debug(f"Key {key!r} -> {handler.__name__}")
        return handler()

    def _external(self, cmd: List[str]) -> None:
        """Run a foreground tool with the terminal in line mode."""
        logger.info(f"Starting {cmd[0]}")
        with self.app.terminal.handed_off():
            self.app.terminal.clear()
            try:
                self.app.runner.run(cmd)
            except CommandError as e:
                logger.error(f"{cmd[0]} failed to start: {e}")

    # Media -----------------------------------------------------------------

    def play(self) -> bool:
        url = self.app.state.selected_url()
        if url is None:
            return True
        settings = self.app.state.settings
        self._external(player_command([playable(url)], device=self.app.device,
                                      audio_only=settings.audio_only))
        return True

    def download(self) -> bool:
        url = self.app.state.selected_url()
        if url is None:
            return True
        self._external(download_command(url, self.app.state.settings.audio_only))
        return True

    def shuffle_local(self) -> bool:
        cmd = shuffle_command(self.workdir, self.app.device, self.app.state.settings.audio_only)
        if cmd:
            self._external(cmd)
        return True

    # Settings --------------------------------------------------------------

    def toggle_search_mode(self) -> bool:
        self.app.state.settings.toggle_search_mode()
        self.app.persist()
        return True

    def cycle_audio_device(self) -> bool:
        settings = self.app.state.settings
        settings.audio_device_index = self.app.registry.next_index(settings.audio_device_index)
        logger.info(f"Audio device -> {self.app.device}")
        self.app.persist()
        return True

    def toggle_audio_only(self) -> bool:
        self.app.state.settings.toggle_audio_only()
        self.app.persist()
        return True

    def toggle_site(self) -> bool:
        self.app.state.settings.toggle_site()
        self.app.persist()
        return True

    # Flow ------------------------------------------------------------------

    def new_search(self) -> bool:
        keep_going = self.app.new_search()
        self.app.persist()
        return keep_going

    def quit(self) -> bool:
        self.app.persist()
        return False
