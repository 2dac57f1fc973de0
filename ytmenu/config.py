"""
Settings persistence for ytmenu.
"""
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, Optional

from .logging_config import get_logger, ConfigurationError

logger = get_logger('config')

# =============================================================================
# Constants
# =============================================================================
RESULTS_PER_PAGE: int = 10
MAX_RESULTS: int = 60
TITLE_LIMIT: int = 200
VIDEO_MAX_HEIGHT: int = 720
POLL_INTERVAL: float = 0.05

SITES = ("youtube", "music")
SITE_URLS: Dict[str, str] = {
    "youtube": "https://www.youtube.com",
    "music": "https://music.youtube.com",
}
SEARCH_MODES = ("videos", "playlists")

SETTINGS_FILENAME = "settings.conf"
SOUND_FILENAME = "done.wav"


@dataclass
class Settings:
    """Persisted user preferences."""

    site: str = "youtube"
    search_mode: str = "videos"
    audio_device_index: int = 0
    audio_only: bool = False

    def toggle_site(self) -> None:
        self.site = SITES[(SITES.index(self.site) + 1) % len(SITES)]

    def toggle_search_mode(self) -> None:
        self.search_mode = SEARCH_MODES[
            (SEARCH_MODES.index(self.search_mode) + 1) % len(SEARCH_MODES)
        ]

    def toggle_audio_only(self) -> None:
        self.audio_only = not self.audio_only


def get_config_dir() -> Path:
    """Get the configuration directory following the XDG base directory layout.

    Returns:
        Path to the config directory (~/.config/ytmenu by default)
    """
    override = os.environ.get("YTMENU_CONFIG_DIR")
    if override:
        return Path(override)
    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        return Path(xdg_config) / "ytmenu"
    return Path.home() / ".config" / "ytmenu"


# =============================================================================
# Value parsing
# =============================================================================
def _parse_choice(choices) -> Callable[[str], str]:
    def parse(value: str) -> str:
        if value not in choices:
            raise ConfigurationError(f"expected one of {', '.join(choices)}, got {value!r}")
        return value
    return parse


def _parse_index(value: str) -> int:
    try:
        index = int(value)
    except ValueError:
        raise ConfigurationError(f"expected an integer, got {value!r}")
    if index < 0:
        raise ConfigurationError(f"expected a non-negative integer, got {index}")
    return index


def _parse_bool(value: str) -> bool:
    lowered = value.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    raise ConfigurationError(f"expected true or false, got {value!r}")


def _format_bool(value: bool) -> str:
    return "true" if value else "false"


# file key -> (attribute, parser, formatter), in write order
FIELDS = {
    "SITE": ("site", _parse_choice(SITES), str),
    "SEARCH_TYPE": ("search_mode", _parse_choice(SEARCH_MODES), str),
    "AUDIO_DEVICE_INDEX": ("audio_device_index", _parse_index, str),
    "AUDIO_ONLY_MODE": ("audio_only", _parse_bool, _format_bool),
}


def parse_settings(text: str) -> Settings:
    """Build Settings from KEY=VALUE lines, keeping defaults for anything unusable."""
    settings = Settings()
    for lineno, raw in enumerate(text.splitlines(), 1):
        line = raw.strip()
        if not line or "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        if key not in FIELDS:
            continue
        attr, parse, _ = FIELDS[key]
        try:
            setattr(settings, attr, parse(value.strip()))
        except ConfigurationError as e:
            logger.warning(f"Ignoring {key} on line {lineno}: {e}")
    return settings


def format_settings(settings: Settings) -> str:
    lines = []
    for key, (attr, _, fmt) in FIELDS.items():
        lines.append(f"{key}={fmt(getattr(settings, attr))}")
    return "\n".join(lines) + "\n"


class SettingsStore:
    """Loads and saves Settings to a flat KEY=VALUE file."""

    def __init__(self, path: Optional[Path] = None):
        self.path = path or get_config_dir() / SETTINGS_FILENAME

    def load(self) -> Settings:
        """Load settings; never raises."""
        try:
            text = self.path.read_text()
        except FileNotFoundError:
            logger.info(f"No settings at {self.path}, using defaults")
            return Settings()
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Failed to read settings: {e}")
            return Settings()

        settings = parse_settings(text)
        logger.debug(f"Settings loaded from {self.path}: {settings}")
        return settings

    def save(self, settings: Settings) -> bool:
        """Rewrite the settings file.

        Returns:
            True if the file was written, False otherwise
        """
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w") as f:
                f.write(format_settings(settings))
        except OSError as e:
            logger.error(f"Failed to save settings: {e}")
            return False

        logger.debug(f"Settings saved to {self.path}")
        return True
