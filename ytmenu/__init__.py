"""
ytmenu - Terminal front-end for searching YouTube and playing results with mpv.
"""

__version__ = "1.0.0"
__author__ = "ytmenu contributors"
__description__ = "Search YouTube from the terminal, page through results and play or download them with mpv and yt-dlp."

__all__ = [
    # Config
    'Settings',
    'SettingsStore',

    # Audio
    'AudioDevice',
    'AudioDeviceRegistry',
    'Notifier',

    # Search
    'SearchClient',

    # State
    'AppState',
    'MenuState',
]

from .audio import AudioDevice, AudioDeviceRegistry, Notifier
from .config import Settings, SettingsStore
from .search import SearchClient
from .state import AppState, MenuState
