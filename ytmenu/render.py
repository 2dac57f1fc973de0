"""
Screen rendering. Every function here is pure: state in, text out.
"""
import unicodedata
from functools import lru_cache
from typing import List

from .state import AppState

C_HEADER = "\033[1m"
C_SECONDARY = "\033[90m"
C_SELECTION = "\033[7m"
C_RESET = "\033[0m"

SITE_LABELS = {"youtube": "YouTube", "music": "YouTube Music"}

HELP_LINES = [
    "up/down j/k move   left/right page   enter play   d download   l shuffle local",
    "s search   p videos/playlists   tab site   c audio device   v audio only   q quit",
]


@lru_cache(maxsize=4096)
def _char_display_width(ch: str) -> int:
    """Return display width of a single Unicode character (0, 1 or 2)."""
    cat = unicodedata.category(ch)
    if cat in ("Mn", "Me", "Cf"):
        return 0
    if unicodedata.east_asian_width(ch) in ("F", "W"):
        return 2
    return 1


def display_width(text: str) -> int:
    return sum(_char_display_width(ch) for ch in text)


def truncate_to_width(text: str, max_width: int, ellipsis: str = "...") -> str:
    """Truncate plain ``text`` to fit in ``max_width`` display columns."""
    if max_width <= 0:
        return ""
    if display_width(text) <= max_width:
        return text

    target = max_width - len(ellipsis) if len(ellipsis) < max_width else max_width
    out = []
    cur = 0
    for ch in text:
        w = _char_display_width(ch)
        if cur + w > target:
            break
        out.append(ch)
        cur += w
    if target == max_width:
        return "".join(out)
    return "".join(out) + ellipsis


def render_header(state: AppState, device: str) -> List[str]:
    settings = state.settings
    visible = state.visible_range()
    if visible:
        shown = f"{visible.start + 1}-{visible.stop} of {len(state.titles)}"
    else:
        shown = "0 of 0"
    return [
        f"{C_HEADER}ytmenu{C_RESET}  {SITE_LABELS.get(settings.site, settings.site)}"
        f"  search: {state.query or '-'}",
        f"{C_SECONDARY}mode: {settings.search_mode}"
        f"  device: {device}"
        f"  audio only: {'on' if settings.audio_only else 'off'}"
        f"  page {state.menu.page + 1}/{state.max_pages}"
        f"  showing {shown}{C_RESET}",
        "",
    ]


def render_body(state: AppState, width: int) -> List[str]:
    lines = []
    start = state.menu.page * state.per_page
    for row in range(state.per_page):
        index = start + row
        selected = row == state.menu.cursor_row
        if index < len(state.titles):
            text = truncate_to_width(f"{index + 1:>3}. {state.titles[index]}", width - 2)
        else:
            text = ""
        if selected:
            lines.append(f"{C_SELECTION}> {text}{C_RESET}")
        else:
            lines.append(f"  {text}")
    return lines


def render(state: AppState, device: str, width: int = 80) -> str:
    """The whole screen for ``state``."""
    lines = render_header(state, device)
    lines.extend(render_body(state, width))
    lines.append("")
    lines.extend(f"{C_SECONDARY}{truncate_to_width(line, width)}{C_RESET}" for line in HELP_LINES)
    return "\n".join(lines) + "\n"
