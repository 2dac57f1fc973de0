"""
State management module for ytmenu.
"""
from dataclasses import dataclass, field, replace
from typing import List, Optional

from .config import RESULTS_PER_PAGE, Settings
from .logging_config import get_logger

logger = get_logger('state')


@dataclass
class MenuState:
    """Current page and highlighted row within it."""
    page: int = 0
    cursor_row: int = 0


@dataclass
class AppState:
    """Everything the interactive loop owns."""
    settings: Settings = field(default_factory=Settings)
    query: str = ""
    titles: List[str] = field(default_factory=list)
    urls: List[str] = field(default_factory=list)
    menu: MenuState = field(default_factory=MenuState)
    per_page: int = RESULTS_PER_PAGE

    @property
    def browsing(self) -> bool:
        return bool(self.titles)

    @property
    def max_pages(self) -> int:
        return max(1, -(-len(self.titles) // self.per_page))

    def selected_index(self) -> Optional[int]:
        """Absolute index under the cursor, or None when it points past the results."""
        index = self.menu.page * self.per_page + self.menu.cursor_row
        if 0 <= index < len(self.titles):
            return index
        return None

    def selected_url(self) -> Optional[str]:
        index = self.selected_index()
        return None if index is None else self.urls[index]

    def visible_range(self) -> range:
        start = self.menu.page * self.per_page
        return range(start, min(start + self.per_page, len(self.titles)))

    # Navigation ------------------------------------------------------------

    def move_cursor(self, direction: int) -> None:
        """Move the cursor one row, wrapping inside the current page."""
        self.menu.cursor_row = (self.menu.cursor_row + direction) % self.per_page
        logger.debug(f"Cursor row {self.menu.cursor_row} on page {self.menu.page}")

    def change_page(self, direction: int) -> bool:
        """Move one page, clamped to the available pages.

        Returns:
            False when the move hit a boundary and nothing changed
        """
        target = self.menu.page + direction
        if target < 0 or target > self.max_pages - 1:
            logger.debug(f"Page boundary hit at page {self.menu.page}")
            return False
        self.menu.page = target
        return True

    # Results ---------------------------------------------------------------

    def load_results(self, query: str, titles: List[str], urls: List[str]) -> None:
        if len(titles) != len(urls):
            raise ValueError("titles and urls must be the same length")
        self.query = query
        self.titles = list(titles)
        self.urls = list(urls)
        self.menu = MenuState()

    def snapshot(self) -> "ResultSnapshot":
        return ResultSnapshot(self.query, list(self.titles), list(self.urls), replace(self.menu))

    def restore(self, snap: "ResultSnapshot") -> None:
        self.query = snap.query
        self.titles = list(snap.titles)
        self.urls = list(snap.urls)
        self.menu = replace(snap.menu)


@dataclass(frozen=True)
class ResultSnapshot:
    """Results and position saved before a new search."""
    query: str
    titles: List[str]
    urls: List[str]
    menu: MenuState
