"""
Search client: one yt-dlp flat-playlist query per search.
"""
import json
import urllib.parse
from typing import Callable, List, Optional, Tuple

from .config import MAX_RESULTS, SITE_URLS, TITLE_LIMIT
from .logging_config import get_logger, CommandError, SearchError
from .runner import CommandRunner

logger = get_logger('search')

PLAYLIST_MARKER = "list=PL"
# YouTube's own "type: playlist" results filter
PLAYLIST_FILTER = "EgIQAw%253D%253D"

Results = Tuple[List[str], List[str]]


def build_target(query: str, mode: str, site: str) -> List[str]:
    """yt-dlp positional target plus any range arguments for a query."""
    if site == "music":
        url = f"{SITE_URLS['music']}/search?q={urllib.parse.quote(query)}"
        return ["--playlist-end", str(MAX_RESULTS), url]
    if mode == "playlists":
        url = (f"{SITE_URLS['youtube']}/results?search_query="
               f"{urllib.parse.quote(query)}&sp={PLAYLIST_FILTER}")
        return ["--playlist-end", str(MAX_RESULTS), url]
    return [f"ytsearch{MAX_RESULTS}:{query}"]


def clean_title(title) -> str:
    """Single-line title cut to TITLE_LIMIT code points."""
    text = str(title or "").replace("\r", " ").replace("\n", " ")
    return text[:TITLE_LIMIT]


def parse_entries(output: str) -> Results:
    """Parse one JSON object per line into index-aligned titles and urls."""
    titles: List[str] = []
    urls: List[str] = []
    for line in output.splitlines():
        line = line.strip()
        if not line:
            continue
        try:
            entry = json.loads(line)
        except json.JSONDecodeError:
            continue
        if not isinstance(entry, dict):
            continue
        url = entry.get("url") or entry.get("id")
        if not url:
            continue
        titles.append(clean_title(entry.get("title")))
        urls.append(str(url))
    return titles, urls


def filter_playlists(titles: List[str], urls: List[str]) -> Results:
    """Keep entries whose URL carries the list=PL marker, in order."""
    kept = [(t, u) for t, u in zip(titles, urls) if PLAYLIST_MARKER in u]
    return [t for t, _ in kept], [u for _, u in kept]


class SearchClient:
    """Runs searches against yt-dlp."""

    def __init__(self, runner: CommandRunner, on_complete: Optional[Callable[[], None]] = None):
        self.runner = runner
        self.on_complete = on_complete

    def _fetch(self, query: str, mode: str, site: str) -> str:
        args = ["yt-dlp", "--flat-playlist", "--dump-json", "--no-warnings"]
        args.extend(build_target(query, mode, site))
        try:
            result = self.runner.run(args, capture=True)
        except CommandError as e:
            raise SearchError(str(e)) from e
        if not result.ok:
            raise SearchError(f"yt-dlp exited with {result.returncode}")
        return result.stdout

    def search(self, query: str, mode: str = "videos", site: str = "youtube") -> Results:
        """Search and return (titles, urls); empty lists on any failure."""
        logger.info(f"Searching {site} {mode} for {query!r}")
        try:
            titles, urls = parse_entries(self._fetch(query, mode, site))
        except SearchError as e:
            logger.warning(f"Search failed: {e}")
            titles, urls = [], []

        if mode == "playlists":
            titles, urls = filter_playlists(titles, urls)

        logger.info(f"{len(titles)} results for {query!r}")
        if self.on_complete:
            self.on_complete()
        return titles, urls
