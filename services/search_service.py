"""
Search Service - settings store and user-facing search messages.

The page keeps its search settings under one named entry in browser
storage. SettingsStore is the command-line equivalent: a JSON file of
named entries. Loading merges stored values over the configured defaults
one field at a time, so an entry holding only a key still picks up the
default URL.

Exports:
    SettingsStore: JSON file of named SiteSettings entries
    format_search_outcome: Render a result or error as a message
"""

import json
from pathlib import Path
from typing import Optional

from config.defaults import SiteDefaults
from core.models import MovieSearchResult, SiteSettings
from exceptions import ConfigurationError, SearchNetworkError
from util_logger import LoggerFactory, ComponentType

logger = LoggerFactory.create_logger(ComponentType.SERVICE, "SearchService")


class SettingsStore:
    """
    Named settings entries persisted as JSON.

    File layout:
        {"apiSettings": {"url": "...", "key": "..."}}
    """

    def __init__(self, path: str, entry: str = SiteDefaults.SETTINGS_ENTRY,
                 defaults: Optional[SiteSettings] = None):
        self.path = Path(path)
        self.entry = entry
        self.defaults = defaults or SiteSettings()

    def _read_all(self) -> dict:
        if not self.path.is_file():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except ValueError as e:
            logger.warning(f"⚠️ Ignoring unreadable settings file {self.path}: {e}")
            return {}
        return data if isinstance(data, dict) else {}

    def load(self) -> SiteSettings:
        """Stored entry merged over defaults; defaults alone when nothing is stored."""
        stored = self._read_all().get(self.entry)
        if not isinstance(stored, dict):
            return self.defaults
        settings = SiteSettings(
            url=str(stored.get("url") or ""),
            key=str(stored.get("key") or ""),
        )
        return settings.merged_over(self.defaults)

    def save(self, settings: SiteSettings) -> None:
        """Write the entry, keeping any other entries in the file."""
        data = self._read_all()
        data[self.entry] = {"url": settings.url, "key": settings.key}
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        logger.info(f"💾 Saved search settings to {self.path}")


def format_search_outcome(title: str, result: Optional[MovieSearchResult] = None,
                          error: Optional[Exception] = None) -> str:
    """
    Turn a search result or failure into a message for the user.

    Never raises.
    """
    if error is not None:
        if isinstance(error, ConfigurationError):
            return f"Search is not configured: {error}"
        if isinstance(error, SearchNetworkError):
            return f"Network error while searching for '{title}': {error}"
        return f"Search for '{title}' failed: {error}"

    if result is None or not result.found:
        return f"No movie found for '{title}'."

    stats = result.stats
    lines = [f"{stats.title or title} ({stats.year if stats.year is not None else 'n/a'})"]
    for label, value in (
        ("Genre", stats.genre),
        ("Director", stats.director),
        ("Actors", stats.actors),
        ("Rating", stats.rating),
        ("Votes", stats.votes),
        ("Runtime (Minutes)", stats.runtime),
        ("Revenue (Millions)", stats.revenue),
        ("Metascore", stats.metascore),
        ("Rank", stats.rank),
        ("Description", stats.description),
    ):
        if value is not None and value != "":
            lines.append(f"  {label}: {value}")
    return "\n".join(lines)
