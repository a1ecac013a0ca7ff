"""
Theme catalog persistence and validation.

The catalog is a JSON object keyed by theme ID. Each value holds a title, a
display color and exactly nine words, plus any extra keys the admin UI
stores. The file on disk is loaded at startup, rewritten by the admin API and
reloaded when edited by hand (see CatalogWatcher). Both writers go through
ThemeCatalog.apply.
"""

import json
import os
import re
import threading
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from loguru import logger

WORDS_PER_THEME = 9
THEME_ID_PATTERN = re.compile(r'^[a-z0-9-]+$')


class ThemeValidationError(ValueError):
    """Raised when a catalog payload does not describe valid themes.

    Attributes
    ----------
    theme_id : str, optional
        The offending theme, if the problem is with a single entry
    """

    def __init__(self, message: str, theme_id: Optional[str] = None):
        self.theme_id = theme_id
        super().__init__(message)


@dataclass
class Theme(object):
    """A bingo theme.

    Attributes
    ----------
    id : str
        URL-safe identifier, also the room ID used by the theme page
    title : str
        Display title
    color : str
        CSS color for the theme page
    words : List[str]
        The nine board words, in board order
    extra : dict
        Any other keys stored alongside the theme, kept as-is

    """
    id: str
    title: str
    color: str
    words: List[str]
    extra: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, theme_id: str, data: Any) -> 'Theme':
        """Validate and build a Theme. Raises ThemeValidationError."""
        if not THEME_ID_PATTERN.match(theme_id):
            raise ThemeValidationError(
                f"Theme id '{theme_id}' may only contain a-z, 0-9 and '-'", theme_id)
        if not isinstance(data, dict):
            raise ThemeValidationError(f"Theme {theme_id} must be an object", theme_id)

        title = data.get('title')
        if not isinstance(title, str) or not title.strip():
            raise ThemeValidationError(f"Theme {theme_id} needs a title", theme_id)

        words = data.get('words')
        if not isinstance(words, list):
            raise ThemeValidationError(f"Theme {theme_id} needs a list of words", theme_id)
        if len(words) != WORDS_PER_THEME:
            raise ThemeValidationError(
                f"Theme {theme_id} must have exactly {WORDS_PER_THEME} words "
                f"(got {len(words)})", theme_id)
        for word in words:
            if not isinstance(word, str) or not word.strip():
                raise ThemeValidationError(
                    f"Theme {theme_id} words must be non-empty strings", theme_id)

        color = data.get('color') or ''
        if not isinstance(color, str):
            raise ThemeValidationError(f"Theme {theme_id} color must be a string", theme_id)

        extra = {k: v for k, v in data.items() if k not in ('title', 'color', 'words')}
        return cls(id=theme_id, title=title, color=color, words=list(words), extra=extra)

    def to_dict(self) -> Dict[str, Any]:
        data = {'title': self.title, 'color': self.color, 'words': list(self.words)}
        data.update(self.extra)
        return data


def validate_themes(raw: Any) -> Dict[str, Theme]:
    """Validate a whole catalog payload.

    Parameters
    ----------
    raw : Any
        Parsed JSON, expected to be an object mapping theme IDs to themes

    Returns
    -------
    dict
        Theme ID -> Theme, in payload order

    Raises
    ------
    ThemeValidationError
        On the first invalid entry
    """
    if not isinstance(raw, dict):
        raise ThemeValidationError("Themes must be a JSON object keyed by theme id")
    return {theme_id: Theme.from_dict(theme_id, data) for theme_id, data in raw.items()}


class ThemeCatalog(object):
    """Process-wide set of themes backed by a JSON file."""

    def __init__(self, path: str):
        self.path = path
        self._themes: Dict[str, Theme] = {}
        self._lock = threading.Lock()

    def load(self) -> bool:
        """Initial load.

        Invalid entries are skipped. A missing or unparseable file leaves
        the catalog empty.
        """
        try:
            themes = self._read_valid_themes()
        except (OSError, ValueError) as e:
            logger.error(f"Could not load themes from {self.path}: {e}")
            self.apply({}, persist=False)
            return False
        self.apply(themes, persist=False)
        logger.info(f"Themes loaded: {', '.join(themes) or '(none)'}")
        return True

    def reload(self) -> bool:
        """Re-read the file after an external edit.

        Invalid entries are skipped. If the file cannot be read or parsed
        the current in-memory themes stay in place.
        """
        try:
            themes = self._read_valid_themes()
        except (OSError, ValueError) as e:
            logger.error(f"Ignoring themes file change, keeping current themes: {e}")
            return False
        self.apply(themes, persist=False)
        logger.info(f"Themes reloaded: {', '.join(themes) or '(none)'}")
        return True

    def replace(self, raw: Any) -> Dict[str, Theme]:
        """Validate raw and make it the whole catalog. Raises ThemeValidationError."""
        themes = validate_themes(raw)
        self.apply(themes, persist=True)
        return themes

    def delete(self, theme_id: str) -> bool:
        """Remove one theme. Returns False if it does not exist."""
        with self._lock:
            if theme_id not in self._themes:
                return False
            themes = dict(self._themes)
            del themes[theme_id]
        self.apply(themes, persist=True)
        return True

    def apply(self, themes: Dict[str, Theme], persist: bool):
        """Swap in a validated set of themes, optionally writing it to disk."""
        with self._lock:
            self._themes = dict(themes)
            if persist:
                self.save()

    def save(self) -> bool:
        """Write the catalog to disk. Failures are logged, not raised."""
        try:
            with open(self.path, 'w', encoding='utf-8') as f:
                json.dump(self.as_dict(), f, indent=2, ensure_ascii=False)
        except OSError as e:
            logger.error(f"Could not save themes to {self.path}: {e}")
            return False
        logger.info("Themes saved")
        return True

    def get_theme(self, theme_id: str) -> Optional[Theme]:
        return self._themes.get(theme_id)

    def all_themes(self) -> List[Theme]:
        return list(self._themes.values())

    def as_dict(self) -> Dict[str, Any]:
        return {theme_id: theme.to_dict() for theme_id, theme in self._themes.items()}

    def __contains__(self, theme_id: str) -> bool:
        return theme_id in self._themes

    def __len__(self) -> int:
        return len(self._themes)

    def _read_file(self) -> Any:
        with open(self.path, 'r', encoding='utf-8') as f:
            return json.load(f)

    def _read_valid_themes(self) -> Dict[str, Theme]:
        """Read the file and keep every entry that validates.

        Raises OSError or ValueError if the file itself is unusable.
        """
        raw = self._read_file()
        if not isinstance(raw, dict):
            raise ThemeValidationError("Themes must be a JSON object keyed by theme id")

        themes = {}
        for theme_id, data in raw.items():
            try:
                themes[theme_id] = Theme.from_dict(theme_id, data)
            except ThemeValidationError as e:
                logger.warning(f"Skipping theme from {self.path}: {e}")
        return themes


class CatalogWatcher(object):
    """Polls the catalog file and reloads it when its modification time changes.

    Parameters
    ----------
    catalog : ThemeCatalog
        Catalog to reload
    interval : float, optional
        Seconds between polls
    sleep : callable, optional
        Sleep function; the server passes socketio.sleep so the loop
        cooperates with the async mode in use

    """
    def __init__(self, catalog: ThemeCatalog, interval: float = 1.0,
                 sleep: Callable[[float], Any] = time.sleep):
        self.catalog = catalog
        self.interval = interval
        self.sleep = sleep
        self._running = False
        self._last_mtime = self._mtime()

    def _mtime(self) -> Optional[float]:
        try:
            return os.stat(self.catalog.path).st_mtime
        except OSError:
            return None

    def poll(self) -> bool:
        """Check the file once. Returns True if a reload was triggered."""
        mtime = self._mtime()
        if mtime is None or mtime == self._last_mtime:
            return False
        self._last_mtime = mtime
        logger.info(f"{os.path.basename(self.catalog.path)} changed, reloading themes")
        self.catalog.reload()
        return True

    def run(self):
        logger.info(f"Watching {self.catalog.path} for changes")
        self._running = True
        while self._running:
            self.poll()
            self.sleep(self.interval)

    def stop(self):
        self._running = False
