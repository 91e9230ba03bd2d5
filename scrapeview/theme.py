"""Persisted light/dark theme preference."""
import json
import logging
import os
from typing import Optional, Dict, Any

logger = logging.getLogger(__name__)

THEMES = ("light", "dark")
DEFAULT_THEME = "dark"
THEME_KEY = "theme"


def _valid(theme: Optional[str]) -> Optional[str]:
    if theme is None:
        return None
    theme = str(theme).strip().lower()
    return theme if theme in THEMES else None


def resolve_theme(stored: Optional[str], prefers: Optional[str] = None) -> str:
    """
    Pick the active theme.

    Args:
        stored: Saved preference
        prefers: Environment light/dark signal

    Returns:
        The saved theme if valid, else the environment preference, else dark
    """
    return _valid(stored) or _valid(prefers) or DEFAULT_THEME


def toggle_theme(theme: str) -> str:
    """The opposite of ``theme``; unknown values count as dark."""
    return "light" if resolve_theme(theme) == "dark" else "dark"


class ThemeStore:
    """Key-value JSON file holding the theme preference."""

    def __init__(self, path: str):
        self.path = path

    def _read(self) -> Dict[str, Any]:
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning(f"Ignoring unreadable preferences file {self.path}: {e}")
            return {}
        return data if isinstance(data, dict) else {}

    def get(self) -> Optional[str]:
        """Saved theme, or None if nothing valid is stored."""
        return _valid(self._read().get(THEME_KEY))

    def set(self, theme: str) -> str:
        """Save a theme ('light' or 'dark')."""
        value = _valid(theme)
        if value is None:
            raise ValueError(f"Unknown theme: {theme!r} (expected one of {', '.join(THEMES)})")

        data = self._read()
        data[THEME_KEY] = value

        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)

        logger.info(f"Saved theme preference: {value}")
        return value

    def load(self, prefers: Optional[str] = None) -> str:
        """Theme restored on start-up."""
        return resolve_theme(self.get(), prefers)
