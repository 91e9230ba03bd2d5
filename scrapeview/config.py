"""Configuration management."""
import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()


def _optional_int(name):
    value = os.getenv(name)
    return int(value) if value else None


def _optional_float(name):
    value = os.getenv(name)
    return float(value) if value else None


class Config:
    """Application configuration."""

    # Backend
    SCRAPER_API_URL = os.getenv("SCRAPER_API_URL", "http://localhost:8080")
    BOOKS_ENDPOINT = os.getenv("BOOKS_ENDPOINT", "/api/scrapedBooks")
    QUOTES_ENDPOINT = os.getenv("QUOTES_ENDPOINT", "/api/scrapedQuotes")

    # Unset means wait indefinitely
    REQUEST_TIMEOUT = _optional_float("REQUEST_TIMEOUT")

    @property
    def BOOKS_URL(self):
        """Full URL of the books dataset."""
        return f"{self.SCRAPER_API_URL.rstrip('/')}{self.BOOKS_ENDPOINT}"

    @property
    def QUOTES_URL(self):
        """Full URL of the quotes dataset."""
        return f"{self.SCRAPER_API_URL.rstrip('/')}{self.QUOTES_ENDPOINT}"

    # Browsing
    BOOKS_PAGE_SIZE = int(os.getenv("BOOKS_PAGE_SIZE", "20"))
    QUOTES_PAGE_SIZE = int(os.getenv("QUOTES_PAGE_SIZE", "20"))
    VIEWPORT_WIDTH = _optional_int("VIEWPORT_WIDTH")
    NARROW_VIEWPORT_MAX = int(os.getenv("NARROW_VIEWPORT_MAX", "480"))

    # Theme
    THEME_FILE = os.path.expanduser(os.getenv("THEME_FILE", "~/.scrapeview/preferences.json"))
    PREFERS_COLOR_SCHEME = os.getenv("PREFERS_COLOR_SCHEME")
