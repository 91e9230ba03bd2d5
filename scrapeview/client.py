"""HTTP client for the scraped books and quotes datasets."""
import requests
from typing import Optional, List, Any, Union
import logging

from scrapeview.models import Book, Mode, Quote
from scrapeview.parse import parse_books_response, parse_quotes_response

logger = logging.getLogger(__name__)


class ScrapedDataClient:
    """Client for the two read-only dataset endpoints.

    Each dataset is pulled in full with a single GET. There is no retry:
    a failed fetch is logged and reported as None.
    """

    def __init__(
        self,
        books_url: str,
        quotes_url: str,
        timeout: Optional[float] = None
    ):
        """
        Initialize the dataset client.

        Args:
            books_url: URL returning the JSON array of books
            quotes_url: URL returning the JSON array of quotes
            timeout: Request timeout in seconds (None waits indefinitely)
        """
        self.books_url = books_url
        self.quotes_url = quotes_url
        self.timeout = timeout

        # Create session for connection pooling
        self.session = requests.Session()

    def fetch_books(self) -> Optional[List[Book]]:
        """Fetch and parse the books dataset, or None on failure."""
        payload = self._get_json(self.books_url)
        if payload is None:
            return None
        return parse_books_response(payload)

    def fetch_quotes(self) -> Optional[List[Quote]]:
        """Fetch and parse the quotes dataset, or None on failure."""
        payload = self._get_json(self.quotes_url)
        if payload is None:
            return None
        return parse_quotes_response(payload)

    def fetch(self, mode: Union[Mode, str]) -> Optional[list]:
        """
        Fetch the dataset for a browsing mode.

        Usable directly as the ``loader`` of a SessionController.

        Args:
            mode: Mode.BOOKS or Mode.QUOTES

        Returns:
            Parsed collection or None if the fetch failed
        """
        mode = Mode(mode)
        if mode is Mode.BOOKS:
            return self.fetch_books()
        if mode is Mode.QUOTES:
            return self.fetch_quotes()
        raise ValueError(f"No dataset for mode {mode.value!r}")

    def _get_json(self, url: str) -> Optional[Any]:
        """
        Make a single GET request and decode the JSON body.

        Args:
            url: Request URL

        Returns:
            Decoded JSON or None if the request or decoding failed
        """
        try:
            logger.info(f"Fetching {url}")
            response = self.session.get(url, timeout=self.timeout)

            if response.status_code != 200:
                logger.error(f"Fetch failed ({response.status_code}): {url}")
                return None

            return response.json()

        except requests.exceptions.RequestException as e:
            logger.error(f"Fetch failed: {url}: {e}")
            return None

        except ValueError as e:
            logger.error(f"Response from {url} is not JSON: {e}")
            return None

    def close(self):
        """Close the session."""
        self.session.close()

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
