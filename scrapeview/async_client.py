"""Async HTTP client for fire-and-forget dataset loading."""
import asyncio
import httpx
from typing import Optional, Any, Union
import logging

from scrapeview.models import Mode
from scrapeview.parse import parse_books_response, parse_quotes_response
from scrapeview.session import PendingFetch, SessionController

logger = logging.getLogger(__name__)


class AsyncScrapedDataClient:
    """Async client that loads datasets into a running session."""

    def __init__(
        self,
        books_url: str,
        quotes_url: str,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        """
        Initialize async client.

        Args:
            books_url: URL returning the JSON array of books
            quotes_url: URL returning the JSON array of quotes
            timeout: Request timeout (None waits indefinitely)
            transport: Optional httpx transport
        """
        self.books_url = books_url
        self.quotes_url = quotes_url
        self.timeout = timeout
        self._tasks = set()

        # Create async HTTP client
        self.client = httpx.AsyncClient(timeout=timeout, transport=transport)

    async def fetch(self, mode: Union[Mode, str]) -> Optional[list]:
        """
        Fetch and parse the dataset for a mode.

        Args:
            mode: Mode.BOOKS or Mode.QUOTES

        Returns:
            Parsed collection or None on failure
        """
        mode = Mode(mode)
        if mode is Mode.BOOKS:
            payload = await self._get_json(self.books_url)
            return None if payload is None else parse_books_response(payload)
        if mode is Mode.QUOTES:
            payload = await self._get_json(self.quotes_url)
            return None if payload is None else parse_quotes_response(payload)
        raise ValueError(f"No dataset for mode {mode.value!r}")

    async def load(self, session: SessionController, pending: Optional[PendingFetch]) -> bool:
        """
        Fetch the dataset a transition asked for and hand it to the session.

        The session drops the result if the mode changed in the meantime.

        Args:
            session: Session that issued the ticket
            pending: Ticket returned by set_mode/tag_click (None is a no-op)

        Returns:
            True if the session applied the result
        """
        if pending is None:
            return False

        items = await self.fetch(pending.mode)
        return session.receive(pending, items)

    def start(self, session: SessionController, pending: Optional[PendingFetch]) -> Optional[asyncio.Task]:
        """Schedule ``load`` without waiting for it. Must run inside an event loop."""
        if pending is None:
            return None

        task = asyncio.create_task(self.load(session, pending))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def _get_json(self, url: str) -> Optional[Any]:
        try:
            logger.info(f"Async fetch: {url}")
            response = await self.client.get(url)

            if response.status_code == 200:
                return response.json()
            else:
                logger.error(f"Status {response.status_code} for {url}")
                return None

        except httpx.HTTPError as e:
            logger.error(f"Async fetch failed: {url}: {e}")
            return None

        except ValueError as e:
            logger.error(f"Response from {url} is not JSON: {e}")
            return None

    async def close(self):
        """Close the HTTP client."""
        await self.client.aclose()

    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()
