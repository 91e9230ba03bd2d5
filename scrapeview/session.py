"""Session state machine for browsing books and quotes."""
import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Sequence, Union

from scrapeview.models import Book, Mode, Quote
from scrapeview import pagination
from scrapeview.pagination import PageMarker, page_index_display, paginate, window_size_for
from scrapeview.related import related_books, related_quotes
from scrapeview.search import filter_books, filter_quotes

logger = logging.getLogger(__name__)

Loader = Callable[[Mode], Optional[list]]

# (current mode, requested mode) -> resulting mode.
# Requesting the active dataset again switches browsing off.
MODE_TRANSITIONS: Dict[tuple, Mode] = {
    (Mode.NONE, Mode.NONE): Mode.NONE,
    (Mode.NONE, Mode.BOOKS): Mode.BOOKS,
    (Mode.NONE, Mode.QUOTES): Mode.QUOTES,
    (Mode.BOOKS, Mode.NONE): Mode.NONE,
    (Mode.BOOKS, Mode.BOOKS): Mode.NONE,
    (Mode.BOOKS, Mode.QUOTES): Mode.QUOTES,
    (Mode.QUOTES, Mode.NONE): Mode.NONE,
    (Mode.QUOTES, Mode.BOOKS): Mode.BOOKS,
    (Mode.QUOTES, Mode.QUOTES): Mode.NONE,
}


@dataclass(frozen=True)
class PendingFetch:
    """Ticket for a dataset fetch started by a mode transition."""
    mode: Mode


@dataclass
class SessionView:
    """Everything the front end needs to render the current state."""
    mode: Mode
    query: str
    page: int
    total_items: int = 0
    total_pages: int = 1
    items: List[Union[Book, Quote]] = field(default_factory=list)
    page_numbers: List[PageMarker] = field(default_factory=list)
    selected_book: Optional[Book] = None
    selected_quote: Optional[Quote] = None
    related_books: List[Book] = field(default_factory=list)
    related_quotes: List[Quote] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.items


class SessionController:
    """
    Owns mode, query, page and modal selection.

    Derived views are recomputed from the pure filter, pagination and
    relation functions each time ``view()`` is called.
    """

    def __init__(
        self,
        loader: Optional[Loader] = None,
        page_sizes: Optional[Dict[Mode, int]] = None,
        viewport_width: Optional[int] = None,
        narrow_max: int = pagination.NARROW_VIEWPORT_MAX
    ):
        """
        Initialize the session with browsing switched off.

        Args:
            loader: Optional synchronous fetcher called as ``loader(mode)``;
                returns the parsed collection or None on failure
            page_sizes: Items per page for each dataset mode
            viewport_width: Display width used to pick the pagination window
            narrow_max: Widest viewport still considered narrow
        """
        self.mode = Mode.NONE
        self.query = ""
        self.page = 1
        self.selected_book: Optional[Book] = None
        self.selected_quote: Optional[Quote] = None

        self.books: List[Book] = []
        self.quotes: List[Quote] = []
        self._loaded = {Mode.BOOKS: False, Mode.QUOTES: False}

        self._loader = loader
        self.page_sizes = dict(page_sizes or pagination.PAGE_SIZES)
        self.viewport_width = viewport_width
        self.narrow_max = narrow_max

    # Transitions

    def set_mode(self, new_mode: Union[Mode, str]) -> Optional[PendingFetch]:
        """
        Switch dataset; selecting the active dataset again switches browsing off.

        Returns:
            A PendingFetch when the resulting mode still needs its dataset
        """
        target = MODE_TRANSITIONS[(self.mode, Mode(new_mode))]
        return self._enter(target)

    def set_query(self, query: str):
        """Store the query as typed and go back to the first page."""
        if self.mode is Mode.NONE:
            logger.debug("Ignoring query while no dataset is selected")
            return
        self.query = query
        self.page = 1

    def set_page(self, page: int):
        """Jump to a page offered by the pagination controls."""
        self.page = page

    def prev_page(self):
        """Step back one page, never below the first."""
        self.page = pagination.previous_page(self.page)

    def next_page(self):
        """Step forward one page, never past the last."""
        self.page = pagination.next_page(self.page, self.view().total_pages)

    def select_book(self, book: Book):
        """Open (or re-target) the book detail."""
        self.selected_quote = None
        self.selected_book = book

    def select_quote(self, quote: Quote):
        """Open (or re-target) the quote detail."""
        self.selected_book = None
        self.selected_quote = quote

    def clear_selection(self):
        """Close any open detail view."""
        self.selected_book = None
        self.selected_quote = None

    def tag_click(self, tag: str) -> Optional[PendingFetch]:
        """Browse quotes filtered by ``tag``."""
        pending = self._enter(Mode.QUOTES)
        self.query = tag
        self.page = 1
        return pending

    def category_click(self, category: str) -> Optional[PendingFetch]:
        """Browse books filtered by ``category``."""
        pending = self._enter(Mode.BOOKS)
        self.query = category
        self.page = 1
        return pending

    def receive(self, pending: PendingFetch, items: Optional[list]) -> bool:
        """
        Deliver the result of a dataset fetch.

        Args:
            pending: Ticket returned by the transition that started the fetch
            items: Parsed collection, or None when the fetch failed

        Returns:
            True if the collection was applied
        """
        if pending.mode is not self.mode:
            logger.debug(f"Dropping stale {pending.mode.value} response (mode is {self.mode.value})")
            return False

        if items is None:
            logger.debug(f"No {pending.mode.value} data received; keeping current collection")
            return False

        if self._loaded[pending.mode]:
            logger.debug(f"{pending.mode.value} already loaded; ignoring duplicate response")
            return False

        if pending.mode is Mode.BOOKS:
            self.books = list(items)
        else:
            self.quotes = list(items)

        self._loaded[pending.mode] = True
        self.page = 1
        logger.info(f"Loaded {len(items)} {pending.mode.value}")
        return True

    def set_viewport_width(self, width: Optional[int]):
        """Record the display width used to size the page bar."""
        self.viewport_width = width

    def is_loaded(self, mode: Union[Mode, str]) -> bool:
        """Whether the dataset for ``mode`` has been delivered."""
        return self._loaded.get(Mode(mode), False)

    def _enter(self, target: Mode) -> Optional[PendingFetch]:
        logger.info(f"Mode: {self.mode.value} -> {target.value}")
        self.mode = target
        self.page = 1

        if target is Mode.NONE or self._loaded[target]:
            return None

        pending = PendingFetch(target)
        if self._loader is not None:
            self.receive(pending, self._loader(target))
        return pending

    # Derived state

    def filtered(self) -> Sequence[Union[Book, Quote]]:
        """Current dataset filtered by the query (empty when browsing is off)."""
        if self.mode is Mode.BOOKS:
            return filter_books(self.books, self.query)
        if self.mode is Mode.QUOTES:
            return filter_quotes(self.quotes, self.query)
        return []

    def view(self) -> SessionView:
        """Compose filtering, pagination and relations for the current state."""
        view = SessionView(
            mode=self.mode,
            query=self.query,
            page=self.page,
            selected_book=self.selected_book,
            selected_quote=self.selected_quote,
        )

        if self.selected_book is not None:
            view.related_books = related_books(self.selected_book, self.books)
        if self.selected_quote is not None:
            view.related_quotes = related_quotes(self.selected_quote, self.quotes)

        if self.mode is Mode.NONE:
            return view

        page = paginate(self.filtered(), self.page, self.page_sizes[self.mode])
        window = window_size_for(self.viewport_width, self.narrow_max)

        view.items = page.items
        view.total_items = page.total_items
        view.total_pages = page.total_pages
        view.page_numbers = page_index_display(self.page, page.total_pages, window)
        return view
