"""Free-text filtering of books and quotes."""
from typing import Any, Callable, Iterable, List, Sequence, TypeVar

from scrapeview.models import Book, Quote

T = TypeVar("T")
FieldSelector = Callable[[Any], Any]

BOOK_FIELDS: Sequence[FieldSelector] = (
    lambda book: book.title,
    lambda book: book.category,
)

QUOTE_FIELDS: Sequence[FieldSelector] = (
    lambda quote: quote.text,
    lambda quote: quote.author,
    lambda quote: quote.tags,
)


def normalize_query(query: str) -> str:
    """Trim and lower-case a query string."""
    return (query or "").strip().lower()


def _values(selected: Any) -> Iterable[str]:
    if isinstance(selected, str):
        return [selected]
    if isinstance(selected, (list, tuple)):
        return [value for value in selected if isinstance(value, str)]
    return []


def matches(item: Any, needle: str, field_selectors: Sequence[FieldSelector]) -> bool:
    """
    Check whether an already-normalized query is contained in any field.

    Args:
        item: Book, Quote or any object the selectors understand
        needle: Lower-cased, trimmed query
        field_selectors: Callables returning a string, a list of strings or None

    Returns:
        True if the needle is a substring of any selected value
    """
    for select in field_selectors:
        for value in _values(select(item)):
            if needle in value.lower():
                return True
    return False


def filter_items(items: Sequence[T], query: str, field_selectors: Sequence[FieldSelector]) -> List[T]:
    """
    Return the items whose fields contain the query, in source order.

    An empty (or whitespace-only) query returns the whole collection.

    Args:
        items: Collection to filter
        query: Raw query as typed
        field_selectors: Fields to search

    Returns:
        Matching subsequence of items
    """
    needle = normalize_query(query)
    if not needle:
        return list(items)

    return [item for item in items if matches(item, needle, field_selectors)]


def filter_books(books: Sequence[Book], query: str) -> List[Book]:
    """Match on title or category."""
    return filter_items(books, query, BOOK_FIELDS)


def filter_quotes(quotes: Sequence[Quote], query: str) -> List[Quote]:
    """Match on text, author or any tag."""
    return filter_items(quotes, query, QUOTE_FIELDS)
