"""Related items for the detail view."""
from typing import List, Sequence

from scrapeview.models import Book, Quote

RELATED_BOOKS_LIMIT = 8
RELATED_QUOTES_LIMIT = 6


def related_books(focal: Book, all_books: Sequence[Book], limit: int = RELATED_BOOKS_LIMIT) -> List[Book]:
    """
    Books in the same category as ``focal``.

    Args:
        focal: Book whose detail is open
        all_books: Full loaded collection
        limit: Maximum number of books

    Returns:
        Books sharing the category, excluding ``focal``, in collection order
    """
    if not focal.category:
        return []

    related = [
        book for book in all_books
        if book.key != focal.key and book.category and book.category == focal.category
    ]
    return related[:limit]


def related_quotes(focal: Quote, all_quotes: Sequence[Quote], limit: int = RELATED_QUOTES_LIMIT) -> List[Quote]:
    """
    Quotes sharing at least one tag with ``focal``.

    Args:
        focal: Quote whose detail is open
        all_quotes: Full loaded collection
        limit: Maximum number of quotes

    Returns:
        Quotes with a common tag, excluding ``focal``, in collection order
    """
    focal_tags = set(focal.tags or [])
    if not focal_tags:
        return []

    related = [
        quote for quote in all_quotes
        if quote.key != focal.key and focal_tags.intersection(quote.tags or [])
    ]
    return related[:limit]
