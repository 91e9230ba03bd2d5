"""Parse and normalize scraped dataset responses."""
import logging
from typing import Dict, Any, List, Optional

from scrapeview.models import Book, Quote

logger = logging.getLogger(__name__)


def _text(value: Any) -> Optional[str]:
    if value is None:
        return None
    return value if isinstance(value, str) else str(value)


def parse_book(item: Dict[str, Any], key: int) -> Optional[Book]:
    """
    Parse a single book object served by the books endpoint.

    Args:
        item: One element of the books JSON array
        key: Position of the book in the collection

    Returns:
        Book object or None if the item is not an object
    """
    if not isinstance(item, dict):
        logger.warning(f"Skipping book #{key}: expected an object, got {type(item).__name__}")
        return None

    reviews = item.get("numberOfReviews")
    if not isinstance(reviews, int) or isinstance(reviews, bool):
        reviews = None

    return Book(
        key=key,
        title=_text(item.get("title")) or "",
        image_url=_text(item.get("imageUrl")) or "",
        rating=item.get("rating"),
        price=item.get("price"),
        category=_text(item.get("category")),
        product_url=_text(item.get("productUrl")),
        description=_text(item.get("description")),
        availability=_text(item.get("availability")),
        upc=_text(item.get("upc")),
        product_type=_text(item.get("productType")),
        price_excl_tax=item.get("priceExclTax"),
        price_incl_tax=item.get("priceInclTax"),
        tax=item.get("tax"),
        number_of_reviews=reviews,
        id=item.get("id"),
    )


def parse_quote(item: Dict[str, Any], key: int) -> Optional[Quote]:
    """
    Parse a single quote object served by the quotes endpoint.

    Args:
        item: One element of the quotes JSON array
        key: Position of the quote in the collection

    Returns:
        Quote object or None if the item is not an object
    """
    if not isinstance(item, dict):
        logger.warning(f"Skipping quote #{key}: expected an object, got {type(item).__name__}")
        return None

    tags = item.get("tags") or []
    if not isinstance(tags, list):
        tags = []

    return Quote(
        key=key,
        text=_text(item.get("text")) or "",
        author=_text(item.get("author")) or "",
        tags=[str(tag) for tag in tags if tag is not None],
        id=item.get("id"),
    )


def parse_books_response(payload: Any) -> List[Book]:
    """
    Parse the full books response.

    Args:
        payload: Decoded JSON array

    Returns:
        List of Book objects in source order (empty if payload is not a list)
    """
    if not isinstance(payload, list):
        logger.warning("Books response is not a JSON array")
        return []

    books = []
    for key, item in enumerate(payload):
        book = parse_book(item, key)
        if book:
            books.append(book)

    return books


def parse_quotes_response(payload: Any) -> List[Quote]:
    """Parse the full quotes response (see ``parse_books_response``)."""
    if not isinstance(payload, list):
        logger.warning("Quotes response is not a JSON array")
        return []

    quotes = []
    for key, item in enumerate(payload):
        quote = parse_quote(item, key)
        if quote:
            quotes.append(quote)

    return quotes
