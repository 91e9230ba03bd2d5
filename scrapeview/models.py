"""Data models for scraped books and quotes."""
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, List, Union

from scrapeview.rating import normalize_rating


Rating = Union[int, float, str, None]
Amount = Union[str, int, float, None]


class Mode(str, Enum):
    """Which dataset is currently active for browsing."""
    NONE = "none"
    BOOKS = "books"
    QUOTES = "quotes"


def _money(value: Amount) -> str:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return f"£{value}"
    return str(value) if value not in (None, "") else ""


@dataclass(frozen=True)
class Book:
    """A scraped book.

    ``key`` is the position of the book in the loaded collection and is the
    only identity used when comparing books.
    """
    key: int
    title: str
    image_url: str = ""
    rating: Rating = None
    price: Amount = None
    category: Optional[str] = None
    product_url: Optional[str] = None
    description: Optional[str] = None
    availability: Optional[str] = None
    upc: Optional[str] = None
    product_type: Optional[str] = None
    price_excl_tax: Amount = None
    price_incl_tax: Amount = None
    tax: Amount = None
    number_of_reviews: Optional[int] = None
    id: Optional[int] = None

    @property
    def stars(self) -> int:
        """Rating normalized to 0-5."""
        return normalize_rating(self.rating)

    @property
    def display_price(self) -> str:
        """Price including tax when known, else the listed price."""
        if self.price_incl_tax:
            return f"£{self.price_incl_tax}"
        return _money(self.price)

    @property
    def tax_summary(self) -> str:
        """Prices excluding and including tax, when known."""
        parts = []
        if self.price_excl_tax:
            parts.append(f"Excl. Tax: £{self.price_excl_tax}")
        if self.price_incl_tax:
            parts.append(f"Incl. Tax: £{self.price_incl_tax}")
        return " | ".join(parts)


@dataclass(frozen=True)
class Quote:
    """A scraped quote."""
    key: int
    text: str
    author: str
    tags: List[str] = field(default_factory=list)
    id: Optional[int] = None

    @property
    def tags_str(self) -> str:
        """Format tags as hashtags."""
        return " ".join(f"#{tag}" for tag in self.tags)
