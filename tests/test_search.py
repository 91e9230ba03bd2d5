"""Tests for free-text filtering."""
import pytest

from scrapeview.models import Book, Quote
from scrapeview.search import filter_books, filter_quotes, filter_items, QUOTE_FIELDS, normalize_query


BOOKS = [
    Book(key=0, title="A Light in the Attic", category="Poetry"),
    Book(key=1, title="Tipping the Velvet", category="Historical Fiction"),
    Book(key=2, title="Soumission", category=None),
    Book(key=3, title="Sharp Objects", category="Mystery"),
]

QUOTES = [
    Quote(key=0, text="The world as we have created it...", author="Albert Einstein", tags=["change", "world"]),
    Quote(key=1, text="It is our choices, Harry...", author="J.K. Rowling", tags=["abilities", "choices"]),
    Quote(key=2, text="Try not to become a man of success.", author="Albert Einstein", tags=[]),
    Quote(key=3, text="A day without sunshine is like, you know, night.", author="Steve Martin", tags=["humor", "obvious"]),
]


def test_empty_query_returns_everything():
    """Test that blank queries are the identity."""
    assert filter_books(BOOKS, "") == BOOKS
    assert filter_books(BOOKS, "   ") == BOOKS
    assert filter_quotes(QUOTES, None) == QUOTES


def test_books_match_title_or_category():
    """Test book matching on title and category."""
    assert [b.key for b in filter_books(BOOKS, "attic")] == [0]
    assert [b.key for b in filter_books(BOOKS, "  FICTION ")] == [1]
    assert [b.key for b in filter_books(BOOKS, "o")] == [0, 1, 2, 3]
    assert filter_books(BOOKS, "nothing matches") == []


def test_books_missing_category_never_matches_on_category():
    """Test that an absent category is not an error."""
    assert [b.key for b in filter_books(BOOKS, "soum")] == [2]
    assert [b.key for b in filter_books(BOOKS, "mystery")] == [3]


def test_quotes_match_text_author_or_tag():
    """Test quote matching on text, author and tags."""
    assert [q.key for q in filter_quotes(QUOTES, "einstein")] == [0, 2]
    assert [q.key for q in filter_quotes(QUOTES, "sunshine")] == [3]
    assert [q.key for q in filter_quotes(QUOTES, "hum")] == [3]
    assert [q.key for q in filter_quotes(QUOTES, "CHOICES")] == [1]


CASES = [
    (filter_books, BOOKS, lambda book: [book.title, book.category]),
    (filter_quotes, QUOTES, lambda quote: [quote.text, quote.author] + quote.tags),
]


@pytest.mark.parametrize("filter_fn, items, fields", CASES)
def test_filter_is_a_subsequence(filter_fn, items, fields):
    """Test that matches keep source order and satisfy the predicate."""
    for query in ["a", "e", "o", "world", "fiction", "xyz", "the"]:
        result = filter_fn(items, query)
        assert len(result) <= len(items)
        assert [item.key for item in result] == sorted(item.key for item in result)
        needle = normalize_query(query)
        for item in result:
            haystack = [value for value in fields(item) if value]
            assert any(needle in value.lower() for value in haystack)


@pytest.mark.parametrize("filter_fn, items, fields", CASES)
@pytest.mark.parametrize("query", ["a", "einstein", "  wor", "POETRY", ""])
def test_filter_is_idempotent(filter_fn, items, fields, query):
    """Test filter(filter(x, q), q) == filter(x, q)."""
    once = filter_fn(items, query)
    assert filter_fn(once, query) == once


def test_filter_items_tolerates_odd_fields():
    """Test selectors returning None, numbers or mixed lists."""
    items = [{"name": None, "labels": ["x", 3, None]}, {"name": 42, "labels": None}]
    selectors = [lambda item: item["name"], lambda item: item["labels"]]

    assert filter_items(items, "x", selectors) == [items[0]]
    assert filter_items(items, "42", selectors) == []


def test_quote_fields_cover_tags():
    """Test the quote selector set includes the tag list."""
    assert QUOTE_FIELDS[2](QUOTES[0]) == ["change", "world"]
