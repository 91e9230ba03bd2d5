"""Tests for related-item lookup."""
from scrapeview.models import Book, Quote
from scrapeview.related import related_books, related_quotes


def test_related_books_share_category():
    """Test the sci-fi scenario: A relates only to B."""
    books = [
        Book(key=0, title="A", category="sci-fi"),
        Book(key=1, title="B", category="sci-fi"),
        Book(key=2, title="C", category="drama"),
    ]

    assert related_books(books[0], books) == [books[1]]


def test_related_books_excludes_self_by_key():
    """Test that an equal-looking book with another key is still related."""
    books = [
        Book(key=0, title="Same", category="travel"),
        Book(key=1, title="Same", category="travel"),
    ]

    assert related_books(books[0], books) == [books[1]]
    assert related_books(books[1], books) == [books[0]]


def test_related_books_without_category():
    """Test that books without a category relate to nothing."""
    books = [
        Book(key=0, title="A"),
        Book(key=1, title="B"),
        Book(key=2, title="C", category="drama"),
    ]

    assert related_books(books[0], books) == []
    assert related_books(books[2], books) == []


def test_related_books_limit():
    """Test truncation to the limit, keeping collection order."""
    books = [Book(key=i, title=str(i), category="poetry") for i in range(12)]

    related = related_books(books[5], books)

    assert [b.key for b in related] == [0, 1, 2, 3, 4, 6, 7, 8]
    assert len(related_books(books[0], books, limit=3)) == 3


def test_related_quotes_share_a_tag():
    """Test the love/life/war scenario."""
    quotes = [
        Quote(key=0, text="x", author="a", tags=["love"]),
        Quote(key=1, text="y", author="b", tags=["love", "life"]),
        Quote(key=2, text="z", author="c", tags=["war"]),
    ]

    assert related_quotes(quotes[0], quotes) == [quotes[1]]
    assert related_quotes(quotes[1], quotes) == [quotes[0]]
    assert related_quotes(quotes[2], quotes) == []


def test_related_quotes_limit_and_untagged():
    """Test the default limit of six and untagged quotes."""
    quotes = [Quote(key=i, text=str(i), author="a", tags=["life"]) for i in range(10)]
    untagged = Quote(key=99, text="none", author="a", tags=[])

    assert [q.key for q in related_quotes(quotes[0], quotes)] == [1, 2, 3, 4, 5, 6]
    assert related_quotes(untagged, quotes + [untagged]) == []
