"""Tests for parsing functions."""
from scrapeview.parse import parse_book, parse_quote, parse_books_response, parse_quotes_response


def test_parse_book_complete():
    """Test parsing a book with all fields present."""
    item = {
        "id": 7,
        "imageUrl": "http://example.com/cover.jpg",
        "rating": "Three",
        "title": "A Light in the Attic",
        "price": 51.77,
        "category": "Poetry",
        "productUrl": "http://example.com/a-light-in-the-attic",
        "description": "It's hard to imagine a world without A Light in the Attic.",
        "availability": "In stock (22 available)",
        "upc": "a897fe39b1053632",
        "productType": "Books",
        "priceExclTax": 51.77,
        "priceInclTax": 51.77,
        "tax": 0.0,
        "numberOfReviews": 0
    }

    book = parse_book(item, 0)

    assert book is not None
    assert book.key == 0
    assert book.id == 7
    assert book.title == "A Light in the Attic"
    assert book.image_url == "http://example.com/cover.jpg"
    assert book.category == "Poetry"
    assert book.product_type == "Books"
    assert book.price_incl_tax == 51.77
    assert book.number_of_reviews == 0
    assert book.stars == 3


def test_parse_book_missing_fields():
    """Test parsing a book with missing optional fields."""
    item = {"title": "Mystery Book", "rating": 4, "price": "£10.00"}

    book = parse_book(item, 3)

    assert book is not None
    assert book.key == 3
    assert book.category is None
    assert book.description is None
    assert book.number_of_reviews is None
    assert book.image_url == ""


def test_parse_book_not_an_object():
    """Test that a non-object item returns None."""
    assert parse_book("not a book", 0) is None


def test_parse_quote_complete():
    """Test parsing a quote."""
    item = {
        "id": 1,
        "text": "The world as we have created it is a process of our thinking.",
        "author": "Albert Einstein",
        "tags": ["change", "deep-thoughts", "thinking", "world"]
    }

    quote = parse_quote(item, 5)

    assert quote.key == 5
    assert quote.author == "Albert Einstein"
    assert quote.tags == ["change", "deep-thoughts", "thinking", "world"]
    assert quote.tags_str == "#change #deep-thoughts #thinking #world"


def test_parse_quote_missing_tags():
    """Test that absent or null tags become an empty list."""
    assert parse_quote({"text": "x", "author": "y"}, 0).tags == []
    assert parse_quote({"text": "x", "author": "y", "tags": None}, 0).tags == []


def test_parse_books_response_assigns_positions():
    """Test that keys follow the position in the served array."""
    response = [
        {"title": "Book 1"},
        "garbage",
        {"title": "Book 3"}
    ]

    books = parse_books_response(response)

    assert [book.title for book in books] == ["Book 1", "Book 3"]
    assert [book.key for book in books] == [0, 2]


def test_parse_responses_not_a_list():
    """Test that a non-array payload yields no items."""
    assert parse_books_response({"error": "oops"}) == []
    assert parse_quotes_response(None) == []


if __name__ == "__main__":
    # Run tests
    test_parse_book_complete()
    test_parse_book_missing_fields()
    test_parse_book_not_an_object()
    test_parse_quote_complete()
    test_parse_quote_missing_tags()
    test_parse_books_response_assigns_positions()
    test_parse_responses_not_a_list()
    print("All tests passed!")
