#!/usr/bin/env python3
"""Scraped Data Explorer CLI - browse scraped books and quotes."""
import argparse
import asyncio
import dataclasses
import sys
import json
from tabulate import tabulate
from scrapeview.client import ScrapedDataClient
from scrapeview.async_client import AsyncScrapedDataClient
from scrapeview.config import Config
from scrapeview.models import Mode
from scrapeview.pagination import ELLIPSIS
from scrapeview.rating import render_stars
from scrapeview.session import SessionController
from scrapeview.theme import ThemeStore, toggle_theme
import logging

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def build_session(args, config: Config, loader=None) -> SessionController:
    """Create a session sized from config and command-line options."""
    return SessionController(
        loader=loader,
        page_sizes={
            Mode.BOOKS: config.BOOKS_PAGE_SIZE,
            Mode.QUOTES: config.QUOTES_PAGE_SIZE,
        },
        viewport_width=getattr(args, "width", None) or config.VIEWPORT_WIDTH,
        narrow_max=config.NARROW_VIEWPORT_MAX
    )


async def _open_session_async(args, config: Config, enter) -> SessionController:
    """Enter a mode and let the async client load its dataset."""
    async with AsyncScrapedDataClient(
        config.BOOKS_URL,
        config.QUOTES_URL,
        timeout=config.REQUEST_TIMEOUT
    ) as client:
        session = build_session(args, config)
        task = client.start(session, enter(session))
        if task is not None:
            await task
    return session


def open_session(args, config: Config, enter) -> SessionController:
    """
    Run the transition that enters a dataset mode and wait for its data.

    Args:
        args: Parsed command-line arguments
        config: Application configuration
        enter: Callable performing the transition on the session

    Returns:
        Session with the dataset loaded (or empty if the fetch failed)
    """
    if getattr(args, "use_async", False):
        return asyncio.run(_open_session_async(args, config, enter))

    with ScrapedDataClient(
        config.BOOKS_URL,
        config.QUOTES_URL,
        timeout=config.REQUEST_TIMEOUT
    ) as client:
        session = build_session(args, config, loader=client.fetch)
        enter(session)
    return session


def go_to_page(session: SessionController, page: int):
    """Pagination control: only valid targets are offered to the session."""
    total_pages = session.view().total_pages
    session.set_page(max(1, min(page, total_pages)))


def _truncate(text: str, width: int) -> str:
    text = text or ""
    return text[:width] + "..." if len(text) > width else text


def format_page_bar(view) -> str:
    """Render Prev, page numbers and Next; the current page is bracketed."""
    parts = ["‹ Prev" if view.page > 1 else " "]
    for marker in view.page_numbers:
        if marker == ELLIPSIS:
            parts.append(ELLIPSIS)
        elif marker == view.page:
            parts.append(f"[{marker}]")
        else:
            parts.append(str(marker))
    parts.append("Next ›" if view.page < view.total_pages else " ")
    return " ".join(parts).strip()


def book_rows(books, offset: int = 0):
    return [
        [
            offset + i,
            _truncate(book.title, 50),
            render_stars(book.rating),
            book.display_price,
            f"#{book.category}" if book.category else ""
        ]
        for i, book in enumerate(books, 1)
    ]


def quote_rows(quotes, offset: int = 0):
    return [
        [
            offset + i,
            _truncate(quote.text, 60),
            quote.author,
            _truncate(quote.tags_str, 40)
        ]
        for i, quote in enumerate(quotes, 1)
    ]


def display_items(items, mode: Mode, format_type: str, offset: int = 0):
    """Display books or quotes in specified format."""
    if format_type == "table":
        if mode is Mode.BOOKS:
            headers = ["#", "Title", "Rating", "Price", "Category"]
            rows = book_rows(items, offset)
        else:
            headers = ["#", "Quote", "Author", "Tags"]
            rows = quote_rows(items, offset)
        print("\n" + tabulate(rows, headers=headers, tablefmt="grid"))

    elif format_type == "json":
        print(json.dumps([dataclasses.asdict(item) for item in items], indent=2, default=str))

    elif format_type == "compact":
        for i, item in enumerate(items, offset + 1):
            if mode is Mode.BOOKS:
                print(f"{i}. {item.title} - {item.display_price}")
            else:
                print(f"{i}. \"{item.text}\" - {item.author}")


def display_view(session: SessionController, format_type: str):
    """Print the current page of results and the pagination bar."""
    view = session.view()

    if view.mode is Mode.NONE:
        print("Select Books or Quotes to start searching.")
        return

    if format_type != "json":
        print(f"{view.total_items} results")

    if view.is_empty:
        if format_type == "json":
            print("[]")
        else:
            print(f"No {view.mode.value} found.")
        return

    offset = (view.page - 1) * session.page_sizes[view.mode]
    display_items(view.items, view.mode, format_type, offset)

    if format_type != "json":
        print("\n" + format_page_bar(view) + "\n")


def display_book_detail(view, format_type: str):
    book = view.selected_book
    if format_type == "json":
        print(json.dumps({
            "book": dataclasses.asdict(book),
            "related": [dataclasses.asdict(b) for b in view.related_books]
        }, indent=2, default=str))
        return

    details = [
        ["Title", book.title],
        ["Rating", render_stars(book.rating)],
        ["Price", book.display_price],
    ]
    if book.availability:
        details.append(["Availability", book.availability])
    if book.category:
        details.append(["Category", f"#{book.category}"])
    if book.upc:
        details.append(["UPC", book.upc])
    if book.product_type:
        details.append(["Product Type", book.product_type])
    if book.tax_summary:
        details.append(["Price", book.tax_summary])
    if book.tax:
        details.append(["Tax", f"£{book.tax}"])
    if book.number_of_reviews is not None:
        details.append(["Reviews", book.number_of_reviews])

    print("\n" + tabulate(details, tablefmt="plain"))
    if book.description:
        print("\n" + book.description)

    print("\nRelated books")
    if view.related_books:
        display_items(view.related_books, Mode.BOOKS, format_type)
    else:
        print("No related books.")


def display_quote_detail(view, format_type: str):
    quote = view.selected_quote
    if format_type == "json":
        print(json.dumps({
            "quote": dataclasses.asdict(quote),
            "related": [dataclasses.asdict(q) for q in view.related_quotes]
        }, indent=2))
        return

    print(f"\n\"{quote.text}\"\n  - {quote.author}")
    if quote.tags:
        print(f"  {quote.tags_str}")

    print("\nRelated quotes")
    if view.related_quotes:
        display_items(view.related_quotes, Mode.QUOTES, format_type)
    else:
        print("No related quotes.")


def browse(args, config: Config):
    """List one page of books or quotes."""
    mode = Mode(args.command)
    session = open_session(args, config, lambda s: s.set_mode(mode))
    session.set_query(args.query)
    go_to_page(session, args.page)
    display_view(session, args.format)


def browse_tag(args, config: Config):
    """List quotes carrying a tag."""
    session = open_session(args, config, lambda s: s.tag_click(args.tag))
    go_to_page(session, args.page)
    display_view(session, args.format)


def browse_category(args, config: Config):
    """List books in a category."""
    session = open_session(args, config, lambda s: s.category_click(args.category))
    go_to_page(session, args.page)
    display_view(session, args.format)


def show_item(args, config: Config):
    """Show one item with its related items."""
    mode = Mode.BOOKS if args.kind == "book" else Mode.QUOTES
    session = open_session(args, config, lambda s: s.set_mode(mode))
    session.set_query(args.query)

    items = session.filtered()
    if not 1 <= args.position <= len(items):
        print(f"No {args.kind} at position {args.position} ({len(items)} results).")
        return

    item = items[args.position - 1]
    if mode is Mode.BOOKS:
        session.select_book(item)
        display_book_detail(session.view(), args.format)
    else:
        session.select_quote(item)
        display_quote_detail(session.view(), args.format)


def manage_theme(args, config: Config):
    """Show, set or toggle the theme preference."""
    store = ThemeStore(config.THEME_FILE)
    current = store.load(config.PREFERS_COLOR_SCHEME)

    if args.action == "get":
        print(current)
    elif args.action == "set":
        if not args.value:
            print("Usage: theme set {light,dark}")
            sys.exit(1)
        print(store.set(args.value))
    elif args.action == "toggle":
        print(store.set(toggle_theme(current)))


def _add_browse_options(parser, with_page: bool = True):
    parser.add_argument("--query", "-q", default="", help="Search text")
    if with_page:
        parser.add_argument("--page", type=int, default=1, help="Page number (default: 1)")
    parser.add_argument("--width", type=int, help="Viewport width; 480 or less shows a narrower page bar")
    parser.add_argument("--format", choices=["table", "json", "compact"], default="table", help="Output format")
    parser.add_argument("--async", dest="use_async", action="store_true", help="Use async client")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Scraped Data Explorer - browse scraped books and quotes",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Browse books
  %(prog)s books --query poetry --page 2

  # Browse quotes tagged "love"
  %(prog)s tag love

  # Browse books in the Poetry category
  %(prog)s category Poetry

  # Show the third matching quote and its related quotes
  %(prog)s show quote 3 --query einstein

  # Switch theme
  %(prog)s theme toggle
        """
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    books_parser = subparsers.add_parser("books", help="Browse books")
    _add_browse_options(books_parser)

    quotes_parser = subparsers.add_parser("quotes", help="Browse quotes")
    _add_browse_options(quotes_parser)

    tag_parser = subparsers.add_parser("tag", help="Browse quotes with a tag")
    tag_parser.add_argument("tag", help="Tag to search for")
    tag_parser.add_argument("--page", type=int, default=1, help="Page number (default: 1)")
    tag_parser.add_argument("--width", type=int, help="Viewport width")
    tag_parser.add_argument("--format", choices=["table", "json", "compact"], default="table", help="Output format")
    tag_parser.add_argument("--async", dest="use_async", action="store_true", help="Use async client")

    category_parser = subparsers.add_parser("category", help="Browse books in a category")
    category_parser.add_argument("category", help="Category to search for")
    category_parser.add_argument("--page", type=int, default=1, help="Page number (default: 1)")
    category_parser.add_argument("--width", type=int, help="Viewport width")
    category_parser.add_argument("--format", choices=["table", "json", "compact"], default="table", help="Output format")
    category_parser.add_argument("--async", dest="use_async", action="store_true", help="Use async client")

    show_parser = subparsers.add_parser("show", help="Show an item and related items")
    show_parser.add_argument("kind", choices=["book", "quote"], help="Item type")
    show_parser.add_argument("position", type=int, help="Position in the (filtered) results, starting at 1")
    _add_browse_options(show_parser, with_page=False)

    theme_parser = subparsers.add_parser("theme", help="Show or change the theme preference")
    theme_parser.add_argument("action", nargs="?", choices=["get", "set", "toggle"], default="get")
    theme_parser.add_argument("value", nargs="?", choices=["light", "dark"], help="Theme to save (for 'set')")

    return parser


def main():
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    config = Config()

    try:
        if args.command in ("books", "quotes"):
            browse(args, config)

        elif args.command == "tag":
            browse_tag(args, config)

        elif args.command == "category":
            browse_category(args, config)

        elif args.command == "show":
            show_item(args, config)

        elif args.command == "theme":
            manage_theme(args, config)

    except KeyboardInterrupt:
        logger.info("\nInterrupted by user")
        sys.exit(0)
    except Exception as e:
        logger.error(f"Error: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
