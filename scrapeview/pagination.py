"""Page slicing and the compact page-number bar."""
import math
from dataclasses import dataclass
from typing import Generic, List, Optional, Sequence, TypeVar, Union

from scrapeview.models import Mode

T = TypeVar("T")

ELLIPSIS = "…"
PageMarker = Union[int, str]

PAGE_SIZES = {
    Mode.BOOKS: 20,
    Mode.QUOTES: 20,
}

# Every page is listed up to this many pages.
MAX_UNCOLLAPSED_PAGES = 7
NARROW_VIEWPORT_MAX = 480
NARROW_WINDOW = 3
WIDE_WINDOW = 5


@dataclass
class Page(Generic[T]):
    """One page of a filtered collection."""
    items: List[T]
    total_pages: int
    total_items: int


def total_pages_for(count: int, page_size: int) -> int:
    """Number of pages needed for ``count`` items, never less than 1."""
    return max(1, math.ceil(count / page_size))


def paginate(items: Sequence[T], page: int, page_size: int) -> Page[T]:
    """
    Slice one page out of a collection.

    Args:
        items: Filtered collection
        page: 1-indexed page number
        page_size: Items per page

    Returns:
        Page with the items at [(page-1)*page_size, page*page_size).
        Pages outside the valid range are empty.
    """
    if page_size < 1:
        raise ValueError(f"page_size must be positive, got {page_size}")

    total_pages = total_pages_for(len(items), page_size)
    if page < 1:
        return Page(items=[], total_pages=total_pages, total_items=len(items))

    start = (page - 1) * page_size
    return Page(
        items=list(items[start:start + page_size]),
        total_pages=total_pages,
        total_items=len(items),
    )


def window_size_for(viewport_width: Optional[int], narrow_max: int = NARROW_VIEWPORT_MAX) -> int:
    """Sliding window size: 3 on narrow viewports, 5 otherwise."""
    if viewport_width is not None and viewport_width <= narrow_max:
        return NARROW_WINDOW
    return WIDE_WINDOW


def page_index_display(page: int, total_pages: int, window_size: int = WIDE_WINDOW) -> List[PageMarker]:
    """
    Build the page-number bar: first page, a window around ``page``, last page.

    Gaps between the window and the first or last page collapse into a
    single ``ELLIPSIS`` marker. Up to seven pages are listed in full.

    Args:
        page: Current page
        total_pages: Number of pages
        window_size: Page numbers shown around the current page

    Returns:
        List of page numbers and ELLIPSIS markers
    """
    if total_pages <= MAX_UNCOLLAPSED_PAGES:
        return list(range(1, total_pages + 1))

    start = page - window_size // 2
    end = page + window_size // 2
    if window_size % 2 == 0:
        end -= 1

    if start < 2:
        start = 2
        end = start + window_size - 1
    if end > total_pages - 1:
        end = total_pages - 1
        start = end - window_size + 1
        start = max(2, start)

    markers: List[PageMarker] = [1]
    if start > 2:
        markers.append(ELLIPSIS)
    markers.extend(range(start, end + 1))
    if end < total_pages - 1:
        markers.append(ELLIPSIS)
    markers.append(total_pages)

    return markers


def previous_page(page: int) -> int:
    """Target of the Prev control."""
    return max(1, page - 1)


def next_page(page: int, total_pages: int) -> int:
    """Target of the Next control."""
    return min(total_pages, page + 1)
