"""Offset pagination shared by the resources' each() iterators"""

from typing import Callable, Iterator, List, Optional, Tuple, TypeVar

T = TypeVar("T")

MAX_PAGE_SIZE = 100
DEFAULT_BATCH_SIZE = 100

# fetch(limit, offset) -> (items, has_more); has_more is None when the server
# doesn't report it
PageFetcher = Callable[[int, int], Tuple[List[T], Optional[bool]]]


def iterate_pages(fetch: PageFetcher, batch_size: int = DEFAULT_BATCH_SIZE) -> Iterator[T]:
    """
    Yield items page by page, in server order.

    Stops once the server reports has_more=False, or a page comes back shorter
    than the page size. batch_size is clamped to the API's page limit.
    """
    page_size = max(1, min(batch_size, MAX_PAGE_SIZE))
    offset = 0

    while True:
        items, has_more = fetch(page_size, offset)
        yield from items

        if has_more is False or len(items) < page_size:
            return
        offset += page_size


def clamp_limit(limit: Optional[int], default: int = 20) -> int:
    return min(default if limit is None else limit, MAX_PAGE_SIZE)
