from typing import Awaitable, Callable, TypeVar
from tournament_api.schemas.pagination import PagedList, RequestParameters
import logging

logger = logging.getLogger(__name__)

T = TypeVar("T")
P = TypeVar("P", bound=RequestParameters)


async def fetch_page(
    query_page: Callable[[P], Awaitable[PagedList[T]]],
    params: P,
) -> PagedList[T]:
    """
    Load the page ``params`` points at and fall back to the last page when it is out of range.

    The true page count is only known after the first query, so an out-of-range
    request costs exactly one extra query. The retried page is always in range.
    Errors raised by ``query_page`` propagate unchanged and are never retried.
    """
    paged = await query_page(params)
    if paged.is_out_of_range:
        last_page = paged.meta_data.total_pages
        logger.debug("Page %d out of range, serving last page %d", params.page_number, last_page)
        paged = await query_page(params.with_page(last_page))
    return paged
