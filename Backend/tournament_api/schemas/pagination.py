from dataclasses import dataclass
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel
from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Callable, Generic, Sequence, TypeVar
import math

from tournament_api.core.config import get_settings

T = TypeVar("T")
U = TypeVar("U")


class RequestParameters(BaseModel):
    """
    Paging input for list endpoints.

    Out-of-range values are clamped instead of rejected: ``page_number`` is
    raised to 1, ``page_size`` is kept within ``[1, MAX_PAGE_SIZE]``.
    """

    model_config = ConfigDict(frozen=True)

    page_number: int = 1
    page_size: int = Field(
        default_factory=lambda: get_settings().DEFAULT_PAGE_SIZE,
        validate_default=True,
    )

    @field_validator("page_number")
    @classmethod
    def clamp_page_number(cls, value: int) -> int:
        return max(1, value)

    @field_validator("page_size")
    @classmethod
    def clamp_page_size(cls, value: int) -> int:
        return min(get_settings().MAX_PAGE_SIZE, max(1, value))

    def with_page(self, page_number: int):
        """Return a re-validated copy pointing at another page."""
        return type(self)(**{**self.model_dump(), "page_number": page_number})


class TournamentRequestParameters(RequestParameters):
    include_games: bool = False


class MetaData(BaseModel):
    """Position of a page within the full result set."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    current_page: int
    page_size: int
    total_count: int
    total_pages: int

    @property
    def has_previous(self) -> bool:
        return self.current_page > 1

    @property
    def has_next(self) -> bool:
        return self.current_page < self.total_pages

    def to_header(self) -> str:
        """JSON value for the ``X-Pagination`` response header."""
        return self.model_dump_json(by_alias=True)

    @classmethod
    def from_header(cls, raw: str) -> "MetaData":
        return cls.model_validate_json(raw)


@dataclass(frozen=True)
class PagedList(Generic[T]):
    """
    One page of an ordered result set plus its paging metadata.

    Build it with ``create`` for in-memory sequences or ``create_async`` for
    SQLAlchemy statements. Both read the total count independently of the
    slice, so an out-of-range page yields empty ``items`` while the metadata
    still reports the true ``total_count`` and ``total_pages``. ``create_async``
    skips the slice read entirely for such a page.
    """

    items: tuple[T, ...]
    meta_data: MetaData

    @classmethod
    def from_counted(
        cls, items: Sequence[T], total_count: int, page_number: int, page_size: int
    ) -> "PagedList[T]":
        total_pages = math.ceil(total_count / page_size) if total_count > 0 else 0
        return cls(
            items=tuple(items),
            meta_data=MetaData(
                current_page=page_number,
                page_size=page_size,
                total_count=total_count,
                total_pages=total_pages,
            ),
        )

    @classmethod
    def create(cls, source: Sequence[T], page_number: int, page_size: int) -> "PagedList[T]":
        page_number, page_size = max(1, page_number), max(1, page_size)
        skip = (page_number - 1) * page_size
        return cls.from_counted(source[skip:skip + page_size], len(source), page_number, page_size)

    @classmethod
    async def create_async(
        cls, db: AsyncSession, statement: Select, page_number: int, page_size: int
    ) -> "PagedList[T]":
        """
        Page through a single-entity ``select()``.

        Args:
            db: Async database session
            statement: Ordered select statement; its ORDER BY decides page contents
            page_number: 1-based page number
            page_size: Maximum number of items on the page

        Returns:
            PagedList with the entities of the requested page
        """
        page_number, page_size = max(1, page_number), max(1, page_size)

        count_query = select(func.count()).select_from(statement.order_by(None).subquery())
        total_count = (await db.execute(count_query)).scalar_one()

        skip = (page_number - 1) * page_size
        if skip >= total_count:
            # Past the end; the offset may not even fit the driver's integer type
            return cls.from_counted((), total_count, page_number, page_size)

        result = await db.execute(statement.offset(skip).limit(page_size))
        items = list(result.scalars().all())

        return cls.from_counted(items, total_count, page_number, page_size)

    def map(self, fn: Callable[[T], U]) -> "PagedList[U]":
        return PagedList(items=tuple(fn(item) for item in self.items), meta_data=self.meta_data)

    @property
    def is_out_of_range(self) -> bool:
        total_pages = self.meta_data.total_pages
        return total_pages > 0 and self.meta_data.current_page > total_pages
