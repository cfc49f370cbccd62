"""
Page requests and page results.

Paging is zero-based: ``?page=0&size=20&sort=name,desc&sort=id``. A list
response carries the total in ``X-Total-Count`` and navigation links in an
RFC 5988 ``Link`` header.
"""

import math
from dataclasses import dataclass, field
from typing import Any, Generic, Iterable, Iterator, Mapping, Optional, TypeVar

T = TypeVar("T")

SORT_DIRECTIONS = ("asc", "desc")

# OFFSET and LIMIT are signed 64-bit integers in SQL
MAX_OFFSET = 2**63 - 1


class InvalidPageRequestError(ValueError):
    """Raised when ``page``, ``size`` or ``sort`` parameters are malformed."""


def _parse_int(name: str, raw: str) -> int:
    try:
        return int(raw)
    except (TypeError, ValueError) as e:
        raise InvalidPageRequestError(f"{name}: '{raw}' is not an integer") from e


@dataclass(frozen=True)
class Pageable:
    """A request for one page of results."""

    page: int = 0
    size: int = 20
    sort: tuple[tuple[str, str], ...] = (("id", "asc"),)

    @property
    def offset(self) -> int:
        return self.page * self.size

    @property
    def ordering(self) -> list[str]:
        """``order_by`` arguments, with ``id`` as the final tie-breaker."""
        ordering = [
            f"-{name}" if direction == "desc" else name for name, direction in self.sort
        ]
        if not any(name == "id" for name, _ in self.sort):
            ordering.append("id")
        return ordering

    @classmethod
    def from_query_params(
        cls,
        params: Mapping[str, Any],
        *,
        sortable_fields: Iterable[str] = ("id",),
        default_size: int = 20,
        max_size: int = 2000,
    ) -> "Pageable":
        """
        Read ``page``, ``size`` and ``sort`` from request query parameters.

        Args:
            params: A ``QueryDict`` or plain mapping.
            sortable_fields: Field names accepted in ``sort``.
            default_size: Page size when ``size`` is absent.
            max_size: Upper bound applied to ``size``.

        Raises:
            InvalidPageRequestError: On non-numeric or negative values, on a
                page beyond the range of a SQL offset and on unknown sort
                fields or directions.
        """
        page = _parse_int("page", params["page"]) if params.get("page") else 0
        size = _parse_int("size", params["size"]) if params.get("size") else default_size
        if page < 0:
            raise InvalidPageRequestError("page: must not be negative")
        if size < 1:
            raise InvalidPageRequestError("size: must be at least 1")
        size = min(size, max_size)
        if (page + 1) * size > MAX_OFFSET:
            raise InvalidPageRequestError("page: out of range")

        if hasattr(params, "getlist"):
            raw_sorts = params.getlist("sort")
        else:
            raw_sorts = params.get("sort") or []
            if isinstance(raw_sorts, str):
                raw_sorts = [raw_sorts]

        allowed = set(sortable_fields)
        sort = []
        for raw in raw_sorts:
            name, _, direction = raw.partition(",")
            direction = (direction or "asc").strip().lower()
            name = name.strip()
            if name not in allowed:
                raise InvalidPageRequestError(f"sort: unknown field '{name}'")
            if direction not in SORT_DIRECTIONS:
                raise InvalidPageRequestError(f"sort: unknown direction '{direction}'")
            sort.append((name, direction))

        return cls(page=page, size=size, sort=tuple(sort) or (("id", "asc"),))

    def __str__(self) -> str:
        sort = ",".join(f"{name}: {direction.upper()}" for name, direction in self.sort)
        return f"Page request [number: {self.page}, size {self.size}, sort: {sort}]"


@dataclass
class Page(Generic[T]):
    """One window of a result set plus the size of the whole set."""

    content: list[T] = field(default_factory=list)
    total_elements: int = 0
    number: int = 0
    size: int = 20

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total_elements / self.size) if self.size else 0

    @property
    def has_next(self) -> bool:
        return self.number + 1 < self.total_pages

    @property
    def has_previous(self) -> bool:
        return self.number > 0

    @property
    def is_first(self) -> bool:
        return not self.has_previous

    @property
    def is_last(self) -> bool:
        return not self.has_next

    def __iter__(self) -> Iterator[T]:
        return iter(self.content)

    def __len__(self) -> int:
        return len(self.content)


def _page_link(request: Any, number: int, size: int, rel: str) -> str:
    query = request.query_params.copy()
    query["page"] = str(number)
    query["size"] = str(size)
    url = request.build_absolute_uri(f"{request.path}?{query.urlencode()}")
    return f'<{url}>; rel="{rel}"'


def pagination_headers(request: Any, page: Page[Any]) -> dict[str, str]:
    """
    Build the ``X-Total-Count`` and ``Link`` headers for a list response.

    Args:
        request: The DRF request the page was produced for.
        page: The page being returned.

    Returns:
        Header names mapped to values.
    """
    links = []
    if page.has_next:
        links.append(_page_link(request, page.number + 1, page.size, "next"))
    if page.has_previous:
        links.append(_page_link(request, page.number - 1, page.size, "prev"))
    last = max(page.total_pages - 1, 0)
    links.append(_page_link(request, last, page.size, "last"))
    links.append(_page_link(request, 0, page.size, "first"))
    return {"X-Total-Count": str(page.total_elements), "Link": ",".join(links)}


def paginate(items: Optional[list[T]], pageable: Pageable, total: int) -> Page[T]:
    return Page(
        content=list(items or []),
        total_elements=total,
        number=pageable.page,
        size=pageable.size,
    )
