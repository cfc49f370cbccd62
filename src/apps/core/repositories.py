"""
Base repository for model-bound data access.

Repositories abstract the data access layer from the services,
following the Repository Pattern. Services and query services only talk to
a repository, never to the ORM managers directly, which keeps them easy to
mock in tests. Query services hand over a composed
:class:`~src.apps.core.query.Specification` and the repository executes it.
"""

from typing import TYPE_CHECKING, Any, Generic, Optional, TypeVar

from django.db.models import Model
from django.db.models.query import QuerySet

from .pagination import Page, Pageable, paginate

if TYPE_CHECKING:
    from .query import Specification

ModelT = TypeVar("ModelT", bound=Model)


class BaseRepository(Generic[ModelT]):
    """
    Storage access for a single model.

    Subclasses set ``model`` and may declare the relations to load eagerly
    with ``select_related`` and ``prefetch_related``.
    """

    model: type[ModelT]
    select_related: tuple[str, ...] = ()
    prefetch_related: tuple[str, ...] = ()
    default_ordering: tuple[str, ...] = ("id",)

    def get_queryset(self) -> QuerySet[ModelT]:
        queryset = self.model._default_manager.all()
        if self.select_related:
            queryset = queryset.select_related(*self.select_related)
        if self.prefetch_related:
            queryset = queryset.prefetch_related(*self.prefetch_related)
        return queryset

    def find_all(self) -> list[ModelT]:
        return list(self.get_queryset().order_by(*self.default_ordering))

    def find_all_page(self, pageable: Pageable) -> Page[ModelT]:
        return self._page(self.get_queryset(), pageable)

    def find_by_id(self, id: Any) -> Optional[ModelT]:
        """
        Returns the instance with primary key ``id``, or None.
        """
        if id is None:
            return None
        return self.get_queryset().filter(pk=id).first()

    def exists_by_id(self, id: Any) -> bool:
        if id is None:
            return False
        return self.model._default_manager.filter(pk=id).exists()

    def save(self, entity: ModelT) -> ModelT:
        """
        Inserts or updates ``entity``. A primary key is assigned on insert.

        Args:
            entity: The instance to persist.

        Returns:
            The same instance, now persisted.
        """
        entity.save()
        return entity

    def delete_by_id(self, id: Any) -> None:
        """
        Deletes the instance with primary key ``id``; does nothing if absent.
        """
        self.model._default_manager.filter(pk=id).delete()

    def count(self) -> int:
        return self.model._default_manager.count()

    def find_all_matching(self, specification: "Specification") -> list[ModelT]:
        queryset = specification.apply(self.get_queryset())
        return list(queryset.order_by(*self.default_ordering))

    def find_page_matching(
        self, specification: "Specification", pageable: Pageable
    ) -> Page[ModelT]:
        return self._page(specification.apply(self.get_queryset()), pageable)

    def count_matching(self, specification: "Specification") -> int:
        return specification.apply(self.model._default_manager.all()).count()

    def _page(self, queryset: QuerySet[ModelT], pageable: Pageable) -> Page[ModelT]:
        total = queryset.count()
        window = queryset.order_by(*pageable.ordering)[
            pageable.offset : pageable.offset + pageable.size
        ]
        return paginate(list(window), pageable, total)
