"""
Criteria-to-query compilation.

A query service turns a criteria object into a :class:`Specification`, a
single ``Q`` predicate plus a distinct flag, and hands it to its repository
for execution. Each non-null filter becomes one predicate fragment and the
fragments are AND-ed together.

Null handling follows SQL: ``notEquals``, ``notIn`` and ``doesNotContain``
never match a NULL column (or a missing related row). Use
``specified=false`` to select NULLs.
"""

import dataclasses
import logging
from dataclasses import dataclass, field
from typing import Any, Generic, Optional, TypeVar

from django.conf import settings
from django.db.models import F, Model, Q, QuerySet, Value
from django.db.models.functions import StrIndex
from django.db.models.lookups import GreaterThan

from .criteria import Criteria
from .filters import Filter, RangeFilter, StringFilter
from .pagination import Page, Pageable
from .repositories import BaseRepository

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Model)
CriteriaT = TypeVar("CriteriaT", bound=Criteria)


@dataclass(frozen=True)
class Specification:
    """
    A composed query predicate.

    ``distinct`` is fixed when the specification is created with
    :meth:`where`; fragments added later with :meth:`and_` cannot change it.
    """

    predicate: Q = field(default_factory=Q)
    distinct: bool = False

    @classmethod
    def where(cls, distinct: Optional[bool] = None) -> "Specification":
        """Start a specification that matches every row."""
        return cls(distinct=bool(distinct))

    def and_(self, fragment: Q) -> "Specification":
        if not fragment:
            return self
        return dataclasses.replace(self, predicate=self.predicate & fragment)

    def apply(self, queryset: QuerySet[Any]) -> QuerySet[Any]:
        queryset = queryset.filter(self.predicate)
        if self.distinct:
            queryset = queryset.distinct()
        return queryset


def _lookup(field_path: str, lookup: str, value: Any) -> Q:
    return Q(**{f"{field_path}__{lookup}": value})


def _excluding_nulls(field_path: str, negated: Q) -> Q:
    return negated & Q(**{f"{field_path}__isnull": False})


def _contains(field_path: str, value: str, case_sensitive: bool) -> Q:
    if not case_sensitive:
        return _lookup(field_path, "icontains", value)
    # SQLite LIKE ignores ASCII case, INSTR does not
    return Q(GreaterThan(StrIndex(F(field_path), Value(value)), 0))


class QueryService(Generic[ModelT, CriteriaT]):
    """
    Base class for services that execute criteria queries.

    Subclasses set ``repository_class`` and implement
    :meth:`create_specification`.
    """

    repository_class: type[BaseRepository[Any]]

    def __init__(self, repository: Optional[BaseRepository[ModelT]] = None) -> None:
        self.repository = repository if repository is not None else self.repository_class()

    def find_by_criteria(self, criteria: Optional[CriteriaT]) -> list[ModelT]:
        """Return every entity matching ``criteria``."""
        logger.debug("find by criteria : %s", criteria)
        specification = self.create_specification(criteria)
        return self.repository.find_all_matching(specification)

    def find_page_by_criteria(
        self, criteria: Optional[CriteriaT], pageable: Pageable
    ) -> Page[ModelT]:
        """Return one page of the entities matching ``criteria``."""
        logger.debug("find by criteria : %s, page: %s", criteria, pageable)
        specification = self.create_specification(criteria)
        return self.repository.find_page_matching(specification, pageable)

    def count_by_criteria(self, criteria: Optional[CriteriaT]) -> int:
        """Return the number of entities matching ``criteria``."""
        logger.debug("count by criteria : %s", criteria)
        specification = self.create_specification(criteria)
        return self.repository.count_matching(specification)

    def create_specification(self, criteria: Optional[CriteriaT]) -> Specification:
        raise NotImplementedError

    def build_specification(self, filter: Filter, field_path: str) -> Q:
        """
        Translate the equality and set operators of ``filter``.

        ``field_path`` is a lookup path, either a column (``name``) or a
        column reached through a relation (``user__id``, ``tags__id``).
        Relations are joined with LEFT OUTER JOIN semantics, so rows without
        a related object still match ``specified=false``.
        """
        q = Q()
        if filter.equals is not None:
            q &= _lookup(field_path, "exact", filter.equals)
        if filter.not_equals is not None:
            q &= _excluding_nulls(
                field_path, ~_lookup(field_path, "exact", filter.not_equals)
            )
        if filter.in_ is not None:
            q &= _lookup(field_path, "in", list(filter.in_))
        if filter.not_in is not None:
            q &= _excluding_nulls(
                field_path, ~_lookup(field_path, "in", list(filter.not_in))
            )
        if filter.specified is not None:
            q &= _lookup(field_path, "isnull", not filter.specified)
        return q

    def build_range_specification(self, filter: RangeFilter, field_path: str) -> Q:
        """Translate ``filter`` including its comparison operators."""
        q = self.build_specification(filter, field_path)
        if filter.greater_than is not None:
            q &= _lookup(field_path, "gt", filter.greater_than)
        if filter.greater_than_or_equal is not None:
            q &= _lookup(field_path, "gte", filter.greater_than_or_equal)
        if filter.less_than is not None:
            q &= _lookup(field_path, "lt", filter.less_than)
        if filter.less_than_or_equal is not None:
            q &= _lookup(field_path, "lte", filter.less_than_or_equal)
        return q

    def build_string_specification(self, filter: StringFilter, field_path: str) -> Q:
        """Translate ``filter`` including substring matching."""
        q = self.build_range_specification(filter, field_path)
        case_sensitive = self.case_sensitive_contains()
        if filter.contains is not None:
            q &= _contains(field_path, filter.contains, case_sensitive)
        if filter.does_not_contain is not None:
            q &= _excluding_nulls(
                field_path, ~_contains(field_path, filter.does_not_contain, case_sensitive)
            )
        return q

    @staticmethod
    def case_sensitive_contains() -> bool:
        query_filters = getattr(settings, "QUERY_FILTERS", {})
        return bool(query_filters.get("CASE_SENSITIVE_CONTAINS", True))
