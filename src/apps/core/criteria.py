"""
Criteria objects: the filters a client may put on one entity type.

A concrete criteria class is a dataclass with one optional filter per
queryable attribute, declared with :func:`criteria_field`, plus a
``distinct`` flag::

    @dataclass(unsafe_hash=True)
    class BlogCriteria(Criteria):
        id: Optional[LongFilter] = criteria_field("id", LongFilter)
        name: Optional[StringFilter] = criteria_field("name", StringFilter)
        distinct: Optional[bool] = None

Criteria are built per request from the query string, e.g.
``/api/blogs/?id.greaterThan=5&name.contains=dev&userId.specified=false``.
"""

import dataclasses
from dataclasses import field
from typing import Any, Iterable, Mapping, Optional, TypeVar

from .filters import Filter, InvalidFilterError, parse_boolean

CriteriaT = TypeVar("CriteriaT", bound="Criteria")

DISTINCT_PARAM = "distinct"


def criteria_field(param: str, filter_class: type[Filter]) -> Any:
    """Declare a filter attribute bound to the query parameter prefix ``param``."""
    return field(default=None, metadata={"param": param, "filter_class": filter_class})


def _getlist(params: Mapping[str, Any], key: str) -> list[str]:
    if hasattr(params, "getlist"):
        return list(params.getlist(key))
    value = params[key]
    if isinstance(value, (list, tuple)):
        return [str(v) for v in value]
    return [str(value)]


class Criteria:
    """Base class for criteria dataclasses."""

    distinct: Optional[bool]

    @classmethod
    def filter_fields(cls) -> dict[str, dataclasses.Field]:  # type: ignore[type-arg]
        """Map query parameter prefixes to filter fields, in declaration order."""
        return {
            f.metadata["param"]: f
            for f in dataclasses.fields(cls)  # type: ignore[arg-type]
            if "param" in f.metadata
        }

    @classmethod
    def from_query_params(
        cls: type[CriteriaT], params: Mapping[str, Any]
    ) -> CriteriaT:
        """
        Build a criteria object from request query parameters.

        Parameters look like ``<field>.<operator>=<value>``; ``distinct`` is a
        plain boolean. Parameters that do not name a known field (paging,
        sorting, anything else) are ignored.

        Raises:
            InvalidFilterError: If a known field is used with an unsupported
                operator or a value that does not parse.
        """
        criteria = cls()
        bindings = cls.filter_fields()

        for key in params:
            if key == DISTINCT_PARAM:
                values = _getlist(params, key)
                try:
                    criteria.distinct = parse_boolean(values[-1]) if values else None
                except ValueError as e:
                    raise InvalidFilterError(key, str(e)) from e
                continue

            prefix, sep, operator_name = key.partition(".")
            if not sep or prefix not in bindings:
                continue

            binding = bindings[prefix]
            current = getattr(criteria, binding.name)
            if current is None:
                current = binding.metadata["filter_class"]()
                setattr(criteria, binding.name, current)
            current.set_operator(operator_name, _getlist(params, key), param=key)

        return criteria

    def set_filters(self) -> Iterable[tuple[str, Filter]]:
        """Yield ``(attribute, filter)`` for every filter that is present."""
        for binding in self.filter_fields().values():
            value = getattr(self, binding.name)
            if value is not None:
                yield binding.name, value

    def copy(self: CriteriaT) -> CriteriaT:
        """Return a copy whose filters are independent of this one's."""
        changes = {
            f.name: getattr(self, f.name).copy()
            for f in dataclasses.fields(self)  # type: ignore[arg-type]
            if isinstance(getattr(self, f.name), Filter)
        }
        return dataclasses.replace(self, **changes)  # type: ignore[type-var]

    def __str__(self) -> str:
        parts = [
            f"{f.name}={getattr(self, f.name)}"
            for f in dataclasses.fields(self)  # type: ignore[arg-type]
            if getattr(self, f.name) is not None
        ]
        return f"{type(self).__name__}({', '.join(parts)})"
