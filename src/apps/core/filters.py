"""
Typed query filters.

A filter carries the optional constraints a client may put on a single
attribute of an entity, e.g. ``name.contains=foo`` or ``id.greaterThan=5``.
Every operator is optional; a filter with no operator set is empty and
matches everything.

Filters are bound from query parameters with :meth:`Filter.set_operator`,
which parses the raw strings using the value parser of the concrete filter
class. Which operators exist is decided by the class:

- ``Filter``: equals, notEquals, specified, in, notIn
- ``RangeFilter``: the above plus greaterThan, greaterThanOrEqual,
  lessThan, lessThanOrEqual
- ``StringFilter``: the range operators plus contains, doesNotContain
"""

import copy
import dataclasses
import datetime
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Any, ClassVar, Iterable, Optional

from django.utils.dateparse import parse_date, parse_datetime

TRUE_VALUES = {"true", "1", "yes", "on"}
FALSE_VALUES = {"false", "0", "no", "off"}


class InvalidFilterError(ValueError):
    """Raised when a query parameter cannot be bound to a filter."""

    def __init__(self, param: str, message: str) -> None:
        self.param = param
        self.message = message
        super().__init__(f"{param}: {message}")


def parse_boolean(raw: str) -> bool:
    """Parse a boolean query value (``true``/``false``, case-insensitive)."""
    value = raw.strip().lower()
    if value in TRUE_VALUES:
        return True
    if value in FALSE_VALUES:
        return False
    raise ValueError(f"'{raw}' is not a boolean")


def operator(name: str, *, many: bool = False, boolean: bool = False) -> Any:
    """Declare an operator field bound to the wire name ``name``."""
    return field(
        default=None, metadata={"operator": name, "many": many, "boolean": boolean}
    )


@dataclass(unsafe_hash=True)
class Filter:
    """Equality and set-membership constraints on one attribute."""

    equals: Optional[Any] = operator("equals")
    not_equals: Optional[Any] = operator("notEquals")
    specified: Optional[bool] = operator("specified", boolean=True)
    in_: Optional[tuple[Any, ...]] = operator("in", many=True)
    not_in: Optional[tuple[Any, ...]] = operator("notIn", many=True)

    value_name: ClassVar[str] = "value"

    def __post_init__(self) -> None:
        # Set operators are stored as tuples so filters stay hashable.
        for f in dataclasses.fields(self):
            value = getattr(self, f.name)
            if f.metadata["many"] and value is not None and not isinstance(value, tuple):
                setattr(self, f.name, tuple(value))

    @classmethod
    def parse_value(cls, raw: str) -> Any:
        return raw

    @classmethod
    def operators(cls) -> dict[str, dataclasses.Field]:  # type: ignore[type-arg]
        """Map wire operator names to their dataclass fields."""
        return {f.metadata["operator"]: f for f in dataclasses.fields(cls)}

    def set_operator(
        self, name: str, raw_values: Iterable[str], param: Optional[str] = None
    ) -> None:
        """
        Parse ``raw_values`` and store them under the operator ``name``.

        Args:
            name: Wire operator name, e.g. ``notEquals``.
            raw_values: Raw query values. Set operators accept several values
                and comma-separated lists; other operators use the last value.
            param: Full parameter name, used in error messages.

        Raises:
            InvalidFilterError: If the operator is not supported by this filter
                or a value cannot be parsed.
        """
        param = param or name
        operator_field = self.operators().get(name)
        if operator_field is None:
            raise InvalidFilterError(
                param, f"unsupported operator for {type(self).__name__}"
            )

        raw_values = list(raw_values)
        if not raw_values:
            raise InvalidFilterError(param, "missing value")

        parse = parse_boolean if operator_field.metadata["boolean"] else self.parse_value
        try:
            if operator_field.metadata["many"]:
                items = [item for raw in raw_values for item in raw.split(",")]
                value: Any = tuple(parse(item) for item in items)
            else:
                value = parse(raw_values[-1])
        except (ValueError, TypeError, InvalidOperation) as e:
            raise InvalidFilterError(param, f"invalid {self.value_name}: {e}") from e

        setattr(self, operator_field.name, value)

    def is_empty(self) -> bool:
        return all(getattr(self, f.name) is None for f in dataclasses.fields(self))

    def copy(self) -> "Filter":
        return copy.deepcopy(self)

    def __str__(self) -> str:
        parts = [
            f"{f.name}={getattr(self, f.name)!r}"
            for f in dataclasses.fields(self)
            if getattr(self, f.name) is not None
        ]
        return f"{type(self).__name__}({', '.join(parts)})"


@dataclass(unsafe_hash=True)
class RangeFilter(Filter):
    """Filter for orderable values."""

    greater_than: Optional[Any] = operator("greaterThan")
    greater_than_or_equal: Optional[Any] = operator("greaterThanOrEqual")
    less_than: Optional[Any] = operator("lessThan")
    less_than_or_equal: Optional[Any] = operator("lessThanOrEqual")


@dataclass(unsafe_hash=True)
class StringFilter(RangeFilter):
    """Filter for text values; adds substring matching."""

    contains: Optional[str] = operator("contains")
    does_not_contain: Optional[str] = operator("doesNotContain")

    value_name: ClassVar[str] = "string"


@dataclass(unsafe_hash=True)
class BooleanFilter(Filter):
    value_name: ClassVar[str] = "boolean"

    @classmethod
    def parse_value(cls, raw: str) -> bool:
        return parse_boolean(raw)


@dataclass(unsafe_hash=True)
class LongFilter(RangeFilter):
    value_name: ClassVar[str] = "integer"

    @classmethod
    def parse_value(cls, raw: str) -> int:
        return int(raw)


class IntegerFilter(LongFilter):
    pass


@dataclass(unsafe_hash=True)
class FloatFilter(RangeFilter):
    value_name: ClassVar[str] = "number"

    @classmethod
    def parse_value(cls, raw: str) -> float:
        return float(raw)


class DoubleFilter(FloatFilter):
    pass


@dataclass(unsafe_hash=True)
class BigDecimalFilter(RangeFilter):
    value_name: ClassVar[str] = "decimal"

    @classmethod
    def parse_value(cls, raw: str) -> Decimal:
        return Decimal(raw)


@dataclass(unsafe_hash=True)
class InstantFilter(RangeFilter):
    """Filter for points in time. Naive values are read as UTC."""

    value_name: ClassVar[str] = "datetime"

    @classmethod
    def parse_value(cls, raw: str) -> datetime.datetime:
        value = parse_datetime(raw.strip())
        if value is None:
            raise ValueError(f"'{raw}' is not an ISO 8601 datetime")
        if value.tzinfo is None:
            value = value.replace(tzinfo=datetime.timezone.utc)
        return value


@dataclass(unsafe_hash=True)
class LocalDateFilter(RangeFilter):
    value_name: ClassVar[str] = "date"

    @classmethod
    def parse_value(cls, raw: str) -> datetime.date:
        value = parse_date(raw.strip())
        if value is None:
            raise ValueError(f"'{raw}' is not an ISO 8601 date")
        return value
