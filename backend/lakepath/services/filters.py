"""Filter chain predicates over listed items.

A filter is plain data: ``{field, operator, operand}``. It is validated once
when built and compiled to a predicate on the item's typed value.
"""

from __future__ import annotations

import dataclasses
import fnmatch
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable

from lakepath.schemas.items import PathItem

logger = logging.getLogger(__name__)


class FieldKind(str, Enum):
    STRING = "string"
    INTEGER = "integer"
    BOOLEAN = "boolean"
    DATETIME = "datetime"


class FilterOperator(str, Enum):
    EQ = "eq"
    NE = "ne"
    LT = "lt"
    LE = "le"
    GT = "gt"
    GE = "ge"
    CONTAINS = "contains"
    LIKE = "like"


@dataclass(frozen=True)
class ItemField:
    """A filterable/sortable PathItem attribute."""
    name: str  # public (camelCase) name
    attribute: str
    kind: FieldKind


ITEM_FIELDS: dict[str, ItemField] = {
    f.name.lower(): f
    for f in (
        ItemField("name", "name", FieldKind.STRING),
        ItemField("directory", "directory", FieldKind.STRING),
        ItemField("url", "url", FieldKind.STRING),
        ItemField("isDirectory", "is_directory", FieldKind.BOOLEAN),
        ItemField("contentLength", "content_length", FieldKind.INTEGER),
        ItemField("lastModified", "last_modified", FieldKind.DATETIME),
    )
}

_OPERATOR_NAMES = {op.value for op in FilterOperator}

_ORDERING = {
    FilterOperator.EQ, FilterOperator.NE,
    FilterOperator.LT, FilterOperator.LE,
    FilterOperator.GT, FilterOperator.GE,
}

ALLOWED_OPERATORS: dict[FieldKind, set[FilterOperator]] = {
    FieldKind.STRING: _ORDERING | {FilterOperator.CONTAINS, FilterOperator.LIKE},
    FieldKind.INTEGER: _ORDERING,
    FieldKind.DATETIME: _ORDERING,
    FieldKind.BOOLEAN: {FilterOperator.EQ, FilterOperator.NE},
}

_COMPARE: dict[FilterOperator, Callable[[Any, Any], bool]] = {
    FilterOperator.EQ: lambda a, b: a == b,
    FilterOperator.NE: lambda a, b: a != b,
    FilterOperator.LT: lambda a, b: a < b,
    FilterOperator.LE: lambda a, b: a <= b,
    FilterOperator.GT: lambda a, b: a > b,
    FilterOperator.GE: lambda a, b: a >= b,
    FilterOperator.CONTAINS: lambda a, b: b in a,
    FilterOperator.LIKE: lambda a, b: fnmatch.fnmatchcase(a, _literal_brackets(b)),
}


def _literal_brackets(pattern: str) -> str:
    """Quote brackets so only ``*`` and ``?`` act as wildcards."""
    return "".join(f"[{c}]" if c in "[]" else c for c in pattern)


_TRUE = {"true", "1", "yes"}
_FALSE = {"false", "0", "no"}


def lookup_field(name: str | None) -> ItemField | None:
    """Find an item field by name, ignoring case."""
    if not name:
        return None
    return ITEM_FIELDS.get(name.strip().lower())


def parse_datetime(value: str) -> datetime:
    """Parse an ISO-8601 timestamp; naive values are taken as UTC."""
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def coerce_operand(kind: FieldKind, operand: str) -> Any:
    """Convert the operand to the field's type; raises ValueError when it can't."""
    if kind == FieldKind.STRING:
        return operand.casefold()
    if kind == FieldKind.INTEGER:
        return int(operand.strip())
    if kind == FieldKind.BOOLEAN:
        lowered = operand.strip().lower()
        if lowered in _TRUE:
            return True
        if lowered in _FALSE:
            return False
        raise ValueError(f"'{operand}' is not a boolean")
    return parse_datetime(operand)


@dataclass(frozen=True)
class FilterSpec:
    """One predicate of the filter chain."""

    field: str
    operator: str
    operand: str
    is_valid: bool = False
    error: str | None = None
    _item_field: ItemField | None = dataclasses.field(default=None, repr=False, compare=False)
    _value: Any = dataclasses.field(default=None, repr=False, compare=False)

    @classmethod
    def build(cls, field_name: str, operator: str, operand: str) -> "FilterSpec":
        """Create a spec, recording why it is invalid instead of raising."""

        def invalid(error: str) -> "FilterSpec":
            logger.info("Invalid filter on '%s': %s", field_name, error)
            return cls(field_name, operator, operand, is_valid=False, error=error)

        item_field = lookup_field(field_name)
        if item_field is None:
            return invalid(f"Unknown column '{field_name}'")
        try:
            op = FilterOperator(operator.strip().lower())
        except ValueError:
            return invalid(f"Unknown operator '{operator}'")
        if op not in ALLOWED_OPERATORS[item_field.kind]:
            return invalid(f"Operator '{op.value}' is not supported for {item_field.kind.value} column '{item_field.name}'")
        try:
            value = coerce_operand(item_field.kind, operand)
        except ValueError:
            return invalid(f"Value '{operand}' is not a valid {item_field.kind.value} for column '{item_field.name}'")
        return cls(
            field_name, op.value, operand,
            is_valid=True, _item_field=item_field, _value=value,
        )

    @classmethod
    def parse(cls, field_name: str, expression: str) -> "FilterSpec":
        """Parse the ``<operator>:<value>`` query form.

        A value without a known operator prefix means ``eq`` on the whole value,
        so timestamps and URLs may be passed bare.
        """
        operator, sep, operand = expression.partition(":")
        if not sep or operator.strip().lower() not in _OPERATOR_NAMES:
            return cls.build(field_name, FilterOperator.EQ.value, expression)
        return cls.build(field_name, operator, operand)

    def matches(self, item: PathItem) -> bool:
        if not self.is_valid:
            raise ValueError(f"Cannot apply invalid filter on '{self.field}'")
        actual = getattr(item, self._item_field.attribute)
        if actual is None:
            return False
        if self._item_field.kind == FieldKind.STRING:
            actual = actual.casefold()
        return _COMPARE[FilterOperator(self.operator)](actual, self._value)

    def apply(self, items: list[PathItem]) -> list[PathItem]:
        return [item for item in items if self.matches(item)]
