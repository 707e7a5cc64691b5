"""
Typed query specifications.

A QuerySpec is an immutable set of predicates over document fields.
Stores render it to a MongoDB filter with to_filter(), so callers never
hand-build filter dicts:

    QuerySpec().where("applicantID.user", user_id).at_least("createdAt", since)
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterable, Tuple


EQ = "eq"
GTE = "gte"
GT = "gt"
IN = "in"

_MONGO_OPERATORS = {GTE: "$gte", GT: "$gt", IN: "$in"}


@dataclass(frozen=True)
class Predicate:
    field: str
    op: str
    value: Any


@dataclass(frozen=True)
class QuerySpec:
    predicates: Tuple[Predicate, ...] = ()

    def _add(self, field: str, op: str, value: Any) -> "QuerySpec":
        return QuerySpec(self.predicates + (Predicate(field, op, value),))

    def where(self, field: str, value: Any) -> "QuerySpec":
        """field == value"""
        return self._add(field, EQ, value)

    def at_least(self, field: str, value: Any) -> "QuerySpec":
        """field >= value (inclusive lower bound)"""
        return self._add(field, GTE, value)

    def after(self, field: str, value: Any) -> "QuerySpec":
        """field > value"""
        return self._add(field, GT, value)

    def one_of(self, field: str, values: Iterable[Any]) -> "QuerySpec":
        """field in values"""
        return self._add(field, IN, list(values))

    def to_filter(self) -> Dict[str, Any]:
        """Render as a MongoDB filter document."""
        result: Dict[str, Any] = {}
        for pred in self.predicates:
            if pred.op == EQ:
                result[pred.field] = pred.value
                continue
            operators = result.setdefault(pred.field, {})
            if not isinstance(operators, dict):
                raise ValueError(f"Cannot combine equality and range on '{pred.field}'")
            operators[_MONGO_OPERATORS[pred.op]] = pred.value
        return result
