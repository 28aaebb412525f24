"""
Read predicates for the table store, rendered as MongoDB filter documents.
"""

import re
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Tuple


class Predicate:
    """Base class; subclasses render themselves to a filter document."""

    def to_filter(self) -> Dict[str, Any]:
        raise NotImplementedError


@dataclass(frozen=True)
class Equals(Predicate):
    field: str
    value: Any

    def to_filter(self) -> Dict[str, Any]:
        return {self.field: self.value}


@dataclass(frozen=True)
class InRange(Predicate):
    """lower <= field < upper"""
    field: str
    lower: float
    upper: float

    def to_filter(self) -> Dict[str, Any]:
        return {self.field: {"$gte": self.lower, "$lt": self.upper}}


@dataclass(frozen=True)
class Contains(Predicate):
    """Case-insensitive substring match; the text is matched literally."""
    field: str
    text: str

    def to_filter(self) -> Dict[str, Any]:
        return {self.field: {"$regex": re.escape(self.text), "$options": "i"}}


@dataclass(frozen=True)
class EqualsIgnoreCase(Predicate):
    field: str
    text: str

    def to_filter(self) -> Dict[str, Any]:
        return {self.field: {"$regex": f"^{re.escape(self.text)}$", "$options": "i"}}


@dataclass(frozen=True)
class AnyOf(Predicate):
    """Logical OR of other predicates."""
    predicates: Tuple[Predicate, ...]

    def to_filter(self) -> Dict[str, Any]:
        return {"$or": [p.to_filter() for p in self.predicates]}


def combine(predicates: Iterable[Predicate]) -> Dict[str, Any]:
    """AND all predicates together into one filter document."""
    clauses = [p.to_filter() for p in predicates]
    if not clauses:
        return {}
    if len(clauses) == 1:
        return clauses[0]
    return {"$and": clauses}
