"""Immutable query tree rendered to the Elasticsearch query DSL.

Each node is a frozen pydantic model with a ``to_dsl()`` method; the tree is
only turned into plain dicts at the engine boundary.
"""

from abc import ABC, abstractmethod
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict

TermValue = str | int | bool


class QueryNode(BaseModel, ABC):
    """Base class for every query node."""

    model_config = ConfigDict(frozen=True)

    @abstractmethod
    def to_dsl(self) -> dict[str, Any]:
        """Render this node (and its children) as query DSL."""


class Term(QueryNode):
    """Exact match of a single value."""

    field: str
    value: TermValue

    def to_dsl(self) -> dict[str, Any]:
        return {"term": {self.field: self.value}}


class Terms(QueryNode):
    """Exact match of any of the given values."""

    field: str
    values: tuple[TermValue, ...]

    def to_dsl(self) -> dict[str, Any]:
        return {"terms": {self.field: list(self.values)}}


class Range(QueryNode):
    """Inclusive range over a field; unset bounds are open."""

    field: str
    gte: str | int | float | None = None
    lte: str | int | float | None = None
    format: str | None = None

    def to_dsl(self) -> dict[str, Any]:
        bounds: dict[str, Any] = {}
        if self.gte is not None:
            bounds["gte"] = self.gte
        if self.lte is not None:
            bounds["lte"] = self.lte
        if self.format is not None:
            bounds["format"] = self.format
        return {"range": {self.field: bounds}}


class MultiMatch(QueryNode):
    """Analyzed text match across several fields."""

    query: str
    fields: tuple[str, ...]
    type: Literal["best_fields", "most_fields", "cross_fields", "phrase", "phrase_prefix"] = (
        "best_fields"
    )
    tie_breaker: float | None = None

    def to_dsl(self) -> dict[str, Any]:
        body: dict[str, Any] = {
            "query": self.query,
            "fields": list(self.fields),
            "type": self.type,
        }
        if self.tie_breaker is not None:
            body["tie_breaker"] = self.tie_breaker
        return {"multi_match": body}


class Bool(QueryNode):
    """Boolean combination: all of ``must``, any of ``should``, none of ``must_not``.

    With no ``must`` clauses at least one ``should`` clause has to match.
    """

    must: tuple[QueryNode, ...] = ()
    should: tuple[QueryNode, ...] = ()
    must_not: tuple[QueryNode, ...] = ()

    def to_dsl(self) -> dict[str, Any]:
        body: dict[str, Any] = {}
        for clause in ("must", "should", "must_not"):
            nodes: tuple[QueryNode, ...] = getattr(self, clause)
            if nodes:
                body[clause] = [n.to_dsl() for n in nodes]
        return {"bool": body}
