"""Index mapping and analyzer configuration for the talent index.

The schema is assembled from typed pieces (field mappings, token filters,
analyzers) and rendered to plain dicts only when handed to the engine.

Text fields are indexed through ``trigrams``: whitespace tokens, lower-cased,
split on word delimiters (keeping the original token) and expanded into
2-20 character n-grams, so "html" finds "HTML5". Queries go through
``words``, the same chain without the n-gram step, so query terms are not
themselves broken into substrings.
"""

import logging
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from talentsearch.core.schemas import DATE_FORMAT
from talentsearch.engine.base import SearchEngine

logger = logging.getLogger(__name__)

INDEX_ANALYZER = "trigrams"
SEARCH_ANALYZER = "words"


class FieldMapping(BaseModel):
    """Mapping of a single document field."""

    model_config = ConfigDict(frozen=True)

    type: Literal["integer", "long", "keyword", "boolean", "date", "text"]
    format: str | None = None
    analyzer: str | None = None
    search_analyzer: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)


class NGramFilter(BaseModel):
    model_config = ConfigDict(frozen=True)

    min_gram: int = Field(default=2, ge=1)
    max_gram: int = Field(default=20, ge=1)

    def to_dict(self) -> dict[str, Any]:
        return {"type": "ngram", "min_gram": self.min_gram, "max_gram": self.max_gram}


class WordDelimiterFilter(BaseModel):
    model_config = ConfigDict(frozen=True)

    preserve_original: bool = True

    def to_dict(self) -> dict[str, Any]:
        return {"type": "word_delimiter", "preserve_original": self.preserve_original}


class CustomAnalyzer(BaseModel):
    """Tokenizer followed by an ordered chain of token filters."""

    model_config = ConfigDict(frozen=True)

    tokenizer: str = "whitespace"
    filter: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {"type": "custom", "tokenizer": self.tokenizer, "filter": list(self.filter)}


class IndexSchema(BaseModel):
    """Complete index definition: shard count, analysis chain, field mappings."""

    model_config = ConfigDict(frozen=True)

    number_of_shards: int = Field(default=1, ge=1)
    ngram_filters: dict[str, NGramFilter]
    word_filters: dict[str, WordDelimiterFilter]
    analyzers: dict[str, CustomAnalyzer]
    properties: dict[str, FieldMapping]

    @property
    def max_ngram_diff(self) -> int:
        """Widest n-gram span used; the engine rejects wider spans than its setting."""
        return max((f.max_gram - f.min_gram for f in self.ngram_filters.values()), default=1)

    def settings(self) -> dict[str, Any]:
        filters = {name: f.to_dict() for name, f in self.ngram_filters.items()}
        filters.update({name: f.to_dict() for name, f in self.word_filters.items()})
        return {
            "number_of_shards": self.number_of_shards,
            "max_ngram_diff": self.max_ngram_diff,
            "analysis": {
                "filter": filters,
                "analyzer": {name: a.to_dict() for name, a in self.analyzers.items()},
            },
        }

    def mappings(self) -> dict[str, Any]:
        return {"properties": {name: m.to_dict() for name, m in self.properties.items()}}


def _exact(kind: Literal["integer", "long", "keyword", "boolean"]) -> FieldMapping:
    return FieldMapping(type=kind)


def _date() -> FieldMapping:
    return FieldMapping(type="date", format=DATE_FORMAT)


def _text() -> FieldMapping:
    return FieldMapping(type="text", analyzer=INDEX_ANALYZER, search_analyzer=SEARCH_ANALYZER)


def talent_schema() -> IndexSchema:
    """Return the schema of the talent index."""
    return IndexSchema(
        number_of_shards=1,
        ngram_filters={"trigrams_filter": NGramFilter(min_gram=2, max_gram=20)},
        word_filters={"words_filter": WordDelimiterFilter(preserve_original=True)},
        analyzers={
            INDEX_ANALYZER: CustomAnalyzer(
                tokenizer="whitespace",
                filter=("lowercase", "words_filter", "trigrams_filter"),
            ),
            SEARCH_ANALYZER: CustomAnalyzer(
                tokenizer="whitespace",
                filter=("lowercase", "words_filter"),
            ),
        },
        properties={
            "id": _exact("integer"),
            "work_roles": _exact("keyword"),
            "work_experience": _exact("keyword"),
            "work_locations": _exact("keyword"),
            "work_authorization": _exact("keyword"),
            "skills": _text(),
            "summary": _text(),
            "company_ids": _exact("integer"),
            "accepted": _exact("boolean"),
            "batch_starts_at": _date(),
            "batch_ends_at": _date(),
            "added_to_batch_at": _date(),
            "weight": _exact("long"),
            "blocked_companies": _exact("integer"),
        },
    )


class IndexSchemaManager:
    """Drops and recreates an index with the talent schema.

    Reset is destructive and not atomic: if creation fails after the delete,
    the index is left absent and the reset should be run again. Documents
    must be re-indexed by the caller afterwards.
    """

    def __init__(self, engine: SearchEngine, schema: IndexSchema | None = None) -> None:
        self._engine = engine
        self._schema = schema or talent_schema()

    @property
    def schema(self) -> IndexSchema:
        return self._schema

    def reset_index(self, index: str) -> None:
        """Delete ``index`` if present, then create it with the schema."""
        logger.info("Dropping index '%s'", index)
        self._engine.delete_index(index)
        self._engine.create_index(index, self._schema.settings(), self._schema.mappings())
        logger.info("Created index '%s' with %d fields", index, len(self._schema.properties))
