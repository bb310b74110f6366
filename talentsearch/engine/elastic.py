"""Elasticsearch backend built on the official Python client."""

import logging
from typing import Any

from elasticsearch import Elasticsearch

from talentsearch.core.config import ElasticsearchConfig
from talentsearch.core.schemas import Hit
from talentsearch.engine.base import SearchEngine

logger = logging.getLogger(__name__)


class ElasticsearchEngine(SearchEngine):
    """SearchEngine over a synchronous ``elasticsearch.Elasticsearch`` client.

    Client errors (``ConnectionError``, ``NotFoundError``, ``BadRequestError``,
    ...) are raised unchanged.
    """

    def __init__(self, client: Elasticsearch) -> None:
        self._client = client

    @classmethod
    def from_config(cls, config: ElasticsearchConfig) -> "ElasticsearchEngine":
        """Connect to the cluster described by ``config``."""
        logger.debug("Connecting to Elasticsearch at %s", config.url)
        client = Elasticsearch(config.url, request_timeout=config.request_timeout)
        return cls(client)

    def close(self) -> None:
        self._client.close()

    def index(self, index: str, document: dict[str, Any], doc_id: str) -> str:
        response = self._client.index(index=index, id=doc_id, document=document)
        return str(response["result"])

    def search(
        self,
        index: str,
        query: dict[str, Any],
        sort: list[dict[str, Any]] | None,
        size: int,
    ) -> list[Hit]:
        kwargs: dict[str, Any] = {"index": index, "query": query, "size": size}
        if sort:
            kwargs["sort"] = sort
        response = self._client.search(**kwargs)
        hits = response["hits"]["hits"]
        logger.debug("Elasticsearch returned %d hits from '%s'", len(hits), index)
        return [_to_hit(hit) for hit in hits]

    def delete_index(self, index: str) -> None:
        self._client.indices.delete(index=index, ignore_unavailable=True)

    def create_index(
        self,
        index: str,
        settings: dict[str, Any],
        mappings: dict[str, Any],
    ) -> None:
        self._client.indices.create(index=index, settings=settings, mappings=mappings)

    def refresh(self, index: str) -> None:
        self._client.indices.refresh(index=index)


def _to_hit(hit: dict[str, Any]) -> Hit:
    """Map a raw hit to (talent id, score); ``_score`` is null on sorted queries."""
    score = hit.get("_score")
    return Hit(
        talent_id=int(hit["_source"]["id"]),
        score=float(score) if score is not None else None,
    )
