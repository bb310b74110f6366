"""Orchestrator: resolves parameters, runs the query, post-processes hits.

Data flow:
  1. Resolve epoch, target index and search mode from the parameters
  2. Build the composite query
  3. Execute (field sort without keywords, relevance ranking with them)
  4. Score cutoff + consecutive de-duplication
"""

import logging
from collections.abc import Iterable
from datetime import datetime, timezone

from talentsearch.core.config import Settings
from talentsearch.core.params import Params
from talentsearch.core.schemas import Hit, Talent
from talentsearch.engine.base import SearchEngine
from talentsearch.engine.schema import IndexSchemaManager
from talentsearch.pipeline.postprocess import talent_ids
from talentsearch.query import keywords_of, search_filters, sorting_criteria

logger = logging.getLogger(__name__)

_WRITE_OK = ("created", "updated")


def resolve_epoch(params: Params, now: datetime | None = None) -> str:
    """Return the ``epoch`` parameter as ISO-8601, or ``now`` if absent/unparseable.

    Strings must be ISO-8601; numbers are read as UNIX seconds.
    """
    value = params.get("epoch")
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value.strip()).isoformat()
        except ValueError:
            logger.debug("Ignoring unparseable epoch %r", value)
    elif isinstance(value, (int, float)) and not isinstance(value, bool):
        try:
            return datetime.fromtimestamp(value, tz=timezone.utc).isoformat()
        except (OverflowError, OSError, ValueError):
            logger.debug("Ignoring out-of-range epoch %r", value)
    return (now or datetime.now(timezone.utc)).isoformat()


def is_text_search(params: Params) -> bool:
    """True iff a non-empty ``keywords`` string was given."""
    return keywords_of(params) is not None


class TalentSearch:
    """Search, index and reset operations over one talent index.

    Usage::

        engine = ElasticsearchEngine.from_config(settings.elasticsearch)
        talents = TalentSearch(engine, settings)
        talents.reset_index()
        talents.index_all(fixtures)
        talents.refresh()
        ids = talents.search(Params.from_query_string("work_roles[]=DevOps"))
    """

    def __init__(self, engine: SearchEngine, settings: Settings) -> None:
        self._engine = engine
        self._settings = settings
        self._schema_manager = IndexSchemaManager(engine)

    @property
    def default_index(self) -> str:
        return self._settings.elasticsearch.index

    def resolve_index(self, params: Params) -> str:
        """Return the ``index`` parameter if given as a string, else the default."""
        index = params.text("index")
        return index if index else self.default_index

    def run_query(self, params: Params) -> list[Hit]:
        """Execute the search for ``params`` and return raw hits.

        Engine errors propagate.
        """
        epoch = resolve_epoch(params)
        index = self.resolve_index(params)
        text_search = is_text_search(params)
        query = search_filters(params, epoch)
        sort = None if text_search else sorting_criteria()

        logger.debug(
            "Searching '%s' at epoch %s (%s)",
            index, epoch, "relevance" if text_search else "sorted",
        )
        return self._engine.search(
            index,
            query.to_dsl(),
            sort,
            self._settings.search.max_results,
        )

    def search(self, params: Params) -> list[int]:
        """Return the ids of visible talents matching ``params``, in result order.

        Never raises on engine errors: they are logged and an empty list is
        returned, so callers cannot tell a failure from no matches. Use
        ``run_query`` when that distinction matters.
        """
        try:
            hits = self.run_query(params)
        except Exception as e:
            logger.error("Search failed: %s: %s", type(e).__name__, e)
            return []

        ids = talent_ids(hits, self._settings.search.min_score)
        logger.info("Search returned %d hits, %d talents", len(hits), len(ids))
        return ids

    def index(self, talent: Talent, index: str | None = None) -> str:
        """Write ``talent`` under its id, replacing any previous document."""
        target = index or self.default_index
        result = self._engine.index(target, talent.to_document(), str(talent.id))
        logger.debug("Indexed talent %d into '%s': %s", talent.id, target, result)
        return result

    def index_all(self, talents: Iterable[Talent], index: str | None = None) -> bool:
        """Index each talent in order; True iff every write succeeded."""
        results = [self.index(talent, index) for talent in talents]
        logger.info("Indexed %d talents", len(results))
        return all(r in _WRITE_OK for r in results)

    def reset_index(self, index: str | None = None) -> None:
        """Drop and recreate the index with the talent schema (destructive)."""
        self._schema_manager.reset_index(index or self.default_index)

    def refresh(self, index: str | None = None) -> None:
        self._engine.refresh(index or self.default_index)
