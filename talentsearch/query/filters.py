"""Filter composition for talent searches.

Within one filter category the supplied values are ORed (``terms``); across
categories the resulting clauses are ANDed (``bool.must``). A category with
no values contributes no clause at all rather than matching nothing.

Visibility: a talent must be accepted and inside a live batch
(``batch_starts_at <= epoch <= batch_ends_at``). Talents listed in
``presented_talents`` skip those rules.
"""

import logging
from collections.abc import Sequence

from talentsearch.core.params import Params
from talentsearch.core.schemas import DATE_FORMAT
from talentsearch.query.full_text import full_text_search
from talentsearch.query.nodes import Bool, QueryNode, Range, Term, Terms, TermValue

logger = logging.getLogger(__name__)

# (parameter name, document field) pairs for the positive string filters.
_STRING_FILTERS: list[tuple[str, str]] = [
    ("work_roles", "work_roles"),
    ("work_experience", "work_experience"),
    ("work_authorization", "work_authorization"),
    ("work_locations", "work_locations"),
]


def build_terms(field: str, values: Sequence[TermValue]) -> list[QueryNode]:
    """Return a one-element list with a ``Terms`` node, or [] when no values."""
    if not values:
        return []
    return [Terms(field=field, values=tuple(values))]


def visibility_filters(epoch: str, presented_talents: Sequence[int]) -> list[QueryNode]:
    """Return the visibility clause for ``epoch``.

    Args:
        epoch: ISO-8601 timestamp the batch window is checked against.
        presented_talents: Ids that bypass acceptance and batch checks.

    Returns:
        A single-element list: the standard rule, or an OR of the standard
        rule and an id match when ``presented_talents`` is non-empty.
    """
    visibility_rules = Bool(
        must=(
            Term(field="accepted", value=True),
            Range(field="batch_starts_at", lte=epoch, format=DATE_FORMAT),
            Range(field="batch_ends_at", gte=epoch, format=DATE_FORMAT),
        ),
    )

    if not presented_talents:
        return [visibility_rules]

    presented = Bool(must=tuple(build_terms("id", list(presented_talents))))
    return [Bool(should=(visibility_rules, presented))]


def search_filters(params: Params, epoch: str) -> Bool:
    """Build the full query for ``params`` with batches checked at ``epoch``."""
    must: list[QueryNode] = []
    for param, field in _STRING_FILTERS:
        must.extend(build_terms(field, params.strings(param)))
    must.extend(build_terms("id", params.integers("ids")))

    keywords = full_text_search(params)
    if keywords is not None:
        must.append(keywords)

    must.extend(visibility_filters(epoch, params.integers("presented_talents")))

    company_id = params.integers("company_id")
    must_not = build_terms("company_ids", company_id) + build_terms("blocked_companies", company_id)

    query = Bool(must=tuple(must), must_not=tuple(must_not))
    logger.debug("Built query: %s", query.to_dsl())
    return query
