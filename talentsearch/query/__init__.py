"""Query builders for talent searches.

Usage:
    from talentsearch.query import search_filters, sorting_criteria

    query = search_filters(params, epoch)
    engine.search(index, query.to_dsl(), sorting_criteria(), size=1000)
"""

from talentsearch.query.filters import build_terms, search_filters, visibility_filters
from talentsearch.query.full_text import full_text_search, keywords_of
from talentsearch.query.nodes import Bool, MultiMatch, QueryNode, Range, Term, Terms
from talentsearch.query.sorting import sorting_criteria

__all__ = [
    "Bool",
    "MultiMatch",
    "QueryNode",
    "Range",
    "Term",
    "Terms",
    "build_terms",
    "full_text_search",
    "keywords_of",
    "search_filters",
    "sorting_criteria",
    "visibility_filters",
]
