"""Free-text relevance query over the talent text fields."""

from talentsearch.core.params import Params
from talentsearch.query.nodes import MultiMatch

TEXT_FIELDS = ("skills", "summary")


def keywords_of(params: Params) -> str | None:
    """Return the ``keywords`` parameter if it is a non-empty string."""
    keywords = params.text("keywords")
    return keywords or None


def full_text_search(params: Params) -> MultiMatch | None:
    """Build a cross-field match of ``keywords`` over skills and summary.

    Cross-field matching treats both fields as one, so a multi-word query can
    be satisfied by terms split across them. Returns None when there is no
    usable keyword string.
    """
    keywords = keywords_of(params)
    if keywords is None:
        return None
    return MultiMatch(
        query=keywords,
        fields=TEXT_FIELDS,
        type="cross_fields",
        tie_breaker=0.0,
    )
