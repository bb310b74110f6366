"""Tests for query nodes and builders: visibility, full text, composite, sorting."""

import pytest
from pydantic import ValidationError

from talentsearch.core.params import Params
from talentsearch.query import (
    Bool,
    MultiMatch,
    Range,
    Term,
    Terms,
    build_terms,
    full_text_search,
    search_filters,
    sorting_criteria,
    visibility_filters,
)

EPOCH = "2015-01-01T12:00:00+00:00"

STANDARD_RULE = {
    "bool": {
        "must": [
            {"term": {"accepted": True}},
            {"range": {"batch_starts_at": {"lte": EPOCH, "format": "date_optional_time"}}},
            {"range": {"batch_ends_at": {"gte": EPOCH, "format": "date_optional_time"}}},
        ],
    },
}


def _must(query: Bool) -> list[dict]:
    return query.to_dsl()["bool"].get("must", [])


def _must_not(query: Bool) -> list[dict]:
    return query.to_dsl()["bool"].get("must_not", [])


# ---------------------------------------------------------------------------
# Nodes
# ---------------------------------------------------------------------------


class TestNodes:
    def test_term(self) -> None:
        assert Term(field="accepted", value=True).to_dsl() == {"term": {"accepted": True}}

    def test_terms(self) -> None:
        node = Terms(field="id", values=(2, 4))
        assert node.to_dsl() == {"terms": {"id": [2, 4]}}

    def test_range_omits_open_bounds(self) -> None:
        assert Range(field="weight", gte=1).to_dsl() == {"range": {"weight": {"gte": 1}}}

    def test_multi_match(self) -> None:
        node = MultiMatch(query="rust", fields=("skills",), type="cross_fields", tie_breaker=0.0)
        assert node.to_dsl() == {
            "multi_match": {
                "query": "rust",
                "fields": ["skills"],
                "type": "cross_fields",
                "tie_breaker": 0.0,
            },
        }

    def test_empty_bool_has_no_clauses(self) -> None:
        assert Bool().to_dsl() == {"bool": {}}

    def test_nodes_are_frozen(self) -> None:
        node = Terms(field="id", values=(1,))
        with pytest.raises(ValidationError):
            node.field = "other"  # type: ignore[misc]

    def test_build_terms_empty(self) -> None:
        assert build_terms("work_roles", []) == []

    def test_build_terms_values(self) -> None:
        assert build_terms("work_roles", ["DevOps"]) == [
            Terms(field="work_roles", values=("DevOps",)),
        ]


# ---------------------------------------------------------------------------
# Visibility
# ---------------------------------------------------------------------------


class TestVisibilityFilters:
    def test_standard_rule_only(self) -> None:
        nodes = visibility_filters(EPOCH, [])
        assert len(nodes) == 1
        assert nodes[0].to_dsl() == STANDARD_RULE

    def test_presented_talents_bypass(self) -> None:
        nodes = visibility_filters(EPOCH, [3, 7])
        assert len(nodes) == 1
        assert nodes[0].to_dsl() == {
            "bool": {
                "should": [
                    STANDARD_RULE,
                    {"bool": {"must": [{"terms": {"id": [3, 7]}}]}},
                ],
            },
        }

    def test_fresh_tree_per_call(self) -> None:
        a = visibility_filters(EPOCH, [1])
        b = visibility_filters(EPOCH, [1])
        assert a == b
        assert a[0] is not b[0]


# ---------------------------------------------------------------------------
# Full text
# ---------------------------------------------------------------------------


class TestFullTextSearch:
    def test_absent(self) -> None:
        assert full_text_search(Params()) is None

    def test_empty(self) -> None:
        assert full_text_search(Params({"keywords": ""})) is None

    def test_non_string(self) -> None:
        assert full_text_search(Params({"keywords": 42})) is None

    def test_cross_fields_over_skills_and_summary(self) -> None:
        node = full_text_search(Params({"keywords": "right now"}))
        assert node is not None
        assert node.to_dsl() == {
            "multi_match": {
                "query": "right now",
                "fields": ["skills", "summary"],
                "type": "cross_fields",
                "tie_breaker": 0.0,
            },
        }


# ---------------------------------------------------------------------------
# Composite
# ---------------------------------------------------------------------------


class TestSearchFilters:
    def test_no_params_is_visibility_only(self) -> None:
        query = search_filters(Params(), EPOCH)
        assert query.to_dsl() == {"bool": {"must": [STANDARD_RULE]}}

    def test_values_ored_within_category(self) -> None:
        query = search_filters(Params({"work_roles[]": ["Fullstack", "DevOps"]}), EPOCH)
        assert _must(query)[0] == {"terms": {"work_roles": ["Fullstack", "DevOps"]}}

    def test_categories_anded(self) -> None:
        params = Params({
            "work_roles[]": ["Fullstack"],
            "work_experience[]": ["8+"],
            "work_authorization[]": ["yes"],
            "work_locations[]": ["Berlin"],
            "ids[]": ["2", "4"],
        })
        must = _must(search_filters(params, EPOCH))
        assert must == [
            {"terms": {"work_roles": ["Fullstack"]}},
            {"terms": {"work_experience": ["8+"]}},
            {"terms": {"work_authorization": ["yes"]}},
            {"terms": {"work_locations": ["Berlin"]}},
            {"terms": {"id": [2, 4]}},
            STANDARD_RULE,
        ]

    def test_empty_category_adds_nothing(self) -> None:
        query = search_filters(Params({"work_roles[]": [], "work_locations[]": [""]}), EPOCH)
        assert _must(query) == [STANDARD_RULE]

    def test_keywords_before_visibility(self) -> None:
        must = _must(search_filters(Params({"keywords": "html"}), EPOCH))
        assert len(must) == 2
        assert "multi_match" in must[0]
        assert must[1] == STANDARD_RULE

    def test_empty_keywords_same_as_absent(self) -> None:
        assert search_filters(Params({"keywords": ""}), EPOCH) == search_filters(Params(), EPOCH)

    def test_presented_talents_fed_to_visibility(self) -> None:
        must = _must(search_filters(Params({"presented_talents[]": ["3"]}), EPOCH))
        assert must[-1]["bool"]["should"][1] == {"bool": {"must": [{"terms": {"id": [3]}}]}}

    def test_company_exclusion_on_both_lists(self) -> None:
        query = search_filters(Params({"company_id": "6"}), EPOCH)
        assert _must_not(query) == [
            {"terms": {"company_ids": [6]}},
            {"terms": {"blocked_companies": [6]}},
        ]

    def test_no_company_no_exclusion(self) -> None:
        assert _must_not(search_filters(Params(), EPOCH)) == []

    def test_unparseable_company_ignored(self) -> None:
        assert _must_not(search_filters(Params({"company_id": "acme"}), EPOCH)) == []


# ---------------------------------------------------------------------------
# Sorting
# ---------------------------------------------------------------------------


class TestSortingCriteria:
    def test_three_keys_descending(self) -> None:
        assert sorting_criteria() == [
            {"batch_starts_at": {"order": "desc"}},
            {"weight": {"order": "desc"}},
            {"added_to_batch_at": {"order": "desc"}},
        ]
