from __future__ import annotations

import pytest

from input.query_params import (
    MatchMode,
    QuerySpec,
    SearchType,
    SortField,
    SortOrder,
    parse_page,
    parse_query_spec,
)


def test_empty_params_produce_defaults() -> None:
    assert parse_query_spec({}) == QuerySpec()


def test_known_values_are_parsed_case_insensitively() -> None:
    spec = parse_query_spec(
        {
            "query": "  lord lies ",
            "search_type": "ALL",
            "match_mode": " any ",
            "sort": "Date",
            "order": "DESC",
            "page": "3",
            "recent": "1",
        }
    )

    assert spec.query == "lord lies"
    assert spec.search_type is SearchType.ALL
    assert spec.match_mode is MatchMode.ANY
    assert spec.sort_field is SortField.DATE
    assert spec.sort_order is SortOrder.DESC
    assert spec.page == 3
    assert spec.recent is True


def test_unknown_enum_values_fall_back_to_defaults() -> None:
    spec = parse_query_spec({"search_type": "lyrics", "match_mode": "some", "sort": "size", "order": "up"})

    assert spec.search_type is SearchType.TITLE
    assert spec.match_mode is MatchMode.ALL
    assert spec.sort_field is SortField.TITLE
    assert spec.sort_order is SortOrder.ASC


@pytest.mark.parametrize("raw", [None, "", "0", "-2", "abc", "2.5", "3abc", "\u00b2", "\u0663", "9" * 5000])
def test_invalid_pages_become_first_page(raw) -> None:
    assert parse_page(raw) == 1


def test_recent_requires_literal_one() -> None:
    assert parse_query_spec({"recent": "true"}).recent is False
    assert parse_query_spec({"recent": "0"}).recent is False


def test_non_ascii_or_oversized_page_never_raises() -> None:
    assert parse_query_spec({"page": "²"}).page == 1
    assert parse_query_spec({"page": "9" * 5000}).page == 1
    assert parse_query_spec({"page": " 0007 "}).page == 7
