"""Request parameter parsing for search and browse."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Mapping

_ASCII_DIGITS_RE = re.compile(r"[0-9]+")


class _ParamEnum(Enum):
    @classmethod
    def default(cls):
        return next(iter(cls))

    @classmethod
    def parse(cls, value: str | None):
        """Return the member named by ``value``, or the first member when unknown."""
        raw = str(value or "").strip().lower()
        for member in cls:
            if member.value == raw:
                return member
        return cls.default()


class SearchType(_ParamEnum):
    TITLE = "title"
    ALL = "all"


class MatchMode(_ParamEnum):
    ALL = "all"
    ANY = "any"


class SortField(_ParamEnum):
    TITLE = "title"
    DATE = "date"
    FILENAME = "filename"


class SortOrder(_ParamEnum):
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class QuerySpec:
    query: str = ""
    search_type: SearchType = SearchType.TITLE
    match_mode: MatchMode = MatchMode.ALL
    sort_field: SortField = SortField.TITLE
    sort_order: SortOrder = SortOrder.ASC
    page: int = 1
    recent: bool = False


def parse_page(value: str | None) -> int:
    raw = str(value or "").strip()
    if not _ASCII_DIGITS_RE.fullmatch(raw):
        return 1
    try:
        page = int(raw)
    except ValueError:
        # Beyond the interpreter's integer-string digit limit.
        return 1
    return page if page > 0 else 1


def parse_flag(value: str | None) -> bool:
    return str(value or "").strip() == "1"


def parse_query_spec(params: Mapping[str, str]) -> QuerySpec:
    """Build a :class:`QuerySpec` from raw request parameters.

    Rules:
    - Every parameter is optional; absent or unrecognized values take the default.
    - Enum values are matched case-insensitively after trimming.
    - ``page`` must be a positive decimal integer, otherwise it is ``1``.
    - ``recent`` is on only for the literal ``"1"``.
    - Never raises.
    """
    return QuerySpec(
        query=str(params.get("query") or "").strip(),
        search_type=SearchType.parse(params.get("search_type")),
        match_mode=MatchMode.parse(params.get("match_mode")),
        sort_field=SortField.parse(params.get("sort")),
        sort_order=SortOrder.parse(params.get("order")),
        page=parse_page(params.get("page")),
        recent=parse_flag(params.get("recent")),
    )
