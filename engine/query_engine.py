"""Catalog search, ordering and pagination."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Sequence

from catalog.reader import SongRecord
from config.settings import PAGE_SIZE, RECENT_LIMIT
from engine.title_normalization import title_sort_key
from input.query_params import MatchMode, QuerySpec, SearchType, SortField, SortOrder

_SORT_KEYS = {
    SortField.TITLE: lambda record: title_sort_key(record.title),
    SortField.DATE: lambda record: record.date,
    SortField.FILENAME: lambda record: record.filename.lower(),
}


@dataclass(frozen=True)
class PageResult:
    songs: list[SongRecord] = field(default_factory=list)
    total_matches: int = 0
    total_pages: int = 1
    current_page: int = 1
    page_size: int = PAGE_SIZE


def tokenize_query(query: str) -> list[str]:
    return str(query or "").lower().split()


def _field_matches(text: str, terms: Sequence[str], match_mode: MatchMode) -> bool:
    if match_mode is MatchMode.ANY:
        return any(term in text for term in terms)
    return all(term in text for term in terms)


def record_matches(record: SongRecord, terms: Sequence[str], search_type: SearchType, match_mode: MatchMode) -> bool:
    title = record.title.lower()
    if search_type is SearchType.TITLE:
        return _field_matches(title, terms, match_mode)
    # Combined title/filename search always requires every term; match_mode only
    # applies to title-only search. Likely unintended, kept for compatibility.
    filename = record.filename.lower()
    return _field_matches(title, terms, MatchMode.ALL) or _field_matches(filename, terms, MatchMode.ALL)


def search_records(records: Sequence[SongRecord], spec: QuerySpec) -> list[SongRecord]:
    terms = tokenize_query(spec.query)
    if not terms:
        return list(records)
    return [
        record
        for record in records
        if record_matches(record, terms, spec.search_type, spec.match_mode)
    ]


def sort_records(records: Sequence[SongRecord], sort_field: SortField, sort_order: SortOrder) -> list[SongRecord]:
    """Stable sort by ``sort_field``.

    Descending order is the ascending result reversed, so records with equal
    keys come out in reverse of their input order.
    """
    ordered = sorted(records, key=_SORT_KEYS[sort_field])
    if sort_order is SortOrder.DESC:
        ordered.reverse()
    return ordered


def paginate(records: Sequence[SongRecord], page: int, page_size: int = PAGE_SIZE) -> PageResult:
    total_matches = len(records)
    total_pages = max(1, math.ceil(total_matches / page_size))
    current_page = min(max(int(page), 1), total_pages)
    offset = (current_page - 1) * page_size
    return PageResult(
        songs=list(records[offset:offset + page_size]),
        total_matches=total_matches,
        total_pages=total_pages,
        current_page=current_page,
        page_size=page_size,
    )


def recent_records(records: Sequence[SongRecord], limit: int = RECENT_LIMIT) -> list[SongRecord]:
    return sort_records(records, SortField.DATE, SortOrder.DESC)[:limit]


class QueryEngine:
    def __init__(self, config):
        self._page_size = config.page_size
        self._recent_limit = config.recent_limit

    def run(self, records: Sequence[SongRecord], spec: QuerySpec) -> PageResult:
        matches = search_records(records, spec)
        ordered = sort_records(matches, spec.sort_field, spec.sort_order)
        return paginate(ordered, spec.page, self._page_size)

    def recent(self, records: Sequence[SongRecord]) -> PageResult:
        """Newest songs by raw date as a single page; search, sort and page inputs are ignored."""
        songs = recent_records(records, self._recent_limit)
        return PageResult(
            songs=songs,
            total_matches=len(songs),
            total_pages=1,
            current_page=1,
            page_size=self._recent_limit,
        )
