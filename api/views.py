"""Response shaping for the web API: JSON page payloads and the not-found page."""

from __future__ import annotations

from typing import Mapping
from urllib.parse import quote

from pydantic import BaseModel

from catalog.reader import SongRecord
from engine.query_engine import PageResult
from input.query_params import QuerySpec

_HTML_ESCAPES = {
    ord("&"): "&amp;",
    ord("<"): "&lt;",
    ord(">"): "&gt;",
    ord('"'): "&quot;",
    ord("'"): "&#39;",
}

# RFC 3986 unreserved characters; quote() always keeps letters and digits.
_URL_SAFE = "-._~"

NOT_FOUND_TITLE = "Song not found"


def escape_html(text: str) -> str:
    return str(text or "").translate(_HTML_ESCAPES)


def url_encode(text: str) -> str:
    return quote(str(text or ""), safe=_URL_SAFE, encoding="utf-8")


def build_query_string(params: Mapping[str, object]) -> str:
    return "&".join(f"{url_encode(key)}={url_encode(str(value))}" for key, value in params.items())


def render_not_found_page(message: str) -> str:
    title = escape_html(NOT_FOUND_TITLE)
    return (
        "<!DOCTYPE html>\n"
        "<html>\n"
        f"<head><meta charset=\"utf-8\"><title>{title}</title></head>\n"
        "<body>\n"
        f"<h1>{title}</h1>\n"
        f"<p>{escape_html(message)}</p>\n"
        "<p><a href=\"/api/browse\">Back to the song list</a></p>\n"
        "</body>\n"
        "</html>\n"
    )


class SongPayload(BaseModel):
    filename: str
    title: str
    date: str
    play_url: str


class PageLinks(BaseModel):
    previous: str | None = None
    next: str | None = None


class PageResultPayload(BaseModel):
    songs: list[SongPayload]
    total_matches: int
    total_pages: int
    current_page: int
    page_size: int
    query: dict[str, str]
    links: PageLinks


def song_payload(song: SongRecord) -> SongPayload:
    return SongPayload(
        filename=song.filename,
        title=song.title,
        date=song.date,
        play_url="/api/play?" + build_query_string({"song": song.filename}),
    )


def query_params_for(spec: QuerySpec, *, include_search: bool = True) -> dict[str, str]:
    params: dict[str, str] = {}
    if include_search:
        params["query"] = spec.query
        params["search_type"] = spec.search_type.value
        params["match_mode"] = spec.match_mode.value
    params["sort"] = spec.sort_field.value
    params["order"] = spec.sort_order.value
    if spec.recent:
        params["recent"] = "1"
    return params


def _page_url(path: str, params: Mapping[str, str], page: int) -> str:
    return f"{path}?{build_query_string({**params, 'page': page})}"


def page_payload(result: PageResult, spec: QuerySpec, path: str, *, include_search: bool = True) -> PageResultPayload:
    """Structured page for the view renderer, with links that keep the current query."""
    params = query_params_for(spec, include_search=include_search)
    links = PageLinks()
    if result.current_page > 1:
        links.previous = _page_url(path, params, result.current_page - 1)
    if result.current_page < result.total_pages:
        links.next = _page_url(path, params, result.current_page + 1)
    return PageResultPayload(
        songs=[song_payload(song) for song in result.songs],
        total_matches=result.total_matches,
        total_pages=result.total_pages,
        current_page=result.current_page,
        page_size=result.page_size,
        query=params,
        links=links,
    )
