"""Song catalog loading.

The catalog is a UTF-8 text file with one ``filename|title|date`` record per
line. Blank lines and ``#`` comments are ignored and the date is optional.
Another process owns writes; this module only ever reads the file.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

from config.settings import UNKNOWN_DATE

logger = logging.getLogger(__name__)

FIELD_SEPARATOR = "|"


@dataclass(frozen=True)
class SongRecord:
    filename: str
    title: str
    date: str = UNKNOWN_DATE


def parse_catalog_line(raw_line: str) -> SongRecord | None:
    line = raw_line.strip()
    if not line or line.startswith("#"):
        return None
    # The date is the last field and may itself contain the separator.
    fields = [field.strip() for field in line.split(FIELD_SEPARATOR, 2)]
    filename = fields[0]
    title = fields[1] if len(fields) > 1 else ""
    date = fields[2] if len(fields) > 2 else ""
    if not filename or not title:
        return None
    return SongRecord(filename=filename, title=title, date=date or UNKNOWN_DATE)


def parse_catalog_lines(lines: Iterable[str]) -> list[SongRecord]:
    records: list[SongRecord] = []
    for raw_line in lines:
        record = parse_catalog_line(raw_line)
        if record is not None:
            records.append(record)
    return records


def load_catalog(path: str | Path) -> list[SongRecord]:
    """Read every valid record from the catalog file at ``path``.

    Records come back in file order. A missing or unreadable file is an empty
    catalog rather than an error, so callers always receive a list.
    """
    try:
        text = Path(path).read_text(encoding="utf-8-sig", errors="replace")
    except OSError as exc:
        logger.warning("Catalog unavailable at %s: %s", path, exc)
        return []
    # Records are separated by "\n" only.
    return parse_catalog_lines(text.split("\n"))


def find_song(records: Iterable[SongRecord], filename: str) -> SongRecord | None:
    wanted = (filename or "").strip()
    if not wanted:
        return None
    for record in records:
        if record.filename == wanted:
            return record
    return None


class CatalogReader:
    """Loads the configured catalog fresh on every call."""

    def __init__(self, config):
        self._path = config.catalog_path

    @property
    def path(self) -> str:
        return self._path

    def load(self) -> list[SongRecord]:
        return load_catalog(self._path)
