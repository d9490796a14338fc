"""Playback request validation and byte-range streaming."""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator

from catalog.reader import SongRecord, find_song
from config.settings import AUDIO_MEDIA_TYPE, STREAM_CHUNK_SIZE
from engine.paths import is_within_base

logger = logging.getLogger(__name__)

_RANGE_RE = re.compile(r"bytes=([0-9]+)-([0-9]*)")
_UNSAFE_NAME_CHARS_RE = re.compile(r"[^A-Za-z0-9._-]")
_PATH_SEPARATORS = ("/", "\\")


class RejectionKind(Enum):
    INVALID_IDENTIFIER = "invalid_identifier"
    MISSING_IDENTIFIER = "missing_identifier"
    NOT_IN_CATALOG = "not_in_catalog"
    FILE_UNAVAILABLE = "file_unavailable"


_REJECTION_MESSAGES = {
    RejectionKind.INVALID_IDENTIFIER: "The requested song name is not valid.",
    RejectionKind.MISSING_IDENTIFIER: "No song was specified.",
    RejectionKind.NOT_IN_CATALOG: "That song is not in the archive.",
    RejectionKind.FILE_UNAVAILABLE: "The recording for that song is not available.",
}


@dataclass(frozen=True)
class Rejected:
    kind: RejectionKind
    identifier: str

    @property
    def message(self) -> str:
        return _REJECTION_MESSAGES[self.kind]


@dataclass(frozen=True)
class ByteRange:
    start: int
    end: int

    @property
    def length(self) -> int:
        return self.end - self.start + 1


@dataclass(frozen=True)
class StreamPlan:
    song: SongRecord
    path: str
    file_size: int
    start: int
    end: int
    is_partial: bool
    media_type: str = AUDIO_MEDIA_TYPE

    @property
    def content_length(self) -> int:
        if self.file_size == 0:
            return 0
        return self.end - self.start + 1

    @property
    def status_code(self) -> int:
        return 206 if self.is_partial else 200

    @property
    def headers(self) -> dict[str, str]:
        headers = {
            "Content-Length": str(self.content_length),
            "Content-Disposition": f'inline; filename="{sanitize_download_name(self.song.filename)}"',
        }
        if self.is_partial:
            headers["Content-Range"] = f"bytes {self.start}-{self.end}/{self.file_size}"
        else:
            headers["Accept-Ranges"] = "bytes"
        return headers


def sanitize_download_name(filename: str) -> str:
    base = os.path.basename(str(filename or "").replace("\\", "/"))
    return _UNSAFE_NAME_CHARS_RE.sub("_", base)


def parse_range_header(range_header: str | None, file_size: int) -> ByteRange | None:
    """Resolve a ``bytes=<start>-<end?>`` header against ``file_size``.

    Returns ``None`` when there is no usable header: anything that does not
    match the single-range form (suffix ranges, multiple ranges, junk) or an
    empty file. Otherwise the end is clamped to the last byte and a start past
    the end collapses onto the end, so the range is never empty.
    """
    if not range_header or file_size <= 0:
        return None
    match = _RANGE_RE.fullmatch(range_header.strip())
    if not match:
        return None
    try:
        start = max(int(match.group(1)), 0)
        end = int(match.group(2)) if match.group(2) else file_size - 1
    except ValueError:
        # Beyond the interpreter's integer-string digit limit.
        return None
    end = min(end, file_size - 1)
    if start > end:
        start = end
    return ByteRange(start=start, end=end)


def iter_byte_range(path: str, start: int, length: int, chunk_size: int = STREAM_CHUNK_SIZE) -> Iterator[bytes]:
    """Yield ``length`` bytes of ``path`` from offset ``start``.

    A short read or a read error ends the stream quietly; the caller has
    already committed to the response headers.
    """
    remaining = length
    try:
        with open(path, "rb") as handle:
            handle.seek(start)
            while remaining > 0:
                chunk = handle.read(min(chunk_size, remaining))
                if not chunk:
                    break
                remaining -= len(chunk)
                yield chunk
    except OSError as exc:
        logger.warning("Stream read failed path=%s error=%s", path, exc)
    if remaining > 0:
        logger.warning("Stream truncated path=%s missing_bytes=%s", path, remaining)


def _is_readable_file(path: str) -> bool:
    return os.path.isfile(path) and os.access(path, os.R_OK)


class MediaRangeResolver:
    def __init__(self, config):
        self._media_dir = config.media_dir
        self._media_type = config.media_type
        self._chunk_size = config.chunk_size

    def resolve(
        self,
        requested_id: str | None,
        catalog: Iterable[SongRecord],
        range_header: str | None = None,
    ) -> StreamPlan | Rejected:
        """Validate a playback request and plan the bytes to send.

        Checks run in order and the first failure wins: path traversal,
        empty identifier, catalog membership, then the media file itself.
        """
        identifier = str(requested_id or "").strip()
        if ".." in identifier or any(sep in identifier for sep in _PATH_SEPARATORS):
            return Rejected(RejectionKind.INVALID_IDENTIFIER, identifier)
        if not identifier:
            return Rejected(RejectionKind.MISSING_IDENTIFIER, identifier)
        song = find_song(catalog, identifier)
        if song is None:
            return Rejected(RejectionKind.NOT_IN_CATALOG, identifier)

        path = os.path.join(self._media_dir, song.filename)
        if not is_within_base(path, self._media_dir) or not _is_readable_file(path):
            return Rejected(RejectionKind.FILE_UNAVAILABLE, identifier)
        try:
            file_size = os.path.getsize(path)
        except OSError:
            return Rejected(RejectionKind.FILE_UNAVAILABLE, identifier)

        byte_range = parse_range_header(range_header, file_size)
        if byte_range is None:
            return StreamPlan(
                song=song,
                path=path,
                file_size=file_size,
                start=0,
                end=max(file_size - 1, 0),
                is_partial=False,
                media_type=self._media_type,
            )
        return StreamPlan(
            song=song,
            path=path,
            file_size=file_size,
            start=byte_range.start,
            end=byte_range.end,
            is_partial=True,
            media_type=self._media_type,
        )

    def stream(self, plan: StreamPlan) -> Iterator[bytes]:
        return iter_byte_range(plan.path, plan.start, plan.content_length, self._chunk_size)
