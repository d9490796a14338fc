"""Application settings constants."""

from __future__ import annotations

# Songs per page for search and browse results.
PAGE_SIZE = 25

# Number of songs shown by the "recently added" browse view.
RECENT_LIMIT = 15

# Read size used when streaming audio to the client.
STREAM_CHUNK_SIZE = 8 * 1024

# Date token recorded for catalog lines without a date field.
UNKNOWN_DATE = "Unknown"

# Every practice recording is served with this content type.
AUDIO_MEDIA_TYPE = "audio/mpeg"

# Bumped whenever the layout of catalog lines changes.
CATALOG_FORMAT_VERSION = 1
