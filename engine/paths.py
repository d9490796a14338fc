import logging
import os
from dataclasses import dataclass
from pathlib import Path

from config.settings import (
    AUDIO_MEDIA_TYPE,
    PAGE_SIZE,
    RECENT_LIMIT,
    STREAM_CHUNK_SIZE,
)

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parent.parent


@dataclass(frozen=True)
class ArchiveConfig:
    catalog_path: str
    media_dir: str
    log_dir: str
    page_size: int = PAGE_SIZE
    recent_limit: int = RECENT_LIMIT
    chunk_size: int = STREAM_CHUNK_SIZE
    media_type: str = AUDIO_MEDIA_TYPE


def ensure_dir(path):
    if path:
        os.makedirs(path, exist_ok=True)


def is_within_base(path, base_dir):
    real = os.path.realpath(path)
    base = os.path.realpath(base_dir)
    try:
        return os.path.commonpath([real, base]) == base
    except ValueError:
        return False


def _positive_int(environ, name, default):
    raw = (environ.get(name) or "").strip()
    if not raw:
        return default
    if raw.isascii() and raw.isdigit():
        try:
            value = int(raw)
        except ValueError:
            value = 0
        if value > 0:
            return value
    logger.warning("Ignoring invalid %s=%r; using %s", name, raw, default)
    return default


def build_archive_config(environ=None):
    """Resolve the archive configuration from ``BANDROOM_*`` environment variables.

    Paths default to a ``data`` directory beside the project. The returned
    object is immutable and is handed to every component that needs it.
    """
    env = os.environ if environ is None else environ
    data_dir = Path(env.get("BANDROOM_DATA_DIR") or PROJECT_ROOT / "data")
    catalog_path = Path(env.get("BANDROOM_CATALOG_PATH") or data_dir / "songs.txt")
    media_dir = Path(env.get("BANDROOM_MEDIA_DIR") or data_dir / "media")
    log_dir = Path(env.get("BANDROOM_LOG_DIR") or data_dir / "logs")
    media_type = (env.get("BANDROOM_MEDIA_TYPE") or "").strip() or AUDIO_MEDIA_TYPE

    return ArchiveConfig(
        catalog_path=str(catalog_path.resolve()),
        media_dir=str(media_dir.resolve()),
        log_dir=str(log_dir.resolve()),
        page_size=_positive_int(env, "BANDROOM_PAGE_SIZE", PAGE_SIZE),
        recent_limit=_positive_int(env, "BANDROOM_RECENT_LIMIT", RECENT_LIMIT),
        media_type=media_type,
    )
