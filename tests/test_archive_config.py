from __future__ import annotations

from dataclasses import FrozenInstanceError
from pathlib import Path

import pytest

from engine.paths import PROJECT_ROOT, build_archive_config


def test_defaults_live_under_project_data_dir() -> None:
    config = build_archive_config({})

    data_dir = (PROJECT_ROOT / "data").resolve()
    assert config.catalog_path == str(data_dir / "songs.txt")
    assert config.media_dir == str(data_dir / "media")
    assert config.log_dir == str(data_dir / "logs")
    assert config.page_size == 25
    assert config.recent_limit == 15
    assert config.chunk_size == 8192
    assert config.media_type == "audio/mpeg"


def test_environment_overrides(tmp_path: Path) -> None:
    config = build_archive_config(
        {
            "BANDROOM_DATA_DIR": str(tmp_path),
            "BANDROOM_MEDIA_DIR": str(tmp_path / "audio"),
            "BANDROOM_PAGE_SIZE": "10",
            "BANDROOM_RECENT_LIMIT": "5",
            "BANDROOM_MEDIA_TYPE": "audio/ogg",
        }
    )

    assert config.catalog_path == str((tmp_path / "songs.txt").resolve())
    assert config.media_dir == str((tmp_path / "audio").resolve())
    assert config.page_size == 10
    assert config.recent_limit == 5
    assert config.media_type == "audio/ogg"


@pytest.mark.parametrize("raw", ["0", "-3", "ten", "2.5", "\u00b2", "9" * 5000])
def test_invalid_page_size_falls_back_to_default(raw: str) -> None:
    assert build_archive_config({"BANDROOM_PAGE_SIZE": raw}).page_size == 25


def test_config_is_immutable() -> None:
    config = build_archive_config({})

    with pytest.raises(FrozenInstanceError):
        config.page_size = 10  # type: ignore[misc]
