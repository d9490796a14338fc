from __future__ import annotations

import pytest

pytest.importorskip("fastapi")

from engine.paths import ArchiveConfig
from engine.runtime import get_runtime_info


def test_runtime_info_describes_catalog_layout() -> None:
    info = get_runtime_info()

    assert info["catalog_format"]["version"] == 1
    assert info["catalog_format"]["fields"] == ["filename", "title", "date"]
    assert "media_type" not in info
    assert "page_size" not in info


def test_runtime_info_includes_playback_settings(monkeypatch) -> None:
    monkeypatch.setenv("BANDROOM_VERSION", "1.2.3")
    config = ArchiveConfig(
        catalog_path="songs.txt", media_dir="media", log_dir="logs", page_size=10, media_type="audio/ogg"
    )

    info = get_runtime_info(config)

    assert info["app_version"] == "1.2.3"
    assert info["media_type"] == "audio/ogg"
    assert info["page_size"] == 10
