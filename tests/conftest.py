import sys
from pathlib import Path

import pytest


# Ensure tests can import project packages regardless of how pytest is invoked.
ROOT = Path(__file__).resolve().parents[1]
ROOT_STR = str(ROOT)
if ROOT_STR not in sys.path:
    sys.path.insert(0, ROOT_STR)

from engine.paths import ArchiveConfig  # noqa: E402


SAMPLE_CATALOG = """# practice archive
lord_of_lies.mp3|Lord of Lies|2023-04-01
my_lord.mp3|My Lord|2023-05-12

the_wind.mp3|The Wind|2022-11-30
an_apple.mp3 | An Apple | 2024-01-02
untitled.mp3|
|No File|2024-02-02
jam.mp3|Tuesday Jam
"""


@pytest.fixture
def archive_config(tmp_path) -> ArchiveConfig:
    media_dir = tmp_path / "media"
    media_dir.mkdir()
    return ArchiveConfig(
        catalog_path=str(tmp_path / "songs.txt"),
        media_dir=str(media_dir),
        log_dir=str(tmp_path / "logs"),
    )


@pytest.fixture
def sample_catalog(archive_config) -> Path:
    path = Path(archive_config.catalog_path)
    path.write_text(SAMPLE_CATALOG, encoding="utf-8")
    return path
