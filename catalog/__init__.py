from .reader import (
    CatalogReader,
    SongRecord,
    find_song,
    load_catalog,
    parse_catalog_lines,
)
