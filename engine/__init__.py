from .paths import ArchiveConfig, build_archive_config
from .query_engine import (
    PageResult,
    QueryEngine,
    paginate,
    recent_records,
    search_records,
    sort_records,
)
from .runtime import get_runtime_info
from .title_normalization import strip_leading_article, title_sort_key
