"""Version details reported by ``/api/version``."""

import os
import sys

from fastapi import __version__ as fastapi_version

from catalog.reader import FIELD_SEPARATOR
from config.settings import CATALOG_FORMAT_VERSION, UNKNOWN_DATE

CATALOG_FIELDS = ("filename", "title", "date")


def get_runtime_info(config=None):
    """Describe the running build and the catalog layout it reads.

    With a config, the reply also carries the audio content type served by
    playback, so clients can check it before requesting a stream.
    """
    info = {
        "app_version": os.environ.get("BANDROOM_VERSION", "0.0.0"),
        "python_version": sys.version.split()[0],
        "fastapi_version": fastapi_version,
        "catalog_format": {
            "version": CATALOG_FORMAT_VERSION,
            "separator": FIELD_SEPARATOR,
            "fields": list(CATALOG_FIELDS),
            "default_date": UNKNOWN_DATE,
        },
    }
    if config is not None:
        info["media_type"] = config.media_type
        info["page_size"] = config.page_size
    return info
