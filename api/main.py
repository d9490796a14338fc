#!/usr/bin/env python3
import logging
import os
from contextlib import asynccontextmanager
from datetime import datetime, timezone

import anyio
from fastapi import FastAPI, Query, Request
from fastapi.responses import HTMLResponse, StreamingResponse

from catalog.reader import CatalogReader
from engine.paths import ArchiveConfig, build_archive_config, ensure_dir
from engine.query_engine import QueryEngine
from engine.runtime import get_runtime_info
from input.query_params import parse_query_spec
from media.range_resolver import MediaRangeResolver, Rejected
from api.views import page_payload, render_not_found_page

APP_NAME = "Bandroom API"
STATUS_SCHEMA_VERSION = 1
LOG_FILENAME = "bandroom.log"


def _env_or_default(name, default):
    value = os.environ.get(name)
    return value if value else default


def _setup_logging(log_dir):
    ensure_dir(log_dir)
    root = logging.getLogger("")
    log_path = os.path.join(log_dir, LOG_FILENAME)
    root.setLevel(logging.INFO)
    for handler in root.handlers:
        if isinstance(handler, logging.FileHandler):
            if os.path.abspath(getattr(handler, "baseFilename", "")) == os.path.abspath(log_path):
                return
    file_handler = logging.FileHandler(log_path)
    file_handler.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(message)s"))
    file_handler.setLevel(logging.INFO)
    root.addHandler(file_handler)


def _components(request: Request):
    state = request.app.state
    return state.catalog_reader, state.query_engine, state.media_resolver


async def _load_catalog(request: Request):
    reader, _, _ = _components(request)
    return await anyio.to_thread.run_sync(reader.load)


def create_app(config: ArchiveConfig | None = None) -> FastAPI:
    archive_config = config or build_archive_config()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        _setup_logging(archive_config.log_dir)
        logging.info(
            "Bandroom starting catalog=%s media_dir=%s page_size=%s",
            archive_config.catalog_path,
            archive_config.media_dir,
            archive_config.page_size,
        )
        yield

    app = FastAPI(
        title=APP_NAME,
        description="Search, browse and stream the band's practice recordings.",
        lifespan=lifespan,
    )
    app.state.config = archive_config
    app.state.catalog_reader = CatalogReader(archive_config)
    app.state.query_engine = QueryEngine(archive_config)
    app.state.media_resolver = MediaRangeResolver(archive_config)

    @app.get("/api/search")
    async def api_search(
        request: Request,
        query: str | None = Query(None),
        search_type: str | None = Query(None),
        match_mode: str | None = Query(None),
        page: str | None = Query(None),
        sort: str | None = Query(None),
        order: str | None = Query(None),
    ):
        spec = parse_query_spec({
            "query": query,
            "search_type": search_type,
            "match_mode": match_mode,
            "page": page,
            "sort": sort,
            "order": order,
        })
        records = await _load_catalog(request)
        _, engine, _ = _components(request)
        result = engine.run(records, spec)
        return page_payload(result, spec, "/api/search")

    @app.get("/api/browse")
    async def api_browse(
        request: Request,
        page: str | None = Query(None),
        sort: str | None = Query(None),
        order: str | None = Query(None),
        recent: str | None = Query(None),
    ):
        spec = parse_query_spec({"page": page, "sort": sort, "order": order, "recent": recent})
        records = await _load_catalog(request)
        _, engine, _ = _components(request)
        result = engine.recent(records) if spec.recent else engine.run(records, spec)
        return page_payload(result, spec, "/api/browse", include_search=False)

    @app.get("/api/play")
    async def api_play(request: Request, song: str | None = Query(None)):
        records = await _load_catalog(request)
        _, _, resolver = _components(request)
        range_header = request.headers.get("range")
        plan = await anyio.to_thread.run_sync(resolver.resolve, song, records, range_header)
        if isinstance(plan, Rejected):
            logging.info("Playback rejected kind=%s song=%r", plan.kind.value, plan.identifier)
            return HTMLResponse(render_not_found_page(plan.message), status_code=404)

        logging.info(
            "Playback started song=%s status=%s start=%s end=%s size=%s",
            plan.song.filename,
            plan.status_code,
            plan.start,
            plan.end,
            plan.file_size,
        )
        return StreamingResponse(
            resolver.stream(plan),
            status_code=plan.status_code,
            media_type=plan.media_type,
            headers=plan.headers,
        )

    @app.get("/api/status")
    async def api_status(request: Request):
        cfg = request.app.state.config
        records = await _load_catalog(request)
        return {
            "schema_version": STATUS_SCHEMA_VERSION,
            "server_time": datetime.now(timezone.utc).isoformat(),
            "catalog": {
                "path": cfg.catalog_path,
                "exists": os.path.isfile(cfg.catalog_path),
                "songs": len(records),
            },
            "media": {
                "path": cfg.media_dir,
                "exists": os.path.isdir(cfg.media_dir),
            },
            "page_size": cfg.page_size,
            "recent_limit": cfg.recent_limit,
        }

    @app.get("/api/version")
    async def api_version(request: Request):
        return get_runtime_info(request.app.state.config)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    host = _env_or_default("BANDROOM_HOST", "127.0.0.1")
    port = int(_env_or_default("BANDROOM_PORT", "8000"))
    uvicorn.run("api.main:app", host=host, port=port, reload=False)
