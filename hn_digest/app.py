from __future__ import annotations

import logging
from typing import Optional

import httpx
from fastapi import FastAPI, Query
from fastapi.responses import JSONResponse

from .config import MODES, Settings
from .core import StoryPipeline, build_client
from .exceptions import FetchFailure

logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    *,
    transport: Optional[httpx.BaseTransport] = None,
) -> FastAPI:
    """Build the HTTP app. Settings are resolved once, here."""
    app = FastAPI(title="HN Digest", version="0.1.0")
    app.state.settings = settings or Settings.from_env()
    app.state.transport = transport

    @app.get("/health")
    def health():
        return {"ok": True}

    @app.api_route("/api/hn", methods=["GET", "POST"])
    def hn(mode: Optional[str] = Query(None)):
        """Run the pipeline once; meant to be hit by a cron trigger."""
        if mode is not None and mode not in MODES:
            return JSONResponse(status_code=400, content={"error": f"Unknown mode: {mode}"})
        cfg: Settings = app.state.settings
        try:
            with build_client(cfg, transport=app.state.transport) as client:
                result = StoryPipeline.from_settings(cfg, client).run(mode)
        except FetchFailure as e:
            logger.error("%s", e)
            return JSONResponse(status_code=500, content={"error": "Failed to fetch top stories"})
        except Exception:
            logger.exception("pipeline run failed")
            return JSONResponse(status_code=500, content={"error": "Internal Server Error"})
        return result.to_response()

    return app
