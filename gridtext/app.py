"""FastAPI application factory."""

from __future__ import annotations

import asyncio
import logging

from fastapi import FastAPI, HTTPException, Request, Response

from gridtext.config import Config
from gridtext.engine import Engine
from gridtext.protocol import RequestDecodeError, decode_request, encode_response

logger = logging.getLogger(__name__)


def create_app(config: Config | None = None, engine: Engine | None = None) -> FastAPI:
    """Create the HTTP front of an engine.

    A fresh engine seeded from ``config`` is created unless one is given.
    """
    config = config or Config()
    engine = engine or Engine.from_seed(config.seed)

    app = FastAPI(title="gridtext")
    app.state.engine = engine

    @app.post("/content")
    async def content(request: Request) -> Response:
        body = await request.body()
        try:
            content_request = decode_request(body)
        except RequestDecodeError as e:
            logger.warning(f"Rejected content request: {e}")
            raise HTTPException(status_code=400, detail=str(e)) from e
        # The engine lock and viewport rendering block; keep them off the event loop
        content_response = await asyncio.to_thread(engine.handle, content_request)
        return Response(content=encode_response(content_response), media_type="application/json")

    @app.get("/document")
    def document() -> dict[str, list[str]]:
        return {"Lines": engine.text()}

    @app.get("/scrollbar/live.png")
    def scrollbar() -> Response:
        image = engine.render_scrollbar()
        if image is None:
            raise HTTPException(status_code=404, detail="no scrollbar renderer configured")
        return Response(content=image, media_type="image/png")

    @app.get("/api/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    return app
