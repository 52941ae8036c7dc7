"""HTTP surface: ``GET /api/news?asset=...&priceChange=...``."""

import logging
import math
import os
from dataclasses import replace

import uvicorn
from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi import Query as QueryParam
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from newspulse.config import create_from_config, load_default_config
from newspulse.data import Query
from newspulse.errors import InternalPipelineError, InvalidQueryError, UpstreamFailureError
from newspulse.pipeline import Pipeline

logger = logging.getLogger(__name__)

UPSTREAM_FAILURE_MESSAGE = "Failed to fetch news from all providers"
INTERNAL_ERROR_MESSAGE = "Failed to build news digest"


def create_app(pipeline: Pipeline) -> FastAPI:
    """Build the FastAPI app around a ready pipeline.

    Error bodies are ``{"error": message}``; 500 messages stay generic and
    provider details go to the log only.
    """
    app = FastAPI(title="newspulse", description="Asset news sentiment digest")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/api/news")
    async def get_news(
        asset: str | None = QueryParam(default=None),
        price_change: str | None = QueryParam(default=None, alias="priceChange"),
    ):
        # asset is checked before priceChange; both fail with a 400 error body.
        try:
            query = Query.from_symbol(asset)
            query = replace(query, price_change=_parse_price_change(price_change))
        except InvalidQueryError as e:
            return JSONResponse(status_code=400, content={"error": str(e)})

        try:
            result = await pipeline.run(query)
        except UpstreamFailureError as e:
            logger.error(f"{query.symbol}: {e}")
            return JSONResponse(status_code=500, content={"error": UPSTREAM_FAILURE_MESSAGE})
        except InternalPipelineError:
            logger.exception(f"{query.symbol}: internal pipeline error")
            return JSONResponse(status_code=500, content={"error": INTERNAL_ERROR_MESSAGE})

        return result.to_payload()

    return app


def _parse_price_change(raw: str | None) -> float | None:
    if raw is None or not raw.strip():
        return None
    try:
        value = float(raw)
    except ValueError:
        raise InvalidQueryError(f"Invalid priceChange: {raw!r}") from None
    if not math.isfinite(value):
        raise InvalidQueryError(f"Invalid priceChange: {raw!r}")
    return value


def build_default_app() -> FastAPI:
    """App factory for ``uvicorn newspulse.api:build_default_app --factory``.

    Loads ``.env`` first so adapter keys are visible, then the default config.
    """
    load_dotenv()
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")
    return create_app(create_from_config(load_default_config()))


def serve() -> None:
    """Run the API with uvicorn. Host and port come from HOST/PORT env vars."""
    load_dotenv()
    uvicorn.run(
        "newspulse.api:build_default_app",
        factory=True,
        host=os.getenv("HOST", "127.0.0.1"),
        port=int(os.getenv("PORT", "8000")),
        log_level=os.getenv("LOG_LEVEL", "info").lower(),
    )
