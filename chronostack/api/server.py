"""
ChronoStack Layout API Server
=============================

Stateless HTTP surface over the timeline layout pipeline.

Endpoints:
- GET  /health              -> Liveness
- GET  /api/v1/formats      -> Token format and sample input per resolution
- POST /api/v1/layout       -> Layout for {text, resolution}

Usage:
    uvicorn chronostack.api.server:app --reload
"""
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from ..contracts.base import Resolution
from ..engine import EngineConfig, LayoutCache, TimelineEngine
from ..observability import get_logger
from .mapper import map_formats, map_layout_to_dto


logger = get_logger(__name__)

# =============================================================================
# INFRASTRUCTURE SETUP
# =============================================================================

engine_instance: Optional[TimelineEngine] = None
cache_instance: Optional[LayoutCache] = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build the engine and its request cache on startup."""
    global engine_instance, cache_instance

    config = EngineConfig.from_env()
    engine_instance = TimelineEngine(config)
    cache_instance = engine_instance.new_cache()
    logger.info(
        "Layout engine ready (default resolution=%s, caching=%s)",
        config.default_resolution.value, config.enable_caching
    )

    yield

    logger.info("Shutting down layout engine.")
    engine_instance = None
    cache_instance = None


app = FastAPI(
    title="ChronoStack Layout API",
    version="0.1.0",
    description="Parses interval notation into layered timeline layouts",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)


class LayoutRequest(BaseModel):
    """Raw timeline text plus the resolution its tokens use."""
    text: str = ""
    resolution: Optional[Resolution] = Field(
        default=None,
        description="year, month or day; the server default when omitted",
    )


# =============================================================================
# ENDPOINTS
# =============================================================================

@app.get("/health")
async def health_check():
    """System status."""
    if not engine_instance:
        raise HTTPException(status_code=503, detail="Engine not initialized")
    return {"status": "online", "resolution": engine_instance.config.default_resolution.value}


@app.get("/api/v1/formats")
async def get_formats():
    """Input token formats per resolution."""
    return {"formats": map_formats()}


@app.post("/api/v1/layout")
def post_layout(request: LayoutRequest):
    """
    Compute a layout.
    Malformed entries are omitted; the response reports how many.
    """
    if not engine_instance:
        raise HTTPException(status_code=503, detail="Engine not initialized")

    layout = engine_instance.layout(
        request.text,
        request.resolution,
        cache=cache_instance,
    )
    return map_layout_to_dto(layout)
