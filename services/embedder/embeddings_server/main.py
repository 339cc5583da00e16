from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Optional

import numpy as np
from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse

from . import __version__
from .embedding import BaseEmbedder, build_embedder
from .errors import DecodeError, EmbeddingsServerError, ModelInitError
from .normalizer import ResponseNormalizer
from .pipeline import EmbeddingPipeline
from .schemas import (
    EmbeddingsRequest,
    EmbeddingsResponse,
    ErrorDetail,
    ErrorResponse,
    HealthResponse,
)
from .settings import Settings, settings as default_settings


logger = logging.getLogger(__name__)

router = APIRouter()


# -------------------------
# Dependencies
# -------------------------
def get_pipeline(request: Request) -> EmbeddingPipeline:
    return request.app.state.pipeline


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


# -------------------------
# Routes
# -------------------------
@router.get("/", response_class=PlainTextResponse)
def root() -> str:
    return "Hello, World!"


@router.get("/health", response_model=HealthResponse)
def health(
    pipeline: EmbeddingPipeline = Depends(get_pipeline),
    cfg: Settings = Depends(get_settings),
) -> HealthResponse:
    return HealthResponse(
        status="ok",
        provider=cfg.PROVIDER,
        model=pipeline.provider.model_name,
        dimension=pipeline.provider.dimension,
        target_dimension=pipeline.normalizer.target_dimension,
    )


@router.post(
    "/v1/embeddings",
    response_model=EmbeddingsResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}, 504: {"model": ErrorResponse}},
)
async def create_embeddings(
    req: EmbeddingsRequest,
    pipeline: EmbeddingPipeline = Depends(get_pipeline),
) -> EmbeddingsResponse:
    return await pipeline.run(req)


# -------------------------
# Error envelopes
# -------------------------
def _error_response(status_code: int, error_type: str, message: str, code: Optional[str] = None) -> JSONResponse:
    body = ErrorResponse(error=ErrorDetail(message=message, type=error_type, code=code))
    return JSONResponse(status_code=status_code, content=body.model_dump())


async def handle_server_error(request: Request, exc: EmbeddingsServerError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    else:
        logger.warning("%s %s rejected: %s", request.method, request.url.path, exc.message)
    return _error_response(exc.status_code, exc.error_type, exc.message, exc.code)


async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    parts = []
    for err in errors:
        loc = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        parts.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    code = errors[0].get("type") if errors else None
    return await handle_server_error(request, DecodeError("; ".join(parts) or "Invalid request body.", code=code))


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return _error_response(500, "server_error", "Internal server error.")


# -------------------------
# App factory
# -------------------------
def _check_dimension(embedder: BaseEmbedder, target_dimension: int) -> None:
    native = embedder.dimension
    if native is not None and native > target_dimension:
        raise ModelInitError(
            f"Model {embedder.model_name} produces {native} dimensions, "
            f"more than TARGET_DIMENSION={target_dimension}."
        )


def create_app(cfg: Optional[Settings] = None, embedder: Optional[BaseEmbedder] = None) -> FastAPI:
    """
    Builds the service. The embedder is created once at startup from `cfg`
    unless one is passed in; a ModelInitError aborts startup.
    """
    cfg = cfg or default_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owned = embedder is None
        provider = build_embedder(cfg) if owned else embedder
        try:
            _check_dimension(provider, cfg.TARGET_DIMENSION)
        except ModelInitError:
            if owned:
                provider.close()
            raise

        normalizer = ResponseNormalizer(cfg.TARGET_DIMENSION, np.random.default_rng(cfg.RANDOM_SEED))
        app.state.settings = cfg
        app.state.pipeline = EmbeddingPipeline(
            provider,
            normalizer,
            max_concurrency=cfg.MAX_CONCURRENT_REQUESTS,
            timeout=cfg.request_timeout,
        )
        logger.info(
            "embeddings server ready: provider=%s model=%s target_dimension=%d",
            cfg.PROVIDER,
            provider.model_name,
            cfg.TARGET_DIMENSION,
        )
        try:
            yield
        finally:
            if owned:
                provider.close()
            logger.info("embeddings server stopped")

    app = FastAPI(title="Embeddings Server", version=__version__, lifespan=lifespan)
    app.include_router(router)
    app.add_exception_handler(EmbeddingsServerError, handle_server_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)
    return app


app = create_app()
