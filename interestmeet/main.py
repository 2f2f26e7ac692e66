import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from importlib.metadata import version as pkg_version

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from interestmeet.api import (
    collection_router,
    deck_router,
    health_router,
    inbox_router,
    profile_router,
)
from interestmeet.api.dependencies import reset_swipe_session
from interestmeet.config import settings
from interestmeet.models.failure import ApiResponse, KnownError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler; each run starts from an empty session."""
    reset_swipe_session()
    yield
    reset_swipe_session()


app = FastAPI(
    title=settings.app_name,
    version=pkg_version("interestmeet"),
    lifespan=lifespan,
)

app.include_router(collection_router)
app.include_router(deck_router)
app.include_router(health_router)
app.include_router(inbox_router)
app.include_router(profile_router)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Tighten in production
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(KnownError)
async def known_error_handler(_request: Request, exc: KnownError) -> JSONResponse:
    """Explain known failures with the failure envelope."""
    logger.info("known_failure", extra={"kind": exc.kind.value, "detail": exc.detail})
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_response().model_dump(mode="json"),
    )


@app.exception_handler(Exception)
async def unknown_error_handler(_request: Request, exc: Exception) -> JSONResponse:
    """No raw 500s: unexpected errors still get a classified response."""
    logger.exception("Unhandled error")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=ApiResponse.unknown_failure(detail=type(exc).__name__).model_dump(mode="json"),
    )


def main() -> None:
    """CLI entry point."""
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    uvicorn.run("interestmeet.main:app", host="0.0.0.0", port=8000)


if __name__ == "__main__":
    main()
