# submission_api/main.py — FastAPI app entry point

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from submission_api.config import get_settings
from submission_api.database import check_store_connection, get_supabase_client
from submission_api.routers import health, uploads
from submission_api.routers._responses import error_response

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    client = get_supabase_client()
    try:
        await run_in_threadpool(check_store_connection, client, settings.submissions_table)
    except Exception:
        logger.exception("Could not connect to data store")
        raise
    app.state.supabase_client = client
    yield


def create_app() -> FastAPI:
    settings = get_settings()

    app = FastAPI(
        title="submission-api",
        description="Photo submission intake",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(_: Request, exc: HTTPException):
        return error_response(str(exc.detail), exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(_: Request, exc: RequestValidationError):
        logger.info("Rejected malformed form data", extra={"errors": exc.errors()})
        return error_response("Missing or invalid text data.", 400)

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(_: Request, exc: Exception):
        logger.exception("Unhandled error", extra={"error": str(exc)})
        return error_response("Internal server error.", 500)

    app.include_router(health.router, tags=["health"])
    app.include_router(uploads.router, tags=["uploads"])
    return app
