"""FastAPI application entrypoint. No business logic; only wiring, middleware
and the error responders that turn every failure into {"error": message}."""

from dotenv import load_dotenv

load_dotenv()

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from blogapi import __version__
from blogapi.api import health
from blogapi.api import router as api_router
from blogapi.core.config import settings
from blogapi.core.database import init_db
from blogapi.core.errors import BlogError, InternalError
from blogapi.middleware.request_logging import RequestLoggingMiddleware

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_: FastAPI):
    init_db()
    logger.info("Database ready (%s)", settings.APP_ENV)
    yield


app = FastAPI(
    title="Blog API",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if settings.APP_ENV == "dev" else settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(RequestLoggingMiddleware)


def _error(status_code: int, message: str, headers: dict[str, str] | None = None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message}, headers=headers)


def describe_validation_errors(errors: list[dict]) -> str:
    """Flatten FastAPI/pydantic validation errors into one readable line."""
    parts = []
    for err in errors:
        loc = [str(p) for p in err.get("loc", ()) if p not in ("body", "query", "path")]
        where = ".".join(loc)
        parts.append(f"{where}: {err.get('msg', 'invalid')}" if where else err.get("msg", "invalid"))
    return "Invalid request: " + "; ".join(parts) if parts else "Invalid request"


@app.exception_handler(BlogError)
async def handle_blog_error(_: Request, exc: BlogError) -> JSONResponse:
    return _error(exc.status_code, exc.message, exc.headers)


@app.exception_handler(RequestValidationError)
async def handle_request_validation(_: Request, exc: RequestValidationError) -> JSONResponse:
    return _error(400, describe_validation_errors(exc.errors()))


@app.exception_handler(StarletteHTTPException)
async def handle_http_exception(_: Request, exc: StarletteHTTPException) -> JSONResponse:
    # Routing misses are the only 404s raised as HTTPException here.
    if exc.status_code == 404:
        return _error(404, "Route not found")
    return _error(exc.status_code, str(exc.detail), getattr(exc, "headers", None))


@app.exception_handler(Exception)
async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return _error(InternalError.status_code, "Internal server error")


app.include_router(health.router, tags=["health"])
app.include_router(api_router, prefix=settings.API_PREFIX)
