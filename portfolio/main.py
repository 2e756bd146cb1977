"""
Portfolio - personal site and blog.

FastAPI application serving the public homepage, post pages and the
owner's dashboard.
"""

import logging
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from portfolio.config import settings, validate_security_settings
from portfolio.database import init_db
from portfolio.errors import ROOT_ERROR_KEY, AuthorizationError, PortfolioError, ValidationError
from portfolio.middleware.rate_limit import limiter
from portfolio.observability import setup_logging
from portfolio.routers.auth import router as auth_router
from portfolio.routers.dashboard import router as dashboard_router
from portfolio.routers.experiences import router as experiences_router
from portfolio.routers.posts import router as posts_router
from portfolio.routers.projects import router as projects_router
from portfolio.routers.public import router as public_router
from portfolio.routers.users import router as users_router

logger = logging.getLogger(__name__)

REQUEST_SOURCES = ("body", "query", "path", "cookie", "header")


@asynccontextmanager
async def lifespan(app: FastAPI):  # noqa: ARG001
    """Application lifespan handler for startup/shutdown."""
    setup_logging(settings.log_level, settings.log_format)
    validate_security_settings()
    await init_db()
    logger.info("Portfolio started", extra={"path": settings.dashboard_path})
    yield


app = FastAPI(
    title="Portfolio",
    description="Personal portfolio and blog with an owner dashboard",
    version="0.1.0",
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
    lifespan=lifespan,
)

# Add rate limiter state
app.state.limiter = limiter

# Rate limit exceeded handler
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)

# Include routers
app.include_router(public_router)
app.include_router(auth_router)
app.include_router(users_router)
app.include_router(dashboard_router)
app.include_router(posts_router)
app.include_router(projects_router)
app.include_router(experiences_router)


# --- Middleware ---


@app.middleware("http")
async def add_request_id(request: Request, call_next):
    """Add a unique request ID to each request."""
    request_id = str(uuid.uuid4())
    request.state.request_id = request_id
    response = await call_next(request)
    response.headers["X-Request-ID"] = request_id
    return response


# --- Exception Handlers ---


@app.exception_handler(AuthorizationError)
async def authorization_exception_handler(
    request: Request, exc: AuthorizationError
) -> RedirectResponse:
    """Guards never render an error page; they send the browser elsewhere."""
    return RedirectResponse(exc.redirect_to, status_code=status.HTTP_303_SEE_OTHER)


@app.exception_handler(PortfolioError)
async def portfolio_exception_handler(request: Request, exc: PortfolioError) -> JSONResponse:
    """Render typed errors as the action-result envelope."""
    request_id = getattr(request.state, "request_id", None)
    logger.warning(
        "Request failed: %s",
        exc.message,
        extra={"request_id": request_id, "error_code": exc.code, "path": request.url.path},
    )
    return JSONResponse(
        status_code=exc.http_status,
        content=exc.to_response(request_id),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle FastAPI parameter validation with the same envelope as form errors."""
    request_id = getattr(request.state, "request_id", None)

    # FastAPI locations start with the source ("query", "body"); key by the field name
    errors: dict[str, str] = {}
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ()) if part not in REQUEST_SOURCES]
        key = loc[0] if loc else ROOT_ERROR_KEY
        errors.setdefault(key, error.get("msg", "Validation error"))

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=ValidationError(errors).to_response(request_id),
    )


@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle uncaught exceptions with consistent error format."""
    request_id = getattr(request.state, "request_id", None)
    logger.error(
        "Unhandled error",
        exc_info=exc,
        extra={"request_id": request_id, "path": request.url.path},
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "ok": False,
            "errors": {ROOT_ERROR_KEY: "An unexpected error occurred"},
            "error": {
                "code": "INTERNAL_ERROR",
                "message": "An unexpected error occurred",
                "request_id": request_id,
            },
        },
    )


# --- Health Check ---


@app.get("/api/v1/health", tags=["System"])
async def health_check() -> dict[str, str]:
    """
    Health check endpoint.

    Returns 200 OK if the API is running.
    """
    return {"status": "healthy"}
