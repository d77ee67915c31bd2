"""
FastAPI Application Entry Point.
"""
import logging
import time
from contextlib import asynccontextmanager
from datetime import datetime

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address
from starlette.exceptions import HTTPException as StarletteHTTPException

from .api import routers
from .config import settings
from .core.errors import KeralaHorizonError, RateLimitError

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

logger = logging.getLogger(__name__)

STARTED_AT = time.monotonic()

RATE_LIMIT_MESSAGE = "Too many requests from this IP, please try again later."

# One budget per client IP shared by every route
limiter = Limiter(
    key_func=get_remote_address,
    application_limits=[lambda: settings.rate_limit],
    storage_uri="memory://",
    enabled=settings.rate_limit_enabled,
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    logger.info(f"Starting Kerala Horizon API ({settings.environment}), LLM provider: {settings.llm_provider}")
    yield
    logger.info("Shutting down Kerala Horizon API")


# Create FastAPI app
app = FastAPI(
    title="Kerala Horizon API",
    description="Tourism companion for Kerala: trips, documents, payments and local guides",
    version="1.0.0",
    lifespan=lifespan,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Rate limiting
app.state.limiter = limiter
app.add_middleware(SlowAPIMiddleware)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - start) * 1000
    logger.info(f"{request.method} {request.url.path} {response.status_code} {elapsed_ms:.1f}ms")
    return response


# Error handlers

def error_response(status_code: int, message: str, details=None, details_key: str = "errors") -> JSONResponse:
    body = {"success": False, "message": message}
    if details is not None:
        body[details_key] = details
    return JSONResponse(status_code=status_code, content=body)


@app.exception_handler(KeralaHorizonError)
async def kerala_horizon_error_handler(request: Request, exc: KeralaHorizonError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return error_response(exc.status_code, exc.message, exc.details, exc.details_key)


@app.exception_handler(RateLimitExceeded)
def rate_limit_handler(request: Request, exc: RateLimitExceeded):
    # SlowAPIMiddleware calls this directly, so it must stay a plain function
    error = RateLimitError(RATE_LIMIT_MESSAGE, details=exc.detail)
    logger.warning(f"Rate limit hit by {get_remote_address(request)} on {request.url.path}: {exc.detail}")
    return error_response(error.status_code, error.message, error.details, error.details_key)


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    errors = []
    for error in exc.errors():
        field = ".".join(str(part) for part in error.get("loc", ())[1:])
        errors.append(f"{field}: {error['msg']}" if field else error["msg"])
    return error_response(400, "Validation error", errors)


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 404:
        return error_response(404, "API endpoint not found")
    return error_response(exc.status_code, str(exc.detail))


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    message = "Internal server error" if settings.is_production else str(exc)
    return error_response(500, message)


# Include API routes
for router in routers:
    app.include_router(router)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "timestamp": datetime.now().isoformat(),
        "uptime": round(time.monotonic() - STARTED_AT, 2),
        "environment": settings.environment,
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "kerala_horizon.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug
    )
