import logging
import traceback
from contextlib import asynccontextmanager
from datetime import datetime

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from core.config import settings
from core.exceptions import BaseCustomException
from core.middleware import RequestLoggingMiddleware
from core.response import error_response, not_found_response
from database.connection import create_tables, dispose_engine, is_database_configured
from routers import customer, order, pickup_delivery, service

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create missing tables on startup when a database is configured."""
    logger.info("Starting up Washflow API...")
    if is_database_configured():
        create_tables()
        logger.info("Database tables ready")
    else:
        logger.warning("DATABASE_URL not set; read endpoints will return defaults")
    yield
    dispose_engine()
    logger.info("Washflow API stopped")


app = FastAPI(
    title="Washflow API",
    description="Laundry shop management API: customers, orders, services, pickups and deliveries",
    version="1.0.0",
    debug=settings.DEBUG,
    lifespan=lifespan
)


def _request_id(request: Request) -> str:
    return getattr(request.state, 'request_id', 'unknown')


def _validation_message(error: dict) -> str:
    loc = [str(part) for part in error.get("loc", ()) if part != "body"]
    message = error.get("msg", "Invalid value")
    if error.get("type") == "json_invalid":
        return "Request body must be valid JSON"
    if error.get("type") == "missing" and not loc:
        return "Request body is required"
    if message.startswith("Value error, "):
        return message[len("Value error, "):]
    field = ".".join(loc)
    return f"{field}: {message}" if field else message


# Global exception handler for custom exceptions
@app.exception_handler(BaseCustomException)
async def custom_exception_handler(request: Request, exc: BaseCustomException):
    """Handle custom exceptions with the standard error body."""
    logger.warning(
        f"{exc.__class__.__name__} [{_request_id(request)}] on "
        f"{request.method} {request.url.path}: {exc.message}"
    )
    body = error_response(exc.message, details=exc.details)
    body.update(exc.extra_fields())
    return JSONResponse(status_code=exc.status_code, content=body)


# Global exception handler for validation errors
@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Flatten pydantic errors into human-readable strings, 400."""
    errors = [_validation_message(error) for error in exc.errors()]
    logger.warning(f"Validation error [{_request_id(request)}] on {request.method} {request.url.path}: {errors}")
    return JSONResponse(
        status_code=400,
        content=error_response(
            "Validation failed",
            message="; ".join(errors),
            errors=errors
        )
    )


# Global exception handler for HTTP exceptions (unmatched routes included)
@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 404:
        return JSONResponse(status_code=404, content=not_found_response(request.url.path))
    logger.warning(f"HTTP {exc.status_code} [{_request_id(request)}] on {request.method} {request.url.path}: {exc.detail}")
    return JSONResponse(
        status_code=exc.status_code,
        content=error_response(str(exc.detail)),
        headers=getattr(exc, "headers", None)
    )


# Global exception handler for unexpected errors
@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    logger.error(
        f"Unexpected error [{_request_id(request)}] on {request.method} {request.url.path}: {str(exc)}",
        exc_info=True
    )
    details = None
    if settings.is_development:
        details = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    return JSONResponse(
        status_code=500,
        content=error_response(
            "Internal server error",
            message=str(exc) or "An unexpected error occurred",
            details=details
        )
    )


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.FRONTEND_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)
app.add_middleware(RequestLoggingMiddleware)


@app.get("/health")
def health_check():
    """Liveness probe."""
    return {
        "status": "ok",
        "database_configured": is_database_configured(),
        "timestamp": datetime.utcnow().isoformat()
    }


# Include routers
app.include_router(customer.router, tags=["Customers"])
app.include_router(order.router, tags=["Orders"])
app.include_router(service.router, tags=["Services"])
app.include_router(pickup_delivery.router, tags=["Pickups & Deliveries"])
