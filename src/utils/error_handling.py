"""
Centralized Error Handling and Request Logging
Every error leaves the service in one JSON envelope, and every request gets a trace id.
"""

import json
import logging
import time
import traceback
import uuid
from datetime import datetime
from typing import Dict, Optional
from contextvars import ContextVar

from fastapi import Request
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

# Context variable for request tracing
request_id_var: ContextVar[str] = ContextVar('request_id', default='')

logger = logging.getLogger(__name__)
access_logger = logging.getLogger("employees.access")

class ErrorHandlingConfig:
    """Centralized configuration for error handling behavior"""

    INCLUDE_TRACE_ID = True
    INCLUDE_TIMESTAMP = True
    # 4xx responses are routine for this API; only log them at this level
    CLIENT_ERROR_LOG_LEVEL = logging.INFO

def new_trace_id() -> str:
    return str(uuid.uuid4())[:8]

class StructuredLogger:
    """Structured logging with consistent format and context"""

    @staticmethod
    def log_error(
        error_type: str,
        message: str,
        request: Optional[Request] = None,
        exception: Optional[Exception] = None,
        extra_context: Optional[Dict] = None,
        include_traceback: bool = True
    ) -> str:
        """Log structured error with full context and return its trace id"""
        trace_id = request_id_var.get('') or new_trace_id()

        log_entry = {
            "timestamp": datetime.utcnow().isoformat(),
            "trace_id": trace_id,
            "error_type": error_type,
            "message": message,
            "level": "ERROR"
        }

        if request:
            log_entry["request"] = {
                "method": request.method,
                "path": request.url.path,
                "query_params": dict(request.query_params),
                "client_ip": request.client.host if request.client else None,
            }

        if exception:
            log_entry["exception"] = {
                "type": type(exception).__name__,
                "details": str(exception),
            }
            if include_traceback:
                log_entry["exception"]["traceback"] = "".join(
                    traceback.format_exception(type(exception), exception, exception.__traceback__)
                )

        if extra_context:
            log_entry["context"] = extra_context

        logger.error(json.dumps(log_entry, indent=2, default=str))

        return trace_id

class RequestContextMiddleware(BaseHTTPMiddleware):
    """Assign a trace id to every request and write one access log line"""

    async def dispatch(self, request: Request, call_next):
        trace_id = new_trace_id()
        request_id_var.set(trace_id)
        request.state.trace_id = trace_id

        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000

        response.headers["X-Trace-ID"] = trace_id
        access_logger.info(
            f'[{trace_id}] "{request.method} {request.url.path}" {response.status_code} in {elapsed_ms:.2f}ms'
        )
        return response

def _error_response(
    status_code: int,
    error: str,
    message,
    trace_id: Optional[str],
    detail: Optional[list] = None
) -> JSONResponse:
    response_content = {
        "error": error,
        "message": message,
    }

    if detail is not None:
        response_content["detail"] = detail

    if ErrorHandlingConfig.INCLUDE_TRACE_ID and trace_id:
        response_content["trace_id"] = trace_id

    if ErrorHandlingConfig.INCLUDE_TIMESTAMP:
        response_content["timestamp"] = datetime.utcnow().isoformat()

    return JSONResponse(status_code=status_code, content=response_content)

# Global Exception Handlers
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Handle HTTP exceptions raised by routes or by routing itself"""
    if exc.status_code >= 500:
        trace_id = StructuredLogger.log_error(
            f"http_{exc.status_code}",
            f"HTTP {exc.status_code}: {exc.detail}",
            request=request,
            exception=exc,
            include_traceback=False
        )
    else:
        trace_id = request_id_var.get('')
        logger.log(
            ErrorHandlingConfig.CLIENT_ERROR_LOG_LEVEL,
            f"[{trace_id}] {request.method} {request.url.path} -> {exc.status_code}: {exc.detail}"
        )

    return _error_response(exc.status_code, f"HTTP {exc.status_code}", exc.detail, trace_id)

async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Handle FastAPI request validation errors as bad requests"""
    validation_details = [
        {
            "field": " -> ".join(str(loc) for loc in error.get("loc", [])),
            "message": error.get("msg", "Unknown validation error"),
        }
        for error in exc.errors()
    ]

    trace_id = request_id_var.get('')
    logger.log(
        ErrorHandlingConfig.CLIENT_ERROR_LOG_LEVEL,
        f"[{trace_id}] Request validation failed: {validation_details}"
    )

    return _error_response(400, "HTTP 400", "Request validation failed", trace_id, detail=validation_details)

async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle all other exceptions"""
    trace_id = StructuredLogger.log_error(
        "internal_server_error",
        f"Unhandled exception: {str(exc)}",
        request=request,
        exception=exc,
        include_traceback=True
    )

    # Don't expose internal details
    return _error_response(500, "Internal Server Error", "An unexpected error occurred", trace_id)

def setup_error_handling(app):
    """Install the request context middleware and exception handlers"""
    app.add_middleware(RequestContextMiddleware)

    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    logger.info("Centralized error handling system initialized")
