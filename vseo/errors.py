import logging
from fastapi import Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError, HTTPException
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException


def error_response(message, status_code=500, extra=None):
    return JSONResponse(
        status_code=status_code,
        content={
            "error": message,
            **(extra or {})
        },
    )


def register_exception_handlers(app):
    """
    Handlers for failures raised outside the route bodies. Routes turn
    service errors (ValidationError, PipelineError) into responses themselves
    with error_response, since process-video adds the videoId.
    """
    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc):
        logging.warning(f"Malformed request on {request.url.path}: {exc}")
        return error_response("Invalid request body", status.HTTP_400_BAD_REQUEST)

    @app.exception_handler(RateLimitExceeded)
    async def rate_limit_handler(request: Request, exc):
        logging.warning(f"Rate limit exceeded for {request.client.host if request.client else 'unknown'}")
        return error_response("Rate limit exceeded", status.HTTP_429_TOO_MANY_REQUESTS)

    @app.exception_handler(HTTPException)
    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc):
        logging.warning(f"HTTP error: {exc.detail if hasattr(exc, 'detail') else exc}")
        return error_response(
            getattr(exc, 'detail', str(exc)),
            getattr(exc, 'status_code', status.HTTP_400_BAD_REQUEST)
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc):
        logging.exception(f"Unexpected error: {exc}")
        return error_response(str(exc) or "Internal server error", status.HTTP_500_INTERNAL_SERVER_ERROR)
