"""Global exception handler middleware."""

from typing import Any, Dict

from fastapi import Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from app.config import get_settings
from app.utils.exceptions import PhysioCareException
from app.utils.logger import extra, get_logger

logger = get_logger(__name__)


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """Catches application exceptions and renders the standard error envelope."""

    async def dispatch(self, request: Request, call_next: Any) -> JSONResponse:
        """
        Handle exceptions and return proper JSON responses.

        Args:
            request: HTTP request.
            call_next: Next middleware/route handler.

        Returns:
            JSON response with error details.
        """
        # Let OPTIONS (CORS preflight) requests pass through untouched
        if request.method == "OPTIONS":
            return await call_next(request)

        try:
            return await call_next(request)
        except PhysioCareException as e:
            logger.warning(
                f"{e.error_code} on {request.method} {request.url.path}: {e.message}",
                extra=extra(error_code=e.error_code, details=e.details),
            )
            return self._create_error_response(
                status_code=e.status_code,
                error_code=e.error_code,
                message=e.message,
                details=e.details,
            )
        except Exception as e:
            logger.error(
                f"Unhandled exception: {e}",
                exc_info=True,
                extra=extra(exception_type=type(e).__name__, path=request.url.path),
            )
            return self._create_error_response(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                error_code="INTERNAL_SERVER_ERROR",
                message="An unexpected error occurred",
                details={"error": str(e)} if get_settings().debug else {},
            )

    @staticmethod
    def _create_error_response(
        status_code: int,
        error_code: str,
        message: str,
        details: Dict[str, Any],
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status_code,
            content={
                "success": False,
                "error": {
                    "code": error_code,
                    "message": message,
                    "details": details,
                },
            },
        )
