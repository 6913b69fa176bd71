"""Custom exceptions for the PhysioCare backend."""

from typing import Any, Dict, Optional


class PhysioCareException(Exception):
    """Base exception for the PhysioCare application."""

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        """
        Initialize PhysioCareException.

        Args:
            message: Human-readable error message.
            status_code: HTTP status code.
            error_code: Machine-readable error code.
            details: Additional error details.
        """
        self.message = message
        self.status_code = status_code
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)


class AIFlowError(PhysioCareException):
    """Raised when a text-generation flow fails for any reason."""

    def __init__(
        self,
        message: str = "An error occurred while getting suggestions. Please try again later.",
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=502,
            error_code="AI_FLOW_ERROR",
            details=details,
        )


class WriteFailedError(PhysioCareException):
    """User-facing failure for a rejected store write.

    The structured diagnostic travels on the error bus; this only carries
    the generic message shown to the end user.
    """

    def __init__(
        self,
        message: str = "Your request could not be completed.",
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=403,
            error_code="WRITE_FAILED",
            details=details,
        )


class DuplicatePlatformError(PhysioCareException):
    """Raised when a social link already exists for a platform."""

    def __init__(
        self,
        platform: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=f"A link for {platform} already exists.",
            status_code=409,
            error_code="DUPLICATE_PLATFORM",
            details=details or {"platform": platform},
        )


class AuthenticationError(PhysioCareException):
    """Raised when authentication fails."""

    def __init__(
        self,
        message: str = "Authentication failed",
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Initialize AuthenticationError."""
        super().__init__(
            message=message,
            status_code=401,
            error_code="AUTHENTICATION_ERROR",
            details=details,
        )


class AuthorizationError(PhysioCareException):
    """Raised when user is not authorized to access a resource."""

    def __init__(
        self,
        message: str = "Insufficient permissions",
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Initialize AuthorizationError."""
        super().__init__(
            message=message,
            status_code=403,
            error_code="AUTHORIZATION_ERROR",
            details=details,
        )


class NotFoundError(PhysioCareException):
    """Raised when a document is not found."""

    def __init__(
        self,
        message: str = "Resource not found",
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=404,
            error_code="NOT_FOUND",
            details=details,
        )


class ValidationError(PhysioCareException):
    """Raised when input validation fails outside a pydantic request model."""

    def __init__(
        self,
        message: str = "Validation failed",
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=422,
            error_code="VALIDATION_ERROR",
            details=details,
        )
