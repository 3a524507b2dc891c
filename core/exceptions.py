"""
Custom exception classes for robust error handling
"""
from typing import Any, Dict, List, Optional
from fastapi import status


class BaseCustomException(Exception):
    """Base custom exception class"""

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)

    def extra_fields(self) -> Dict[str, Any]:
        """Top-level fields merged into the error body"""
        return {}


class ValidationError(BaseCustomException):
    """Raised when a payload fails field validation"""

    def __init__(self, errors: List[str], message: str = "Validation failed"):
        self.errors = list(errors)
        super().__init__(
            message=message,
            status_code=status.HTTP_400_BAD_REQUEST
        )

    def extra_fields(self) -> Dict[str, Any]:
        return {"errors": self.errors, "message": "; ".join(self.errors)}


class BusinessLogicError(BaseCustomException):
    """Raised when business logic validation fails"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            status_code=status.HTTP_400_BAD_REQUEST,
            details=details
        )


class ResourceNotFoundError(BaseCustomException):
    """Raised when a requested resource is not found"""

    def __init__(
        self,
        resource: str,
        identifier: str,
        details: Optional[Dict[str, Any]] = None,
        **extra: Any
    ):
        self.resource = resource
        self.identifier = identifier
        self.extra = extra
        message = f"{resource} with ID '{identifier}' not found"
        super().__init__(
            message=message,
            status_code=status.HTTP_404_NOT_FOUND,
            details=details
        )

    def extra_fields(self) -> Dict[str, Any]:
        return dict(self.extra)


class ConflictError(BaseCustomException):
    """Raised when a unique field is already taken"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            status_code=status.HTTP_409_CONFLICT,
            details=details
        )


class DatabaseNotConfiguredError(BaseCustomException):
    """Raised when a write needs the hosted database but none is configured"""

    def __init__(self):
        super().__init__(
            message="Database not configured. Please set the DATABASE_URL environment variable.",
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE
        )
