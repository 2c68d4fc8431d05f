"""
Custom Exceptions for the Exam Portal
=====================================

Every failure that reaches the API layer is one of these. The exception
handlers in ``exam_portal.main`` turn them into JSON responses using
``status_code`` and ``to_dict()``.

Usage:
    from exam_portal.core.exceptions import MaterialNotFoundError

    if not material:
        raise MaterialNotFoundError(material_id)
"""

from typing import Optional, Any, Dict


class ExamPortalError(Exception):
    """Base exception for all Exam Portal errors"""

    status_code: int = 500

    def __init__(
        self,
        message: str,
        code: str = "INTERNAL_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details
        }


# ============================================
# Authentication & Authorization Errors
# ============================================

class AuthenticationError(ExamPortalError):
    """No usable credential on the request"""

    status_code = 401

    def __init__(self, message: str = "Authentication failed"):
        super().__init__(message, code="AUTH_FAILED")


class InvalidTokenError(AuthenticationError):
    """JWT token is invalid, malformed or expired"""

    def __init__(self, message: str = "Invalid token."):
        super().__init__(message)
        self.code = "INVALID_TOKEN"


class AuthorizationError(ExamPortalError):
    """User not authorized for this action"""

    status_code = 403

    def __init__(self, message: str = "Not authorized"):
        super().__init__(message, code="NOT_AUTHORIZED")


class InvalidCredentialsError(ExamPortalError):
    """Email/password pair did not match"""

    status_code = 400

    def __init__(self, message: str = "Invalid email or password"):
        super().__init__(message, code="INVALID_CREDENTIALS")


# ============================================
# Resource Errors (404-type)
# ============================================

class ResourceNotFoundError(ExamPortalError):
    """Base class for not found errors"""

    status_code = 404

    def __init__(self, resource_type: str, resource_id: str):
        super().__init__(
            f"{resource_type} not found",
            code=f"{resource_type.upper()}_NOT_FOUND",
            details={"resource_type": resource_type, "resource_id": resource_id}
        )


class UserNotFoundError(ResourceNotFoundError):
    """User not found"""

    def __init__(self, user_id: str):
        super().__init__("User", user_id)


class MaterialNotFoundError(ResourceNotFoundError):
    """Material not found"""

    def __init__(self, material_id: str):
        super().__init__("Material", material_id)


# ============================================
# Validation Errors (400-type)
# ============================================

class ValidationError(ExamPortalError):
    """Input validation failed"""

    status_code = 400

    def __init__(self, message: str, field: Optional[str] = None):
        details = {"field": field} if field else {}
        super().__init__(message, code="VALIDATION_ERROR", details=details)


class DuplicateResourceError(ExamPortalError):
    """A unique value is already taken"""

    status_code = 400

    def __init__(self, message: str, field: Optional[str] = None):
        details = {"field": field} if field else {}
        super().__init__(message, code="DUPLICATE_RESOURCE", details=details)


class PayloadTooLargeError(ExamPortalError):
    """Uploaded file exceeds the configured limit"""

    status_code = 413

    def __init__(self, max_size: int):
        super().__init__(
            f"File too large. Maximum size is {max_size // (1024 * 1024)}MB",
            code="PAYLOAD_TOO_LARGE",
            details={"max_size": max_size}
        )


# ============================================
# Infrastructure Errors (500-type)
# ============================================

class InternalFailureError(ExamPortalError):
    """Unexpected store or infrastructure failure; message stays generic"""

    status_code = 500

    def __init__(self, message: str = "Something went wrong. Please try again."):
        super().__init__(message, code="INTERNAL_ERROR")


# ============================================
# Helper function for API responses
# ============================================

def error_response(error: ExamPortalError) -> Dict[str, Any]:
    """Convert exception to API error response body"""
    body: Dict[str, Any] = {"detail": error.message, "code": error.code}
    if error.details:
        body["details"] = error.details
    return body
