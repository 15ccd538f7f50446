"""
Custom exceptions and error handling
"""

from fastapi import Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException
import structlog
from typing import Any, Dict, List

logger = structlog.get_logger()

class LawDeskException(Exception):
    """Base exception for the practice management system"""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, error_code: str = None, details: Dict[str, Any] = None):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)

class ValidationError(LawDeskException):
    """Validation error"""
    status_code = status.HTTP_400_BAD_REQUEST

class AuthenticationError(LawDeskException):
    """Bad credentials or missing/invalid token"""
    status_code = status.HTTP_401_UNAUTHORIZED

class PermissionError(LawDeskException):
    """Permission denied error"""
    status_code = status.HTTP_403_FORBIDDEN

class NotFoundError(LawDeskException):
    """Resource not found error"""
    status_code = status.HTTP_404_NOT_FOUND

class ConflictError(LawDeskException):
    """Duplicate or still-referenced resource"""
    status_code = status.HTTP_409_CONFLICT

def format_validation_errors(errors: List[Dict[str, Any]]) -> List[str]:
    """Render pydantic error dicts as '<field>: <msg>' strings"""
    messages = []
    for error in errors:
        location = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        field = ".".join(location)
        messages.append(f"{field}: {error.get('msg')}" if field else error.get("msg", "Invalid input"))
    return messages

async def lawdesk_exception_handler(request: Request, exc: LawDeskException):
    """Handle custom application exceptions"""
    log = logger.error if exc.status_code >= 500 else logger.warning
    log(
        "Application exception",
        error_code=exc.error_code,
        message=exc.message,
        details=exc.details,
        path=request.url.path
    )

    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthenticationError) else None

    return JSONResponse(
        status_code=exc.status_code,
        content={
            "success": False,
            "message": exc.message,
            "error_code": exc.error_code,
            "details": exc.details
        },
        headers=headers
    )

async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle request validation errors as 400 with a message list"""
    errors = exc.errors()
    logger.warning("Validation error", errors=len(errors), path=request.url.path)

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "success": False,
            "message": format_validation_errors(errors),
            "error_code": "VALIDATION_ERROR",
            "details": {"validation_errors": [
                {"loc": list(error.get("loc", ())), "msg": error.get("msg"), "type": error.get("type")}
                for error in errors
            ]}
        }
    )

async def http_exception_handler(request: Request, exc: HTTPException):
    """Handle HTTP exceptions"""
    logger.warning("HTTP exception", status_code=exc.status_code, detail=exc.detail, path=request.url.path)

    return JSONResponse(
        status_code=exc.status_code,
        content={
            "success": False,
            "message": exc.detail,
            "error_code": f"HTTP_{exc.status_code}"
        },
        headers=getattr(exc, "headers", None)
    )
