"""
Centralized error handling and user-facing error messages.
"""
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


# User-facing error messages
ERROR_MESSAGES = {
    # Request shape
    "method_not_allowed": "Method Not Allowed",
    "too_many_files": "Only one file may be uploaded",
    "validation_error": "Please check your input and try again.",

    # File uploads
    "file_too_large": "File size too large. Maximum 5MB allowed.",
    "invalid_file_type": "Only PDF and DOCX files are allowed",
    "file_upload_failed": "File upload failed",
    "resume_required": "Resume file is required",

    # Fields
    "full_name_required": "Full name is required",
    "email_required": "Email is required",
    "email_invalid": "Invalid email format",
    "phone_required": "Phone number is required",
    "phone_invalid": "Phone number must be exactly 10 digits",
    "linkedin_invalid": "Invalid LinkedIn URL format",

    # Duplicates
    "duplicate_email": "An application with this email already exists",
    "duplicate_phone": "An application with this phone number already exists",

    # General
    "server_error": "Internal server error",
    "database_error": "Database connection issue. Please try again later.",
}


def get_error_message(error_key: str, default: str | None = None) -> str:
    """Get a user-facing error message."""
    return ERROR_MESSAGES.get(error_key, default or ERROR_MESSAGES["server_error"])


class AppError(Exception):
    """Base application error."""
    def __init__(self, message: str, status_code: int = 500, details: dict | None = None):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(AppError):
    """A submitted field is missing or malformed."""
    def __init__(self, message: str, field: str | None = None):
        super().__init__(message, status_code=400, details={"field": field} if field else None)
        self.field = field


class FileUploadError(AppError):
    """File upload error."""
    def __init__(self, message: str = ERROR_MESSAGES["file_upload_failed"], status_code: int = 400):
        super().__init__(message, status_code=status_code)


class FileTooLargeError(FileUploadError):
    def __init__(self, message: str = ERROR_MESSAGES["file_too_large"]):
        super().__init__(message, status_code=400)


class FileTypeRejectedError(FileUploadError):
    def __init__(self, message: str = ERROR_MESSAGES["invalid_file_type"]):
        super().__init__(message, status_code=400)


class FileStorageError(FileUploadError):
    """The file could not be written; not the client's fault."""
    def __init__(self, message: str = ERROR_MESSAGES["file_upload_failed"]):
        super().__init__(message, status_code=500)


class DuplicateApplicantError(AppError):
    """An applicant with the same email or phone already exists."""
    def __init__(self, field: str):
        super().__init__(get_error_message(f"duplicate_{field}"), status_code=400, details={"field": field})
        self.field = field


def create_error_response(status_code: int, message: str) -> JSONResponse:
    """Create the standard `{"error": ...}` response body."""
    return JSONResponse(status_code=status_code, content={"error": message})


def register_exception_handlers(app: FastAPI) -> None:
    """Render every failure as `{"error": ...}` without leaking internals."""

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        if exc.status_code >= 500:
            logger.error("%s on %s: %s", type(exc).__name__, request.url.path, exc.message)
        else:
            logger.info("Rejected %s: %s", request.url.path, exc.message)
        return create_error_response(exc.status_code, exc.message)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """Routing errors (405, 404) and explicit HTTPExceptions."""
        response = create_error_response(exc.status_code, str(exc.detail))
        if getattr(exc, "headers", None):
            response.headers.update(exc.headers)
        return response

    @app.exception_handler(RequestValidationError)
    async def request_validation_error_handler(request: Request, exc: RequestValidationError):
        logger.info("Malformed request to %s: %s", request.url.path, exc.errors())
        return create_error_response(400, get_error_message("validation_error"))

    @app.exception_handler(SQLAlchemyError)
    async def sqlalchemy_error_handler(request: Request, exc: SQLAlchemyError):
        """Handle general database errors."""
        logger.exception("Database SQLAlchemyError: %s", exc)
        return create_error_response(500, get_error_message("server_error"))

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Handle unexpected errors globally."""
        logger.exception("Unhandled exception: %s", exc)
        return create_error_response(500, get_error_message("server_error"))
