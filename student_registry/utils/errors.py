import traceback
from typing import List

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from student_registry.schemas.student_schemas import (
    FieldViolation,
    StudentValidationError,
)
from .logging import get_logger
from .responses import ResponseBuilder

logger = get_logger()


class BusinessLogicError(Exception):
    """Custom exception for business rule violations such as duplicate emails."""

    def __init__(self, message: str, error_code: str = "BLOC_ERROR"):
        super().__init__(message)
        self.message = message
        self.error_code = error_code


class NotFoundError(Exception):
    """Custom exception for resource not found errors."""

    def __init__(
        self, message: str = "Resource not found", error_code: str = "NOT_FOUND"
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code


class ServiceError(Exception):
    """Custom exception for unexpected failures while serving a request."""

    def __init__(self, message: str, error_code: str = "SERVICE_ERROR"):
        super().__init__(message)
        self.message = message
        self.error_code = error_code


def format_violations(violations: List[FieldViolation]) -> str:
    """Join field violations into one readable message."""
    details = "; ".join(f'{v.message} at "{v.field}"' for v in violations)
    return f"Validation error: {details}"


def setup_error_handlers(app: FastAPI):
    """Setup custom error handlers."""

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        logger.error(f"HTTP Exception: {exc.status_code} - {exc.detail}")
        return ResponseBuilder.error(message=str(exc.detail), status_code=exc.status_code)

    """
    RequestValidationError covers bodies FastAPI could not decode, e.g. malformed JSON.
    """

    @app.exception_handler(RequestValidationError)
    async def request_validation_exception_handler(
        request: Request, exc: RequestValidationError
    ):
        logger.error(f"Request Validation Error: {exc.errors()}")

        violations = [
            FieldViolation(
                field=".".join(str(loc) for loc in error["loc"]),
                message=error["msg"],
            )
            for error in exc.errors()
        ]
        return ResponseBuilder.error(
            message=format_violations(violations),
            status_code=status.HTTP_400_BAD_REQUEST,
        )

    @app.exception_handler(StudentValidationError)
    async def student_validation_exception_handler(
        request: Request, exc: StudentValidationError
    ):
        logger.error(f"Student Validation Error: {exc}")

        return ResponseBuilder.error(
            message=format_violations(exc.violations),
            status_code=status.HTTP_400_BAD_REQUEST,
        )

    @app.exception_handler(BusinessLogicError)
    async def business_logic_exception_handler(
        request: Request, exc: BusinessLogicError
    ):
        logger.error(f"Business Logic Error: {exc.message}")

        return ResponseBuilder.error(
            message=exc.message, status_code=status.HTTP_400_BAD_REQUEST
        )

    @app.exception_handler(NotFoundError)
    async def not_found_exception_handler(request: Request, exc: NotFoundError):
        logger.error(f"Not Found Error: {exc.message}")

        return ResponseBuilder.error(
            message=exc.message, status_code=status.HTTP_404_NOT_FOUND
        )

    @app.exception_handler(ServiceError)
    async def service_exception_handler(request: Request, exc: ServiceError):
        logger.error(f"Service Error: {exc.message}")

        return ResponseBuilder.error(
            message=exc.message, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """Handle all other unhandled exceptions"""
        logger.error(f"Unhandled Exception: {str(exc)}")
        logger.error(f"Traceback: {traceback.format_exc()}")

        return ResponseBuilder.error(
            message="An internal server error occurred",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
