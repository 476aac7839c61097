"""Error handling module for the Feed Reader API."""

from .problem_details import (
    ProblemDetail,
    ProblemDetailException,
    BadRequestError,
    NotFoundError,
    ConflictError,
    InternalServerError,
    BadGatewayError,
    ServiceUnavailableError,
    GatewayTimeoutError,
    StoreUnavailableError,
    QueryFailureError,
    PaginationCancelledError,
    create_problem_response
)
from .handlers import register_exception_handlers

__all__ = [
    "ProblemDetail",
    "ProblemDetailException",
    "BadRequestError",
    "NotFoundError",
    "ConflictError",
    "InternalServerError",
    "BadGatewayError",
    "ServiceUnavailableError",
    "GatewayTimeoutError",
    "StoreUnavailableError",
    "QueryFailureError",
    "PaginationCancelledError",
    "create_problem_response",
    "register_exception_handlers"
]
