import logging

from rest_framework import status
from rest_framework.exceptions import ValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class ServiceError(Exception):
    """
    Base class for errors raised by the service layer.

    Views never inspect the message: the HTTP status comes from the class.
    Extra keyword arguments are kept as a structured payload and returned
    to the client under ``details``.
    """

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message, **details):
        super().__init__(message)
        self.message = message
        self.details = details


class InvalidDataError(ServiceError):
    status_code = status.HTTP_400_BAD_REQUEST

    @classmethod
    def from_validation_error(cls, exc):
        """Wrap a Django model ``ValidationError`` raised by ``full_clean()``."""
        if hasattr(exc, "error_dict"):
            message = "; ".join(
                f"{name}: {' '.join(messages)}" for name, messages in exc.message_dict.items()
            )
            return cls(message, errors=exc.message_dict)
        return cls("; ".join(exc.messages), errors=exc.messages)


class NotFoundError(ServiceError):
    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(ServiceError):
    status_code = status.HTTP_409_CONFLICT


def error_response(message, status_code, details=None):
    body = {"success": False, "error": str(message)}
    if details:
        body["details"] = details
    return Response(body, status=status_code)


def custom_exception_handler(exc, context):
    if isinstance(exc, ServiceError):
        if exc.status_code >= 500:
            logger.error("Service error in API view: %s", exc.message)
        return error_response(exc.message, exc.status_code, exc.details or None)

    response = exception_handler(exc, context)

    if response is not None:
        if isinstance(exc, ValidationError):
            return error_response(
                "Validation failed", response.status_code, response.data
            )
        detail = response.data.get("detail", response.data) if isinstance(response.data, dict) else response.data
        response.data = {"success": False, "error": str(detail)}
        return response

    logger.exception("Unhandled exception in API view", exc_info=exc)

    return error_response(str(exc) or exc.__class__.__name__, status.HTTP_500_INTERNAL_SERVER_ERROR)
