# api/v1/utils.py
import logging

from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

from core.exceptions import APIException

logger = logging.getLogger(__name__)


def _validation_message(exc):
    if hasattr(exc, "message_dict"):
        return {field: [str(m) for m in messages] for field, messages in exc.message_dict.items()}
    messages = [str(m) for m in exc.messages]
    return messages[0] if len(messages) == 1 else messages


def custom_exception_handler(exc, context):
    """
    Wrap DRF's default exception handler so every error body carries
    ``error`` and ``status_code``.

    * project ``APIException`` subclasses render through ``to_dict()``
    * Django ``ValidationError`` (model ``clean()`` / query parsing) becomes a 400
    * everything else goes through DRF
    """
    view = context.get("view")

    if isinstance(exc, APIException):
        if exc.status_code >= 500:
            logger.error(
                f"API error in {view.__class__.__name__}: {exc.message}", exc_info=exc
            )
        else:
            logger.info(f"API error in {view.__class__.__name__}: {exc.message}")
        return Response(exc.to_dict(), status=exc.status_code)

    if isinstance(exc, DjangoValidationError):
        message = _validation_message(exc)
        data = {"status_code": status.HTTP_400_BAD_REQUEST}
        if isinstance(message, dict):
            data["error"] = "Invalid data provided."
            data["errors"] = message
        else:
            data["error"] = message
        return Response(data, status=status.HTTP_400_BAD_REQUEST)

    response = drf_exception_handler(exc, context)

    # Add the HTTP status code to the payload
    if response is not None and isinstance(response.data, dict):
        response.data["status_code"] = response.status_code
        if "detail" in response.data and "error" not in response.data:
            response.data["error"] = response.data["detail"]

    if response is None:
        logger.exception("Unhandled API exception", exc_info=exc, extra={"view": view})
    else:
        logger.warning(f"API exception in {view.__class__.__name__}: {exc}")

    return response
