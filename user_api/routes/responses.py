"""
Response envelope and exception handlers shared by all routes.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError, ResponseValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from user_api.schemas.base import ResponseMessage

logger = logging.getLogger(__name__)

DECODE_ERROR = "Failed to decode user from requests JSON"


# PUBLIC_INTERFACE
def message_response(status_code: int, message: str, headers=None) -> JSONResponse:
    """
    Build a response carrying only the message envelope.

    For 400 the message goes into the Error field, for every other status into
    the Message field.
    """
    if status_code == status.HTTP_400_BAD_REQUEST:
        body = ResponseMessage(Error=message)
    else:
        body = ResponseMessage(Message=message)
    return JSONResponse(status_code=status_code, content=body.model_dump(), headers=headers)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return message_response(exc.status_code, str(exc.detail), getattr(exc, "headers", None))


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.warning(f"Undecodable request to {request.url.path}: {exc.errors()}")
    return message_response(status.HTTP_400_BAD_REQUEST, DECODE_ERROR)


async def response_validation_handler(request: Request, exc: ResponseValidationError) -> JSONResponse:
    logger.error(f"Failed to encode response for {request.url.path}: {exc.errors()}")
    return message_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Unhandled error for {request.url.path}: {exc}", exc_info=exc)
    return message_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


# PUBLIC_INTERFACE
def register_exception_handlers(app: FastAPI) -> None:
    """Install the envelope-producing exception handlers on the application."""
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(ResponseValidationError, response_validation_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
