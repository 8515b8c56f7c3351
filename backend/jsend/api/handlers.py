from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException
from starlette.responses import Response

from jsend.api.response import jsend_response
from jsend.envelope import ERROR, FAIL, Envelope


logger = logging.getLogger("jsend.api")


def _status_for(status_code: int) -> str:
    return ERROR if status_code >= 500 else FAIL


async def http_exception_handler(request: Request, exc: HTTPException) -> Response:
    envelope = Envelope.strict().code(exc.status_code).status(_status_for(exc.status_code))
    if isinstance(exc.detail, dict):
        envelope.set(exc.detail).message("Request failed")
    else:
        envelope.message(str(exc.detail) if exc.detail is not None else "Request failed")
    response = jsend_response(envelope, status_code=exc.status_code)
    for name, value in (exc.headers or {}).items():
        response.headers[name] = value
    return response


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> Response:
    envelope = (
        Envelope.strict({"errors": jsonable_encoder(exc.errors())})
        .code(422)
        .status(FAIL)
        .message("Validation failed")
    )
    return jsend_response(envelope, status_code=422)


async def unhandled_exception_handler(request: Request, exc: Exception) -> Response:
    logger.error(
        "http.unhandled_exception",
        exc_info=exc,
        extra={"request_id": getattr(request.state, "request_id", None)},
    )
    envelope = Envelope.strict().code(500).status(ERROR).message("Internal server error")
    return jsend_response(envelope, status_code=500)


def install_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
