"""
Address book REST API base library
"""

import logging
from typing import Any, ClassVar, Dict, Optional

from fastapi import FastAPI, HTTPException, Request, Response
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .. import schemas


logger = logging.getLogger(__name__)


class APIWithoutValidationError(FastAPI):
    """
    FastAPI class that drops the 422 responses from the OpenAPI schema

    Validation errors are answered with 400 by this API, see ``handle_request_validation_error``.
    """

    def openapi(self) -> Dict[str, Any]:
        if self.openapi_schema:
            return self.openapi_schema
        schema = super().openapi()
        for operations in schema.get("paths", {}).values():
            for metadata in operations.values():
                metadata.get("responses", {}).pop("422", None)
        return schema


def error_response(
        request: Request,
        status_code: int,
        message: str,
        details: str = "",
        repeat: bool = False,
        headers: Optional[Dict[str, str]] = None
) -> JSONResponse:
    error = schemas.APIError(
        status=status_code,
        method=request.method,
        request=request.url.path,
        repeat=repeat,
        message=message,
        details=details
    )
    return JSONResponse(jsonable_encoder(error), status_code=status_code, headers=headers)


async def handle_generic_exception(request: Request, _: Exception):
    logger.exception(f"Unhandled exception during '{request.method} {request.url.path}'")
    return error_response(request, 500, "Unexpected internal server error.")


async def handle_request_validation_error(request: Request, exc: RequestValidationError):
    problems = "\n".join(f"\t{'.'.join(map(str, error['loc']))}: {error['msg']}" for error in exc.errors())
    return error_response(request, 400, f"Invalid request:\n{problems}", str(exc.errors()))


class APIException(HTTPException):
    """
    Base class for any kind of generic API exception

    Exceptions with a false ``body`` flag produce empty responses
    that only carry the status code and the optional headers.
    Any other HTTP exception is rendered as ``APIError`` model.
    """

    body: bool = True

    def __init__(
            self,
            status_code: int,
            detail: Optional[str] = None,
            repeat: bool = False,
            message: Optional[str] = None,
            headers: Optional[Dict[str, str]] = None
    ):
        super().__init__(status_code=status_code, detail=detail, headers=headers)
        self.repeat = repeat
        self.message = message

    @classmethod
    async def handle(cls, request: Request, exc: StarletteHTTPException) -> Response:
        message = getattr(exc, "message", None) or exc.__class__.__name__
        headers = getattr(exc, "headers", None)
        logger.debug(f"{type(exc).__name__} for '{request.method} {request.url.path}': {message} ({exc.detail})")

        if not getattr(exc, "body", True):
            return Response(status_code=exc.status_code, headers=headers)
        return error_response(
            request,
            exc.status_code,
            message,
            str(exc.detail),
            getattr(exc, "repeat", False),
            headers
        )


class EmptyResponseException(APIException):
    """
    Base class for the outcomes of the conditional request contract

    Subclasses define the status code and a message template, which
    only ends up in the logs, since the responses have no body.
    """

    body = False
    status: ClassVar[int]
    repeatable: ClassVar[bool] = False
    template: ClassVar[str]

    def __init__(self, resource: str, detail: Optional[str] = None, headers: Optional[Dict[str, str]] = None):
        super().__init__(
            status_code=self.status,
            detail=detail,
            repeat=self.repeatable,
            message=self.template.format(resource=resource),
            headers=headers
        )


class NotModified(EmptyResponseException):
    """
    Exception when the user agent already has the current representation of a resource
    """

    status = 304
    template = "{resource!r} was not modified."

    def __init__(self, resource: str, etag: Optional[str] = None):
        super().__init__(resource, headers={"ETag": etag} if etag else None)


class BadRequest(EmptyResponseException):
    """
    Exception when a person should be updated that doesn't exist
    """

    status = 400
    template = "{resource!r} doesn't exist and can't be created this way."


class NotFound(EmptyResponseException):
    status = 404
    template = "{resource!r} was not found."


class PreconditionFailed(EmptyResponseException):
    """
    Exception when the conditional request headers don't match the current resource state

    This usually means that the resource has been changed by someone else
    since the user agent retrieved it. Fetching it again and repeating the
    request with the fresh entity tag may be successful.
    """

    status = 412
    repeatable = True
    template = "Precondition for {resource!r} failed."
