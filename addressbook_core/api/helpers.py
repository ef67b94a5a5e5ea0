"""
Generic helper library for the core REST API
"""

import logging
from typing import Optional, Union

from fastapi.responses import Response

from .base import BadRequest, NotFound, NotModified, PreconditionFailed
from .dependency import LocalRequestData
from .etag import quote
from ..misc.logger import enforce_logger
from ..persistence import Outcome, Result


def resolve_result(
        result: Result,
        local: LocalRequestData,
        logger: Optional[logging.Logger] = None,
        cache: bool = True
) -> Union[Response, object]:
    """
    Translate the result of a store operation into a response or the returned entity

    Successful outcomes carrying an entity add the ETag header field (and the
    Cache-Control header field, if enabled) to the response of the request and
    return the entity, which will be serialized by the path operation.

    :param result: result of the store operation
    :param local: contextual local data
    :param logger: optional logger that should be used for DEBUG messages
    :param cache: switch to add the Cache-Control header to successful responses
    :return: the entity of the result or an empty response for ``NO_CONTENT``
    :raises NotModified: if the user agent already has the most recent version of the resource
    :raises PreconditionFailed: if any of the preconditions were not met
    :raises NotFound: if the requested person doesn't exist
    :raises BadRequest: if an unknown person should be updated
    """

    path = local.request.url.path
    enforce_logger(logger).debug(f"{result.outcome.name} for '{local.request.method} {path}'")

    if result.outcome == Outcome.NOT_MODIFIED:
        raise NotModified(path, quote(result.etag))
    elif result.outcome == Outcome.PRECONDITION_FAILED:
        raise PreconditionFailed(path, f"Conditional request not matching current entity tag: {result.etag}")
    elif result.outcome == Outcome.NOT_FOUND:
        raise NotFound(path)
    elif result.outcome == Outcome.BAD_REQUEST:
        raise BadRequest(path)
    elif result.outcome == Outcome.NO_CONTENT:
        return Response(status_code=204)

    local.etag.add_header(local.response, result.etag, cache)
    return result.entity
