"""
Address book error schemas
"""

from typing import Optional

import pydantic


__all__ = ["APIError"]


class APIError(pydantic.BaseModel):
    """
    APIError: shared model for unexpected API failures

    Rejections that are part of the conditional request contract
    (`304`, `400` for unknown persons, `404` and `412`) carry no body
    at all. This model is used for everything else, i.e. invalid requests
    that failed validation, unknown paths and internal server errors.

    The field `error` should always contain a true boolean value. The
    field `status` contains the HTTP status code of the response, if
    possible. The field `request` contains the request path without query
    parameters or fragments, while the `method` field holds the request
    method (e.g. `GET`). The field `repeat` determines whether executing
    the exact same request again may be successful instead. The field
    `message` contains a short human-readable informational message about
    the problem. The field `details` contains a string of arbitrary length
    with details about the problem source, if available.
    """

    error: bool = True
    status: Optional[pydantic.NonNegativeInt]
    method: pydantic.constr(max_length=255)
    request: str
    repeat: bool
    message: str
    details: str
