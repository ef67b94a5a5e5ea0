"""
ETag helper library for the core REST API
"""

import re
import logging
from typing import Optional

from fastapi import Request, Response

from ..persistence import ANY, EntityTag, Precondition
from ..persistence.preconditions import TagList


logger = logging.getLogger(__name__)

CACHE_CONTROL = "private, max-age=86400"
"""
fixed cache directive of every successful representation of a resource
"""

_TAG_PATTERN = re.compile(r'(W/)?"([^"]*)"|([^\s,"]+)')


def parse_tags(value: Optional[str]) -> Optional[TagList]:
    """
    Parse the value of an ``If-Match`` or ``If-None-Match`` header field

    Tags are expected to be quoted, but unquoted tags are accepted as well.
    An empty header field is treated as if the header was absent.

    :param value: optional raw value of the header field
    :return: ``None`` if no tags are present, ``ANY`` for ``*`` or a tuple of tags
    """

    if value is None or value.strip() == "":
        return None
    if value.strip() == ANY:
        return ANY
    tags = []
    for weak, quoted, bare in _TAG_PATTERN.findall(value):
        if bare:
            tags.append(EntityTag(bare, False))
        else:
            tags.append(EntityTag(quoted, bool(weak)))
    return tuple(tags)


def quote(tag: str) -> str:
    if not tag.startswith('"'):
        tag = '"' + tag
    if not tag.endswith('"'):
        tag += '"'
    return tag


class ETag:
    """
    Helper class translating between conditional request headers and the store

    The parsing of the header syntax happens here only, the store
    receives the readily parsed ``Precondition`` and evaluates it.
    """

    request: Request

    def __init__(self, request: Request):
        self.request = request

        for field in ["If-Modified-Since", "If-Unmodified-Since", "If-Range"]:
            if request.headers.get(field):
                logger.warning(f"'{field}' header not supported or not fully implemented.")
                logger.debug(f"Field value: {request.headers.get(field)!r}")

    def _get_joined(self, field: str) -> Optional[str]:
        values = self.request.headers.getlist(field)
        if not values:
            return None
        if len(values) > 1:
            logger.debug(f"More than one {field!r} header: {values!r}")
        return ",".join(values)

    @property
    def if_match_present(self) -> bool:
        """
        Determine whether the request carried an ``If-Match`` header field at all
        """

        return "If-Match" in self.request.headers

    @property
    def precondition(self) -> Precondition:
        return Precondition(
            if_match=parse_tags(self._get_joined("If-Match")),
            if_none_match=parse_tags(self._get_joined("If-None-Match"))
        )

    @staticmethod
    def add_header(response: Response, tag: Optional[str], cache: bool = True) -> bool:
        """
        Add the ETag header field (and optionally the Cache-Control header field) to the response

        :param response: Response object of the handled request
        :param tag: entity tag of the delivered representation
        :param cache: switch to also add the Cache-Control header field
        :return: whether the ETag header has been set on the response
        """

        if tag is not None:
            response.headers["ETag"] = quote(tag)
        if cache:
            response.headers["Cache-Control"] = CACHE_CONTROL
        return tag is not None
