"""
Evaluation of conditional request preconditions based on entity tags

The functions in this module never look at HTTP header syntax. The HTTP
layer parses the ``If-Match`` and ``If-None-Match`` header fields into
a ``Precondition`` and the store feeds it together with the freshly
computed entity tag into ``evaluate``. See RFC 7232, section 6 for the
order of the evaluation and the comparison functions used.
"""

from typing import NamedTuple, Optional, Tuple, Union

from .results import Outcome


ANY = "*"


class EntityTag(NamedTuple):
    value: str
    weak: bool = False


TagList = Union[str, Tuple[EntityTag, ...]]


class Precondition(NamedTuple):
    """
    Parsed conditional request header fields

    Each field is ``None`` when the header was not sent, the special
    value ``ANY`` for ``*`` or a tuple of entity tags otherwise.
    """

    if_match: Optional[TagList] = None
    if_none_match: Optional[TagList] = None

    @property
    def empty(self) -> bool:
        return self.if_match is None and self.if_none_match is None


def strong_match(tags: Tuple[EntityTag, ...], etag: str) -> bool:
    return any(not tag.weak and tag.value == etag for tag in tags)


def weak_match(tags: Tuple[EntityTag, ...], etag: str) -> bool:
    return any(tag.value == etag for tag in tags)


def evaluate(precondition: Optional[Precondition], etag: Optional[str], safe: bool) -> Optional[Outcome]:
    """
    Compare the precondition of a client with the current entity tag of a resource

    :param precondition: parsed precondition of the request (``None`` is no precondition)
    :param etag: current entity tag of the resource (``None`` if it doesn't exist)
    :param safe: whether the request method is safe (``GET`` or ``HEAD``)
    :return: ``None`` if the request may proceed, ``Outcome.NOT_MODIFIED`` if the
        client already has the current representation (safe methods only) or
        ``Outcome.PRECONDITION_FAILED`` if the client's view of the resource is stale
    """

    if precondition is None or precondition.empty:
        return None

    if precondition.if_match is not None:
        if precondition.if_match == ANY:
            if etag is None:
                return Outcome.PRECONDITION_FAILED
        elif etag is None or not strong_match(precondition.if_match, etag):
            return Outcome.PRECONDITION_FAILED

    if precondition.if_none_match is not None:
        if precondition.if_none_match == ANY:
            matched = etag is not None
        else:
            matched = etag is not None and weak_match(precondition.if_none_match, etag)
        if matched:
            return Outcome.NOT_MODIFIED if safe else Outcome.PRECONDITION_FAILED

    return None
