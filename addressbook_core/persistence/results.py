"""
Structured results of the address book store operations
"""

import enum
from typing import List, NamedTuple, Optional, Union

from .. import schemas


@enum.unique
class Outcome(enum.Enum):
    OK = enum.auto()
    CREATED = enum.auto()
    NO_CONTENT = enum.auto()
    NOT_MODIFIED = enum.auto()
    BAD_REQUEST = enum.auto()
    NOT_FOUND = enum.auto()
    PRECONDITION_FAILED = enum.auto()


class Result(NamedTuple):
    """
    Outcome of a store operation with the optional entity and its entity tag

    The entity tag is always computed together with the entity
    while holding the lock of the store, so they describe the same state.
    """

    outcome: Outcome
    entity: Optional[Union[schemas.Person, List[schemas.Person]]] = None
    etag: Optional[str] = None
