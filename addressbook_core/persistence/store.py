"""
In-memory address book store enforcing optimistic concurrency on updates
"""

import logging
import threading
import collections
from typing import Dict, List, Optional

import pydantic

from .fingerprint import make_fingerprint
from .preconditions import Precondition, evaluate
from .results import Outcome, Result
from .. import schemas


COLLECTION_NAME = "AddressBook"


class AddressBookStore:
    """
    Single in-memory collection of persons with conditional operations

    The store owns the ordered collection of persons and the counter used
    to allocate new IDs. IDs start at 1 and are never reused, not even after
    the person with the highest ID has been deleted. A single re-entrant
    lock guards the collection, so that every check of an entity tag and
    the following modification happen atomically with respect to other
    requests. Persons are immutable models, an update swaps in a new one.

    None of the methods raise exceptions for the expected failure cases,
    they return a ``Result`` instead which carries the ``Outcome``.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        self._persons: Dict[int, schemas.Person] = collections.OrderedDict()
        self._next_id: int = 1
        self._lock = threading.RLock()
        self._logger = logger or logging.getLogger(__name__)

    def __len__(self) -> int:
        with self._lock:
            return len(self._persons)

    @property
    def persons(self) -> List[schemas.Person]:
        with self._lock:
            return list(self._persons.values())

    @property
    def next_id(self) -> int:
        with self._lock:
            return self._next_id

    @property
    def etag(self) -> str:
        with self._lock:
            return make_fingerprint(list(self._persons.values()), COLLECTION_NAME)

    def _allocate_id(self) -> int:
        person_id = self._next_id
        self._next_id += 1
        return person_id

    @staticmethod
    def _make_person(person_id: int, href: str, data: pydantic.BaseModel) -> schemas.Person:
        return schemas.Person(id=person_id, href=href, **data.model_dump(exclude={"id", "href"}))

    def get_collection(self, precondition: Optional[Precondition] = None) -> Result:
        with self._lock:
            persons = list(self._persons.values())
            etag = make_fingerprint(persons, COLLECTION_NAME)

        objection = evaluate(precondition, etag, safe=True)
        if objection is not None:
            return Result(objection, etag=etag)
        return Result(Outcome.OK, persons, etag)

    def get_person(self, person_id: int, precondition: Optional[Precondition] = None) -> Result:
        with self._lock:
            person = self._persons.get(person_id)
            if person is None:
                return Result(Outcome.NOT_FOUND)
            etag = make_fingerprint(person)

        objection = evaluate(precondition, etag, safe=True)
        if objection is not None:
            return Result(objection, etag=etag)
        return Result(Outcome.OK, person, etag)

    def create_person(self, person: pydantic.BaseModel, base_uri: str) -> Result:
        """
        Append a new person to the collection

        Any ID or link sent by the client is ignored. The new person gets the next
        free ID and the link ``{base_uri}/person/{id}``, which is the resource where
        it can be retrieved later. There are no conditions on creating persons.

        :param person: model with the fields of the new person
        :param base_uri: absolute URI of the collection resource
        :return: result with outcome ``CREATED``, the new person and its entity tag
        """

        with self._lock:
            person_id = self._allocate_id()
            created = self._make_person(person_id, f"{base_uri.rstrip('/')}/person/{person_id}", person)
            self._persons[person_id] = created
            etag = make_fingerprint(created)

        self._logger.info(f"Created person {person_id} at {created.href!r}")
        return Result(Outcome.CREATED, created, etag)

    def update_person(
            self,
            person_id: int,
            person: pydantic.BaseModel,
            request_uri: str,
            precondition: Optional[Precondition] = None,
            if_match_present: bool = False
    ) -> Result:
        """
        Replace an existing person in the collection as a whole

        The steps of an update are the following ones, all performed
        while holding the lock of the store:

        1. Unknown IDs are rejected with ``BAD_REQUEST``, updates never create persons.
        2. The precondition is evaluated against the entity tag of the stored person.
           A stale client view is rejected with ``PRECONDITION_FAILED``.
        3. The ID is taken from the path and the link is set to the request URI.
        4. If the ``If-Match`` header was present and the new person equals the stored
           one, nothing is changed and the outcome is ``NO_CONTENT``. Without the header,
           an equal person is stored again and the outcome is ``OK``.
        5. Otherwise the stored person is replaced at its position in the collection.

        :param person_id: ID of the person that should be replaced
        :param person: model with the new fields of the person
        :param request_uri: absolute URI of the person resource
        :param precondition: parsed precondition of the request
        :param if_match_present: whether the request carried an ``If-Match`` header field
        :return: result of the update
        """

        with self._lock:
            existing = self._persons.get(person_id)
            if existing is None:
                self._logger.debug(f"Refusing to update unknown person {person_id}")
                return Result(Outcome.BAD_REQUEST)

            etag = make_fingerprint(existing)
            objection = evaluate(precondition, etag, safe=False)
            if objection is not None:
                self._logger.info(f"Precondition failed for person {person_id} with current tag {etag}")
                return Result(objection, etag=etag)

            replacement = self._make_person(person_id, request_uri, person)
            if if_match_present and existing == replacement:
                self._logger.debug(f"Update of person {person_id} didn't change anything")
                return Result(Outcome.NO_CONTENT, existing, etag)

            self._persons[person_id] = replacement
            new_etag = make_fingerprint(replacement)

        self._logger.info(f"Updated person {person_id}")
        return Result(Outcome.OK, replacement, new_etag)

    def delete_person(self, person_id: int) -> Result:
        with self._lock:
            if self._persons.pop(person_id, None) is None:
                return Result(Outcome.NOT_FOUND)

        self._logger.info(f"Deleted person {person_id}")
        return Result(Outcome.NO_CONTENT)
