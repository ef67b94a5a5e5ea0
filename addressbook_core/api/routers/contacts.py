"""
Address book router module for /contacts requests
"""

import logging
from typing import List

from fastapi import Depends
from fastapi.responses import Response

from ._router import router
from ..dependency import LocalRequestData
from .. import helpers
from ... import schemas


logger = logging.getLogger(__name__)

_EMPTY = {"description": "Empty response without body"}


@router.get(
    "/contacts",
    tags=["Contacts"],
    response_model=List[schemas.Person],
    responses={304: _EMPTY, 412: _EMPTY}
)
async def get_address_book(local: LocalRequestData = Depends(LocalRequestData)):
    """
    Return the whole address book as ordered list of persons

    The response carries the entity tag of the whole collection, which changes
    whenever a person has been created, updated or deleted. Sending this tag in
    the `If-None-Match` header field yields a `304` response without body as
    long as the address book didn't change in the meantime.

    * `304`: if the `If-None-Match` header matches the current entity tag
    * `412`: if the `If-Match` header doesn't match the current entity tag
    """

    return helpers.resolve_result(local.store.get_collection(local.etag.precondition), local, logger)


@router.post(
    "/contacts",
    tags=["Contacts"],
    status_code=201,
    response_model=schemas.Person
)
async def add_person(person: schemas.PersonCreation, local: LocalRequestData = Depends(LocalRequestData)):
    """
    Add a new person to the end of the address book

    The ID of the new person is assigned by the server, any ID in the request
    is ignored. The `Location` header field of the response points to the new
    resource at `/contacts/person/{id}`, which is the `href` of the person, too.
    """

    result = local.store.create_person(person, local.absolute_path)
    local.response.headers["Location"] = result.entity.href
    return helpers.resolve_result(result, local, logger, cache=False)


@router.get(
    "/contacts/person/{person_id}",
    tags=["Contacts"],
    response_model=schemas.Person,
    responses={304: _EMPTY, 404: _EMPTY, 412: _EMPTY}
)
async def get_person(person_id: int, local: LocalRequestData = Depends(LocalRequestData)):
    """
    Return a single person of the address book

    * `304`: if the `If-None-Match` header matches the current entity tag
    * `404`: if the person doesn't exist
    * `412`: if the `If-Match` header doesn't match the current entity tag
    """

    return helpers.resolve_result(local.store.get_person(person_id, local.etag.precondition), local, logger)


@router.put(
    "/contacts/person/{person_id}",
    tags=["Contacts"],
    response_model=schemas.Person,
    responses={204: _EMPTY, 400: _EMPTY, 412: _EMPTY}
)
async def update_person(
        person_id: int,
        person: schemas.PersonUpdate,
        local: LocalRequestData = Depends(LocalRequestData)
):
    """
    Replace an existing person of the address book

    Use the entity tag of the person in the `If-Match` header field to
    prevent overwriting changes made by other clients in the meantime.
    The `id` and `href` of the person are always taken from the request
    path, never from the request body. Persons are not created this way.

    * `204`: if the `If-Match` header was present and the body
        equals the stored person, so that nothing has been changed
    * `400`: if the person doesn't exist
    * `412`: if the `If-Match` header doesn't match the current entity tag
        or the `If-None-Match` header matches it
    """

    result = local.store.update_person(
        person_id,
        person,
        local.absolute_path,
        precondition=local.etag.precondition,
        if_match_present=local.etag.if_match_present
    )
    return helpers.resolve_result(result, local, logger)


@router.delete(
    "/contacts/person/{person_id}",
    tags=["Contacts"],
    status_code=204,
    response_class=Response,
    responses={404: _EMPTY}
)
async def delete_person(person_id: int, local: LocalRequestData = Depends(LocalRequestData)):
    """
    Delete a person from the address book

    Deleting is unconditional. The ID of a deleted person will never be used again.

    * `404`: if the person doesn't exist
    """

    return helpers.resolve_result(local.store.delete_person(person_id), local, logger)
