"""
Address book API dependency library
"""

import fastapi.datastructures
from fastapi import Depends, Request, Response

from .etag import ETag
from ..persistence import AddressBookStore
from ..schemas import config


def get_store(request: Request) -> AddressBookStore:
    """
    Return the address book store which has been attached to the application during its creation
    """

    return request.app.state.store


class MinimalRequestData:
    """
    Collection of minimal dependencies used only for internal functionalities
    """

    def __init__(self, request: Request, response: Response):
        self.request = request
        self.response = response
        self.headers: fastapi.datastructures.Headers = request.headers

    @property
    def config(self) -> config.CoreConfig:
        return self.request.app.state.settings

    @property
    def absolute_path(self) -> str:
        """
        Return the absolute URI of the requested resource without query and fragment

        The configured public base URL takes precedence over
        the scheme and host found in the request, which allows to
        construct correct links when running behind a reverse proxy.
        """

        base_url = self.config.server.public_base_url
        if base_url is not None:
            return str(base_url).rstrip("/") + self.request.url.path
        url = self.request.url
        return f"{url.scheme}://{url.netloc}{url.path}"


class LocalRequestData(MinimalRequestData):
    """
    Collection of core dependencies used by all path operations on the address book

    This class stores references to various important objects that
    will almost certainly be used by request handlers (path operations).
    Note that any dependency added here will be added to the OpenAPI
    definition, if it refers to a Query, Header, Path or Cookie.
    """

    def __init__(
            self,
            request: Request,
            response: Response,
            store: AddressBookStore = Depends(get_store)
    ):
        super().__init__(request, response)
        self.store: AddressBookStore = store
        self.etag: ETag = ETag(request)
