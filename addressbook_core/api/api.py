"""
Address book core REST API definition

This API provides no security model at all. It's an all-or-nothing API,
so take care when deploying it. It's recommended to put a reverse proxy
in front of this API to introduce proper authentication if needed.

The API manages one single address book, which lives in memory only.
Every person of the address book is available at `/contacts/person/{id}`,
while the whole collection is available at `/contacts`.

This API supports conditional HTTP requests. Any representation
delivered by the API carries the `ETag` header set properly, which
is derived from the content of the resource only. This allows clients
to cache representations (`If-None-Match`) and to prevent lost updates
when multiple clients want to update the same person using `PUT`
(`If-Match`). Take a look into RFC 7232 for more information.

The handling of incoming conditional requests is described as follows:

1. Calculate the current `ETag` of the resource in question
2. In case the `If-Match` header field is present ...
    1. and contains the special value `*`, proceed since the resource exists
    2. and contains that tag, proceed
    3. otherwise, respond with 412 (Precondition Failed)
3. In case the `If-None-Match` header field contains `*` or that tag ...
    1. and the method is `GET`, respond with 304 (Not Modified)
    2. and for other methods, respond with 412 (Precondition Failed)
4. Otherwise, perform the operation as usual

A `PUT` request carrying the `If-Match` header whose body equals the
currently stored person is answered with 204 (No Content) without
changing anything. Without the `If-Match` header, the person is stored
again and the response is 200 (OK) with the (same) entity tag.

The responses 304, 404 and 412 as well as the 400 response for updating
an unknown person have no body. Other errors use the `APIError` schema.
"""

import logging.config
import contextlib
from typing import Optional

import fastapi
from fastapi.exceptions import RequestValidationError
from fastapi.responses import RedirectResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import base
from .routers import router
from .. import schemas, __version__
from ..persistence import AddressBookStore
from ..schemas import config
from ..settings import Settings


EXCEPTION_HANDLERS = {
    StarletteHTTPException: base.APIException.handle,
    RequestValidationError: base.handle_request_validation_error,
    Exception: base.handle_generic_exception
}


def create_app(
        settings: Optional[config.CoreConfig] = None,
        store: Optional[AddressBookStore] = None,
        configure_logging: bool = True
) -> fastapi.FastAPI:
    """
    Build a new application serving one address book

    Every call returns an independent application with its own store,
    so that tests or embedding programs may run several of them side by side.
    The settings are read from the usual sources if none are given.

    :param settings: optional configuration of the application
    :param store: optional address book store, a new empty one is used otherwise
    :param configure_logging: switch to apply the logging section of the settings
    :return: new ``FastAPI`` instance
    """

    if settings is None:
        settings = Settings()
    if configure_logging:
        logging.config.dictConfig(settings.logging.model_dump())
    logger = logging.getLogger(__name__)

    @contextlib.asynccontextmanager
    async def lifespan(_: fastapi.FastAPI):
        logger.info(f"Address book API {__version__} is ready")
        yield
        logger.info(f"Shutting down, dropping {len(app.state.store)} persons")

    app = base.APIWithoutValidationError(
        title="Address book core REST API",
        version=__version__,
        description=__doc__,
        responses={400: {"model": schemas.APIError}},
        exception_handlers=EXCEPTION_HANDLERS,
        lifespan=lifespan
    )

    @app.get("/", include_in_schema=False)
    async def redirect_root():
        return RedirectResponse("./docs")

    app.state.settings = settings
    app.state.store = store if store is not None else AddressBookStore()
    app.include_router(router)
    logger.debug(f"Created application with {len(app.state.store)} persons in the address book")
    return app


class APIWrapper:
    """
    Lazy holder of a default application for ``uvicorn`` command line usage

    .. code-block::

        uvicorn addressbook_core.api:api.app
    """

    def __init__(self):
        self._app: Optional[fastapi.FastAPI] = None

    @property
    def app(self) -> fastapi.FastAPI:
        if self._app is None:
            self._app = create_app()
        return self._app


api = APIWrapper()
