"""
Helper classes to write unit tests for the address book core
"""

import os
import secrets
import unittest
import threading
from typing import Collection, Dict, List, Optional, Type, Union

import pydantic
import requests
import uvicorn

from addressbook_core import settings as _settings
from addressbook_core.api import create_app
from addressbook_core.persistence import AddressBookStore
from addressbook_core.schemas import config

from . import conf


def _as_json(data):
    if isinstance(data, pydantic.BaseModel):
        return data.model_dump(mode="json", by_alias=True)
    if isinstance(data, list):
        return [_as_json(e) for e in data]
    return data


class BaseTest(unittest.TestCase):
    """
    Base class for unit tests using a private config file path

    Subclasses overwriting ``setUp`` or ``tearDown`` have to call the
    implementation of this class first in ``setUp`` and last in ``tearDown``.
    """

    config_file: Optional[str] = None

    def setUp(self) -> None:
        self.config_file = f"config_{os.getpid()}_{secrets.token_hex(8)}.json"
        _settings.CONFIG_PATHS = [self.config_file]

    def tearDown(self) -> None:
        if self.config_file and os.path.exists(self.config_file):
            os.remove(self.config_file)


class BaseAPITests(BaseTest):
    """
    Base class for unit tests talking to a real API server via HTTP

    Every unit test gets its own fresh application with an empty address
    book, served by ``uvicorn`` in a background thread on a free local port.
    The store of the application is available as ``self.store``. Subclasses
    may overwrite ``make_config`` to serve the application with other settings.
    """

    store: Optional[AddressBookStore] = None
    server_port: Optional[int] = None
    server_thread: Optional[threading.Thread] = None
    uvicorn_server: Optional[uvicorn.Server] = None

    def make_config(self) -> config.CoreConfig:
        return config.CoreConfig()

    @property
    def server(self) -> str:
        return f"http://127.0.0.1:{self.server_port}/"

    def assertQuery(
            self,
            endpoint: tuple,
            status_code: Union[int, Collection[int]] = 200,
            json: Optional[Union[dict, list, pydantic.BaseModel]] = None,
            headers: Optional[Dict[str, str]] = None,
            r_none: bool = False,
            r_is_json: bool = True,
            r_headers: Optional[Union[Dict[str, str], List[str]]] = None,
            r_schema: Optional[Type[pydantic.BaseModel]] = None,
            **kwargs
    ) -> requests.Response:
        """
        Send a request to the API server and check the response

        :param endpoint: tuple of the HTTP method and the path of the endpoint
        :param status_code: expected status code or collection of allowed status codes
        :param json: optional request body, models are serialized by their aliases
        :param headers: optional request headers
        :param r_none: expect an empty response body and skip the other body checks
        :param r_is_json: expect a JSON response body
        :param r_headers: names of expected response headers, or a dict to compare their values, too
        :param r_schema: optional model class the response body has to validate against
        :param kwargs: further keyword arguments for ``requests.request``
        :return: the response of the server
        """

        method, path = endpoint
        response = requests.request(
            method.upper(),
            self.server + path.lstrip("/"),
            json=_as_json(json),
            headers=headers or {},
            **kwargs
        )

        if isinstance(status_code, int):
            self.assertEqual(status_code, response.status_code, response.text)
        else:
            self.assertIn(response.status_code, status_code, response.text)

        for name in (r_headers or []):
            self.assertIn(name, response.headers, response.headers)
            if isinstance(r_headers, dict):
                self.assertEqual(r_headers[name], response.headers[name], response.headers)

        if r_none:
            self.assertEqual("", response.text)
            return response

        if r_is_json:
            try:
                body = response.json()
            except ValueError:
                self.fail(f"No JSON body in response: {response.text!r}")
            if r_schema is not None:
                r_schema.model_validate(body)
        return response

    def _start_api_server(self):
        app = create_app(settings=self.make_config(), store=self.store, configure_logging=False)
        self.uvicorn_server = uvicorn.Server(uvicorn.Config(
            app,
            host="127.0.0.1",
            port=0,
            log_config=None,
            access_log=False
        ))
        self.server_thread = threading.Thread(target=self.uvicorn_server.run, daemon=True)
        self.server_thread.start()

        for _ in range(conf.MAX_SERVER_WAIT_RETRIES):
            if self.uvicorn_server.started:
                break
            self.server_thread.join(conf.SERVER_START_WAIT_TIMEOUT)
        else:
            self._stop_api_server()
            self.fail(f"API server didn't start after {conf.MAX_SERVER_WAIT_RETRIES} checks")

        self.server_port = self.uvicorn_server.servers[0].sockets[0].getsockname()[1]

    def _stop_api_server(self):
        if self.uvicorn_server is None:
            return
        self.uvicorn_server.should_exit = True
        if self.server_thread is not None:
            self.server_thread.join(conf.SERVER_STOP_TIMEOUT)

    def setUp(self) -> None:
        super().setUp()
        self.store = AddressBookStore()
        self._start_api_server()

    def tearDown(self) -> None:
        self._stop_api_server()
        super().tearDown()
