"""
Shared fixtures for the Deezer adapter test suite
"""

import copy
import threading

import pytest

from deezer_adapter.client import DeezerClient
from deezer_adapter.config_loader import ConfigLoader
from deezer_adapter.exceptions import DeezerNotFoundError
from deezer_adapter.rate_limit_tracker import RateLimitTracker


class FakeTransport:
    """In-memory stand-in for HTTPClient serving canned payloads by path"""

    def __init__(self):
        self.routes = {}
        self.calls = []
        self._lock = threading.Lock()

    def add_route(self, path, payload):
        """
        Register a payload for a path

        The payload may be a JSON value, an exception instance to raise, or a
        callable receiving the request parameters and returning either.
        """
        self.routes[path] = payload

    def make_request(self, request):
        with self._lock:
            self.calls.append((request.path, dict(request.parameters)))

        if request.path not in self.routes:
            raise DeezerNotFoundError(404, "Not Found", request.path)

        route = self.routes[request.path]
        if callable(route):
            route = route(request.parameters)
        if isinstance(route, Exception):
            raise route
        return copy.deepcopy(route)

    @property
    def paths(self):
        return [path for path, _ in self.calls]

    def close(self):
        pass


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep DEEZER_* variables of the host shell out of client construction"""
    for name in ConfigLoader.ENVIRONMENT_VARIABLES.values():
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def transport():
    return FakeTransport()


@pytest.fixture
def client(transport):
    return DeezerClient(http_client=transport)


@pytest.fixture
def rate_limit_tracker():
    """Private tracker so tests never share the process-wide request window"""
    return RateLimitTracker()
