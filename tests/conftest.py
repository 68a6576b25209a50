"""
Shared fixtures: a fake users API served through httpx.MockTransport.
"""
import json

import httpx
import pytest

from userclient.services.user_service import UserService
from userclient.storage.session_store import InMemorySessionStorage

BASE_URL = "http://users.test/users"


class FakeUsersAPI:
    """Records every request and answers through a swappable handler."""

    def __init__(self):
        self.requests = []
        self.handler = lambda request: httpx.Response(200, json={"ok": True})

    def __call__(self, request: httpx.Request):
        self.requests.append(request)
        return self.handler(request)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self):
        return json.loads(self.last_request.content)


@pytest.fixture
def api():
    return FakeUsersAPI()


@pytest.fixture
def storage():
    return InMemorySessionStorage()


@pytest.fixture
def http_client(api):
    return httpx.AsyncClient(transport=httpx.MockTransport(api))


@pytest.fixture
def service(http_client, storage):
    return UserService(base_url=BASE_URL, storage=storage, client=http_client)
