import asyncio

import httpx
import pytest

from gttx import ClientConfig, GttxClient
from gttx.auth import AUTHORIZE_PATH


def ok(**fields) -> dict:
    return {'apiStatus': 0, **fields}


def failure(code, message='rejected') -> dict:
    return {
        'apiStatus': 1,
        'result': {'error_code': code, 'error_en': message},
    }


class FakeClock:
    def __init__(self, now: float = 1_700_000_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeProvider:
    '''
    Stands in for the API behind an httpx.MockTransport. Authorization issues
    ``token-1``, ``token-2``... and resource calls answer from ``responses``.
    '''

    def __init__(self, responses: list | None = None, auth_delay: float = 0.0) -> None:
        self.responses: list = list(responses or [])
        self.auth_delay = auth_delay
        self.auth_requests: list[httpx.Request] = []
        self.requests: list[httpx.Request] = []
        self.auth_response: dict | None = None

    async def __call__(self, request: httpx.Request) -> httpx.Response:
        if request.url.path == AUTHORIZE_PATH:
            self.auth_requests.append(request)
            if self.auth_delay:
                await asyncio.sleep(self.auth_delay)
            body = self.auth_response or ok(
                Authorization=f'token-{len(self.auth_requests)}'
            )
            return httpx.Response(200, json=body)

        self.requests.append(request)
        body = self.responses.pop(0) if self.responses else ok(result={})
        if isinstance(body, httpx.Response):
            return body
        return httpx.Response(200, json=body)

    @property
    def auth_calls(self) -> int:
        return len(self.auth_requests)

    @property
    def calls(self) -> int:
        return len(self.requests)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def provider() -> FakeProvider:
    return FakeProvider()


@pytest.fixture
def make_client(provider, clock):
    def factory(**options) -> GttxClient:
        return GttxClient(
            'app-id',
            'secret-key',
            ClientConfig(**options),
            transport=httpx.MockTransport(provider),
            clock=clock,
        )

    return factory
