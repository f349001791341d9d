"""Pytest fixtures for the gateway client tests."""

from typing import Callable, List, Optional

import httpx
import pytest

from paygate.integrations.clients.real_http.gateway import PaymentGatewayClient
from paygate.integrations.observability import NullEventHook

BASE_URL = "https://gateway.test"


class FakeGateway:
    """Stands in for the remote service behind httpx.MockTransport."""

    def __init__(self, responder: Optional[Callable[[httpx.Request], httpx.Response]] = None):
        self.requests: List[httpx.Request] = []
        self.responder = responder or (lambda request: httpx.Response(200, json={"status": 0}))

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.responder(request)

    def respond_json(self, body, status_code: int = 200) -> None:
        self.responder = lambda request: httpx.Response(status_code, json=body)

    def respond_text(self, text: str, status_code: int = 200) -> None:
        self.responder = lambda request: httpx.Response(status_code, text=text)

    def fail_with(self, exc_type, message: str) -> None:
        def raise_error(request):
            raise exc_type(message, request=request)

        self.responder = raise_error

    @property
    def calls(self) -> int:
        return len(self.requests)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)


class RecordingHook(NullEventHook):
    def __init__(self):
        self.events = []

    def request_built(self, envelope, descriptor):
        self.events.append(("request_built", descriptor.name))

    def response_received(self, descriptor, outcome):
        self.events.append(("response_received", descriptor.name))

    def validation_failed(self, action, reason):
        self.events.append(("validation_failed", action))


@pytest.fixture
def gateway():
    return FakeGateway()


@pytest.fixture
def hook():
    return RecordingHook()


@pytest.fixture
def make_client(gateway, hook):
    def factory(**kwargs):
        kwargs.setdefault("hook", hook)
        return PaymentGatewayClient(base_url=BASE_URL, http_transport=gateway.transport(), **kwargs)

    return factory


@pytest.fixture
def client(make_client):
    return make_client()
