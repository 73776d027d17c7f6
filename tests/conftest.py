"""
Shared fixtures for watson-speech tests.

FakeTransport stands in for HttpTransport: it records every request and
answers from per-route response queues, so no test touches the network.
FakeClock drives token expiry without sleeping.
"""

import asyncio
import json
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from watson_speech.auth.iam_authenticator import IAM_URL, IamAuthenticator
from watson_speech.transport.http import HttpResponse

TTS_URL = "https://api.us-south.text-to-speech.watson.cloud.ibm.com/instances/tts-123"
STT_URL = "https://api.us-south.speech-to-text.watson.cloud.ibm.com/instances/stt-456"


class FakeClock:
    """Settable time source in seconds."""

    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeTransport:
    """
    Records requests and replays canned responses.

    Each route holds a queue; responses are popped until one remains,
    which is then reused. An Exception in the queue is raised instead.
    Routes added later take precedence over earlier ones.
    """

    def __init__(self):
        self.calls = []
        self.routes = []
        self.delay = 0.0

    def add(self, method, url, *responses):
        self.routes.append((method, url, list(responses)))

    def add_json(self, method, url, data, status=200):
        self.add(method, url, HttpResponse(status=status, body=json.dumps(data).encode()))

    def add_token(self, *tokens, expires_in=3600):
        responses = [
            HttpResponse(
                status=200,
                body=json.dumps({
                    "access_token": token,
                    "expires_in": expires_in,
                    "token_type": "Bearer",
                }).encode(),
            )
            for token in tokens or ("abc",)
        ]
        self.add("POST", IAM_URL, *responses)

    def calls_to(self, url, method=None):
        return [
            call for call in self.calls
            if call["url"] == url and (method is None or call["method"] == method)
        ]

    @property
    def iam_calls(self):
        return self.calls_to(IAM_URL, "POST")

    async def request(
        self,
        method,
        url,
        *,
        headers=None,
        params=None,
        data=None,
        json_body=None,
    ):
        self.calls.append({
            "method": method,
            "url": url,
            "headers": dict(headers or {}),
            "params": params,
            "data": data,
            "json": json_body,
        })
        if self.delay:
            await asyncio.sleep(self.delay)

        for route_method, route_url, responses in reversed(self.routes):
            if route_method == method and route_url == url:
                response = responses.pop(0) if len(responses) > 1 else responses[0]
                if isinstance(response, Exception):
                    raise response
                return HttpResponse(
                    status=response.status,
                    body=response.body,
                    headers=response.headers,
                    url=url,
                )

        raise AssertionError(f"Unexpected request: {method} {url}")


@pytest.fixture
def clock():
    """Simulated clock starting at t=1000s."""
    return FakeClock()


@pytest.fixture
def transport():
    """Fake transport with no routes."""
    return FakeTransport()


@pytest.fixture
def authenticator(transport, clock):
    """Authenticator whose IAM endpoint always issues token 'abc'."""
    transport.add_token("abc")
    return IamAuthenticator("test-api-key", transport=transport, clock=clock)


@pytest.fixture
def tts_url():
    return TTS_URL


@pytest.fixture
def stt_url():
    return STT_URL
