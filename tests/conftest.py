"""Test fixtures and utilities."""

import json
from dataclasses import dataclass, field

import pytest

from fixtures import API_URL, TOKEN
from upbank.client import UpClient
from upbank.client.transport import TransportResponse


@dataclass
class SentRequest:
    method: str
    url: str
    headers: dict
    body: bytes | None


@dataclass
class RecordingTransport:
    """Transport double that records requests and replays queued responses.

    Used where the exact URL string handed to the transport matters; tests
    of the real HTTP path use the responses library instead.
    """

    responses: list[TransportResponse] = field(default_factory=list)
    sent: list[SentRequest] = field(default_factory=list)

    def queue(self, payload: dict | None = None, status_code: int = 200) -> None:
        body = json.dumps(payload).encode() if payload is not None else b""
        self.responses.append(TransportResponse(status_code=status_code, body=body))

    def send(self, method, url, headers, body=None) -> TransportResponse:
        self.sent.append(SentRequest(method, url, dict(headers), body))
        return self.responses.pop(0)

    @property
    def last(self) -> SentRequest:
        return self.sent[-1]


@pytest.fixture
def transport() -> RecordingTransport:
    """Recording transport with no queued responses."""
    return RecordingTransport()


@pytest.fixture
def recording_client(transport: RecordingTransport) -> UpClient:
    """UpClient wired to the recording transport."""
    return UpClient(TOKEN, base_url=API_URL, transport=transport)


@pytest.fixture
def client() -> UpClient:
    """UpClient over the real requests transport (mock with responses)."""
    return UpClient(TOKEN, base_url=API_URL)
