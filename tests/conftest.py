import io
import json

import pytest
from PIL import Image

from agent_tools.image import client


class RecordedCalls(list):
    """Recorded `requests.post` calls plus a `respond(...)` setter."""


class FakeResponse:
    def __init__(self, status_code=200, payload=None, text=None):
        self.status_code = status_code
        self.ok = 200 <= status_code < 300
        self._payload = payload
        self.text = text if text is not None else json.dumps(payload)

    def json(self):
        return self._payload


@pytest.fixture
def png_bytes():
    buf = io.BytesIO()
    Image.new("RGB", (4, 4), (255, 0, 0)).save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture
def api_key(monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "secret-key")
    return "secret-key"


@pytest.fixture
def no_api_key(monkeypatch, tmp_path):
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def fake_post(monkeypatch):
    """Replace `requests.post` in the client; returns the list of recorded calls."""
    calls = RecordedCalls()
    state = {"response": FakeResponse(200, {})}

    def _post(url, headers=None, json=None, timeout=None):
        calls.append({"url": url, "headers": headers, "json": json, "timeout": timeout})
        return state["response"]

    def respond(status_code=200, payload=None, text=None):
        state["response"] = FakeResponse(status_code, payload, text)

    monkeypatch.setattr(client.requests, "post", _post)
    calls.respond = respond
    return calls


@pytest.fixture
def no_network(monkeypatch):
    def _post(*args, **kwargs):
        raise AssertionError("network call in test mode")

    monkeypatch.setattr(client.requests, "post", _post)
