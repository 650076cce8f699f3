import pytest
import requests

from frontend import backend_client
from frontend.backend_client import HeadshotClientError, call_generate


class DummyResponse:
    def __init__(self, status_code=200, payload=None, text=None):
        self.status_code = status_code
        self._payload = payload
        self.text = text

    def json(self):
        if self._payload is None:
            raise ValueError("no json")
        return self._payload


def _patch_post(monkeypatch, response=None, error=None):
    calls = []

    def _post(url, **kwargs):
        calls.append((url, kwargs))
        if error is not None:
            raise error
        return response

    monkeypatch.setattr(backend_client.requests, "post", _post)
    return calls


def test_call_generate_posts_multipart(monkeypatch):
    calls = _patch_post(
        monkeypatch,
        DummyResponse(payload={"image_url": "data:image/png;base64,QUJD", "mime_type": "image/png"}),
    )

    result = call_generate(b"img", "image/jpeg", "Smile", filename="me.jpg", backend_url="http://api/")

    assert result == "data:image/png;base64,QUJD"
    url, kwargs = calls[0]
    assert url == "http://api/generate"
    assert kwargs["files"] == {"image": ("me.jpg", b"img", "image/jpeg")}
    assert kwargs["data"] == {"instructions": "Smile"}


def test_error_detail_is_surfaced(monkeypatch):
    _patch_post(
        monkeypatch,
        DummyResponse(502, {"detail": "Failed to generate headshot: boom", "kind": "adapter_failure"}),
    )

    with pytest.raises(HeadshotClientError) as exc_info:
        call_generate(b"img", "image/jpeg")

    assert str(exc_info.value) == "Failed to generate headshot: boom"
    assert exc_info.value.kind == "adapter_failure"


def test_non_json_error(monkeypatch):
    _patch_post(monkeypatch, DummyResponse(500, None, text="Internal Server Error"))

    with pytest.raises(HeadshotClientError) as exc_info:
        call_generate(b"img", "image/jpeg")

    assert "HTTP 500" in str(exc_info.value)


def test_transport_error(monkeypatch):
    _patch_post(monkeypatch, error=requests.ConnectionError("refused"))

    with pytest.raises(HeadshotClientError) as exc_info:
        call_generate(b"img", "image/jpeg")

    assert str(exc_info.value).startswith("Could not reach the headshot service")
