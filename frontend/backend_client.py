from typing import Optional

import requests

from config.settings import settings


class HeadshotClientError(Exception):
    """A failed generation attempt, carrying the message to show the user."""

    def __init__(self, message: str, kind: Optional[str] = None):
        super().__init__(message)
        self.kind = kind


def call_generate(
    image: bytes,
    mime_type: str,
    instructions: str = "",
    filename: str = "upload",
    backend_url: Optional[str] = None,
) -> str:
    """POST /generate -> data URI of the generated headshot"""
    url = f"{(backend_url or settings.BACKEND_URL).rstrip('/')}/generate"
    files = {"image": (filename, image, mime_type)}
    data = {"instructions": instructions or ""}

    try:
        resp = requests.post(url, files=files, data=data, timeout=settings.GENERATE_TIMEOUT)
    except requests.RequestException as e:
        raise HeadshotClientError(f"Could not reach the headshot service: {e}") from e

    if resp.status_code != 200:
        detail, kind = _error_detail(resp)
        raise HeadshotClientError(detail, kind=kind)

    image_url = resp.json().get("image_url")
    if not image_url:
        raise HeadshotClientError("The headshot service returned no image.", kind="empty_response")
    return image_url


def _error_detail(resp: requests.Response):
    try:
        body = resp.json()
    except ValueError:
        return f"Headshot service error (HTTP {resp.status_code})", None

    detail = body.get("detail") if isinstance(body, dict) else None
    if not isinstance(detail, str) or not detail:
        # FastAPI request-validation errors come back as a list
        detail = f"Headshot service error (HTTP {resp.status_code})"
    return detail, body.get("kind") if isinstance(body, dict) else None
