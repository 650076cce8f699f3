import base64
import binascii
import re
from typing import Optional, Tuple

DEFAULT_IMAGE_MIME = "image/png"

_DATA_URI_RE = re.compile(
    r"^data:(?P<mime>[\w.+-]+/[\w.+-]+)(?:\s*;\s*[^;,]+?)*?;base64,(?P<payload>.*)$",
    re.DOTALL,
)


def is_image_mime(mime_type: Optional[str]) -> bool:
    """
    Any `image/*` type is accepted; decodability is never checked.
    """
    return bool(mime_type) and mime_type.startswith("image/")


def to_data_uri(mime_type: Optional[str], payload_b64: str) -> str:
    return f"data:{mime_type or DEFAULT_IMAGE_MIME};base64,{payload_b64}"


def split_data_uri(data_uri: str) -> Tuple[str, str]:
    """
    Return (mime_type, base64 payload) of a `data:<mime>;base64,<payload>` string.
    """
    m = _DATA_URI_RE.match(data_uri or "")
    if not m:
        raise ValueError("Not a base64 data URI")
    return m.group("mime"), m.group("payload")


def decode_data_uri(data_uri: str) -> Tuple[bytes, str]:
    """
    Return (raw bytes, mime_type) of a base64 data URI.
    """
    mime_type, payload = split_data_uri(data_uri)
    try:
        data = base64.b64decode(payload, validate=True)
    except binascii.Error as e:
        raise ValueError(f"Invalid base64 payload: {e}") from e
    return data, mime_type
