# backend/encoder.py

import base64

from fastapi import UploadFile

from .errors import EncodingError


def encode_image_bytes(data: bytes) -> str:
    """Base64 body of `data`, without any `data:` prefix."""
    return base64.b64encode(data).decode("ascii")


async def encode_upload(upload: UploadFile) -> str:
    """
    Read the whole upload and return its base64 body.
    No size or dimension limit is applied.
    """
    try:
        data = await upload.read()
    except (OSError, ValueError) as e:
        print(f"[Encoder] ERROR: cannot read upload {upload.filename!r}: {e}")
        raise EncodingError() from e
    return encode_image_bytes(data)
