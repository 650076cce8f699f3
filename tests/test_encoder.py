import asyncio
import base64
from io import BytesIO

import pytest
from fastapi import UploadFile

from backend.encoder import encode_image_bytes, encode_upload
from backend.errors import EncodingError


def test_encode_image_bytes_has_no_data_uri_prefix():
    data = b"\x89PNG\r\n\x1a\n" + bytes(range(256))
    encoded = encode_image_bytes(data)

    assert not encoded.startswith("data:")
    assert base64.b64decode(encoded) == data


def test_encode_upload_reads_whole_file():
    data = b"\xff\xd8\xff" + b"\x00" * 10240
    upload = UploadFile(file=BytesIO(data), filename="me.jpg")

    encoded = asyncio.run(encode_upload(upload))

    assert base64.b64decode(encoded) == data


def test_encode_upload_unreadable_file_raises_encoding_error():
    upload = UploadFile(file=BytesIO(b"abc"), filename="gone.png")
    upload.file.close()

    with pytest.raises(EncodingError) as exc_info:
        asyncio.run(encode_upload(upload))

    assert exc_info.value.kind == "encoding_failure"
