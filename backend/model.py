# backend/model.py
from pydantic import BaseModel
from typing import Literal

ErrorKind = Literal[
    "invalid_input",
    "encoding_failure",
    "empty_response",
    "adapter_failure",
    "unknown_failure",
]


class HeadshotResponse(BaseModel):
    image_url: str  # data:<mime>;base64,<payload>
    mime_type: str


class ErrorResponse(BaseModel):
    detail: str
    kind: ErrorKind


class HealthResponse(BaseModel):
    status: Literal["ok"] = "ok"
