# backend/gemini_client.py

import base64
import traceback
from typing import Any, Optional

from google import genai
from google.genai import types

from config.settings import Settings

from .errors import (
    EmptyResponseError,
    MissingApiKeyError,
    classify_generation_error,
)
from .utils import to_data_uri

DEFAULT_MODEL = "gemini-2.5-flash-image"


def extract_first_image(response: Any) -> Optional[str]:
    """
    Scan the candidates' content parts in order and return the first inline
    image as a data URI, or None if the response carries no image.
    """
    for candidate in getattr(response, "candidates", None) or []:
        content = getattr(candidate, "content", None)
        if content is None:
            continue
        for part in content.parts or []:
            blob = part.inline_data
            if blob is None or not blob.data:
                continue
            data = blob.data
            if isinstance(data, (bytes, bytearray)):
                payload = base64.b64encode(data).decode("ascii")
            else:
                payload = data
            return to_data_uri(blob.mime_type, payload)
    return None


class HeadshotGenerator:
    """
    Sends one photo + prompt to Gemini and returns the generated headshot.

    Configuration is passed in explicitly; `client` replaces the SDK client
    (tests pass a fake one).
    """

    def __init__(
        self,
        api_key: Optional[str],
        model: str = DEFAULT_MODEL,
        client: Any = None,
    ):
        if not api_key:
            raise MissingApiKeyError()
        self.model = model
        self._client = client if client is not None else genai.Client(api_key=api_key)

    @classmethod
    def from_settings(cls, cfg: Settings) -> "HeadshotGenerator":
        return cls(api_key=cfg.API_KEY, model=cfg.GEMINI_MODEL)

    async def generate(self, image_b64: str, mime_type: str, prompt: str) -> str:
        """
        Make exactly one model call. Returns `data:<mime>;base64,<payload>`.

        Raises:
            EmptyResponseError: the call succeeded but no part held image data.
            GenerationFailedError: the SDK raised; its message is kept.
            UnknownGenerationError: the SDK raised without any message.
        """
        image_part = types.Part.from_bytes(
            data=base64.b64decode(image_b64),
            mime_type=mime_type,
        )

        print(f"[GeminiClient] Sending {mime_type} image to {self.model}, prompt={len(prompt)} chars")
        try:
            response = await self._client.aio.models.generate_content(
                model=self.model,
                contents=[image_part, prompt],
                config=types.GenerateContentConfig(response_modalities=["IMAGE"]),
            )
        except Exception as e:
            print(f"[GeminiClient] ERROR: generate_content failed: {e!r}")
            traceback.print_exc()
            raise classify_generation_error(e) from e

        data_uri = extract_first_image(response)
        if data_uri is None:
            print("[GeminiClient] Response contained no image part")
            raise EmptyResponseError()

        print("[GeminiClient] Got image part")
        return data_uri
