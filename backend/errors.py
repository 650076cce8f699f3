# backend/errors.py

INVALID_IMAGE_MESSAGE = "Please upload a valid image file (PNG, JPG, WEBP)."


class HeadshotError(Exception):
    """
    Base class for every classified failure of a generation attempt.
    `kind` and `status_code` are what the API reports to the frontend.
    """

    kind = "unknown_failure"
    status_code = 500
    default_message = "An unexpected error occurred."

    def __init__(self, message: str | None = None):
        super().__init__(message or self.default_message)

    @property
    def message(self) -> str:
        return str(self)


class InvalidImageError(HeadshotError):
    kind = "invalid_input"
    status_code = 400
    default_message = INVALID_IMAGE_MESSAGE


class EncodingError(HeadshotError):
    kind = "encoding_failure"
    status_code = 422
    default_message = "The uploaded image could not be read."


class EmptyResponseError(HeadshotError):
    kind = "empty_response"
    status_code = 502
    default_message = "No image was generated. The response from the API was empty."


class GenerationFailedError(HeadshotError):
    kind = "adapter_failure"
    status_code = 502
    default_message = "Failed to generate headshot."

    @classmethod
    def wrap(cls, exc: BaseException) -> "GenerationFailedError":
        return cls(f"Failed to generate headshot: {exc}")


class UnknownGenerationError(HeadshotError):
    kind = "unknown_failure"
    status_code = 502
    default_message = "An unknown error occurred while generating the headshot."


class MissingApiKeyError(RuntimeError):
    """Raised when the Gemini client is built without a credential."""

    def __init__(self, message: str = "API_KEY environment variable not set."):
        super().__init__(message)


def classify_generation_error(exc: Exception) -> HeadshotError:
    """Map an exception raised by the model SDK onto a classified error."""
    if isinstance(exc, HeadshotError):
        return exc
    if str(exc).strip():
        return GenerationFailedError.wrap(exc)
    return UnknownGenerationError()
