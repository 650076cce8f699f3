"""
Headshot session state machine used by the Streamlit page.

Phases:
    IDLE -> IMAGE_SELECTED -> GENERATING -> SUCCEEDED | FAILED -> (start over) IDLE

The session is the single source of truth for what the page shows. It owns
the Pillow preview of the source photo and the rotating loading message,
and releases both on every way out.
"""

import threading
from dataclasses import dataclass, field
from enum import Enum
from io import BytesIO
from typing import Callable, Optional, Sequence, Tuple

from PIL import Image

from backend.utils import decode_data_uri, is_image_mime

from .backend_client import HeadshotClientError

INVALID_IMAGE_MESSAGE = "Please upload a valid image file (PNG, JPG, WEBP)."
MISSING_IMAGE_MESSAGE = "Please upload an image to start."
UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred."

LOADING_MESSAGES = (
    "Warming up the studio lights...",
    "Adjusting the camera lens...",
    "Finding the perfect angle...",
    "Applying professional touch-ups...",
    "Developing the photo in the digital darkroom...",
    "Polishing the final image...",
)

# (image bytes, mime type, instructions) -> data URI
GenerateFn = Callable[[bytes, str, str], str]


class Phase(str, Enum):
    IDLE = "idle"
    IMAGE_SELECTED = "image_selected"
    GENERATING = "generating"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class InvalidTransitionError(RuntimeError):
    pass


@dataclass
class SourceImage:
    data: bytes
    mime_type: str
    name: str = "upload"
    file_id: Optional[str] = None
    _preview: Optional[Image.Image] = field(default=None, repr=False, compare=False)

    @property
    def preview(self) -> Image.Image:
        """Lazily opened display handle; closed by `release()`."""
        if self._preview is None:
            self._preview = Image.open(BytesIO(self.data))
        return self._preview

    @property
    def preview_open(self) -> bool:
        return self._preview is not None

    def release(self) -> None:
        if self._preview is not None:
            self._preview.close()
            self._preview = None


class StatusTicker:
    """
    Cycles through `messages` every `interval` seconds on a timer thread.
    `start()` and `stop()` both go back to the first message.
    """

    def __init__(self, messages: Sequence[str] = LOADING_MESSAGES, interval: float = 3.0):
        if not messages:
            raise ValueError("StatusTicker needs at least one message")
        self.messages = tuple(messages)
        self.interval = interval
        self._index = 0
        self._timer: Optional[threading.Timer] = None
        self._lock = threading.Lock()

    @property
    def message(self) -> str:
        return self.messages[self._index]

    @property
    def running(self) -> bool:
        return self._timer is not None

    def start(self) -> None:
        with self._lock:
            self._cancel()
            self._index = 0
            self._schedule()

    def stop(self) -> None:
        with self._lock:
            self._cancel()
            self._index = 0

    def _tick(self) -> None:
        with self._lock:
            # a timer cancelled after it already fired must not re-arm
            if self._timer is not threading.current_thread():
                return
            self._index = (self._index + 1) % len(self.messages)
            self._schedule()

    def _schedule(self) -> None:
        timer = threading.Timer(self.interval, self._tick)
        timer.daemon = True
        self._timer = timer
        timer.start()

    def _cancel(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None


class HeadshotSession:
    def __init__(self, ticker: Optional[StatusTicker] = None):
        self.ticker = ticker or StatusTicker()
        self.phase = Phase.IDLE
        self.source: Optional[SourceImage] = None
        self.instructions = ""
        self.result_image: Optional[str] = None
        self.error: Optional[str] = None

    # ----- derived state -----

    @property
    def is_generating(self) -> bool:
        return self.phase is Phase.GENERATING

    @property
    def can_generate(self) -> bool:
        return self.source is not None and not self.is_generating

    @property
    def status_message(self) -> str:
        return self.ticker.message

    # ----- transitions -----

    def select_image(
        self,
        data: bytes,
        mime_type: str,
        name: str = "upload",
        file_id: Optional[str] = None,
    ) -> bool:
        """
        Store a newly picked/dropped photo. Non-image types only set an error.
        """
        self._ensure_idle_ui("select an image")
        if not is_image_mime(mime_type):
            self.error = INVALID_IMAGE_MESSAGE
            return False

        self._release_source()
        self.source = SourceImage(data=data, mime_type=mime_type, name=name, file_id=file_id)
        self.result_image = None
        self.error = None
        self.phase = Phase.IMAGE_SELECTED
        return True

    def clear_image(self) -> None:
        if self.phase not in (Phase.IMAGE_SELECTED, Phase.FAILED):
            raise InvalidTransitionError(f"Cannot clear the image while {self.phase.value}")
        self._release_source()
        self.phase = Phase.IDLE

    def set_instructions(self, text: str) -> None:
        self._ensure_idle_ui("edit instructions")
        self.instructions = text or ""

    def generate(self, generate_fn: GenerateFn) -> bool:
        """
        Run one generation attempt through `generate_fn`.

        Returns False without calling `generate_fn` when there is no photo or
        an attempt is already running.
        """
        if self.is_generating:
            return False
        if self.source is None:
            self.error = MISSING_IMAGE_MESSAGE
            return False

        self.phase = Phase.GENERATING
        self.result_image = None
        self.error = None
        self.ticker.start()
        try:
            image_url = generate_fn(self.source.data, self.source.mime_type, self.instructions)
        except HeadshotClientError as e:
            self._finish(error=str(e))
        except Exception as e:
            print(f"[Session] Unexpected generation error: {e!r}")
            self._finish(error=UNEXPECTED_ERROR_MESSAGE)
        else:
            self._finish(image_url=image_url)
        return True

    def start_over(self) -> None:
        self._ensure_idle_ui("start over")
        self.ticker.stop()
        self._release_source()
        self.instructions = ""
        self.result_image = None
        self.error = None
        self.phase = Phase.IDLE

    def close(self) -> None:
        """Teardown: stop the ticker and drop the preview handle."""
        self.ticker.stop()
        self._release_source()

    def download(self) -> Tuple[bytes, str]:
        if self.phase is not Phase.SUCCEEDED or self.result_image is None:
            raise InvalidTransitionError("No generated headshot to download")
        return decode_data_uri(self.result_image)

    # ----- helpers -----

    def _finish(self, image_url: Optional[str] = None, error: Optional[str] = None) -> None:
        self.ticker.stop()
        if error is None:
            self.result_image = image_url
            self.phase = Phase.SUCCEEDED
        else:
            self.error = error
            self.phase = Phase.FAILED

    def _release_source(self) -> None:
        if self.source is not None:
            self.source.release()
            self.source = None

    def _ensure_idle_ui(self, action: str) -> None:
        if self.is_generating:
            raise InvalidTransitionError(f"Cannot {action} while a headshot is generating")
