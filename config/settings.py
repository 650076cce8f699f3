import os
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables from config/.env
BASE_DIR = Path(__file__).resolve().parent
load_dotenv(BASE_DIR / ".env")


def _optional_float(name: str) -> float | None:
    value = os.getenv(name)
    if not value:
        return None
    return float(value)


class Settings:
    # Gemini credential; the backend refuses to start without it
    API_KEY: str | None = os.getenv("API_KEY") or os.getenv("GEMINI_API_KEY")
    GEMINI_MODEL: str = os.getenv("GEMINI_MODEL", "gemini-2.5-flash-image")

    BACKEND_URL: str = os.getenv("BACKEND_URL", "http://127.0.0.1:8000")
    # None = wait as long as the network layer allows
    GENERATE_TIMEOUT: float | None = _optional_float("GENERATE_TIMEOUT")

    STATUS_INTERVAL: float = 3.0  # seconds
    DOWNLOAD_FILENAME: str = "ai-headshot.jpg"

settings = Settings()
