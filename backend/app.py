# backend/app.py

from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, File, Form, Request, UploadFile
from fastapi.responses import JSONResponse

from config.settings import settings
from .encoder import encode_upload
from .errors import HeadshotError, InvalidImageError, UnknownGenerationError
from .gemini_client import HeadshotGenerator
from .model import ErrorResponse, HealthResponse, HeadshotResponse
from .prompt_builder import build_headshot_prompt
from .utils import is_image_mime, split_data_uri

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    422: {"model": ErrorResponse},
    502: {"model": ErrorResponse},
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Missing API key -> MissingApiKeyError -> startup aborts
    app.state.generator = HeadshotGenerator.from_settings(settings)
    print(f"[API] Headshot generator ready, model={app.state.generator.model}")
    yield


app = FastAPI(title="AI Headshot Service", lifespan=lifespan)


def get_generator(request: Request) -> HeadshotGenerator:
    return request.app.state.generator


@app.exception_handler(HeadshotError)
async def headshot_error_handler(request: Request, exc: HeadshotError):
    print(f"[API] {exc.kind}: {exc.message}")
    body = ErrorResponse(detail=exc.message, kind=exc.kind)
    return JSONResponse(status_code=exc.status_code, content=body.model_dump())


@app.get("/health", response_model=HealthResponse)
async def health():
    return HealthResponse()


@app.post("/generate", response_model=HeadshotResponse, responses=ERROR_RESPONSES)
async def generate(
    image: UploadFile = File(...),
    instructions: str = Form(""),
    generator: HeadshotGenerator = Depends(get_generator),
):
    """
    Turn the uploaded photo into a studio headshot.
    One model call per request, no retries.
    """
    mime_type = image.content_type
    if not is_image_mime(mime_type):
        raise InvalidImageError()

    encoded = await encode_upload(image)
    prompt = build_headshot_prompt(instructions)

    image_url = await generator.generate(encoded, mime_type, prompt)
    try:
        result_mime, _ = split_data_uri(image_url)
    except ValueError as e:
        print(f"[API] Generator returned a malformed data URI: {e}")
        raise UnknownGenerationError() from e

    return HeadshotResponse(image_url=image_url, mime_type=result_mime)
