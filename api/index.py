import base64
from io import BytesIO
import logging
import os
from pathlib import Path
import sys
import uuid

from fastapi import FastAPI, File, HTTPException, Request, Response, UploadFile
from fastapi.concurrency import run_in_threadpool
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from PIL import Image, UnidentifiedImageError
from pydantic import BaseModel, Field
from starlette.exceptions import HTTPException as StarletteHTTPException

# Ensure local src package is importable in serverless runtime.
ROOT = Path(__file__).resolve().parent.parent
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from product_lens.config import AnalysisConfig  # noqa: E402
from product_lens.core import analyze_with_metadata  # noqa: E402
from product_lens.exceptions import AuthenticationError, ImageError, RateLimitError  # noqa: E402
from product_lens.schema import MergedResult  # noqa: E402

app = FastAPI(title="product-lens API", version="1.0.0")
logger = logging.getLogger(__name__)
ANALYSIS_CONFIG = AnalysisConfig.from_env()

raw_origins = os.getenv("FRONTEND_ORIGINS", "*")
allow_origins = [origin.strip() for origin in raw_origins.split(",") if origin.strip()]
MAX_IMAGE_BYTES = int(os.getenv("MAX_IMAGE_BYTES", str(8 * 1024 * 1024)))
ALLOWED_MIME_TYPES = {"image/jpeg", "image/jpg", "image/png", "image/webp"}

app.add_middleware(
    CORSMiddleware,
    allow_origins=allow_origins,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(StarletteHTTPException)
async def http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})


@app.exception_handler(RequestValidationError)
async def validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(status_code=422, content={"error": jsonable_encoder(exc.errors())})


@app.get("/health")
def health() -> dict[str, bool]:
    return {"ok": True}


class AnalyzeRequest(BaseModel):
    imagesBase64: list[str] = Field(default_factory=list)
    imageBase64: str | None = None


def _validate_payload_size(payload: bytes) -> None:
    if len(payload) > MAX_IMAGE_BYTES:
        raise HTTPException(status_code=413, detail="image too large")


def _validate_multipart_content_type(content_type: str | None) -> None:
    if not content_type:
        raise HTTPException(status_code=400, detail="image file is required")
    normalized = content_type.split(";")[0].strip().lower()
    if normalized not in ALLOWED_MIME_TYPES:
        raise HTTPException(status_code=400, detail="unsupported image content type")


def _decode_base64_image(image_base64: str) -> bytes:
    value = image_base64.strip()
    if not value:
        raise HTTPException(status_code=400, detail="empty file")

    # Support data URL format: data:image/jpeg;base64,<payload>
    if value.startswith("data:"):
        _, sep, value = value.partition(",")
        if not sep:
            raise HTTPException(status_code=400, detail="invalid base64 data URL")

    try:
        payload = base64.b64decode(value, validate=True)
    except Exception as exc:
        raise HTTPException(status_code=400, detail="invalid base64 encoding") from exc

    if not payload:
        raise HTTPException(status_code=400, detail="empty file")
    _validate_payload_size(payload)

    return payload


async def _read_upload(upload: UploadFile) -> bytes:
    _validate_multipart_content_type(upload.content_type)
    payload = await upload.read()
    if not payload:
        raise HTTPException(status_code=400, detail="empty file")
    _validate_payload_size(payload)
    return payload


def _open_image(payload: bytes) -> Image.Image:
    try:
        return Image.open(BytesIO(payload))
    except UnidentifiedImageError as exc:
        raise HTTPException(status_code=400, detail="invalid image format") from exc
    except Image.DecompressionBombError as exc:
        raise HTTPException(status_code=400, detail="image dimensions too large") from exc


@app.post("/analyze", response_model=MergedResult, response_model_exclude_none=True)
async def analyze_product(
    request: Request,
    response: Response,
    images: list[UploadFile] | None = File(default=None),
    image: UploadFile | None = File(default=None),
) -> MergedResult:
    request_id = str(uuid.uuid4())
    response.headers["X-Request-ID"] = request_id
    max_images = ANALYSIS_CONFIG.max_images
    content_type = request.headers.get("content-type", "")

    if content_type.startswith("application/json"):
        try:
            body = AnalyzeRequest.model_validate(await request.json())
        except Exception as exc:
            raise HTTPException(status_code=400, detail="imagesBase64 is required in JSON body") from exc
        encoded = body.imagesBase64 or ([body.imageBase64] if body.imageBase64 else [])
        payloads = [_decode_base64_image(value) for value in encoded[:max_images]]
    else:
        # Plural field first; the singular field is kept for older clients.
        uploads = list(images or [])
        if not uploads and image is not None:
            uploads = [image]
        payloads = [await _read_upload(upload) for upload in uploads[:max_images]]

    if not payloads:
        raise HTTPException(status_code=400, detail="image required")

    pil_images = [_open_image(payload) for payload in payloads]

    try:
        result, metadata = await run_in_threadpool(
            analyze_with_metadata,
            pil_images,
            config=ANALYSIS_CONFIG,
        )
    except AuthenticationError as exc:
        raise HTTPException(status_code=401, detail=str(exc)) from exc
    except RateLimitError as exc:
        raise HTTPException(status_code=429, detail=str(exc)) from exc
    except ImageError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except Exception as exc:
        logger.exception("analyze failed request_id=%s", request_id)
        raise HTTPException(status_code=500, detail=str(exc) or "internal error") from exc

    logger.info("analyze ok request_id=%s metadata=%s", request_id, metadata)
    return result
