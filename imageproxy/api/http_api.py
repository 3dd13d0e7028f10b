"""
HTTP API adapter for the image generation proxy.

Architectural role:
- Expose the image generation endpoint and model discovery over HTTP.
- Enforce transport-level concerns: CORS, method gate, body parsing.
- Delegate generation work to `imageproxy.image.service.generate_image`.
- Translate `GenerationResult` values into JSON responses.

Endpoint responsibilities:
- `GET /api/models`: list configured model ids and their presets.
- `POST /api/generate-image`: validate input, generate, return a data URL.
- `OPTIONS /api/generate-image`: CORS preflight, empty 200 response.

API request lifecycle (`POST /api/generate-image`):
1. Parse the JSON body (`prompt`, `modelId`).
2. Hand the fields to the service pipeline in a worker thread.
3. Serialize the resulting status and body with CORS headers.

Error handling strategy:
- Any method besides POST/OPTIONS returns 405 before the body is read.
- A body that is not a JSON object is treated as having no fields.
- Every exception past the method gate is logged and returned as HTTP 500
  with the exception message; nothing escapes to FastAPI's default handler.

Side effects:
- One outbound HTTP call per valid request (inside the service layer).
- Emits request tracing logs only when `DEBUG == "true"`.
"""

import logging

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel
from starlette.concurrency import run_in_threadpool

from imageproxy.config import Settings, load_settings
from imageproxy.image.models import IMAGE_MODELS
from imageproxy.image.service import generate_image

logger = logging.getLogger(__name__)

app = FastAPI(title="Image Generation Proxy", version="0.1.0")

GENERATE_IMAGE_PATH = "/api/generate-image"

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
    "Content-Type": "application/json",
}

GENERIC_ERROR = "Failed to generate image"


# ============================================================
# Request / Response Schemas
# ============================================================

class GenerateImageRequest(BaseModel):
    """Inbound payload. Unknown fields are ignored, so presets cannot be overridden."""
    prompt: str | None = None
    modelId: str | None = None


class GenerateImageResponse(BaseModel):
    imageUrl: str


class ErrorResponse(BaseModel):
    error: str


def json_response(status_code: int, content: dict) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=content, headers=CORS_HEADERS)


async def parse_generate_request(request: Request) -> GenerateImageRequest:
    """
    Read the request body into `GenerateImageRequest`.

    Malformed JSON and non-object bodies collapse to an empty request so the
    service reports the missing fields. Fields are checked one at a time: a
    non-string `prompt` counts as missing, while a non-empty non-string
    `modelId` is stringified so it is reported as an invalid id.
    """
    try:
        body = await request.json()
    except ValueError:
        return GenerateImageRequest()

    if not isinstance(body, dict):
        return GenerateImageRequest()

    prompt = body.get("prompt")
    if not isinstance(prompt, str):
        prompt = None

    model_id = body.get("modelId")
    if not isinstance(model_id, str):
        model_id = str(model_id) if model_id else None

    return GenerateImageRequest(prompt=prompt, modelId=model_id)


# ============================================================
# Model Listing
# ============================================================

@app.get("/api/models")
def list_models():
    """Return configured models in table order as OpenAI-style metadata."""
    return json_response(
        200,
        {
            "object": "list",
            "data": [
                {
                    "id": model.model_id,
                    "object": "model",
                    "upstream_model": model.upstream_model,
                    "parameters": model.parameters.as_payload(),
                }
                for model in IMAGE_MODELS.values()
            ],
        },
    )


# ============================================================
# Image Generation
# ============================================================

@app.api_route(
    GENERATE_IMAGE_PATH,
    methods=["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    responses={
        200: {"model": GenerateImageResponse},
        400: {"model": ErrorResponse},
        405: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def generate_image_endpoint(request: Request, settings: Settings = Depends(load_settings)):
    """
    Image generation endpoint.

    Input validation behavior:
    - Missing `prompt` -> HTTP 400.
    - Missing `modelId` -> HTTP 400 unless a default model is configured.
    - Unknown `modelId` -> HTTP 400 naming the id.

    Error handling strategy:
    - Missing credential and upstream failures -> HTTP 500 from the service.
    - Unexpected exceptions -> HTTP 500 with the exception message.
    """
    if request.method == "OPTIONS":
        return Response(status_code=200, headers=CORS_HEADERS)

    if request.method != "POST":
        return json_response(405, {"error": "Method not allowed"})

    try:
        payload = await parse_generate_request(request)

        if settings.debug:
            logger.info("Generate request: modelId=%r prompt=%r", payload.modelId, payload.prompt)

        result = await run_in_threadpool(
            generate_image,
            payload.prompt,
            payload.modelId,
            settings,
        )

        if settings.debug:
            logger.info("Generate result: status=%s", result.status_code)

        return json_response(result.status_code, result.body)

    except Exception as exc:
        logger.exception("Image generation error")
        return json_response(500, {"error": str(exc) or GENERIC_ERROR})
