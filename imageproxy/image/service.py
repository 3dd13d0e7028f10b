"""Image generation pipeline shared by the HTTP and CLI adapters.

Role in pipeline:
    validate input -> check credential -> resolve model -> call upstream ->
    translate the upstream result into a `GenerationResult`.

Every early exit returns a `GenerationResult` with the matching HTTP status, so
adapters only have to serialize it. Client input problems are detected before
the credential is consulted and before any outbound call is made.

Error handling strategy:
    - Input, configuration, and upstream failures are returned as values.
    - Transport exceptions from the client propagate; adapters catch them at
      their outer boundary.

MIME type:
    The data URL always declares `IMAGE_MIME_TYPE`. The upstream `Content-Type`
    is not consulted, so a PNG or WebP response is still labeled JPEG.
"""

import base64
import logging

from imageproxy.config import Settings
from imageproxy.image.client import send_inference_request
from imageproxy.image.models import resolve_model
from imageproxy.image.types import GenerationResult, UpstreamFailure

logger = logging.getLogger(__name__)

IMAGE_MIME_TYPE = "image/jpeg"

MISSING_FIELDS_ERROR = "Missing prompt or modelId in request body"
MISSING_PROMPT_ERROR = "Missing prompt in request body"
MISSING_API_KEY_ERROR = "Hugging Face API key not configured"
INVALID_DEFAULT_MODEL_ERROR = "Default image model ID not configured correctly"


def to_data_url(content: bytes, mime_type: str = IMAGE_MIME_TYPE) -> str:
    """Embed raw bytes in a base64 `data:` URI."""
    encoded = base64.b64encode(content).decode("ascii")
    return f"data:{mime_type};base64,{encoded}"


def generate_image(prompt: str | None, model_id: str | None, settings: Settings) -> GenerationResult:
    """Run one generation attempt.

    Args:
        prompt: User prompt; empty or missing values are rejected.
        model_id: Logical model id. Falls back to `settings.default_model_id`
            when the deployment runs a single static model.
        settings: Configuration snapshot for this request.

    Returns:
        `GenerationResult` with status 200 and `imageUrl`, 400 for invalid
        input, or 500 for configuration and upstream failures.
    """
    from_default = False
    if settings.model_id_required:
        if not prompt or not model_id:
            return GenerationResult.error(400, MISSING_FIELDS_ERROR)
    else:
        if not prompt:
            return GenerationResult.error(400, MISSING_PROMPT_ERROR)
        if not model_id:
            model_id = settings.default_model_id
            from_default = True

    if not settings.api_key:
        logger.error("Upstream credential is not configured")
        return GenerationResult.error(500, MISSING_API_KEY_ERROR)

    model = resolve_model(model_id)
    if model is None:
        # An unknown default is a deployment fault, not a client one.
        if from_default:
            logger.error("Default image model ID does not resolve: %s", model_id)
            return GenerationResult.error(500, f"{INVALID_DEFAULT_MODEL_ERROR}: {model_id}")
        return GenerationResult.error(400, f"Invalid image model ID: {model_id}")

    outcome = send_inference_request(
        prompt,
        model,
        api_key=settings.api_key,
        base_url=settings.inference_base_url,
    )

    if isinstance(outcome, UpstreamFailure):
        logger.error(
            "HF API Error for %s (status %s): %s",
            model_id,
            outcome.status_code,
            outcome.message,
        )
        return GenerationResult.error(500, outcome.message)

    return GenerationResult(status_code=200, body={"imageUrl": to_data_url(outcome.content)})
