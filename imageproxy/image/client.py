"""Hugging Face inference HTTP client.

Processing flow:
    1. Build the JSON payload from the prompt and the model's parameter preset.
    2. Submit it to the model endpoint with the bearer credential.
    3. Return the raw image bytes, or a failure value on non-2xx status.

Retry behavior:
    No retry loop is implemented. Each call is attempted exactly once and uses
    the `requests` default (no timeout), so latency follows the remote job.

Error handling strategy:
    - Non-2xx responses are returned as `UpstreamFailure`, never raised.
    - Error bodies that are not JSON objects fall back to a status-code message.
    - Transport exceptions from `requests` propagate to the caller.

Security considerations:
    - Upstream error messages are passed through to API callers unchanged.
"""

import requests

from imageproxy.image.models import ModelConfig
from imageproxy.image.types import UpstreamFailure, UpstreamSuccess


def build_payload(prompt: str, model: ModelConfig) -> dict:
    """Assemble the inference request body for `model`."""
    return {
        "inputs": prompt,
        "parameters": model.parameters.as_payload(),
    }


def _error_message(response: requests.Response) -> str:
    try:
        error_data = response.json()
    except ValueError:
        error_data = {}
    if not isinstance(error_data, dict):
        error_data = {}

    error = error_data.get("error")
    # Some backends report a list of validation errors.
    if isinstance(error, list):
        error = ", ".join(str(item) for item in error)
    if error:
        return str(error)
    return f"Image generation failed with status: {response.status_code}"


def send_inference_request(
    prompt: str,
    model: ModelConfig,
    api_key: str,
    base_url: str,
) -> UpstreamSuccess | UpstreamFailure:
    """Send one text-to-image request to the upstream inference API.

    Args:
        prompt: User prompt forwarded as `inputs`.
        model: Resolved model entry; supplies endpoint and parameter preset.
        api_key: Bearer credential for the upstream API.
        base_url: Endpoint prefix joined with the upstream model path.

    Returns:
        `UpstreamSuccess` with raw response bytes for 2xx responses, otherwise
        `UpstreamFailure` carrying the status and the best available message.
    """
    headers = {
        "Authorization": f"Bearer {api_key}",
        "Content-Type": "application/json",
    }

    response = requests.post(
        model.endpoint_url(base_url),
        json=build_payload(prompt, model),
        headers=headers,
    )

    if not 200 <= response.status_code < 300:
        return UpstreamFailure(
            status_code=response.status_code,
            message=_error_message(response),
        )

    return UpstreamSuccess(content=response.content)
