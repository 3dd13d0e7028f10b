"""Static model table for the image proxy.

Each logical model id maps to one upstream Hugging Face model path and a fixed
parameter preset. Presets are tuned per model and are not user-overridable.

The table is built once at import time and exposed through a read-only mapping,
so it can be shared across concurrent requests without locking.
"""

from dataclasses import dataclass
from types import MappingProxyType


@dataclass(frozen=True)
class InferenceParameters:
    """Inference-tuning values forwarded to the upstream `parameters` field."""

    num_inference_steps: int
    guidance_scale: float
    negative_prompt: str

    def as_payload(self) -> dict:
        return {
            "num_inference_steps": self.num_inference_steps,
            "guidance_scale": self.guidance_scale,
            "negative_prompt": self.negative_prompt,
        }


@dataclass(frozen=True)
class ModelConfig:
    """Upstream target and preset for one logical model id."""

    model_id: str
    upstream_model: str
    parameters: InferenceParameters

    def endpoint_url(self, base_url: str) -> str:
        return f"{base_url}/{self.upstream_model}"


_MODELS = (
    # Turbo is distilled for few steps and no classifier-free guidance.
    ModelConfig(
        model_id="hf-z-image-turbo",
        upstream_model="Tongyi-MAI/Z-Image-Turbo",
        parameters=InferenceParameters(
            num_inference_steps=9,
            guidance_scale=0.0,
            negative_prompt="blurry, low quality, distorted, bad text, watermark",
        ),
    ),
    ModelConfig(
        model_id="hf-sdxl-base",
        upstream_model="stabilityai/stable-diffusion-xl-base-1.0",
        parameters=InferenceParameters(
            num_inference_steps=30,
            guidance_scale=7.5,
            negative_prompt="blurry, low quality, distorted, bad anatomy",
        ),
    ),
)

IMAGE_MODELS = MappingProxyType({model.model_id: model for model in _MODELS})


def resolve_model(model_id: str) -> ModelConfig | None:
    """Return the configuration for `model_id`, or `None` when unknown."""
    return IMAGE_MODELS.get(model_id)
