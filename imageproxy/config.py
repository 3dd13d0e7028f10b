"""Runtime configuration for the image proxy.

Architectural role:
    Centralizes credential lookup and endpoint configuration consumed by
    `imageproxy.image.service` and the API adapters.

Resolution:
    `load_dotenv()` runs at import time so a local `.env` file can seed the
    process environment. `load_settings()` then reads the environment on every
    call, which lets the credential be rotated without restarting the process.

Failure behavior:
    A missing credential is represented as `None`. The generation pipeline turns
    it into a configuration error response; nothing here raises.
"""

import logging
import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()

API_KEY_ENV = "HUGGINGFACE_API_KEY"
DEFAULT_MODEL_ENV = "DEFAULT_IMAGE_MODEL_ID"
BASE_URL_ENV = "HF_INFERENCE_BASE_URL"

HF_INFERENCE_BASE_URL = "https://api-inference.huggingface.co/models"

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@dataclass(frozen=True)
class Settings:
    """Immutable per-request view of process configuration.

    Attributes:
        api_key: Bearer credential for the upstream API, or `None` when unset.
        inference_base_url: Prefix joined with the upstream model path.
        default_model_id: When set, requests may omit `modelId` and this id is
            used instead (single-model deployments).
        debug: Enables request tracing logs in the HTTP adapter.
    """

    api_key: str | None = None
    inference_base_url: str = HF_INFERENCE_BASE_URL
    default_model_id: str | None = None
    debug: bool = False

    @property
    def model_id_required(self) -> bool:
        return self.default_model_id is None


def load_settings() -> Settings:
    """Build `Settings` from the current process environment.

    Empty strings are treated the same as unset variables.
    """
    return Settings(
        api_key=os.getenv(API_KEY_ENV) or None,
        inference_base_url=(os.getenv(BASE_URL_ENV) or HF_INFERENCE_BASE_URL).rstrip("/"),
        default_model_id=os.getenv(DEFAULT_MODEL_ENV) or None,
        debug=os.getenv("DEBUG") == "true",
    )


def configure_logging(level: str | None = None) -> None:
    """Apply root logging configuration from `LOG_LEVEL` (default `INFO`)."""
    level_name = (level or os.getenv("LOG_LEVEL") or "INFO").upper()
    logging.basicConfig(level=getattr(logging, level_name, logging.INFO), format=LOG_FORMAT)
