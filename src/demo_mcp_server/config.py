"""
Server configuration.

Settings come from the process environment, optionally seeded from a `.env`
file. Only `generate_image` needs a credential (HF_TOKEN); its absence is
reported when that tool is called, not at startup.
"""

import logging
import os
from typing import Optional

import dotenv
from pydantic import BaseModel, Field

dotenv.load_dotenv()

DEFAULT_IMAGE_MODEL = "black-forest-labs/FLUX.1-schnell"
DEFAULT_INFERENCE_URL = "https://router.huggingface.co/hf-inference/models"
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


class Settings(BaseModel):
    """Runtime settings resolved from environment variables."""
    hf_token: Optional[str] = Field(None, description="Hugging Face inference API token")
    hf_image_model: str = Field(DEFAULT_IMAGE_MODEL, description="Text-to-image model id")
    hf_inference_url: str = Field(DEFAULT_INFERENCE_URL, description="Inference endpoint base URL")
    hf_timeout_seconds: float = Field(60.0, gt=0, description="HTTP timeout for inference calls")
    log_level: str = Field("INFO", description="Root logging level")
    http_host: str = Field("127.0.0.1", description="Bind host for the HTTP transport")
    http_port: int = Field(8001, ge=1, le=65535, description="Bind port for the HTTP transport")


def get_settings() -> Settings:
    """Build settings from the current environment.

    Read on every call so that tests (and long-lived processes) observe
    environment changes without a restart.
    """
    values = {
        "hf_token": os.getenv("HF_TOKEN") or None,
        "hf_image_model": os.getenv("HF_IMAGE_MODEL"),
        "hf_inference_url": os.getenv("HF_INFERENCE_URL"),
        "hf_timeout_seconds": os.getenv("HF_TIMEOUT_SECONDS"),
        "log_level": os.getenv("LOG_LEVEL"),
        "http_host": os.getenv("MCP_HTTP_HOST"),
        "http_port": os.getenv("MCP_HTTP_PORT"),
    }
    return Settings(**{key: value for key, value in values.items() if value is not None})


def configure_logging(level: Optional[str] = None) -> None:
    """Configure root logging on stderr; stdout carries the stdio transport."""
    logging.basicConfig(
        level=(level or get_settings().log_level).upper(),
        format=LOG_FORMAT,
    )
