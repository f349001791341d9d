"""
Configuration loader for the gateway client
"""

import logging
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError, field_validator

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://payment.holkee.com"


class GatewayConfig(BaseModel):
    """Remote payment gateway configuration"""

    base_url: str = Field(min_length=1)
    api_key: Optional[str] = None
    upload_root: Optional[Path] = None

    @field_validator("base_url")
    @classmethod
    def _check_base_url(cls, value: str) -> str:
        value = value.strip().rstrip("/")
        if not value.startswith(("http://", "https://")):
            raise ValueError(f"base_url must be an http(s) URL, got {value!r}")
        return value

    @field_validator("api_key")
    @classmethod
    def _blank_key_is_none(cls, value: Optional[str]) -> Optional[str]:
        if value is None or not value.strip():
            return None
        return value.strip()


def load_gateway_config(env_file: Optional[Path] = None) -> GatewayConfig:
    """
    Load and validate gateway configuration from the environment

    Args:
        env_file: Optional .env file. Defaults to python-dotenv's lookup.

    Returns:
        Validated GatewayConfig object

    Raises:
        ValidationError: If the environment does not describe a usable gateway
    """
    load_dotenv(dotenv_path=env_file)

    config_data = {
        "base_url": os.getenv("PAYGATE_API_URL", DEFAULT_BASE_URL),
        "api_key": os.getenv("PAYGATE_API_KEY"),
        "upload_root": os.getenv("PAYGATE_UPLOAD_ROOT") or None,
    }

    try:
        config = GatewayConfig(**config_data)
        logger.info("Loaded gateway config for %s", config.base_url)
        return config
    except ValidationError as e:
        logger.error(f"Gateway config validation failed: {e}")
        raise
