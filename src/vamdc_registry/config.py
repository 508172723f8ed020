"""Configuration management for the VAMDC registry client."""

import json
import logging
import os
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

from .constants import DEFAULT_REGISTRY_ENDPOINT, NAMED_ENDPOINTS

logger = logging.getLogger(__name__)

ENDPOINT_ENV_VAR = "VAMDC_REGISTRY_ENDPOINT"


def resolve_endpoint(endpoint: str) -> str:
    """Turn a named endpoint ("release", "development", "default") into its URL.

    Any other value must be an http(s) URL and is returned unchanged.

    Raises:
        ValueError: If the value is neither a known name nor an http(s) URL
    """
    name = endpoint.strip()
    if name.lower() in NAMED_ENDPOINTS:
        return NAMED_ENDPOINTS[name.lower()]
    if not name.startswith(("http://", "https://")):
        raise ValueError(
            f"Registry endpoint must be an http(s) URL or one of "
            f"{sorted(NAMED_ENDPOINTS)}, got: {endpoint!r}"
        )
    return name


class RegistryConfig(BaseModel):
    """Configuration for talking to a registry's SOAP query interface."""

    endpoint: str = Field(
        default=DEFAULT_REGISTRY_ENDPOINT,
        description="URL (or well-known name) of the registry query endpoint",
    )
    timeout: float = Field(
        default=30.0, gt=0, description="Request timeout in seconds"
    )
    verify_ssl: bool = Field(
        default=True, description="Verify TLS certificates of https endpoints"
    )
    # Matches the AstroGrid client's "return.soapbody" behaviour
    return_soap_body: bool = Field(
        default=True,
        description="Return only the SOAP body payload instead of the full envelope",
    )

    @field_validator("endpoint", mode="before")
    @classmethod
    def normalize_endpoint(cls, v: Any) -> str:
        """Resolve well-known endpoint names to URLs."""
        if not isinstance(v, str):
            raise ValueError(f"Expected str, got {type(v)}")
        return resolve_endpoint(v)


class ConfigManager:
    """Loads registry client configuration from disk and the environment."""

    DEFAULT_CONFIG_PATH = Path(".vamdc-registry/config.json")

    def __init__(self, config_path: Optional[Path] = None):
        self.config_path = config_path or self.DEFAULT_CONFIG_PATH
        self._config: Optional[RegistryConfig] = None

    def load(self) -> RegistryConfig:
        """Load configuration from file or create default, then apply env overrides."""
        data: dict = {}
        if self.config_path.exists():
            try:
                with open(self.config_path, "r") as f:
                    data = json.load(f)
                if not isinstance(data, dict):
                    raise ValueError("top-level JSON value must be an object")
            except Exception as e:
                raise ValueError(f"Failed to load config from {self.config_path}: {e}")
            logger.debug(f"Loaded registry config from {self.config_path}")

        env_endpoint = os.environ.get(ENDPOINT_ENV_VAR)
        if env_endpoint:
            logger.debug(f"Registry endpoint overridden by {ENDPOINT_ENV_VAR}")
            data["endpoint"] = env_endpoint

        self._config = RegistryConfig(**data)
        return self._config

    def get_config(self) -> RegistryConfig:
        """Get current configuration, loading if necessary."""
        if self._config is None:
            return self.load()
        return self._config
