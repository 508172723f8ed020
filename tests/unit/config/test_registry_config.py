"""Unit tests for registry client configuration."""

import json
import re
from pathlib import Path

import pytest
from pydantic import ValidationError

from vamdc_registry.config import (
    ENDPOINT_ENV_VAR,
    ConfigManager,
    RegistryConfig,
    resolve_endpoint,
)
from vamdc_registry.constants import (
    DEFAULT_REGISTRY_ENDPOINT,
    DEVELOPMENT_REGISTRY_ENDPOINT,
    RELEASE_REGISTRY_ENDPOINT,
)


class TestResolveEndpoint:
    """Named endpoints and explicit URLs."""

    @pytest.mark.parametrize(
        "name, expected",
        [
            ("release", RELEASE_REGISTRY_ENDPOINT),
            ("development", DEVELOPMENT_REGISTRY_ENDPOINT),
            ("default", DEFAULT_REGISTRY_ENDPOINT),
            ("Development", DEVELOPMENT_REGISTRY_ENDPOINT),
        ],
    )
    def test_named_endpoints(self, name, expected):
        assert resolve_endpoint(name) == expected

    def test_url_is_returned_unchanged(self):
        url = "https://registry.example.org/services/RegistryQueryv1_0"
        assert resolve_endpoint(url) == url

    def test_non_http_value_is_rejected(self):
        with pytest.raises(ValueError, match="http"):
            resolve_endpoint("ftp://registry.example.org")


class TestRegistryConfig:
    """Defaults and validation of RegistryConfig."""

    def test_defaults(self):
        config = RegistryConfig()

        assert config.endpoint == RELEASE_REGISTRY_ENDPOINT
        assert config.timeout == 30.0
        assert config.verify_ssl is True
        assert config.return_soap_body is True

    def test_named_endpoint_is_resolved(self):
        assert RegistryConfig(endpoint="development").endpoint == DEVELOPMENT_REGISTRY_ENDPOINT

    def test_invalid_endpoint_raises_validation_error(self):
        with pytest.raises(ValidationError):
            RegistryConfig(endpoint="not a url")

    def test_non_positive_timeout_is_rejected(self):
        with pytest.raises(ValidationError):
            RegistryConfig(timeout=0)


class TestConfigManager:
    """Loading configuration from JSON and the environment."""

    def test_missing_file_gives_defaults(self, tmp_path: Path, monkeypatch):
        monkeypatch.delenv(ENDPOINT_ENV_VAR, raising=False)

        config = ConfigManager(tmp_path / "config.json").load()

        assert config == RegistryConfig()

    def test_loads_json_file(self, tmp_path: Path, monkeypatch):
        monkeypatch.delenv(ENDPOINT_ENV_VAR, raising=False)
        config_path = tmp_path / "config.json"
        config_path.write_text(json.dumps({"endpoint": "development", "timeout": 5}))

        config = ConfigManager(config_path).load()

        assert config.endpoint == DEVELOPMENT_REGISTRY_ENDPOINT
        assert config.timeout == 5.0

    def test_environment_overrides_file(self, tmp_path: Path, monkeypatch):
        config_path = tmp_path / "config.json"
        config_path.write_text(json.dumps({"endpoint": "development"}))
        monkeypatch.setenv(ENDPOINT_ENV_VAR, "http://registry.test/q")

        config = ConfigManager(config_path).load()

        assert config.endpoint == "http://registry.test/q"

    def test_invalid_json_names_the_file(self, tmp_path: Path):
        config_path = tmp_path / "config.json"
        config_path.write_text("{not json")

        with pytest.raises(ValueError, match=re.escape(str(config_path))):
            ConfigManager(config_path).load()

    def test_get_config_loads_once(self, tmp_path: Path, monkeypatch):
        monkeypatch.delenv(ENDPOINT_ENV_VAR, raising=False)
        manager = ConfigManager(tmp_path / "config.json")

        assert manager.get_config() is manager.get_config()
