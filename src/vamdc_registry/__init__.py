"""VAMDC Registry Client - search the VAMDC resource registry over SOAP/XQuery."""

__version__ = "1.0.0"

from .api_clients import (
    RegistryCallOptions,
    RegistryClient,
    SoapRegistryTransport,
    create_registry_client,
)
from .config import ConfigManager, RegistryConfig
from .constants import (
    DEFAULT_REGISTRY_ENDPOINT,
    DEVELOPMENT_REGISTRY_ENDPOINT,
    RELEASE_REGISTRY_ENDPOINT,
    TAP_ID,
    TAP_XSAMS_ID,
    VAMDC_TAP_ID,
)
from .exceptions import RegistryError
from .xml_tools import serialize_to_stdout

__all__ = [
    "RegistryClient",
    "create_registry_client",
    "RegistryCallOptions",
    "SoapRegistryTransport",
    "RegistryConfig",
    "ConfigManager",
    "RegistryError",
    "serialize_to_stdout",
    "DEFAULT_REGISTRY_ENDPOINT",
    "DEVELOPMENT_REGISTRY_ENDPOINT",
    "RELEASE_REGISTRY_ENDPOINT",
    "TAP_ID",
    "TAP_XSAMS_ID",
    "VAMDC_TAP_ID",
]
