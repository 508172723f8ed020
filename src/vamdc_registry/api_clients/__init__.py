"""API Client Abstractions for the VAMDC registry.

The SOAP transport is the only place that talks HTTP; RegistryClient builds
queries and flattens results on top of it.
"""

from .network_error_handler import NetworkErrorHandler, UserGuidance
from .registry_client import RegistryClient, create_registry_client
from .soap_transport import (
    RegistryCallOptions,
    RemoteCall,
    SOAPFaultInfo,
    SoapRegistryTransport,
    parse_soap_fault,
)

__all__ = [
    # Registry client
    "RegistryClient",
    "create_registry_client",
    # SOAP transport
    "RegistryCallOptions",
    "RemoteCall",
    "SOAPFaultInfo",
    "SoapRegistryTransport",
    "parse_soap_fault",
    # Network error handling
    "NetworkErrorHandler",
    "UserGuidance",
]
