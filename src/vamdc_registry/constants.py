"""Well-known identifiers, endpoints and namespaces for the VAMDC registry."""

from typing import Dict

# Standard identifiers for the classes of services of interest.
TAP_XSAMS_ID = "ivo://vamdc/std/TAP-XSAMS"
VAMDC_TAP_ID = "ivo://vamdc/std/VAMDC-TAP"
TAP_ID = "ivo://ivoa.net/std/TAP"

# SOAP query interface of the registry for the level-1 release.
RELEASE_REGISTRY_ENDPOINT = (
    "http://registry.vamdc.eu/vamdc_registry/services/RegistryQueryv1_0"
)

# SOAP query interface of the development registry.
DEVELOPMENT_REGISTRY_ENDPOINT = (
    "http://casx019-zone1.ast.cam.ac.uk/registry/services/RegistryQueryv1_0"
)

# Used by a client constructed without an explicit endpoint.
DEFAULT_REGISTRY_ENDPOINT = RELEASE_REGISTRY_ENDPOINT

NAMED_ENDPOINTS: Dict[str, str] = {
    "release": RELEASE_REGISTRY_ENDPOINT,
    "development": DEVELOPMENT_REGISTRY_ENDPOINT,
    "default": DEFAULT_REGISTRY_ENDPOINT,
}

# Registry content namespaces
RI_NS = "http://www.ivoa.net/xml/RegistryInterface/v1.0"
VR_NS = "http://www.ivoa.net/xml/VOResource/v1.0"
XSI_NS = "http://www.w3.org/2001/XMLSchema-instance"

# Query interface namespace (IVOA RegistrySearch WSDL)
REGISTRY_SEARCH_NS = "http://www.ivoa.net/wsdl/RegistrySearch/v1.0"

# SOAP namespaces
SOAP_11_NS = "http://schemas.xmlsoap.org/soap/envelope/"
SOAP_12_NS = "http://www.w3.org/2003/05/soap-envelope"
