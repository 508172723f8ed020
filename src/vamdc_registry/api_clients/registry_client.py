"""Registry Client for the VAMDC resource registry.

Wraps the registry's SOAP query interface in an API suited to VAMDC: a few
named searches by capability, direct lookup by identifier, and helpers that
flatten the returned XML into identifiers or access URLs.

Some assumptions are made about the registry: it answers XQueries, it behaves
like the AstroGrid implementation of the IVOA registry standards, and it holds
few enough registrations that whole result documents fit in memory.
"""

import logging
import warnings
from pathlib import Path
from typing import List, Optional, Set

from lxml import etree

from ..config import ConfigManager, RegistryConfig, resolve_endpoint
from ..constants import TAP_ID, TAP_XSAMS_ID, VAMDC_TAP_ID
from ..exceptions import RegistryError
from ..xml_tools import extract_access_url, extract_identifiers
from ..xquery import (
    identifiers_by_capability_query,
    resources_by_capability_query,
    web_browser_query,
)
from .soap_transport import RegistryCallOptions, RemoteCall, SoapRegistryTransport

logger = logging.getLogger(__name__)


class RegistryClient:
    """Client for querying one registry endpoint.

    A client constructed without an endpoint talks to the registry of the most
    recent VAMDC release. The endpoint is fixed for the client's lifetime.

    Ways of querying:

    - Whole registration documents by capability: ``find_resources_by_capability``,
      ``find_vamdc_tap``, ``find_tap``, ``find_web_interfaces``. The returned
      document holds zero or more ``ri:Resource`` elements as first-level
      children of its root.
    - Access URLs by capability: ``find_access_urls_by_capability``.
    - Custom XQuery: ``execute_xquery``.
    """

    def __init__(
        self,
        endpoint: Optional[str] = None,
        *,
        config: Optional[RegistryConfig] = None,
        transport: Optional[RemoteCall] = None,
    ):
        """Initialize registry client.

        Args:
            endpoint: URL of the registry's SOAP query interface, or one of the
                names "release", "development", "default"
            config: Client configuration; its endpoint is used when ``endpoint``
                is omitted
            transport: Remote-call implementation; a SoapRegistryTransport is
                created (and owned by this client) when omitted
        """
        self.config = config or RegistryConfig()
        self._endpoint = (
            resolve_endpoint(endpoint) if endpoint is not None else self.config.endpoint
        )
        self._call_options = RegistryCallOptions.from_config(self.config)
        self._owns_transport = transport is None
        self._transport: RemoteCall = transport or SoapRegistryTransport(self.config)

    @property
    def endpoint(self) -> str:
        """The registry endpoint all queries are sent to."""
        return self._endpoint

    def execute_xquery(self, query: str) -> etree._ElementTree:
        """Execute the given XQuery and return the results as a document.

        The document has an unspecified root element with the nodes raised by
        the query as first-level children; e.g. if the query returns whole
        registrations, the ``ri:Resource`` elements are the first-level children.

        If the XQuery is invalid (bad syntax, missing namespace declarations)
        or returns no elements, the shape of the result is up to the registry.

        Raises:
            RegistryError: If the registry cannot fulfill the query
        """
        logger.debug(f"Executing XQuery against {self._endpoint}")
        return self._remote("XQuery", self._transport.xquery_search, query)

    def find_resources_by_capability(self, capability_id: str) -> etree._ElementTree:
        """Registration documents of all active services with the given capability.

        Raises:
            RegistryError: If the registry cannot fulfill the query
        """
        return self.execute_xquery(resources_by_capability_query(capability_id))

    def find_vamdc_tap(self) -> etree._ElementTree:
        """Registration documents of all services with a VAMDC-TAP capability."""
        return self.find_resources_by_capability(VAMDC_TAP_ID)

    def find_tap(self) -> etree._ElementTree:
        """Registration documents of all services with a TAP capability."""
        return self.find_resources_by_capability(TAP_ID)

    def find_tap_xsams(self) -> etree._ElementTree:
        """Registration documents of all services with a TAP-XSAMS capability.

        Deprecated: TAP-XSAMS services are registered as VAMDC-TAP; use
        ``find_vamdc_tap`` instead.
        """
        warnings.warn(
            "find_tap_xsams() is deprecated; use find_vamdc_tap() instead",
            DeprecationWarning,
            stacklevel=2,
        )
        logger.warning("Deprecated registry search find_tap_xsams() called")
        return self.find_resources_by_capability(TAP_XSAMS_ID)

    def find_web_interfaces(self) -> etree._ElementTree:
        """Registration documents of all active services with a web-browser interface."""
        return self.execute_xquery(web_browser_query())

    find_web_sites = find_web_interfaces

    def get_resource(self, identifier: str) -> etree._ElementTree:
        """Registration document for the service with the given IVORN.

        Raises:
            RegistryError: If the resource is not registered or the call fails
        """
        logger.debug(f"Fetching resource {identifier} from {self._endpoint}")
        return self._remote("GetResource", self._transport.get_resource, identifier)

    def list_identifiers_by_capability(self, capability_id: str) -> List[str]:
        """IVORNs of active services registered with the given capability.

        Returns:
            Identifiers in document order (never None, may be empty)

        Raises:
            RegistryError: If the registry breaks
        """
        results = self.execute_xquery(identifiers_by_capability_query(capability_id))
        identifiers = extract_identifiers(results)
        logger.debug(
            f"Found {len(identifiers)} service(s) with capability {capability_id}"
        )
        return identifiers

    def find_access_url(self, identifier: str, capability_id: str) -> str:
        """Access URL for the given capability of the service with the given IVORN.

        The first non-empty URL among the interfaces of that capability is
        returned, in document order; all other URLs are ignored.

        Raises:
            RegistryError: If the resource is not registered, has no such
                capability, or the registry cannot fulfill the request
        """
        document = self.get_resource(identifier)
        url = extract_access_url(document, capability_id)
        if url is None:
            raise RegistryError(
                f"Resource {identifier} has no access URL for capability {capability_id}"
            )
        return url

    def find_access_urls_by_capability(self, capability_id: str) -> Set[str]:
        """An access URL for each active service having the given capability.

        Where a capability has several interfaces, or an interface several
        access URLs, only the first is used. One registry call is made per
        service, in document order.

        Raises:
            RegistryError: If the registry cannot fulfill the query
        """
        urls: Set[str] = set()
        for identifier in self.list_identifiers_by_capability(capability_id):
            urls.add(self.find_access_url(identifier, capability_id))
        return urls

    def _remote(self, operation: str, call, argument: str) -> etree._ElementTree:
        try:
            return call(self._endpoint, argument, self._call_options)
        except RegistryError:
            raise
        except Exception as e:
            raise RegistryError(
                f"Unexpected error during {operation} on {self._endpoint}: {e}"
            ) from e

    def close(self) -> None:
        """Close the transport if this client created it."""
        if self._owns_transport and isinstance(self._transport, SoapRegistryTransport):
            self._transport.close()

    def __enter__(self) -> "RegistryClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


def create_registry_client(
    endpoint: Optional[str] = None,
    config_path: Optional[Path] = None,
) -> RegistryClient:
    """Factory function to create a RegistryClient with configuration loading.

    Args:
        endpoint: Registry endpoint URL or well-known name; overrides the
            configured endpoint
        config_path: Optional path to a JSON configuration file

    Returns:
        RegistryClient: Initialized registry client
    """
    config = ConfigManager(config_path).load()
    logger.debug(f"Creating registry client for {endpoint or config.endpoint}")
    return RegistryClient(endpoint, config=config)
