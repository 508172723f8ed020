"""SOAP transport for the registry query interface.

Implements the two remote operations the client needs from an IVOA
RegistrySearch v1.0 service (as deployed by AstroGrid): ``XQuerySearch`` and
``GetResource``. Requests are SOAP 1.1 envelopes posted with httpx; responses
are parsed with lxml and either returned as a document or turned into a
RegistryError.
"""

import copy
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Protocol

import httpx
from lxml import etree

from ..config import RegistryConfig
from ..constants import REGISTRY_SEARCH_NS, SOAP_11_NS, SOAP_12_NS
from ..exceptions import RegistryError
from ..xml_tools import find_elements, local_name
from .network_error_handler import NetworkErrorHandler

logger = logging.getLogger(__name__)

XQUERY_SEARCH = "XQuerySearch"
GET_RESOURCE = "GetResource"


@dataclass
class SOAPFaultInfo:
    """Parsed SOAP fault information.

    Attributes:
        fault_code: SOAP fault code (e.g., "soapenv:Server")
        fault_string: Human-readable fault message
        fault_detail: Optional detailed fault information
        fault_actor: Optional fault actor/role
        subcodes: Optional list of fault subcodes (SOAP 1.2 only)
    """

    fault_code: str
    fault_string: str
    fault_detail: Optional[str] = None
    fault_actor: Optional[str] = None
    subcodes: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class RegistryCallOptions:
    """Settings passed explicitly with every remote call.

    Attributes:
        return_soap_body: Return the SOAP body payload as the document root
            instead of the whole envelope
        timeout: Per-call timeout in seconds; None uses the transport default
    """

    return_soap_body: bool = True
    timeout: Optional[float] = None

    @classmethod
    def from_config(cls, config: RegistryConfig) -> "RegistryCallOptions":
        return cls(return_soap_body=config.return_soap_body, timeout=config.timeout)


class RemoteCall(Protocol):
    """The remote operations a RegistryClient relies on."""

    def xquery_search(
        self, endpoint: str, query: str, options: RegistryCallOptions
    ) -> etree._ElementTree: ...

    def get_resource(
        self, endpoint: str, identifier: str, options: RegistryCallOptions
    ) -> etree._ElementTree: ...


def build_request_envelope(operation: str, parameter: str, value: str) -> bytes:
    """Build a SOAP 1.1 request for a single-parameter RegistrySearch operation."""
    envelope = etree.Element(
        f"{{{SOAP_11_NS}}}Envelope", nsmap={"soapenv": SOAP_11_NS, "rs": REGISTRY_SEARCH_NS}
    )
    body = etree.SubElement(envelope, f"{{{SOAP_11_NS}}}Body")
    request = etree.SubElement(body, f"{{{REGISTRY_SEARCH_NS}}}{operation}")
    etree.SubElement(request, f"{{{REGISTRY_SEARCH_NS}}}{parameter}").text = value
    return etree.tostring(envelope, xml_declaration=True, encoding="UTF-8")


def _detail_text(detail_elem: Optional[etree._Element]) -> Optional[str]:
    if detail_elem is None:
        return None
    if detail_elem.text and detail_elem.text.strip():
        return detail_elem.text.strip()
    detail_parts = []
    for child in detail_elem.iter():
        if child is not detail_elem and child.text and child.text.strip():
            detail_parts.append(child.text.strip())
    return "; ".join(detail_parts) or None


def parse_soap_fault(root: etree._Element) -> Optional[SOAPFaultInfo]:
    """Extract fault information from a SOAP 1.2 or 1.1 envelope.

    Returns:
        SOAPFaultInfo when the envelope carries a Fault, otherwise None
    """
    fault_elem = root.find(f".//{{{SOAP_12_NS}}}Fault")
    if fault_elem is not None:
        code_elem = fault_elem.find(f"{{{SOAP_12_NS}}}Code/{{{SOAP_12_NS}}}Value")
        reason_elem = fault_elem.find(f"{{{SOAP_12_NS}}}Reason/{{{SOAP_12_NS}}}Text")
        role_elem = fault_elem.find(f"{{{SOAP_12_NS}}}Role")
        subcodes = [
            el.text
            for el in fault_elem.findall(f".//{{{SOAP_12_NS}}}Subcode/{{{SOAP_12_NS}}}Value")
            if el.text
        ]
        return SOAPFaultInfo(
            fault_code=code_elem.text if code_elem is not None else "Unknown",
            fault_string=(
                reason_elem.text if reason_elem is not None else "No fault message provided"
            ),
            fault_detail=_detail_text(fault_elem.find(f"{{{SOAP_12_NS}}}Detail")),
            fault_actor=role_elem.text if role_elem is not None else None,
            subcodes=subcodes,
        )

    fault_elem = root.find(f".//{{{SOAP_11_NS}}}Fault")
    if fault_elem is None:
        return None

    # SOAP 1.1 fault children are unqualified
    faultcode_elem = fault_elem.find("faultcode")
    faultstring_elem = fault_elem.find("faultstring")
    faultactor_elem = fault_elem.find("faultactor")
    return SOAPFaultInfo(
        fault_code=faultcode_elem.text if faultcode_elem is not None else "Unknown",
        fault_string=(
            faultstring_elem.text
            if faultstring_elem is not None and faultstring_elem.text
            else "No fault message provided"
        ),
        fault_detail=_detail_text(fault_elem.find("detail")),
        fault_actor=faultactor_elem.text if faultactor_elem is not None else None,
    )


class SoapRegistryTransport:
    """Sends RegistrySearch SOAP requests to a registry endpoint over httpx."""

    def __init__(
        self,
        config: Optional[RegistryConfig] = None,
        http_client: Optional[httpx.Client] = None,
    ):
        """Initialize the transport.

        Args:
            config: Timeout and TLS settings; defaults are used when omitted
            http_client: Pre-built httpx client (owned by the caller)
        """
        self.config = config or RegistryConfig()
        self._session: Optional[httpx.Client] = http_client
        self._owns_session = http_client is None
        self._network_error_handler = NetworkErrorHandler()

    @property
    def session(self) -> httpx.Client:
        """Get or create the HTTP session.

        A session created here is replaced when closed. A client supplied by
        the caller is never replaced.

        Raises:
            RegistryError: If the caller's client has been closed
        """
        if not self._owns_session and self._session.is_closed:
            raise RegistryError(
                "HTTP client supplied to the registry transport is closed"
            )
        if self._session is None or self._session.is_closed:
            self._session = httpx.Client(
                timeout=self.config.timeout,
                verify=self.config.verify_ssl,
                follow_redirects=True,
            )
            self._owns_session = True
        return self._session

    def xquery_search(
        self, endpoint: str, query: str, options: RegistryCallOptions
    ) -> etree._ElementTree:
        """Run an XQuery on the registry.

        The root of the returned document has the query's results as its
        first-level children; it exists even when nothing matched.

        Raises:
            RegistryError: If the registry cannot fulfill the query
        """
        return self._call(endpoint, XQUERY_SEARCH, "xquery", query, options)

    def get_resource(
        self, endpoint: str, identifier: str, options: RegistryCallOptions
    ) -> etree._ElementTree:
        """Fetch the registration document for one identifier.

        Raises:
            RegistryError: If the identifier is not registered or the call fails
        """
        document = self._call(endpoint, GET_RESOURCE, "identifier", identifier, options)
        root = document.getroot()
        if local_name(root) != "Resource" and not find_elements(root, "Resource"):
            raise RegistryError(
                f"Resource {identifier} is not registered at {endpoint}", status_code=404
            )
        return document

    def _call(
        self,
        endpoint: str,
        operation: str,
        parameter: str,
        value: str,
        options: RegistryCallOptions,
    ) -> etree._ElementTree:
        envelope = build_request_envelope(operation, parameter, value)
        headers = {
            "Content-Type": "text/xml; charset=utf-8",
            "SOAPAction": f'"{REGISTRY_SEARCH_NS}#{operation}"',
        }
        request_kwargs: Dict[str, Any] = {}
        if options.timeout is not None:
            request_kwargs["timeout"] = options.timeout

        logger.debug(f"Sending {operation} to {endpoint}")
        try:
            response = self.session.post(
                endpoint, content=envelope, headers=headers, **request_kwargs
            )
        except httpx.HTTPError as e:
            self._network_error_handler.classify_network_error(e, endpoint)

        root = self._parse_response(response, endpoint, operation)

        fault = parse_soap_fault(root)
        if fault is not None:
            logger.error(
                f"SOAP Fault from {endpoint} - Code: {fault.fault_code}, "
                f"Message: {fault.fault_string}"
            )
            raise RegistryError(
                f"Registry fault for {operation}: {fault.fault_string}",
                status_code=response.status_code,
                fault=fault,
            )

        self._check_status(response, endpoint)

        body = root.find(f"{{{SOAP_11_NS}}}Body")
        if body is None:
            body = root.find(f"{{{SOAP_12_NS}}}Body")
        if body is None:
            raise RegistryError(
                f"Malformed {operation} response from {endpoint}: no SOAP body"
            )

        if not options.return_soap_body:
            return etree.ElementTree(root)

        payload = next((child for child in body if isinstance(child.tag, str)), None)
        if payload is None:
            logger.debug(f"Empty SOAP body in {operation} response")
            payload = etree.Element(f"{{{REGISTRY_SEARCH_NS}}}{operation}Response")
        else:
            payload = copy.deepcopy(payload)

        logger.debug(f"{operation} returned {len(payload)} first-level element(s)")
        return etree.ElementTree(payload)

    def _parse_response(
        self, response: httpx.Response, endpoint: str, operation: str
    ) -> etree._Element:
        """Parse the response body, classifying non-XML error responses."""
        try:
            parser = etree.XMLParser(resolve_entities=False, no_network=True)
            return etree.fromstring(response.content, parser)
        except etree.XMLSyntaxError as e:
            self._check_status(response, endpoint)
            raise RegistryError(
                f"Malformed {operation} response from {endpoint}: {e}",
                status_code=response.status_code,
            ) from e

    def _check_status(self, response: httpx.Response, endpoint: str) -> None:
        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            self._network_error_handler.classify_network_error(e, endpoint)

    def close(self) -> None:
        """Close the HTTP session if this transport created it."""
        if self._owns_session and self._session and not self._session.is_closed:
            self._session.close()

    def __enter__(self) -> "SoapRegistryTransport":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
