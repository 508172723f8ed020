"""Exceptions raised by the registry client."""

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .api_clients.soap_transport import SOAPFaultInfo


class RegistryError(Exception):
    """Raised when the registry cannot fulfill a request.

    Covers unreachable endpoints, HTTP and SOAP faults, malformed responses
    and identifiers that are not registered. There is no other error kind:
    every operation either returns a well-formed result or raises this.
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        fault: Optional["SOAPFaultInfo"] = None,
        user_guidance: Optional[str] = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.fault = fault
        self.user_guidance = user_guidance or ""
