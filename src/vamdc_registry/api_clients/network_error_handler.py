"""Network Error Handler for the registry SOAP client.

Classifies httpx failures (DNS, SSL, refused connections, timeouts, HTTP error
statuses) into RegistryError with user guidance attached. Nothing is retried:
the classified error is raised to the caller straight away.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import List, NoReturn, Optional

import httpx

from ..exceptions import RegistryError

logger = logging.getLogger(__name__)


@dataclass
class UserGuidance:
    """User guidance information for network errors."""

    error_type: str
    troubleshooting_steps: List[str]
    additional_notes: List[str] = field(default_factory=list)

    def format_for_console(self) -> str:
        """Format guidance for rich console output."""
        content = []
        content.append(f"[bold red]Error Type:[/bold red] {self.error_type}")
        content.append("")
        content.append("[bold yellow]Troubleshooting Steps:[/bold yellow]")

        for i, step in enumerate(self.troubleshooting_steps, 1):
            content.append(f"{i}. {step}")

        if self.additional_notes:
            content.append("")
            content.append("[bold blue]Additional Notes:[/bold blue]")
            for note in self.additional_notes:
                content.append(f"• {note}")

        return "\n".join(content)


DNS_GUIDANCE = UserGuidance(
    error_type="DNS Resolution Failed",
    troubleshooting_steps=[
        "Check the spelling of the registry endpoint URL",
        "Verify your internet connection",
        "Try one of the well-known endpoints ('release' or 'development')",
    ],
)

SSL_GUIDANCE = UserGuidance(
    error_type="SSL Certificate Error",
    troubleshooting_steps=[
        "Verify the registry endpoint uses a valid certificate",
        "Check your system date and time",
        "Disable verification with verify_ssl=False only for trusted test registries",
    ],
)

CONNECTION_GUIDANCE = UserGuidance(
    error_type="Connection Failed",
    troubleshooting_steps=[
        "Check that the registry service is running",
        "Verify the endpoint URL and port",
        "Check firewall and proxy settings",
    ],
)

TIMEOUT_GUIDANCE = UserGuidance(
    error_type="Request Timeout",
    troubleshooting_steps=[
        "Check your network connection",
        "Increase the timeout in the registry configuration",
        "Narrow the XQuery so the registry returns fewer records",
    ],
)

SERVER_GUIDANCE = UserGuidance(
    error_type="Registry Server Error",
    troubleshooting_steps=[
        "The registry reported an internal error",
        "Check the registry's status page or try again later",
    ],
    additional_notes=["Malformed XQueries are also reported as server errors"],
)

CLIENT_GUIDANCE = UserGuidance(
    error_type="Request Rejected",
    troubleshooting_steps=[
        "Verify that the endpoint is a registry SOAP query interface",
        "Check the endpoint path (it usually ends in RegistryQueryv1_0)",
    ],
)


class NetworkErrorHandler:
    """Translates httpx exceptions into RegistryError."""

    def __init__(self):
        self._dns_error_patterns = [
            r"name.*resolution.*failed",
            r"name.*or.*service.*not.*known",
            r"nodename.*nor.*servname.*provided",
            r"temporary.*failure.*in.*name.*resolution",
        ]
        self._connection_error_patterns = [
            r"connection.*refused",
            r"connection.*reset",
            r"network.*is.*unreachable",
            r"no.*route.*to.*host",
        ]
        self._ssl_error_patterns = [
            r"ssl.*certificate.*verification.*failed",
            r"certificate.*verify.*failed",
            r"ssl.*handshake.*failed",
            r"bad.*certificate",
        ]

    def classify_network_error(self, error: httpx.HTTPError, endpoint: str) -> NoReturn:
        """Classify a transport failure and raise the matching RegistryError.

        Args:
            error: The original httpx exception
            endpoint: Registry endpoint the request was sent to

        Raises:
            RegistryError: Always
        """
        error_message = str(error).lower()

        if isinstance(error, httpx.ConnectError):
            self._handle_connect_error(error, error_message, endpoint)
        elif isinstance(error, httpx.TimeoutException):
            self._raise(
                f"Request to registry at {endpoint} timed out",
                TIMEOUT_GUIDANCE,
                error,
            )
        elif isinstance(error, httpx.HTTPStatusError):
            self._handle_http_status_error(error, endpoint)
        else:
            self._raise(
                f"Network error talking to registry at {endpoint}: {error}",
                CONNECTION_GUIDANCE,
                error,
            )

    def _handle_connect_error(
        self, error: httpx.ConnectError, error_message: str, endpoint: str
    ) -> NoReturn:
        """Handle connection errors with specific classification."""
        if any(
            re.search(pattern, error_message) for pattern in self._dns_error_patterns
        ):
            self._raise(
                f"Cannot resolve registry address for {endpoint}", DNS_GUIDANCE, error
            )

        if any(
            re.search(pattern, error_message) for pattern in self._ssl_error_patterns
        ):
            self._raise(
                f"SSL certificate verification failed for {endpoint}",
                SSL_GUIDANCE,
                error,
            )

        if any(
            re.search(pattern, error_message)
            for pattern in self._connection_error_patterns
        ):
            self._raise(
                f"Cannot connect to registry at {endpoint}. "
                "Check if the service is running and accessible.",
                CONNECTION_GUIDANCE,
                error,
            )

        self._raise(
            f"Connection to registry at {endpoint} failed: {error}",
            CONNECTION_GUIDANCE,
            error,
        )

    def _handle_http_status_error(
        self, error: httpx.HTTPStatusError, endpoint: str
    ) -> NoReturn:
        """Handle HTTP status errors (4xx, 5xx)."""
        status_code = error.response.status_code
        guidance = SERVER_GUIDANCE if status_code >= 500 else CLIENT_GUIDANCE
        self._raise(
            f"Registry at {endpoint} returned HTTP {status_code}",
            guidance,
            error,
            status_code=status_code,
        )

    def _raise(
        self,
        message: str,
        guidance: UserGuidance,
        cause: Exception,
        status_code: Optional[int] = None,
    ) -> NoReturn:
        logger.debug(f"Classified network error: {message}")
        raise RegistryError(
            message,
            status_code=status_code,
            user_guidance=guidance.format_for_console(),
        ) from cause
