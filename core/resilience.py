"""
Resilience Patterns

Provides the transport error taxonomy, circuit breakers, and a resilient
HTTP client for the external stat sources.

Failed fetches are never retried in-process: the caller skips that unit of
work and the next scheduled run picks it up again.
"""

from typing import Any, Callable, Optional

import requests
from circuitbreaker import circuit, CircuitBreakerError

from core.logging import get_logger
from core.settings import settings


# -----------------------------------------------------------------------------
# Custom Exceptions
# -----------------------------------------------------------------------------


class TransportError(Exception):
    """Base class for fetch failures that skip a unit of work."""

    pass


class NetworkError(TransportError):
    """Raised on network/timeout errors."""

    pass


class RateLimitError(TransportError):
    """Raised when rate limited (HTTP 429)."""

    def __init__(self, message: str, retry_after: Optional[int] = None):
        super().__init__(message)
        self.retry_after = retry_after


class ServerError(TransportError):
    """Raised on server errors (5xx)."""

    def __init__(self, message: str, status_code: int):
        super().__init__(message)
        self.status_code = status_code


class ClientError(TransportError):
    """Raised on client errors (4xx)."""

    def __init__(self, message: str, status_code: int):
        super().__init__(message)
        self.status_code = status_code


class PayloadError(TransportError):
    """Raised when a response body is not the shape the source promises."""

    pass


# Everything a pipeline treats as "skip this unit and move on"
TRANSPORT_ERRORS = (TransportError, CircuitBreakerError)


# -----------------------------------------------------------------------------
# Circuit Breakers
# -----------------------------------------------------------------------------


def create_circuit_breaker(
    name: str,
    failure_threshold: int = 5,
    recovery_timeout: int = 60,
) -> Callable:
    """
    Create a circuit breaker decorator.

    Args:
        name: Name of the circuit breaker for identification
        failure_threshold: Number of failures before opening circuit
        recovery_timeout: Seconds to wait before attempting recovery

    Returns:
        A circuit breaker decorator
    """
    return circuit(
        failure_threshold=failure_threshold,
        recovery_timeout=recovery_timeout,
        expected_exception=TransportError,
        name=name,
    )


# Pre-configured circuit breakers, one per external source
mlb_stats_circuit = create_circuit_breaker(
    name="mlb_stats",
    failure_threshold=settings.circuit_breaker_threshold,
    recovery_timeout=settings.circuit_breaker_timeout,
)

team_rankings_circuit = create_circuit_breaker(
    name="team_rankings",
    failure_threshold=settings.circuit_breaker_threshold,
    recovery_timeout=settings.circuit_breaker_timeout,
)

baseball_almanac_circuit = create_circuit_breaker(
    name="baseball_almanac",
    failure_threshold=settings.circuit_breaker_threshold,
    recovery_timeout=settings.circuit_breaker_timeout,
)


# -----------------------------------------------------------------------------
# Resilient HTTP Client
# -----------------------------------------------------------------------------


def classify_response_error(response: requests.Response) -> None:
    """
    Classify HTTP response errors and raise appropriate exceptions.

    Args:
        response: The HTTP response to classify

    Raises:
        RateLimitError: For 429 responses
        ServerError: For 5xx responses
        ClientError: For 4xx responses
    """
    if response.status_code == 429:
        retry_after = response.headers.get("Retry-After")
        retry_seconds = int(retry_after) if retry_after and retry_after.isdigit() else 60
        raise RateLimitError(
            f"Rate limited, retry after {retry_seconds}s",
            retry_after=retry_seconds,
        )

    if response.status_code >= 500:
        raise ServerError(
            f"Server error: {response.status_code}",
            status_code=response.status_code,
        )

    if response.status_code >= 400:
        raise ClientError(
            f"Client error: {response.status_code} - {response.text[:200]}",
            status_code=response.status_code,
        )


def resilient_request(
    session: requests.Session,
    method: str,
    url: str,
    timeout: int = 30,
    **kwargs: Any,
) -> requests.Response:
    """
    Make an HTTP request and translate every failure into a TransportError.

    Args:
        session: Session used to send the request
        method: HTTP method (GET, POST, etc.)
        url: Request URL
        timeout: Request timeout in seconds
        **kwargs: Additional arguments passed to requests

    Returns:
        The HTTP response

    Raises:
        NetworkError: On connection or timeout errors
        RateLimitError: On 429 responses
        ServerError: On 5xx responses
        ClientError: On 4xx responses
    """
    log = get_logger("http")

    try:
        log.debug("http_request", method=method, url=url)
        response = session.request(method, url, timeout=timeout, **kwargs)
        classify_response_error(response)
        log.debug("http_response", method=method, url=url, status=response.status_code)
        return response

    except requests.exceptions.Timeout:
        log.warning("http_timeout", method=method, url=url)
        raise NetworkError(f"Request timed out: {url}")

    except requests.exceptions.ConnectionError as e:
        log.warning("http_connection_error", method=method, url=url, error=str(e))
        raise NetworkError(f"Connection failed: {url}")

    except requests.exceptions.RequestException as e:
        log.error("http_error", method=method, url=url, error=str(e))
        raise NetworkError(f"Request failed: {url} - {e}")


class ResilientHTTPClient:
    """
    HTTP client with default headers and optional circuit breaker support.

    Example:
        client = ResilientHTTPClient(
            headers={"User-Agent": settings.http_user_agent},
            circuit_breaker=team_rankings_circuit,
        )
        html = client.get_text("https://www.teamrankings.com/mlb/stat/runs-per-game")
    """

    def __init__(
        self,
        timeout: Optional[int] = None,
        headers: Optional[dict[str, str]] = None,
        circuit_breaker: Optional[Callable] = None,
        session: Optional[requests.Session] = None,
    ):
        self.timeout = timeout or settings.http_timeout
        self.circuit_breaker = circuit_breaker
        self.session = session or requests.Session()
        if headers:
            self.session.headers.update(headers)
        self.log = get_logger("http_client")

    def request(
        self,
        method: str,
        url: str,
        **kwargs: Any,
    ) -> requests.Response:
        """
        Make an HTTP request, through the circuit breaker when configured.

        Args:
            method: HTTP method
            url: Request URL
            **kwargs: Additional request arguments

        Returns:
            The HTTP response
        """
        timeout = kwargs.pop("timeout", self.timeout)

        def _do_request() -> requests.Response:
            return resilient_request(self.session, method, url, timeout=timeout, **kwargs)

        if self.circuit_breaker:
            return self.circuit_breaker(_do_request)()
        return _do_request()

    def get(self, url: str, **kwargs: Any) -> requests.Response:
        """Make a GET request."""
        return self.request("GET", url, **kwargs)

    def get_text(self, url: str, **kwargs: Any) -> str:
        """GET a page and return its decoded body."""
        return self.get(url, **kwargs).text

    def get_json(self, url: str, **kwargs: Any) -> Any:
        """GET a JSON document; an undecodable body is a PayloadError."""
        response = self.get(url, **kwargs)
        try:
            return response.json()
        except ValueError as e:
            raise PayloadError(f"Malformed JSON from {url}: {e}")


__all__ = [
    "TransportError",
    "NetworkError",
    "RateLimitError",
    "ServerError",
    "ClientError",
    "PayloadError",
    "CircuitBreakerError",
    "TRANSPORT_ERRORS",
    "create_circuit_breaker",
    "mlb_stats_circuit",
    "team_rankings_circuit",
    "baseball_almanac_circuit",
    "classify_response_error",
    "resilient_request",
    "ResilientHTTPClient",
]
