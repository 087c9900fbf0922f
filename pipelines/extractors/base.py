"""
Base Extractor

Abstract base class for data extractors.
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, Optional

from core.logging import get_logger
from core.resilience import ResilientHTTPClient


class BaseExtractor(ABC):
    """
    Abstract base class for data extractors.

    Extractors fetch one external source and decode it into plain rows;
    transformation and persistence happen elsewhere.

    Subclasses should:
    - Fetch through self.client (classified errors, per-source breaker)
    - Raise TransportError subclasses and let the pipeline skip the unit
    - Never retry: a failed unit is picked up by the next run
    """

    def __init__(
        self,
        name: str,
        client: Optional[ResilientHTTPClient] = None,
        headers: Optional[dict[str, str]] = None,
        circuit_breaker: Optional[Callable] = None,
    ):
        """
        Initialize extractor.

        Args:
            name: Extractor name for logging
            client: HTTP client to use (tests pass a stub)
            headers: Default headers when a client is created here
            circuit_breaker: Breaker wrapping each request of a created client
        """
        self.name = name
        self.log = get_logger(f"extractor.{name}")
        self.client = client or ResilientHTTPClient(
            headers=headers,
            circuit_breaker=circuit_breaker,
        )

    @abstractmethod
    def extract(self, **kwargs: Any) -> Any:
        """
        Extract data from the source.

        Args:
            **kwargs: Source-specific parameters

        Returns:
            Decoded rows

        Raises:
            TransportError subclasses when the unit cannot be fetched
        """
        pass
