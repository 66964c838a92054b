"""
Service Base Classes

Every engine component (indicators, analysis) is a service with a typed
input, a typed output and a health probe. Errors raised by services derive
from ServiceError so the API layer can map them onto HTTP responses.
"""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

InputT = TypeVar("InputT")
OutputT = TypeVar("OutputT")


class BaseService(ABC, Generic[InputT, OutputT]):
    """
    Base class for engine services.

    Services hold configuration only, never per-symbol state: each
    ``execute`` call is a full recompute from its input.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Service name used in logs and error messages."""
        pass

    @abstractmethod
    async def execute(self, input_data: InputT) -> OutputT:
        """
        Run the service on one input.

        Raises:
            ServiceError: If the input cannot be processed
        """
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """True when the service can accept work."""
        pass


class ServiceError(Exception):
    """Base exception for engine errors, tagged with the failing service."""

    def __init__(self, service_name: str, message: str, details: dict = None):
        self.service_name = service_name
        self.message = message
        self.details = details or {}
        super().__init__(f"[{service_name}] {message}")


class ValidationError(ServiceError):
    """Invalid configuration or request parameters."""
    pass


class NoDataError(ServiceError):
    """Symbol has no usable price history in the requested window."""

    def __init__(self, service_name: str, symbol: str, details: dict = None):
        self.symbol = symbol
        super().__init__(service_name, f"No market data found for {symbol}", details)
