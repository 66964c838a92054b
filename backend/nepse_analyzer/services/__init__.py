"""
NEPSE Analyzer Services

Service layer containing all business logic.
Each service has a defined interface (contract) and implementation.
"""

from nepse_analyzer.services.base import (
    BaseService,
    NoDataError,
    ServiceError,
    ValidationError,
)

__all__ = ["BaseService", "ServiceError", "ValidationError", "NoDataError"]
