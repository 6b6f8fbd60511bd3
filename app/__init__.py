"""
App package - Application configuration and exceptions.
"""

from app.config import settings
from app.exceptions import (
    ServiceValidationError,
    NotFoundError,
    UnauthorizedError,
    StoreError,
    MissingDocumentError,
)

__all__ = [
    "settings",
    "ServiceValidationError",
    "NotFoundError",
    "UnauthorizedError",
    "StoreError",
    "MissingDocumentError",
]
