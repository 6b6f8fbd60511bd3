"""
Repositories package - Data access layer.
"""

from repositories.base import BaseDocumentRepository, DocumentStore, WriteBatch
from repositories.day_document_repository import DayDocumentRepository

__all__ = [
    "BaseDocumentRepository",
    "DocumentStore",
    "WriteBatch",
    "DayDocumentRepository",
]
