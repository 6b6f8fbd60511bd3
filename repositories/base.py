"""
Base repository interface for data access layer.
This follows the Repository pattern to separate business logic from data access.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Generic, Iterator, List, Optional, Protocol, Tuple, TypeVar

ModelType = TypeVar("ModelType")


class WriteBatch(Protocol):
    """Writes queued against several documents and committed atomically"""

    def __len__(self) -> int: ...

    def delete(self, key: str) -> None: ...

    def set(self, key: str, data: Dict[str, Any]) -> None: ...

    def update(self, key: str, fields: Dict[str, Any]) -> None: ...

    def commit(self) -> None: ...


class DocumentStore(Protocol):
    """Keyed JSON-like records; failures surface as StoreError"""

    def get(self, key: str) -> Optional[Dict[str, Any]]: ...

    def set(self, key: str, data: Dict[str, Any]) -> None: ...

    def update(self, key: str, fields: Dict[str, Any]) -> None: ...

    def delete(self, key: str) -> None: ...

    def scan(self) -> Iterator[Tuple[str, Dict[str, Any]]]: ...

    def batch(self) -> WriteBatch: ...


class BaseDocumentRepository(Generic[ModelType], ABC):
    """
    Base repository providing common operations over a document store.
    Subclasses decide how raw records become models.
    """

    def __init__(self, store: DocumentStore):
        self.store = store

    @abstractmethod
    def to_model(self, key: str, data: Dict[str, Any]) -> Optional[ModelType]:
        """Convert a stored record; None when the record is unusable"""

    def get_by_id(self, key: str) -> Optional[ModelType]:
        """Get entity by its exact stored key"""
        data = self.store.get(key)
        if data is None:
            return None
        return self.to_model(key, data)

    def get_all(self) -> List[ModelType]:
        """Full collection scan"""
        models = []
        for key, data in self.store.scan():
            model = self.to_model(key, data)
            if model is not None:
                models.append(model)
        return models

    def exists(self, key: str) -> bool:
        """Check if entity exists"""
        return self.store.get(key) is not None

    def batch(self) -> WriteBatch:
        return self.store.batch()
