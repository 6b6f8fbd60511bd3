from typing import Any, Mapping, Optional


class ServiceValidationError(Exception):
    """Raised when input data is invalid or a precondition for a service call is not met.

    Attributes:
        message: human-readable message
        details: optional mapping with extra context (field errors, validation info)
        code: optional machine-readable error code
        http_status: suggested HTTP status code for handlers (400)
    """

    http_status = 400

    def __init__(self, message: str = "Invalid input", details: Optional[Mapping[str, Any]] = None, code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details
        self.code = code

    def to_dict(self) -> dict:
        payload: dict[str, Any] = {"message": self.message}
        if self.code:
            payload["code"] = self.code
        if self.details:
            payload["details"] = self.details
        return payload

    def __str__(self) -> str:
        return self.message


class NotFoundError(ServiceValidationError):
    """Raised when a requested day document was not found.

    Services return None for a missing day; only the HTTP layer raises this.
    """

    http_status = 404

    def __init__(self, message: str = "Not found", details: Optional[Mapping[str, Any]] = None, code: Optional[str] = None):
        super().__init__(message, details, code)


class UnauthorizedError(ServiceValidationError):
    """Raised when a household role may not perform an operation (403)."""

    http_status = 403

    def __init__(self, message: str = "Not allowed", details: Optional[Mapping[str, Any]] = None, code: Optional[str] = None):
        super().__init__(message, details, code)


class StoreError(Exception):
    """Raised by the document-store adapter when a read, write or batch commit fails.

    Services catch it at their boundary and turn it into a failure result.
    """

    http_status = 503

    def __init__(self, message: str = "Document store failure", key: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.key = key

    def __str__(self) -> str:
        if self.key:
            return f"{self.message} (key={self.key})"
        return self.message


class MissingDocumentError(StoreError):
    """Raised when an update targets a document that does not exist."""

    http_status = 404

    def __init__(self, key: Optional[str] = None):
        super().__init__("No document to update", key=key)
