# exceptions.py
"""
Domain errors for the customer service.

The service raises the ``Invalid*`` errors itself. ``NameAlreadyExists``,
``NotFound`` and ``StorageFailure`` come from the repository and are passed
through untouched. The HTTP layer maps each class to a status code.
"""
from typing import Optional


class CustomerError(Exception):
    """Base class for every customer service error."""

    def __init__(self, message: str, details: Optional[dict] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class InvalidAge(CustomerError):
    def __init__(self, age):
        super().__init__("age must be greater than 0", details={"age": age})


class InvalidId(CustomerError):
    def __init__(self, customer_id):
        super().__init__(
            "customer id must be greater than 0", details={"customer_id": customer_id}
        )


class InvalidName(CustomerError):
    def __init__(self, name):
        super().__init__(
            "invalid name: only letters and spaces are allowed", details={"name": name}
        )


class NameAlreadyExists(CustomerError):
    def __init__(self, name):
        super().__init__(f"name already exists: {name}", details={"name": name})


class NotFound(CustomerError):
    def __init__(self, customer_id):
        super().__init__(
            f"customer {customer_id} not found", details={"customer_id": customer_id}
        )


class StorageFailure(CustomerError):
    """Any repository error that is not a uniqueness violation or a miss."""

    def __init__(self, operation: str, reason: Optional[str] = None):
        message = f"storage {operation} failed"
        if reason:
            message += f": {reason}"
        super().__init__(message, details={"operation": operation, "reason": reason})
