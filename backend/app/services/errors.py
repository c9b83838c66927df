"""
Service-level exceptions, translated to HTTP responses by the API layer.
"""


class ServiceError(Exception):
    """Base class for errors raised by the service layer."""


class Unauthorized(ServiceError):
    """No valid session or user. Never swallowed by any operation."""

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message)


class NotFound(ServiceError):
    """Entity is missing or owned by someone else; the two are not distinguished."""


class ValidationFailure(ServiceError):
    pass


class InvalidTransition(ValidationFailure):
    def __init__(self, current: str, target: str):
        self.current = current
        self.target = target
        super().__init__(f"Cannot move shipment from {current} to {target}")


class PersistenceFailure(ServiceError):
    """Datastore unavailable or a constraint was violated."""
