class StorefrontError(Exception):
    """Base class for errors that are rendered to the client."""

    status = 400

    def __init__(self, message, status=None):
        super().__init__(message)
        self.message = message
        if status is not None:
            self.status = status


class ValidationError(StorefrontError):
    status = 400

    def __init__(self, message, errors=None, status=None):
        super().__init__(message, status=status)
        self.errors = errors or []


class PersistenceError(StorefrontError):
    status = 500


class NotFoundError(StorefrontError):
    status = 404


class AuthorizationError(StorefrontError):
    status = 403


class AuthenticationError(AuthorizationError):
    status = 401


class InvalidTransitionError(StorefrontError):
    status = 409


class NotificationDeliveryError(Exception):
    """A provider rejected or failed a message. Never reaches an HTTP client."""

    def __init__(self, provider, message):
        super().__init__(f"{provider}: {message}")
        self.provider = provider


__all__ = [
    "StorefrontError",
    "ValidationError",
    "PersistenceError",
    "NotFoundError",
    "AuthorizationError",
    "AuthenticationError",
    "InvalidTransitionError",
    "NotificationDeliveryError",
]
