"""Errors raised by the notification core."""


class NotificationValidationError(ValueError):
    """Raised when a notification payload is malformed or oversized."""


class PersistenceError(RuntimeError):
    """Raised when the notification store cannot complete an operation."""


class TransportError(RuntimeError):
    """Raised when pushing a message to a live connection fails."""


__all__ = ["NotificationValidationError", "PersistenceError", "TransportError"]
