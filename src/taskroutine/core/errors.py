"""Domain errors."""


class ValidationError(ValueError):
    """Raised when a new task is rejected. The message is shown to the user."""

    pass


class StorageError(Exception):
    """Raised when the blob store cannot be read or written."""

    pass


class NotificationSchedulingError(Exception):
    """Raised when a reminder could not be handed to the notifier."""

    pass
