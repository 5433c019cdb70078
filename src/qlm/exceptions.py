"""Exceptions raised by the loader and its fetch layer.

Construction problems surface synchronously as ConfigurationError.
Everything that goes wrong while talking to the item service is a
FetchError; the coordinator cleans up its in-flight state and then
re-raises it to the caller that was waiting on the fetch.
"""


class QLMError(Exception):
    """Base class for all quick-load-more exceptions."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ConfigurationError(QLMError):
    """Raised when a loader cannot be constructed from the given options."""


class FetchError(QLMError):
    """Raised when a single fetch against the item service fails."""

    def __init__(self, url: str, message: str) -> None:
        self.url = url
        super().__init__(f"{message} ({url})")


class TransportError(FetchError):
    """Raised when the HTTP request itself fails or returns a non-2xx status."""


class ServiceContractViolation(FetchError):
    """Raised when a response arrives but cannot be interpreted."""
