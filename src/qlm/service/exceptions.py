"""Service exceptions raised by routers and translated in main.py."""


class ServiceError(Exception):
    """Base class for reference service exceptions."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class PageTooLargeError(ServiceError):
    """Raised when a client asks for more items per page than allowed."""

    def __init__(self, count: int, maximum: int) -> None:
        self.count = count
        self.maximum = maximum
        super().__init__(f"count {count} exceeds the maximum page size of {maximum}")
