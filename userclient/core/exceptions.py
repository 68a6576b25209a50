from typing import Optional, Any


class UserClientError(Exception):
    """
    Base exception for the users API client.
    """
    def __init__(self, message: str, code: str = "CLIENT_ERROR", details: Optional[Any] = None):
        self.message = message
        self.code = code
        self.details = details
        super().__init__(self.message)


class RequestError(UserClientError):
    """
    Raised when a call to the users API fails.

    The message keeps the human-readable wording ("Erreur lors de ...: <cause>").
    The original exception is kept in `cause` and the structured failure
    (status code, response body, ...) in `details`.
    """
    def __init__(
        self,
        message: str,
        operation: str,
        cause: Optional[BaseException] = None,
        details: Optional[Any] = None
    ):
        self.operation = operation
        self.cause = cause
        super().__init__(message, code="REQUEST_ERROR", details=details)

    @property
    def status_code(self) -> Optional[int]:
        """HTTP status of the failed response, if the server answered."""
        return getattr(self.details, "status_code", None)
