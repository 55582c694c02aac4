"""Error types for the crypto dashboard."""


class FetchFailure(Exception):
    """Market data could not be fetched.

    Covers both network errors and non-success responses; callers do not
    distinguish between them.

    Attributes:
        message: Human-readable error description.
        status_code: HTTP status of the failed response, if one was received.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
