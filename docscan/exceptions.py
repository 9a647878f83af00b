class ExtractionError(Exception):
    """Base exception for all request-level extraction failures.

    Carries the client-facing message, a status code for the HTTP boundary,
    and an optional retry hint in seconds.
    """

    status_code: int = 400

    def __init__(self, message: str, *, retry_after: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.retry_after = retry_after

    def to_response(self) -> dict[str, object]:
        body: dict[str, object] = {"error": self.message}
        if self.retry_after is not None:
            body["retryAfter"] = self.retry_after
        return body
