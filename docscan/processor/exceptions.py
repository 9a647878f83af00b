from docscan.exceptions import ExtractionError


class RateLimitedError(ExtractionError):
    """Raised when a client exceeded its request budget for the current window."""

    status_code = 429


class UploadTooLargeError(ExtractionError):
    """Raised when the uploaded file exceeds the size limit."""


class TooManyFilesError(ExtractionError):
    """Raised when a request carries more than the allowed number of files."""


class EmptyUploadError(ExtractionError):
    """Raised when no file or an empty file was uploaded."""


class UnsupportedTypeError(ExtractionError):
    """Raised when the declared MIME type is not in the allow-list."""


class SignatureMismatchError(ExtractionError):
    """Raised when file content does not match the declared MIME type."""
