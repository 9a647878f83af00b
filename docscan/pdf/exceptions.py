from docscan.exceptions import ExtractionError


class PdfExtractionError(ExtractionError):
    """Raised when a PDF is malformed, encrypted, or has no text layer."""

    status_code = 422
