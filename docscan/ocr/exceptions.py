from docscan.exceptions import ExtractionError


class OcrError(ExtractionError):
    """Base exception for image recognition failures."""

    status_code = 500


class OcrBusyError(OcrError):
    """Raised when every OCR slot is taken. Transient, safe to retry."""

    status_code = 503


class OcrTimeoutError(OcrError):
    """Raised when a recognition job exceeds its time budget."""

    status_code = 504


class OcrNoTextError(OcrError):
    """Raised when recognition produced no usable text."""

    status_code = 422


class OcrEngineError(OcrError):
    """Raised when the recognition engine itself fails."""
