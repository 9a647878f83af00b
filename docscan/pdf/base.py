from abc import ABC, abstractmethod
from collections.abc import Iterable

from docscan.pdf.exceptions import PdfExtractionError


class BasePdfExtractor(ABC):
    """Contract for all PDF text extraction adapters."""

    @abstractmethod
    def extract(self, pdf_bytes: bytes) -> str:
        """Extract the embedded text layer from PDF bytes.

        Args:
            pdf_bytes: Raw PDF file content.

        Returns:
            Page texts joined by newlines, stripped.

        Raises:
            PdfExtractionError: if the document is malformed, encrypted,
                or has no text layer.
        """

    @staticmethod
    def _join_pages(pages: Iterable[str]) -> str:
        text = "\n".join(pages).strip()
        if not text:
            raise PdfExtractionError("PDF has no extractable text layer")
        return text
