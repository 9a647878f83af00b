import io

import pdfplumber
from pdfminer.pdfdocument import PDFPasswordIncorrect

from docscan.pdf.base import BasePdfExtractor
from docscan.pdf.exceptions import PdfExtractionError


def _is_password_error(exc: BaseException) -> bool:
    # pdfplumber wraps pdfminer errors in its own exception type
    candidates = [exc, exc.__cause__, exc.__context__, *exc.args]
    return any(isinstance(c, PDFPasswordIncorrect) for c in candidates)


class PdfPlumberAdapter(BasePdfExtractor):
    """Extracts the text layer using pdfplumber."""

    def extract(self, pdf_bytes: bytes) -> str:
        try:
            with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
                pages = [page.extract_text() or "" for page in pdf.pages]
        except Exception as exc:
            if _is_password_error(exc):
                raise PdfExtractionError("PDF is encrypted") from exc
            raise PdfExtractionError(f"pdfplumber could not parse document: {exc}") from exc
        return self._join_pages(pages)
