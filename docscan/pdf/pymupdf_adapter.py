import pymupdf

from docscan.pdf.base import BasePdfExtractor
from docscan.pdf.exceptions import PdfExtractionError


class PyMuPdfAdapter(BasePdfExtractor):
    """Extracts the text layer using PyMuPDF."""

    def extract(self, pdf_bytes: bytes) -> str:
        try:
            with pymupdf.open(stream=pdf_bytes, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
                if doc.needs_pass:
                    raise PdfExtractionError("PDF is encrypted")
                pages = [page.get_text() for page in doc]
        except PdfExtractionError:
            raise
        except Exception as exc:
            raise PdfExtractionError(f"pymupdf could not parse document: {exc}") from exc
        return self._join_pages(pages)
