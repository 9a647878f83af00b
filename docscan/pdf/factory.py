from typing import ClassVar

from docscan.config.settings import Settings
from docscan.pdf.base import BasePdfExtractor
from docscan.pdf.pdfplumber_adapter import PdfPlumberAdapter
from docscan.pdf.pymupdf_adapter import PyMuPdfAdapter


class PdfExtractorFactory:
    """Creates the PDF text extractor named by settings.pdf_engine."""

    ADAPTERS: ClassVar[dict[str, type[BasePdfExtractor]]] = {
        "pdfplumber": PdfPlumberAdapter,
        "pymupdf": PyMuPdfAdapter,
    }

    @classmethod
    def create(cls, settings: Settings) -> BasePdfExtractor:
        engine = settings.pdf_engine.strip().lower()
        adapter_cls = cls.ADAPTERS.get(engine)
        if adapter_cls is None:
            raise ValueError(
                f"Unknown PDF engine '{engine}'. Choose from: {sorted(cls.ADAPTERS)}"
            )
        return adapter_cls()
