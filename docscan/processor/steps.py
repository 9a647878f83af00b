from docscan.logging.logger import Log
from docscan.names.extractor import NameExtractor
from docscan.ocr.controller import OcrController
from docscan.pdf.base import BasePdfExtractor
from docscan.pdf.exceptions import PdfExtractionError
from docscan.processor.exceptions import (
    EmptyUploadError,
    SignatureMismatchError,
    UnsupportedTypeError,
    UploadTooLargeError,
)
from docscan.processor.models import ExtractionSource
from docscan.processor.pipeline import PipelineContext, PipelineStep
from docscan.security.signatures import PDF_MIME_TYPE, is_supported, matches_signature


class ValidateUploadStep(PipelineStep):
    def __init__(self, max_upload_bytes: int) -> None:
        self._max_upload_bytes = max_upload_bytes

    def run(self, context: PipelineContext) -> PipelineContext:
        asset = context.asset
        if asset.size_bytes > self._max_upload_bytes:
            limit_mb = self._max_upload_bytes // (1024 * 1024)
            raise UploadTooLargeError(f"File too large. Maximum size is {limit_mb}MB")
        if asset.size_bytes == 0:
            raise EmptyUploadError("Uploaded file is empty")
        if not is_supported(asset.declared_mime_type):
            raise UnsupportedTypeError(
                "Unsupported file type. Please upload JPG, PNG, GIF, WebP, or PDF files."
            )
        return context


class VerifySignatureStep(PipelineStep):
    def run(self, context: PipelineContext) -> PipelineContext:
        asset = context.asset
        if not matches_signature(asset.data, asset.declared_mime_type):
            Log.warning(
                f"Signature mismatch for '{asset.original_filename}' "
                f"declared as {asset.declared_mime_type}"
            )
            raise SignatureMismatchError(
                "File type mismatch. The file content does not match the declared file type."
            )
        return context


class ExtractTextStep(PipelineStep):
    """Routes PDFs to the text-layer extractor and images to OCR."""

    def __init__(
        self,
        pdf_extractor: BasePdfExtractor,
        ocr_controller: OcrController,
    ) -> None:
        self._pdf_extractor = pdf_extractor
        self._ocr_controller = ocr_controller

    def run(self, context: PipelineContext) -> PipelineContext:
        asset = context.asset
        if asset.declared_mime_type == PDF_MIME_TYPE:
            try:
                context.extracted_text = self._pdf_extractor.extract(asset.data)
            except PdfExtractionError as exc:
                raise PdfExtractionError(
                    f"Failed to extract text from PDF: {exc.message}"
                ) from exc
            context.source = ExtractionSource.PDF_PARSER
        else:
            context.extracted_text = self._ocr_controller.recognize_text(asset.data)
            context.source = ExtractionSource.BASIC_OCR
        Log.info(
            f"Extracted {len(context.extracted_text)} chars from "
            f"'{asset.original_filename}' via {context.source.value}"
        )
        return context


class ExtractNamesStep(PipelineStep):
    def __init__(self, name_extractor: NameExtractor) -> None:
        self._name_extractor = name_extractor

    def run(self, context: PipelineContext) -> PipelineContext:
        context.names = self._name_extractor.extract(context.extracted_text)
        Log.info(f"Found {len(context.names)} name candidates")
        return context
