from docscan.config.settings import Settings
from docscan.logging.logger import Log
from docscan.names.extractor import NameExtractor
from docscan.ocr.controller import OcrController
from docscan.ocr.tesseract_adapter import TesseractOcrEngine
from docscan.pdf.factory import PdfExtractorFactory
from docscan.processor.models import ExtractionResult, FileAsset
from docscan.processor.pipeline import PipelineContext, PipelineStep
from docscan.processor.steps import (
    ExtractNamesStep,
    ExtractTextStep,
    ValidateUploadStep,
    VerifySignatureStep,
)


class Processor:
    """Runs one in-memory upload through the extraction pipeline.

    Pipeline: validate -> verify signature -> extract text -> extract names.
    """

    def __init__(self, steps: list[PipelineStep]) -> None:
        self._steps = steps

    def process(self, asset: FileAsset) -> ExtractionResult:
        Log.info(
            f"Processing '{asset.original_filename}' "
            f"({asset.declared_mime_type}, {asset.size_bytes} bytes)"
        )
        context = PipelineContext(asset=asset)
        for step in self._steps:
            context = step.run(context)

        if context.source is None:
            raise RuntimeError("Pipeline finished without recording a text source")
        return ExtractionResult(
            extracted_text=context.extracted_text,
            names=tuple(context.names),
            source=context.source,
        )


def build_processor(settings: Settings, ocr_controller: OcrController | None = None) -> Processor:
    """Build a Processor with the configured PDF and OCR adapters."""
    if ocr_controller is None:
        ocr_controller = OcrController.from_settings(
            TesseractOcrEngine(
                language=settings.ocr_language,
                timeout_seconds=settings.ocr_timeout_seconds,
            ),
            settings,
        )
    steps: list[PipelineStep] = [
        ValidateUploadStep(max_upload_bytes=settings.max_upload_bytes),
        VerifySignatureStep(),
        ExtractTextStep(
            pdf_extractor=PdfExtractorFactory.create(settings),
            ocr_controller=ocr_controller,
        ),
        ExtractNamesStep(NameExtractor(max_names=settings.max_names)),
    ]
    return Processor(steps=steps)
