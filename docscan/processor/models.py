from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path


class ExtractionSource(StrEnum):
    PDF_PARSER = "pdf-parser"
    BASIC_OCR = "basic-ocr"


@dataclass(frozen=True)
class UploadedFile:
    """A file the upload boundary spooled to temporary storage."""

    path: Path
    declared_mime_type: str
    original_filename: str = "unknown"


@dataclass(frozen=True)
class FileAsset:
    """In-memory upload, owned by the pipeline for one request."""

    data: bytes
    declared_mime_type: str
    original_filename: str = "unknown"

    @property
    def size_bytes(self) -> int:
        return len(self.data)


@dataclass(frozen=True)
class ExtractionRequest:
    """One "extract text from an uploaded file" call from the HTTP boundary."""

    client_key: str
    files: list[UploadedFile] = field(default_factory=list)


@dataclass(frozen=True)
class ExtractionResult:
    """Output of a successful extraction."""

    extracted_text: str
    names: tuple[str, ...]
    source: ExtractionSource
    success: bool = True

    @property
    def count(self) -> int:
        return len(self.names)

    def to_dict(self) -> dict[str, object]:
        return {
            "success": self.success,
            "extractedText": self.extracted_text,
            "names": list(self.names),
            "count": self.count,
            "source": self.source.value,
        }


@dataclass(frozen=True)
class ExtractionResponse:
    """Status code and JSON-ready body handed back to the HTTP boundary."""

    status_code: int
    body: dict[str, object]
