from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from docscan.processor.models import ExtractionSource, FileAsset


@dataclass(slots=True)
class PipelineContext:
    asset: FileAsset
    extracted_text: str = ""
    source: ExtractionSource | None = None
    names: list[str] = field(default_factory=list)


class PipelineStep(ABC):
    @abstractmethod
    def run(self, context: PipelineContext) -> PipelineContext:
        raise NotImplementedError
