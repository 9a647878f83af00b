from abc import ABC, abstractmethod


class BaseOcrEngine(ABC):
    """Contract for all image recognition adapters."""

    @abstractmethod
    def recognize(self, image_bytes: bytes) -> str:
        """Recognize text in an encoded raster image.

        Args:
            image_bytes: Raw JPEG/PNG/GIF/WEBP file content.

        Returns:
            Recognized text, untrimmed.

        Raises:
            OcrEngineError: if the engine fails or returns an unusable result.
        """
