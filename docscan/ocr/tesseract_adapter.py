import io

import pytesseract
from PIL import Image

from docscan.ocr.base import BaseOcrEngine
from docscan.ocr.exceptions import OcrEngineError

# headroom past the controller's wait so the controller reports the timeout
PROCESS_TIMEOUT_MARGIN_SECONDS = 5


class TesseractOcrEngine(BaseOcrEngine):
    """Single-block English recognition using Tesseract via pytesseract.

    The tesseract child process is killed once ``timeout_seconds`` plus a
    small margin elapse, so jobs abandoned by the controller do not keep
    running.
    """

    # psm 6: one uniform block of text, no layout analysis
    CONFIG = "--psm 6 -c preserve_interword_spaces=1"

    def __init__(self, language: str = "eng", timeout_seconds: float = 60) -> None:
        self._language = language
        self._process_timeout = timeout_seconds + PROCESS_TIMEOUT_MARGIN_SECONDS

    def recognize(self, image_bytes: bytes) -> str:
        with Image.open(io.BytesIO(image_bytes)) as img:
            text = pytesseract.image_to_string(
                img.convert("RGB"),
                lang=self._language,
                config=self.CONFIG,
                timeout=self._process_timeout,
            )
        if not isinstance(text, str):
            raise OcrEngineError(
                f"Tesseract returned {type(text).__name__} instead of text"
            )
        return text
