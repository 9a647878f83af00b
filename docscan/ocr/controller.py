"""Bounded, time-limited OCR execution.

Admission is load shedding: when every slot is taken the call fails at once
with OcrBusyError instead of queueing. Each admitted job runs the engine on
a daemon thread and the caller waits at most ``timeout_seconds``. On timeout
the engine call is abandoned but its slot is reclaimed immediately; engines
are expected to bound their own runtime so abandoned work does not pile up.
"""

import threading
from concurrent.futures import Future, wait

from docscan.config.settings import Settings
from docscan.logging.logger import Log
from docscan.ocr.base import BaseOcrEngine
from docscan.ocr.exceptions import (
    OcrBusyError,
    OcrEngineError,
    OcrNoTextError,
    OcrTimeoutError,
)

BUSY_MESSAGE = "OCR service is busy. Please try again in a moment."
TIMEOUT_MESSAGE = "OCR processing timed out. Please try with a smaller or clearer image."
NO_TEXT_MESSAGE = (
    "No text could be extracted from the image. "
    "Please ensure the image is clear and contains readable text."
)
BUSY_RETRY_AFTER_SECONDS = 5


class _OcrSlot:
    """One admitted job's claim on the slot counter."""

    __slots__ = ("released",)

    def __init__(self) -> None:
        self.released = False


class OcrController:
    """Runs OCR jobs with a global concurrency cap and per-job timeout."""

    def __init__(
        self,
        engine: BaseOcrEngine,
        max_concurrent: int = 2,
        timeout_seconds: float = 60,
    ) -> None:
        self._engine = engine
        self._max_concurrent = max_concurrent
        self._timeout_seconds = timeout_seconds
        self._active = 0
        self._lock = threading.Lock()

    @classmethod
    def from_settings(cls, engine: BaseOcrEngine, settings: Settings) -> "OcrController":
        return cls(
            engine,
            max_concurrent=settings.ocr_max_concurrent,
            timeout_seconds=settings.ocr_timeout_seconds,
        )

    @property
    def active_jobs(self) -> int:
        with self._lock:
            return self._active

    def recognize_text(self, image_bytes: bytes) -> str:
        """Recognize text in image_bytes and return it trimmed.

        Raises:
            OcrBusyError: all slots are occupied.
            OcrTimeoutError: the job exceeded its time budget.
            OcrNoTextError: recognition produced only whitespace.
            OcrEngineError: the engine failed.
        """
        slot = self._acquire()
        try:
            text = self._run_with_timeout(image_bytes)
        finally:
            self._release(slot)

        trimmed = text.strip()
        Log.info(f"OCR completed, extracted text length: {len(trimmed)}")
        if not trimmed:
            raise OcrNoTextError(NO_TEXT_MESSAGE)
        return trimmed

    def _acquire(self) -> _OcrSlot:
        with self._lock:
            if self._active >= self._max_concurrent:
                Log.warning(
                    f"OCR rejected: {self._active}/{self._max_concurrent} slots busy"
                )
                raise OcrBusyError(BUSY_MESSAGE, retry_after=BUSY_RETRY_AFTER_SECONDS)
            self._active += 1
            return _OcrSlot()

    def _release(self, slot: _OcrSlot) -> None:
        with self._lock:
            if slot.released:
                return
            slot.released = True
            self._active -= 1

    def _run_with_timeout(self, image_bytes: bytes) -> str:
        future: Future[str] = Future()

        def _work() -> None:
            if not future.set_running_or_notify_cancel():
                return
            try:
                future.set_result(self._engine.recognize(image_bytes))
            except BaseException as exc:
                future.set_exception(exc)

        Log.info("Starting OCR processing")
        threading.Thread(target=_work, name="ocr-job", daemon=True).start()

        done, _pending = wait([future], timeout=self._timeout_seconds)
        if not done:
            Log.warning(f"OCR job abandoned after {self._timeout_seconds}s")
            raise OcrTimeoutError(TIMEOUT_MESSAGE)

        exc = future.exception()
        if exc is None:
            return future.result()
        Log.error(f"OCR processing error: {exc}")
        raise OcrEngineError(
            f"Failed to extract text from image: {exc}. "
            "Please try with a clearer image or convert to PDF."
        ) from exc
