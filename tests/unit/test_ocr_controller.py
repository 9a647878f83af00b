import threading
import time

import pytest

from docscan.ocr.base import BaseOcrEngine
from docscan.ocr.controller import OcrController
from docscan.ocr.exceptions import (
    OcrBusyError,
    OcrEngineError,
    OcrNoTextError,
    OcrTimeoutError,
)


class StaticEngine(BaseOcrEngine):
    def __init__(self, text: str) -> None:
        self.text = text
        self.calls: list[bytes] = []

    def recognize(self, image_bytes: bytes) -> str:
        self.calls.append(image_bytes)
        return self.text


class FailingEngine(BaseOcrEngine):
    def recognize(self, image_bytes: bytes) -> str:
        raise RuntimeError("tesseract exploded")


class BlockingEngine(BaseOcrEngine):
    """Holds every call until ``release`` is set."""

    def __init__(self, text: str = "Held Text") -> None:
        self.text = text
        self.release = threading.Event()
        self.started = threading.Semaphore(0)

    def recognize(self, image_bytes: bytes) -> str:
        self.started.release()
        self.release.wait(timeout=5)
        return self.text


def _wait_for(predicate, timeout: float = 2.0) -> bool:  # type: ignore[no-untyped-def]
    for _ in range(int(timeout / 0.01)):
        if predicate():
            return True
        time.sleep(0.01)
    return predicate()


class TestRecognizeText:
    def test_returns_trimmed_text(self) -> None:
        engine = StaticEngine("  John Smith\n\n")
        controller = OcrController(engine)

        assert controller.recognize_text(b"img") == "John Smith"
        assert engine.calls == [b"img"]
        assert controller.active_jobs == 0

    def test_whitespace_only_raises_no_text(self) -> None:
        controller = OcrController(StaticEngine(" \n\t "))

        with pytest.raises(OcrNoTextError, match="No text could be extracted"):
            controller.recognize_text(b"img")
        assert controller.active_jobs == 0

    def test_engine_failure_is_wrapped(self) -> None:
        controller = OcrController(FailingEngine())

        with pytest.raises(OcrEngineError, match="tesseract exploded") as exc_info:
            controller.recognize_text(b"img")
        assert isinstance(exc_info.value.__cause__, RuntimeError)
        assert controller.active_jobs == 0

    def test_engine_ocr_error_gets_client_wording(self) -> None:
        class BadResultEngine(BaseOcrEngine):
            def recognize(self, image_bytes: bytes) -> str:
                raise OcrEngineError("Tesseract returned NoneType instead of text")

        controller = OcrController(BadResultEngine())

        with pytest.raises(OcrEngineError) as exc_info:
            controller.recognize_text(b"img")
        assert exc_info.value.message == (
            "Failed to extract text from image: Tesseract returned NoneType instead of text. "
            "Please try with a clearer image or convert to PDF."
        )
        assert controller.active_jobs == 0

    def test_engine_timeout_error_is_an_engine_failure(self) -> None:
        class SocketTimeoutEngine(BaseOcrEngine):
            def recognize(self, image_bytes: bytes) -> str:
                raise TimeoutError("socket read timed out")

        controller = OcrController(SocketTimeoutEngine(), timeout_seconds=5)

        with pytest.raises(OcrEngineError, match="socket read timed out") as exc_info:
            controller.recognize_text(b"img")
        assert not isinstance(exc_info.value, OcrTimeoutError)
        assert isinstance(exc_info.value.__cause__, TimeoutError)
        assert controller.active_jobs == 0


class TestTimeout:
    def test_times_out_and_frees_slot(self) -> None:
        engine = BlockingEngine()
        controller = OcrController(engine, max_concurrent=1, timeout_seconds=0.05)

        with pytest.raises(OcrTimeoutError, match="timed out"):
            controller.recognize_text(b"img")
        assert controller.active_jobs == 0

        engine.release.set()
        # a late completion must not decrement again
        time.sleep(0.05)
        assert controller.active_jobs == 0

    def test_slot_reusable_after_timeout(self) -> None:
        engine = BlockingEngine()
        controller = OcrController(engine, max_concurrent=1, timeout_seconds=0.05)

        with pytest.raises(OcrTimeoutError):
            controller.recognize_text(b"img")

        engine.release.set()
        assert controller.recognize_text(b"img") == "Held Text"
        assert controller.active_jobs == 0


class TestConcurrencyLimit:
    def test_third_request_is_rejected_immediately(self) -> None:
        engine = BlockingEngine()
        controller = OcrController(engine, max_concurrent=2, timeout_seconds=5)
        results: list[str] = []

        def _run() -> None:
            results.append(controller.recognize_text(b"img"))

        workers = [threading.Thread(target=_run) for _ in range(2)]
        for w in workers:
            w.start()
        assert engine.started.acquire(timeout=2)
        assert engine.started.acquire(timeout=2)
        assert controller.active_jobs == 2

        with pytest.raises(OcrBusyError, match="busy") as exc_info:
            controller.recognize_text(b"img")
        assert exc_info.value.retry_after is not None

        engine.release.set()
        for w in workers:
            w.join(timeout=5)

        assert results == ["Held Text", "Held Text"]
        assert controller.active_jobs == 0

    def test_never_exceeds_limit_under_load(self) -> None:
        engine = BlockingEngine()
        controller = OcrController(engine, max_concurrent=2, timeout_seconds=5)
        outcomes: list[str] = []
        lock = threading.Lock()
        barrier = threading.Barrier(8)

        def _run() -> None:
            barrier.wait()
            try:
                controller.recognize_text(b"img")
                outcome = "ok"
            except OcrBusyError:
                outcome = "busy"
            with lock:
                outcomes.append(outcome)

        workers = [threading.Thread(target=_run) for _ in range(8)]
        for w in workers:
            w.start()
        assert _wait_for(lambda: outcomes.count("busy") == 6)
        assert controller.active_jobs == 2

        engine.release.set()
        for w in workers:
            w.join(timeout=5)

        assert outcomes.count("ok") == 2
        assert controller.active_jobs == 0
