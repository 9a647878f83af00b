from docscan.config.settings import Settings
from docscan.exceptions import ExtractionError
from docscan.logging.logger import Log
from docscan.processor.exceptions import (
    EmptyUploadError,
    RateLimitedError,
    TooManyFilesError,
)
from docscan.processor.models import ExtractionRequest, ExtractionResponse
from docscan.processor.processor import Processor, build_processor
from docscan.processor.upload_loader import UploadLoader
from docscan.ratelimit.limiter import RateLimiter


class ExtractionService:
    """Admits, validates and runs one extraction request; never raises."""

    def __init__(
        self,
        processor: Processor,
        rate_limiter: RateLimiter,
        upload_loader: UploadLoader,
        settings: Settings,
    ) -> None:
        self._processor = processor
        self._rate_limiter = rate_limiter
        self._upload_loader = upload_loader
        self._settings = settings

    def handle(self, request: ExtractionRequest) -> ExtractionResponse:
        try:
            try:
                self._admit(request.client_key)
                self._check_file_count(request)
                asset = self._upload_loader.load(request.files[0])
            finally:
                for uploaded in request.files:
                    self._upload_loader.discard(uploaded)
            result = self._processor.process(asset)
        except ExtractionError as exc:
            Log.warning(f"Extraction rejected for {request.client_key}: {exc.message}")
            return ExtractionResponse(status_code=exc.status_code, body=exc.to_response())
        except Exception as exc:
            Log.exception(f"Text extraction error: {exc}")
            details = str(exc) if self._settings.app_env == "dev" else "Please try again"
            return ExtractionResponse(
                status_code=500,
                body={
                    "error": "Internal server error during text extraction",
                    "details": details,
                },
            )
        return ExtractionResponse(status_code=200, body=result.to_dict())

    def close(self) -> None:
        """Stop the rate limiter's background sweep."""
        self._rate_limiter.stop()

    def _admit(self, client_key: str) -> None:
        if not self._rate_limiter.admit(client_key):
            window = int(self._rate_limiter.window_seconds)
            raise RateLimitedError(
                f"Rate limit exceeded. Maximum {self._rate_limiter.max_requests} "
                f"requests per {window} seconds.",
                retry_after=self._rate_limiter.retry_after(client_key),
            )

    def _check_file_count(self, request: ExtractionRequest) -> None:
        if not request.files:
            raise EmptyUploadError("No file uploaded")
        if len(request.files) > self._settings.max_files_per_request:
            raise TooManyFilesError(
                f"Too many files. Maximum {self._settings.max_files_per_request} per request"
            )


def build_service(settings: Settings) -> ExtractionService:
    """Wire the service and start the rate limiter's background sweep."""
    processor = build_processor(settings)
    rate_limiter = RateLimiter.from_settings(settings)
    rate_limiter.start()
    return ExtractionService(
        processor=processor,
        rate_limiter=rate_limiter,
        upload_loader=UploadLoader(),
        settings=settings,
    )
