from docscan.logging.logger import Log
from docscan.processor.exceptions import EmptyUploadError
from docscan.processor.models import FileAsset, UploadedFile


class UploadLoader:
    """Reads a spooled upload into memory and deletes its temporary file."""

    def load(self, uploaded: UploadedFile) -> FileAsset:
        """Read the upload's bytes; the temp file is removed on every path.

        Raises:
            EmptyUploadError: if the temporary file is missing.
        """
        try:
            data = uploaded.path.read_bytes()
        except FileNotFoundError as exc:
            raise EmptyUploadError("No file uploaded") from exc
        finally:
            self.discard(uploaded)
        return FileAsset(
            data=data,
            declared_mime_type=uploaded.declared_mime_type,
            original_filename=uploaded.original_filename or "unknown",
        )

    @staticmethod
    def discard(uploaded: UploadedFile) -> None:
        try:
            uploaded.path.unlink(missing_ok=True)
        except OSError as exc:
            Log.warning(f"Could not delete temporary upload {uploaded.path}: {exc}")
