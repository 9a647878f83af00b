import argparse
import json
import mimetypes
import shutil
import sys
import tempfile
from pathlib import Path

from docscan.config.settings import Settings
from docscan.logging.logger import Log
from docscan.processor.models import ExtractionRequest, UploadedFile
from docscan.processor.service import build_service


def _spool(source: Path) -> Path:
    """Copy source to a temp file, as the HTTP upload boundary would."""
    with tempfile.NamedTemporaryFile(prefix="docscan-", delete=False) as tmp:
        with source.open("rb") as src:
            shutil.copyfileobj(src, tmp)
    return Path(tmp.name)


def main(argv: list[str] | None = None) -> int:
    """Entry point: extract text and names from one local file, print JSON."""
    parser = argparse.ArgumentParser(prog="docscan")
    parser.add_argument("file", type=Path)
    parser.add_argument("--mime", help="declared MIME type (guessed from name if omitted)")
    parser.add_argument("--client", default="local", help="client key for rate limiting")
    args = parser.parse_args(argv)

    settings = Settings()
    Log.configure(settings.log_level)

    mime = args.mime or mimetypes.guess_type(args.file.name)[0] or "application/octet-stream"
    try:
        service = build_service(settings)
    except ValueError as exc:
        Log.error(f"Invalid configuration: {exc}")
        return 2

    try:
        request = ExtractionRequest(
            client_key=args.client,
            files=[UploadedFile(_spool(args.file), mime, args.file.name)],
        )
        response = service.handle(request)
    finally:
        service.close()

    print(json.dumps(response.body, indent=2))
    return 0 if response.status_code == 200 else 1


if __name__ == "__main__":
    sys.exit(main())
