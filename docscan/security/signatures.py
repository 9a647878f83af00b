"""Magic-byte verification of uploaded files.

This only confirms or denies the declared MIME type; it never infers a type
from content. WEBP is checked against the RIFF container prefix alone, so any
RIFF file (AVI, WAV) declared as image/webp passes.
"""

PDF_MIME_TYPE = "application/pdf"

IMAGE_MIME_TYPES: tuple[str, ...] = (
    "image/jpeg",
    "image/png",
    "image/gif",
    "image/webp",
)

SUPPORTED_MIME_TYPES: tuple[str, ...] = (*IMAGE_MIME_TYPES, PDF_MIME_TYPE)

FILE_SIGNATURES: dict[str, bytes] = {
    "image/jpeg": b"\xff\xd8\xff",
    "image/png": b"\x89PNG",
    "image/gif": b"GIF",
    "image/webp": b"RIFF",
    PDF_MIME_TYPE: b"%PDF",
}


def matches_signature(data: bytes, declared_mime_type: str) -> bool:
    """Return True only if data starts with the signature of declared_mime_type."""
    signature = FILE_SIGNATURES.get(declared_mime_type)
    if signature is None:
        return False
    return bytes(data[: len(signature)]) == signature


def is_supported(declared_mime_type: str) -> bool:
    return declared_mime_type in SUPPORTED_MIME_TYPES


def is_image(declared_mime_type: str) -> bool:
    return declared_mime_type in IMAGE_MIME_TYPES
