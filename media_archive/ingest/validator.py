"""
Validation helpers for media intake.

All checks here are side-effect free so a rejected file leaves no trace.
"""

import mimetypes
import unicodedata
from pathlib import Path

from media_archive.common.errors import FileDoesNotExist, FileTooLarge, UnsafeFileName

# Extensions a web server might execute; compared against the lowercased,
# already-sanitized name
BLOCKED_EXTENSIONS = (
    ".php", ".php3", ".php4", ".php5", ".php7", ".php8", ".phtml", ".phar",
)

REPLACED_CHARACTERS = ("#", "/", "\\", " ")

# Magic byte signatures checked before falling back to the extension
SIGNATURES = (
    (b"\xff\xd8\xff", "image/jpeg"),
    (b"\x89PNG\r\n\x1a\n", "image/png"),
    (b"GIF87a", "image/gif"),
    (b"GIF89a", "image/gif"),
    (b"%PDF-", "application/pdf"),
    (b"PK\x03\x04", "application/zip"),
    (b"\x1f\x8b", "application/gzip"),
    (b"ID3", "audio/mpeg"),
    (b"\xff\xfb", "audio/mpeg"),
    (b"\xff\xf3", "audio/mpeg"),
    (b"OggS", "audio/ogg"),
)


def sanitize_file_name(file_name: str) -> str:
    """
    Make a client-supplied file name safe to store.

    Strips control/format characters, replaces ``# / \\`` and spaces with
    ``-`` and rejects script extensions. Sanitizing twice is a no-op.

    Raises:
        UnsafeFileName: If the sanitized name ends with a blocked extension
    """
    sanitized = "".join(
        ch for ch in file_name if not unicodedata.category(ch).startswith("C")
    )
    for character in REPLACED_CHARACTERS:
        sanitized = sanitized.replace(character, "-")

    lowered = sanitized.lower()
    if lowered.endswith(BLOCKED_EXTENSIONS):
        raise UnsafeFileName(file_name)

    return sanitized


def check_file(path: Path, max_file_size: int) -> int:
    """
    Ensure ``path`` is a regular file within the size limit.

    Args:
        path: Source file
        max_file_size: Maximum size in bytes; 0 or negative disables the check

    Returns:
        File size in bytes

    Raises:
        FileDoesNotExist: If the path is not a regular file
        FileTooLarge: If the file exceeds ``max_file_size``
    """
    if not path.is_file():
        raise FileDoesNotExist(str(path))

    size = path.stat().st_size
    if max_file_size > 0 and size > max_file_size:
        raise FileTooLarge(str(path), size, max_file_size)
    return size


def detect_mime_type(path: Path) -> str:
    """
    Detect MIME type from magic bytes, then from the file name.

    Returns:
        MIME type string, ``application/octet-stream`` when unknown
    """
    with open(path, "rb") as f:
        head = f.read(16)

    for signature, mime_type in SIGNATURES:
        if head.startswith(signature):
            return mime_type
    if head.startswith(b"RIFF") and head[8:12] == b"WEBP":
        return "image/webp"
    if head.startswith(b"RIFF") and head[8:12] == b"WAVE":
        return "audio/wav"
    if head[4:8] == b"ftyp":
        return "video/mp4"

    guessed, _ = mimetypes.guess_type(path.name)
    if guessed:
        return guessed
    if not head:
        return "application/x-empty"
    return "application/octet-stream"
