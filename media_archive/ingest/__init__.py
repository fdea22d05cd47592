"""
Media intake: turns a source file into a stored ``Media`` row and blob.
"""

from media_archive.ingest.adder import MediaAdder
from media_archive.ingest.sources import SourceFile, resolve_source
from media_archive.ingest.validator import check_file, detect_mime_type, sanitize_file_name

__all__ = [
    "MediaAdder",
    "SourceFile",
    "resolve_source",
    "check_file",
    "detect_mime_type",
    "sanitize_file_name",
]
