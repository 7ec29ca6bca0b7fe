"""MIME type sniffing for files on disk using puremagic."""

from __future__ import annotations

import codecs
import logging
import os
from dataclasses import dataclass

import puremagic

logger = logging.getLogger("response_download")

DEFAULT_MIME_TYPE = "application/octet-stream"
TEXT_MIME_TYPE = "text/plain"

# How much of the file is inspected when no magic signature matched.
TEXT_SAMPLE_SIZE = 8192


@dataclass(frozen=True)
class MimeDetection:
    """Outcome of sniffing a file: either a MIME type or the reason there is none.

    Examples:
        >>> MimeDetection.found("image/png").mime_type_or(DEFAULT_MIME_TYPE)
        'image/png'
        >>> MimeDetection.failed("file is empty").mime_type_or(DEFAULT_MIME_TYPE)
        'application/octet-stream'
    """

    mime_type: str | None = None
    error: str | None = None

    @classmethod
    def found(cls, mime_type: str) -> MimeDetection:
        return cls(mime_type=mime_type)

    @classmethod
    def failed(cls, error: str) -> MimeDetection:
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.mime_type is not None

    def mime_type_or(self, default: str) -> str:
        return self.mime_type if self.mime_type is not None else default


def detect_file_mime_type(file_path: str | os.PathLike[str]) -> MimeDetection:
    """Classify a file by its content.

    Magic-number signatures are tried first. When none matches, a leading
    sample is checked for plain text (no NUL bytes, valid UTF-8).

    Args:
        file_path: Path of the file to inspect.

    Returns:
        A ``MimeDetection``. Errors are reported in the result, never raised.
    """
    path = os.fspath(file_path)

    try:
        matches = puremagic.magic_file(path)
    except (puremagic.PureError, ValueError, OSError) as exc:
        logger.debug("Magic detection failed for %s: %s", path, exc)
        if isinstance(exc, OSError):
            return MimeDetection.failed(f"cannot read file: {exc}")
        matches = []

    for match in matches:
        if match.mime_type:
            logger.debug("MIME from magic bytes: path=%s mime=%s", path, match.mime_type)
            return MimeDetection.found(match.mime_type)

    try:
        with open(path, "rb") as f:
            sample = f.read(TEXT_SAMPLE_SIZE)
    except OSError as exc:
        logger.debug("Cannot read sample from %s: %s", path, exc)
        return MimeDetection.failed(f"cannot read file: {exc}")

    if not sample:
        return MimeDetection.failed("file is empty")

    if _looks_like_text(sample):
        logger.debug("MIME from text inspection: path=%s mime=%s", path, TEXT_MIME_TYPE)
        return MimeDetection.found(TEXT_MIME_TYPE)

    return MimeDetection.failed("unrecognised content")


def resolve_file_mime_type(file_path: str | os.PathLike[str], default: str = DEFAULT_MIME_TYPE) -> str:
    """Sniff a file's MIME type, falling back to ``default`` on any failure."""
    detection = detect_file_mime_type(file_path)
    if not detection.ok:
        logger.debug("Falling back to %s for %s (%s)", default, os.fspath(file_path), detection.error)
    return detection.mime_type_or(default)


def _looks_like_text(sample: bytes) -> bool:
    if b"\x00" in sample:
        return False
    # The sample may end inside a multi-byte sequence.
    decoder = codecs.getincrementaldecoder("utf-8")()
    try:
        decoder.decode(sample, final=False)
    except UnicodeDecodeError:
        return False
    return True
