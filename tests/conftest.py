"""Shared fixtures for response-download tests."""

from __future__ import annotations

import os
import struct
import tempfile

import pytest

from response_download import DownloadResponseFactory

# ---------------------------------------------------------------------------
# Byte fixtures for common file types
# ---------------------------------------------------------------------------

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"


def _make_png_bytes() -> bytes:
    """Build a minimal valid 1x1 PNG."""
    import zlib

    def _chunk(chunk_type: bytes, data: bytes) -> bytes:
        raw = chunk_type + data
        crc = struct.pack(">I", zlib.crc32(raw) & 0xFFFFFFFF)
        length = struct.pack(">I", len(data))
        return length + raw + crc

    ihdr_data = struct.pack(">IIBBBBB", 1, 1, 8, 2, 0, 0, 0)  # 1x1, 8-bit RGB
    compressed = zlib.compress(b"\x00\xff\x00\x00")

    return PNG_SIGNATURE + _chunk(b"IHDR", ihdr_data) + _chunk(b"IDAT", compressed) + _chunk(b"IEND", b"")


def _make_pdf_bytes() -> bytes:
    """Build a minimal valid PDF."""
    return (
        b"%PDF-1.4\n"
        b"1 0 obj\n<< /Type /Catalog /Pages 2 0 R >>\nendobj\n"
        b"2 0 obj\n<< /Type /Pages /Kids [] /Count 0 >>\nendobj\n"
        b"xref\n0 3\n"
        b"0000000000 65535 f \n"
        b"0000000009 00000 n \n"
        b"0000000058 00000 n \n"
        b"trailer\n<< /Size 3 /Root 1 0 R >>\n"
        b"startxref\n109\n%%EOF\n"
    )


@pytest.fixture()
def png_bytes() -> bytes:
    return _make_png_bytes()


@pytest.fixture()
def pdf_bytes() -> bytes:
    return _make_pdf_bytes()


# ---------------------------------------------------------------------------
# Temporary file fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def tmp_dir():
    """Provide a temporary directory that is cleaned up after the test."""
    with tempfile.TemporaryDirectory() as d:
        yield d


@pytest.fixture()
def answer_file(tmp_dir: str) -> str:
    """A plain-text file named answer.txt containing ``42``."""
    p = os.path.join(tmp_dir, "answer.txt")
    with open(p, "wb") as f:
        f.write(b"42")
    return p


@pytest.fixture()
def tmp_png_file(tmp_dir: str, png_bytes: bytes) -> str:
    p = os.path.join(tmp_dir, "icon.png")
    with open(p, "wb") as f:
        f.write(png_bytes)
    return p


@pytest.fixture()
def tmp_pdf_file(tmp_dir: str, pdf_bytes: bytes) -> str:
    p = os.path.join(tmp_dir, "document.pdf")
    with open(p, "wb") as f:
        f.write(pdf_bytes)
    return p


@pytest.fixture()
def missing_file(tmp_dir: str) -> str:
    return os.path.join(tmp_dir, "does-not-exist.bin")


@pytest.fixture()
def factory() -> DownloadResponseFactory:
    return DownloadResponseFactory()
