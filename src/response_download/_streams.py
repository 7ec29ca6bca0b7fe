"""Response body streams backed by a file or by in-memory content."""

from __future__ import annotations

import logging
import os
from typing import IO, AsyncIterator, Iterator, Union

import httpx
from aiofiles.threadpool import wrap

logger = logging.getLogger("response_download")

ContentLike = Union[str, bytes]

DEFAULT_CHUNK_SIZE = 64 * 1024


class FileStream(httpx.SyncByteStream, httpx.AsyncByteStream):
    """An httpx body stream reading from one open file handle.

    The handle is opened by ``StreamFactory.create_stream_from_file`` and is
    owned by the stream. Closing the response that carries the stream closes
    the file. Both sync and async iteration read the same handle; async reads
    run in a thread pool through aiofiles.
    """

    def __init__(self, file: IO[bytes], chunk_size: int = DEFAULT_CHUNK_SIZE) -> None:
        self._file = file
        self._chunk_size = chunk_size

    @property
    def name(self) -> str:
        return self._file.name

    @property
    def closed(self) -> bool:
        return self._file.closed

    def __iter__(self) -> Iterator[bytes]:
        while True:
            chunk = self._file.read(self._chunk_size)
            if not chunk:
                break
            yield chunk

    async def __aiter__(self) -> AsyncIterator[bytes]:
        async_file = wrap(self._file)
        while True:
            chunk = await async_file.read(self._chunk_size)
            if not chunk:
                break
            yield chunk

    def close(self) -> None:
        if not self._file.closed:
            logger.debug("Closing file stream: %s", self._file.name)
            self._file.close()

    async def aclose(self) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"FileStream(name={self._file.name!r}, closed={self._file.closed!r})"


class StreamFactory:
    """Creates response bodies for download responses."""

    def __init__(self, chunk_size: int = DEFAULT_CHUNK_SIZE) -> None:
        self._chunk_size = chunk_size

    def create_stream_from_file(self, file_path: str | os.PathLike[str], mode: str = "rb") -> FileStream:
        """Open ``file_path`` and wrap the handle in a ``FileStream``.

        Raises:
            OSError: If the file cannot be opened. The error is not caught.
            ValueError: If ``mode`` is not a binary read-only mode.
        """
        if "b" not in mode or "r" not in mode or any(flag in mode for flag in "+wax"):
            raise ValueError(f"File streams need a binary read-only mode, got {mode!r}")
        file = open(file_path, mode)  # noqa: SIM115 -- ownership moves to the stream
        return FileStream(file, chunk_size=self._chunk_size)

    def create_stream(self, content: ContentLike = b"") -> httpx.ByteStream:
        """Wrap in-memory content. Strings are encoded as UTF-8."""
        raw = content.encode("utf-8") if isinstance(content, str) else bytes(content)
        return httpx.ByteStream(raw)
