"""DownloadResponseFactory -- builds httpx responses that deliver content as a file download."""

from __future__ import annotations

import logging
import os
from pathlib import PurePath

import httpx

from ._detection import DEFAULT_MIME_TYPE, resolve_file_mime_type
from ._disposition import ContentDisposition, assert_disposition, content_disposition_value
from ._options import DownloadOptions, XSendfileHeader
from ._streams import ContentLike, StreamFactory

logger = logging.getLogger("response_download")

HeaderList = list[tuple[str, str]]


class ResponseFactory:
    """Creates the ``httpx.Response`` objects returned by ``DownloadResponseFactory``."""

    def create_response(
        self,
        status_code: int = 200,
        *,
        headers: HeaderList | None = None,
        stream: httpx.SyncByteStream | httpx.AsyncByteStream | None = None,
    ) -> httpx.Response:
        # Names and paths go out verbatim, so non-ASCII values are sent as UTF-8.
        return httpx.Response(status_code, headers=httpx.Headers(headers, encoding="utf-8"), stream=stream)


class DownloadResponseFactory:
    """Builds responses that make a browser download content as a file.

    Four modes are available: let the front-end server send a file through an
    x-sendfile header (``x_send_file``), or send a file, a stream, or raw
    content in the response body (``send_file``, ``send_stream_as_file``,
    ``send_content_as_file``).

    Every option left as ``None`` is taken from the factory's
    ``DownloadOptions``. The disposition is validated before anything else,
    so an invalid value never opens a file or builds headers.

    Examples:
        Send a file from disk::

            factory = DownloadResponseFactory()
            response = factory.send_file("/srv/reports/2024.pdf")

        Hand the file to nginx::

            factory = DownloadResponseFactory(defaults=DownloadOptions(x_header=XSendfileHeader.NGINX))
            response = factory.x_send_file("/protected/2024.pdf", attachment_name="report.pdf")

        Send generated content::

            response = factory.send_content_as_file(b"a,b\\n1,2\\n", "data.csv", mime_type="text/csv")
    """

    def __init__(
        self,
        response_factory: ResponseFactory | None = None,
        stream_factory: StreamFactory | None = None,
        defaults: DownloadOptions | None = None,
    ) -> None:
        self._response_factory = response_factory or ResponseFactory()
        self._stream_factory = stream_factory or StreamFactory()
        self._defaults = defaults or DownloadOptions()

    @property
    def defaults(self) -> DownloadOptions:
        return self._defaults

    # ------------------------------------------------------------------
    # x-sendfile
    # ------------------------------------------------------------------
    def x_send_file(
        self,
        file_path: str | os.PathLike[str],
        attachment_name: str | None = None,
        disposition: ContentDisposition | str | None = None,
        mime_type: str | None = None,
        x_header: XSendfileHeader | str | None = None,
    ) -> httpx.Response:
        """Let the front-end web server send an existing file as a download.

        The response carries the file path in a non-standard header and has no
        body. Servers that support it discard the application output and send
        the file themselves:

        - Apache (mod_xsendfile): ``X-Sendfile``
        - Lighttpd 1.4: ``X-LIGHTTPD-send-file``; Lighttpd 1.5: ``X-Sendfile``
        - Nginx: ``X-Accel-Redirect``
        - Cherokee: ``X-Sendfile`` and ``X-Accel-Redirect``

        This can serve files outside web folders, including ones the server
        otherwise protects. If the server does not handle the header, the
        client downloads a 0-byte file.

        Args:
            file_path: Path placed verbatim in the header. It is not checked.
            attachment_name: Name shown to the user. Defaults to the last
                component of ``file_path``.
            disposition: ``"attachment"`` or ``"inline"``.
            mime_type: MIME type. Sniffed from the file content when not set.
            x_header: Header name. Defaults to the factory's ``x_header``.

        Returns:
            A bodiless ``httpx.Response``.

        Raises:
            InvalidDispositionError: If ``disposition`` is invalid.
        """
        resolved_disposition = self._resolve_disposition(disposition)

        path = os.fspath(file_path)
        if attachment_name is None:
            attachment_name = _attachment_name_from_path(path)
        if mime_type is None:
            mime_type = self._resolve_file_mime_type(path)
        if x_header is None:
            x_header = self._defaults.x_header
        elif isinstance(x_header, XSendfileHeader):
            x_header = x_header.value

        headers: HeaderList = [
            (x_header, path),
            ("Content-Disposition", content_disposition_value(resolved_disposition, attachment_name)),
            ("Content-Type", mime_type),
        ]
        logger.debug("x-sendfile response: header=%s path=%s mime=%s", headers[0][0], path, mime_type)
        return self._response_factory.create_response(headers=headers)

    # ------------------------------------------------------------------
    # Body responses
    # ------------------------------------------------------------------
    def send_stream_as_file(
        self,
        stream: httpx.SyncByteStream | httpx.AsyncByteStream,
        attachment_name: str,
        disposition: ContentDisposition | str | None = None,
        mime_type: str | None = None,
    ) -> httpx.Response:
        """Send a stream to the browser as a file.

        The stream becomes the response body as-is; closing the response
        closes the stream.

        Args:
            stream: The body stream.
            attachment_name: Name shown to the user.
            disposition: ``"attachment"`` or ``"inline"``.
            mime_type: MIME type. Defaults to ``application/octet-stream``.

        Raises:
            InvalidDispositionError: If ``disposition`` is invalid.
        """
        resolved_disposition = self._resolve_disposition(disposition)
        return self._stream_response(stream, attachment_name, resolved_disposition, mime_type)

    def send_file(
        self,
        file_path: str | os.PathLike[str],
        attachment_name: str | None = None,
        disposition: ContentDisposition | str | None = None,
        mime_type: str | None = None,
    ) -> httpx.Response:
        """Send a file from disk to the browser.

        Args:
            file_path: Path of the file to send.
            attachment_name: Name shown to the user. Defaults to the last
                component of ``file_path``.
            disposition: ``"attachment"`` or ``"inline"``.
            mime_type: MIME type. Sniffed from the file content when not set.

        Raises:
            InvalidDispositionError: If ``disposition`` is invalid.
            OSError: If the file cannot be opened.
        """
        resolved_disposition = self._resolve_disposition(disposition)

        path = os.fspath(file_path)
        stream = self._stream_factory.create_stream_from_file(path)

        try:
            if attachment_name is None:
                attachment_name = _attachment_name_from_path(path)
            if mime_type is None:
                mime_type = self._resolve_file_mime_type(path)

            return self._stream_response(stream, attachment_name, resolved_disposition, mime_type)
        except BaseException:
            stream.close()
            raise

    def send_content_as_file(
        self,
        content: ContentLike,
        attachment_name: str,
        disposition: ContentDisposition | str | None = None,
        mime_type: str | None = None,
    ) -> httpx.Response:
        """Send in-memory content to the browser as a file.

        No sniffing is done: without ``mime_type`` the type is
        ``application/octet-stream`` even for text.

        Args:
            content: Bytes to send. Strings are encoded as UTF-8.
            attachment_name: Name shown to the user.
            disposition: ``"attachment"`` or ``"inline"``.
            mime_type: MIME type. Defaults to ``application/octet-stream``.

        Raises:
            InvalidDispositionError: If ``disposition`` is invalid.
        """
        resolved_disposition = self._resolve_disposition(disposition)
        stream = self._stream_factory.create_stream(content)
        return self._stream_response(stream, attachment_name, resolved_disposition, mime_type)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _resolve_disposition(self, disposition: ContentDisposition | str | None) -> ContentDisposition:
        if disposition is None:
            return self._defaults.disposition
        return assert_disposition(disposition)

    def _resolve_file_mime_type(self, path: str) -> str:
        if self._defaults.mime_type is not None:
            return self._defaults.mime_type
        return resolve_file_mime_type(path)

    def _stream_response(
        self,
        stream: httpx.SyncByteStream | httpx.AsyncByteStream,
        attachment_name: str,
        disposition: ContentDisposition,
        mime_type: str | None,
    ) -> httpx.Response:
        if mime_type is None:
            mime_type = self._defaults.mime_type or DEFAULT_MIME_TYPE

        headers: HeaderList = [
            ("Content-Type", mime_type),
            ("Content-Disposition", content_disposition_value(disposition, attachment_name)),
        ]
        logger.debug("Download response: name=%s disposition=%s mime=%s", attachment_name, disposition.value, mime_type)
        return self._response_factory.create_response(headers=headers, stream=stream)


def _attachment_name_from_path(path: str) -> str:
    """Return the last component of ``path`` (``/srv/files/answer.txt`` -> ``answer.txt``)."""
    return PurePath(path).name
