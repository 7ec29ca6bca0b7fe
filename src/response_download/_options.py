"""Factory-level defaults and known x-sendfile header names."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from ._disposition import ContentDisposition, assert_disposition


class XSendfileHeader(str, Enum):
    """Header names understood by common front-end servers.

    Examples:
        >>> header = XSendfileHeader.NGINX
        >>> header = XSendfileHeader.APACHE
    """

    APACHE = "X-Sendfile"
    LIGHTTPD = "X-LIGHTTPD-send-file"
    NGINX = "X-Accel-Redirect"


@dataclass(frozen=True)
class DownloadOptions:
    """Defaults used by ``DownloadResponseFactory`` when a call leaves an option out.

    Attributes:
        disposition: Disposition mode. Strings are coerced to ``ContentDisposition``.
        mime_type: MIME type for every response. ``None`` sniffs files and uses
            ``application/octet-stream`` for streams and raw content.
        x_header: Header name used by ``x_send_file``.

    Examples:
        >>> options = DownloadOptions(disposition="inline", x_header=XSendfileHeader.NGINX)
        >>> options.x_header
        'X-Accel-Redirect'
    """

    disposition: ContentDisposition = field(default=ContentDisposition.ATTACHMENT)
    mime_type: str | None = field(default=None)
    x_header: str = field(default=XSendfileHeader.APACHE.value)

    def __post_init__(self) -> None:
        object.__setattr__(self, "disposition", assert_disposition(self.disposition))
        if isinstance(self.x_header, XSendfileHeader):
            object.__setattr__(self, "x_header", self.x_header.value)
