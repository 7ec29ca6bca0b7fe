"""Response Download - build HTTP responses that send content as a file download.

Supports sending files, streams and in-memory content in the response body,
and handing files to the front-end web server through x-sendfile headers.
"""

__version__ = "1.0.0"

from ._detection import DEFAULT_MIME_TYPE, MimeDetection, detect_file_mime_type, resolve_file_mime_type
from ._disposition import ContentDisposition, InvalidDispositionError, assert_disposition, content_disposition_value
from ._factory import DownloadResponseFactory, ResponseFactory
from ._options import DownloadOptions, XSendfileHeader
from ._streams import FileStream, StreamFactory

__all__ = [
    "DEFAULT_MIME_TYPE",
    "ContentDisposition",
    "DownloadOptions",
    "DownloadResponseFactory",
    "FileStream",
    "InvalidDispositionError",
    "MimeDetection",
    "ResponseFactory",
    "StreamFactory",
    "XSendfileHeader",
    "assert_disposition",
    "content_disposition_value",
    "detect_file_mime_type",
    "resolve_file_mime_type",
]
