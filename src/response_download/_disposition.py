"""Content-Disposition modes, validation and header rendering."""

from __future__ import annotations

from enum import Enum


class ContentDisposition(str, Enum):
    """The two modes a download response can ask the browser for.

    Examples:
        >>> ContentDisposition.ATTACHMENT.value
        'attachment'
        >>> ContentDisposition("inline") is ContentDisposition.INLINE
        True
    """

    ATTACHMENT = "attachment"
    INLINE = "inline"


class InvalidDispositionError(ValueError):
    """Raised when a disposition is neither ``attachment`` nor ``inline``."""

    def __init__(self, value: object) -> None:
        self.value = value
        self.allowed = tuple(member.value for member in ContentDisposition)
        super().__init__(
            f"Disposition value should be either {self.allowed[0]!r} or {self.allowed[1]!r}, {value!r} given."
        )


def assert_disposition(value: ContentDisposition | str) -> ContentDisposition:
    """Validate a disposition and return it as a ``ContentDisposition``.

    Only enum members and the exact strings ``"attachment"`` and ``"inline"``
    are accepted. Case variants are rejected.

    Args:
        value: The disposition to check.

    Returns:
        The matching ``ContentDisposition`` member.

    Raises:
        InvalidDispositionError: If ``value`` is not one of the two modes.
    """
    if isinstance(value, ContentDisposition):
        return value
    if isinstance(value, str):
        try:
            return ContentDisposition(value)
        except ValueError:
            pass
    raise InvalidDispositionError(value)


def content_disposition_value(disposition: ContentDisposition, attachment_name: str) -> str:
    """Render a Content-Disposition header value.

    The name is quoted verbatim; embedded quotes and non-ASCII characters are
    the caller's responsibility.

    Examples:
        >>> content_disposition_value(ContentDisposition.ATTACHMENT, "answer.txt")
        'attachment; filename="answer.txt"'
    """
    return f'{disposition.value}; filename="{attachment_name}"'
