"""Sanitization of untrusted document names for HTTP headers."""

import re
import unicodedata
from typing import ClassVar
from urllib.parse import quote


class FilenameSanitizer:
    """
    Turn an untrusted, client-supplied filename into safe header values.

    The stored name is never changed; these helpers only shape what is
    echoed back in Content-Disposition.
    """

    # Control chars (incl. CR/LF), quote and backslash break the quoted-string.
    UNSAFE_QUOTED_PATTERN: ClassVar[re.Pattern[str]] = re.compile(r'[\x00-\x1f\x7f"\\]')
    FALLBACK_NAME: ClassVar[str] = "download"
    REPLACEMENT: ClassVar[str] = "_"

    @classmethod
    def ascii_fallback(cls, name: str) -> str:
        """Return an ASCII-only name safe inside filename="...".

        Accented characters are decomposed to their base letter; anything
        else outside printable ASCII is replaced.

        Args:
            name: Raw filename.

        Returns:
            Printable ASCII string without quotes, backslashes or control chars.
        """
        normalized = unicodedata.normalize("NFKD", name)
        chars = []
        for ch in normalized:
            if unicodedata.combining(ch):
                continue
            chars.append(ch if " " <= ch <= "~" else cls.REPLACEMENT)
        cleaned = cls.UNSAFE_QUOTED_PATTERN.sub(cls.REPLACEMENT, "".join(chars)).strip()
        return cleaned or cls.FALLBACK_NAME

    @classmethod
    def needs_extended(cls, name: str) -> bool:
        """Return True if name cannot be sent verbatim in the quoted filename."""
        return cls.ascii_fallback(name) != name


def content_disposition(name: str, disposition: str = "attachment") -> str:
    """Build a Content-Disposition header value for a download.

    Plain ASCII names are sent as-is: ``attachment; filename="report.txt"``.
    Anything else gets a sanitized ASCII filename plus an RFC 5987
    ``filename*`` carrying the exact UTF-8 name percent-encoded, so header
    injection via CR/LF or quotes is impossible.

    Args:
        name: Original (untrusted) filename.
        disposition: "attachment" or "inline".

    Returns:
        Header value.
    """
    fallback = FilenameSanitizer.ascii_fallback(name)
    value = f'{disposition}; filename="{fallback}"'
    if FilenameSanitizer.needs_extended(name):
        value += f"; filename*=UTF-8''{quote(name, safe='')}"
    return value
