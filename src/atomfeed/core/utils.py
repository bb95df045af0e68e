"""Shared helpers for URL building, timestamps and identity hashing."""

import hashlib
import re
import uuid
from collections.abc import Iterable
from datetime import UTC, datetime
from urllib.parse import quote

DEFAULT_TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S"
DEFAULT_SUMMARY_WORDS = 20

# Characters left alone by JavaScript's encodeURIComponent
_URI_COMPONENT_SAFE = "-_.!~*'()"

_SCHEME_RE = re.compile(r"^([A-Za-z][A-Za-z0-9+.-]*:)/{2,}")
_SLASH_RUN_RE = re.compile(r"/{2,}")
_COMPACT_TIMESTAMP_RE = re.compile(r"^\d{14}(\d{1,3})?$")
_WHITESPACE_RE = re.compile(r"\s")


def path_join(parts: Iterable[str]) -> str:
    """Join URL segments with ``/`` and collapse repeated slashes.

    The two slashes following a URL scheme are kept.

    Examples:
        >>> path_join(["https://site.example/", "/atom.xml"])
        'https://site.example/atom.xml'
        >>> path_join(["http://a.example", "static", "x.html"])
        'http://a.example/static/x.html'

    """
    joined = "/".join(parts)
    match = _SCHEME_RE.match(joined)
    if not match:
        return _SLASH_RUN_RE.sub("/", joined)
    rest = joined[match.end() :]
    return f"{match.group(1)}//{_SLASH_RUN_RE.sub('/', rest)}"


def percent_encode(value: str) -> str:
    """Percent-encode a URI component the way ``encodeURIComponent`` does."""
    return quote(value, safe=_URI_COMPONENT_SAFE)


def to_permalink(title: str) -> str:
    return "#" + percent_encode(title)


def to_file_name(title: str) -> str:
    """Return the static file name for a title.

    The title is encoded twice: the static file server decodes request paths
    once more before looking up the file on disk.
    """
    return percent_encode(percent_encode(title)) + ".html"


def truncate_words(text: str, words: int = DEFAULT_SUMMARY_WORDS) -> str:
    """Keep the first ``words`` whitespace-separated pieces of ``text``.

    Every single whitespace character is a separator, so runs of whitespace
    produce empty pieces that count towards the limit.
    """
    if words <= 0:
        return ""
    return " ".join(_WHITESPACE_RE.split(text, maxsplit=words)[:words])


def md5_guid(value: str) -> str:
    """Hash ``value`` into a stable GUID-shaped identifier (8-4-4-4-12)."""
    digest = hashlib.md5(value.encode("utf-8"), usedforsecurity=False).hexdigest()
    return str(uuid.UUID(hex=digest))


def parse_timestamp(value: str) -> datetime:
    """Parse a store timestamp into an aware UTC datetime.

    Accepts compact ``YYYYMMDDhhmmss`` values with optional milliseconds as
    well as ISO-8601 strings. Naive values are taken to be UTC.
    """
    value = value.strip()
    if _COMPACT_TIMESTAMP_RE.match(value):
        parsed = datetime.strptime(value[:14], "%Y%m%d%H%M%S")
        millis = value[14:]
        if millis:
            parsed = parsed.replace(microsecond=int(millis.ljust(3, "0")) * 1000)
    else:
        parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def format_timestamp(dt: datetime | None, format_str: str = DEFAULT_TIMESTAMP_FORMAT) -> str:
    """Format a datetime in UTC, returning an empty string for ``None``."""
    if dt is None:
        return ""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC).strftime(format_str)
