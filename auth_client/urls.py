"""
Base URL helpers. A base URL is absolute and always ends in "/", so that resolving a
relative path against it nests under the base instead of replacing its last segment.
"""
import re
from urllib.parse import urlsplit, urlunsplit

from auth_client.errors import InvalidURLError

# RFC 3986 scheme: ALPHA *( ALPHA / DIGIT / "+" / "-" / "." )
_SCHEME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+.-]*$")
# Anything outside unreserved, reserved and "%"
_ILLEGAL_CHAR_RE = re.compile(r"[^A-Za-z0-9\-._~:/?#\[\]@!$&'()*+,;=%]")
_BAD_ESCAPE_RE = re.compile(r"%(?![0-9A-Fa-f]{2})")


def ensure_trailing_slash(url: str) -> str:
    return url if url.endswith("/") else url + "/"


def validate_absolute_url(url: str) -> str:
    """Return url unchanged if it is a syntactically valid absolute URI, else raise InvalidURLError."""
    bad = _ILLEGAL_CHAR_RE.search(url)
    if bad:
        raise InvalidURLError(f"URL contains illegal character {bad.group()!r}: {url!r}", url)
    if _BAD_ESCAPE_RE.search(url):
        raise InvalidURLError(f"URL contains a malformed percent-escape: {url!r}", url)
    try:
        parts = urlsplit(url)
        # Accessing .port validates it
        parts.port
    except ValueError as e:
        raise InvalidURLError(f"Invalid URL {url!r}: {e}", url) from e
    if not parts.scheme or not _SCHEME_RE.match(parts.scheme):
        raise InvalidURLError(f"URL is not absolute (missing scheme): {url!r}", url)
    if not parts.netloc or not parts.hostname:
        raise InvalidURLError(f"URL has no host: {url!r}", url)
    return url


def normalize_base_url(url) -> str:
    """
    Normalize a caller-supplied base URL: take its string form, append "/" if missing,
    and check the result is an absolute URI.
    """
    return validate_absolute_url(ensure_trailing_slash(str(url)))


def _remove_dot_segments(path: str) -> str:
    out: list[str] = []
    segments = path.split("/")
    for i, seg in enumerate(segments):
        last = i == len(segments) - 1
        if seg == ".":
            if last:
                out.append("")
        elif seg == "..":
            if len(out) > 1:
                out.pop()
            if last:
                out.append("")
        else:
            out.append(seg)
    return "/".join(out)


def resolve(base_url: str, ref: str) -> str:
    """
    Resolve a reference against a base URL (RFC 3986 section 5.2). Works for any scheme,
    unlike urljoin, which leaves the reference untouched for schemes it does not know.
    """
    base = urlsplit(base_url)
    r = urlsplit(ref)
    if r.scheme:
        return urlunsplit((r.scheme, r.netloc, _remove_dot_segments(r.path), r.query, r.fragment))
    if r.netloc:
        return urlunsplit((base.scheme, r.netloc, _remove_dot_segments(r.path), r.query, r.fragment))
    if not r.path:
        query = r.query if r.query else base.query
        return urlunsplit((base.scheme, base.netloc, base.path, query, r.fragment))
    if r.path.startswith("/"):
        path = r.path
    elif base.netloc and not base.path:
        path = "/" + r.path
    else:
        path = base.path[: base.path.rfind("/") + 1] + r.path
    return urlunsplit((base.scheme, base.netloc, _remove_dot_segments(path), r.query, r.fragment))
