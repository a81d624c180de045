"""
normalizer.py

Turns a raw user string into a NormalizedURL, or a ParseFailure when the
string cannot be read as a web URL. Never raises.
"""

import logging
import re
from typing import Union
from urllib.parse import unquote, urlsplit

import idna

from .models import NormalizedURL, ParseFailure

logger = logging.getLogger(__name__)

SCHEMES = ("http", "https")

_SCHEME_RE = re.compile(r"^https?://", re.IGNORECASE)
_SPECIAL_PREFIX_RE = re.compile(r"^(https?:)[/\\]*", re.IGNORECASE)

# Code points a host may not contain (WHATWG "forbidden host code points").
_FORBIDDEN_HOST_CHARS = set(" #%/:<>?@[\\]^|") | {chr(c) for c in range(0x20)} | {"\x7f"}


def _ensure_scheme(raw: str) -> str:
    """Prefix http:// unless the input already declares http(s)."""
    if not _SCHEME_RE.match(raw):
        return "http://" + raw
    return raw


def _clean_host(hostname: str) -> str:
    if ":" in hostname:
        # IPv6 literal; urlsplit drops the brackets
        return f"[{hostname.lower()}]"
    # percent-decoded before validation
    host = unquote(hostname, errors="strict").lower()
    if any(ch in _FORBIDDEN_HOST_CHARS for ch in host):
        raise ValueError(f"forbidden character in host {hostname!r}")
    if not host.isascii():
        host = idna.encode(host, uts46=True, transitional=False).decode("ascii")
    return host


def normalize(raw: str) -> Union[NormalizedURL, ParseFailure]:
    text = raw.strip()
    candidate = _ensure_scheme(text)
    # http(s) URLs treat backslashes as slashes and ignore extra leading slashes
    candidate = candidate.replace("\\", "/")
    candidate = _SPECIAL_PREFIX_RE.sub(r"\1//", candidate, count=1)

    try:
        parts = urlsplit(candidate)
        scheme = parts.scheme.lower()
        if scheme not in SCHEMES:
            raise ValueError(f"unsupported scheme {scheme!r}")
        if not parts.hostname:
            raise ValueError("missing host")
        host = _clean_host(parts.hostname)
        # .port validates the port and raises ValueError when it is out of range
        parts.port
    except (ValueError, UnicodeError) as e:
        logger.debug("parse failure for %r: %s", raw, e)
        return ParseFailure(raw=raw, reason=str(e))

    path_and_query = parts.path + (("?" + parts.query) if parts.query else "")
    return NormalizedURL(
        scheme=scheme,
        host=host,
        username=parts.username,
        password=parts.password,
        path_and_query=path_and_query,
    )
