"""Strict parsing of URL references.

`urllib.parse` splits almost any string without complaint. `parse_url`
additionally rejects the strings that a strict URL parser refuses, so that
a malformed address is reported instead of silently producing an odd URL.
"""

from __future__ import annotations

__all__ = ("parse_url",)

import re
import string
from urllib.parse import SplitResult, urlsplit

from consoleoperator.errors import InvalidURLError

_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")
_BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")
_SCHEME_CHARS = set(string.ascii_letters + string.digits + "+-.")
_ESCAPE = re.compile(r"%([0-9A-Fa-f]{2})")
_HOST_CHARS = set(
    string.ascii_letters + string.digits + "-._~!$&'()*+,;=:[]<>\""
)


def parse_url(value: str) -> SplitResult:
    """Parse an absolute or relative URL reference.

    An empty string parses to an empty URL, whose ``geturl()`` is also
    empty.

    Raises
    ------
    consoleoperator.errors.InvalidURLError
        Raised if ``value`` is not a syntactically valid URL reference.
    """
    if _CONTROL_CHARS.search(value):
        raise InvalidURLError(value, "invalid control character in URL")

    reference, _, fragment = value.partition("#")
    scheme, rest = _split_scheme(value, reference)

    if "?" in rest:
        rest = rest.split("?", 1)[0]

    if not scheme and not rest.startswith("/"):
        segment = rest.split("/", 1)[0]
        if ":" in segment:
            raise InvalidURLError(
                value, "first path segment in URL cannot contain colon"
            )

    if rest.startswith("//"):
        authority, _, path = rest[2:].partition("/")
        _check_host(value, authority.rpartition("@")[2])
    else:
        path = rest

    if _BAD_ESCAPE.search(path) or _BAD_ESCAPE.search(fragment):
        raise InvalidURLError(value, "invalid URL escape")

    try:
        return urlsplit(value)
    except ValueError as e:
        raise InvalidURLError(value, str(e)) from e


def _split_scheme(value: str, reference: str) -> tuple[str, str]:
    for i, char in enumerate(reference):
        if char in string.ascii_letters:
            continue
        if char in _SCHEME_CHARS:
            if i == 0:
                return "", reference
            continue
        if char == ":":
            if i == 0:
                raise InvalidURLError(value, "missing protocol scheme")
            return reference[:i], reference[i + 1 :]
        break
    return "", reference


def _check_host(value: str, host: str) -> None:
    if _BAD_ESCAPE.search(host):
        raise InvalidURLError(value, "invalid URL escape")

    if host.startswith("["):
        closing = host.find("]")
        if closing < 0:
            raise InvalidURLError(value, "missing ']' in host")
        port = host[closing + 1 :]
        if port and not port.startswith(":"):
            raise InvalidURLError(
                value, f"invalid port {port!r} after host"
            )
        # Any escape is allowed in an IPv6 zone identifier.
        name = host[: closing + 1]
        zone = name.find("%25")
        if zone >= 0:
            name = name[:zone] + "]"
    else:
        _, colon, port = host.rpartition(":")
        port = colon + port if colon else ""
        name = host[: len(host) - len(port)]

    if not all(char in string.digits for char in port[1:]):
        raise InvalidURLError(value, f"invalid port {port!r} after host")

    for escape in _ESCAPE.findall(name):
        if int(escape, 16) < 0x80:
            raise InvalidURLError(value, "invalid URL escape")
    for char in _ESCAPE.sub("", name):
        if char.isascii() and char not in _HOST_CHARS:
            raise InvalidURLError(
                value, f"invalid character {char!r} in host name"
            )
