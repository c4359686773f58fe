"""Query value sanitization.

Cleans a query value the way a single-line text input is cleaned before
it leaves the site: markup is stripped, whitespace and control
characters are collapsed, stray percent-encoded octets are dropped, and
backslash escapes added by request quoting are removed.
"""

from __future__ import annotations

import re

_SCRIPT_STYLE_RE = re.compile(r"<(script|style)[^>]*?>.*?</\1>", re.IGNORECASE | re.DOTALL)
_TAG_RE = re.compile(r"<[^>]*>")
_LONE_LT_RE = re.compile(r"<(?=[^a-zA-Z/!?]|$)")
_WHITESPACE_RE = re.compile(r"[\r\n\t ]+")
_CONTROL_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]")
_OCTET_RE = re.compile(r"%[a-fA-F0-9]{2}")
_BACKSLASH_RE = re.compile(r"\\(.?)", re.DOTALL)


def strip_tags(value: str) -> str:
    """Remove markup, dropping ``<script>``/``<style>`` bodies entirely.

    A ``<`` that cannot start a tag (``a < b``) is kept as ``&lt;``.
    """
    value = _LONE_LT_RE.sub("&lt;", value)
    value = _SCRIPT_STYLE_RE.sub("", value)
    value = _TAG_RE.sub("", value)
    return value.replace("<", "&lt;")


def stripslashes(value: str) -> str:
    """Un-quote a backslash-escaped string (``\\\\`` becomes ``\\``, ``\\x`` becomes ``x``)."""
    return _BACKSLASH_RE.sub(lambda m: m.group(1), value)


def sanitize_text(value: str) -> str:
    """Clean a single-line text value.

    Args:
        value: Raw text.

    Returns:
        The cleaned text, or an empty string for text that is not valid UTF-8.
    """
    try:
        value.encode("utf-8")
    except UnicodeEncodeError:
        return ""

    if "<" in value:
        value = strip_tags(value)

    value = _WHITESPACE_RE.sub(" ", value)
    value = _CONTROL_RE.sub("", value)

    found = False
    while _OCTET_RE.search(value):
        value = _OCTET_RE.sub("", value)
        found = True
    if found:
        value = re.sub(r" +", " ", value)

    return value.strip()


def sanitize_query(value: str) -> str:
    """Sanitize a query value for dispatch to a driver."""
    return stripslashes(sanitize_text(value))
