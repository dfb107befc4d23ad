"""
siteguard/utils/sanitizers.py — Untrusted text sanitizers
General input, free-text content (comments, descriptions), upload file names.

Every sanitizer output contains no `<`/`>`, no case-insensitive
`javascript:` / `data:` / `vbscript:`, stays under its length cap
and has no leading/trailing whitespace.
"""
from __future__ import annotations

import re
from typing import Any

MAX_INPUT_LENGTH = 1000
MAX_CONTENT_LENGTH = 2000
MAX_FILE_NAME_LENGTH = 100

_ANGLE_BRACKETS = re.compile(r"[<>]")
_DANGEROUS_PROTOCOLS = re.compile(r"javascript:|data:|vbscript:", re.IGNORECASE)
_SCRIPT_WORDS = re.compile(
    r"\b(?:script|javascript|vbscript|onload|onerror|onclick)\b",
    re.IGNORECASE,
)
_UNSAFE_FILE_NAME_CHARS = re.compile(r"[^a-zA-Z0-9.\-]")
_UNDERSCORE_RUNS = re.compile(r"_{2,}")


def _strip_dangerous(text: str, max_length: int) -> str:
    """
    Trim, drop angle brackets and script protocols, truncate.
    Repeated until stable: removing "javascript:" from
    "javajavascript:script:" leaves a fresh "javascript:".
    """
    previous = None
    while text != previous:
        previous = text
        text = _ANGLE_BRACKETS.sub("", text.strip())
        text = _DANGEROUS_PROTOCOLS.sub("", text)
        text = text[:max_length].strip()
    return text


def sanitize_input(value: Any, max_length: int = MAX_INPUT_LENGTH) -> str:
    """Sanitize a declared text field. Anything that is not a `str` becomes ""."""
    if not isinstance(value, str):
        return ""
    return _strip_dangerous(value, max_length)


def sanitize(value: Any, max_length: int = MAX_INPUT_LENGTH) -> str:
    """
    Sanitize arbitrary input into a display-safe string.

    None -> "". Other non-strings are stringified first, so numbers,
    booleans and containers degrade to a safe representation.
    Idempotent: sanitize(sanitize(x)) == sanitize(x).
    """
    if value is None:
        return ""
    if not isinstance(value, str):
        value = str(value)
    return _strip_dangerous(value, max_length)


def sanitize_content(text: Any, max_length: int = MAX_CONTENT_LENGTH) -> str:
    """
    Sanitize comments and descriptions.
    Applies `sanitize`, then removes standalone script-related words
    (whole words only: "description" keeps its "script").
    """
    cleaned = sanitize(text)
    cleaned = _SCRIPT_WORDS.sub("", cleaned)
    return cleaned[:max_length].strip()


def sanitize_file_name(name: Any, max_length: int = MAX_FILE_NAME_LENGTH) -> str:
    """
    Map a client-supplied file name onto [A-Za-z0-9._-].
    Never rejects; pair with validate_file_upload for accept/reject.
    """
    if name is None:
        return ""
    name = str(name)
    name = _UNSAFE_FILE_NAME_CHARS.sub("_", name)
    name = _UNDERSCORE_RUNS.sub("_", name)
    return name[:max_length]
