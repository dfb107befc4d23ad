"""
siteguard/utils/validators.py — Structural validators for untrusted input
Email, password strength, URL scheme, upload metadata.
Never raises on bad input: returns False or a failed ValidationResult.
"""
from __future__ import annotations

import re
from typing import Any, Mapping, Union

from loguru import logger
from pydantic import AnyUrl, TypeAdapter, ValidationError

from siteguard.core import logging as app_logging
from siteguard.models import FileMetadata, ValidationResult
from siteguard.utils.sanitizers import sanitize

MAX_EMAIL_LENGTH = 254
MIN_PASSWORD_LENGTH = 8
MAX_UPLOAD_BYTES = 10 * 1024 * 1024  # 10 MiB

ALLOWED_EXTENSIONS = (
    ".jpg", ".jpeg", ".png", ".webp", ".gif", ".pdf", ".xlsx", ".xls", ".csv",
)
# Browsers report spreadsheets inconsistently; their MIME type is not checked.
SPREADSHEET_EXTENSIONS = frozenset({".xlsx", ".xls", ".csv"})
ALLOWED_MIME_TYPES = frozenset({
    "image/jpeg",
    "image/jpg",
    "image/png",
    "image/webp",
    "image/gif",
    "application/pdf",
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",  # xlsx
    "application/vnd.ms-excel",  # xls
    "text/csv",
    "application/octet-stream",
    "application/zip",  # xlsx is a zip container
})
ALLOWED_URL_SCHEMES = frozenset({"http", "https"})
_URL_ADAPTER = TypeAdapter(AnyUrl)

_EMAIL_RE = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
_REPEATED_CHAR_RE = re.compile(r"(.)\1{2,}")
_CHARACTER_CLASSES = (
    (re.compile(r"[a-z]"), "a lowercase letter"),
    (re.compile(r"[A-Z]"), "an uppercase letter"),
    (re.compile(r"[0-9]"), "a number"),
)


# ──────────────────────────────────────────────────────────────────────────────
# Email
# ──────────────────────────────────────────────────────────────────────────────

def is_valid_email(email: Any) -> bool:
    """Syntactic local@domain.tld check on the sanitized value. No DNS/MX lookup."""
    sanitized = sanitize(email)
    return _EMAIL_RE.fullmatch(sanitized) is not None and len(sanitized) <= MAX_EMAIL_LENGTH


# ──────────────────────────────────────────────────────────────────────────────
# Password strength
# ──────────────────────────────────────────────────────────────────────────────

def validate_password(password: str) -> ValidationResult:
    """
    Minimal strength policy, first failure wins:
    length >= 8, lowercase + uppercase + digit, no char repeated 3+ times in a row.
    """
    if not isinstance(password, str):
        return ValidationResult.fail("Password must be text.")

    if len(password) < MIN_PASSWORD_LENGTH:
        return ValidationResult.fail(
            f"Password is too short: use at least {MIN_PASSWORD_LENGTH} characters."
        )

    missing = [
        label for pattern, label in _CHARACTER_CLASSES if not pattern.search(password)
    ]
    if missing:
        return ValidationResult.fail(f"Password must contain {', '.join(missing)}.")

    if _REPEATED_CHAR_RE.search(password):
        return ValidationResult.fail(
            "Password cannot repeat the same character 3 or more times in a row."
        )

    return ValidationResult.ok()


# ──────────────────────────────────────────────────────────────────────────────
# Upload metadata
# ──────────────────────────────────────────────────────────────────────────────

def _file_extension(file_name: str) -> str:
    """From the last '.' to the end. A name without a dot is returned whole."""
    idx = file_name.rfind(".")
    return file_name[idx:] if idx != -1 else file_name


def _check_upload(file: FileMetadata) -> ValidationResult:
    if file.size > MAX_UPLOAD_BYTES:
        return ValidationResult.fail(
            f"File is too large. Maximum allowed is {MAX_UPLOAD_BYTES // (1024 * 1024)}MB."
        )

    file_name = file.name.lower()
    extension = _file_extension(file_name)
    if extension not in ALLOWED_EXTENSIONS:
        return ValidationResult.fail(
            f"File type not allowed: {extension}. "
            f"Use only: {', '.join(ALLOWED_EXTENSIONS)}"
        )

    if extension not in SPREADSHEET_EXTENSIONS and file.content_type not in ALLOWED_MIME_TYPES:
        return ValidationResult.fail(
            "File type not allowed. Use only images, PDFs or spreadsheets."
        )

    if ".." in file_name or "/" in file_name or "\\" in file_name:
        return ValidationResult.fail("File name contains characters that are not allowed.")

    if len(file_name.split(".")) > 2:
        return ValidationResult.fail("Files with multiple extensions are not allowed.")

    return ValidationResult.ok()


def validate_file_upload(
    file: Union[FileMetadata, Mapping[str, Any]],
) -> ValidationResult:
    """
    Accept or reject an upload from its declared name, size and MIME type.
    Extension-based only; no magic-byte inspection.
    Accepts a FileMetadata or a mapping with `name`, `size`, `type`.
    """
    if not isinstance(file, FileMetadata):
        try:
            file = FileMetadata.model_validate(file)
        except ValidationError as exc:
            logger.debug(f"Upload metadata unreadable: {exc}")
            return ValidationResult.fail("File metadata is invalid.")

    result = _check_upload(file)
    if not result.is_valid:
        app_logging.log_upload_rejected(
            file_name=file.name,
            size=file.size,
            content_type=file.content_type,
            reason=result.message or "",
        )
    return result


# ──────────────────────────────────────────────────────────────────────────────
# URL
# ──────────────────────────────────────────────────────────────────────────────

def is_valid_url(url: Any) -> bool:
    """
    True only for http(s) URLs that survive a full WHATWG-style parse.
    Rejects javascript:, data:, file: and every other scheme, and hosts
    carrying spaces, angle brackets or control characters.
    """
    if not isinstance(url, str):
        return False
    try:
        parsed = _URL_ADAPTER.validate_python(url)
    except ValidationError as exc:
        logger.debug(f"URL parse failed: {exc.errors()[0]['msg']} | URL: {url[:200]!r}")
        return False
    return parsed.scheme in ALLOWED_URL_SCHEMES and bool(parsed.host)
