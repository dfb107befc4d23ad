"""
siteguard/core/logging.py — loguru structured JSON logging setup
Auth attempts, resets, upload rejections and errors are logged as
structured records so the hosting dashboard can filter on them.
"""
from __future__ import annotations

import hashlib
import json
import sys
import traceback
from datetime import datetime
from typing import Any, Optional

from loguru import logger


def setup_logging(log_level: str = "INFO") -> None:
    """
    Configure loguru for structured JSON output to stdout.
    The host captures stdout; no file sinks.
    """
    # Remove default loguru handler
    logger.remove()

    logger.add(
        sys.stdout,
        level=log_level.upper(),
        format="{message}",
        serialize=True,       # loguru built-in JSON serialization
        backtrace=True,
        diagnose=False,       # Never dump local variables (passwords, tokens)
        colorize=False,
    )


def _build_log_record(
    component: str,
    operation: str,
    extra: Optional[dict[str, Any]] = None,
) -> dict[str, Any]:
    """Build a base structured log record."""
    record: dict[str, Any] = {
        "timestamp": datetime.utcnow().isoformat() + "Z",
        "component": component,
        "operation": operation,
    }
    if extra:
        record.update(extra)
    return record


def hash_identifier(identifier: str) -> str:
    """
    Stable pseudonym for a login identifier (usually an email).
    Lets logs correlate attempts without storing the address itself.
    """
    return hashlib.sha256(identifier.encode("utf-8")).hexdigest()[:16]


# ──────────────────────────────────────────────────────────────────────────────
# Security event helpers
# ──────────────────────────────────────────────────────────────────────────────

def log_auth_attempt(
    identifier: str,
    allowed: bool,
    attempts: int,
    remaining_attempts: Optional[int] = None,
) -> None:
    """Every auth rate-limit decision. Blocked attempts log at WARNING."""
    record = _build_log_record("auth_rate_limit", "check", {
        "identifier_hash": hash_identifier(identifier),
        "allowed": allowed,
        "attempts": attempts,
        "remaining_attempts": remaining_attempts,
    })
    if allowed:
        logger.info(json.dumps(record))
    else:
        logger.warning(json.dumps(record))


def log_auth_reset(identifier: str, had_entry: bool) -> None:
    """Successful authentication cleared the identifier's ledger entry."""
    record = _build_log_record("auth_rate_limit", "reset", {
        "identifier_hash": hash_identifier(identifier),
        "had_entry": had_entry,
    })
    logger.info(json.dumps(record))


def log_upload_rejected(
    file_name: str,
    size: int,
    content_type: str,
    reason: str,
) -> None:
    """Upload metadata failed validation."""
    record = _build_log_record("upload_validator", "validate_file_upload", {
        "file_name": file_name,
        "size": size,
        "content_type": content_type,
        "reason": reason,
    })
    logger.info(json.dumps(record))


def log_error(
    component: str,
    operation: str,
    error: Exception,
    context: Optional[dict[str, Any]] = None,
) -> None:
    """Every error must be logged with full context."""
    tb = "".join(traceback.format_exception(type(error), error, error.__traceback__))
    record = _build_log_record(component, operation, {
        "error_type": type(error).__name__,
        "error_message": str(error),
        "stack_trace": tb[:2000] if tb else "",
        "context": context or {},
    })
    logger.error(json.dumps(record))
