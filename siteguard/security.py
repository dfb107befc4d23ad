"""
siteguard/security.py — Public boundary-hardening API
Import from here: sanitizers, validators, auth attempt limiter, CSRF tokens.
"""
from __future__ import annotations

from siteguard.models import FileMetadata, RateLimitDecision, ValidationResult
from siteguard.services.auth_rate_limit import (
    AuthRateLimiter,
    InMemoryRateLimitStore,
    RateLimitStore,
    check_auth_rate_limit,
    get_auth_rate_limiter,
    reset_auth_rate_limit,
    set_auth_rate_limiter,
)
from siteguard.utils.sanitizers import (
    sanitize,
    sanitize_content,
    sanitize_file_name,
    sanitize_input,
)
from siteguard.utils.tokens import generate_secure_token
from siteguard.utils.validators import (
    is_valid_email,
    is_valid_url,
    validate_file_upload,
    validate_password,
)

__all__ = [
    "AuthRateLimiter",
    "FileMetadata",
    "InMemoryRateLimitStore",
    "RateLimitDecision",
    "RateLimitStore",
    "ValidationResult",
    "check_auth_rate_limit",
    "generate_secure_token",
    "get_auth_rate_limiter",
    "is_valid_email",
    "is_valid_url",
    "reset_auth_rate_limit",
    "sanitize",
    "sanitize_content",
    "sanitize_file_name",
    "sanitize_input",
    "set_auth_rate_limiter",
    "validate_file_upload",
    "validate_password",
]
