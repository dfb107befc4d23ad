"""
siteguard/utils/tokens.py — CSRF token generation
"""
from __future__ import annotations

import secrets

TOKEN_BYTES = 32


def generate_secure_token() -> str:
    """
    64 lowercase hex chars from 32 bytes of the OS CSPRNG.
    Errors from the entropy source propagate; there is no weaker fallback.
    """
    return secrets.token_hex(TOKEN_BYTES)
