"""
tests/test_tokens.py — Unit tests for CSRF token generation
"""
from __future__ import annotations

import re
from unittest.mock import patch

import pytest

from siteguard.utils.tokens import generate_secure_token


def test_token_is_64_lowercase_hex_chars():
    token = generate_secure_token()
    assert re.fullmatch(r"[0-9a-f]{64}", token)


def test_tokens_differ_between_calls():
    tokens = {generate_secure_token() for _ in range(100)}
    assert len(tokens) == 100


def test_entropy_failure_propagates():
    """No fallback to a weaker generator."""
    with patch("siteguard.utils.tokens.secrets.token_hex", side_effect=NotImplementedError("no CSPRNG")):
        with pytest.raises(NotImplementedError):
            generate_secure_token()
