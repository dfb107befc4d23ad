"""
siteguard/models.py — All Pydantic data schemas
Validation results, upload metadata, auth limiter ledger entries,
and the request/response bodies of the HTTP API.
"""
from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


# ──────────────────────────────────────────────────────────────────────────────
# Enumerations
# ──────────────────────────────────────────────────────────────────────────────

class SanitizeKind(str, Enum):
    INPUT = "input"
    CONTENT = "content"
    FILE_NAME = "file_name"


# ──────────────────────────────────────────────────────────────────────────────
# Validation
# ──────────────────────────────────────────────────────────────────────────────

class ValidationResult(BaseModel):
    """Accept/reject decision. `message` is set exactly when the input is rejected."""

    is_valid: bool
    message: Optional[str] = None

    @model_validator(mode="after")
    def check_message(self) -> "ValidationResult":
        if self.is_valid and self.message is not None:
            raise ValueError("valid results carry no message")
        if not self.is_valid and not self.message:
            raise ValueError("invalid results must carry a message")
        return self

    @classmethod
    def ok(cls) -> "ValidationResult":
        return cls(is_valid=True)

    @classmethod
    def fail(cls, message: str) -> "ValidationResult":
        return cls(is_valid=False, message=message)


class FileMetadata(BaseModel):
    """Client-declared metadata of an upload. Nothing here is content-verified."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    size: int = Field(ge=0, description="Size in bytes")
    content_type: str = Field(default="", alias="type", description="Declared MIME type")


# ──────────────────────────────────────────────────────────────────────────────
# Auth attempt limiter
# ──────────────────────────────────────────────────────────────────────────────

class RateLimitEntry(BaseModel):
    count: int = Field(ge=1)
    last_attempt: float  # seconds, from the limiter's clock


class RateLimitDecision(BaseModel):
    allowed: bool
    # Absent when the attempt is blocked
    remaining_attempts: Optional[int] = None


# ──────────────────────────────────────────────────────────────────────────────
# API request/response bodies
# ──────────────────────────────────────────────────────────────────────────────

class SanitizeRequest(BaseModel):
    text: str = Field(max_length=100_000)
    kind: SanitizeKind = SanitizeKind.INPUT


class SanitizeResponse(BaseModel):
    sanitized: str


class EmailRequest(BaseModel):
    email: str


class UrlRequest(BaseModel):
    url: str


class PasswordRequest(BaseModel):
    password: str


class ValidityResponse(BaseModel):
    valid: bool


class AuthAttemptRequest(BaseModel):
    identifier: str = Field(min_length=1, max_length=320)


class AuthStatusResponse(BaseModel):
    identifier: str
    attempts: int
    locked: bool


class TokenResponse(BaseModel):
    token: str
