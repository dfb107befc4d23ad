"""
siteguard/routers/api.py — HTTP surface over the security core
Endpoints: /api/sanitize, /api/validate/*, /api/auth/*, /api/csrf-token
The dashboard front end calls the sanitize/validate endpoints; backend
functions (API key) drive the login attempt ledger.
"""

from fastapi import APIRouter, Depends, Request, Response, status

from siteguard.core.auth import verify_api_key
from siteguard.core.rate_limiter import RATE_LIMITS, limiter
from siteguard.models import (
    AuthAttemptRequest,
    AuthStatusResponse,
    EmailRequest,
    FileMetadata,
    PasswordRequest,
    RateLimitDecision,
    SanitizeKind,
    SanitizeRequest,
    SanitizeResponse,
    TokenResponse,
    UrlRequest,
    ValidationResult,
    ValidityResponse,
)
from siteguard.services.auth_rate_limit import get_auth_rate_limiter
from siteguard.utils.sanitizers import sanitize, sanitize_content, sanitize_file_name
from siteguard.utils.tokens import generate_secure_token
from siteguard.utils.validators import (
    is_valid_email,
    is_valid_url,
    validate_file_upload,
    validate_password,
)

router = APIRouter()

_SANITIZERS = {
    SanitizeKind.INPUT: sanitize,
    SanitizeKind.CONTENT: sanitize_content,
    SanitizeKind.FILE_NAME: sanitize_file_name,
}


# ──────────────────────────────────────────────────────────────────────────────
# POST /api/sanitize
# ──────────────────────────────────────────────────────────────────────────────

@router.post("/sanitize", response_model=SanitizeResponse)
@limiter.limit(RATE_LIMITS["sanitize"])
async def sanitize_text(request: Request, body: SanitizeRequest) -> SanitizeResponse:
    """Sanitize free text as general input, comment/description content, or a file name."""
    return SanitizeResponse(sanitized=_SANITIZERS[body.kind](body.text))


# ──────────────────────────────────────────────────────────────────────────────
# POST /api/validate/*
# ──────────────────────────────────────────────────────────────────────────────

@router.post("/validate/email", response_model=ValidityResponse)
@limiter.limit(RATE_LIMITS["validate"])
async def validate_email_endpoint(request: Request, body: EmailRequest) -> ValidityResponse:
    return ValidityResponse(valid=is_valid_email(body.email))


@router.post("/validate/url", response_model=ValidityResponse)
@limiter.limit(RATE_LIMITS["validate"])
async def validate_url_endpoint(request: Request, body: UrlRequest) -> ValidityResponse:
    return ValidityResponse(valid=is_valid_url(body.url))


@router.post("/validate/password", response_model=ValidationResult)
@limiter.limit(RATE_LIMITS["validate"])
async def validate_password_endpoint(request: Request, body: PasswordRequest) -> ValidationResult:
    return validate_password(body.password)


@router.post("/validate/upload", response_model=ValidationResult)
@limiter.limit(RATE_LIMITS["validate"])
async def validate_upload_endpoint(request: Request, body: FileMetadata) -> ValidationResult:
    """Check upload metadata before the client sends the file to storage."""
    return validate_file_upload(body)


# ──────────────────────────────────────────────────────────────────────────────
# Login attempt ledger — API key only
# ──────────────────────────────────────────────────────────────────────────────

@router.post("/auth/attempt", response_model=RateLimitDecision, response_model_exclude_none=True)
@limiter.limit(RATE_LIMITS["auth"])
async def auth_attempt(
    request: Request,
    response: Response,
    body: AuthAttemptRequest,
    _auth: bool = Depends(verify_api_key),
) -> RateLimitDecision:
    """
    Count a login attempt before checking credentials.
    Blocked attempts answer 429 with `allowed: false`.
    """
    decision = get_auth_rate_limiter().check(body.identifier)
    if not decision.allowed:
        response.status_code = status.HTTP_429_TOO_MANY_REQUESTS
    return decision


@router.post("/auth/success", status_code=status.HTTP_204_NO_CONTENT)
@limiter.limit(RATE_LIMITS["auth"])
async def auth_success(
    request: Request,
    body: AuthAttemptRequest,
    _auth: bool = Depends(verify_api_key),
) -> Response:
    """Successful login: the next attempt for this identifier starts fresh."""
    get_auth_rate_limiter().reset(body.identifier)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/auth/status/{identifier}", response_model=AuthStatusResponse)
@limiter.limit(RATE_LIMITS["auth"])
async def auth_status(
    request: Request,
    identifier: str,
    _auth: bool = Depends(verify_api_key),
) -> AuthStatusResponse:
    """Attempts counted in the current window; does not count as an attempt."""
    auth_limiter = get_auth_rate_limiter()
    entry = auth_limiter.peek(identifier)
    attempts = entry.count if entry else 0
    return AuthStatusResponse(
        identifier=identifier,
        attempts=attempts,
        locked=attempts >= auth_limiter.max_attempts,
    )


# ──────────────────────────────────────────────────────────────────────────────
# GET /api/csrf-token
# ──────────────────────────────────────────────────────────────────────────────

@router.get("/csrf-token", response_model=TokenResponse)
@limiter.limit(RATE_LIMITS["csrf"])
async def csrf_token(request: Request) -> TokenResponse:
    return TokenResponse(token=generate_secure_token())
