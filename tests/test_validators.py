"""
tests/test_validators.py — Unit tests for email, password, upload and URL validators
"""
from __future__ import annotations

from siteguard.models import FileMetadata
from siteguard.utils.validators import (
    is_valid_email,
    is_valid_url,
    validate_file_upload,
    validate_password,
)

MiB = 1024 * 1024


def _upload(name: str, size: int = 100, content_type: str = "application/octet-stream") -> FileMetadata:
    return FileMetadata(name=name, size=size, type=content_type)


# ──────────────────────────────────────────────────────────────────────────────
# Email
# ──────────────────────────────────────────────────────────────────────────────

def test_email_accepts_simple_address():
    assert is_valid_email("a@b.com")
    assert is_valid_email("  engineer@obra.com.br  ")


def test_email_rejects_malformed_addresses():
    assert not is_valid_email("not-an-email")
    assert not is_valid_email("a@b@c.com")
    assert not is_valid_email("a b@c.com")
    assert not is_valid_email("a@bcom")
    assert not is_valid_email("")


def test_email_rejects_over_254_chars():
    assert not is_valid_email("a" * 250 + "@b.com")


def test_email_checks_the_sanitized_value():
    assert is_valid_email("<a@b.com>")
    assert not is_valid_email(None)


# ──────────────────────────────────────────────────────────────────────────────
# Password
# ──────────────────────────────────────────────────────────────────────────────

def test_password_too_short():
    result = validate_password("abc")
    assert not result.is_valid
    assert "too short" in result.message


def test_password_short_wins_over_other_failures():
    """'aaa' also lacks classes and repeats; only the length failure is reported."""
    result = validate_password("aaa")
    assert "too short" in result.message


def test_password_valid():
    result = validate_password("Abcdefg1")
    assert result.is_valid
    assert result.message is None


def test_password_missing_uppercase():
    result = validate_password("password1")
    assert not result.is_valid
    assert "uppercase" in result.message
    assert "lowercase" not in result.message


def test_password_message_names_every_missing_class():
    result = validate_password("PASSWORD")
    assert "lowercase" in result.message
    assert "number" in result.message
    assert "uppercase" not in result.message


def test_password_three_repeated_characters_rejected():
    result = validate_password("Aaaabbb1")
    assert not result.is_valid
    assert "repeat" in result.message


def test_password_two_repeated_characters_allowed():
    assert validate_password("Aabbcc12").is_valid


def test_password_repeated_digits_rejected():
    assert not validate_password("Abcdef111").is_valid


def test_password_has_no_maximum_length():
    assert validate_password("Ab1" + "xyz" * 100).is_valid


# ──────────────────────────────────────────────────────────────────────────────
# File upload
# ──────────────────────────────────────────────────────────────────────────────

def test_upload_rejects_bad_extension():
    result = validate_file_upload(_upload("x.exe"))
    assert not result.is_valid
    assert ".exe" in result.message
    assert ".jpg" in result.message


def test_upload_rejects_double_extension():
    assert not validate_file_upload(_upload("x.jpg.exe", content_type="image/jpeg")).is_valid
    result = validate_file_upload(_upload("x.tar.pdf", content_type="application/pdf"))
    assert not result.is_valid
    assert "multiple extensions" in result.message


def test_upload_spreadsheets_skip_mime_check():
    assert validate_file_upload(_upload("report.xlsx", size=1000, content_type="application/zip")).is_valid
    assert validate_file_upload(_upload("data.csv", content_type="")).is_valid
    assert validate_file_upload(_upload("old.xls", content_type="text/html")).is_valid


def test_upload_rejects_oversized_file():
    result = validate_file_upload(_upload("big.png", size=11 * MiB, content_type="image/png"))
    assert not result.is_valid
    assert "10MB" in result.message


def test_upload_accepts_exactly_10_mib():
    assert validate_file_upload(_upload("edge.png", size=10 * MiB, content_type="image/png")).is_valid


def test_upload_rejects_mismatched_mime_for_images():
    result = validate_file_upload(_upload("photo.jpg", content_type="text/html"))
    assert not result.is_valid


def test_upload_extension_check_is_case_insensitive():
    assert validate_file_upload(_upload("PHOTO.JPG", content_type="image/jpeg")).is_valid


def test_upload_rejects_path_traversal():
    result = validate_file_upload(_upload("../photo.png", content_type="image/png"))
    assert not result.is_valid
    assert "not allowed" in result.message


def test_upload_rejects_name_without_extension():
    assert not validate_file_upload(_upload("noext")).is_valid


def test_upload_accepts_mapping_metadata():
    assert validate_file_upload({"name": "x.png", "size": 1, "type": "image/png"}).is_valid


def test_upload_unreadable_metadata_is_invalid_not_an_error():
    result = validate_file_upload({"name": "x.png"})
    assert not result.is_valid
    assert "metadata" in result.message


# ──────────────────────────────────────────────────────────────────────────────
# URL
# ──────────────────────────────────────────────────────────────────────────────

def test_url_accepts_http_and_https():
    assert is_valid_url("https://example.com")
    assert is_valid_url("http://localhost:8000/path?q=1")
    assert is_valid_url("HTTPS://EXAMPLE.COM")


def test_url_rejects_other_schemes():
    assert not is_valid_url("javascript:alert(1)")
    assert not is_valid_url("data:text/html,<script>alert(1)</script>")
    assert not is_valid_url("file:///etc/passwd")
    assert not is_valid_url("ftp://example.com/file")


def test_url_rejects_unparsable_input():
    assert not is_valid_url("not a url")
    assert not is_valid_url("http://[::1")
    assert not is_valid_url("https://example.com:99999")
    assert not is_valid_url(None)


def test_url_rejects_hosts_with_forbidden_characters():
    assert not is_valid_url("http://exa mple.com")
    assert not is_valid_url("http://<script>/")
    assert not is_valid_url("https://a\x00b.com")


def test_url_rejects_http_without_host():
    assert not is_valid_url("http://")
