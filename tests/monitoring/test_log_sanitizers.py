"""Tests for log sanitization helpers."""

from app.monitoring.logging import redact_pii, sanitize_headers, sanitize_log_message


def test_control_characters_escaped() -> None:
    assert sanitize_log_message("GET /\nfake line\r\x00") == "GET /\\nfake line\\r"


def test_sensitive_headers_redacted() -> None:
    headers = {"Authorization": "Bearer abc", "Cookie": "s=1", "Accept": "application/json"}

    assert sanitize_headers(headers) == {
        "Authorization": "[REDACTED]",
        "Cookie": "[REDACTED]",
        "Accept": "application/json",
    }


def test_email_and_jwt_redacted() -> None:
    message = "login jane@example.com with eyJhbGciOi.eyJzdWIiOi.c2lnbmF0dXJl"

    assert redact_pii(message) == "login [REDACTED_EMAIL] with [REDACTED_JWT]"
