# account_activation/domain/services.py
from __future__ import annotations

import hashlib
import hmac
import secrets
from typing import Literal

CheckCodeAlgorithm = Literal["sha1", "hmac-sha256"]


def generate_salt() -> str:
    """Random per-session salt mixed into the check-code."""
    return secrets.token_hex(16)


def generate_confirm_token() -> str:
    return secrets.token_urlsafe(32)


def secure_compare(a: str, b: str) -> bool:
    """
    Constant-time comparison for secrets.
    Accepts strings; falls back to bytes if needed.
    """
    try:
        # hmac.compare_digest supports str if types match
        return hmac.compare_digest(a, b)
    except TypeError:
        return hmac.compare_digest(a.encode("utf-8"), b.encode("utf-8"))


def compute_check_code(
    email: str,
    password_hash: str,
    salt: str,
    algorithm: CheckCodeAlgorithm = "sha1",
) -> str:
    """
    Derive the check-code that binds an activation link to one session salt.

    "sha1" is hex(SHA1(email || password_hash || salt)), the format already
    issued by existing links. "hmac-sha256" keys HMAC-SHA256 with the salt
    over (email || password_hash).
    """
    if algorithm == "sha1":
        data = (email + password_hash + salt).encode("utf-8")
        return hashlib.sha1(data).hexdigest()
    if algorithm == "hmac-sha256":
        return hmac.new(
            salt.encode("utf-8"),
            (email + password_hash).encode("utf-8"),
            hashlib.sha256,
        ).hexdigest()
    raise ValueError(f"unknown check-code algorithm: {algorithm}")


def verify_check_code(
    check: str,
    email: str,
    password_hash: str,
    salt: str,
    algorithm: CheckCodeAlgorithm = "sha1",
) -> bool:
    expected = compute_check_code(email, password_hash, salt, algorithm)
    return secure_compare(check, expected)
