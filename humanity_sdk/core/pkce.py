"""PKCE (RFC 7636) verifier and S256 challenge helpers."""

from __future__ import annotations

import base64
import hashlib
import math
import secrets

MIN_VERIFIER_LENGTH = 43
MAX_VERIFIER_LENGTH = 128
DEFAULT_VERIFIER_LENGTH = 64


def _base64url(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).decode("ascii").rstrip("=")


def generate_code_verifier(length: int = DEFAULT_VERIFIER_LENGTH) -> str:
    """Generate a PKCE code verifier.

    Args:
        length: Verifier length in characters (43-128 inclusive).

    Returns:
        URL-safe base64 random string of exactly ``length`` characters.

    Raises:
        ValueError: If ``length`` is outside 43-128.
    """
    if length < MIN_VERIFIER_LENGTH or length > MAX_VERIFIER_LENGTH:
        raise ValueError(
            f"PKCE code verifier length must be between {MIN_VERIFIER_LENGTH} "
            f"and {MAX_VERIFIER_LENGTH} characters"
        )
    num_bytes = math.ceil(length * 3 / 4)
    return _base64url(secrets.token_bytes(num_bytes))[:length]


def derive_code_challenge(code_verifier: str) -> str:
    """Derive the S256 code challenge for a verifier.

    Raises:
        ValueError: If the verifier is empty.
    """
    if not code_verifier:
        raise ValueError("Code verifier is required to derive code challenge")
    digest = hashlib.sha256(code_verifier.encode("ascii")).digest()
    return _base64url(digest)
