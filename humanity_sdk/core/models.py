"""Result and option types returned by or passed to the Humanity client."""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

RATE_LIMIT_LIMIT_HEADER = "x-ratelimit-limit"
RATE_LIMIT_REMAINING_HEADER = "x-ratelimit-remaining"
RATE_LIMIT_RESET_HEADER = "x-ratelimit-reset"

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def _parse_int(value: str | None) -> int | None:
    if value is None:
        return None
    match = _LEADING_INT.match(value)
    return int(match.group(1)) if match else None


@dataclass(frozen=True)
class RateLimitInfo:
    """Rate limit snapshot read from ``x-ratelimit-*`` response headers."""

    limit: int | None = None
    remaining: int | None = None
    reset: int | None = None

    @classmethod
    def from_headers(cls, headers: Mapping[str, str]) -> RateLimitInfo | None:
        """Parse rate limit headers.

        Args:
            headers: Response headers. Lookups are case-insensitive when given
                an ``httpx.Headers``; plain dicts must use lower-case keys.

        Returns:
            RateLimitInfo, or None if none of the three headers parsed.
        """
        limit = _parse_int(headers.get(RATE_LIMIT_LIMIT_HEADER))
        remaining = _parse_int(headers.get(RATE_LIMIT_REMAINING_HEADER))
        reset = _parse_int(headers.get(RATE_LIMIT_RESET_HEADER))
        if limit is None and remaining is None and reset is None:
            return None
        return cls(limit=limit, remaining=remaining, reset=reset)

    def to_dict(self) -> dict[str, int]:
        """Convert to a dictionary holding only the fields that were present."""
        values = {"limit": self.limit, "remaining": self.remaining, "reset": self.reset}
        return {k: v for k, v in values.items() if v is not None}


@dataclass(frozen=True)
class AuthorizationUrl:
    """Authorization URL plus the PKCE verifier it was built with.

    The verifier must be persisted by the caller and passed to
    ``exchange_code_for_token``; the client does not store it.
    """

    url: str
    code_verifier: str


@dataclass(frozen=True)
class TokenResult:
    """Normalized authorization-code or refresh-token response."""

    access_token: str
    token_type: str
    expires_in: int
    scope: str
    granted_scopes: list[str]
    preset_keys: list[str]
    authorization_id: str
    app_scoped_user_id: str
    issued_at: str | None = None
    refresh_token: str | None = None
    refresh_token_expires_in: int | None = None
    refresh_issued_at: str | None = None
    id_token: str | None = None
    raw: dict[str, Any] = field(default_factory=dict)
    rate_limit: RateLimitInfo | None = None

    @property
    def user_id(self) -> str:
        """Alias for the application-scoped user id."""
        return self.app_scoped_user_id


@dataclass(frozen=True)
class ClientUserTokenResult:
    """Token issued server-to-server for an already-authorized user."""

    access_token: str
    token_type: str
    expires_in: int
    issued_at: str
    user_id: str
    client_id: str
    authorization_id: str
    scopes: list[str]
    raw: dict[str, Any] = field(default_factory=dict)
    rate_limit: RateLimitInfo | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any], rate_limit: RateLimitInfo | None = None) -> ClientUserTokenResult:
        """Create from a client user token response body."""
        return cls(
            access_token=data.get("access_token", ""),
            token_type=data.get("token_type", "Bearer"),
            expires_in=data.get("expires_in", 0),
            issued_at=data.get("issued_at", ""),
            user_id=data.get("user_id", ""),
            client_id=data.get("client_id", ""),
            authorization_id=data.get("authorization_id", ""),
            scopes=list(data.get("scopes") or []),
            raw=data,
            rate_limit=rate_limit,
        )


@dataclass(frozen=True)
class RevokedTokenDetail:
    """Per-token outcome of a revocation request."""

    subject: str
    status: str
    token_type: str | None = None
    authorization_id: str | None = None
    client_id: str | None = None
    user_id: str | None = None
    reason: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RevokedTokenDetail:
        """Create from a revocation detail record."""
        return cls(
            subject=data.get("subject", "token"),
            status=data.get("status", ""),
            token_type=data.get("token_type"),
            authorization_id=data.get("authorization_id"),
            client_id=data.get("client_id"),
            user_id=data.get("user_id"),
            reason=data.get("reason"),
        )


@dataclass(frozen=True)
class RevokeResult:
    """Outcome of ``revoke_tokens``."""

    revoked: bool
    revoked_count: int
    details: list[RevokedTokenDetail] = field(default_factory=list)
    raw: dict[str, Any] = field(default_factory=dict)
    rate_limit: RateLimitInfo | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any], rate_limit: RateLimitInfo | None = None) -> RevokeResult:
        """Create from a revoke response body."""
        return cls(
            revoked=bool(data.get("revoked", False)),
            revoked_count=data.get("revoked_count", 0),
            details=[RevokedTokenDetail.from_dict(d) for d in data.get("details") or []],
            raw=data,
            rate_limit=rate_limit,
        )


@dataclass(frozen=True)
class HealthStatus:
    """Liveness probe response."""

    status: str
    uptime: float | None = None
    version: str | None = None
    commit: str | None = None
    timestamp: str | None = None
    raw: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> HealthStatus:
        """Create from a liveness response body."""
        return cls(
            status=data.get("status", ""),
            uptime=data.get("uptime"),
            version=data.get("version"),
            commit=data.get("commit"),
            timestamp=data.get("timestamp"),
            raw=data,
        )


@dataclass(frozen=True)
class ReadinessCheck:
    """One dependency check inside a readiness response."""

    name: str
    ok: bool
    details: Any = None


@dataclass(frozen=True)
class ReadinessStatus:
    """Readiness probe response."""

    status: str
    checks: list[ReadinessCheck] = field(default_factory=list)
    raw: dict[str, Any] = field(default_factory=dict)

    @property
    def is_ready(self) -> bool:
        """Check if the service reported itself ready."""
        return self.status == "ready"

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ReadinessStatus:
        """Create from a readiness response body."""
        return cls(
            status=data.get("status", ""),
            checks=[
                ReadinessCheck(name=c.get("name", ""), ok=bool(c.get("ok")), details=c.get("details"))
                for c in data.get("checks") or []
            ],
            raw=data,
        )


@dataclass(frozen=True)
class VerifyPresetOptions:
    """Options form of ``verify_preset``."""

    preset: str
    access_token: str


@dataclass(frozen=True)
class VerifyPresetsOptions:
    """Options form of ``verify_presets``."""

    presets: list[str]
    access_token: str
