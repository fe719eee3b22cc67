"""Humanity API client.

Builds PKCE authorization URLs, exchanges and revokes tokens, verifies
presets, polls the credential and authorization feeds and caches the
discovery document. Every request goes through :meth:`HumanityClient._execute`,
which records ``x-ratelimit-*`` headers and turns non-success responses into
:class:`~humanity_sdk.core.errors.HumanityError`.
"""

from __future__ import annotations

import hmac
import logging
import time
from collections.abc import Callable, Sequence
from datetime import UTC, datetime
from pathlib import Path
from typing import Any, Protocol
from urllib.parse import quote, urlencode

import httpx

from humanity_sdk.adapters.presets import PresetBatchResult, PresetCheckResult, PresetsAdapter
from humanity_sdk.adapters.scopes import ScopesAdapter
from humanity_sdk.adapters.status import AuthorizationUpdates, CredentialUpdates, StatusAdapter
from humanity_sdk.core.casing import camel_to_snake
from humanity_sdk.core.config import SdkConfig, load_config
from humanity_sdk.core.connection import Connection, HttpConnectionFactory, join_url
from humanity_sdk.core.environment import EnvironmentDescriptor, EnvironmentRegistry
from humanity_sdk.core.errors import (
    HumanityConfigurationError,
    HumanityError,
    HumanityValidationError,
)
from humanity_sdk.core.logging import LoggingClient, ProtocolLogger, get_protocol_logger, parse_log_level
from humanity_sdk.core.models import (
    AuthorizationUrl,
    ClientUserTokenResult,
    HealthStatus,
    RateLimitInfo,
    ReadinessStatus,
    RevokeResult,
    TokenResult,
    VerifyPresetOptions,
    VerifyPresetsOptions,
)
from humanity_sdk.core.pkce import (
    DEFAULT_VERIFIER_LENGTH,
    MIN_VERIFIER_LENGTH,
    derive_code_challenge,
    generate_code_verifier,
)
from humanity_sdk.presets.catalog import AUTHORIZATION_STATUSES
from humanity_sdk.presets.discovery import DISCOVERY_PATH, DiscoveryConfiguration
from humanity_sdk.presets.registry import PresetDescriptor, PresetRegistry

logger = logging.getLogger(__name__)

CONFIGURATION_CACHE_TTL_SECONDS = 60 * 60
MAX_BATCH_PRESETS = 10
MAX_POLL_LIMIT = 100
INVALID_RESPONSE_CODE = "INVALID_RESPONSE"

LITERAL_SCOPE_KEYWORDS = frozenset({"openid"})
CLIENT_USER_IDENTIFIER_TYPES = frozenset({"id", "user", "user_id", "email", "evm", "evm_addr", "wallet"})
TOKEN_TYPE_HINTS = frozenset({"access_token", "refresh_token", "authorization"})

OAUTH_AUTHORIZE_PATH = "oauth/authorize"
OAUTH_TOKEN_PATH = "oauth/token"
OAUTH_REVOKE_PATH = "oauth/revoke"
CLIENT_USER_TOKEN_PATH = "oauth/client/user-token"
PRESETS_PATH = "presets"
PRESETS_BATCH_PATH = "presets/batch"
CREDENTIALS_PATH = "credentials"
AUTHORIZATIONS_PATH = "authorizations"
HEALTH_PATH = "health"
READINESS_PATH = "ready"


class HttpTransport(Protocol):
    """Anything with an ``httpx.Client``-compatible ``request`` method."""

    def request(self, method: str, url: str, **kwargs: Any) -> httpx.Response: ...


class HumanityClient:
    """Client for the Humanity identity and verification API.

    The client is stateless per call apart from two things it owns: the
    cached discovery document and the preset registry. Concurrent callers
    refreshing the discovery document race and the last response wins.
    """

    def __init__(
        self,
        config: SdkConfig,
        http_client: HttpTransport | None = None,
        environments: EnvironmentRegistry | None = None,
        protocol_logger: ProtocolLogger | None = None,
        cache_ttl: float = CONFIGURATION_CACHE_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize the client.

        Args:
            config: Client settings. ``client_id`` and ``redirect_uri`` are required.
            http_client: Transport used for every request, normally an
                ``httpx.Client``. A protocol-logging client is created (and
                owned) when omitted.
            environments: Environment profiles to resolve ``config.environment``
                against. A fresh registry with the built-in profiles is used
                when omitted.
            protocol_logger: Logger for HTTP exchanges of the default client.
            cache_ttl: Discovery document lifetime in seconds.
            clock: Monotonic time source for the discovery cache.

        Raises:
            HumanityValidationError: If ``client_id`` or ``redirect_uri`` is missing.
            HumanityConfigurationError: If ``http_client`` cannot send requests
                or the environment is unknown.
        """
        if not config.client_id:
            raise HumanityValidationError("HumanityClient requires a client_id")
        if not config.redirect_uri:
            raise HumanityValidationError("HumanityClient requires a redirect_uri")

        self.config = config
        self._environments = environments or EnvironmentRegistry()
        self._environment = self._resolve_environment()
        self._connections = HttpConnectionFactory(self._environment, config.default_headers)
        self._protocol_logger = protocol_logger or get_protocol_logger()

        if http_client is None:
            self._http: HttpTransport = LoggingClient(
                protocol_logger=self._protocol_logger,
                timeout=config.timeout,
            )
            self._owns_http_client = True
        elif callable(getattr(http_client, "request", None)):
            self._http = http_client
            self._owns_http_client = False
        else:
            raise HumanityConfigurationError(
                "HumanityClient requires an HTTP client with a request() method"
            )

        self._registry = PresetRegistry()
        self._scopes = ScopesAdapter(self._registry)
        self._presets = PresetsAdapter(self._registry)
        self._status = StatusAdapter(self._registry)

        self._cache_ttl = cache_ttl
        self._clock = clock
        self._configuration_cache: DiscoveryConfiguration | None = None
        self._configuration_cache_timestamp: float | None = None

    @classmethod
    def from_config(cls, config_path: Path | None = None, **kwargs: Any) -> HumanityClient:
        """Create a client from config.yaml and ``HUMANITY_SDK_*`` variables.

        Unless a protocol logger is passed, one is created at the configured
        ``log_level``.
        """
        config = load_config(config_path)
        kwargs.setdefault("protocol_logger", ProtocolLogger(level=parse_log_level(config.log_level)))
        return cls(config, **kwargs)

    def __enter__(self) -> HumanityClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        """Close the HTTP client if this instance created it."""
        if self._owns_http_client and isinstance(self._http, httpx.Client):
            self._http.close()

    @property
    def environment(self) -> EnvironmentDescriptor:
        """Get the resolved environment."""
        return self._environment

    @property
    def preset_registry(self) -> PresetRegistry:
        """Get this client's preset registry."""
        return self._registry

    @property
    def protocol_logger(self) -> ProtocolLogger:
        """Get the protocol logger."""
        return self._protocol_logger

    def register_environment(self, descriptor: EnvironmentDescriptor) -> None:
        """Register an environment profile on this client's registry.

        The active environment of this client is not changed; clients built
        later with the same registry can select the new profile.
        """
        self._environments.register(descriptor)

    def list_presets(self) -> list[PresetDescriptor]:
        """List the presets currently known to this client."""
        return self._registry.list()

    # ------------------------------------------------------------------
    # Authorization
    # ------------------------------------------------------------------

    def build_auth_url(
        self,
        scopes: Sequence[str],
        state: str | None = None,
        nonce: str | None = None,
        code_verifier: str | None = None,
        code_verifier_length: int = DEFAULT_VERIFIER_LENGTH,
        additional_query_params: dict[str, str | None] | None = None,
    ) -> AuthorizationUrl:
        """Build a PKCE (S256) authorization URL.

        Scopes containing ``:`` or ``.`` and the keyword ``openid`` are sent
        as-is; anything else is treated as a developer preset key and
        resolved to its scope.

        Args:
            scopes: Literal scopes and/or developer preset keys.
            state: Optional OAuth ``state``.
            nonce: Optional OIDC ``nonce``.
            code_verifier: Verifier to use instead of generating one.
            code_verifier_length: Length of a generated verifier (43-128).
            additional_query_params: Extra parameters. camelCase keys are
                converted to snake_case; None values are skipped.

        Returns:
            AuthorizationUrl with the URL and the verifier to keep for the
            token exchange.

        Raises:
            HumanityValidationError: If no scopes are given.
            ValueError: If ``code_verifier_length`` is outside 43-128.
        """
        if not scopes:
            raise HumanityValidationError("At least one scope is required to build an authorization URL")

        endpoint = self._oauth_endpoints()["authorize"]
        verifier = code_verifier or generate_code_verifier(code_verifier_length)

        params: dict[str, str] = {
            "client_id": self.config.client_id,
            "redirect_uri": self.config.redirect_uri,
            "response_type": "code",
            "scope": " ".join(self._compose_authorization_scopes(scopes)),
            "code_challenge": derive_code_challenge(verifier),
            "code_challenge_method": "S256",
        }
        if state:
            params["state"] = state
        if nonce:
            params["nonce"] = nonce

        for key, value in (additional_query_params or {}).items():
            if value is not None:
                params[camel_to_snake(key)] = value

        separator = "&" if "?" in endpoint else "?"
        return AuthorizationUrl(url=f"{endpoint}{separator}{urlencode(params)}", code_verifier=verifier)

    @staticmethod
    def generate_state(length: int = 32) -> str:
        """Generate a random ``state`` value (at least 43 characters)."""
        return generate_code_verifier(max(length, MIN_VERIFIER_LENGTH))

    @staticmethod
    def generate_nonce(length: int = 32) -> str:
        """Generate a random ``nonce`` value (at least 43 characters)."""
        return generate_code_verifier(max(length, MIN_VERIFIER_LENGTH))

    @staticmethod
    def verify_state(expected: str | None, received: str | None) -> bool:
        """Compare a callback ``state`` with the one that was sent."""
        return _safe_compare(expected, received)

    @staticmethod
    def verify_nonce(expected: str | None, received: str | None) -> bool:
        """Compare an ID token ``nonce`` with the one that was sent."""
        return _safe_compare(expected, received)

    # ------------------------------------------------------------------
    # Tokens
    # ------------------------------------------------------------------

    def exchange_code_for_token(self, code: str, code_verifier: str) -> TokenResult:
        """Exchange an authorization code for tokens.

        Args:
            code: Authorization code from the redirect.
            code_verifier: Verifier returned by :meth:`build_auth_url`.
        """
        if not code:
            raise HumanityValidationError("exchange_code_for_token requires an authorization code")
        if not code_verifier:
            raise HumanityValidationError("exchange_code_for_token requires a code verifier")

        body = {
            "grant_type": "authorization_code",
            "code": code,
            "code_verifier": code_verifier,
            "redirect_uri": self.config.redirect_uri,
            "client_id": self.config.client_id,
        }
        data, rate_limit = self._execute(
            "exchange_code_for_token",
            "POST",
            self._connections.create_root_connection(),
            self._oauth_endpoints()["token"],
            json_body=body,
        )
        return self._map_token_response(data, rate_limit)

    def refresh_access_token(
        self,
        refresh_token: str,
        scope: str | Sequence[str] | None = None,
        client_id: str | None = None,
    ) -> TokenResult:
        """Obtain a new access token with a refresh token.

        Args:
            refresh_token: The refresh token.
            scope: Optional narrower scope, as a string or list of scopes.
            client_id: Client id override.
        """
        if not refresh_token:
            raise HumanityValidationError("refresh_access_token requires a refresh token")

        if isinstance(scope, str):
            scope_value: str | None = scope
        else:
            scope_value = " ".join(scope) if scope else None

        body = {
            "grant_type": "refresh_token",
            "refresh_token": refresh_token,
            "client_id": client_id or self.config.client_id,
            "scope": scope_value,
        }
        data, rate_limit = self._execute(
            "refresh_access_token",
            "POST",
            self._connections.create_root_connection(),
            self._oauth_endpoints()["token"],
            json_body=body,
        )
        return self._map_token_response(data, rate_limit)

    def get_client_user_token(
        self,
        client_secret: str | None = None,
        identifier: str | None = None,
        user_id: str | None = None,
        email: str | None = None,
        evm_address: str | None = None,
    ) -> ClientUserTokenResult:
        """Issue a token for a user who already authorized this application.

        Server-to-server only: requires the client secret and at least one
        user identifier.

        Args:
            client_secret: Application secret. Falls back to ``config.client_secret``.
            identifier: Compound ``"type|value"`` identifier, where type is one
                of ``id``, ``user``, ``user_id``, ``email``, ``evm``,
                ``evm_addr`` or ``wallet``.
            user_id: Direct user id.
            email: User email address.
            evm_address: User EVM wallet address.

        Raises:
            HumanityValidationError: If the secret or every identifier is missing,
                or ``identifier`` is malformed.
            HumanityError: If the user is unknown or has not authorized the app.
        """
        secret = client_secret or self.config.client_secret
        if not secret:
            raise HumanityValidationError("get_client_user_token requires a client_secret")
        if not (identifier or user_id or email or evm_address):
            raise HumanityValidationError(
                "get_client_user_token requires at least one user identifier "
                "(identifier, user_id, email, or evm_address)"
            )
        if identifier:
            _validate_compound_identifier(identifier)

        body = {
            "client_id": self.config.client_id,
            "client_secret": secret,
            "identifier": identifier,
            "user_id": user_id,
            "email": email,
            "evm_address": evm_address,
        }
        connection = self._connections.create_root_connection()
        data, rate_limit = self._execute(
            "get_client_user_token",
            "POST",
            connection,
            connection.url(CLIENT_USER_TOKEN_PATH),
            json_body=body,
        )
        return ClientUserTokenResult.from_dict(data, rate_limit)

    def revoke_tokens(
        self,
        token: str | None = None,
        tokens: Sequence[str] | None = None,
        token_type_hint: str | None = None,
        authorization_id: str | None = None,
        cascade: bool | None = None,
    ) -> RevokeResult:
        """Revoke one token, several tokens or a whole authorization.

        Args:
            token: Single token to revoke.
            tokens: Several tokens to revoke.
            token_type_hint: ``access_token``, ``refresh_token`` or ``authorization``.
            authorization_id: Authorization to revoke.
            cascade: Revoke dependent tokens. None leaves the server default.
        """
        if not (token or tokens or authorization_id):
            raise HumanityValidationError("revoke_tokens requires a token, tokens or an authorization_id")
        if token_type_hint is not None and token_type_hint not in TOKEN_TYPE_HINTS:
            raise HumanityValidationError(
                f"token_type_hint must be one of {', '.join(sorted(TOKEN_TYPE_HINTS))}"
            )

        body = {
            "client_id": self.config.client_id,
            "token": token,
            "tokens": list(tokens) if tokens else None,
            "token_type_hint": token_type_hint,
            "authorization_id": authorization_id,
            "cascade": cascade,
        }
        data, rate_limit = self._execute(
            "revoke_tokens",
            "POST",
            self._connections.create_root_connection(),
            self._oauth_endpoints()["revoke"],
            json_body=body,
        )
        return RevokeResult.from_dict(data, rate_limit)

    # ------------------------------------------------------------------
    # Presets
    # ------------------------------------------------------------------

    def verify_preset(
        self,
        preset: str | VerifyPresetOptions,
        access_token: str | None = None,
    ) -> PresetCheckResult:
        """Verify one preset for the user behind an access token.

        Accepts ``verify_preset(key, token)`` or ``verify_preset(VerifyPresetOptions(...))``.

        Raises:
            PresetVerificationError: If the API returned no result.
        """
        if isinstance(preset, VerifyPresetOptions):
            preset, access_token = preset.preset, preset.access_token
        if not preset:
            raise HumanityValidationError("verify_preset requires a preset identifier")
        if not access_token:
            raise HumanityValidationError("verify_preset requires an access token")

        wire_name = self._scopes.to_wire_name(preset)
        connection = self._connections.create_core_connection(access_token)
        data, rate_limit = self._execute(
            "verify_preset",
            "GET",
            connection,
            connection.url(f"{PRESETS_PATH}/{quote(wire_name, safe='')}"),
        )
        return self._presets.from_single_response({"results": [data] if data else [], "errors": []}, rate_limit)

    def verify_presets(
        self,
        presets: Sequence[str] | VerifyPresetsOptions,
        access_token: str | None = None,
    ) -> PresetBatchResult:
        """Verify up to 10 presets in one request.

        Accepts ``verify_presets(keys, token)`` or ``verify_presets(VerifyPresetsOptions(...))``.

        Raises:
            HumanityValidationError: If the list is empty or longer than 10.
        """
        if isinstance(presets, VerifyPresetsOptions):
            presets, access_token = presets.presets, presets.access_token
        if isinstance(presets, str):
            raise HumanityValidationError("verify_presets requires a list of presets")
        if not access_token:
            raise HumanityValidationError("verify_presets requires an access token")
        preset_keys = list(presets)
        if not preset_keys:
            raise HumanityValidationError("At least one preset is required for verification")
        if len(preset_keys) > MAX_BATCH_PRESETS:
            raise HumanityValidationError(
                f"A maximum of {MAX_BATCH_PRESETS} presets can be verified in a single request"
            )

        body = {"presets": [self._scopes.to_wire_name(key) for key in preset_keys]}
        connection = self._connections.create_core_connection(access_token)
        data, rate_limit = self._execute(
            "verify_presets",
            "POST",
            connection,
            connection.url(PRESETS_BATCH_PATH),
            json_body=body,
        )
        return self._presets.from_batch_response(data, rate_limit)

    # ------------------------------------------------------------------
    # Status feeds
    # ------------------------------------------------------------------

    def poll_credential_updates(
        self,
        access_token: str,
        updated_since: datetime | str | None = None,
        limit: int | None = None,
    ) -> CredentialUpdates:
        """Fetch credential changes since a point in time."""
        if not access_token:
            raise HumanityValidationError("poll_credential_updates requires an access token")
        _validate_limit(limit)

        query = self._status.normalize_credentials_query(
            {"updated_since": _to_iso_string(updated_since), "limit": limit}
        )
        connection = self._connections.create_core_connection(access_token)
        data, rate_limit = self._execute(
            "poll_credential_updates",
            "GET",
            connection,
            connection.url(CREDENTIALS_PATH),
            params=query,
        )
        return self._status.from_credentials_response(data, rate_limit)

    def poll_authorization_updates(
        self,
        access_token: str,
        updated_since: datetime | str | None = None,
        status: str | None = None,
        limit: int | None = None,
    ) -> AuthorizationUpdates:
        """Fetch authorization changes. Without ``status`` only revocations are returned."""
        if not access_token:
            raise HumanityValidationError("poll_authorization_updates requires an access token")
        _validate_limit(limit)
        if status is not None and status not in AUTHORIZATION_STATUSES:
            raise HumanityValidationError("status must be 'active' or 'revoked'")

        query = self._status.normalize_authorizations_query(
            {"status": status, "updated_since": _to_iso_string(updated_since), "limit": limit}
        )
        connection = self._connections.create_core_connection(access_token)
        data, rate_limit = self._execute(
            "poll_authorization_updates",
            "GET",
            connection,
            connection.url(AUTHORIZATIONS_PATH),
            params=query,
        )
        return self._status.from_authorizations_response(data, rate_limit)

    # ------------------------------------------------------------------
    # Discovery and health
    # ------------------------------------------------------------------

    def get_configuration(self, force_refresh: bool = False) -> DiscoveryConfiguration:
        """Get the discovery document, from cache when fresh.

        A fetched document is cached and synced into the preset registry.

        Args:
            force_refresh: Ignore the cache and fetch.
        """
        if not force_refresh and self._has_fresh_configuration_cache():
            logger.debug("Using cached discovery configuration")
            return self._configuration_cache  # type: ignore[return-value]

        connection = self._connections.create_discovery_connection()
        logger.debug(f"Fetching discovery configuration from {connection.host}")
        data, _ = self._execute("get_configuration", "GET", connection, connection.url(DISCOVERY_PATH))

        configuration = DiscoveryConfiguration.from_dict(data)
        self._configuration_cache = configuration
        self._configuration_cache_timestamp = self._clock()
        self._scopes.ingest_configuration(configuration)
        return configuration

    def clear_cache(self) -> None:
        """Drop the cached discovery document."""
        self._configuration_cache = None
        self._configuration_cache_timestamp = None

    def healthcheck(self) -> HealthStatus:
        """Call the liveness probe."""
        connection = self._connections.create_health_connection()
        data, _ = self._execute("healthcheck", "GET", connection, connection.url(HEALTH_PATH))
        return HealthStatus.from_dict(data)

    def readiness(self) -> ReadinessStatus:
        """Call the readiness probe."""
        connection = self._connections.create_health_connection()
        data, _ = self._execute("readiness", "GET", connection, connection.url(READINESS_PATH))
        return ReadinessStatus.from_dict(data)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _execute(
        self,
        operation: str,
        method: str,
        connection: Connection,
        url: str,
        json_body: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
    ) -> tuple[dict[str, Any], RateLimitInfo | None]:
        """Send one request and capture its rate limit headers.

        Transport exceptions propagate unchanged.

        Returns:
            Tuple of (decoded JSON body, rate limit info or None).

        Raises:
            HumanityError: If the response status is not 2xx, or a 2xx body
                is not a JSON object.
        """
        kwargs: dict[str, Any] = {"headers": connection.headers}
        if json_body is not None:
            kwargs["json"] = {k: v for k, v in json_body.items() if v is not None}
        if params:
            kwargs["params"] = params

        with self._protocol_logger.operation(operation):
            response = self._http.request(method, url, **kwargs)

        rate_limit = RateLimitInfo.from_headers(response.headers)
        if not response.is_success:
            error = HumanityError.from_response(response)
            logger.debug(f"{operation} failed: {error}")
            raise error
        if not response.content:
            return {}, rate_limit
        try:
            data = response.json()
        except ValueError:
            data = None
        if not isinstance(data, dict):
            raise HumanityError(
                message=f"Humanity API returned a body that is not a JSON object for {operation}",
                code=INVALID_RESPONSE_CODE,
                status_code=response.status_code,
                method=method,
                url=url,
                body=response.text,
            )
        return data, rate_limit

    def _resolve_environment(self) -> EnvironmentDescriptor:
        if self.config.base_url:
            return EnvironmentDescriptor(
                name=self.config.environment or "custom",
                api_base_url=self.config.base_url,
                discovery_base_url=self.config.base_url,
            )
        return self._environments.resolve(self.config.environment)

    def _oauth_endpoints(self) -> dict[str, str]:
        base = self._environment.api_base_url
        endpoints = {
            "authorize": join_url(base, OAUTH_AUTHORIZE_PATH),
            "token": join_url(base, OAUTH_TOKEN_PATH),
            "revoke": join_url(base, OAUTH_REVOKE_PATH),
        }
        cached = self._configuration_cache
        if cached is not None:
            endpoints["authorize"] = cached.authorization_endpoint or endpoints["authorize"]
            endpoints["token"] = cached.token_endpoint or endpoints["token"]
            endpoints["revoke"] = cached.revoke_endpoint or endpoints["revoke"]
        return endpoints

    def _compose_authorization_scopes(self, scopes: Sequence[str]) -> list[str]:
        literal: dict[str, None] = {}
        developer_keys: list[str] = []
        for raw_scope in scopes:
            scope = raw_scope.strip()
            if not scope:
                continue
            if _is_literal_scope(scope):
                literal[scope] = None
            else:
                developer_keys.append(scope)
        for scope in self._scopes.to_authorization_scopes(developer_keys):
            literal[scope] = None
        return list(literal)

    def _map_token_response(self, data: dict[str, Any], rate_limit: RateLimitInfo | None) -> TokenResult:
        raw_scopes = data.get("granted_scopes")
        granted_scopes = raw_scopes.split() if isinstance(raw_scopes, str) else list(raw_scopes or [])
        return TokenResult(
            access_token=data.get("access_token", ""),
            token_type=data.get("token_type", "Bearer"),
            expires_in=data.get("expires_in", 0),
            scope=data.get("scope", ""),
            granted_scopes=granted_scopes,
            preset_keys=self._scopes.from_granted_scopes(raw_scopes),
            authorization_id=data.get("authorization_id", ""),
            app_scoped_user_id=data.get("app_scoped_user_id", ""),
            issued_at=data.get("issued_at"),
            refresh_token=data.get("refresh_token"),
            refresh_token_expires_in=data.get("refresh_token_expires_in"),
            refresh_issued_at=data.get("refresh_issued_at"),
            id_token=data.get("id_token"),
            raw=data,
            rate_limit=rate_limit,
        )

    def _has_fresh_configuration_cache(self) -> bool:
        if self._configuration_cache is None or self._configuration_cache_timestamp is None:
            return False
        return self._clock() - self._configuration_cache_timestamp < self._cache_ttl


def _is_literal_scope(scope: str) -> bool:
    # Heuristic: a developer key containing "." is treated as a literal scope.
    if ":" in scope or "." in scope:
        return True
    return scope.strip().lower() in LITERAL_SCOPE_KEYWORDS


def _safe_compare(expected: str | None, received: str | None) -> bool:
    if not expected or not received:
        return False
    return hmac.compare_digest(expected.encode("utf-8"), received.encode("utf-8"))


def _validate_limit(limit: int | None) -> None:
    if limit is None:
        return
    if isinstance(limit, bool) or not isinstance(limit, int) or limit <= 0:
        raise HumanityValidationError("limit must be a positive integer")
    if limit > MAX_POLL_LIMIT:
        raise HumanityValidationError(f"limit cannot exceed {MAX_POLL_LIMIT}")


def _validate_compound_identifier(identifier: str) -> None:
    id_type, separator, value = identifier.partition("|")
    if not separator or not value:
        raise HumanityValidationError('identifier must use the "type|value" format')
    if id_type not in CLIENT_USER_IDENTIFIER_TYPES:
        raise HumanityValidationError(
            f"identifier type must be one of {', '.join(sorted(CLIENT_USER_IDENTIFIER_TYPES))}"
        )


def _to_iso_string(value: datetime | str | None) -> str | None:
    if not value:
        return None
    if isinstance(value, str):
        return value
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")
