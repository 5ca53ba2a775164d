"""
directory_auth.client

Authentication client facade and its factory.

Responsibilities:
- Validate the endpoint, open the transport, verify the service and establish trust
  in one step (`connect`), so no operation can run against an unset trust token.
- Expose the principal operations bound to that trust token.
- Own (and close) the httpx client when it created it.
"""

from __future__ import annotations

from typing import Any

import httpx

from directory_auth.errors import DirectoryConnectionError, RemoteCallError
from directory_auth.models import (
    ApplicationIdentity,
    AuthResult,
    PrincipalRecord,
    TrustToken,
    ValidationFactors,
    ValidityResult,
)
from directory_auth.observability.logging import get_logger
from directory_auth.principals import (
    PrincipalAuthenticator,
    PrincipalLookup,
    TokenRevoker,
    TokenValidator,
)
from directory_auth.rpc.http import SecurityServerClient
from directory_auth.rpc.wire import OPERATIONS
from directory_auth.settings import Settings, get_settings
from directory_auth.trust import TrustSession


class AuthenticationClient:
    """
    Ready-to-use client: the trust token is fixed at construction and never changes.
    One instance per logical caller context; calls are blocking and sequential.
    """

    __slots__ = (
        "_trust",
        "_http",
        "_owns_http",
        "_authenticator",
        "_validator",
        "_revoker",
        "_lookup",
    )

    def __init__(
        self,
        *,
        trust: TrustToken,
        rpc: SecurityServerClient,
        http: httpx.Client | None = None,
        owns_http: bool = False,
        log: Any = None,
    ) -> None:
        log = log if log is not None else get_logger("directory_auth")
        self._trust = trust
        self._http = http
        self._owns_http = owns_http
        self._authenticator = PrincipalAuthenticator(rpc=rpc, log=log)
        self._validator = TokenValidator(rpc=rpc, log=log)
        self._revoker = TokenRevoker(rpc=rpc, log=log)
        self._lookup = PrincipalLookup(rpc=rpc, log=log)

    @property
    def trust(self) -> TrustToken:
        return self._trust

    def authenticate(
        self, principal_name: str, credential: str, factors: ValidationFactors
    ) -> AuthResult:
        return self._authenticator.authenticate(self._trust, principal_name, credential, factors)

    def authenticate_request(
        self,
        principal_name: str,
        credential: str,
        *,
        user_agent: str | None,
        remote_address: str | None,
        forwarded_for: str | None = None,
    ) -> AuthResult:
        factors = ValidationFactors.for_request(
            user_agent=user_agent, remote_address=remote_address, forwarded_for=forwarded_for
        )
        return self.authenticate(principal_name, credential, factors)

    def is_valid(self, principal_token: str, factors: ValidationFactors) -> ValidityResult:
        return self._validator.is_valid(self._trust, principal_token, factors)

    def invalidate(self, principal_token: str) -> bool:
        return self._revoker.invalidate(self._trust, principal_token)

    def find_principal(self, principal_token: str) -> PrincipalRecord | None:
        return self._lookup.find_principal(self._trust, principal_token)

    def find_groups(self, principal_token: str) -> frozenset[str] | None:
        return self._lookup.find_groups(self._trust, principal_token)

    def close(self) -> None:
        if self._owns_http and self._http is not None:
            self._http.close()

    def __enter__(self) -> AuthenticationClient:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"AuthenticationClient(application={self._trust.application_name!r})"


def _check_endpoint(url: httpx.URL | str) -> None:
    try:
        parsed = httpx.URL(str(url))
    except (httpx.InvalidURL, TypeError, ValueError) as e:
        raise DirectoryConnectionError(f"Malformed directory endpoint {url!r}: {e}") from e
    if parsed.scheme not in ("http", "https") or not parsed.host:
        raise DirectoryConnectionError(f"Malformed directory endpoint {str(url)!r}")


def _probe(rpc: SecurityServerClient, log: Any) -> None:
    try:
        description = rpc.describe()
    except RemoteCallError as e:
        log.error("directory_unreachable", **e.as_log_fields())
        raise DirectoryConnectionError(f"Directory service unavailable: {e}") from e

    missing = [op for op in OPERATIONS if op not in description.operations]
    if missing:
        log.error("directory_incompatible", missing=missing)
        raise DirectoryConnectionError(
            f"Directory service {description.service!r} lacks operations: {', '.join(missing)}"
        )


def connect(
    settings: Settings | None = None,
    *,
    identity: ApplicationIdentity | None = None,
    http: httpx.Client | None = None,
    logger: Any = None,
) -> AuthenticationClient:
    """
    Build a ready client: endpoint check, transport, service probe, trust handshake.

    Raises `DirectoryConnectionError` when the endpoint is malformed or unreachable and
    `TrustEstablishmentError` when the application identity is not accepted. An injected
    `http` client must carry the directory base URL and is never closed by this client.
    """

    settings = settings or get_settings()
    identity = identity or settings.identity()
    log = (logger if logger is not None else get_logger("directory_auth")).bind(
        application=identity.name
    )

    owns_http = http is None
    if http is None:
        _check_endpoint(settings.server_base_url)
        http = httpx.Client(
            base_url=settings.server_base_url,
            timeout=settings.timeout_seconds,
            headers={"Accept": "application/json"},
        )
    else:
        _check_endpoint(http.base_url)

    rpc = SecurityServerClient(http=http, service_path=settings.service_path)
    try:
        if settings.probe_on_connect:
            _probe(rpc, log)
        trust = TrustSession(rpc=rpc, log=log).establish(identity)
    except Exception:
        if owns_http:
            http.close()
        raise

    return AuthenticationClient(trust=trust, rpc=rpc, http=http, owns_http=owns_http, log=log)


# --- Module Notes -----------------------------------------------------------
# Embedding services typically call `connect()` once per request context (e.g. one login
# flow) and translate the result variants into UX: invalid credentials, service unavailable,
# or session expired.
