"""
directory_auth.principals.authenticator

Principal authenticator.

Responsibilities:
- Exchange a principal's credential plus validation factors for a principal token.
- Report rejected credentials and unavailable service as distinct results.
"""

from __future__ import annotations

from typing import Any

from directory_auth.errors import FaultKind, RemoteCallError, report_fault
from directory_auth.models import (
    AuthRejected,
    AuthResult,
    AuthUnavailable,
    Authenticated,
    TrustToken,
    ValidationFactors,
)
from directory_auth.observability.logging import get_logger, token_fingerprint
from directory_auth.rpc.http import SecurityServerClient
from directory_auth.trust import require_trust

_REJECTED = frozenset({FaultKind.CREDENTIAL_REJECTED, FaultKind.NOT_FOUND})


class PrincipalAuthenticator:
    def __init__(self, *, rpc: SecurityServerClient, log: Any = None) -> None:
        self._rpc = rpc
        self._log = log if log is not None else get_logger(__name__)

    def authenticate(
        self,
        trust: TrustToken,
        principal_name: str,
        credential: str,
        factors: ValidationFactors,
    ) -> AuthResult:
        trust = require_trust(trust)
        log = self._log.bind(principal=principal_name)
        try:
            token = self._rpc.authenticate_principal(
                trust=trust, name=principal_name, credential=credential, factors=factors
            )
        except RemoteCallError as e:
            report_fault(log, e)
            if e.kind in _REJECTED:
                return AuthRejected(fault=e)
            return AuthUnavailable(fault=e)

        if not token:
            log.info("principal_rejected", reason="empty_token")
            return AuthRejected()

        log.info("principal_authenticated", token=token_fingerprint(token))
        return Authenticated(token=token)


# --- Module Notes -----------------------------------------------------------
# A trust-rejected fault here means the application token went stale server-side; that
# is reported as unavailable, never as bad user credentials.
