"""
directory_auth.trust

Trust session: the application-level handshake with the directory.

Responsibilities:
- Exchange the application identity for a `TrustToken` (one remote call, no retry).
- Treat a successful-but-empty answer as rejected credentials.
- Guard principal operations against a missing trust token.
"""

from __future__ import annotations

from typing import Any

from directory_auth.errors import RemoteCallError, TrustEstablishmentError, TrustNotEstablishedError
from directory_auth.models import ApplicationIdentity, TrustToken
from directory_auth.observability.logging import get_logger
from directory_auth.rpc.http import SecurityServerClient


class TrustSession:
    def __init__(self, *, rpc: SecurityServerClient, log: Any = None) -> None:
        self._rpc = rpc
        self._log = log if log is not None else get_logger(__name__)

    def establish(self, identity: ApplicationIdentity) -> TrustToken:
        log = self._log.bind(application=identity.name)
        try:
            token = self._rpc.authenticate_application(identity)
        except RemoteCallError as e:
            log.error("trust_failed", **e.as_log_fields())
            raise TrustEstablishmentError(
                f"Unable to establish trust for application {identity.name!r}: {e}"
            ) from e

        if not token:
            log.error("trust_failed", operation="authenticateApplication", code="EMPTY_TOKEN")
            raise TrustEstablishmentError(
                f"Unable to establish trust for application {identity.name!r}: "
                "no token issued, check the application credentials"
            )

        log.info("trust_established")
        return TrustToken(application_name=identity.name, token=token)


def require_trust(trust: TrustToken | None) -> TrustToken:
    if not isinstance(trust, TrustToken) or not trust.token:
        raise TrustNotEstablishedError("trust must be established before principal operations")
    return trust


# --- Module Notes -----------------------------------------------------------
# Retry policy belongs to whoever calls `connect()`; a failed handshake is final here.
