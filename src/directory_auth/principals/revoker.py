"""
directory_auth.principals.revoker

Token revoker.

Responsibilities:
- Invalidate a principal token for every application sharing the directory.
"""

from __future__ import annotations

from typing import Any

from directory_auth.errors import FaultKind, RemoteCallError, report_fault
from directory_auth.models import TrustToken
from directory_auth.observability.logging import get_logger, token_fingerprint
from directory_auth.rpc.http import SecurityServerClient
from directory_auth.trust import require_trust


class TokenRevoker:
    def __init__(self, *, rpc: SecurityServerClient, log: Any = None) -> None:
        self._rpc = rpc
        self._log = log if log is not None else get_logger(__name__)

    def invalidate(self, trust: TrustToken, principal_token: str) -> bool:
        trust = require_trust(trust)
        log = self._log.bind(token=token_fingerprint(principal_token))
        try:
            self._rpc.invalidate_principal_token(trust=trust, token=principal_token)
        except RemoteCallError as e:
            report_fault(log, e)
            # Already gone counts as invalidated.
            return e.kind is FaultKind.NOT_FOUND

        log.info("token_invalidated")
        return True


# --- Module Notes -----------------------------------------------------------
# Global effect (all consumers see the token as invalid) is guaranteed by the server.
