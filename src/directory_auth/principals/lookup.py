"""
directory_auth.principals.lookup

Principal lookup.

Responsibilities:
- Resolve a principal token to a `PrincipalRecord`.
- Resolve a principal token to its current group memberships.

Nothing is cached: every call reflects the directory at query time.
"""

from __future__ import annotations

from typing import Any

from directory_auth.errors import RemoteCallError, report_fault
from directory_auth.models import PrincipalRecord, TrustToken
from directory_auth.observability.logging import get_logger, token_fingerprint
from directory_auth.rpc.http import SecurityServerClient
from directory_auth.rpc.wire import PrincipalOut
from directory_auth.trust import require_trust


def _record(out: PrincipalOut) -> PrincipalRecord:
    attributes: dict[str, tuple[str, ...]] = {}
    for attr in out.attributes:
        # Repeated attribute entries are merged, keeping server order.
        attributes[attr.name] = attributes.get(attr.name, ()) + attr.values
    return PrincipalRecord(name=out.name, active=out.active, attributes=attributes)


class PrincipalLookup:
    def __init__(self, *, rpc: SecurityServerClient, log: Any = None) -> None:
        self._rpc = rpc
        self._log = log if log is not None else get_logger(__name__)

    def find_principal(self, trust: TrustToken, principal_token: str) -> PrincipalRecord | None:
        trust = require_trust(trust)
        try:
            out = self._rpc.find_principal_by_token(trust=trust, token=principal_token)
        except RemoteCallError as e:
            report_fault(self._log, e, token=token_fingerprint(principal_token))
            return None
        if out is None:
            self._log.warning(
                "directory_fault",
                operation="findPrincipalByToken",
                code="EMPTY_RESPONSE",
                token=token_fingerprint(principal_token),
            )
            return None
        return _record(out)

    def find_groups(self, trust: TrustToken, principal_token: str) -> frozenset[str] | None:
        trust = require_trust(trust)
        try:
            groups = self._rpc.find_group_memberships(trust=trust, token=principal_token)
        except RemoteCallError as e:
            report_fault(self._log, e, token=token_fingerprint(principal_token))
            return None
        return frozenset(groups)


# --- Module Notes -----------------------------------------------------------
# `None` always means the directory could not answer; a principal with no groups is
# `frozenset()`.
