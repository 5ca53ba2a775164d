"""
directory_auth.principals.validator

Token validator.

Responsibilities:
- Check liveness/binding of a principal token against the current validation factors.
- Surface a refreshed token representation when the directory returns one.
"""

from __future__ import annotations

from typing import Any

from directory_auth.errors import FaultKind, RemoteCallError, report_fault
from directory_auth.models import (
    Invalid,
    TrustToken,
    Unknown,
    Valid,
    ValidationFactors,
    ValidityResult,
)
from directory_auth.observability.logging import get_logger, token_fingerprint
from directory_auth.rpc.http import SecurityServerClient
from directory_auth.trust import require_trust

_DEFINITE = frozenset({FaultKind.CREDENTIAL_REJECTED, FaultKind.NOT_FOUND})


class TokenValidator:
    def __init__(self, *, rpc: SecurityServerClient, log: Any = None) -> None:
        self._rpc = rpc
        self._log = log if log is not None else get_logger(__name__)

    def is_valid(
        self, trust: TrustToken, principal_token: str, factors: ValidationFactors
    ) -> ValidityResult:
        trust = require_trust(trust)
        log = self._log.bind(token=token_fingerprint(principal_token))
        try:
            confirmed = self._rpc.is_valid_principal_token(
                trust=trust, token=principal_token, factors=factors
            )
        except RemoteCallError as e:
            report_fault(log, e)
            if e.kind in _DEFINITE:
                return Invalid(fault=e)
            return Unknown(fault=e)

        if confirmed is None:
            log.info("token_invalid")
            return Invalid()
        if confirmed != principal_token:
            log.info("token_refreshed", refreshed=token_fingerprint(confirmed))
        return Valid(token=confirmed)


# --- Module Notes -----------------------------------------------------------
# `Unknown` is "cannot confirm": callers should deny access but log it apart from
# a definite `Invalid`.
