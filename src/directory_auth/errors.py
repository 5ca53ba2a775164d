"""
directory_auth.errors

Exception taxonomy and remote fault classification.

Responsibilities:
- Define the hard errors that stop a caller's flow (construction, trust).
- Define `RemoteCallError`, the single failure type raised by the RPC transport.
- Classify server fault codes into `FaultKind` so components can pick sentinels.
- Emit structured fault events instead of writing fault text anywhere.
"""

from __future__ import annotations

import enum
from typing import Any


class FaultKind(str, enum.Enum):
    TRANSPORT = "TRANSPORT"
    CREDENTIAL_REJECTED = "CREDENTIAL_REJECTED"
    TRUST_REJECTED = "TRUST_REJECTED"
    NOT_FOUND = "NOT_FOUND"
    SERVER = "SERVER"


# Fault codes as declared by the directory's security server.
_FAULT_KINDS: dict[str, FaultKind] = {
    "InvalidAuthenticationException": FaultKind.CREDENTIAL_REJECTED,
    "InactiveAccountException": FaultKind.CREDENTIAL_REJECTED,
    "ExpiredCredentialException": FaultKind.CREDENTIAL_REJECTED,
    "InvalidAuthorizationTokenException": FaultKind.TRUST_REJECTED,
    "ApplicationAccessDeniedException": FaultKind.TRUST_REJECTED,
    "ObjectNotFoundException": FaultKind.NOT_FOUND,
    "InvalidTokenException": FaultKind.NOT_FOUND,
}


def classify_fault(code: str) -> FaultKind:
    # Servers sometimes qualify codes (e.g. "ns1:InvalidAuthenticationException").
    return _FAULT_KINDS.get(code.rsplit(":", 1)[-1], FaultKind.SERVER)


class DirectoryAuthError(Exception):
    pass


class DirectoryConnectionError(DirectoryAuthError):
    """
    The directory endpoint is malformed or unreachable at construction time.
    """


class TrustEstablishmentError(DirectoryAuthError):
    """
    The application identity was rejected, the trust call failed, or it returned no token.
    No principal operation may run after this.
    """


class TrustNotEstablishedError(DirectoryAuthError):
    """
    A principal operation was invoked without a trust token.
    """


class RemoteCallError(DirectoryAuthError):
    """
    A remote call failed, either in transport or as a server-declared fault.
    """

    def __init__(self, *, operation: str, code: str, message: str, kind: FaultKind) -> None:
        self.operation = operation
        self.code = code
        self.message = message
        self.kind = kind
        super().__init__(f"{operation} failed: faultcode={code} faultstring={message}")

    @classmethod
    def from_fault(cls, *, operation: str, code: str, message: str) -> RemoteCallError:
        return cls(operation=operation, code=code, message=message, kind=classify_fault(code))

    @classmethod
    def transport(cls, *, operation: str, code: str, message: str) -> RemoteCallError:
        return cls(operation=operation, code=code, message=message, kind=FaultKind.TRANSPORT)

    @property
    def is_transport(self) -> bool:
        return self.kind is FaultKind.TRANSPORT

    def as_log_fields(self) -> dict[str, Any]:
        return {
            "operation": self.operation,
            "code": self.code,
            "kind": self.kind.value,
            "message": self.message,
        }


def report_fault(log: Any, err: RemoteCallError, **extra: Any) -> None:
    """
    Emit the structured record for a swallowed fault.
    Transport/server faults are warnings; confirmed negatives are routine and logged at info.
    """

    routine = err.kind in (FaultKind.CREDENTIAL_REJECTED, FaultKind.NOT_FOUND)
    level = "info" if routine else "warning"
    getattr(log, level)("directory_fault", **err.as_log_fields(), **extra)


# --- Module Notes -----------------------------------------------------------
# Construction/trust errors propagate; every other RemoteCallError is converted to the
# operation's sentinel by the component that made the call (see `directory_auth.principals`).
