"""
directory_auth

Client-side authentication broker for a remote identity directory server.

Responsibilities:
- Expose package version metadata.
- Re-export the caller-facing API (`connect`, result variants, errors).
"""

from directory_auth.client import AuthenticationClient, connect
from directory_auth.errors import (
    DirectoryAuthError,
    DirectoryConnectionError,
    FaultKind,
    RemoteCallError,
    TrustEstablishmentError,
    TrustNotEstablishedError,
)
from directory_auth.models import (
    ApplicationIdentity,
    Authenticated,
    AuthRejected,
    AuthResult,
    AuthUnavailable,
    Invalid,
    PrincipalRecord,
    TrustToken,
    Unknown,
    Valid,
    ValidationFactor,
    ValidationFactors,
    ValidityResult,
)

__all__ = [
    "__version__",
    "ApplicationIdentity",
    "AuthRejected",
    "AuthResult",
    "AuthUnavailable",
    "Authenticated",
    "AuthenticationClient",
    "DirectoryAuthError",
    "DirectoryConnectionError",
    "FaultKind",
    "Invalid",
    "PrincipalRecord",
    "RemoteCallError",
    "TrustEstablishmentError",
    "TrustNotEstablishedError",
    "TrustToken",
    "Unknown",
    "Valid",
    "ValidationFactor",
    "ValidationFactors",
    "ValidityResult",
    "connect",
]

__version__ = "0.1.0"


# --- Module Notes -----------------------------------------------------------
# Importing the package configures nothing; call `observability.logging.configure_logging`
# from the embedding application.
