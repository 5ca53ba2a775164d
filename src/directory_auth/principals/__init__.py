"""
directory_auth.principals

Principal-level operations, each gated on an established trust token.

Responsibilities:
- Authenticate principals and issue tokens.
- Validate, invalidate and resolve principal tokens.
"""

from directory_auth.principals.authenticator import PrincipalAuthenticator
from directory_auth.principals.lookup import PrincipalLookup
from directory_auth.principals.revoker import TokenRevoker
from directory_auth.principals.validator import TokenValidator

__all__ = ["PrincipalAuthenticator", "PrincipalLookup", "TokenRevoker", "TokenValidator"]


# --- Module Notes -----------------------------------------------------------
# None of these components raise on remote faults; they return the operation's sentinel.
