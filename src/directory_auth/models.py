"""
directory_auth.models

Domain models for the authentication client.

Responsibilities:
- Application identity and the write-once trust token.
- Validation factors bound to principal tokens.
- Resolved principal records.
- Explicit result variants for authentication and validation outcomes.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from directory_auth.errors import RemoteCallError

# Factor names understood by the directory server.
USER_AGENT = "User-Agent"
REMOTE_ADDRESS = "remote_address"
FORWARDED_FOR = "X-Forwarded-For"


@dataclass(frozen=True, slots=True)
class ApplicationIdentity:
    name: str
    secret: str = field(repr=False)


@dataclass(frozen=True, slots=True)
class TrustToken:
    """
    Application-level token issued by the directory.
    Only exists when the trust handshake succeeded, so it can never be empty.
    """

    application_name: str
    token: str = field(repr=False)

    def __post_init__(self) -> None:
        if not self.token:
            raise ValueError("trust token must be non-empty")


@dataclass(frozen=True, slots=True)
class ValidationFactor:
    name: str
    value: str


@dataclass(frozen=True, slots=True)
class ValidationFactors:
    """
    Ordered client-context pairs attached to principal token operations.
    Pass the same factors on validation as were used at issuance.
    """

    factors: tuple[ValidationFactor, ...] = ()

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[str, str]] | Mapping[str, str]) -> ValidationFactors:
        items = pairs.items() if isinstance(pairs, Mapping) else pairs
        # Empty values carry no binding information; the directory ignores them anyway.
        return cls(tuple(ValidationFactor(str(n), str(v)) for n, v in items if v))

    @classmethod
    def of(cls, **pairs: str) -> ValidationFactors:
        return cls.from_pairs(pairs)

    @classmethod
    def for_request(
        cls,
        *,
        user_agent: str | None,
        remote_address: str | None,
        forwarded_for: str | None = None,
    ) -> ValidationFactors:
        return cls.from_pairs(
            [
                (USER_AGENT, user_agent or ""),
                (REMOTE_ADDRESS, remote_address or ""),
                (FORWARDED_FOR, forwarded_for or ""),
            ]
        )

    def as_pairs(self) -> list[tuple[str, str]]:
        return [(f.name, f.value) for f in self.factors]

    def __iter__(self):
        return iter(self.factors)

    def __len__(self) -> int:
        return len(self.factors)


@dataclass(frozen=True, slots=True)
class PrincipalRecord:
    """
    Read-only snapshot of a principal as resolved from a token. Not cached.
    """

    name: str
    active: bool = True
    attributes: Mapping[str, tuple[str, ...]] = field(default_factory=dict)

    def attribute(self, name: str) -> str | None:
        values = self.attributes.get(name) or ()
        return values[0] if values else None

    @property
    def email(self) -> str | None:
        return self.attribute("mail")

    @property
    def first_name(self) -> str | None:
        return self.attribute("givenName")

    @property
    def last_name(self) -> str | None:
        return self.attribute("sn")

    @property
    def display_name(self) -> str | None:
        explicit = self.attribute("displayName")
        if explicit:
            return explicit
        parts = [p for p in (self.first_name, self.last_name) if p]
        return " ".join(parts) or None


# --- Authentication outcomes -------------------------------------------------


@dataclass(frozen=True, slots=True)
class Authenticated:
    token: str = field(repr=False)

    def __bool__(self) -> bool:
        return True


@dataclass(frozen=True, slots=True)
class AuthRejected:
    # None when the server answered successfully but issued no token.
    fault: RemoteCallError | None = None

    def __bool__(self) -> bool:
        return False


@dataclass(frozen=True, slots=True)
class AuthUnavailable:
    fault: RemoteCallError

    def __bool__(self) -> bool:
        return False


AuthResult = Authenticated | AuthRejected | AuthUnavailable


# --- Validation outcomes -----------------------------------------------------


@dataclass(frozen=True, slots=True)
class Valid:
    # Either the caller's token or the refreshed one; callers must store this value.
    token: str = field(repr=False)

    def __bool__(self) -> bool:
        return True


@dataclass(frozen=True, slots=True)
class Invalid:
    fault: RemoteCallError | None = None

    def __bool__(self) -> bool:
        return False


@dataclass(frozen=True, slots=True)
class Unknown:
    fault: RemoteCallError

    def __bool__(self) -> bool:
        return False


ValidityResult = Valid | Invalid | Unknown


# --- Module Notes -----------------------------------------------------------
# Only `Authenticated` and `Valid` are truthy; every other variant means "no token" or
# "cannot confirm", while the type still tells callers which one it was.
