"""
directory_auth.rpc.wire

Pydantic request/response shapes for the security-server operations.

Responsibilities:
- Describe request bodies for each operation.
- Parse `{"out": ...}` responses and `{"fault": ...}` envelopes.
- Normalize the server's one-or-many collection encodings into plain tuples.
"""

from __future__ import annotations

from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field

OPERATIONS: tuple[str, ...] = (
    "authenticateApplication",
    "authenticatePrincipal",
    "isValidPrincipalToken",
    "invalidatePrincipalToken",
    "findPrincipalByToken",
    "findGroupMemberships",
)


def as_list(value: Any, *, item_key: str | None = None) -> list[Any]:
    """
    Unwrap a one-or-many value.

    Accepted encodings: null, a bare item, a list, or a single-key wrapper such as
    `{"string": [...]}` around any of those. With `item_key`, a dict containing that key
    is treated as one item rather than a wrapper.
    """

    if value is None:
        return []
    if isinstance(value, dict) and len(value) == 1 and (item_key is None or item_key not in value):
        return as_list(next(iter(value.values())), item_key=item_key)
    if isinstance(value, list | tuple):
        return list(value)
    return [value]


def _strings(value: Any) -> tuple[str, ...]:
    return tuple(str(v) for v in as_list(value) if v not in (None, ""))


def _attribute_items(value: Any) -> list[Any]:
    return as_list(value, item_key="name")


Strings = Annotated[tuple[str, ...], BeforeValidator(_strings)]


class _Wire(BaseModel):
    model_config = ConfigDict(extra="ignore")


# --- Requests ----------------------------------------------------------------


class ApplicationCredential(_Wire):
    name: str
    credential: str


class ApplicationContext(_Wire):
    # Proves the caller is a trusted application on every principal operation.
    name: str
    token: str


class WireValidationFactor(_Wire):
    name: str
    value: str


class PrincipalCredential(_Wire):
    application: str
    name: str
    credential: str
    validation_factors: list[WireValidationFactor] = Field(default_factory=list)


class AuthenticateApplicationRequest(_Wire):
    application: ApplicationCredential


class AuthenticatePrincipalRequest(_Wire):
    application: ApplicationContext
    principal: PrincipalCredential


class ValidateTokenRequest(_Wire):
    application: ApplicationContext
    principal_token: str
    validation_factors: list[WireValidationFactor] = Field(default_factory=list)


class PrincipalTokenRequest(_Wire):
    application: ApplicationContext
    principal_token: str


# --- Responses ---------------------------------------------------------------


class ServiceDescription(_Wire):
    service: str = ""
    operations: Strings = ()


class FaultBody(_Wire):
    code: str
    message: str = ""


class FaultEnvelope(_Wire):
    fault: FaultBody


class TokenOut(_Wire):
    token: str | None = None


class TrustResponse(_Wire):
    out: TokenOut | None = None

    @property
    def token(self) -> str | None:
        return self.out.token if self.out else None


class PrincipalTokenResponse(_Wire):
    out: str | None = None


class ValidityResponse(_Wire):
    out: bool | str | None = None

    def confirmed_token(self, presented: str) -> str | None:
        # `true` keeps the presented token; a string is the refreshed representation.
        if self.out is True:
            return presented
        if isinstance(self.out, str) and self.out:
            return self.out
        return None


class EmptyResponse(_Wire):
    out: Any = None


class AttributeOut(_Wire):
    name: str
    values: Strings = ()


class PrincipalOut(_Wire):
    name: str
    active: bool = True
    attributes: Annotated[list[AttributeOut], BeforeValidator(_attribute_items)] = Field(
        default_factory=list
    )


class PrincipalResponse(_Wire):
    out: PrincipalOut | None = None


class GroupsResponse(_Wire):
    out: Strings = ()


# --- Module Notes -----------------------------------------------------------
# Multi-value normalization lives here and nowhere else; `findGroupMemberships` returns
# the same empty tuple for null, [], {"string": null} and a missing `out`.
