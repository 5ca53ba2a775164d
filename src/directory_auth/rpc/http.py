"""
directory_auth.rpc.http

HTTP client boundary used by the components to call the directory's security server.

Responsibilities:
- Expose one method per remote operation with typed inputs/outputs.
- Translate httpx failures, non-2xx statuses and fault envelopes into `RemoteCallError`.
- Fetch the service description used to verify the endpoint at construction time.
"""

from __future__ import annotations

import time
from typing import TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from directory_auth.errors import RemoteCallError
from directory_auth.models import ApplicationIdentity, TrustToken, ValidationFactors
from directory_auth.observability.logging import get_logger
from directory_auth.rpc.wire import (
    ApplicationContext,
    ApplicationCredential,
    AuthenticateApplicationRequest,
    AuthenticatePrincipalRequest,
    EmptyResponse,
    FaultEnvelope,
    GroupsResponse,
    PrincipalCredential,
    PrincipalOut,
    PrincipalResponse,
    PrincipalTokenRequest,
    PrincipalTokenResponse,
    ServiceDescription,
    TrustResponse,
    ValidateTokenRequest,
    ValidityResponse,
    WireValidationFactor,
)

log = get_logger(__name__)

ResponseT = TypeVar("ResponseT", bound=BaseModel)


def _factors(factors: ValidationFactors) -> list[WireValidationFactor]:
    return [WireValidationFactor(name=n, value=v) for n, v in factors.as_pairs()]


def _context(trust: TrustToken) -> ApplicationContext:
    return ApplicationContext(name=trust.application_name, token=trust.token)


class SecurityServerClient:
    """
    Request/response calls to the security server, one method per operation.
    The httpx client carries the base URL and timeout; this class owns only paths.
    """

    def __init__(self, *, http: httpx.Client, service_path: str) -> None:
        self._http = http
        self._service_path = "/" + service_path.strip("/")

    # --- plumbing ------------------------------------------------------------

    def _send(self, operation: str, method: str, path: str, **kwargs) -> httpx.Response:
        started = time.perf_counter()
        try:
            r = self._http.request(method, path, **kwargs)
        except httpx.TimeoutException as e:
            raise RemoteCallError.transport(
                operation=operation, code="TIMEOUT", message=str(e) or type(e).__name__
            ) from e
        except httpx.HTTPError as e:
            raise RemoteCallError.transport(
                operation=operation, code=type(e).__name__, message=str(e)
            ) from e

        log.debug(
            "directory_call",
            operation=operation,
            status_code=r.status_code,
            elapsed_ms=round((time.perf_counter() - started) * 1000, 1),
        )
        if not r.is_success:
            raise self._fault_from(operation, r)
        return r

    @staticmethod
    def _fault_from(operation: str, r: httpx.Response) -> RemoteCallError:
        # Server-declared faults come with an envelope; anything else is a transport problem.
        try:
            envelope = FaultEnvelope.model_validate(r.json())
        except ValueError:
            return RemoteCallError.transport(
                operation=operation,
                code=f"HTTP_{r.status_code}",
                message=r.reason_phrase or "unexpected status",
            )
        return RemoteCallError.from_fault(
            operation=operation, code=envelope.fault.code, message=envelope.fault.message
        )

    @staticmethod
    def _parse(operation: str, r: httpx.Response, model: type[ResponseT]) -> ResponseT:
        try:
            return model.model_validate(r.json())
        except (ValueError, ValidationError) as e:
            raise RemoteCallError.transport(
                operation=operation, code="MALFORMED_RESPONSE", message=str(e)
            ) from e

    def _call(self, operation: str, body: BaseModel, model: type[ResponseT]) -> ResponseT:
        r = self._send(
            operation,
            "POST",
            f"{self._service_path}/{operation}",
            json=body.model_dump(mode="json"),
        )
        return self._parse(operation, r, model)

    # --- operations ----------------------------------------------------------

    def describe(self) -> ServiceDescription:
        r = self._send("describe", "GET", self._service_path)
        return self._parse("describe", r, ServiceDescription)

    def authenticate_application(self, identity: ApplicationIdentity) -> str | None:
        body = AuthenticateApplicationRequest(
            application=ApplicationCredential(name=identity.name, credential=identity.secret)
        )
        return self._call("authenticateApplication", body, TrustResponse).token

    def authenticate_principal(
        self,
        *,
        trust: TrustToken,
        name: str,
        credential: str,
        factors: ValidationFactors,
    ) -> str | None:
        body = AuthenticatePrincipalRequest(
            application=_context(trust),
            principal=PrincipalCredential(
                application=trust.application_name,
                name=name,
                credential=credential,
                validation_factors=_factors(factors),
            ),
        )
        return self._call("authenticatePrincipal", body, PrincipalTokenResponse).out

    def is_valid_principal_token(
        self, *, trust: TrustToken, token: str, factors: ValidationFactors
    ) -> str | None:
        body = ValidateTokenRequest(
            application=_context(trust),
            principal_token=token,
            validation_factors=_factors(factors),
        )
        return self._call("isValidPrincipalToken", body, ValidityResponse).confirmed_token(token)

    def invalidate_principal_token(self, *, trust: TrustToken, token: str) -> None:
        body = PrincipalTokenRequest(application=_context(trust), principal_token=token)
        self._call("invalidatePrincipalToken", body, EmptyResponse)

    def find_principal_by_token(self, *, trust: TrustToken, token: str) -> PrincipalOut | None:
        body = PrincipalTokenRequest(application=_context(trust), principal_token=token)
        return self._call("findPrincipalByToken", body, PrincipalResponse).out

    def find_group_memberships(self, *, trust: TrustToken, token: str) -> tuple[str, ...]:
        body = PrincipalTokenRequest(application=_context(trust), principal_token=token)
        return self._call("findGroupMemberships", body, GroupsResponse).out


# --- Module Notes -----------------------------------------------------------
# Timeouts are the transport's own (httpx client timeout); there is no retry here.
# Callers that need cancellation wrap calls in their own timeout context.
