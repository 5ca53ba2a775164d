"""
tests.conftest

Shared fixtures and an in-memory stand-in for the directory's security server.

Responsibilities:
- Emulate the six security-server operations plus the service description.
- Provide a ready `AuthenticationClient` wired to the stand-in via FastAPI's TestClient.
- Provide a helper for fault injection with `httpx.MockTransport`.
"""

from __future__ import annotations

import secrets
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

import httpx
import pytest
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.testclient import TestClient

from directory_auth import connect
from directory_auth.rpc.wire import OPERATIONS
from directory_auth.settings import Settings

SERVICE_PATH = "/services/SecurityServer"


@dataclass
class StubPrincipal:
    password: str
    groups: list[str] = field(default_factory=list)
    attributes: dict[str, list[str]] = field(default_factory=dict)
    active: bool = True


@dataclass
class DirectoryState:
    applications: dict[str, str] = field(default_factory=dict)
    principals: dict[str, StubPrincipal] = field(default_factory=dict)

    app_tokens: set[str] = field(default_factory=set)
    # principal token -> (principal name, validation factors at issuance)
    sessions: dict[str, tuple[str, list[tuple[str, str]]]] = field(default_factory=dict)

    # Behaviour switches for individual tests.
    empty_trust_token: bool = False
    refresh_on_validate: bool = False
    groups_encoding: str = "wrapped"
    operations: tuple[str, ...] = OPERATIONS
    calls: list[str] = field(default_factory=list)


def _fault(code: str, message: str, status_code: int = 500) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"fault": {"code": code, "message": message}})


def _encode_groups(groups: list[str], encoding: str) -> dict[str, Any]:
    if encoding == "list":
        return {"out": list(groups)}
    if encoding == "absent":
        return {"out": list(groups)} if groups else {}
    if encoding == "null":
        return {"out": list(groups) if groups else None}
    if encoding == "empty_wrapper":
        return {"out": {"string": list(groups) if groups else None}}
    # "wrapped": the one-or-many shape, bare string for a single group
    if not groups:
        return {"out": None}
    return {"out": {"string": groups[0] if len(groups) == 1 else list(groups)}}


def build_directory_app(state: DirectoryState) -> FastAPI:
    app = FastAPI(title="Directory security server stand-in")

    @app.get(SERVICE_PATH)
    async def describe() -> dict[str, Any]:
        return {"service": "SecurityServer", "operations": list(state.operations)}

    @app.post(SERVICE_PATH + "/{operation}")
    async def call(operation: str, request: Request) -> Any:
        state.calls.append(operation)
        body = await request.json()
        application = body.get("application", {})

        if operation == "authenticateApplication":
            name = application.get("name")
            if state.applications.get(name) != application.get("credential"):
                return _fault("InvalidAuthenticationException", "Application failed to authenticate")
            if state.empty_trust_token:
                return {"out": {"token": ""}}
            token = "TOK-" + secrets.token_hex(4).upper()
            state.app_tokens.add(token)
            return {"out": {"token": token}}

        if application.get("token") not in state.app_tokens:
            return _fault("InvalidAuthorizationTokenException", "Application token is not valid")

        if operation == "authenticatePrincipal":
            principal = body["principal"]
            record = state.principals.get(principal["name"])
            if record is None or record.password != principal["credential"]:
                return _fault("InvalidAuthenticationException", "Invalid credentials")
            if not record.active:
                return _fault("InactiveAccountException", "Account is inactive")
            token = "PTOK-" + secrets.token_hex(4).upper()
            factors = [(f["name"], f["value"]) for f in principal.get("validation_factors", [])]
            state.sessions[token] = (principal["name"], factors)
            return {"out": token}

        token = body.get("principal_token")
        session = state.sessions.get(token)

        if operation == "isValidPrincipalToken":
            factors = [(f["name"], f["value"]) for f in body.get("validation_factors", [])]
            if session is None or session[1] != factors:
                return {"out": False}
            if state.refresh_on_validate:
                refreshed = token + "-R"
                state.sessions[refreshed] = state.sessions.pop(token)
                return {"out": refreshed}
            return {"out": True}

        if operation == "invalidatePrincipalToken":
            state.sessions.pop(token, None)
            return {"out": None}

        if session is None:
            return _fault("InvalidTokenException", "Token is not valid")
        record = state.principals[session[0]]

        if operation == "findPrincipalByToken":
            return {
                "out": {
                    "name": session[0],
                    "active": record.active,
                    "attributes": [
                        {"name": k, "values": {"string": v[0] if len(v) == 1 else v}}
                        for k, v in record.attributes.items()
                    ],
                }
            }

        if operation == "findGroupMemberships":
            return _encode_groups(record.groups, state.groups_encoding)

        return _fault("OperationNotSupported", f"Unknown operation {operation}", status_code=404)

    return app


@pytest.fixture
def directory() -> DirectoryState:
    return DirectoryState(
        applications={"app1": "s3cret"},
        principals={
            "alice": StubPrincipal(
                password="pw1",
                groups=["admins", "editors"],
                attributes={
                    "mail": ["alice@example.com"],
                    "givenName": ["Alice"],
                    "sn": ["Liddell"],
                },
            ),
            "bob": StubPrincipal(password="pw2"),
            "carol": StubPrincipal(password="pw3", active=False),
        },
    )


@pytest.fixture
def directory_http(directory: DirectoryState) -> TestClient:
    return TestClient(build_directory_app(directory))


@pytest.fixture
def settings() -> Settings:
    return Settings(
        server_base_url="http://testserver",
        application_name="app1",
        application_secret="s3cret",
    )


@pytest.fixture
def client(settings: Settings, directory_http: TestClient):
    with connect(settings, http=directory_http) as c:
        yield c


def mock_http(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.Client:
    return httpx.Client(transport=httpx.MockTransport(handler), base_url="http://directory.test")


def describe_ok(request: httpx.Request) -> httpx.Response | None:
    # Lets fault-injection handlers pass the construction probe.
    if request.method == "GET":
        return httpx.Response(200, json={"service": "SecurityServer", "operations": list(OPERATIONS)})
    return None


def trust_ok(request: httpx.Request) -> httpx.Response | None:
    if request.url.path.endswith("/authenticateApplication"):
        return httpx.Response(200, json={"out": {"token": "TOK-ABC123"}})
    return None


# --- Module Notes -----------------------------------------------------------
# The stand-in mirrors the directory's observable behaviour only; it is not a server
# implementation and keeps all state in memory per test.
