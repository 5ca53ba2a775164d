"""
directory_auth.settings

Central configuration model (Pydantic Settings).

Responsibilities:
- Provide env-driven settings for the directory endpoint and application identity.
- Hide the application secret from repr/logging.
- Offer a cached settings instance for callers that construct one client per process.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from directory_auth.models import ApplicationIdentity


class Settings(BaseSettings):
    """
    Everything `connect()` needs before the trust handshake.
    Values are type-coerced only; semantic checks happen at connection time.
    """

    model_config = SettingsConfigDict(env_prefix="DIRECTORY_AUTH_", case_sensitive=False)

    service_name: str = "directory-auth-client"
    log_level: str = "INFO"

    # Directory endpoint
    server_base_url: str = "http://localhost:8095/crowd"
    service_path: str = "/services/SecurityServer"
    timeout_seconds: float = 10.0
    probe_on_connect: bool = True

    # Application identity (trust session)
    application_name: str = ""
    application_secret: str = Field(default="", repr=False)

    def identity(self) -> ApplicationIdentity:
        return ApplicationIdentity(name=self.application_name, secret=self.application_secret)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    # Cache avoids re-parsing env vars when several call sites ask for settings.
    return Settings()


# --- Module Notes -----------------------------------------------------------
# The base URL is joined with `service_path`; the RPC layer appends the operation name.
