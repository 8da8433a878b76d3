"""Configuration management for the Topcoder API client.

Loads credentials and endpoint URLs from .env and static challenge
defaults from config/topcoder.yaml.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field
from dotenv import load_dotenv


class Settings(BaseModel):
    """Application settings loaded from environment variables."""
    api_url: str = Field(description="Topcoder v5 API base URL")
    api_url_v3: str = Field(description="Topcoder v3 API base URL (members)")
    authn_url: str = Field(description="Legacy v2 authentication endpoint")
    authz_url: str = Field(description="Legacy v3 authorization endpoint")
    username: str = Field(default="", description="Legacy login handle")
    password: str = Field(default="", description="Legacy login password")
    auth0_url: str = Field(description="Auth0 token endpoint for M2M tokens")
    auth0_audience: str = Field(description="Auth0 audience for M2M tokens")
    auth0_client_id: str = Field(default="", description="M2M client ID")
    auth0_client_secret: str = Field(default="", description="M2M client secret")
    auth0_proxy_server_url: str = Field(default="", description="Optional Auth0 proxy URL")
    token_cache_time: int = Field(default=3600, description="Seconds before expiry an M2M token is re-issued")
    http_timeout: float = Field(default=30.0, description="Transport timeout in seconds")


class ChallengeDefaults(BaseModel):
    """Static identifiers and templates used when building challenges."""
    type_id_first2finish: str
    default_timeline_template_id: str
    role_id_submitter: str
    new_challenge_template: dict[str, Any] = Field(default_factory=dict)


class Config(BaseModel):
    """Full application configuration."""
    settings: Settings
    challenge: ChallengeDefaults
    authn_request_body: dict[str, Any] = Field(default_factory=dict)

    def get_authn_payload(self) -> dict[str, Any]:
        """Build the legacy login payload with credentials merged in."""
        return {
            **self.authn_request_body,
            "username": self.settings.username,
            "password": self.settings.password,
        }


def _find_project_root() -> Path:
    """Walk up from this file to find the project root (where config/ lives)."""
    current = Path(__file__).resolve().parent
    for parent in [current, *current.parents]:
        if (parent / "config" / "topcoder.yaml").exists():
            return parent
    # Fallback: cwd
    return Path.cwd()


def _load_defaults(project_root: Path) -> dict[str, Any]:
    """Load static defaults from topcoder.yaml."""
    defaults_path = project_root / "config" / "topcoder.yaml"
    if not defaults_path.exists():
        raise FileNotFoundError(f"Topcoder defaults not found at {defaults_path}")

    with open(defaults_path) as f:
        return yaml.safe_load(f) or {}


def _env(*keys: str, default: str = "") -> str:
    """Try multiple env var names, return the first one found."""
    for key in keys:
        val = os.environ.get(key, "")
        if val:
            return val.strip().strip('"')
    return default


def _load_settings() -> Settings:
    """Load settings from environment variables.

    Supports both TOPCODER_* and the legacy TC_* names.
    """
    return Settings(
        api_url=_env("TOPCODER_API_URL", "TC_API_URL", default="https://api.topcoder-dev.com/v5"),
        api_url_v3=_env("TOPCODER_API_URL_V3", "TC_API_URL_V3", default="https://api.topcoder-dev.com/v3"),
        authn_url=_env("TOPCODER_AUTHN_URL", "TC_AUTHN_URL", default="https://topcoder-dev.auth0.com/oauth/ro"),
        authz_url=_env("TOPCODER_AUTHZ_URL", "TC_AUTHZ_URL", default="https://api.topcoder-dev.com/v3/authorizations"),
        username=_env("TOPCODER_USERNAME", "TC_USERNAME"),
        password=_env("TOPCODER_PASSWORD", "TC_PASSWORD"),
        auth0_url=_env("AUTH0_URL", default="https://topcoder-dev.auth0.com/oauth/token"),
        auth0_audience=_env("AUTH0_AUDIENCE", default="https://m2m.topcoder-dev.com/"),
        auth0_client_id=_env("AUTH0_CLIENT_ID"),
        auth0_client_secret=_env("AUTH0_CLIENT_SECRET"),
        auth0_proxy_server_url=_env("AUTH0_PROXY_SERVER_URL"),
        token_cache_time=int(_env("TOKEN_CACHE_TIME", default="3600")),
        http_timeout=float(_env("TOPCODER_HTTP_TIMEOUT", default="30")),
    )


@lru_cache(maxsize=1)
def get_config() -> Config:
    """Load and cache the full application configuration."""
    project_root = _find_project_root()

    # Load .env from project root if it exists
    env_path = project_root / ".env"
    if env_path.exists():
        load_dotenv(env_path)

    settings = _load_settings()
    defaults = _load_defaults(project_root)

    return Config(
        settings=settings,
        challenge=ChallengeDefaults(**defaults.get("challenge", {})),
        authn_request_body=defaults.get("authn_request_body", {}),
    )
