"""Shared fixtures for the topcoder-api test suite."""
from __future__ import annotations

import time
from typing import Callable
from unittest.mock import MagicMock

import httpx
import jwt
import pytest

from topcoder_api.client import TopcoderClient
from topcoder_api.config import ChallengeDefaults, Config, Settings

JWT_SECRET = "test-secret-that-is-long-enough-for-hs256"


def make_jwt(iat_offset: float = 0, exp_offset: float = 3600, **claims) -> str:
    """Build an HS256 token whose iat/exp are relative to now."""
    now = int(time.time())
    payload = {"iat": now + int(iat_offset), "exp": now + int(exp_offset), **claims}
    return jwt.encode(payload, JWT_SECRET, algorithm="HS256")


class Recorder:
    """httpx.MockTransport handler that records requests and replays canned responses."""

    def __init__(self, *responses: httpx.Response | Exception | Callable[[httpx.Request], httpx.Response]) -> None:
        self.requests: list[httpx.Request] = []
        self._responses = list(responses)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self._responses:
            raise AssertionError(f"Unexpected request: {request.method} {request.url}")
        response = self._responses.pop(0) if len(self._responses) > 1 else self._responses[0]
        if isinstance(response, Exception):
            raise response
        if callable(response):
            return response(request)
        return response

    def client(self) -> httpx.Client:
        return httpx.Client(transport=httpx.MockTransport(self))


@pytest.fixture
def fake_settings() -> Settings:
    return Settings(
        api_url="https://api.test/v5",
        api_url_v3="https://api.test/v3",
        authn_url="https://auth.test/oauth/ro",
        authz_url="https://api.test/v3/authorizations",
        username="tc-user",
        password="tc-pass",
        auth0_url="https://auth.test/oauth/token",
        auth0_audience="https://m2m.test/",
        auth0_client_id="test-client-id",
        auth0_client_secret="test-client-secret",
        auth0_proxy_server_url="",
        token_cache_time=60,
        http_timeout=5.0,
    )


@pytest.fixture
def fake_challenge_defaults() -> ChallengeDefaults:
    return ChallengeDefaults(
        type_id_first2finish="type-f2f",
        default_timeline_template_id="timeline-1",
        role_id_submitter="role-submitter",
        new_challenge_template={"status": "Draft", "legacy": {"track": "DEVELOP"}},
    )


@pytest.fixture
def fake_config(fake_settings, fake_challenge_defaults) -> Config:
    return Config(
        settings=fake_settings,
        challenge=fake_challenge_defaults,
        authn_request_body={"connection": "TC-User-Database", "grant_type": "password"},
    )


@pytest.fixture
def mock_tokens():
    """MagicMock standing in for TokenProvider."""
    tokens = MagicMock()
    tokens.get_machine_token.return_value = "m2m-token"
    return tokens


@pytest.fixture
def make_client(fake_config, mock_tokens):
    """Build a TopcoderClient whose transport replays the given responses."""
    def _make(*responses) -> tuple[TopcoderClient, Recorder]:
        recorder = Recorder(*responses)
        return TopcoderClient(fake_config, mock_tokens, http=recorder.client()), recorder

    return _make
