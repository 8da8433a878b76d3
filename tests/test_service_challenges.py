"""Tests for services/challenges.py — template overlay and lifecycle patches."""
import json

import httpx
import pytest

from topcoder_api.exceptions import UpstreamRequestError
from topcoder_api.models.challenges import NewChallenge
from topcoder_api.services.challenges import ChallengeService


@pytest.fixture
def new_challenge():
    return NewChallenge(name="Fix bug", detailed_requirements="Do it", prizes=[100, 50], project_id=7)


# ── create ───────────────────────────────────────────────────────────

def test_build_body_overlays_template(make_client, new_challenge):
    client, _ = make_client(httpx.Response(200))
    body = ChallengeService(client).build_challenge_body(new_challenge)

    assert body["status"] == "Draft"
    assert body["legacy"] == {"track": "DEVELOP"}
    assert body["typeId"] == "type-f2f"
    assert body["timelineTemplateId"] == "timeline-1"
    assert body["name"] == "Fix bug"
    assert body["description"] == "Do it"
    assert body["projectId"] == 7
    assert body["prizeSets"] == [{
        "type": "Challenge prizes",
        "prizes": [{"type": "money", "value": 100}, {"type": "money", "value": 50}],
    }]
    assert "startDate" in body


def test_build_body_does_not_mutate_template(make_client, new_challenge, fake_config):
    client, _ = make_client(httpx.Response(200))
    body = ChallengeService(client).build_challenge_body(new_challenge)
    body["legacy"]["track"] = "CHANGED"

    assert fake_config.challenge.new_challenge_template == {"status": "Draft", "legacy": {"track": "DEVELOP"}}


def test_create_challenge_returns_id(make_client, new_challenge):
    client, recorder = make_client(httpx.Response(201, json={"id": "c-1"}))

    assert ChallengeService(client).create_challenge(new_challenge) == "c-1"
    request = recorder.requests[0]
    assert request.method == "POST"
    assert str(request.url) == "https://api.test/v5/challenges"
    assert json.loads(request.content)["name"] == "Fix bug"


def test_new_challenge_accepts_aliases():
    challenge = NewChallenge(name="n", detailedRequirements="r", projectId=3)
    assert challenge.detailed_requirements == "r"
    assert challenge.project_id == 3
    assert challenge.prizes == []


# ── patches ──────────────────────────────────────────────────────────

def _patched(recorder):
    request = recorder.requests[0]
    assert request.method == "PATCH"
    assert str(request.url) == "https://api.test/v5/challenges/c-1"
    return json.loads(request.content)


def test_update_challenge(make_client):
    client, recorder = make_client(httpx.Response(200, json={}))
    assert ChallengeService(client).update_challenge("c-1", {"name": "New"}) is None
    assert _patched(recorder) == {"name": "New"}


def test_activate_challenge(make_client):
    client, recorder = make_client(httpx.Response(200, json={}))
    ChallengeService(client).activate_challenge("c-1")
    assert _patched(recorder) == {"status": "Active"}


def test_close_challenge(make_client):
    client, recorder = make_client(httpx.Response(200, json={}))
    ChallengeService(client).close_challenge("c-1", 40152856, "alice")
    assert _patched(recorder) == {
        "status": "Completed",
        "winners": [{"userId": 40152856, "handle": "alice", "placement": 1}],
    }


def test_cancel_private_content(make_client):
    client, recorder = make_client(httpx.Response(200, json={}))
    ChallengeService(client).cancel_private_content("c-1")
    assert _patched(recorder) == {"status": "Canceled"}


# ── get ──────────────────────────────────────────────────────────────

def test_get_challenge_by_id(make_client):
    challenge = {"id": "c-1", "name": "Fix bug", "status": "Active"}
    client, recorder = make_client(httpx.Response(200, json=challenge))

    assert ChallengeService(client).get_challenge_by_id("c-1") == challenge
    assert recorder.requests[0].method == "GET"


def test_get_challenge_failure(make_client):
    client, _ = make_client(httpx.Response(404, json={"message": "not found"}))

    with pytest.raises(UpstreamRequestError) as exc_info:
        ChallengeService(client).get_challenge_by_id("missing")
    assert exc_info.value.message == "Failed to get challenge details by Id"


def test_challenge_id_is_path_encoded(make_client):
    client, recorder = make_client(httpx.Response(200, json={}))

    ChallengeService(client).get_challenge_by_id("a/b?c#d")
    request = recorder.requests[0]
    assert request.url.raw_path == b"/v5/challenges/a%2Fb%3Fc%23d"
    assert request.url.query == b""


def test_integer_prizes_sent_unchanged(make_client):
    client, recorder = make_client(httpx.Response(201, json={"id": "c-1"}))
    challenge = NewChallenge(name="n", prizes=[100, 25.5], project_id=1)

    ChallengeService(client).create_challenge(challenge)
    prizes = json.loads(recorder.requests[0].content)["prizeSets"][0]["prizes"]
    assert prizes == [{"type": "money", "value": 100}, {"type": "money", "value": 25.5}]
    assert isinstance(prizes[0]["value"], int)
