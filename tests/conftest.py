"""Shared fixtures for the resumebot test suite.

Every request posted through `post_interaction` is signed with a throwaway
Ed25519 key whose public half is installed as DISCORD_PUBLIC_KEY, so the
views are exercised through the real signature check.
"""

import json
from typing import Any, Dict, Optional
from unittest.mock import patch

import pytest
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey
from cryptography.hazmat.primitives.serialization import Encoding, PublicFormat
from django.core.cache import cache

INTERACTIONS_URL = "/discord/interactions/"
MIB = 1024 * 1024

USER_ID = "80351110224678912"
USERNAME = "nelly"
CHANNEL_ID = "41771983423143937"


# ---------------------------------------------------------------------------
# Payload builders
# ---------------------------------------------------------------------------


def make_attachment(filename="resume.pdf", content_type="application/pdf", size=int(1.5 * MIB), attachment_id="att-1"):
    return {
        "id": attachment_id,
        "filename": filename,
        "content_type": content_type,
        "size": size,
        "url": f"https://cdn.discordapp.com/attachments/1/2/{filename}",
    }


def make_command(
    interaction_id="1001",
    attachment: Optional[Dict[str, Any]] = None,
    email: Optional[str] = None,
    user_id: Optional[str] = USER_ID,
    channel_id=CHANNEL_ID,
    in_guild=True,
    name="resume-review",
):
    """A /resume-review APPLICATION_COMMAND interaction."""
    attachment = make_attachment() if attachment is None else attachment
    options = []
    resolved = {}
    if attachment:
        options.append({"name": "resume", "type": 11, "value": attachment["id"]})
        resolved = {"attachments": {attachment["id"]: attachment}}
    if email is not None:
        options.append({"name": "email", "type": 3, "value": email})

    payload = {
        "id": interaction_id,
        "type": 2,
        "channel_id": channel_id,
        "data": {"id": "cmd-1", "name": name, "type": 1, "options": options, "resolved": resolved},
    }
    _attach_user(payload, user_id, in_guild)
    return payload


def make_modal_submit(interaction_id="1001", email="a@b.co", user_id: Optional[str] = USER_ID, submission_id="2001", in_guild=True):
    """The email modal submission that follows command `interaction_id`."""
    payload = {
        "id": submission_id,
        "type": 5,
        "channel_id": CHANNEL_ID,
        "data": {
            "custom_id": f"email_modal_{interaction_id}",
            "components": [
                {"type": 1, "components": [{"type": 4, "custom_id": "email_input", "value": email}]},
            ],
        },
    }
    _attach_user(payload, user_id, in_guild)
    return payload


def _attach_user(payload, user_id, in_guild):
    if user_id is None:
        return
    user = {"id": user_id, "username": USERNAME, "global_name": "Nelly"}
    if in_guild:
        payload["member"] = {"user": user, "nick": None}
    else:
        payload["user"] = user


def message_content(response) -> str:
    """The text of an ephemeral components-v2 message response."""
    body = response.json()
    assert body["type"] == 4
    assert body["data"]["flags"] & 64
    return body["data"]["components"][0]["content"]


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def signing_key():
    return Ed25519PrivateKey.generate()


@pytest.fixture(autouse=True)
def discord_settings(settings, signing_key):
    settings.DISCORD_PUBLIC_KEY = signing_key.public_key().public_bytes(Encoding.Raw, PublicFormat.Raw).hex()
    settings.RESUME_REVIEW_CHANNEL_ID = None
    settings.RESUME_REVIEW_MAX_PER_USER = 1
    settings.RESUME_REVIEW_EMAIL_MODE = "modal"
    settings.PENDING_RESUME_TTL = 900
    settings.SLACK_BOT_TOKEN = "xoxb-test"
    settings.SLACK_OPS_CHANNEL = "C0OPS"
    return settings


@pytest.fixture(autouse=True)
def clear_cache():
    cache.clear()
    yield
    cache.clear()


@pytest.fixture(autouse=True)
def ops_task():
    """Keeps tests away from the Celery broker."""
    with patch("discordapp.services.notify_ops_channel") as task:
        yield task


@pytest.fixture
def post_interaction(client, signing_key):
    def _post(payload, timestamp="1700000000", sign=True, raw_body: Optional[str] = None):
        body = raw_body if raw_body is not None else json.dumps(payload)
        headers = {"HTTP_X_SIGNATURE_TIMESTAMP": timestamp}
        if sign:
            signature = signing_key.sign(timestamp.encode() + body.encode())
            headers["HTTP_X_SIGNATURE_ED25519"] = signature.hex()
        return client.post(INTERACTIONS_URL, data=body, content_type="application/json", **headers)

    return _post
