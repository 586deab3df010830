# resumebot/discordapp/pending.py

"""
Pending resume storage between the slash command and the email modal.

Entries live in Django's cache under the id of the command interaction that
uploaded the file and expire after `settings.PENDING_RESUME_TTL` seconds, so
flows abandoned before the modal is submitted do not accumulate.
"""

import logging
from typing import Any, Dict, Optional

from django.conf import settings
from django.core.cache import cache

LOGGER = logging.getLogger(__name__)

KEY_PREFIX = "pending_resume:"


def _key(interaction_id: str) -> str:
    return f"{KEY_PREFIX}{interaction_id}"


def attachment_metadata(attachment: Dict[str, Any], user_id: Optional[str] = None) -> Dict[str, Any]:
    """The subset of a Discord attachment object needed to queue a review."""
    return {
        "filename": attachment.get("filename"),
        "size": attachment.get("size"),
        "url": attachment.get("url"),
        "content_type": attachment.get("content_type") or "",
        "user_id": user_id,
    }


def store_pending_resume(interaction_id: str, attachment: Dict[str, Any], user_id: Optional[str] = None) -> Dict[str, Any]:
    """Caches the attachment metadata needed to queue the review later."""
    pending = attachment_metadata(attachment, user_id)
    cache.set(_key(interaction_id), pending, timeout=settings.PENDING_RESUME_TTL)
    LOGGER.debug(f"Stored pending resume for interaction {interaction_id}")
    return pending


def consume_pending_resume(interaction_id: str) -> Optional[Dict[str, Any]]:
    """
    Removes and returns the pending resume for `interaction_id`.

    Returns None when the entry expired, was never stored, or was already
    consumed. Only the caller whose delete actually removed the key gets the
    data, so a replayed or concurrent submission cannot queue it twice.
    """
    key = _key(interaction_id)
    pending = cache.get(key)
    if pending is None:
        return None
    if not cache.delete(key):
        LOGGER.info(f"Pending resume for interaction {interaction_id} was consumed concurrently.")
        return None
    return pending
