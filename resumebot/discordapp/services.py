# resumebot/discordapp/services.py

"""
Quota enforcement and request queuing.

`enqueue_review_request` is the single commit point of the review flow. The
user upsert and the request row are written in one transaction, and the
quota increment is a conditional UPDATE, so two concurrent submissions from
the same user cannot both be accepted.
"""

# Standard library imports
import logging
from typing import Any, Dict, Optional

# Django imports
from django.conf import settings
from django.db import DatabaseError, transaction
from django.db.models import F
from django.utils import timezone

# Local application imports
from .models import ResumeReviewRequest, User
from .tasks import notify_ops_channel

LOGGER = logging.getLogger(__name__)


class QuotaExceeded(Exception):
    """The user already has the maximum number of accepted review requests."""


class ReviewCommitError(Exception):
    """The review request could not be persisted. Nothing was written."""


# ==============================================================================
# Quota Store
# ==============================================================================

def find_user(discord_user_id: str) -> Optional[User]:
    return User.objects.filter(discord_user_id=discord_user_id).first()


def has_quota(user: Optional[User]) -> bool:
    """An unknown user, or one below the configured maximum, may submit."""
    return user is None or user.resume_review_count < settings.RESUME_REVIEW_MAX_PER_USER


def upsert_user(discord_user_id: str, email: str, display_name: str) -> User:
    """
    Creates the user with a count of one, or increments an existing user's count.

    The increment only happens if the stored count is still below the limit,
    evaluated by the database in the same statement. Must be called inside a
    transaction.

    Raises:
        QuotaExceeded: If the user is already at the limit.
    """
    now = timezone.now()
    limit = settings.RESUME_REVIEW_MAX_PER_USER

    user, created = User.objects.get_or_create(
        discord_user_id=discord_user_id,
        defaults={
            "email": email,
            "display_name": display_name,
            "resume_review_count": 1,
            "last_request_at": now,
        },
    )
    if created:
        if limit < 1:
            raise QuotaExceeded(discord_user_id)
        return user

    updated = User.objects.filter(
        pk=user.pk, resume_review_count__lt=limit
    ).update(
        email=email,
        display_name=display_name,
        resume_review_count=F("resume_review_count") + 1,
        last_request_at=now,
        updated_at=now,
    )
    if not updated:
        raise QuotaExceeded(discord_user_id)

    user.refresh_from_db()
    return user


# ==============================================================================
# Request Enqueuer
# ==============================================================================

def enqueue_review_request(pending: Dict[str, Any], email: str, discord_user_id: str, display_name: str) -> ResumeReviewRequest:
    """
    Accepts a review request: upserts the user and queues the request row.

    Both writes succeed together or not at all. The ops notification is
    scheduled to run only after the transaction commits.

    Args:
        pending: Attachment metadata (filename, size, url, content_type).
        email: The validated destination email.
        discord_user_id: The requesting user's Discord id.
        display_name: The requesting user's display name.

    Raises:
        QuotaExceeded: If the user has no quota left.
        ReviewCommitError: If the database rejected either write.
    """
    try:
        with transaction.atomic():
            user = upsert_user(discord_user_id, email, display_name)
            review_request = ResumeReviewRequest.objects.create(
                email=email,
                discord_user_id=discord_user_id,
                discord_username=display_name,
                user=user,
                attachment_url=pending.get("url") or "",
                attachment_filename=pending.get("filename") or "",
                attachment_content_type=pending.get("content_type") or "",
                attachment_size=int(pending.get("size") or 0),
            )
            summary = (
                f"New resume review request #{review_request.pk} from {display_name} "
                f"({discord_user_id}): {review_request.attachment_filename} -> {email}"
            )
            transaction.on_commit(lambda: notify_ops(summary))
    except DatabaseError as e:
        LOGGER.exception(f"Failed to queue resume review for {discord_user_id}: {e}")
        raise ReviewCommitError(str(e)) from e

    LOGGER.info(f"Resume Review Request #{review_request.pk} queued for {display_name} ({discord_user_id})")
    return review_request


def notify_ops(summary: str) -> None:
    """
    Fire-and-forget notification to the ops channel.

    The Slack post runs in a Celery worker. Failing to even hand the task to
    the broker is logged and otherwise ignored.
    """
    try:
        notify_ops_channel.delay(summary)
    except Exception as e:
        LOGGER.exception(f"Could not dispatch ops notification: {e}")
