"""Tests for quota enforcement and request queuing."""

from unittest.mock import patch

import pytest
from django.db import DatabaseError

from discordapp.models import ResumeReviewRequest, User
from discordapp.services import (QuotaExceeded, ReviewCommitError,
                                 enqueue_review_request, find_user, has_quota,
                                 notify_ops, upsert_user)

from .conftest import USER_ID

pytestmark = pytest.mark.django_db

PENDING = {
    "filename": "resume.pdf",
    "size": 1572864,
    "url": "https://cdn.discordapp.com/attachments/1/2/resume.pdf",
    "content_type": "application/pdf",
}


class TestQuotaStore:

    def test_find_user_absent(self):
        assert find_user(USER_ID) is None

    def test_has_quota(self, settings):
        settings.RESUME_REVIEW_MAX_PER_USER = 2
        assert has_quota(None) is True
        assert has_quota(User(discord_user_id="1", resume_review_count=1)) is True
        assert has_quota(User(discord_user_id="1", resume_review_count=2)) is False

    def test_upsert_creates_with_count_one(self):
        user = upsert_user(USER_ID, "a@b.co", "Nelly")

        assert user.resume_review_count == 1
        assert user.last_request_at is not None
        assert find_user(USER_ID).email == "a@b.co"

    def test_upsert_increments_and_updates_fields(self, settings):
        settings.RESUME_REVIEW_MAX_PER_USER = 3
        upsert_user(USER_ID, "old@b.co", "Old Name")

        user = upsert_user(USER_ID, "new@b.co", "New Name")

        assert user.resume_review_count == 2
        assert user.email == "new@b.co"
        assert user.display_name == "New Name"

    def test_upsert_refuses_past_limit(self):
        upsert_user(USER_ID, "a@b.co", "Nelly")

        with pytest.raises(QuotaExceeded):
            upsert_user(USER_ID, "a@b.co", "Nelly")

        assert find_user(USER_ID).resume_review_count == 1

    def test_stale_read_cannot_bypass_limit(self):
        # Both handlers saw "no quota used" before either committed.
        User.objects.create(discord_user_id=USER_ID, email="a@b.co", resume_review_count=1)
        stale = User(discord_user_id=USER_ID, resume_review_count=0)
        assert has_quota(stale)

        with pytest.raises(QuotaExceeded):
            upsert_user(USER_ID, "a@b.co", "Nelly")

    def test_zero_limit_rejects_new_users(self, settings):
        settings.RESUME_REVIEW_MAX_PER_USER = 0

        with pytest.raises(QuotaExceeded):
            enqueue_review_request(PENDING, "a@b.co", USER_ID, "Nelly")

        assert not User.objects.exists()


class TestEnqueueReviewRequest:

    def test_creates_user_and_queued_request(self):
        review = enqueue_review_request(PENDING, "a@b.co", USER_ID, "Nelly")

        assert review.status == ResumeReviewRequest.STATUS_QUEUED
        assert review.attachment_filename == "resume.pdf"
        assert review.attachment_content_type == "application/pdf"
        assert review.attachment_size == 1572864
        assert review.user.discord_user_id == USER_ID
        assert User.objects.get().resume_review_count == 1

    def test_second_request_rejected_and_not_queued(self):
        enqueue_review_request(PENDING, "a@b.co", USER_ID, "Nelly")

        with pytest.raises(QuotaExceeded):
            enqueue_review_request(PENDING, "a@b.co", USER_ID, "Nelly")

        assert ResumeReviewRequest.objects.count() == 1
        assert User.objects.get().resume_review_count == 1

    def test_request_write_failure_rolls_back_user(self):
        with patch.object(ResumeReviewRequest.objects, "create", side_effect=DatabaseError("disk I/O error")):
            with pytest.raises(ReviewCommitError):
                enqueue_review_request(PENDING, "a@b.co", USER_ID, "Nelly")

        assert not User.objects.exists()
        assert not ResumeReviewRequest.objects.exists()

    def test_user_write_failure_is_reported(self):
        with patch("discordapp.services.upsert_user", side_effect=DatabaseError("database is locked")):
            with pytest.raises(ReviewCommitError):
                enqueue_review_request(PENDING, "a@b.co", USER_ID, "Nelly")

        assert not ResumeReviewRequest.objects.exists()

    def test_notification_sent_after_commit(self, ops_task, django_capture_on_commit_callbacks):
        with django_capture_on_commit_callbacks(execute=True) as callbacks:
            review = enqueue_review_request(PENDING, "a@b.co", USER_ID, "Nelly")

        assert len(callbacks) == 1
        summary = ops_task.delay.call_args.args[0]
        assert f"#{review.pk}" in summary
        assert "resume.pdf" in summary
        assert "a@b.co" in summary

    def test_no_notification_when_rejected(self, ops_task, django_capture_on_commit_callbacks):
        enqueue_review_request(PENDING, "a@b.co", USER_ID, "Nelly")
        ops_task.delay.reset_mock()

        with django_capture_on_commit_callbacks(execute=True) as callbacks:
            with pytest.raises(QuotaExceeded):
                enqueue_review_request(PENDING, "a@b.co", USER_ID, "Nelly")

        assert callbacks == []
        ops_task.delay.assert_not_called()


class TestNotifyOps:

    def test_dispatches_task(self, ops_task):
        notify_ops("hello")
        ops_task.delay.assert_called_once_with("hello")

    def test_dispatch_failure_is_swallowed(self, ops_task, caplog):
        ops_task.delay.side_effect = ConnectionError("broker unreachable")

        notify_ops("hello")

        assert "Could not dispatch ops notification" in caplog.text
