# resumebot/discordapp/models.py

"""
Database Models for the Discord Resume Review Bot.

This module defines the two persistent records behind the `/resume-review`
command: the `User` who asked for a review, which also carries their quota
counter, and the `ResumeReviewRequest` that is queued for the external
analysis worker.
"""

# Django imports
from django.db import models


class User(models.Model):
    """
    Represents a Discord user who has had at least one review request accepted.

    The row is created on the first accepted request and updated on every
    later one. `resume_review_count` is the per-user quota counter and never
    exceeds `settings.RESUME_REVIEW_MAX_PER_USER`.

    Attributes:
        discord_user_id (str): The unique snowflake ID provided by Discord.
        email (str): The most recent email the user asked results to be sent to.
        display_name (str): The user's display name at the time of the last request.
        resume_review_count (int): Number of accepted review requests.
        last_request_at (datetime): When the last request was accepted.
        created_at (datetime): Timestamp of when the user record was created.
        updated_at (datetime): Timestamp of the last update to the record.
    """
    discord_user_id = models.CharField(max_length=32, unique=True, help_text="User's unique Discord ID")
    email = models.EmailField(max_length=254, help_text="Where review results are sent")
    display_name = models.CharField(max_length=100, blank=True)
    resume_review_count = models.PositiveIntegerField(default=0)
    last_request_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "User"
        verbose_name_plural = "Users"
        ordering = ['-last_request_at']

    def __str__(self) -> str:
        return f"{self.display_name or 'Unknown'} ({self.discord_user_id})"


class ResumeReviewRequest(models.Model):
    """
    A single accepted resume review request, queued for asynchronous processing.

    This bot only ever creates rows with `STATUS_QUEUED`. Every later status
    transition belongs to the analysis worker that consumes the queue.
    """
    # --- Status Choices ---
    STATUS_QUEUED = 'QUEUED'
    STATUS_PROCESSING = 'PROCESSING'
    STATUS_COMPLETED = 'COMPLETED'
    STATUS_FAILED = 'FAILED'

    STATUS_CHOICES = [
        (STATUS_QUEUED, 'Queued'),
        (STATUS_PROCESSING, 'Processing'),
        (STATUS_COMPLETED, 'Completed'),
        (STATUS_FAILED, 'Failed'),
    ]

    # --- Requester ---
    email = models.EmailField(max_length=254)
    discord_user_id = models.CharField(max_length=32, db_index=True)
    discord_username = models.CharField(max_length=100, blank=True)
    user = models.ForeignKey(
        User,
        on_delete=models.SET_NULL,  # Keep the request even if the user row is removed.
        null=True,
        blank=True,
        related_name='review_requests',
    )

    # --- Attachment Metadata ---
    # Only metadata is stored; the worker downloads the file from the URL.
    attachment_url = models.URLField(max_length=1000)
    attachment_filename = models.CharField(max_length=255)
    attachment_content_type = models.CharField(max_length=100, blank=True)
    attachment_size = models.PositiveIntegerField(help_text="Attachment size in bytes.")

    status = models.CharField(max_length=16, choices=STATUS_CHOICES, default=STATUS_QUEUED)

    # --- Timestamps ---
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "Resume Review Request"
        verbose_name_plural = "Resume Review Requests"
        ordering = ['-created_at']

    def __str__(self) -> str:
        return f"Review #{self.pk} of {self.attachment_filename} for {self.email} ({self.status})"
