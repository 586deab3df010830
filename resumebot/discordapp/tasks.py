# resumebot/discordapp/tasks.py

"""
Asynchronous Background Tasks for the Discord App.

Tasks defined here are executed by a Celery worker, separate from the web
process, so that side effects never delay the response Discord is waiting
for. They are discovered by the Celery instance in `resumebot/celery.py`.
"""

# Standard library imports
import logging

# Django imports
from django.conf import settings

# Third-party imports
from celery import shared_task
from slack_sdk import WebClient
from slack_sdk.errors import SlackApiError

LOGGER = logging.getLogger(__name__)


def get_slack_client() -> WebClient:
    return WebClient(token=settings.SLACK_BOT_TOKEN)


@shared_task(ignore_result=True)
def notify_ops_channel(summary: str) -> bool:
    """
    Posts a plain text summary to the ops Slack channel.

    Best effort: configuration gaps and Slack API errors are logged and the
    task finishes normally. It is never retried.

    Args:
        summary: The message text.

    Returns:
        True if Slack accepted the message.
    """
    channel = settings.SLACK_OPS_CHANNEL
    if not (channel and settings.SLACK_BOT_TOKEN):
        LOGGER.warning("Ops notification skipped: SLACK_OPS_CHANNEL or SLACK_BOT_TOKEN is not set.")
        return False

    try:
        get_slack_client().chat_postMessage(channel=channel, text=summary)
    except SlackApiError as e:
        LOGGER.error(f"Slack API error posting ops notification to {channel}: {e.response['error']}")
        return False

    LOGGER.info(f"Posted ops notification to channel {channel}")
    return True
