# resumebot/discordapp/views.py

"""
Main View for the Discord Resume Review Bot.

This module is the primary controller. Discord delivers every interaction
(liveness probes, slash commands and modal submissions) to a single endpoint,
`interactions`, which dispatches to the handler for the command name or modal
id and returns exactly one response.

The `/resume-review` flow spans up to two round trips:
- Command: channel, identity, quota and attachment checks, then the configured
  email collection stage (a follow-up modal, or an inline `email` option).
- Modal submission: the cached attachment is consumed, the email validated,
  and the request committed.
"""

# Standard library imports
import json
import logging
from typing import Any, Dict, Optional, Tuple

# Django imports
from django.conf import settings
from django.http import HttpRequest, HttpResponse, JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_POST

# Local application imports
from .discord_components import (EMAIL_INPUT_ID, EMAIL_MODAL_PREFIX, EMAIL_OPTION,
                                 INTERACTION_APPLICATION_COMMAND,
                                 INTERACTION_MODAL_SUBMIT, INTERACTION_PING,
                                 RESUME_OPTION, RESUME_REVIEW_COMMAND,
                                 get_email_modal, get_error_message, get_pong,
                                 get_success_message)
from .pending import (attachment_metadata, consume_pending_resume,
                      store_pending_resume)
from .services import (QuotaExceeded, ReviewCommitError, enqueue_review_request,
                       find_user, has_quota)
from .utils import discord_verification_required
from .validators import validate_attachment, validate_email_address

LOGGER = logging.getLogger(__name__)

Identity = Tuple[str, str]

SESSION_EXPIRED_MESSAGE = "Session expired. Please upload your resume again."
IDENTITY_MESSAGE = "Could not identify your Discord account. Please try again."
COMMIT_FAILED_MESSAGE = "We couldn't queue your resume right now. Please try again later."
UNEXPECTED_ERROR_MESSAGE = "Something went wrong while processing your request. Please try again later."


def _quota_message() -> str:
    limit = settings.RESUME_REVIEW_MAX_PER_USER
    plural = "review" if limit == 1 else "reviews"
    return f"You have already used your resume review quota ({limit} {plural} per user)."


# ==============================================================================
# 1. Main Discord Entry Point (Webhook Receiver)
# ==============================================================================

@csrf_exempt
@require_POST
@discord_verification_required
def interactions(request: HttpRequest) -> HttpResponse:
    """
    Handles and routes every interaction Discord sends to the bot.

    Unknown commands and interaction types are client errors (HTTP 400). All
    outcomes inside a recognised flow, including validation failures, are
    HTTP 200 with an ephemeral message for the user.
    """
    try:
        payload = json.loads(request.body)
    except (ValueError, UnicodeDecodeError):
        LOGGER.warning("Interaction received with a malformed JSON body.")
        return JsonResponse({"error": "invalid request body"}, status=400)

    if not isinstance(payload, dict):
        return JsonResponse({"error": "invalid request body"}, status=400)

    interaction_type = payload.get("type")
    data = payload.get("data") or {}

    if interaction_type == INTERACTION_PING:
        return JsonResponse(get_pong())

    # --- Interaction Routing ---
    if interaction_type == INTERACTION_APPLICATION_COMMAND:
        name = data.get("name")
        handler = COMMAND_HANDLERS.get(name)
        if handler is None:
            LOGGER.error(f"unknown command: {name}")
            return JsonResponse({"error": "unknown command"}, status=400)
    elif interaction_type == INTERACTION_MODAL_SUBMIT:
        handler = _find_modal_handler(data.get("custom_id") or "")
    else:
        handler = None

    if handler is None:
        LOGGER.error(f"unknown interaction type: {interaction_type} ({data.get('custom_id', 'N/A')})")
        return JsonResponse({"error": "unknown interaction type"}, status=400)

    try:
        return handler(payload)
    except Exception as e:
        LOGGER.exception(f"Unexpected error handling interaction {payload.get('id')}: {e}")
        return JsonResponse(get_error_message(UNEXPECTED_ERROR_MESSAGE))


# ==============================================================================
# 2. Command Handlers
# ==============================================================================

def _handle_resume_review_command(payload: Dict[str, Any]) -> HttpResponse:
    """
    Runs the command-time validation chain, then hands off to the configured
    email collection stage. Each check short-circuits with an ephemeral message.
    """
    allowed_channel = settings.RESUME_REVIEW_CHANNEL_ID
    if allowed_channel and _resolve_channel_id(payload) != allowed_channel:
        return JsonResponse(get_error_message(f"This command can only be used in <#{allowed_channel}>."))

    identity = _resolve_identity(payload)
    if identity is None:
        LOGGER.warning(f"Could not resolve the invoking user for interaction {payload.get('id')}")
        return JsonResponse(get_error_message(IDENTITY_MESSAGE))

    user_id, display_name = identity
    if not has_quota(find_user(user_id)):
        LOGGER.info(f"Resume review rejected for {display_name} ({user_id}): quota reached.")
        return JsonResponse(get_error_message(_quota_message()))

    data = payload.get("data") or {}
    options = _get_command_options(data)
    attachments = (data.get("resolved") or {}).get("attachments") or {}
    attachment = attachments.get(options.get(RESUME_OPTION))

    validation_error = validate_attachment(attachment)
    if validation_error:
        return JsonResponse(get_error_message(validation_error))

    collect_email = EMAIL_COLLECTION_STAGES[settings.RESUME_REVIEW_EMAIL_MODE]
    return collect_email(payload, attachment, options, identity)


# ==============================================================================
# 3. Email Collection Stages
# ==============================================================================

def _collect_email_with_modal(payload: Dict[str, Any], attachment: Dict[str, Any], options: Dict[str, Any], identity: Identity) -> HttpResponse:
    """Two-step flow: park the attachment and ask for the email in a modal."""
    interaction_id = payload["id"]
    store_pending_resume(interaction_id, attachment, user_id=identity[0])
    LOGGER.info(f"Awaiting email for {attachment.get('filename')} from {identity[1]} ({identity[0]})")
    return JsonResponse(get_email_modal(interaction_id))


def _collect_email_from_option(payload: Dict[str, Any], attachment: Dict[str, Any], options: Dict[str, Any], identity: Identity) -> HttpResponse:
    """Single-step flow: the email arrives as a command option."""
    email, error = validate_email_address(options.get(EMAIL_OPTION))
    if error:
        return JsonResponse(get_error_message(error))
    return _commit_review_request(attachment_metadata(attachment, identity[0]), email, identity)


# ==============================================================================
# 4. Interaction Handlers
# ==============================================================================

def handle_email_modal_submission(payload: Dict[str, Any]) -> HttpResponse:
    """
    Handles the email modal. The cached attachment is single use: it is
    removed before the email is validated, so a bad email means starting over.
    """
    data = payload.get("data") or {}
    interaction_id = data["custom_id"][len(EMAIL_MODAL_PREFIX):]

    pending = consume_pending_resume(interaction_id)
    if pending is None:
        return JsonResponse(get_error_message(SESSION_EXPIRED_MESSAGE))

    identity = _resolve_identity(payload)
    if identity is None:
        return JsonResponse(get_error_message(IDENTITY_MESSAGE))
    if pending.get("user_id") and pending["user_id"] != identity[0]:
        LOGGER.warning(f"Modal for interaction {interaction_id} submitted by {identity[0]}, expected {pending['user_id']}")
        return JsonResponse(get_error_message(SESSION_EXPIRED_MESSAGE))

    email, error = validate_email_address(_get_modal_value(data, EMAIL_INPUT_ID))
    if error:
        return JsonResponse(get_error_message(error))

    return _commit_review_request(pending, email, identity)


def _commit_review_request(pending: Dict[str, Any], email: str, identity: Identity) -> HttpResponse:
    """Queues the request and maps commit failures to user-facing messages."""
    user_id, display_name = identity
    try:
        enqueue_review_request(pending, email, user_id, display_name)
    except QuotaExceeded:
        LOGGER.info(f"Resume review rejected at commit for {display_name} ({user_id}): quota reached.")
        return JsonResponse(get_error_message(_quota_message()))
    except ReviewCommitError:
        return JsonResponse(get_error_message(COMMIT_FAILED_MESSAGE))

    return JsonResponse(get_success_message(pending.get("filename"), email))


# ==============================================================================
# 5. Payload Helpers
# ==============================================================================

def _resolve_identity(payload: Dict[str, Any]) -> Optional[Identity]:
    """
    Returns `(user_id, display_name)` for the invoking user.

    Discord puts the user under `member.user` for guild interactions and under
    `user` for DMs.
    """
    member = payload.get("member") or {}
    user = member.get("user") or payload.get("user") or {}
    user_id = user.get("id")
    if not user_id:
        return None
    display_name = member.get("nick") or user.get("global_name") or user.get("username") or ""
    return str(user_id), display_name


def _resolve_channel_id(payload: Dict[str, Any]) -> Optional[str]:
    return payload.get("channel_id") or (payload.get("channel") or {}).get("id")


def _get_command_options(data: Dict[str, Any]) -> Dict[str, Any]:
    return {option.get("name"): option.get("value") for option in data.get("options") or []}


def _get_modal_value(data: Dict[str, Any], custom_id: str) -> Optional[str]:
    """Finds a text input value in a modal submission by its custom id."""
    for row in data.get("components") or []:
        # Action rows nest a list of components; label components nest one.
        children = row.get("components") or [row.get("component") or {}]
        for component in children:
            if component.get("custom_id") == custom_id:
                return component.get("value")
    return None


def _find_modal_handler(custom_id: str):
    for prefix, handler in MODAL_SUBMIT_HANDLERS.items():
        if custom_id.startswith(prefix):
            return handler
    return None


# ==============================================================================
# 6. Handler Mappings
# ==============================================================================

COMMAND_HANDLERS = {
    RESUME_REVIEW_COMMAND: _handle_resume_review_command,
}

# Modal custom ids carry the originating interaction id, so they are matched by prefix.
MODAL_SUBMIT_HANDLERS = {
    EMAIL_MODAL_PREFIX: handle_email_modal_submission,
}

# Selected by settings.RESUME_REVIEW_EMAIL_MODE.
EMAIL_COLLECTION_STAGES = {
    "modal": _collect_email_with_modal,
    "option": _collect_email_from_option,
}
