# resumebot/discordapp/discord_components.py

"""
Discord Interaction Response Builders

This module provides the constants and functions that produce the JSON bodies
returned to Discord's interactions endpoint: the PONG for liveness probes,
ephemeral text messages, and the email collection modal.

Keeping payload construction here keeps `views.py` focused on routing and
business rules.
"""

# Standard library imports
from typing import Any, Dict

# --- Interaction Types (inbound) ---
INTERACTION_PING = 1
INTERACTION_APPLICATION_COMMAND = 2
INTERACTION_MODAL_SUBMIT = 5

# --- Interaction Callback Types (outbound) ---
RESPONSE_PONG = 1
RESPONSE_CHANNEL_MESSAGE_WITH_SOURCE = 4
RESPONSE_MODAL = 9

# --- Message Flags ---
FLAG_EPHEMERAL = 1 << 6
FLAG_IS_COMPONENTS_V2 = 1 << 15

# --- Component Types ---
COMPONENT_ACTION_ROW = 1
COMPONENT_TEXT_INPUT = 4
COMPONENT_TEXT_DISPLAY = 10
TEXT_INPUT_SHORT = 1

# --- Identifiers ---
RESUME_REVIEW_COMMAND = "resume-review"
RESUME_OPTION = "resume"
EMAIL_OPTION = "email"
EMAIL_MODAL_PREFIX = "email_modal_"
EMAIL_INPUT_ID = "email_input"
EMAIL_MAX_LENGTH = 100


def get_pong() -> Dict[str, Any]:
    """The acknowledgement Discord expects in reply to a PING."""
    return {"type": RESPONSE_PONG}


def get_ephemeral_message(content: str) -> Dict[str, Any]:
    """
    Builds a message visible only to the user who triggered the interaction.

    Uses a components-v2 text display rather than the legacy `content` field,
    so the body is a single TEXT_DISPLAY component.
    """
    return {
        "type": RESPONSE_CHANNEL_MESSAGE_WITH_SOURCE,
        "data": {
            "flags": FLAG_EPHEMERAL | FLAG_IS_COMPONENTS_V2,
            "components": [
                {"type": COMPONENT_TEXT_DISPLAY, "content": content},
            ],
        },
    }


def get_email_modal(interaction_id: str) -> Dict[str, Any]:
    """
    Generates the modal that asks the user for the email address their review
    should be sent to.

    The modal's `custom_id` embeds the originating command's interaction id so
    the submission can be matched with the cached attachment.

    Args:
        interaction_id: The id of the slash command interaction.

    Returns:
        A dictionary representing the JSON interaction response.
    """
    return {
        "type": RESPONSE_MODAL,
        "data": {
            "custom_id": f"{EMAIL_MODAL_PREFIX}{interaction_id}",
            "title": "Resume Review - Email",
            "components": [
                {
                    "type": COMPONENT_ACTION_ROW,
                    "components": [
                        {
                            "type": COMPONENT_TEXT_INPUT,
                            "custom_id": EMAIL_INPUT_ID,
                            "label": "Your Email Address",
                            "style": TEXT_INPUT_SHORT,
                            "placeholder": "example@email.com",
                            "required": True,
                            "max_length": EMAIL_MAX_LENGTH,
                        }
                    ],
                }
            ],
        },
    }


def get_success_message(filename: str, email: str) -> Dict[str, Any]:
    """Confirmation shown once a review request has been queued."""
    return get_ephemeral_message(
        f"✅ Resume received!\n\n"
        f"📄 **File:** {filename}\n"
        f"📧 **Sent to:** {email}\n\n"
        f"🎉 Your resume has been queued for review. The analysis will be sent to your email address."
    )


def get_error_message(reason: str) -> Dict[str, Any]:
    return get_ephemeral_message(f"❌ {reason}")
