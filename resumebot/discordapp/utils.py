# resumebot/discordapp/utils.py

"""
Security Utilities for the Discord App.

The key component is a view decorator that verifies the authenticity of every
incoming interaction from Discord. Discord signs each request with the
application's Ed25519 key and refuses to keep an interactions endpoint that
accepts unsigned or badly signed payloads, so nothing reaches the dispatcher
without passing this check.
"""

# Standard library imports
import logging
from functools import wraps

# Django imports
from django.conf import settings
from django.http import HttpRequest, JsonResponse

# Third-party imports
from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PublicKey

logger = logging.getLogger(__name__)


def _unauthorized(message: str) -> JsonResponse:
    return JsonResponse({"error": message}, status=401)


def verify_discord_signature(public_key_hex: str, signature_hex: str, timestamp: str, body: bytes) -> bool:
    """
    Returns True if `signature_hex` is a valid Ed25519 signature of
    `timestamp + body` under the hex-encoded application public key.

    Raises ValueError if either hex string cannot be decoded or the key is
    not a valid Ed25519 public key.
    """
    public_key = Ed25519PublicKey.from_public_bytes(bytes.fromhex(public_key_hex))
    signature = bytes.fromhex(signature_hex)
    try:
        public_key.verify(signature, timestamp.encode("utf-8") + body)
    except InvalidSignature:
        return False
    return True


def discord_verification_required(view_func):
    """
    A Django view decorator to verify that an incoming request is from Discord.

    How it works:
    1.  **Headers:** Reads `X-Signature-Ed25519` and `X-Signature-Timestamp`.
    2.  **Message:** The signed message is the timestamp followed by the raw,
        unparsed request body.
    3.  **Verification:** Checks the signature against `DISCORD_PUBLIC_KEY`.

    If verification fails, it returns a 401 with a JSON error body, which is
    what Discord expects when it probes the endpoint with a forged request.

    Usage:
        @discord_verification_required
        def my_discord_view(request):
            ...
    """
    @wraps(view_func)
    def wrapper(request: HttpRequest, *args, **kwargs):
        signature = request.headers.get("X-Signature-Ed25519")
        timestamp = request.headers.get("X-Signature-Timestamp")

        if not signature or not timestamp:
            logger.warning("Missing Discord signature or timestamp headers.")
            return _unauthorized("missing request signature")

        public_key = settings.DISCORD_PUBLIC_KEY
        if not public_key:
            # Critical configuration error; the outside world only sees a 401.
            logger.error("DISCORD_PUBLIC_KEY is not configured.")
            return _unauthorized("invalid request signature")

        try:
            is_valid = verify_discord_signature(public_key, signature, timestamp, request.body)
        except ValueError as e:
            logger.warning(f"Malformed Discord signature or public key: {e}")
            return _unauthorized("invalid request signature")

        if not is_valid:
            logger.warning("Discord signature verification failed. Mismatch.")
            return _unauthorized("invalid request signature")

        return view_func(request, *args, **kwargs)

    return wrapper
