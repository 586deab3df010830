# resumebot/discordapp/validators.py

"""
Input validation for resume review submissions.

Both validators are pure functions: they return a human-readable rejection
reason (or None) and never touch the database, the cache or Discord.
"""

import re
from typing import Any, Dict, Optional, Tuple

PDF_CONTENT_TYPE = "application/pdf"
MAX_ATTACHMENT_BYTES = 2 * 1024 * 1024  # 2 MiB

# One '@', a non-empty local part, and a dotted domain. Deliverability is not checked.
EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def is_pdf(attachment: Dict[str, Any]) -> bool:
    """
    Either the declared content type or the file extension is enough, so a
    mislabeled file named `*.pdf` is accepted here and left to the worker.
    """
    content_type = attachment.get("content_type") or ""
    filename = attachment.get("filename") or ""
    return content_type == PDF_CONTENT_TYPE or filename.lower().endswith(".pdf")


def format_size_mb(size: int) -> str:
    return f"{size / (1024 * 1024):.2f}"


def validate_attachment(attachment: Optional[Dict[str, Any]]) -> Optional[str]:
    """
    Checks an uploaded attachment against the upload policy.

    Rules are applied in order: present, PDF, at most 2 MiB.

    Args:
        attachment: The resolved Discord attachment object, or None.

    Returns:
        A rejection reason naming the offending file, or None if the
        attachment is acceptable.
    """
    if not attachment:
        return "No attachment found. Please upload a PDF file."

    filename = attachment.get("filename") or ""
    if not is_pdf(attachment):
        return (
            "Invalid file type. Please upload a PDF file.\n\n"
            f"Received: {filename} ({attachment.get('content_type')})"
        )

    size = int(attachment.get("size") or 0)
    if size > MAX_ATTACHMENT_BYTES:
        return (
            "File too large. Maximum size is 2MB.\n\n"
            f"Your file: {filename} ({format_size_mb(size)}MB)"
        )

    return None


def validate_email_address(value: Optional[str]) -> Tuple[str, Optional[str]]:
    """
    Trims and checks a submitted email address.

    Returns:
        A `(email, error)` tuple. `email` is the trimmed value either way;
        `error` is None when the address is acceptable.
    """
    email = (value or "").strip()
    if not email or not EMAIL_PATTERN.match(email):
        return email, f'Invalid email address: "{email}"\n\nPlease use the command again with a valid email.'
    return email, None
