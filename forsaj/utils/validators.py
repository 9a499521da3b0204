"""
Input validation utilities.

Used by request models and the upload handler to reject malformed input
before it reaches storage.
"""

from __future__ import annotations

import re
from pathlib import PurePath

from forsaj.config import IMAGE_EXTENSIONS

# Usernames: letters, digits, dot, dash, underscore
USERNAME_PATTERN = re.compile(r"^[A-Za-z0-9._-]{3,32}$")
MIN_PASSWORD_LENGTH = 6

# Page ids: lowercase file stems
PAGE_ID_PATTERN = re.compile(r"^[a-z0-9_-]{1,64}$")


class ValidationError(ValueError):
    """Raised when input validation fails."""

    pass


def validate_username(username: str) -> str:
    username = username.strip().lower()
    if not USERNAME_PATTERN.match(username):
        raise ValidationError(
            "Invalid username. Use 3-32 letters, digits, dots, dashes or underscores."
        )
    return username


def validate_password(password: str) -> str:
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
    return password


def validate_page_id(page_id: str) -> str:
    page_id = page_id.strip().lower()
    if not PAGE_ID_PATTERN.match(page_id):
        raise ValidationError("Invalid page id")
    return page_id


def validate_image_filename(filename: str | None) -> str:
    """
    Return the lowercased extension of an uploaded image filename.

    Raises:
        ValidationError: missing name or extension not in IMAGE_EXTENSIONS
    """
    if not filename:
        raise ValidationError("Missing file name")
    suffix = PurePath(filename).suffix.lower()
    if suffix not in IMAGE_EXTENSIONS:
        raise ValidationError(f"Unsupported image type: {suffix or 'none'}")
    return suffix
