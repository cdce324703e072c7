from typing import Dict, Optional

from .exceptions import ValidationError
from .models import TITLE_MAX_LENGTH, DESCRIPTION_MAX_LENGTH


def title_errors(title: Optional[str]) -> Optional[str]:
    """Return the error message for a title, or None when it is acceptable"""
    if title is None or not title.strip():
        return "Title is required"
    if len(title) > TITLE_MAX_LENGTH:
        return f"Title must be between 1 and {TITLE_MAX_LENGTH} characters"
    return None


def description_errors(description: Optional[str]) -> Optional[str]:
    if description is not None and len(description) > DESCRIPTION_MAX_LENGTH:
        return f"Description cannot exceed {DESCRIPTION_MAX_LENGTH} characters"
    return None


def validate_task_fields(title: Optional[str], description: Optional[str]) -> None:
    """Validate title/description, raising ValidationError with every failing field"""
    errors: Dict[str, str] = {}

    message = title_errors(title)
    if message:
        errors["title"] = message

    message = description_errors(description)
    if message:
        errors["description"] = message

    if errors:
        raise ValidationError(errors)
