"""Validation gate: turn raw submission payloads into typed, trimmed submissions."""

from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from app.feedback.errors import ValidationError
from app.models.schemas import FeedbackSubmission

FIELD_MESSAGES = {
    "name": "Name is required",
    "email": "Invalid email address",
    "eventName": "Event name is required",
    "eventType": "Event type is required",
    "rating": "Rating must be a number between 1 and 5",
    "comments": "Comments are required",
}
BODY_MESSAGE = "Request body must be a JSON object"
WIRE_NAMES = {"event_name": "eventName", "event_type": "eventType"}


def field_errors(locations: list[tuple]) -> list[dict[str, str]]:
    """Collapse error locations into one message per field, in form order."""
    seen: set[str] = set()
    for loc in locations:
        if loc and loc[0] == "body":
            loc = loc[1:]
        if not loc:
            continue
        field = str(loc[0])
        seen.add(WIRE_NAMES.get(field, field))

    errors = [{"field": f, "message": m} for f, m in FIELD_MESSAGES.items() if f in seen]
    if not errors:
        errors.append({"field": "body", "message": BODY_MESSAGE})
    return errors


def validate_submission(payload: Any) -> FeedbackSubmission:
    if not isinstance(payload, Mapping):
        raise ValidationError([{"field": "body", "message": BODY_MESSAGE}])
    try:
        return FeedbackSubmission.model_validate(dict(payload))
    except PydanticValidationError as e:
        raise ValidationError(field_errors([err["loc"] for err in e.errors()])) from e
