import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Union

from pydantic.alias_generators import to_camel

from app.schemas.daily_note import StructuredNote

logger = logging.getLogger(__name__)

DEFAULT_CATEGORY = "other"
EMPTY_PREVIEW = "No notes recorded."

# Free-text fields in the order the preview looks at them
PREVIEW_FIELDS = [
    "general_notes",
    "behavior_notes",
    "academic_progress",
    "social_interaction",
    "activities_participated",
    "achievements_successes",
    "concerns_challenges",
]

TEXT_FIELDS = PREVIEW_FIELDS + [
    "category",
    "overall_mood",
    "priority",
    "parent_contact_notes",
    "follow_up_assignee",
]

FLAG_FIELDS = ["parent_contacted", "follow_up_needed"]


@dataclass(frozen=True)
class StructuredPayload:
    fields: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class PlainTextPayload:
    raw: str = ""


NotePayload = Union[StructuredPayload, PlainTextPayload]


def decode(raw_notes: Optional[str]) -> NotePayload:
    """
    Decode the text stored in daily_notes.notes.

    Args:
        raw_notes: The stored notes text, JSON or legacy free text

    Returns:
        StructuredPayload with the decoded JSON object, or PlainTextPayload
        holding the raw text when it is not a JSON object.
    """
    if raw_notes is None:
        return PlainTextPayload("")
    if not isinstance(raw_notes, str):
        return PlainTextPayload(str(raw_notes))

    try:
        parsed = json.loads(raw_notes)
    except (ValueError, RecursionError):
        return PlainTextPayload(raw_notes)

    # "42" or "[1, 2]" decode fine but are still legacy text
    if not isinstance(parsed, dict):
        return PlainTextPayload(raw_notes)

    return StructuredPayload(parsed)


def _clean_tags(value: Any) -> list:
    if isinstance(value, str):
        return [tag.strip() for tag in value.split(",") if tag.strip()]
    if isinstance(value, list):
        return [str(tag).strip() for tag in value if tag is not None and str(tag).strip()]
    return []


def _from_fields(fields: Dict[str, Any]) -> StructuredNote:
    note = StructuredNote()
    cleaned: Dict[str, Any] = {}

    for name in TEXT_FIELDS:
        value = fields.get(to_camel(name))
        if isinstance(value, str):
            cleaned[name] = value
        elif isinstance(value, (int, float)) and not isinstance(value, bool):
            cleaned[name] = str(value)

    for name in FLAG_FIELDS:
        value = fields.get(to_camel(name))
        if isinstance(value, bool):
            cleaned[name] = value

    if "tags" in fields:
        cleaned["tags"] = _clean_tags(fields["tags"])

    # Blank category/mood/priority keep their defaults
    for name in ("category", "overall_mood", "priority"):
        if name in cleaned and not cleaned[name].strip():
            del cleaned[name]

    return note.model_copy(update=cleaned)


def _category_or_default(category: Optional[str]) -> str:
    if isinstance(category, str) and category.strip():
        return category
    return DEFAULT_CATEGORY


def interpret(raw_notes: Optional[str], fallback_category: Optional[str] = None) -> StructuredNote:
    """
    Turn a stored notes payload into a StructuredNote for display or editing.

    Never raises. Legacy plain text lands in general_notes with the caller's
    fallback category; every other field keeps its default.

    Args:
        raw_notes: The stored notes text
        fallback_category: Category to use when the payload is plain text

    Returns:
        A StructuredNote
    """
    payload = decode(raw_notes)

    if isinstance(payload, StructuredPayload):
        return _from_fields(payload.fields)

    logger.debug("Daily note payload is plain text, using fallback category")
    return StructuredNote(
        category=_category_or_default(fallback_category),
        general_notes=payload.raw,
    )


def encode(note: StructuredNote) -> str:
    """Serialize a StructuredNote into the JSON text stored in daily_notes.notes."""
    return json.dumps(note.model_dump(by_alias=True))


def summarize(note: StructuredNote) -> str:
    """First non-empty free-text field, used as the one-line preview."""
    for name in PREVIEW_FIELDS:
        value = getattr(note, name)
        if value:
            return value
    return EMPTY_PREVIEW
