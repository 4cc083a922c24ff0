"""Field and entity validation.

Scalar validators take one value and return a bool. Entity validators take a
draft plus an ``optional`` flag and return the names of the invalid fields:
in optional mode (partial updates) fields the client never supplied are not
reported, so only supplied-but-malformed values count as errors.
"""
import dataclasses
import enum
import math
from collections.abc import Callable
from typing import Any

from email_validator import EmailNotValidError, validate_email as _parse_email

from eventhub.config import Settings
from eventhub.dates import parse_datetime
from eventhub.models.enums import AssistanceFormat, EventCategory, EventFormat
from eventhub.schemas.assistance import AssistanceDraft
from eventhub.schemas.event import EventDraft
from eventhub.schemas.message import MessageDraft
from eventhub.schemas.patch import is_supplied
from eventhub.schemas.user import CredentialsDraft, UserDraft

Rule = Callable[[Any, Settings], bool]


def is_string(value) -> bool:
    return isinstance(value, str)


def validate_string(value) -> bool:
    """Non-null text that is not empty once trimmed."""
    return is_string(value) and len(value.strip()) > 0


def is_number(value) -> bool:
    # bool is an int subclass but never a valid number here
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return not math.isnan(value)


def is_whole_number(value) -> bool:
    return is_number(value) and not math.isinf(value) and float(value).is_integer()


# Range of the INTEGER columns holding ids and counts
MIN_INTEGER = -(2**31)
MAX_INTEGER = 2**31 - 1


def is_integer(value) -> bool:
    """Whole number that fits an INTEGER column."""
    return is_whole_number(value) and MIN_INTEGER <= value <= MAX_INTEGER


def is_date(value) -> bool:
    return parse_datetime(value) is not None


def validate_email(value) -> bool:
    if not validate_string(value):
        return False
    try:
        _parse_email(value, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def validate_password(value, min_length: int) -> bool:
    return validate_string(value) and len(value) >= min_length


def validate_enum(value, enum_cls: type[enum.Enum]) -> bool:
    return any(value == member.value for member in enum_cls)


def validate_event_rating(value, minimum: float, maximum: float) -> bool:
    return is_number(value) and minimum <= value <= maximum


def enum_values(enum_cls: type[enum.Enum]) -> str:
    return ",".join(member.value for member in enum_cls)


# --- Rule tables (one per draft, every draft field must have a rule) ---

_USER_RULES: dict[str, Rule] = {
    "name": lambda v, s: validate_string(v),
    "last_name": lambda v, s: validate_string(v),
    "email": lambda v, s: validate_email(v),
    "password": lambda v, s: validate_password(v, s.PASSWORD_MIN_LENGTH),
    "image_url": lambda v, s: validate_string(v),
}

_CREDENTIALS_RULES: dict[str, Rule] = {
    "email": lambda v, s: validate_email(v),
    "password": lambda v, s: validate_password(v, s.PASSWORD_MIN_LENGTH),
}

_EVENT_RULES: dict[str, Rule] = {
    "title": lambda v, s: validate_string(v),
    "owner_id": lambda v, s: is_integer(v),
    "creation_date": lambda v, s: is_date(v),
    "image_url": lambda v, s: validate_string(v),
    "format": lambda v, s: validate_enum(v, EventFormat),
    "link": lambda v, s: validate_string(v),
    "location": lambda v, s: validate_string(v),
    "description": lambda v, s: validate_string(v),
    "start_date": lambda v, s: is_date(v),
    "end_date": lambda v, s: is_date(v),
    "max_attendees": lambda v, s: is_integer(v) and v >= 0,
    "ticket_price": lambda v, s: is_number(v) and v >= 0,
    "category": lambda v, s: validate_enum(v, EventCategory),
}

_MESSAGE_RULES: dict[str, Rule] = {
    "sender_user_id": lambda v, s: is_integer(v),
    "receiver_user_id": lambda v, s: is_integer(v),
    "content": lambda v, s: validate_string(v),
    "timestamp": lambda v, s: is_date(v),
}

_ASSISTANCE_RULES: dict[str, Rule] = {
    "user_id": lambda v, s: is_integer(v),
    "event_id": lambda v, s: is_integer(v),
    "format": lambda v, s: validate_enum(v, AssistanceFormat),
    "rating": lambda v, s: validate_event_rating(v, s.EVENT_MIN_RATING, s.EVENT_MAX_RATING),
    "comment": lambda v, s: validate_string(v),
}


def _check_rules(draft_cls, rules: dict[str, Rule]) -> None:
    names = {field.name for field in dataclasses.fields(draft_cls)}
    if names != set(rules):
        raise RuntimeError(
            f"{draft_cls.__name__} rules out of sync: "
            f"missing={sorted(names - set(rules))} extra={sorted(set(rules) - names)}"
        )


_check_rules(UserDraft, _USER_RULES)
_check_rules(CredentialsDraft, _CREDENTIALS_RULES)
_check_rules(EventDraft, _EVENT_RULES)
_check_rules(MessageDraft, _MESSAGE_RULES)
_check_rules(AssistanceDraft, _ASSISTANCE_RULES)


def _invalid_fields(draft, rules: dict[str, Rule], settings: Settings) -> list[str]:
    return [
        field.name
        for field in dataclasses.fields(draft)
        if not rules[field.name](getattr(draft, field.name), settings)
    ]


def _drop_unsupplied(draft, invalid: list[str]) -> list[str]:
    return [name for name in invalid if is_supplied(getattr(draft, name))]


def is_field_valid(draft, name: str, settings: Settings) -> bool:
    """Check a single field of an event draft against its rule."""
    return _EVENT_RULES[name](getattr(draft, name), settings)


def validate_user(user: UserDraft, optional: bool, settings: Settings) -> list[str]:
    invalid = _invalid_fields(user, _USER_RULES, settings)
    return _drop_unsupplied(user, invalid) if optional else invalid


def validate_credentials(credentials: CredentialsDraft, settings: Settings) -> list[str]:
    return _invalid_fields(credentials, _CREDENTIALS_RULES, settings)


def event_exempt_fields(event_format) -> set[str]:
    """Fields that do not apply to an event of the given format."""
    if event_format == EventFormat.online.value:
        return {"max_attendees", "location"}
    if event_format == EventFormat.face_to_face.value:
        return {"link"}
    return set()


def validate_event(event: EventDraft, optional: bool, settings: Settings) -> list[str]:
    invalid = _invalid_fields(event, _EVENT_RULES, settings)

    exempt = event_exempt_fields(event.format)
    invalid = [name for name in invalid if name not in exempt]

    start = parse_datetime(event.start_date)
    end = parse_datetime(event.end_date)
    if start is not None and end is not None and start >= end and "start_date" not in invalid:
        invalid.append("start_date")

    return _drop_unsupplied(event, invalid) if optional else invalid


def validate_message(message: MessageDraft, optional: bool, settings: Settings) -> list[str]:
    invalid = _invalid_fields(message, _MESSAGE_RULES, settings)
    return _drop_unsupplied(message, invalid) if optional else invalid


def validate_assistance(
    assistance: AssistanceDraft, optional: bool, settings: Settings
) -> list[str]:
    invalid = _invalid_fields(assistance, _ASSISTANCE_RULES, settings)
    return _drop_unsupplied(assistance, invalid) if optional else invalid


def validate_event_search(title, location) -> list[str]:
    """Title and location are each optional, but at least one must be a valid string."""
    if title is None and location is None:
        return ["title", "location"]
    invalid = []
    if title is not None and not validate_string(title):
        invalid.append("title")
    if location is not None and not validate_string(location):
        invalid.append("location")
    return invalid


def validate_user_search(text) -> list[str]:
    return [] if validate_string(text) else ["text"]
