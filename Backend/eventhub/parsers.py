"""Request parsers used as FastAPI dependencies.

Each parser reads the raw JSON body (or a path/query parameter), builds the
matching draft with the server-controlled fields filled in, validates it and
returns it with dates, enums and numbers converted to their column types.
"""
import dataclasses
import enum

from fastapi import Depends, Request

from eventhub.config import Settings, get_settings
from eventhub.dates import parse_datetime, utc_now
from eventhub.dependencies import get_current_user
from eventhub.errors import BadRequestError, ValidationError
from eventhub.messages import APIMessage
from eventhub.models.enums import AssistanceFormat, EventCategory, EventFormat
from eventhub.models.user import User
from eventhub.schemas.assistance import AssistanceDraft
from eventhub.schemas.event import EventDraft, EventSearch
from eventhub.schemas.message import MessageDraft
from eventhub.schemas.patch import UNSET, draft_from_payload, is_supplied
from eventhub.schemas.user import CredentialsDraft, UserDraft
from eventhub.validation import (
    enum_values,
    event_exempt_fields,
    is_field_valid,
    is_integer,
    validate_assistance,
    validate_credentials,
    validate_event,
    validate_event_search,
    validate_message,
    validate_user,
    validate_user_search,
)


async def read_json_object(request: Request) -> dict:
    try:
        payload = await request.json()
    except ValueError:
        raise BadRequestError(APIMessage.ERROR_REQUEST_BODY_FORMAT)
    if not isinstance(payload, dict):
        raise BadRequestError(APIMessage.ERROR_REQUEST_BODY_FORMAT)
    return payload


# --- Field messages ---


def _number(value: float) -> str:
    return f"{value:g}"


def _enum_message(enum_cls: type[enum.Enum]) -> str:
    return f"{APIMessage.ERROR_INVALID_ENUM_FIELD.value} {enum_values(enum_cls)}"


def _user_field_messages(settings: Settings) -> dict[str, str]:
    return {
        "name": APIMessage.ERROR_INVALID_STRING_FIELD.value,
        "last_name": APIMessage.ERROR_INVALID_STRING_FIELD.value,
        "image_url": APIMessage.ERROR_INVALID_STRING_FIELD.value,
        "email": APIMessage.ERROR_INVALID_EMAIL_FIELD.value,
        "password": APIMessage.ERROR_INVALID_PASSWORD_FIELD.value.format(
            min_length=settings.PASSWORD_MIN_LENGTH
        ),
    }


_EVENT_FIELD_MESSAGES = {
    "title": APIMessage.ERROR_INVALID_STRING_FIELD.value,
    "image_url": APIMessage.ERROR_INVALID_STRING_FIELD.value,
    "link": APIMessage.ERROR_INVALID_STRING_FIELD.value,
    "location": APIMessage.ERROR_INVALID_STRING_FIELD.value,
    "description": APIMessage.ERROR_INVALID_STRING_FIELD.value,
    "owner_id": APIMessage.ERROR_INVALID_WHOLE_NUMBER_FIELD.value,
    "max_attendees": APIMessage.ERROR_INVALID_WHOLE_NUMBER_FIELD.value,
    "ticket_price": APIMessage.ERROR_INVALID_NUMBER_FIELD.value,
    "format": _enum_message(EventFormat),
    "category": _enum_message(EventCategory),
    "creation_date": APIMessage.ERROR_INVALID_DATE.value,
    "start_date": APIMessage.ERROR_INVALID_EVENT_START_DATE.value,
    "end_date": APIMessage.ERROR_INVALID_DATE.value,
}

_MESSAGE_FIELD_MESSAGES = {
    "sender_user_id": APIMessage.ERROR_INVALID_WHOLE_NUMBER_FIELD.value,
    "receiver_user_id": APIMessage.ERROR_INVALID_WHOLE_NUMBER_FIELD.value,
    "content": APIMessage.ERROR_INVALID_STRING_FIELD.value,
    "timestamp": APIMessage.ERROR_INVALID_DATE.value,
}


def _assistance_field_messages(settings: Settings) -> dict[str, str]:
    return {
        "user_id": APIMessage.ERROR_INVALID_WHOLE_NUMBER_FIELD.value,
        "event_id": APIMessage.ERROR_INVALID_WHOLE_NUMBER_FIELD.value,
        "format": _enum_message(AssistanceFormat),
        "rating": APIMessage.ERROR_INVALID_EVENT_RATING.value.format(
            minimum=_number(settings.EVENT_MIN_RATING),
            maximum=_number(settings.EVENT_MAX_RATING),
        ),
        "comment": APIMessage.ERROR_INVALID_STRING_FIELD.value,
    }


def _reject(message: APIMessage, invalid: list[str], field_messages: dict[str, str]):
    raise ValidationError(
        message,
        [{"field": name, "message": field_messages[name]} for name in invalid],
    )


# --- Users ---


async def _parse_user(request: Request, settings: Settings, optional: bool) -> UserDraft:
    payload = await read_json_object(request)
    draft = draft_from_payload(UserDraft, payload)
    invalid = validate_user(draft, optional, settings)
    if invalid:
        _reject(APIMessage.ERROR_INVALID_USER_FIELDS, invalid, _user_field_messages(settings))
    return draft


async def parse_all_user(
    request: Request, settings: Settings = Depends(get_settings)
) -> UserDraft:
    return await _parse_user(request, settings, optional=False)


async def parse_partial_user(
    request: Request, settings: Settings = Depends(get_settings)
) -> UserDraft:
    return await _parse_user(request, settings, optional=True)


async def parse_credentials(
    request: Request, settings: Settings = Depends(get_settings)
) -> CredentialsDraft:
    payload = await read_json_object(request)
    draft = draft_from_payload(CredentialsDraft, payload)
    invalid = validate_credentials(draft, settings)
    if invalid:
        _reject(
            APIMessage.ERROR_INVALID_CREDENTIALS_FIELDS, invalid, _user_field_messages(settings)
        )
    return draft


# --- Events ---


def _convert_event(draft: EventDraft, optional: bool, settings: Settings) -> EventDraft:
    values = {}
    exempt = event_exempt_fields(draft.format)
    for field in dataclasses.fields(draft):
        name = field.name
        value = getattr(draft, name)
        if name in exempt and not is_field_valid(draft, name, settings):
            # Not applicable to this format: stored as NULL
            if is_supplied(value) or not optional:
                values[name] = None
            continue
        if not is_supplied(value):
            continue
        if name in ("creation_date", "start_date", "end_date"):
            value = parse_datetime(value)
        elif name == "format":
            value = EventFormat(value)
        elif name == "category":
            value = EventCategory(value)
        elif name in ("owner_id", "max_attendees"):
            value = int(value)
        elif name == "ticket_price":
            value = float(value)
        values[name] = value
    return EventDraft(**values)


async def _parse_event(
    request: Request, user: User, settings: Settings, optional: bool
) -> EventDraft:
    payload = await read_json_object(request)
    draft = draft_from_payload(
        EventDraft, payload, owner_id=user.id, creation_date=utc_now()
    )
    invalid = validate_event(draft, optional, settings)
    if invalid:
        _reject(APIMessage.ERROR_INVALID_EVENT_FIELDS, invalid, _EVENT_FIELD_MESSAGES)
    return _convert_event(draft, optional, settings)


async def parse_all_event(
    request: Request,
    current_user: User = Depends(get_current_user),
    settings: Settings = Depends(get_settings),
) -> EventDraft:
    return await _parse_event(request, current_user, settings, optional=False)


async def parse_partial_event(
    request: Request,
    current_user: User = Depends(get_current_user),
    settings: Settings = Depends(get_settings),
) -> EventDraft:
    return await _parse_event(request, current_user, settings, optional=True)


def parse_event_search(title: str | None = None, location: str | None = None) -> EventSearch:
    invalid = validate_event_search(title, location)
    if invalid:
        _reject(
            APIMessage.ERROR_INVALID_EVENT_SEARCH_FIELDS,
            invalid,
            {name: APIMessage.ERROR_INVALID_STRING_FIELD.value for name in invalid},
        )
    return EventSearch(title=title, location=location)


# --- Users search and path parameters ---


def parse_user_search(text: str | None = None) -> str:
    invalid = validate_user_search(text)
    if invalid:
        _reject(
            APIMessage.ERROR_INVALID_USER_SEARCH_FIELDS,
            invalid,
            {"text": APIMessage.ERROR_INVALID_STRING_FIELD.value},
        )
    return text


def _path_id(value: str, message: APIMessage) -> int:
    try:
        number = int(value)
    except ValueError:
        raise BadRequestError(message)
    if not is_integer(number):
        raise BadRequestError(message)
    return number


def parse_user_id(user_id: str) -> int:
    return _path_id(user_id, APIMessage.INVALID_USER_ID)


def parse_event_id(event_id: str) -> int:
    return _path_id(event_id, APIMessage.INVALID_EVENT_ID)


# --- Messages ---


async def parse_all_message(
    request: Request,
    current_user: User = Depends(get_current_user),
    settings: Settings = Depends(get_settings),
) -> MessageDraft:
    payload = await read_json_object(request)
    draft = draft_from_payload(
        MessageDraft, payload, sender_user_id=current_user.id, timestamp=utc_now()
    )
    invalid = validate_message(draft, False, settings)
    if invalid:
        _reject(APIMessage.ERROR_INVALID_MESSAGE_FIELDS, invalid, _MESSAGE_FIELD_MESSAGES)
    return dataclasses.replace(draft, receiver_user_id=int(draft.receiver_user_id))


# --- Assistances ---


async def parse_create_assistance(
    request: Request,
    event_id: int = Depends(parse_event_id),
    current_user: User = Depends(get_current_user),
    settings: Settings = Depends(get_settings),
) -> AssistanceDraft:
    """Only the attendance format is taken at registration time."""
    payload = await read_json_object(request)
    draft = AssistanceDraft(
        user_id=current_user.id,
        event_id=event_id,
        format=payload.get("format", UNSET),
    )
    invalid = validate_assistance(draft, True, settings)
    if not is_supplied(draft.format):
        invalid.append("format")
    if invalid:
        _reject(
            APIMessage.ERROR_INVALID_ASSISTANCE_FIELDS,
            invalid,
            _assistance_field_messages(settings),
        )
    return dataclasses.replace(draft, format=AssistanceFormat(draft.format))


async def parse_edit_assistance(
    request: Request,
    event_id: int = Depends(parse_event_id),
    current_user: User = Depends(get_current_user),
    settings: Settings = Depends(get_settings),
) -> AssistanceDraft:
    """Rating and comment, each optional."""
    payload = await read_json_object(request)
    draft = AssistanceDraft(
        user_id=current_user.id,
        event_id=event_id,
        rating=payload.get("rating", UNSET),
        comment=payload.get("comment", UNSET),
    )
    invalid = validate_assistance(draft, True, settings)
    if invalid:
        _reject(
            APIMessage.ERROR_INVALID_ASSISTANCE_FIELDS,
            invalid,
            _assistance_field_messages(settings),
        )
    if is_supplied(draft.rating):
        draft = dataclasses.replace(draft, rating=float(draft.rating))
    return draft
