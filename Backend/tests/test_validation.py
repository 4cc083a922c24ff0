import pytest

from eventhub.config import Settings
from eventhub.models.enums import EventCategory
from eventhub.schemas.assistance import AssistanceDraft
from eventhub.schemas.event import EventDraft
from eventhub.schemas.message import MessageDraft
from eventhub.schemas.patch import UNSET, supplied_fields
from eventhub.schemas.user import CredentialsDraft, UserDraft
from eventhub.validation import (
    MAX_INTEGER,
    is_integer,
    is_number,
    is_whole_number,
    validate_assistance,
    validate_credentials,
    validate_email,
    validate_enum,
    validate_event,
    validate_event_rating,
    validate_event_search,
    validate_message,
    validate_password,
    validate_string,
    validate_user,
    validate_user_search,
)


@pytest.fixture
def settings() -> Settings:
    return Settings(JWT_SECRET="secret", DATABASE_URL="sqlite+aiosqlite:///:memory:")


def make_event(**overrides) -> EventDraft:
    values = {
        "title": "Jazz night",
        "owner_id": 1,
        "creation_date": "2030-01-01T10:00:00Z",
        "image_url": "https://img.example.com/event.png",
        "format": "face-to-face",
        "link": None,
        "location": "Blue Note, Madrid",
        "description": "Live jazz",
        "start_date": "2030-02-01T20:00:00Z",
        "end_date": "2030-02-01T23:00:00Z",
        "max_attendees": 100,
        "ticket_price": 12.5,
        "category": "music",
    }
    values.update(overrides)
    return EventDraft(**values)


def test_validate_string():
    assert validate_string("hello")
    assert not validate_string("   ")
    assert not validate_string("")
    assert not validate_string(None)
    assert not validate_string(42)


def test_numbers_reject_booleans_and_nan():
    assert is_number(3.5)
    assert not is_number(True)
    assert not is_number(float("nan"))
    assert not is_number("3")
    assert is_whole_number(4)
    assert is_whole_number(4.0)
    assert not is_whole_number(4.5)
    assert not is_whole_number(float("inf"))


def test_integers_fit_the_column_range():
    assert is_integer(MAX_INTEGER)
    assert is_integer(-MAX_INTEGER - 1)
    assert not is_integer(MAX_INTEGER + 1)
    assert not is_integer(1e300)


def test_validate_email():
    assert validate_email("ann@example.com")
    assert not validate_email("ann@")
    assert not validate_email("not an email")
    assert not validate_email(None)


def test_validate_password_min_length():
    assert validate_password("12345678", 8)
    assert not validate_password("1234567", 8)
    assert not validate_password(12345678, 8)


def test_validate_enum():
    assert validate_enum("music", EventCategory)
    assert not validate_enum("Music", EventCategory)
    assert not validate_enum(None, EventCategory)


def test_rating_bounds_are_inclusive():
    assert validate_event_rating(10, 0, 10)
    assert validate_event_rating(0, 0, 10)
    assert not validate_event_rating(11, 0, 10)
    assert not validate_event_rating(-0.5, 0, 10)


def test_validate_user_reports_every_missing_field(settings):
    assert validate_user(UserDraft(), False, settings) == [
        "name",
        "last_name",
        "email",
        "password",
        "image_url",
    ]


def test_validate_user_optional_ignores_unsupplied_fields(settings):
    draft = UserDraft(last_name="Smith")
    assert validate_user(draft, True, settings) == []
    assert supplied_fields(draft) == {"last_name": "Smith"}


def test_validate_user_optional_reports_supplied_invalid_fields(settings):
    draft = UserDraft(email="broken", password="short", name=None)
    assert validate_user(draft, True, settings) == ["name", "email", "password"]


def test_validate_credentials(settings):
    assert validate_credentials(CredentialsDraft("ann@example.com", "password123"), settings) == []
    assert validate_credentials(CredentialsDraft(), settings) == ["email", "password"]


def test_valid_event(settings):
    assert validate_event(make_event(), False, settings) == []


def test_online_event_does_not_need_location_or_attendees(settings):
    draft = make_event(
        format="online",
        link="https://meet.example.com/jazz",
        location=UNSET,
        max_attendees=UNSET,
    )
    invalid = validate_event(draft, False, settings)
    assert "location" not in invalid
    assert "max_attendees" not in invalid
    assert invalid == []


def test_face_to_face_event_does_not_need_link(settings):
    draft = make_event(link=UNSET)
    assert validate_event(draft, False, settings) == []


def test_online_event_requires_link(settings):
    draft = make_event(format="online", link=None, location=UNSET, max_attendees=UNSET)
    assert validate_event(draft, False, settings) == ["link"]


@pytest.mark.parametrize(
    "start, end",
    [
        ("2030-02-01T23:00:00Z", "2030-02-01T20:00:00Z"),
        ("2030-02-01T20:00:00Z", "2030-02-01T20:00:00Z"),
    ],
)
def test_start_date_must_precede_end_date(settings, start, end):
    invalid = validate_event(make_event(start_date=start, end_date=end), False, settings)
    assert invalid == ["start_date"]


def test_start_date_flagged_once_when_malformed(settings):
    invalid = validate_event(make_event(start_date="yesterday"), False, settings)
    assert invalid.count("start_date") == 1


def test_event_numbers(settings):
    invalid = validate_event(
        make_event(max_attendees=-1, ticket_price="free", category="cooking"), False, settings
    )
    assert invalid == ["max_attendees", "ticket_price", "category"]


def test_event_numbers_out_of_integer_range(settings):
    invalid = validate_event(make_event(max_attendees=1e300), False, settings)
    assert invalid == ["max_attendees"]


def test_partial_event_only_checks_supplied_fields(settings):
    draft = EventDraft(owner_id=1, creation_date="2030-01-01T10:00:00Z", title="Renamed")
    assert validate_event(draft, True, settings) == []

    draft = EventDraft(owner_id=1, creation_date="2030-01-01T10:00:00Z", ticket_price=-3)
    assert validate_event(draft, True, settings) == ["ticket_price"]


def test_validate_message(settings):
    draft = MessageDraft(
        sender_user_id=1, receiver_user_id=2, content="hi", timestamp="2030-01-01T10:00:00Z"
    )
    assert validate_message(draft, False, settings) == []
    draft = MessageDraft(sender_user_id=1, receiver_user_id="2", content=" ", timestamp=UNSET)
    assert validate_message(draft, False, settings) == ["receiver_user_id", "content", "timestamp"]


def test_validate_assistance_rating_uses_configured_bounds(settings):
    draft = AssistanceDraft(user_id=1, event_id=1, rating=11)
    assert validate_assistance(draft, True, settings) == ["rating"]
    draft = AssistanceDraft(user_id=1, event_id=1, rating=10)
    assert validate_assistance(draft, True, settings) == []

    narrow = Settings(
        JWT_SECRET="secret",
        DATABASE_URL="sqlite+aiosqlite:///:memory:",
        EVENT_MAX_RATING=5,
    )
    assert validate_assistance(draft, True, narrow) == ["rating"]


def test_validate_event_search():
    assert validate_event_search(None, None) == ["title", "location"]
    assert validate_event_search("jazz", None) == []
    assert validate_event_search(None, "Madrid") == []
    assert validate_event_search(" ", "Madrid") == ["title"]


def test_validate_user_search():
    assert validate_user_search("ann") == []
    assert validate_user_search("") == ["text"]
    assert validate_user_search(None) == ["text"]
