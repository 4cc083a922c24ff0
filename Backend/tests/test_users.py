from datetime import timedelta

import pytest
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from conftest import add_assistance, add_event, add_user
from eventhub.dates import utc_now
from eventhub.models.user import User
from eventhub.repositories import assistance_repository, event_repository
from eventhub.schemas.message import MessageDraft
from eventhub.schemas.user import UserDraft
from eventhub.services import (
    assistance_service,
    friendship_service,
    message_service,
    user_service,
)

NEW_USER = {
    "name": "Dana",
    "last_name": "Kim",
    "email": "dana@example.com",
    "password": "supersecret",
    "image_url": "https://img.example.com/dana.png",
}


@pytest.mark.asyncio
async def test_register_user(client):
    response = await client.post("/users", json=NEW_USER)
    assert response.status_code == 201
    data = response.json()
    assert data["email"] == "dana@example.com"
    assert "password" not in data
    assert "password_hash" not in data


@pytest.mark.asyncio
async def test_register_duplicate_email(client, test_user):
    response = await client.post("/users", json={**NEW_USER, "email": test_user.email})
    assert response.status_code == 409
    assert response.json()["error"] == "Already exists a user with the same email address"


@pytest.mark.asyncio
async def test_register_invalid_fields(client):
    response = await client.post(
        "/users", json={**NEW_USER, "email": "nope", "password": "short"}
    )
    assert response.status_code == 400
    body = response.json()
    assert body["http_status_code"] == 400
    assert "stacktrace" not in body
    fields = {item["field"]: item["message"] for item in body["invalid_fields"]}
    assert set(fields) == {"email", "password"}
    assert "8 characters" in fields["password"]


@pytest.mark.asyncio
async def test_register_body_must_be_object(client):
    response = await client.post("/users", json=["not", "an", "object"])
    assert response.status_code == 400
    assert response.json()["error"] == "Data from the request body must be a valid JSON"

    response = await client.post(
        "/users", content="{broken", headers={"Content-Type": "application/json"}
    )
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_exists_by_email_follows_user_lifecycle(db_session: AsyncSession):
    draft = UserDraft(**NEW_USER)
    user = await user_service.create_user(db_session, draft)
    assert await user_service.exists_user_by_email(db_session, "dana@example.com")

    await user_service.delete_user(db_session, user.id)
    assert not await user_service.exists_user_by_email(db_session, "dana@example.com")
    assert not await user_service.exists_user_by_id(db_session, user.id)


@pytest.mark.asyncio
async def test_list_and_get_users(client, test_user, second_user):
    response = await client.get("/users")
    assert response.status_code == 200
    assert {u["email"] for u in response.json()} == {test_user.email, second_user.email}

    response = await client.get(f"/users/{second_user.id}")
    assert response.status_code == 200
    assert response.json()["name"] == "Bob"


@pytest.mark.asyncio
async def test_get_user_not_found(client):
    response = await client.get("/users/9999")
    assert response.status_code == 404
    assert response.json() == {
        "error": "User does not exist or was not found",
        "http_status_code": 404,
    }


@pytest.mark.asyncio
async def test_get_user_invalid_id(client):
    response = await client.get("/users/abc")
    assert response.status_code == 400
    assert response.json()["error"] == "Invalid user ID"

    response = await client.get("/users/99999999999")
    assert response.status_code == 400
    assert response.json()["error"] == "Invalid user ID"


@pytest.mark.asyncio
async def test_search_users(client, test_user, second_user):
    response = await client.get("/users/search", params={"text": "sto"})
    assert response.status_code == 200
    assert [u["id"] for u in response.json()] == [second_user.id]

    response = await client.get("/users/search")
    assert response.status_code == 400
    assert response.json()["invalid_fields"][0]["field"] == "text"


@pytest.mark.asyncio
async def test_search_users_matches_wildcards_literally(client, db_session, test_user):
    await add_user(db_session, "dev_ops@example.com", name="Dana", last_name="Fox")

    response = await client.get("/users/search", params={"text": "_"})
    assert [u["email"] for u in response.json()] == ["dev_ops@example.com"]

    response = await client.get("/users/search", params={"text": "%"})
    assert response.json() == []


@pytest.mark.asyncio
async def test_partial_update_preserves_unspecified_fields(client, test_user):
    response = await client.put("/users", json={"last_name": "Smith"})
    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "Ann"
    assert data["last_name"] == "Smith"
    assert data["email"] == "test@example.com"


@pytest.mark.asyncio
async def test_update_password_rehashes(db_session: AsyncSession, test_user):
    old_hash = test_user.password_hash
    user = await user_service.update_user_information(
        db_session, test_user.id, UserDraft(password="another-password")
    )
    assert user.password_hash != old_hash
    assert user.password_hash != "another-password"

    user = await user_service.update_user_information(
        db_session, test_user.id, UserDraft(name="Annie")
    )
    assert user.name == "Annie"
    assert user.password_hash.startswith("$2")


@pytest.mark.asyncio
async def test_update_email_taken_by_other_user(client, second_user):
    response = await client.put("/users", json={"email": second_user.email})
    assert response.status_code == 409


@pytest.mark.asyncio
async def test_update_invalid_supplied_field(client):
    response = await client.put("/users", json={"name": ""})
    assert response.status_code == 400
    assert response.json()["invalid_fields"] == [
        {"field": "name", "message": "Must be a non-empty string"}
    ]


@pytest.mark.asyncio
async def test_delete_user_cascades(db_session: AsyncSession, test_user, second_user):
    own_event = await add_event(db_session, test_user, timedelta(days=3))
    other_event = await add_event(db_session, second_user, timedelta(days=3))
    await add_assistance(db_session, test_user, other_event)
    await add_assistance(db_session, second_user, own_event)
    await friendship_service.create_friend_request(db_session, test_user.id, second_user.id)
    await message_service.create_message(
        db_session,
        MessageDraft(
            sender_user_id=second_user.id,
            receiver_user_id=test_user.id,
            content="See you there",
            timestamp=utc_now(),
        ),
    )
    await db_session.commit()

    await user_service.delete_user(db_session, test_user.id)
    await db_session.commit()

    assert await event_repository.get_events_by_owner(db_session, test_user.id) == []
    assert await assistance_service.get_assistances_by_user(db_session, test_user.id) == []
    assert await assistance_repository.get_event_assistances(db_session, own_event.id) == []
    assert await friendship_service.get_friends(db_session, test_user.id) == []
    assert await friendship_service.get_friend_requests(db_session, second_user.id) == []
    assert await message_service.get_chat(db_session, test_user.id, second_user.id) == []
    assert await message_service.get_contacts(db_session, second_user.id) == []
    # Unrelated rows survive
    assert await event_repository.get_event_by_id(db_session, other_event.id) is not None


@pytest.mark.asyncio
async def test_delete_user_rolls_back_on_failure(db_session: AsyncSession, test_user, monkeypatch):
    from sqlalchemy.exc import OperationalError

    await add_event(db_session, test_user, timedelta(days=3))
    user_id = test_user.id

    async def broken(db, user_id):
        raise OperationalError("DELETE FROM users", {}, Exception("disk I/O error"))

    monkeypatch.setattr("eventhub.repositories.user_repository.delete_user_by_id", broken)

    with pytest.raises(OperationalError):
        await user_service.delete_user(db_session, user_id)

    # test_user is expired by the rollback
    result = await db_session.execute(select(User).where(User.id == user_id))
    assert result.scalar_one_or_none() is not None
    assert len(await event_repository.get_events_by_owner(db_session, user_id)) == 1


@pytest.mark.asyncio
async def test_delete_me(client, test_user):
    response = await client.delete("/users")
    assert response.status_code == 200
    assert response.json() == {"message": "User has been deleted"}

    response = await client.get(f"/users/{test_user.id}")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_delete_failure_returns_store_error(client, monkeypatch):
    from sqlalchemy.exc import OperationalError

    async def broken(db, user_id):
        raise OperationalError("DELETE FROM messages WHERE ...", {"id": 1}, Exception("locked"))

    monkeypatch.setattr("eventhub.repositories.message_repository.delete_user_messages", broken)

    response = await client.delete("/users")
    assert response.status_code == 500
    body = response.json()
    assert body["error"] == "An error has occurred while deleting a user from the database"
    assert body["stacktrace"]["error_sql"]["message"] == "locked"
    assert "DELETE FROM" not in str(body)


@pytest.mark.asyncio
async def test_user_statistics(client, db_session, test_user, second_user, third_user):
    past = await add_event(db_session, test_user, timedelta(days=-5))
    other_past = await add_event(db_session, third_user, timedelta(days=-5))
    await add_assistance(db_session, second_user, past, rating=8, comment="Great")
    await add_assistance(db_session, third_user, past, rating=5)
    await add_assistance(db_session, second_user, other_past, comment="Fine")
    await add_assistance(db_session, test_user, other_past, comment="Loud")

    response = await client.get(f"/users/{second_user.id}/statistics")
    assert response.status_code == 200
    assert response.json() == {
        "average_score": 0.0,
        "number_of_comments": 2,
        "percentage_commenters_below": 50.0,
    }

    response = await client.get(f"/users/{test_user.id}/statistics")
    assert response.json()["average_score"] == 6.5
    assert response.json()["number_of_comments"] == 1


@pytest.mark.asyncio
async def test_user_events_by_period(client, db_session, test_user):
    await add_event(db_session, test_user, timedelta(days=3), title="Upcoming")
    await add_event(db_session, test_user, timedelta(days=-3), title="Over")
    await add_event(db_session, test_user, timedelta(hours=-1), title="Now")

    response = await client.get(f"/users/{test_user.id}/events")
    assert len(response.json()) == 3

    for period, title in (("future", "Upcoming"), ("finished", "Over"), ("current", "Now")):
        response = await client.get(f"/users/{test_user.id}/events/{period}")
        assert response.status_code == 200
        assert [e["title"] for e in response.json()] == [title]


@pytest.mark.asyncio
async def test_user_assistances_include_feedback(client, db_session, test_user, second_user):
    past = await add_event(db_session, second_user, timedelta(days=-3))
    await add_assistance(db_session, test_user, past, rating=9, comment="Loved it")

    response = await client.get(f"/users/{test_user.id}/assistances/finished")
    assert response.status_code == 200
    [event] = response.json()
    assert event["id"] == past.id
    assert event["rating"] == 9
    assert event["comment"] == "Loved it"

    response = await client.get(f"/users/{test_user.id}/assistances/future")
    assert response.json() == []
