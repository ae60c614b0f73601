"""
Tests for registration endpoints including capacity and concurrency scenarios.
"""

import asyncio

import pytest
from httpx import AsyncClient

from eventhub.core.errors import ErrorKind
from eventhub.core.result import Failure, Success
from eventhub.services.registration_service import register_for_event

def register(client: AsyncClient, event_id: int, user_id):
    return client.post(f"/api/events/{event_id}/register", json={"userId": user_id})


def cancel(client: AsyncClient, event_id: int, user_id):
    return client.request("DELETE", f"/api/events/{event_id}/register", json={"userId": user_id})


@pytest.mark.asyncio
async def test_register(client: AsyncClient, test_event, test_user, count_registrations):
    response = await register(client, test_event.id, test_user.id)
    assert response.status_code == 201
    assert response.json() == {
        "status": "success",
        "message": "User registered for the event successfully.",
    }
    assert await count_registrations(test_event.id) == 1

    detail = (await client.get(f"/api/events/{test_event.id}")).json()["data"]
    assert detail["registeredUsers"] == [
        {"id": test_user.id, "name": "Ada Lovelace", "email": "ada@example.com"}
    ]


@pytest.mark.asyncio
async def test_duplicate_registration(client: AsyncClient, test_event, test_user, count_registrations):
    """Second registration of the same pair hits the key and returns 409."""
    first = await register(client, test_event.id, test_user.id)
    assert first.status_code == 201

    second = await register(client, test_event.id, test_user.id)
    assert second.status_code == 409
    body = second.json()
    assert body["status"] == "fail"
    assert "userId, eventId" in body["message"]
    assert await count_registrations(test_event.id) == 1


@pytest.mark.asyncio
async def test_register_full_event(
    client: AsyncClient, make_event, other_users, test_user, register_directly, count_registrations
):
    """At count == capacity the registration is refused and nothing is inserted."""
    event = await make_event(capacity=2)
    await register_directly(event, other_users[:2])

    response = await register(client, event.id, test_user.id)
    assert response.status_code == 400
    assert response.json() == {"status": "fail", "message": "Event is at full capacity."}
    assert await count_registrations(event.id) == 2


@pytest.mark.asyncio
async def test_register_last_place(client: AsyncClient, make_event, other_users, register_directly):
    event = await make_event(capacity=2)
    await register_directly(event, other_users[:1])

    assert (await register(client, event.id, other_users[1].id)).status_code == 201
    assert (await register(client, event.id, other_users[2].id)).status_code == 400


@pytest.mark.asyncio
async def test_register_past_event(client: AsyncClient, past_event, test_user, count_registrations):
    response = await register(client, past_event.id, test_user.id)
    assert response.status_code == 400
    assert response.json() == {"status": "fail", "message": "Cannot register for a past event."}
    assert await count_registrations(past_event.id) == 0


@pytest.mark.asyncio
async def test_register_nonexistent_event(client: AsyncClient, test_user):
    response = await register(client, 99999, test_user.id)
    assert response.status_code == 404
    assert response.json()["message"] == "No event found with that ID."


@pytest.mark.asyncio
async def test_register_unknown_user(client: AsyncClient, test_event, count_registrations):
    """The user foreign key rejects ids that do not exist."""
    response = await register(client, test_event.id, 424242)
    assert response.status_code == 404
    assert response.json()["message"] == "No user found with that ID."
    assert await count_registrations(test_event.id) == 0


@pytest.mark.asyncio
@pytest.mark.parametrize("body", [{}, {"userId": None}, {"userId": 0}])
async def test_register_requires_user_id(client: AsyncClient, test_event, body):
    response = await client.post(f"/api/events/{test_event.id}/register", json=body)
    assert response.status_code == 400
    assert response.json() == {"status": "fail", "message": "User ID is required for registration."}


@pytest.mark.asyncio
async def test_register_rejects_non_integer_user_id(client: AsyncClient, test_event):
    response = await register(client, test_event.id, "abc")
    assert response.status_code == 400
    assert response.json()["message"] == "User ID must be a positive integer."


@pytest.mark.asyncio
async def test_register_rejects_user_id_outside_column_range(client: AsyncClient, test_event, count_registrations):
    response = await register(client, test_event.id, 2**70)
    assert response.status_code == 400
    assert response.json() == {"status": "fail", "message": "User ID is out of range."}
    assert await count_registrations(test_event.id) == 0


@pytest.mark.asyncio
async def test_register_rejects_event_id_outside_column_range(client: AsyncClient, test_user):
    response = await register(client, 2**70, test_user.id)
    assert response.status_code == 400
    assert response.json()["status"] == "fail"


@pytest.mark.asyncio
async def test_cancel_registration(
    client: AsyncClient, test_event, test_user, other_users, register_directly, count_registrations
):
    """Cancelling removes exactly the caller's row."""
    await register_directly(test_event, [test_user, *other_users[:2]])

    response = await cancel(client, test_event.id, test_user.id)
    assert response.status_code == 204
    assert response.content == b""
    assert await count_registrations(test_event.id) == 2

    remaining = (await client.get(f"/api/events/{test_event.id}")).json()["data"]["registeredUsers"]
    assert test_user.id not in {u["id"] for u in remaining}


@pytest.mark.asyncio
async def test_cancel_missing_registration(client: AsyncClient, test_event, test_user):
    response = await cancel(client, test_event.id, test_user.id)
    assert response.status_code == 404
    assert response.json() == {
        "status": "fail",
        "message": "Record not found. The user might not have been registered for this event.",
    }


@pytest.mark.asyncio
async def test_cancel_twice(client: AsyncClient, test_event, test_user):
    assert (await register(client, test_event.id, test_user.id)).status_code == 201
    assert (await cancel(client, test_event.id, test_user.id)).status_code == 204
    assert (await cancel(client, test_event.id, test_user.id)).status_code == 404


@pytest.mark.asyncio
async def test_cancel_past_event_allowed(client: AsyncClient, past_event, test_user, register_directly):
    """No time rule applies to cancellation."""
    await register_directly(past_event, [test_user])
    assert (await cancel(client, past_event.id, test_user.id)).status_code == 204


@pytest.mark.asyncio
async def test_cancel_requires_user_id(client: AsyncClient, test_event):
    response = await client.request("DELETE", f"/api/events/{test_event.id}/register", json={})
    assert response.status_code == 400
    assert response.json()["message"] == "User ID is required to cancel a registration."


@pytest.mark.asyncio
async def test_register_then_stats(client: AsyncClient, make_event, other_users):
    event = await make_event(capacity=4)
    for user in other_users[:3]:
        assert (await register(client, event.id, user.id)).status_code == 201

    stats = (await client.get(f"/api/events/{event.id}/stats")).json()["data"]
    assert stats == {"totalRegistrations": 3, "remainingCapacity": 1, "percentageCapacityUsed": 75.0}


@pytest.mark.asyncio
async def test_service_returns_tagged_failures(database, past_event, test_event, test_user):
    """The service reports outcomes as Result values, not exceptions."""
    async with database.sessionmaker() as session:
        result = await register_for_event(session, past_event.id, test_user.id)
    assert isinstance(result, Failure)
    assert result.error.kind is ErrorKind.INVALID_STATE

    async with database.sessionmaker() as session:
        result = await register_for_event(session, test_event.id, test_user.id)
    assert isinstance(result, Success)
    assert result.value.user_id == test_user.id

    async with database.sessionmaker() as session:
        result = await register_for_event(session, test_event.id, test_user.id)
    assert isinstance(result, Failure)
    assert result.error.kind is ErrorKind.CONFLICT


@pytest.mark.asyncio
async def test_concurrent_duplicate_registrations(database, test_event, test_user, count_registrations):
    """Simultaneous registrations of one pair: one row, the rest Conflict."""

    async def attempt():
        async with database.sessionmaker() as session:
            return await register_for_event(session, test_event.id, test_user.id)

    results = await asyncio.gather(*(attempt() for _ in range(10)))

    successes = [r for r in results if isinstance(r, Success)]
    conflicts = [r for r in results if isinstance(r, Failure) and r.error.kind is ErrorKind.CONFLICT]
    assert len(successes) == 1
    assert len(conflicts) == 9
    assert await count_registrations(test_event.id) == 1


@pytest.mark.asyncio
async def test_concurrent_registrations_respect_capacity(database, make_event, other_users, count_registrations):
    """Five users racing for two places: exactly two succeed."""
    event = await make_event(capacity=2)

    async def attempt(user_id: int):
        async with database.sessionmaker() as session:
            return await register_for_event(session, event.id, user_id)

    results = await asyncio.gather(*(attempt(u.id) for u in other_users))

    assert sum(isinstance(r, Success) for r in results) == 2
    assert all(
        r.error.kind is ErrorKind.CAPACITY_EXCEEDED for r in results if isinstance(r, Failure)
    )
    assert await count_registrations(event.id) == 2
