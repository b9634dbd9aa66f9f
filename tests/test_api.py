"""
API endpoint tests.
"""

import uuid

import pytest
from httpx import AsyncClient


async def create_profile(client: AsyncClient, username: str, user_type: str) -> dict:
    response = await client.post("/api/profiles", json={
        "username": username,
        "fullName": username.title(),
        "userType": user_type,
    })
    assert response.status_code == 201
    return response.json()


@pytest.fixture
async def people(async_client):
    mentor = await create_profile(async_client, "mentor", "mentor")
    patient = await create_profile(async_client, "patient", "patient")
    return mentor, patient


@pytest.fixture
async def room(async_client, people):
    mentor, patient = people
    response = await async_client.post("/api/chat-rooms", json={
        "mentorId": mentor["id"],
        "patientId": patient["id"],
    })
    assert response.status_code == 201
    return response.json()


class TestHealthEndpoints:

    async def test_root_endpoint(self, async_client: AsyncClient):
        response = await async_client.get("/")
        assert response.status_code == 200
        assert response.json()["status"] == "active"

    async def test_health(self, async_client: AsyncClient):
        response = await async_client.get("/health/")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    async def test_db_health(self, async_client: AsyncClient):
        response = await async_client.get("/health/db-health")
        assert response.status_code == 200
        data = response.json()
        assert data["database"] == "healthy"
        assert data["realtime"] == "in-process"


class TestProfileEndpoints:

    async def test_create_and_get(self, async_client: AsyncClient):
        created = await create_profile(async_client, "quiet_fox", "patient")
        assert created["userType"] == "patient"
        assert created["fullName"] == "Quiet_Fox"

        response = await async_client.get(f"/api/profiles/{created['id']}")
        assert response.status_code == 200
        assert response.json()["username"] == "quiet_fox"

    async def test_duplicate_username(self, async_client: AsyncClient):
        await create_profile(async_client, "taken", "patient")
        response = await async_client.post("/api/profiles", json={"username": "taken", "userType": "mentor"})
        assert response.status_code == 409
        assert response.json()["type"] == "ConflictError"

    async def test_invalid_user_type(self, async_client: AsyncClient):
        response = await async_client.post("/api/profiles", json={"username": "x", "userType": "admin"})
        assert response.status_code == 400

    async def test_partial_update(self, async_client: AsyncClient):
        created = await create_profile(async_client, "changer", "patient")
        response = await async_client.put(f"/api/profiles/{created['id']}", json={"fullName": "New Name"})
        assert response.status_code == 200
        data = response.json()
        assert data["fullName"] == "New Name"
        assert data["username"] == "changer"

    async def test_null_user_type_is_rejected(self, async_client: AsyncClient):
        created = await create_profile(async_client, "keeps_role", "patient")

        response = await async_client.put(f"/api/profiles/{created['id']}", json={"userType": None})

        assert response.status_code == 400
        assert response.json()["type"] == "ValidationError"
        assert (await async_client.get(f"/api/profiles/{created['id']}")).json()["userType"] == "patient"

    async def test_rename_to_taken_username(self, async_client: AsyncClient):
        await create_profile(async_client, "first", "patient")
        second = await create_profile(async_client, "second", "patient")

        response = await async_client.put(f"/api/profiles/{second['id']}", json={"username": "first"})

        assert response.status_code == 409
        assert response.json()["error"] == "Username 'first' is already taken"

    async def test_keeping_own_username(self, async_client: AsyncClient):
        created = await create_profile(async_client, "same_name", "patient")
        response = await async_client.put(f"/api/profiles/{created['id']}", json={"username": "same_name"})
        assert response.status_code == 200

    async def test_missing_profile(self, async_client: AsyncClient):
        response = await async_client.get(f"/api/profiles/{uuid.uuid4()}")
        assert response.status_code == 404
        assert response.json()["type"] == "ProfileNotFoundError"


class TestMentorEndpoints:

    async def register(self, client, username, specialization, available=True):
        profile = await create_profile(client, username, "mentor")
        response = await client.post("/api/mentors", json={
            "profileId": profile["id"],
            "specialization": specialization,
            "experienceYears": 4,
            "isAvailable": available,
        })
        assert response.status_code == 201
        return response.json()

    async def test_filter_by_specialization(self, async_client: AsyncClient):
        gambling = await self.register(async_client, "m1", "Gambling, Gaming")
        await self.register(async_client, "m2", "Substance Abuse")
        await self.register(async_client, "m3", "Gambling", available=False)

        response = await async_client.get("/api/mentors", params={"specialization": "gambling"})

        assert response.status_code == 200
        data = response.json()
        assert [m["id"] for m in data] == [gambling["id"]]
        assert data[0]["profile"]["username"] == "m1"

    async def test_list_all_available(self, async_client: AsyncClient):
        await self.register(async_client, "m1", "Gaming")
        await self.register(async_client, "m2", "Shopping", available=False)

        response = await async_client.get("/api/mentors")

        assert [m["specialization"] for m in response.json()] == ["Gaming"]

    async def test_wildcards_are_literal(self, async_client: AsyncClient):
        await self.register(async_client, "m1", "Gaming")
        response = await async_client.get("/api/mentors", params={"specialization": "%"})
        assert response.json() == []

    async def test_get_and_update(self, async_client: AsyncClient):
        mentor = await self.register(async_client, "m1", "Gaming")

        response = await async_client.put(f"/api/mentors/{mentor['profileId']}", json={"isAvailable": False})
        assert response.status_code == 200
        assert response.json()["isAvailable"] is False

        response = await async_client.get(f"/api/mentors/{mentor['profileId']}")
        assert response.status_code == 200
        assert response.json()["specialization"] == "Gaming"

    @pytest.mark.parametrize("field", ["specialization", "isAvailable"])
    async def test_update_cannot_null_required_fields(self, async_client: AsyncClient, field):
        mentor = await self.register(async_client, "m1", "Gaming")

        response = await async_client.put(f"/api/mentors/{mentor['profileId']}", json={field: None})

        assert response.status_code == 400
        assert response.json()["type"] == "ValidationError"
        stored = (await async_client.get(f"/api/mentors/{mentor['profileId']}")).json()
        assert stored["specialization"] == "Gaming"
        assert stored["isAvailable"] is True

    async def test_update_can_clear_bio(self, async_client: AsyncClient):
        mentor = await self.register(async_client, "m1", "Gaming")
        response = await async_client.put(f"/api/mentors/{mentor['profileId']}", json={"bio": None})
        assert response.status_code == 200
        assert response.json()["bio"] is None

    async def test_unknown_profile(self, async_client: AsyncClient):
        response = await async_client.post("/api/mentors", json={
            "profileId": str(uuid.uuid4()),
            "specialization": "Gaming",
        })
        assert response.status_code == 404

    async def test_registering_twice(self, async_client: AsyncClient):
        mentor = await self.register(async_client, "m1", "Gaming")
        response = await async_client.post("/api/mentors", json={
            "profileId": mentor["profileId"],
            "specialization": "Shopping",
        })
        assert response.status_code == 409


class TestAuthEndpoints:

    async def test_signup_then_signin(self, async_client: AsyncClient):
        response = await async_client.post("/api/auth/signup", json={
            "email": "anon@example.com",
            "password": "ignored",
            "userType": "patient",
        })
        assert response.status_code == 201
        user = response.json()["user"]
        assert user["username"] == "anon@example.com"

        response = await async_client.post("/api/auth/signin", json={"email": "anon@example.com"})
        assert response.status_code == 200
        assert response.json()["user"]["id"] == user["id"]

    async def test_signup_existing_user(self, async_client: AsyncClient):
        payload = {"email": "dup@example.com", "userType": "mentor"}
        assert (await async_client.post("/api/auth/signup", json=payload)).status_code == 201
        response = await async_client.post("/api/auth/signup", json=payload)
        assert response.status_code == 400

    async def test_signin_unknown_user(self, async_client: AsyncClient):
        response = await async_client.post("/api/auth/signin", json={"email": "ghost@example.com"})
        assert response.status_code == 401

    async def test_me_without_session(self, async_client: AsyncClient):
        response = await async_client.get("/api/auth/me")
        assert response.status_code == 401
        assert response.json() == {"error": "Not authenticated", "type": "AuthenticationError"}


class TestChatRoomEndpoints:

    async def test_create_then_find(self, async_client: AsyncClient, people, room):
        mentor, patient = people
        response = await async_client.post("/api/chat-rooms", json={
            "mentorId": mentor["id"],
            "patientId": patient["id"],
        })
        assert response.status_code == 200
        assert response.json()["id"] == room["id"]

    async def test_accepts_snake_case(self, async_client: AsyncClient, people, room):
        mentor, patient = people
        response = await async_client.post("/api/chat-rooms", json={
            "mentor_id": mentor["id"],
            "patient_id": patient["id"],
        })
        assert response.json()["id"] == room["id"]

    async def test_invalid_pair(self, async_client: AsyncClient, people):
        mentor, _ = people
        response = await async_client.post("/api/chat-rooms", json={
            "mentorId": mentor["id"],
            "patientId": mentor["id"],
        })
        assert response.status_code == 400
        assert response.json()["type"] == "InvalidPairError"

    async def test_missing_field(self, async_client: AsyncClient, people):
        mentor, _ = people
        response = await async_client.post("/api/chat-rooms", json={"mentorId": mentor["id"]})
        assert response.status_code == 400

    async def test_unknown_participant(self, async_client: AsyncClient, people):
        mentor, _ = people
        response = await async_client.post("/api/chat-rooms", json={
            "mentorId": mentor["id"],
            "patientId": str(uuid.uuid4()),
        })
        assert response.status_code == 404

    async def test_get_room_with_profiles(self, async_client: AsyncClient, people, room):
        mentor, patient = people
        response = await async_client.get(f"/api/chat-rooms/{room['id']}")
        assert response.status_code == 200
        data = response.json()
        assert data["mentorProfile"]["id"] == mentor["id"]
        assert data["patientProfile"]["username"] == patient["username"]

    async def test_get_missing_room(self, async_client: AsyncClient):
        response = await async_client.get(f"/api/chat-rooms/{uuid.uuid4()}")
        assert response.status_code == 404

    async def test_list_requires_filter(self, async_client: AsyncClient):
        response = await async_client.get("/api/chat-rooms")
        assert response.status_code == 400
        assert response.json()["error"] == "mentorId or patientId required"

    async def test_dashboard_listing(self, async_client: AsyncClient, people, room):
        mentor, patient = people
        for content in ("hello", "are you there?"):
            await async_client.post("/api/messages", json={
                "chatRoomId": room["id"], "senderId": patient["id"], "content": content,
            })

        response = await async_client.get("/api/chat-rooms", params={"mentorId": mentor["id"]})

        assert response.status_code == 200
        (listed,) = response.json()
        assert listed["id"] == room["id"]
        assert listed["latestMessage"]["content"] == "are you there?"
        assert listed["unreadCount"] == 2
        assert listed["patientProfile"]["id"] == patient["id"]

        response = await async_client.get("/api/chat-rooms", params={"patientId": patient["id"]})
        (listed,) = response.json()
        assert listed["unreadCount"] == 0

    async def test_unread_count_endpoint(self, async_client: AsyncClient, people, room):
        mentor, patient = people
        await async_client.post("/api/messages", json={
            "chatRoomId": room["id"], "senderId": patient["id"], "content": "hello",
        })

        response = await async_client.get(
            f"/api/chat-rooms/{room['id']}/unread-count", params={"viewerId": mentor["id"]}
        )

        assert response.status_code == 200
        assert response.json() == {"chatRoomId": room["id"], "viewerId": mentor["id"], "unreadCount": 1}


class TestMessageEndpoints:

    async def test_send_and_list(self, async_client: AsyncClient, people, room, delivery):
        mentor, patient = people
        first = await async_client.post("/api/messages", json={
            "chatRoomId": room["id"], "senderId": patient["id"], "content": "hello",
        })
        second = await async_client.post("/api/messages", json={
            "chatRoomId": room["id"], "senderId": mentor["id"], "content": "hi there",
        })
        assert first.status_code == 201
        assert second.status_code == 201
        assert first.json()["senderId"] == patient["id"]

        response = await async_client.get("/api/messages", params={"chatRoomId": room["id"]})

        assert response.status_code == 200
        assert [m["content"] for m in response.json()] == ["hello", "hi there"]
        assert [payload["message"]["content"] for _, payload in delivery.events] == ["hello", "hi there"]

    async def test_since_parameter(self, async_client: AsyncClient, people, room):
        mentor, patient = people
        first = (await async_client.post("/api/messages", json={
            "chatRoomId": room["id"], "senderId": patient["id"], "content": "hello",
        })).json()
        await async_client.post("/api/messages", json={
            "chatRoomId": room["id"], "senderId": mentor["id"], "content": "hi there",
        })

        response = await async_client.get("/api/messages", params={
            "chatRoomId": room["id"], "since": first["createdAt"],
        })

        assert [m["content"] for m in response.json()] == ["hi there"]

    async def test_list_requires_room(self, async_client: AsyncClient):
        response = await async_client.get("/api/messages")
        assert response.status_code == 400

    async def test_list_unknown_room(self, async_client: AsyncClient):
        response = await async_client.get("/api/messages", params={"chatRoomId": str(uuid.uuid4())})
        assert response.status_code == 404

    async def test_blank_content(self, async_client: AsyncClient, people, room, delivery):
        _, patient = people
        response = await async_client.post("/api/messages", json={
            "chatRoomId": room["id"], "senderId": patient["id"], "content": "   ",
        })
        assert response.status_code == 400
        assert response.json()["type"] == "EmptyContentError"
        assert delivery.events == []

    async def test_sender_outside_room(self, async_client: AsyncClient, room):
        outsider = await create_profile(async_client, "outsider", "patient")
        response = await async_client.post("/api/messages", json={
            "chatRoomId": room["id"], "senderId": outsider["id"], "content": "hello",
        })
        assert response.status_code == 400
        assert response.json()["type"] == "NotAParticipantError"

    async def test_unknown_room(self, async_client: AsyncClient, people):
        _, patient = people
        response = await async_client.post("/api/messages", json={
            "chatRoomId": str(uuid.uuid4()), "senderId": patient["id"], "content": "hello",
        })
        assert response.status_code == 404
        assert response.json()["type"] == "RoomNotFoundError"

    async def test_missing_content(self, async_client: AsyncClient, room, people):
        _, patient = people
        response = await async_client.post("/api/messages", json={
            "chatRoomId": room["id"], "senderId": patient["id"],
        })
        assert response.status_code == 400
