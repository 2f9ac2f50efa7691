"""Integration tests for notes endpoints."""

from collections.abc import Callable
from datetime import datetime

import pytest
from httpx import AsyncClient


pytestmark = pytest.mark.integration

Headers = Callable[[str], dict[str, str]]


async def create_note(
    client: AsyncClient, headers: dict[str, str], title: str = "Title", content: str = "Body"
):
    return await client.post("/notes", json={"title": title, "content": content}, headers=headers)


class TestNotesCrud:
    async def test_requires_token(self, client: AsyncClient):
        response = await client.get("/notes")

        assert response.status_code == 401
        assert response.json()["code"] == "missing_token"

    async def test_create_and_get_round_trip(self, client: AsyncClient, auth_headers: Headers):
        headers = auth_headers("user@acme.test")

        created = await create_note(client, headers, "  Groceries ", " milk ")

        assert created.status_code == 201
        note = created.json()
        assert note["title"] == "Groceries"
        assert note["content"] == "milk"
        assert note["createdAt"] == note["updatedAt"]
        assert set(note) == {
            "id",
            "title",
            "content",
            "tenantId",
            "userId",
            "createdAt",
            "updatedAt",
        }

        fetched = await client.get(f"/notes/{note['id']}", headers=headers)

        assert fetched.status_code == 200
        assert fetched.json() == note

    async def test_list_returns_tenant_notes_in_order(
        self, client: AsyncClient, auth_headers: Headers
    ):
        headers = auth_headers("admin@acme.test")
        first = (await create_note(client, headers, "first")).json()
        second = (await create_note(client, headers, "second")).json()

        response = await client.get("/notes", headers=headers)

        assert response.status_code == 200
        assert [n["id"] for n in response.json()] == [first["id"], second["id"]]

    async def test_list_empty(self, client: AsyncClient, auth_headers: Headers):
        response = await client.get("/notes", headers=auth_headers("user@globex.test"))

        assert response.status_code == 200
        assert response.json() == []

    async def test_update_changes_only_content_and_timestamp(
        self, client: AsyncClient, auth_headers: Headers
    ):
        author = auth_headers("user@acme.test")
        note = (await create_note(client, author, "old", "old")).json()

        # Any member of the tenant may edit
        response = await client.put(
            f"/notes/{note['id']}",
            json={"title": "new", "content": "new body"},
            headers=auth_headers("user2@acme.test"),
        )

        assert response.status_code == 200
        updated = response.json()
        assert updated["title"] == "new"
        assert updated["content"] == "new body"
        assert updated["id"] == note["id"]
        assert updated["userId"] == note["userId"]
        assert updated["tenantId"] == note["tenantId"]
        assert updated["createdAt"] == note["createdAt"]
        assert datetime.fromisoformat(updated["updatedAt"]) > datetime.fromisoformat(
            note["updatedAt"]
        )

    async def test_update_missing_note(self, client: AsyncClient, auth_headers: Headers):
        response = await client.put(
            "/notes/does-not-exist",
            json={"title": "t", "content": "c"},
            headers=auth_headers("user@acme.test"),
        )

        assert response.status_code == 404

    async def test_delete_then_delete_again(self, client: AsyncClient, auth_headers: Headers):
        headers = auth_headers("user@acme.test")
        note = (await create_note(client, headers)).json()

        first = await client.delete(f"/notes/{note['id']}", headers=headers)
        second = await client.delete(f"/notes/{note['id']}", headers=headers)

        assert first.status_code == 204
        assert first.content == b""
        assert second.status_code == 404
        assert (await client.get(f"/notes/{note['id']}", headers=headers)).status_code == 404


class TestNoteValidation:
    @pytest.mark.parametrize(
        ("body", "detail"),
        [
            ({"title": "", "content": "body"}, "Title cannot be empty"),
            ({"title": "   ", "content": "body"}, "Title cannot be empty"),
            ({"title": "title", "content": ""}, "Content cannot be empty"),
            ({"content": "body"}, "Title and content required"),
            ({}, "Title and content required"),
        ],
    )
    async def test_invalid_create(
        self, client: AsyncClient, auth_headers: Headers, body: dict, detail: str
    ):
        headers = auth_headers("user@acme.test")

        response = await client.post("/notes", json=body, headers=headers)

        assert response.status_code == 400
        assert response.json()["code"] == "validation_error"
        assert response.json()["detail"] == detail
        assert (await client.get("/notes", headers=headers)).json() == []

    async def test_invalid_update_keeps_note(self, client: AsyncClient, auth_headers: Headers):
        headers = auth_headers("user@acme.test")
        note = (await create_note(client, headers, "keep", "me")).json()

        response = await client.put(
            f"/notes/{note['id']}", json={"title": "ok", "content": "  "}, headers=headers
        )

        assert response.status_code == 400
        assert (await client.get(f"/notes/{note['id']}", headers=headers)).json() == note

    async def test_padding_is_trimmed_before_storing(
        self, client: AsyncClient, auth_headers: Headers
    ):
        response = await create_note(
            client, auth_headers("user@acme.test"), "T" + " " * 300, "\n" + "body" + " " * 300
        )

        assert response.status_code == 201
        assert response.json()["title"] == "T"
        assert response.json()["content"] == "body"

    async def test_long_title_is_accepted(self, client: AsyncClient, auth_headers: Headers):
        response = await create_note(client, auth_headers("user@acme.test"), "x" * 300)

        assert response.status_code == 201
        assert response.json()["title"] == "x" * 300


class TestQuota:
    async def test_free_plan_fourth_note_refused(
        self, client: AsyncClient, auth_headers: Headers
    ):
        headers = auth_headers("user@acme.test")
        for i in range(3):
            assert (await create_note(client, headers, f"note {i}")).status_code == 201

        response = await create_note(client, headers, "note 4")

        assert response.status_code == 403
        data = response.json()
        assert data["code"] == "SUBSCRIPTION_LIMIT_REACHED"
        assert data["detail"] == "Free plan limit reached. Upgrade to Pro for unlimited notes."
        assert data["noteLimit"] == 3
        assert len((await client.get("/notes", headers=headers)).json()) == 3

    async def test_quota_is_shared_by_the_tenant(
        self, client: AsyncClient, auth_headers: Headers
    ):
        for email in ("admin@acme.test", "user@acme.test", "user2@acme.test"):
            assert (await create_note(client, auth_headers(email))).status_code == 201

        response = await create_note(client, auth_headers("admin@acme.test"))

        assert response.status_code == 403
        # Another tenant is unaffected
        assert (await create_note(client, auth_headers("user@globex.test"))).status_code == 201

    async def test_upgrade_lifts_limit_immediately(
        self, client: AsyncClient, auth_headers: Headers
    ):
        member = auth_headers("user@acme.test")
        for i in range(3):
            await create_note(client, member, f"note {i}")
        assert (await create_note(client, member)).status_code == 403

        upgrade = await client.post(
            "/tenants/acme/upgrade", headers=auth_headers("admin@acme.test")
        )
        assert upgrade.status_code == 200

        for i in range(5):
            assert (await create_note(client, member, f"pro {i}")).status_code == 201
