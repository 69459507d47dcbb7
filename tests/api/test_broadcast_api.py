"""Tests for the broadcast endpoints."""

from httpx import AsyncClient


class TestBroadcast:
    async def test_show_dismiss_and_remove(self, client: AsyncClient) -> None:
        created = await client.post("/broadcast", json={"text": "Maintenance tonight"})
        assert created.status_code == 201
        message_id = created.json()["id"]

        active = await client.get("/broadcast")
        assert [m["text"] for m in active.json()] == ["Maintenance tonight"]

        dismissed = await client.post("/broadcast/dismiss")
        assert dismissed.json() == {"dismissed": 1}
        assert (await client.get("/broadcast")).json() == []

        other = await client.get("/broadcast", headers={"X-User-Id": "user-2"})
        assert len(other.json()) == 1

        assert (await client.delete(f"/broadcast/{message_id}")).status_code == 200
        assert (await client.delete(f"/broadcast/{message_id}")).status_code == 404

    async def test_list_all_and_remove_all(self, client: AsyncClient) -> None:
        await client.post("/broadcast", json={"text": "one"})
        await client.post("/broadcast", json={"text": "draft", "active": False})

        assert len((await client.get("/broadcast/all")).json()) == 2
        assert (await client.delete("/broadcast")).json() == {"removed": 2}
