"""Tests for the task CRUD, query and statistics endpoints."""

import pytest
from httpx import AsyncClient

BASE = "/api/v1/tasks"


async def _create(client: AsyncClient, **overrides) -> dict:
    payload = {"title": "Write report", "description": "Quarterly numbers"}
    payload.update(overrides)
    response = await client.post(BASE, json=payload)
    assert response.status_code == 201, response.text
    return response.json()


class TestCreate:
    async def test_create_returns_201_with_defaults(self, client: AsyncClient) -> None:
        task = await _create(client)
        assert task["id"]
        assert task["status"] == "TODO"
        assert task["priority"] == "MEDIUM"
        assert task["tags"] == []
        assert task["category"] is None
        assert task["due_date"] is None
        assert task["created_at"] == task["updated_at"]

    async def test_create_with_all_fields(self, client: AsyncClient) -> None:
        task = await _create(
            client,
            status="IN_PROGRESS",
            priority="URGENT",
            category="work",
            tags=["q1", "finance"],
            due_date="2025-03-01T12:00:00Z",
        )
        assert task["status"] == "IN_PROGRESS"
        assert task["priority"] == "URGENT"
        assert task["category"] == "work"
        assert task["tags"] == ["q1", "finance"]
        assert task["due_date"].startswith("2025-03-01T12:00:00")

    @pytest.mark.parametrize(
        "payload",
        [
            {"description": "no title"},
            {"title": "", "description": "empty title"},
            {"title": "x" * 201, "description": "too long"},
            {"title": "t", "description": "d", "status": "FINISHED"},
            {"title": "t", "description": "d", "priority": "low"},
            {"title": "t", "description": "d", "category": "c" * 51},
            {"title": "t", "description": "d", "category": ""},
        ],
    )
    async def test_invalid_body_returns_422(self, client: AsyncClient, payload) -> None:
        response = await client.post(BASE, json=payload)
        assert response.status_code == 422
        assert response.json()["error"] == "VALIDATION_ERROR"

    async def test_create_records_history(self, client: AsyncClient) -> None:
        task = await _create(client, title="Plan trip")
        history = (await client.get(f"{BASE}/{task['id']}/history")).json()
        assert [e["action"] for e in history] == ["CREATED"]
        assert "Plan trip" in history[0]["description"]


class TestRead:
    async def test_get_by_id(self, client: AsyncClient) -> None:
        task = await _create(client)
        response = await client.get(f"{BASE}/{task['id']}")
        assert response.status_code == 200
        assert response.json() == task

    async def test_get_unknown_returns_404(self, client: AsyncClient) -> None:
        response = await client.get(f"{BASE}/999")
        assert response.status_code == 404
        body = response.json()
        assert body["error"] == "RESOURCE_NOT_FOUND"
        assert body["details"] == {"resource_type": "task", "resource_id": "999"}

    async def test_list_empty(self, client: AsyncClient) -> None:
        response = await client.get(BASE)
        assert response.status_code == 200
        assert response.json() == []

    async def test_list_in_creation_order(self, client: AsyncClient) -> None:
        first = await _create(client, title="first")
        second = await _create(client, title="second")
        ids = [t["id"] for t in (await client.get(BASE)).json()]
        assert ids == [first["id"], second["id"]]


class TestFilters:
    @pytest.fixture
    async def seeded(self, client: AsyncClient) -> dict[str, dict]:
        return {
            "alpha": await _create(
                client, title="Alpha", status="TODO", priority="LOW",
                category="work", tags=["Urgent", "q1"],
            ),
            "beta": await _create(
                client, title="Beta", status="DONE", priority="HIGH",
                category="home", tags=["q1"],
            ),
            "gamma": await _create(client, title="Gamma", status="TODO", priority="HIGH"),
        }

    async def _titles(self, client: AsyncClient, **params) -> list[str]:
        response = await client.get(BASE, params=params)
        assert response.status_code == 200
        return [t["title"] for t in response.json()]

    async def test_by_status(self, client: AsyncClient, seeded) -> None:
        assert await self._titles(client, status="TODO") == ["Alpha", "Gamma"]

    async def test_by_priority(self, client: AsyncClient, seeded) -> None:
        assert await self._titles(client, priority="HIGH") == ["Beta", "Gamma"]

    async def test_by_category(self, client: AsyncClient, seeded) -> None:
        assert await self._titles(client, category="home") == ["Beta"]

    async def test_by_tag_exact(self, client: AsyncClient, seeded) -> None:
        assert await self._titles(client, tag="q1") == ["Alpha", "Beta"]
        assert await self._titles(client, tag="urgent") == []

    async def test_search_case_insensitive(self, client: AsyncClient, seeded) -> None:
        assert await self._titles(client, search="urgent") == ["Alpha"]
        assert await self._titles(client, search="GAM") == ["Gamma"]

    async def test_search_takes_precedence(self, client: AsyncClient, seeded) -> None:
        assert await self._titles(client, search="beta", status="TODO") == ["Beta"]

    async def test_status_before_priority(self, client: AsyncClient, seeded) -> None:
        assert await self._titles(client, status="DONE", priority="LOW") == ["Beta"]

    async def test_invalid_status_returns_422(self, client: AsyncClient, seeded) -> None:
        response = await client.get(BASE, params={"status": "FINISHED"})
        assert response.status_code == 422

    async def test_categories_and_tags(self, client: AsyncClient, seeded) -> None:
        categories = (await client.get(f"{BASE}/categories")).json()
        tags = (await client.get(f"{BASE}/tags")).json()
        assert sorted(categories) == ["home", "work"]
        assert sorted(tags) == ["Urgent", "q1"]


class TestStatistics:
    async def test_empty(self, client: AsyncClient) -> None:
        body = (await client.get(f"{BASE}/statistics")).json()
        assert body == {
            "total": 0,
            "by_status": {"TODO": 0, "IN_PROGRESS": 0, "DONE": 0, "CANCELLED": 0},
            "by_priority": {"LOW": 0, "MEDIUM": 0, "HIGH": 0, "URGENT": 0},
            "by_category": {},
        }

    async def test_counts(self, client: AsyncClient) -> None:
        await _create(client, status="DONE", category="work")
        await _create(client, priority="HIGH", category="work")
        await _create(client)
        body = (await client.get(f"{BASE}/statistics")).json()
        assert body["total"] == 3
        assert body["by_status"]["DONE"] == 1
        assert body["by_status"]["TODO"] == 2
        assert body["by_priority"]["HIGH"] == 1
        assert body["by_priority"]["MEDIUM"] == 2
        assert body["by_category"] == {"work": 2}


class TestUpdate:
    @pytest.mark.parametrize("method", ["put", "patch"])
    async def test_partial_update(self, client: AsyncClient, method: str) -> None:
        task = await _create(client, category="work")
        response = await client.request(
            method.upper(), f"{BASE}/{task['id']}", json={"status": "DONE"}
        )
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "DONE"
        assert body["title"] == task["title"]
        assert body["category"] == "work"
        assert body["created_at"] == task["created_at"]

    async def test_update_unknown_returns_404(self, client: AsyncClient) -> None:
        response = await client.patch(f"{BASE}/999", json={"title": "x"})
        assert response.status_code == 404

    async def test_null_category_clears_it(self, client: AsyncClient) -> None:
        task = await _create(client, category="work")
        response = await client.patch(f"{BASE}/{task['id']}", json={"category": None})
        assert response.status_code == 200
        assert response.json()["category"] is None
        history = (await client.get(f"{BASE}/{task['id']}/history")).json()
        change = next(e for e in history if e["action"] == "CATEGORY_CHANGED")
        assert change["old_value"] == "work"
        assert change["new_value"] is None

    async def test_empty_category_rejected_and_task_unchanged(self, client: AsyncClient) -> None:
        task = await _create(client, category="work")
        response = await client.patch(f"{BASE}/{task['id']}", json={"category": ""})
        assert response.status_code == 422
        assert (await client.get(f"{BASE}/{task['id']}")).json()["category"] == "work"
        assert (await client.get(f"{BASE}/categories")).json() == ["work"]
        history = (await client.get(f"{BASE}/{task['id']}/history")).json()
        assert [e["action"] for e in history] == ["CREATED"]

    @pytest.mark.parametrize("field", ["title", "description", "status", "priority", "tags"])
    async def test_null_for_required_field_returns_422(
        self, client: AsyncClient, field: str
    ) -> None:
        task = await _create(client)
        response = await client.patch(f"{BASE}/{task['id']}", json={field: None})
        assert response.status_code == 422

    async def test_invalid_enum_returns_422(self, client: AsyncClient) -> None:
        task = await _create(client)
        response = await client.patch(f"{BASE}/{task['id']}", json={"priority": "CRITICAL"})
        assert response.status_code == 422

    async def test_no_op_update_records_nothing(self, client: AsyncClient) -> None:
        task = await _create(client, tags=["a", "b"])
        response = await client.patch(
            f"{BASE}/{task['id']}", json={"title": task["title"], "tags": ["b", "a"]}
        )
        assert response.status_code == 200
        history = (await client.get(f"{BASE}/{task['id']}/history")).json()
        assert [e["action"] for e in history] == ["CREATED"]

    async def test_tags_change_recorded_as_lists(self, client: AsyncClient) -> None:
        task = await _create(client, tags=["a"])
        await client.patch(f"{BASE}/{task['id']}", json={"tags": ["a", "b"]})
        history = (await client.get(f"{BASE}/{task['id']}/history")).json()
        change = history[0]
        assert change["action"] == "TAGS_CHANGED"
        assert change["field"] == "tags"
        assert change["old_value"] == ["a"]
        assert change["new_value"] == ["a", "b"]
        assert change["value_kind"] == "tags"


class TestDelete:
    async def test_delete_returns_204(self, client: AsyncClient) -> None:
        task = await _create(client)
        response = await client.delete(f"{BASE}/{task['id']}")
        assert response.status_code == 204
        assert response.content == b""
        assert (await client.get(f"{BASE}/{task['id']}")).status_code == 404

    async def test_delete_unknown_returns_404(self, client: AsyncClient) -> None:
        response = await client.delete(f"{BASE}/999")
        assert response.status_code == 404

    async def test_delete_twice_second_is_404(self, client: AsyncClient) -> None:
        task = await _create(client)
        assert (await client.delete(f"{BASE}/{task['id']}")).status_code == 204
        assert (await client.delete(f"{BASE}/{task['id']}")).status_code == 404
