"""Integration tests for /api/employees against the in-memory repository."""

from datetime import datetime, timedelta

import pytest
from bson import ObjectId

from tests.conftest import EMPLOYEES_URL


def _parse(ts: str) -> datetime:
    return datetime.fromisoformat(ts.replace("Z", "+00:00"))


async def _create(client, payload) -> dict:
    response = await client.post(EMPLOYEES_URL, json=payload)
    assert response.status_code == 201, response.text
    return response.json()["data"]


class TestCreate:
    async def test_create_returns_201_with_generated_fields(self, client, ann):
        response = await client.post(EMPLOYEES_URL, json=ann)

        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert body["message"] == "Employee created successfully"
        data = body["data"]
        assert ObjectId.is_valid(data["id"])
        assert data["name"] == "Ann"
        assert data["salary"] == 90000
        assert data["createdAt"] == data["updatedAt"]

    async def test_create_then_get_round_trip(self, client, ann):
        created = await _create(client, ann)

        response = await client.get(f"{EMPLOYEES_URL}/{created['id']}")

        assert response.status_code == 200
        body = response.json()
        assert body == {"success": True, "data": created}

    async def test_client_supplied_id_and_timestamps_are_ignored(self, client, ann):
        forged_id = str(ObjectId())
        created = await _create(
            client,
            {**ann, "id": forged_id, "createdAt": "2000-01-01T00:00:00Z"},
        )
        assert created["id"] != forged_id
        assert not created["createdAt"].startswith("2000")

    async def test_missing_fields_report_all_and_persist_nothing(
        self, client, repository,
    ):
        response = await client.post(EMPLOYEES_URL, json={"name": "Ann"})

        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert body["message"] == "Validation Error"
        assert len(body["errors"]) == 3
        assert any("position" in e for e in body["errors"])
        assert any("department" in e for e in body["errors"])
        assert any("salary" in e for e in body["errors"])

        listing = await client.get(EMPLOYEES_URL)
        assert listing.json()["count"] == 0
        assert repository.mutations == 0

    @pytest.mark.parametrize("salary", [-1, "abc", True])
    async def test_bad_salary_rejected(self, client, repository, ann, salary):
        response = await client.post(EMPLOYEES_URL, json={**ann, "salary": salary})

        assert response.status_code == 400
        assert len(response.json()["errors"]) == 1
        assert "alary" in response.json()["errors"][0]
        assert repository.mutations == 0

    async def test_missing_body(self, client):
        response = await client.post(EMPLOYEES_URL)
        assert response.status_code == 400
        assert len(response.json()["errors"]) == 4

    async def test_form_encoded_body_is_rejected(self, client, repository):
        response = await client.post(
            EMPLOYEES_URL,
            data={"name": "Ann", "position": "Engineer", "department": "R&D", "salary": "1"},
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Validation Error"
        assert repository.mutations == 0

    async def test_non_object_body(self, client, repository):
        response = await client.post(EMPLOYEES_URL, json=["Ann"])
        assert response.status_code == 400
        assert response.json()["success"] is False
        assert response.json()["message"] == "Validation Error"
        assert repository.mutations == 0


class TestList:
    async def test_empty(self, client):
        response = await client.get(EMPLOYEES_URL)
        assert response.status_code == 200
        assert response.json() == {"success": True, "count": 0, "data": []}

    async def test_newest_first(self, client, repository, ann):
        first = await _create(client, {**ann, "name": "First"})
        second = await _create(client, {**ann, "name": "Second"})
        # 같은 밀리초에 생성될 수 있으므로 순서를 확실히 한다
        repository.docs[ObjectId(first["id"])]["createdAt"] -= timedelta(seconds=1)

        response = await client.get(EMPLOYEES_URL)

        body = response.json()
        assert body["count"] == 2
        assert [e["id"] for e in body["data"]] == [second["id"], first["id"]]

    async def test_infrastructure_fault_hides_detail(self, client, repository):
        repository.fail_with = "connection refused"

        response = await client.get(EMPLOYEES_URL)

        assert response.status_code == 500
        assert response.json() == {
            "success": False,
            "message": "Server Error",
            "error": "Something went wrong",
        }


class TestGet:
    async def test_not_found(self, client):
        response = await client.get(f"{EMPLOYEES_URL}/{ObjectId()}")
        assert response.status_code == 404
        assert response.json() == {"success": False, "message": "Employee not found"}

    async def test_malformed_id_is_distinct_from_not_found(self, client):
        response = await client.get(f"{EMPLOYEES_URL}/not-an-id")
        assert response.status_code == 400
        assert response.json() == {
            "success": False,
            "message": "Invalid employee ID format",
        }


class TestUpdate:
    async def test_partial_update_changes_only_supplied_fields(self, client, ann):
        created = await _create(client, ann)

        response = await client.put(
            f"{EMPLOYEES_URL}/{created['id']}", json={"position": "Staff Engineer"},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Employee updated successfully"
        updated = body["data"]
        assert updated["position"] == "Staff Engineer"
        for field in ("id", "name", "department", "salary", "createdAt"):
            assert updated[field] == created[field]
        assert _parse(updated["updatedAt"]) > _parse(created["updatedAt"])

    async def test_updated_at_strictly_increases_on_each_update(self, client, ann):
        created = await _create(client, ann)
        url = f"{EMPLOYEES_URL}/{created['id']}"

        first = (await client.put(url, json={"salary": 1})).json()["data"]
        second = (await client.put(url, json={"salary": 2})).json()["data"]

        assert _parse(created["updatedAt"]) < _parse(first["updatedAt"])
        assert _parse(first["updatedAt"]) < _parse(second["updatedAt"])
        assert second["salary"] == 2

    async def test_update_is_persisted(self, client, ann):
        created = await _create(client, ann)
        url = f"{EMPLOYEES_URL}/{created['id']}"

        await client.put(url, json={"department": "  Platform  ", "salary": "100"})

        fetched = (await client.get(url)).json()["data"]
        assert fetched["department"] == "Platform"
        assert fetched["salary"] == 100

    @pytest.mark.parametrize("salary", [-5, "NaN-ish", None])
    async def test_invalid_salary_makes_no_change(
        self, client, repository, ann, salary,
    ):
        created = await _create(client, ann)
        mutations = repository.mutations

        response = await client.put(
            f"{EMPLOYEES_URL}/{created['id']}", json={"salary": salary},
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Validation Error"
        assert repository.mutations == mutations
        fetched = (await client.get(f"{EMPLOYEES_URL}/{created['id']}")).json()
        assert fetched["data"] == created

    async def test_invalid_salary_checked_before_lookup(self, client):
        response = await client.put(
            f"{EMPLOYEES_URL}/{ObjectId()}", json={"salary": -1},
        )
        assert response.status_code == 400

    async def test_not_found(self, client):
        response = await client.put(
            f"{EMPLOYEES_URL}/{ObjectId()}", json={"name": "Bob"},
        )
        assert response.status_code == 404

    async def test_malformed_id(self, client):
        response = await client.put(f"{EMPLOYEES_URL}/123", json={"name": "Bob"})
        assert response.status_code == 400
        assert response.json()["message"] == "Invalid employee ID format"

    async def test_empty_body_only_refreshes_updated_at(self, client, ann):
        created = await _create(client, ann)

        response = await client.put(f"{EMPLOYEES_URL}/{created['id']}")

        assert response.status_code == 200
        updated = response.json()["data"]
        assert updated["name"] == created["name"]
        assert _parse(updated["updatedAt"]) > _parse(created["updatedAt"])


class TestDelete:
    async def test_delete_returns_last_state_then_not_found(self, client, ann):
        created = await _create(client, ann)
        url = f"{EMPLOYEES_URL}/{created['id']}"

        response = await client.delete(url)

        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "message": "Employee deleted successfully",
            "data": created,
        }
        assert (await client.get(url)).status_code == 404

    async def test_second_delete_is_not_found(self, client, ann):
        created = await _create(client, ann)
        url = f"{EMPLOYEES_URL}/{created['id']}"

        assert (await client.delete(url)).status_code == 200
        assert (await client.delete(url)).status_code == 404

    async def test_malformed_id(self, client):
        response = await client.delete(f"{EMPLOYEES_URL}/xyz")
        assert response.status_code == 400

    async def test_delete_removes_from_listing(self, client, ann):
        created = await _create(client, ann)
        await client.delete(f"{EMPLOYEES_URL}/{created['id']}")

        listing = (await client.get(EMPLOYEES_URL)).json()
        assert listing["count"] == 0
