import json
import pytest
from datetime import datetime

pytestmark = pytest.mark.asyncio

BASE_URL = "/api/v1/tournaments/"


async def _create(client, title: str, start_date: str = "2026-05-01T10:00:00"):
    return await client.post(BASE_URL, json={"title": title, "start_date": start_date})


def _pagination(response) -> dict:
    return json.loads(response.headers["X-Pagination"])


async def test_create_tournament(client):
    response = await _create(client, "  Spring Cup  ")
    assert response.status_code == 201
    data = response.json()
    assert data["title"] == "Spring Cup"
    assert data["start_date"] == "2026-05-01T10:00:00"
    assert data["end_date"] == "2026-08-01T10:00:00"
    assert data["games"] == []
    assert response.headers["Location"].endswith(f"/api/v1/tournaments/{data['id']}")


async def test_create_tournament_normalizes_offset_to_utc(client):
    response = await _create(client, "Offset Cup", "2026-05-01T12:00:00+02:00")
    assert response.status_code == 201
    assert response.json()["start_date"] == "2026-05-01T10:00:00"


async def test_create_duplicate_tournament(client):
    await _create(client, "Dupe Cup")
    response = await _create(client, "Dupe Cup")
    assert response.status_code == 409
    assert response.json()["detail"] == (
        "A tournament with title Dupe Cup and start date 2026-05-01T10:00:00 already exists."
    )


async def test_same_title_different_start_date_is_allowed(client):
    await _create(client, "Yearly Cup", "2026-05-01T10:00:00")
    response = await _create(client, "Yearly Cup", "2027-05-01T10:00:00")
    assert response.status_code == 201


async def test_create_tournament_validation(client):
    response = await client.post(BASE_URL, json={"title": "x" * 101, "start_date": "2026-05-01T10:00:00"})
    assert response.status_code == 422
    response = await client.post(BASE_URL, json={"title": "No date"})
    assert response.status_code == 422


async def test_get_tournament(client):
    created = (await _create(client, "Get Cup")).json()
    response = await client.get(f"{BASE_URL}{created['id']}")
    assert response.status_code == 200
    assert response.json()["title"] == "Get Cup"


async def test_get_tournament_not_found(client):
    response = await client.get(f"{BASE_URL}999")
    assert response.status_code == 404
    assert response.json()["detail"] == "Tournament with id 999 not found."


async def test_get_tournament_invalid_id(client):
    response = await client.get(f"{BASE_URL}0")
    assert response.status_code == 422


async def test_get_tournament_with_games(client, make_tournament):
    tournament = await make_tournament(
        "Games Cup",
        games=[("Zeta", datetime(2026, 1, 3)), ("Alpha", datetime(2026, 1, 2))],
    )
    response = await client.get(f"{BASE_URL}{tournament.id}", params={"includeGames": "true"})
    assert response.status_code == 200
    assert [game["title"] for game in response.json()["games"]] == ["Alpha", "Zeta"]

    response = await client.get(f"{BASE_URL}{tournament.id}")
    assert response.json()["games"] == []


# ──────────────────────────────────────────────
# Listing
# ──────────────────────────────────────────────

async def test_list_tournaments_empty(client):
    response = await client.get(BASE_URL, params={"pageNumber": 1, "pageSize": 10})
    assert response.status_code == 200
    assert response.json() == []
    assert _pagination(response) == {"currentPage": 1, "pageSize": 10, "totalCount": 0, "totalPages": 0}


async def test_list_tournaments_ordered_by_title(client, make_tournament):
    for title in ("Charlie", "Alpha", "Bravo"):
        await make_tournament(title)
    response = await client.get(BASE_URL, params={"pageSize": 10})
    assert [t["title"] for t in response.json()] == ["Alpha", "Bravo", "Charlie"]


async def test_list_tournaments_default_page_size(client, make_tournament):
    for index in range(7):
        await make_tournament(f"Cup {index}")
    response = await client.get(BASE_URL)
    assert len(response.json()) == 5
    assert _pagination(response) == {"currentPage": 1, "pageSize": 5, "totalCount": 7, "totalPages": 2}


async def test_list_tournaments_last_partial_page(client, make_tournament):
    for index in range(25):
        await make_tournament(f"Cup {index:02d}")
    response = await client.get(BASE_URL, params={"pageNumber": 3, "pageSize": 10})
    titles = [t["title"] for t in response.json()]
    assert titles == [f"Cup {index:02d}" for index in range(20, 25)]
    assert _pagination(response) == {"currentPage": 3, "pageSize": 10, "totalCount": 25, "totalPages": 3}


async def test_list_tournaments_out_of_range_serves_last_page(client, make_tournament):
    for index in range(25):
        await make_tournament(f"Cup {index:02d}")
    response = await client.get(BASE_URL, params={"pageNumber": 5, "pageSize": 10})
    assert response.status_code == 200
    assert len(response.json()) == 5
    assert _pagination(response) == {"currentPage": 3, "pageSize": 10, "totalCount": 25, "totalPages": 3}


async def test_list_tournaments_huge_page_number_serves_last_page(client, make_tournament):
    for index in range(7):
        await make_tournament(f"Cup {index}")
    response = await client.get(BASE_URL, params={"pageNumber": 10**19, "pageSize": 5})
    assert response.status_code == 200
    assert [t["title"] for t in response.json()] == ["Cup 5", "Cup 6"]
    assert _pagination(response) == {"currentPage": 2, "pageSize": 5, "totalCount": 7, "totalPages": 2}


async def test_list_tournaments_clamps_paging_values(client, make_tournament):
    for index in range(5):
        await make_tournament(f"Cup {index}")
    response = await client.get(BASE_URL, params={"pageNumber": 0, "pageSize": 1000})
    assert response.status_code == 200
    assert len(response.json()) == 5
    assert _pagination(response) == {"currentPage": 1, "pageSize": 50, "totalCount": 5, "totalPages": 1}


async def test_list_tournaments_include_games(client, make_tournament):
    await make_tournament("With Games", games=[("Opening", datetime(2026, 1, 2))])
    response = await client.get(BASE_URL, params={"includeGames": "true"})
    assert [g["title"] for g in response.json()[0]["games"]] == ["Opening"]

    response = await client.get(BASE_URL)
    assert response.json()[0]["games"] == []


# ──────────────────────────────────────────────
# Update / patch / delete
# ──────────────────────────────────────────────

async def test_update_tournament(client):
    created = (await _create(client, "Old Title")).json()
    response = await client.put(
        f"{BASE_URL}{created['id']}", json={"title": "New Title", "start_date": "2026-06-01T09:00:00"}
    )
    assert response.status_code == 200
    data = response.json()
    assert data["title"] == "New Title"
    assert data["end_date"] == "2026-09-01T09:00:00"


async def test_update_tournament_not_found(client):
    response = await client.put(f"{BASE_URL}999", json={"title": "Nope", "start_date": "2026-06-01T09:00:00"})
    assert response.status_code == 404


async def test_update_tournament_conflict(client):
    await _create(client, "Taken")
    other = (await _create(client, "Other")).json()
    response = await client.put(
        f"{BASE_URL}{other['id']}", json={"title": "Taken", "start_date": "2026-05-01T10:00:00"}
    )
    assert response.status_code == 409


async def test_update_tournament_without_changes(client):
    created = (await _create(client, "Same")).json()
    response = await client.put(
        f"{BASE_URL}{created['id']}", json={"title": "Same", "start_date": "2026-05-01T10:00:00"}
    )
    assert response.status_code == 200


async def test_patch_tournament_title_only(client):
    created = (await _create(client, "Patch Me")).json()
    response = await client.patch(
        f"{BASE_URL}{created['id']}", json=[{"op": "replace", "path": "/title", "value": "Patched"}]
    )
    assert response.status_code == 200
    data = response.json()
    assert data["title"] == "Patched"
    assert data["start_date"] == created["start_date"]


async def test_patch_tournament_start_date_moves_end_date(client):
    created = (await _create(client, "Moving Cup")).json()
    response = await client.patch(
        f"{BASE_URL}{created['id']}",
        json=[
            {"op": "test", "path": "/title", "value": "Moving Cup"},
            {"op": "replace", "path": "/start_date", "value": "2026-07-01T12:00:00+02:00"},
        ],
    )
    assert response.status_code == 200
    assert response.json()["start_date"] == "2026-07-01T10:00:00"
    assert response.json()["end_date"] == "2026-10-01T10:00:00"


async def test_patch_tournament_empty_document(client):
    created = (await _create(client, "Empty Patch")).json()
    response = await client.patch(f"{BASE_URL}{created['id']}", json=[])
    assert response.status_code == 400


async def test_patch_tournament_rejects_merge_style_body(client):
    created = (await _create(client, "Merge Patch")).json()
    response = await client.patch(f"{BASE_URL}{created['id']}", json={"title": "Merged"})
    assert response.status_code == 422


async def test_patch_tournament_unknown_operation(client):
    created = (await _create(client, "Odd Patch")).json()
    response = await client.patch(
        f"{BASE_URL}{created['id']}", json=[{"op": "rename", "path": "/title", "value": "X"}]
    )
    assert response.status_code == 422


@pytest.mark.parametrize(
    "operation",
    [
        {"op": "remove", "path": "/location"},
        {"op": "replace", "path": "title", "value": "No Slash"},
        {"op": "test", "path": "/title", "value": "Something Else"},
    ],
)
async def test_patch_tournament_operation_cannot_be_applied(client, operation):
    created = (await _create(client, "Stubborn")).json()
    response = await client.patch(f"{BASE_URL}{created['id']}", json=[operation])
    assert response.status_code == 400
    assert response.json()["detail"].startswith("Invalid patch document")

    response = await client.get(f"{BASE_URL}{created['id']}")
    assert response.json()["title"] == "Stubborn"


@pytest.mark.parametrize(
    "operation",
    [
        {"op": "replace", "path": "/title", "value": ""},
        {"op": "remove", "path": "/start_date"},
    ],
)
async def test_patch_tournament_invalid_result(client, operation):
    created = (await _create(client, "Bad Patch")).json()
    response = await client.patch(f"{BASE_URL}{created['id']}", json=[operation])
    assert response.status_code == 422


async def test_patch_tournament_conflict(client):
    await _create(client, "Taken")
    other = (await _create(client, "Other")).json()
    response = await client.patch(
        f"{BASE_URL}{other['id']}", json=[{"op": "replace", "path": "/title", "value": "Taken"}]
    )
    assert response.status_code == 409


async def test_patch_tournament_not_found(client):
    response = await client.patch(f"{BASE_URL}999", json=[{"op": "replace", "path": "/title", "value": "Nope"}])
    assert response.status_code == 404


async def test_delete_tournament_removes_games(client, make_tournament):
    tournament = await make_tournament("Doomed", games=[("Last Game", datetime(2026, 1, 2))])
    response = await client.delete(f"{BASE_URL}{tournament.id}")
    assert response.status_code == 204

    response = await client.get(f"{BASE_URL}{tournament.id}")
    assert response.status_code == 404
    response = await client.get(f"{BASE_URL}{tournament.id}/games/")
    assert response.status_code == 404


async def test_delete_tournament_not_found(client):
    response = await client.delete(f"{BASE_URL}999")
    assert response.status_code == 404
