"""Task API tests — CRUD and transitive ownership through projects.

A task belongs to whoever owns its project. These tests check that:
1. Tasks can only be created under your own projects (400 otherwise)
2. Reading/updating/deleting someone else's task looks like a missing task (404)
3. Moving a task is only allowed into another project you own
4. completed toggles freely
"""

import pytest


@pytest.fixture
async def project(alice):
    r = await alice.post("/api/projects", json={"name": "Alpha", "status": "active"})
    return r.json()


@pytest.fixture
async def other_project(alice):
    r = await alice.post("/api/projects", json={"name": "Beta"})
    return r.json()


@pytest.fixture
async def bob_project(bob):
    r = await bob.post("/api/projects", json={"name": "Bob's project"})
    return r.json()


@pytest.fixture
async def task(alice, project):
    r = await alice.post(
        "/api/tasks",
        json={
            "title": "Create wireframes",
            "description": "All main pages",
            "priority": "high",
            "dueDate": "2024-09-15",
            "projectId": project["id"],
        },
    )
    assert r.status_code == 201
    return r.json()


# ═══════════════════════════════════════════════════════════
# CRUD
# ═══════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_create_task(task, project):
    assert task["title"] == "Create wireframes"
    assert task["description"] == "All main pages"
    assert task["priority"] == "high"
    assert task["completed"] is False
    assert task["dueDate"] == "2024-09-15"
    assert task["projectId"] == project["id"]


@pytest.mark.asyncio
async def test_create_task_defaults(alice, project):
    r = await alice.post("/api/tasks", json={"title": "T", "projectId": project["id"]})
    assert r.status_code == 201
    assert r.json()["priority"] == "medium"
    assert r.json()["completed"] is False


@pytest.mark.asyncio
async def test_create_task_in_missing_project(alice):
    r = await alice.post("/api/tasks", json={"title": "T", "projectId": 424242})
    assert r.status_code == 400
    assert r.json() == {"error": "Invalid project"}


@pytest.mark.asyncio
async def test_create_task_in_other_users_project(alice, bob_project, bob):
    r = await alice.post(
        "/api/tasks", json={"title": "Intrude", "projectId": bob_project["id"]}
    )
    assert r.status_code == 400
    assert r.json() == {"error": "Invalid project"}
    assert (await bob.get("/api/tasks")).json() == []


@pytest.mark.asyncio
async def test_create_task_requires_project_id(alice):
    r = await alice.post("/api/tasks", json={"title": "Orphan"})
    assert r.status_code == 422


@pytest.mark.asyncio
async def test_get_task(alice, task):
    r = await alice.get(f"/api/tasks/{task['id']}")
    assert r.status_code == 200
    assert r.json() == task


@pytest.mark.asyncio
async def test_list_tasks_spans_own_projects(alice, bob, task, other_project, bob_project):
    t2 = (
        await alice.post(
            "/api/tasks", json={"title": "Second", "projectId": other_project["id"]}
        )
    ).json()
    await bob.post("/api/tasks", json={"title": "Bob's", "projectId": bob_project["id"]})

    ids = [t["id"] for t in (await alice.get("/api/tasks")).json()]
    assert sorted(ids) == sorted([task["id"], t2["id"]])

    bob_titles = [t["title"] for t in (await bob.get("/api/tasks")).json()]
    assert bob_titles == ["Bob's"]


@pytest.mark.asyncio
async def test_toggle_completed_both_ways(alice, task):
    r = await alice.put(f"/api/tasks/{task['id']}", json={"completed": True})
    assert r.json()["completed"] is True
    r = await alice.put(f"/api/tasks/{task['id']}", json={"completed": False})
    assert r.json()["completed"] is False
    assert r.json()["title"] == "Create wireframes"


@pytest.mark.asyncio
async def test_move_task_to_own_project(alice, task, other_project):
    r = await alice.put(
        f"/api/tasks/{task['id']}", json={"projectId": other_project["id"]}
    )
    assert r.status_code == 200
    assert r.json()["projectId"] == other_project["id"]


@pytest.mark.asyncio
async def test_move_task_to_other_users_project_rejected(alice, task, bob_project):
    """Reassignment guard: 400, and nothing in the request is applied."""
    r = await alice.put(
        f"/api/tasks/{task['id']}",
        json={"projectId": bob_project["id"], "title": "Changed"},
    )
    assert r.status_code == 400
    assert r.json() == {"error": "Invalid project"}

    got = (await alice.get(f"/api/tasks/{task['id']}")).json()
    assert got["projectId"] == task["projectId"]
    assert got["title"] == "Create wireframes"


@pytest.mark.asyncio
async def test_move_task_to_null_project_rejected(alice, task):
    r = await alice.put(f"/api/tasks/{task['id']}", json={"projectId": None})
    assert r.status_code == 400


@pytest.mark.asyncio
async def test_delete_task(alice, task):
    r = await alice.delete(f"/api/tasks/{task['id']}")
    assert r.status_code == 200
    assert r.json() == {"message": "Task deleted successfully"}

    r = await alice.delete(f"/api/tasks/{task['id']}")
    assert r.status_code == 404
    assert r.json() == {"error": "Task not found"}


# ═══════════════════════════════════════════════════════════
# Cross-user isolation
# ═══════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_other_user_gets_404_on_task(alice, bob, task, bob_project):
    tid = task["id"]
    missing = await bob.get("/api/tasks/999999")
    for r in (
        await bob.get(f"/api/tasks/{tid}"),
        await bob.put(f"/api/tasks/{tid}", json={"completed": True}),
        await bob.put(f"/api/tasks/{tid}", json={"projectId": bob_project["id"]}),
        await bob.delete(f"/api/tasks/{tid}"),
    ):
        assert r.status_code == 404
        assert r.json() == missing.json()

    got = (await alice.get(f"/api/tasks/{tid}")).json()
    assert got == task


# ═══════════════════════════════════════════════════════════
# Ids outside the key range
# ═══════════════════════════════════════════════════════════

HUGE_ID = 99999999999999999999


@pytest.mark.asyncio
@pytest.mark.parametrize("tid", [0, 2**31, HUGE_ID])
async def test_out_of_range_task_id_is_404(alice, tid):
    for r in (
        await alice.get(f"/api/tasks/{tid}"),
        await alice.put(f"/api/tasks/{tid}", json={"completed": True}),
        await alice.delete(f"/api/tasks/{tid}"),
    ):
        assert r.status_code == 404
        assert r.json() == {"error": "Task not found"}


@pytest.mark.asyncio
@pytest.mark.parametrize("pid", [-5, 2**31, HUGE_ID])
async def test_create_task_with_out_of_range_project_id(alice, pid):
    r = await alice.post("/api/tasks", json={"title": "Orphan", "projectId": pid})
    assert r.status_code == 400
    assert r.json() == {"error": "Invalid project"}
    assert (await alice.get("/api/tasks")).json() == []


@pytest.mark.asyncio
async def test_move_task_to_out_of_range_project_rejected(alice, task):
    r = await alice.put(
        f"/api/tasks/{task['id']}",
        json={"projectId": HUGE_ID, "title": "Changed"},
    )
    assert r.status_code == 400
    assert r.json() == {"error": "Invalid project"}

    got = (await alice.get(f"/api/tasks/{task['id']}")).json()
    assert got == task
