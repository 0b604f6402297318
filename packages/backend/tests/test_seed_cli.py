"""Bootstrap utility tests — sample data and the tasktrack CLI."""

import pytest
from click.testing import CliRunner

from tasktrack.cli.main import cli
from tasktrack.db.seed import SAMPLE_PROJECTS, SAMPLE_TASKS, seed_database


@pytest.mark.asyncio
async def test_seed_then_login_as_sample_user(db_session, client):
    counts = await seed_database(db_session)
    assert counts == {"users": 2, "projects": 3, "tasks": 6}

    r = await client.post(
        "/api/login", json={"email": "john@example.com", "password": "password123"}
    )
    assert r.status_code == 200

    projects = (await client.get("/api/projects")).json()
    assert sorted(p["name"] for p in projects) == [
        "Mobile App Development",
        "Website Redesign",
    ]
    tasks = (await client.get("/api/tasks")).json()
    assert len(tasks) == 4
    assert {t["projectId"] for t in tasks} == {p["id"] for p in projects}


@pytest.mark.asyncio
async def test_seed_is_repeatable(db_session):
    await seed_database(db_session)
    counts = await seed_database(db_session)
    assert counts["projects"] == len(SAMPLE_PROJECTS)
    assert counts["tasks"] == len(SAMPLE_TASKS)


def test_cli_init_db_and_seed(tmp_path):
    url = f"sqlite+aiosqlite:///{tmp_path / 'cli.db'}"
    runner = CliRunner()

    result = runner.invoke(cli, ["init-db", "--database-url", url])
    assert result.exit_code == 0, result.output
    assert "Tables created" in result.output

    result = runner.invoke(cli, ["seed", "--database-url", url])
    assert result.exit_code == 0, result.output
    assert "2 users, 3 projects, 6 tasks" in result.output

    result = runner.invoke(cli, ["purge-sessions", "--database-url", url])
    assert result.exit_code == 0, result.output
    assert "Removed 0 expired session(s)" in result.output


def test_cli_reports_database_errors(tmp_path):
    """Seeding a database without tables fails cleanly, not with a traceback."""
    url = f"sqlite+aiosqlite:///{tmp_path / 'empty.db'}"
    result = CliRunner().invoke(cli, ["seed", "--database-url", url])
    assert result.exit_code == 1
    assert "Database error" in result.output
