"""Development sample data.

seed_database() wipes every table and inserts a fixed set of users,
projects, and tasks. Projects reference users, and tasks reference
projects, by position in the lists below; real ids are resolved after
each insert.

Sample logins: john@example.com / jane@example.com, password "password123".
"""

from datetime import date

import structlog
from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession

from tasktrack.auth.password import hash_password
from tasktrack.db.models import Project, Task, User, UserSession

logger = structlog.get_logger()

SAMPLE_USERS = [
    {"username": "john_doe", "email": "john@example.com", "password": "password123"},
    {"username": "jane_smith", "email": "jane@example.com", "password": "password123"},
]

SAMPLE_PROJECTS = [
    {
        "name": "Website Redesign",
        "description": "Complete overhaul of company website with modern design",
        "status": "active",
        "due_date": date(2024, 12, 31),
        "user": 0,
    },
    {
        "name": "Mobile App Development",
        "description": "Build iOS and Android app for customer portal",
        "status": "active",
        "due_date": date(2024, 11, 15),
        "user": 0,
    },
    {
        "name": "Marketing Campaign",
        "description": "Q4 social media and advertising campaign",
        "status": "planning",
        "due_date": date(2024, 10, 1),
        "user": 1,
    },
]

SAMPLE_TASKS = [
    {"title": "Create wireframes", "description": "Design initial wireframes for all main pages",
     "completed": False, "priority": "high", "due_date": date(2024, 9, 15), "project": 0},
    {"title": "Set up development environment", "description": "Configure local dev environment with necessary tools",
     "completed": True, "priority": "high", "due_date": date(2024, 8, 20), "project": 0},
    {"title": "Research mobile frameworks", "description": "Compare React Native vs Flutter for app development",
     "completed": False, "priority": "medium", "due_date": date(2024, 9, 30), "project": 1},
    {"title": "Create app mockups", "description": "Design user interface mockups for key app screens",
     "completed": False, "priority": "medium", "due_date": date(2024, 10, 5), "project": 1},
    {"title": "Define target audience", "description": "Research and define primary target demographics",
     "completed": True, "priority": "high", "due_date": date(2024, 8, 25), "project": 2},
    {"title": "Create content calendar", "description": "Plan social media posts for next 3 months",
     "completed": False, "priority": "medium", "due_date": date(2024, 9, 20), "project": 2},
]


async def clear_database(db: AsyncSession) -> None:
    """Delete all rows, children first."""
    for model in (Task, Project, UserSession, User):
        await db.execute(delete(model))


async def seed_database(db: AsyncSession) -> dict[str, int]:
    """Replace all data with the sample set. Returns row counts."""
    await clear_database(db)

    users = [
        User(
            username=u["username"],
            email=u["email"],
            password_hash=hash_password(u["password"]),
        )
        for u in SAMPLE_USERS
    ]
    db.add_all(users)
    await db.flush()

    projects = []
    for p in SAMPLE_PROJECTS:
        fields = {k: v for k, v in p.items() if k != "user"}
        projects.append(Project(**fields, user_id=users[p["user"]].id))
    db.add_all(projects)
    await db.flush()

    tasks = []
    for t in SAMPLE_TASKS:
        fields = {k: v for k, v in t.items() if k != "project"}
        tasks.append(Task(**fields, project_id=projects[t["project"]].id))
    db.add_all(tasks)

    await db.commit()

    counts = {"users": len(users), "projects": len(projects), "tasks": len(tasks)}
    logger.info("seed.complete", **counts)
    return counts
