"""API route aggregation.

All routers registered here get mounted in main.py.

Auth is applied at the include_router level for the resource routers,
so no project or task route can be reached without a session. Health
and auth routers are open.
"""

from fastapi import APIRouter, Depends

from tasktrack.api.auth import router as auth_router
from tasktrack.api.health import router as health_router
from tasktrack.api.projects import router as projects_router
from tasktrack.api.tasks import router as tasks_router
from tasktrack.auth.dependencies import get_current_user

# All protected routers require a session
_auth = [Depends(get_current_user)]

api_router = APIRouter(prefix="/api")

# Open routes: no session required
api_router.include_router(health_router, tags=["health"])
api_router.include_router(auth_router, tags=["auth"])

# Protected routes
api_router.include_router(projects_router, tags=["projects"], dependencies=_auth)
api_router.include_router(tasks_router, tags=["tasks"], dependencies=_auth)
