"""API v1 라우터

모든 도메인 엔드포인트는 ``X-Internal-Api-Key`` 헤더가 필요합니다.
``X-User-Id`` 헤더는 요청자 식별용이며, 없으면 익명으로 처리합니다.
"""

from typing import Any

from fastapi import APIRouter

from app.core.schemas import APIResponse, ErrorResponse
from app.domains.issues.router import organization_router as organization_issues_router
from app.domains.issues.router import project_router as project_issues_router
from app.domains.issues.router import router as issues_router
from app.domains.milestones.router import router as milestones_router
from app.domains.projects.router import organization_router, router as projects_router
from app.domains.users.router import router as users_router

ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    status_code: {"model": ErrorResponse}
    for status_code in (400, 401, 404, 409, 422)
}

api_router = APIRouter(responses=ERROR_RESPONSES)

api_router.include_router(users_router, prefix="/users", tags=["Users"])
api_router.include_router(
    organization_router, prefix="/organizations", tags=["Organizations"]
)
api_router.include_router(
    organization_issues_router, prefix="/organizations", tags=["Issues"]
)
api_router.include_router(projects_router, prefix="/projects", tags=["Projects"])
api_router.include_router(
    milestones_router,
    prefix="/projects/{project_id}/milestones",
    tags=["Milestones"],
)
api_router.include_router(project_issues_router, prefix="/projects", tags=["Issues"])
api_router.include_router(issues_router, prefix="/issues", tags=["Issues"])


@api_router.get("/", response_model=APIResponse[dict[str, Any]])
async def api_v1_root():
    """API v1 루트"""
    return APIResponse(
        message="Issue Board API v1",
        data={"version": "1.0.0", "docs": "/docs"},
    )
