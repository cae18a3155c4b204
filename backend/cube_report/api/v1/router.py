from fastapi import APIRouter
from cube_report.api.v1.endpoints.reports import router as reports_router
from cube_report.api.v1.endpoints.monthly_tasks import router as monthly_tasks_router

api_router = APIRouter()

# Reports (일일/주간/월간 보고서) 엔드포인트
api_router.include_router(
    reports_router,
    tags=["Reports"]
)

# Monthly Tasks (월별 업무 목록) 엔드포인트
api_router.include_router(
    monthly_tasks_router,
    tags=["Monthly Tasks"]
)
