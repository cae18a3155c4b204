"""
Monthly Tasks API

월별 업무 목록 조회 및 엑셀 다운로드
"""
import logging
from typing import Optional
from urllib.parse import quote

from fastapi import APIRouter, Depends, HTTPException, Response

from cube_report.api.deps import get_monthly_task_service, get_settings
from cube_report.core.config import Settings
from cube_report.core.exceptions import ReportError
from cube_report.domain.report.schemas import MonthlyTaskList
from cube_report.domain.report.service import MonthlyTaskService
from cube_report.reporting.excel_export import XLSX_MEDIA_TYPE, export_file_name, export_monthly_tasks


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/monthly-tasks", tags=["monthly_tasks"])


async def _load_tasks(service: MonthlyTaskService, year: Optional[int], month: Optional[int]) -> MonthlyTaskList:
    if year is None or month is None:
        raise HTTPException(status_code=400, detail="year와 month 파라미터가 필요합니다.")

    try:
        return await service.list_tasks(year, month)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except ReportError:
        logger.exception("월별 업무 목록 조회 실패")
        raise HTTPException(status_code=500, detail="월별 업무 목록 조회 실패")


@router.get("", response_model=MonthlyTaskList)
async def list_monthly_tasks(
    year: Optional[int] = None,
    month: Optional[int] = None,
    service: MonthlyTaskService = Depends(get_monthly_task_service),
):
    """
    월별 업무 목록 조회

    해당 월에 걸친 모든 업무를 반환합니다. (담당자 미등록 시 '미지정')
    """
    return await _load_tasks(service, year, month)


@router.get("/export")
async def export_monthly_tasks_excel(
    year: Optional[int] = None,
    month: Optional[int] = None,
    service: MonthlyTaskService = Depends(get_monthly_task_service),
    app_settings: Settings = Depends(get_settings),
):
    """담당자별 시트로 구성된 월별 업무 목록 엑셀 다운로드"""
    task_list = await _load_tasks(service, year, month)
    content = export_monthly_tasks(service.tasks_by_member(task_list))

    file_name = export_file_name(task_list.year, task_list.month, app_settings.REPORT_TEAM_NAME)
    return Response(
        content=content,
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f"attachment; filename*=UTF-8''{quote(file_name)}"},
    )
