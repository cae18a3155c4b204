"""
Reports API

일일/주간/월간 보고서 조회 및 Notion 페이지 발행 API
"""
import logging
import datetime as dt
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, Field

from cube_report.api.deps import get_publisher, get_report_service
from cube_report.core.exceptions import ReportError
from cube_report.domain.report.schemas import ReportBundle, ReportTypeDetermination
from cube_report.domain.report.service import ReportService
from cube_report.reporting.publisher import ReportPublisher


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/reports", tags=["reports"])

HOLIDAY_MESSAGE = "휴일에는 보고서를 생성하지 않습니다."


class ReportGenerateRequest(BaseModel):
    """보고서 생성 요청"""
    date: Optional[dt.date] = Field(default=None, description="기준 날짜 (기본값: 오늘)")


@router.get("/types", response_model=ReportTypeDetermination)
async def get_report_types(
    target_date: Optional[date] = Query(default=None, alias="date"),
    service: ReportService = Depends(get_report_service),
):
    """기준 날짜에 생성할 보고서 타입 판단"""
    return service.determine_report_types(target_date)


@router.get("", response_model=ReportBundle)
async def get_reports(
    target_date: Optional[date] = Query(default=None, alias="date"),
    service: ReportService = Depends(get_report_service),
):
    """
    보고서 데이터 조회

    휴일이면 400, Notion 조회 실패 시 500을 반환합니다.
    """
    try:
        bundle = await service.generate_reports(target_date)
    except ReportError:
        logger.exception("보고서 생성 실패")
        raise HTTPException(status_code=500, detail="보고서 생성 실패")

    if bundle.report_types.is_holiday:
        raise HTTPException(status_code=400, detail=HOLIDAY_MESSAGE)
    return bundle


@router.post("", response_model=ReportBundle, status_code=201)
async def create_reports(
    request: Optional[ReportGenerateRequest] = None,
    service: ReportService = Depends(get_report_service),
    publisher: ReportPublisher = Depends(get_publisher),
):
    """
    보고서 생성 및 Notion 페이지 발행

    생성된 기간별 보고서마다 Notion 보고서 데이터베이스에 페이지를 만듭니다.
    """
    target_date = request.date if request else None

    try:
        bundle = await service.generate_reports(target_date)
        if bundle.report_types.is_holiday:
            raise HTTPException(status_code=400, detail=HOLIDAY_MESSAGE)
        return await publisher.publish_bundle(bundle)
    except ReportError:
        logger.exception("보고서 발행 실패")
        raise HTTPException(status_code=500, detail="보고서 생성 실패")
