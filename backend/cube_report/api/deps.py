"""
API 의존성

설정으로부터 Notion 서비스와 보고서 서비스를 구성합니다.
테스트에서는 app.dependency_overrides로 대체합니다.
"""
from functools import lru_cache

from fastapi import Depends

from cube_report.core.config import Settings, settings
from cube_report.domain.report.calendar import WorkCalendar, make_public_holiday_predicate
from cube_report.domain.report.members import MemberDirectory, build_member_directory
from cube_report.domain.report.service import MonthlyTaskService, ReportService
from cube_report.domain.report.text_formatter import ReportTextFormatter
from cube_report.infrastructure.notion.service import NotionApiService
from cube_report.reporting.page_builder import ReportPageBuilder
from cube_report.reporting.publisher import ReportPublisher


def get_settings() -> Settings:
    return settings


@lru_cache
def get_calendar() -> WorkCalendar:
    return WorkCalendar(
        holiday_predicate=make_public_holiday_predicate(settings.HOLIDAY_COUNTRY),
        timezone=settings.TIMEZONE,
    )


@lru_cache
def get_members() -> MemberDirectory:
    return build_member_directory(settings)


@lru_cache
def get_notion_service() -> NotionApiService:
    """
    Raises:
        ConfigurationError: Notion 설정 누락
    """
    return NotionApiService.from_settings(settings)


def get_report_service(
    notion: NotionApiService = Depends(get_notion_service),
    members: MemberDirectory = Depends(get_members),
    calendar: WorkCalendar = Depends(get_calendar),
    app_settings: Settings = Depends(get_settings),
) -> ReportService:
    return ReportService(notion, members, calendar, team_name=app_settings.REPORT_TEAM_NAME)


def get_monthly_task_service(
    notion: NotionApiService = Depends(get_notion_service),
    members: MemberDirectory = Depends(get_members),
) -> MonthlyTaskService:
    return MonthlyTaskService(notion, members)


def get_publisher(
    notion: NotionApiService = Depends(get_notion_service),
    app_settings: Settings = Depends(get_settings),
) -> ReportPublisher:
    builder = ReportPageBuilder(ReportTextFormatter(app_settings.REPORT_TEAM_NAME))
    return ReportPublisher(notion, builder)
