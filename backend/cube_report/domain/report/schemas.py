"""
보고서 집계 모델

Notion 업무 레코드를 정규화한 ReportItem과
일일/주간/월간 보고서 응답 구조를 정의합니다.
JSON 직렬화 시 웹 화면과 동일한 camelCase 키를 사용합니다.
"""
import datetime as dt
from enum import Enum
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """camelCase 별칭을 사용하는 기본 모델"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ========================================
# 정규화된 업무 항목
# ========================================
class DateRange(CamelModel):
    """업무 기간 (end가 없으면 단일 날짜)"""
    start: dt.date
    end: Optional[dt.date] = None

    @property
    def effective_end(self) -> dt.date:
        """end가 있으면 end, 없으면 start"""
        return self.end or self.start

    def contains(self, target: dt.date) -> bool:
        """target이 [start, end] 범위에 포함되는지 확인"""
        return self.start <= target <= self.effective_end


class ReportItem(CamelModel):
    """보고서 업무 항목"""
    id: str = Field(default="", description="Notion 페이지 ID")
    title: str = Field(..., description="업무 제목")
    customer: Optional[str] = Field(default=None, description="고객사")
    group: str = Field(..., description="업무 그룹")
    sub_group: str = Field(..., description="업무 서브그룹")
    person: str = Field(..., description="담당자 이름")
    progress_rate: float = Field(default=0, description="진행률 (0-100)")
    date: DateRange
    is_today: bool = False
    is_tomorrow: bool = False
    man_hour: float = Field(default=0, ge=0, description="공수 (m/h)")
    pms_number: Optional[Union[int, float]] = Field(default=None, description="PMS 관리 번호")
    pms_link: Optional[str] = Field(default=None, description="PMS 링크")


# ========================================
# 근태 (연차/반차)
# ========================================
class LeaveType(str, Enum):
    """근태 유형"""
    FULL_DAY = "연차"
    HALF_DAY = "반차"


class LeaveInfo(CamelModel):
    """하루 단위 근태 정보"""
    date: dt.date
    type: LeaveType
    day_of_week: str = Field(..., description="요일 (월, 화, 수, ...)")


# ========================================
# 그룹화된 표시용 항목
# ========================================
class DisplayItem(CamelModel):
    """화면/페이지 표시용 업무 항목"""
    title: str
    person: str
    progress: Optional[int] = Field(default=None, description="진행률 (0%면 생략)")
    man_hour: float = 0
    pms_link: Optional[str] = None


class GroupedTaskList(CamelModel):
    """그룹/서브그룹별 업무 목록"""
    group: str
    sub_group: str
    items: List[DisplayItem] = Field(default_factory=list)


class SubGroupTasks(CamelModel):
    """서브그룹 단위 업무 목록"""
    sub_group: str
    items: List[DisplayItem] = Field(default_factory=list)


class GroupTasks(CamelModel):
    """같은 그룹으로 묶인 서브그룹 목록 (번호 매김 출력용)"""
    group: str
    sub_groups: List[SubGroupTasks] = Field(default_factory=list)


# ========================================
# 공수 집계
# ========================================
class PersonSummary(CamelModel):
    """인원별 공수 요약"""
    name: str
    hours: float
    is_completed: Optional[bool] = Field(default=None, description="공수 작성 완료 여부")
    leave_info: Optional[str] = Field(default=None, description="근태 정보 텍스트")


class GroupHours(CamelModel):
    """그룹별 공수"""
    group: str
    hours: float


class ManHourByPerson(CamelModel):
    """개인별 공수 및 진행 상황"""
    name: str
    total_man_hour: float
    reports: List[ReportItem] = Field(default_factory=list)
    leave_info: Optional[List[LeaveInfo]] = None


# ========================================
# 보고서
# ========================================
class ReportTypeDetermination(CamelModel):
    """보고서 타입 판단 결과"""
    is_holiday: bool
    should_generate_daily: bool
    should_generate_weekly: bool
    should_generate_monthly: bool


class ReportTasks(CamelModel):
    """보고서 업무 구분"""
    in_progress: List[GroupedTaskList] = Field(default_factory=list)
    planned: Optional[List[GroupedTaskList]] = None
    completed: Optional[List[GroupedTaskList]] = None


class BaseReport(CamelModel):
    """보고서 공통 필드"""
    date: dt.date
    title: str
    man_hour_summary: List[PersonSummary] = Field(default_factory=list)
    tasks: ReportTasks
    man_hour_by_person: List[ManHourByPerson] = Field(default_factory=list)
    created_at: dt.datetime
    notion_page_id: Optional[str] = None
    notion_page_url: Optional[str] = None


class DailyReport(BaseReport):
    """일일 보고서"""
    weekly_tasks: List[GroupedTaskList] = Field(default_factory=list, description="주간 전체 작업 (파이 차트용)")


class WeeklyReport(BaseReport):
    """주간 보고서"""
    man_hour_by_group: List[GroupHours] = Field(default_factory=list)


class MonthlyReport(BaseReport):
    """월간 보고서"""


class ReportBundle(CamelModel):
    """한 번의 호출로 생성된 기간별 보고서 묶음"""
    report_types: ReportTypeDetermination
    daily: Optional[DailyReport] = None
    weekly: Optional[WeeklyReport] = None
    monthly: Optional[MonthlyReport] = None


class PublishedPage(CamelModel):
    """생성된 Notion 페이지 정보"""
    id: str
    url: Optional[str] = None


class MonthlyTaskList(CamelModel):
    """월별 업무 목록 조회 결과"""
    year: int
    month: int
    tasks: List[ReportItem] = Field(default_factory=list)
    total: int = 0
