"""
보고서 생성 서비스

Notion 업무 데이터베이스를 조회하여 일일/주간/월간 보고서 데이터를 만듭니다.

흐름: 기간 선택 -> 조회 -> 다중 담당자 분리 -> 변환 -> 중복 제거 -> 그룹화/근태 집계
"""
import logging
from calendar import monthrange
from datetime import date, timedelta
from typing import Dict, List, Optional

from cube_report.domain.report import filters
from cube_report.domain.report.calendar import WorkCalendar, week_of_month_label
from cube_report.domain.report.constants import LISTING_LOW_PRIORITY_GROUPS
from cube_report.domain.report.dedup import distinct_items
from cube_report.domain.report.grouping import DEFAULT_GROUP_ORDER, GroupOrder, group_by_project_and_sub_group
from cube_report.domain.report.leave import is_leave
from cube_report.domain.report.members import MemberDirectory
from cube_report.domain.report.schemas import (
    DailyReport,
    MonthlyReport,
    MonthlyTaskList,
    ReportBundle,
    ReportItem,
    ReportTasks,
    ReportTypeDetermination,
    WeeklyReport,
)
from cube_report.domain.report.summary import (
    calculate_man_hour_summary,
    create_man_hour_by_person,
    man_hour_by_group,
    man_hour_by_person_with_leave,
)
from cube_report.domain.report.transformer import (
    LISTING_POLICY,
    PRIMARY_POLICY,
    expand_multiple_assignees,
    transform_records,
)


logger = logging.getLogger(__name__)


class ReportService:
    """보고서 생성 및 데이터 처리 서비스"""

    def __init__(
        self,
        notion,
        members: MemberDirectory,
        calendar: WorkCalendar,
        team_name: str = "큐브 파트",
        group_order: GroupOrder = DEFAULT_GROUP_ORDER,
    ):
        """
        Args:
            notion: query_all(filter, sorts)를 제공하는 Notion 서비스
            members: 담당자 디렉터리
            calendar: 근무일/휴일 계산기
            team_name: 보고서 제목에 사용할 팀 이름
            group_order: 그룹/서브그룹 정렬 규칙
        """
        self.notion = notion
        self.members = members
        self.calendar = calendar
        self.team_name = team_name
        self.group_order = group_order

    # ========================================
    # 보고서 타입 판단
    # ========================================
    def determine_report_types(self, target: Optional[date] = None) -> ReportTypeDetermination:
        """
        주어진 날짜에 생성할 보고서 판단

        - 휴일: 생성하지 않음
        - 일일: 휴일이 아니면 항상
        - 주간: 해당 주의 마지막 평일
        - 월간: 해당 월 마지막 주의 마지막 평일
        """
        target = target or self.calendar.today()

        if self.calendar.is_holiday(target):
            return ReportTypeDetermination(
                is_holiday=True,
                should_generate_daily=False,
                should_generate_weekly=False,
                should_generate_monthly=False,
            )

        return ReportTypeDetermination(
            is_holiday=False,
            should_generate_daily=True,
            should_generate_weekly=self.calendar.is_last_weekday_of_week(target),
            should_generate_monthly=self.calendar.is_last_weekday_of_month(target),
        )

    # ========================================
    # 공통 처리
    # ========================================
    async def _fetch_items(self, filter_dict, sorts, reference_date: Optional[date]) -> List[ReportItem]:
        """조회 -> 다중 담당자 분리 -> 변환 -> 중복 제거"""
        raws = await self.notion.query_all(filter_dict, sorts)
        expanded = expand_multiple_assignees(raws)
        items = transform_records(expanded, self.members, PRIMARY_POLICY, reference_date)
        distinct = distinct_items(items)
        logger.info(
            "조회 %d건 -> 분리 %d건 -> 변환 %d건 -> 중복 제거 %d건",
            len(raws), len(expanded), len(items), len(distinct),
        )
        return distinct

    def _group(self, items: List[ReportItem]):
        return group_by_project_and_sub_group(items, self.members, self.group_order)

    def _now(self):
        return self.calendar.clock()

    # ========================================
    # 일일 보고서
    # ========================================
    async def generate_daily_report(self, target: Optional[date] = None) -> DailyReport:
        """
        일일 보고서 데이터 생성

        Args:
            target: 기준 날짜 (기본값: 오늘)
        """
        target = target or self.calendar.today()
        monday, _ = self.calendar.this_week_monday_to_today(target)
        tomorrow = target + timedelta(days=1)
        logger.info("일일 보고서 생성 시작: %s", target, extra={"report_type": "daily"})

        # 1. 이번 주 월요일 ~ 다음날 작업 조회
        daily_filter = filters.and_(*filters.date_between(monday, tomorrow), filters.person_not_empty())
        items = await self._fetch_items(daily_filter, filters.CREATED_TIME_DESC, target)

        # 2. 진행업무: 오늘 작업
        in_progress = self._group([item for item in items if item.is_today])

        # 3. 예정업무: 내일 작업 또는 오늘 작업 중 미완료 (근태는 내일인 경우만)
        planned = self._group([
            item for item in items
            if (item.is_tomorrow if is_leave(item) else item.is_tomorrow or (item.is_today and item.progress_rate < 100))
        ])

        # 4. 이번 주 월요일 ~ 기준일 공수 집계
        weekly_filter = filters.and_(filters.person_not_empty(), *filters.date_between(monday, target))
        weekly_items = await self._fetch_items(weekly_filter, filters.DATE_ASC, target)
        summary = calculate_man_hour_summary(weekly_items, self.members, self.calendar, monday, target)

        return DailyReport(
            date=target,
            title=f"{self.team_name} 일일업무 보고 ({target.isoformat()})",
            man_hour_summary=summary,
            tasks=ReportTasks(in_progress=in_progress, planned=planned),
            weekly_tasks=self._group(weekly_items),
            man_hour_by_person=create_man_hour_by_person(items, self.members),
            created_at=self._now(),
        )

    # ========================================
    # 주간 보고서
    # ========================================
    async def generate_weekly_report(self, target: Optional[date] = None) -> WeeklyReport:
        """주간 보고서 데이터 생성 (Notion 기준 이번 주)"""
        target = target or self.calendar.today()
        monday, _ = self.calendar.this_week_monday_to_today(target)
        logger.info("주간 보고서 생성 시작: %s", target, extra={"report_type": "weekly"})

        # 1. 이번 주 전체 작업 조회
        weekly_filter = filters.and_(filters.person_not_empty(), filters.date_this_week())
        items = await self._fetch_items(weekly_filter, filters.CREATED_TIME_DESC, None)

        # 2. 공수 집계 (근태 반영)
        summary = calculate_man_hour_summary(items, self.members, self.calendar, monday, target)

        return WeeklyReport(
            date=target,
            title=f"{self.team_name} 주간업무 보고 ({week_of_month_label(target)})",
            man_hour_summary=summary,
            man_hour_by_group=man_hour_by_group(items),
            man_hour_by_person=man_hour_by_person_with_leave(items, self.members),
            tasks=ReportTasks(in_progress=self._group(items)),
            created_at=self._now(),
        )

    # ========================================
    # 월간 보고서
    # ========================================
    async def generate_monthly_report(self, target: Optional[date] = None) -> MonthlyReport:
        """월간 보고서 데이터 생성 (수요일 기준 월 범위)"""
        target = target or self.calendar.today()
        first_day, last_day = self.calendar.current_month_range_by_wednesday(target)
        logger.info(
            "월간 보고서 생성 시작: %s (%s ~ %s)", target, first_day, last_day, extra={"report_type": "monthly"}
        )

        # 1. 이번 달 전체 작업 조회
        monthly_filter = filters.and_(filters.person_not_empty(), *filters.date_between(first_day, last_day))
        items = await self._fetch_items(monthly_filter, filters.DATE_ASC, None)

        # 2. 진행업무 / 완료업무 (진행률 0%는 제외)
        in_progress = [item for item in items if 0 < item.progress_rate < 100]
        completed = [item for item in items if item.progress_rate == 100]

        # 3. 공수 집계 (근태 반영, 주간 보고서와 같은 이번 주 월요일 ~ 기준일)
        monday, _ = self.calendar.this_week_monday_to_today(target)
        summary = calculate_man_hour_summary(items, self.members, self.calendar, monday, target)

        return MonthlyReport(
            date=target,
            title=f"{self.team_name} 월간업무 보고 ({first_day.month}월)",
            man_hour_summary=summary,
            man_hour_by_person=man_hour_by_person_with_leave(items, self.members),
            tasks=ReportTasks(in_progress=self._group(in_progress), completed=self._group(completed)),
            created_at=self._now(),
        )

    # ========================================
    # 전체
    # ========================================
    async def generate_reports(self, target: Optional[date] = None) -> ReportBundle:
        """
        기준일에 해당하는 보고서를 한 번에 생성

        휴일이면 보고서 없이 판단 결과만 반환합니다.
        한 기간이라도 실패하면 예외가 그대로 전파됩니다.
        """
        target = target or self.calendar.today()
        report_types = self.determine_report_types(target)
        bundle = ReportBundle(report_types=report_types)

        if report_types.is_holiday:
            logger.info("휴일이므로 보고서를 생성하지 않습니다: %s", target)
            return bundle

        if report_types.should_generate_daily:
            bundle.daily = await self.generate_daily_report(target)
        if report_types.should_generate_weekly:
            bundle.weekly = await self.generate_weekly_report(target)
        if report_types.should_generate_monthly:
            bundle.monthly = await self.generate_monthly_report(target)
        return bundle


class MonthlyTaskService:
    """월별 업무 목록 조회 (엑셀 내보내기용)"""

    def __init__(self, notion, members: MemberDirectory):
        self.notion = notion
        self.members = members

    async def list_tasks(self, year: int, month: int) -> MonthlyTaskList:
        """
        해당 월에 걸친 모든 업무 조회

        Raises:
            ValueError: year/month 값이 올바르지 않은 경우
        """
        if not 1 <= month <= 12 or year < 1:
            raise ValueError("올바른 year, month 값을 입력해주세요.")

        first_day = date(year, month, 1)
        last_day = date(year, month, monthrange(year, month)[1])

        raws = await self.notion.query_all(filters.and_(*filters.date_between(first_day, last_day)), None)
        tasks = transform_records(raws, self.members, LISTING_POLICY)
        logger.info("월별 업무 목록 조회: %d-%02d, %d건", year, month, len(tasks))

        return MonthlyTaskList(year=year, month=month, tasks=tasks, total=len(tasks))

    def tasks_by_member(self, task_list: MonthlyTaskList) -> Dict[str, List[ReportItem]]:
        """
        팀원별 업무 목록

        완료일(end, 없으면 start)이 해당 월인 업무만 포함하며,
        회의/기타 그룹은 뒤로 보내고 완료일 오름차순으로 정렬합니다.
        """
        result = {}
        for name in self.members.names():
            tasks = [
                task for task in task_list.tasks
                if task.person == name
                and task.date.effective_end.year == task_list.year
                and task.date.effective_end.month == task_list.month
            ]
            tasks.sort(key=lambda t: (t.group in LISTING_LOW_PRIORITY_GROUPS, t.date.effective_end))
            result[name] = tasks
        return result
