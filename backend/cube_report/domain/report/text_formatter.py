"""보고서 데이터를 텍스트로 변환"""
from typing import List, Sequence

from cube_report.domain.report.calendar import format_short_date, most_recent_wednesday, week_of_month_label
from cube_report.domain.report.constants import HOURS_PER_WORKING_DAY
from cube_report.domain.report.grouping import group_tasks_by_group
from cube_report.domain.report.schemas import (
    DailyReport,
    GroupedTaskList,
    GroupHours,
    MonthlyReport,
    PersonSummary,
    WeeklyReport,
)


IN_PROGRESS = "진행업무"
PLANNED = "예정업무"
COMPLETED = "완료업무"


def format_number(value: float) -> str:
    """정수형 실수는 소수점 없이 표시 (8.0 -> 8)"""
    if float(value).is_integer():
        return str(int(value))
    return str(value)


def format_report_group_title(report_type: str, is_weekly: bool = False) -> str:
    """
    보고서 그룹 제목

    Args:
        report_type: '진행업무' | '예정업무' | '완료업무'
        is_weekly: 주간 보고서 여부
    """
    if is_weekly:
        return "금주 진행 사항" if report_type == IN_PROGRESS else "차주 계획 사항"

    titles = {
        IN_PROGRESS: "업무 진행 사항",
        PLANNED: "업무 계획 사항",
        COMPLETED: "완료된 업무",
    }
    return titles.get(report_type, report_type)


def format_item_line(title: str, person: str, progress=None) -> str:
    """'title(person, P%)' 형식"""
    progress_text = f", {progress}%" if progress is not None else ""
    return f"{title}({person}{progress_text})"


class ReportTextFormatter:
    """보고서 텍스트 변환기"""

    def __init__(self, team_name: str = "큐브 파트"):
        self.team_name = team_name

    def stringify_man_hour_summary(self, summary: Sequence[PersonSummary]) -> str:
        """[인원별 공수] - 이름: H m/h (작성 완료)"""
        lines = ["[인원별 공수]"]
        for person in summary:
            line = f"- {person.name}: {format_number(person.hours)} m/h"
            if person.is_completed:
                line += " (작성 완료)"
            lines.append(line)
        return "\n".join(lines) + "\n"

    def stringify_weekly_man_hour_summary(self, summary: Sequence[PersonSummary]) -> str:
        """[인원별 공수] - 이름: H m/h (근태 정보)"""
        lines = ["[인원별 공수]"]
        for person in summary:
            line = f"- {person.name}: {format_number(person.hours)} m/h"
            if person.leave_info:
                line += f" ({person.leave_info})"
            lines.append(line)
        return "\n".join(lines) + "\n"

    def stringify_man_hour_by_group(self, groups: Sequence[GroupHours]) -> str:
        """[그룹별 공수] - 그룹: H m/h, D m/d (D = H / 8, 소수점 1자리)"""
        lines = ["[그룹별 공수]"]
        for group in groups:
            man_day = round(group.hours / HOURS_PER_WORKING_DAY, 1)
            lines.append(f"- {group.group}: {format_number(group.hours)} m/h, {format_number(man_day)} m/d")
        return "\n".join(lines) + "\n"

    def stringify_tasks(self, tasks: Sequence[GroupedTaskList], report_type: str, is_weekly: bool = False) -> str:
        """
        업무 목록을 번호 매긴 텍스트로 변환

        진행률은 진행업무에만 표시합니다.
        """
        lines: List[str] = [format_report_group_title(report_type, is_weekly)]
        show_progress = report_type == IN_PROGRESS

        for index, group in enumerate(group_tasks_by_group(tasks), start=1):
            lines.append(f"{index}. {group.group}")
            for sub_group in group.sub_groups:
                lines.append(f"[{sub_group.sub_group}]")
                for item in sub_group.items:
                    progress = item.progress if show_progress else None
                    lines.append(f"- {format_item_line(item.title, item.person, progress)}")
            lines.append("")

        return "\n".join(lines) + "\n"

    def daily_page_title(self, report: DailyReport) -> str:
        return f"{self.team_name} 일일업무 보고 ({format_short_date(report.date)})"

    def weekly_page_title(self, report: WeeklyReport) -> str:
        return f"{week_of_month_label(report.date)} {self.team_name} 주간업무 보고"

    def monthly_page_title(self, report: MonthlyReport) -> str:
        """수요일 기준 월로 제목 생성 (예: 2025년 10월 큐브 파트 월간업무 보고)"""
        anchor = most_recent_wednesday(report.date)
        return f"{anchor.year}년 {anchor.month}월 {self.team_name} 월간업무 보고"

    def stringify_daily_report(self, report: DailyReport) -> str:
        text = f"{self.daily_page_title(report)}\n\n"
        text += self.stringify_tasks(report.tasks.in_progress, IN_PROGRESS)
        text += "\n"
        text += self.stringify_tasks(report.tasks.planned or [], PLANNED)
        return text

    def stringify_weekly_report(self, report: WeeklyReport) -> str:
        text = f"{self.weekly_page_title(report)}\n\n"
        text += self.stringify_weekly_man_hour_summary(report.man_hour_summary)
        text += "\n"
        text += self.stringify_man_hour_by_group(report.man_hour_by_group)
        text += "\n"
        text += self.stringify_tasks(report.tasks.in_progress, IN_PROGRESS, is_weekly=True)
        return text

    def stringify_monthly_report(self, report: MonthlyReport) -> str:
        text = f"{self.monthly_page_title(report)}\n\n"
        text += self.stringify_tasks(report.tasks.in_progress, IN_PROGRESS)
        text += "\n"
        text += self.stringify_tasks(report.tasks.completed or [], COMPLETED)
        return text
