"""
Notion 보고서 페이지 구성

보고서 데이터를 페이지 속성(title, Date, Tags), 아이콘, 본문 블록,
개인별 공수 블록으로 변환합니다.
"""
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, List, Optional, Sequence

from cube_report.domain.report.constants import MEETING_GROUP
from cube_report.domain.report.dedup import format_pms_number
from cube_report.domain.report.grouping import group_tasks_by_group
from cube_report.domain.report.schemas import (
    DailyReport,
    GroupedTaskList,
    ManHourByPerson,
    MonthlyReport,
    ReportItem,
    WeeklyReport,
)
from cube_report.domain.report.text_formatter import (
    COMPLETED,
    IN_PROGRESS,
    PLANNED,
    ReportTextFormatter,
    format_item_line,
    format_number,
    format_report_group_title,
)
from cube_report.reporting import notion_blocks as nb


PERSON_TABLE_HEADER = ["번호", "PMS 관리 번호", "타이틀", "그룹", "진행도", "공수(m/h)"]
SECTION_COLOR = "yellow_background"


@dataclass
class PageContent:
    """생성할 Notion 페이지 내용"""
    title: str
    properties: Dict[str, Any]
    icon: Dict[str, Any]
    blocks: List[nb.Block] = field(default_factory=list)
    person_blocks: List[nb.Block] = field(default_factory=list)


def page_properties(title: str, report_date: date, tag: str) -> Dict[str, Any]:
    return {
        "title": {"title": [{"text": {"content": title}}]},
        "Date": {"date": {"start": report_date.isoformat()}},
        "Tags": {"select": {"name": tag}},
    }


def emoji_icon(emoji: str) -> Dict[str, str]:
    return {"type": "emoji", "emoji": emoji}


def clean_title(title: str) -> str:
    """'#-' 접두사 제거"""
    if title.startswith("#-"):
        return title[2:].strip()
    return title


def pms_cell(item: ReportItem) -> nb.TableCell:
    """PMS 번호 셀 (링크가 있으면 하이퍼링크)"""
    if item.pms_number is None:
        return ""
    text = f"#{format_pms_number(item.pms_number)}"
    if item.pms_link:
        return {"text": text, "link": item.pms_link}
    return text


class ReportPageBuilder:
    """보고서 -> Notion 페이지 내용 변환기"""

    def __init__(self, formatter: Optional[ReportTextFormatter] = None):
        self.formatter = formatter or ReportTextFormatter()

    # ========================================
    # 공통 섹션
    # ========================================
    def grouped_task_blocks(self, tasks: Sequence[GroupedTaskList], show_progress: bool = True) -> List[nb.Block]:
        """번호 매긴 그룹(H3) -> [서브그룹] 단락 -> 항목 글머리표"""
        blocks = []
        for index, group in enumerate(group_tasks_by_group(tasks), start=1):
            blocks.append(nb.heading_3(f"{index}. {group.group}"))
            for sub_group in group.sub_groups:
                blocks.append(nb.paragraph(f"[{sub_group.sub_group}]"))
                for item in sub_group.items:
                    progress = item.progress if show_progress else None
                    blocks.append(nb.bulleted_list_item(format_item_line(item.title, item.person, progress)))
        return blocks

    def person_blocks(self, people: Sequence[ManHourByPerson]) -> List[nb.Block]:
        """
        개인별 공수 및 진행 상황

        인원별 헤딩과 공수가 있는 항목의 표를 만듭니다. 회의 그룹은 표의 가장 아래에 둡니다.
        """
        if not people:
            return []

        blocks = [nb.heading_2("개인별 공수 및 진행 상황")]
        for person in people:
            blocks.append(nb.heading_3(
                f"{person.name} - total: {format_number(person.total_man_hour)}m/h, {len(person.reports)}건"
            ))

            reports = [report for report in person.reports if report.man_hour > 0]
            reports.sort(key=lambda report: report.group == MEETING_GROUP)
            if not reports:
                continue

            rows: List[List[nb.TableCell]] = [list(PERSON_TABLE_HEADER)]
            for index, report in enumerate(reports, start=1):
                rows.append([
                    str(index),
                    pms_cell(report),
                    clean_title(report.title),
                    report.group,
                    f"{format_number(report.progress_rate)}%",
                    format_number(report.man_hour),
                ])
            blocks.append(nb.table(rows))
        return blocks

    # ========================================
    # 기간별 페이지
    # ========================================
    def build_daily(self, report: DailyReport) -> PageContent:
        """일일 보고서: 공수 현황 + 진행/예정업무 코드 블록"""
        title = self.formatter.daily_page_title(report)

        blocks = [nb.heading_2("일일 공수 현황")]
        blocks.extend(nb.paragraphs(self.formatter.stringify_man_hour_summary(report.man_hour_summary)))
        blocks.extend(nb.code_blocks(self.formatter.stringify_tasks(report.tasks.in_progress, IN_PROGRESS)))
        blocks.extend(nb.code_blocks(self.formatter.stringify_tasks(report.tasks.planned or [], PLANNED)))

        return PageContent(
            title=title,
            properties=page_properties(title, report.date, "일간"),
            icon=emoji_icon("📝"),
            blocks=blocks,
            person_blocks=self.person_blocks(report.man_hour_by_person),
        )

    def build_weekly(self, report: WeeklyReport) -> PageContent:
        """주간 보고서: 공수 현황(인원별/그룹별) + 금주 진행 사항"""
        title = self.formatter.weekly_page_title(report)

        blocks = [nb.heading_1(title), nb.heading_2("주간 공수 현황")]
        blocks.extend(nb.paragraphs(self.formatter.stringify_weekly_man_hour_summary(report.man_hour_summary)))
        blocks.extend(nb.paragraphs(self.formatter.stringify_man_hour_by_group(report.man_hour_by_group)))
        blocks.append(nb.heading_2(format_report_group_title(IN_PROGRESS, is_weekly=True), SECTION_COLOR))
        blocks.extend(self.grouped_task_blocks(report.tasks.in_progress))

        return PageContent(
            title=title,
            properties=page_properties(title, report.date, "주간"),
            icon=emoji_icon("🔶"),
            blocks=blocks,
            person_blocks=self.person_blocks(report.man_hour_by_person),
        )

    def build_monthly(self, report: MonthlyReport) -> PageContent:
        """월간 보고서: 진행 중인 업무 / 완료된 업무"""
        title = self.formatter.monthly_page_title(report)

        blocks = [nb.heading_1(title), nb.heading_2("진행 중인 업무", SECTION_COLOR)]
        blocks.extend(self.grouped_task_blocks(report.tasks.in_progress))
        blocks.append(nb.divider())
        blocks.append(nb.heading_2(format_report_group_title(COMPLETED), SECTION_COLOR))
        blocks.extend(self.grouped_task_blocks(report.tasks.completed or []))

        return PageContent(
            title=title,
            properties=page_properties(title, report.date, "월간"),
            icon=emoji_icon("📊"),
            blocks=blocks,
            person_blocks=self.person_blocks(report.man_hour_by_person),
        )
