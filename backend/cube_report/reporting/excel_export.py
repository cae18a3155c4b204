"""
월별 업무 목록 엑셀 내보내기

담당자별 시트에 업무구분/PMS 관리번호/업무 내용/계획 완료일/완료일/M/H/M/D를 기록합니다.
"""
import io
import re
from typing import Dict, List, Sequence

from openpyxl import Workbook
from openpyxl.utils import get_column_letter

from cube_report.domain.report.constants import HOURS_PER_WORKING_DAY
from cube_report.domain.report.dedup import format_pms_number
from cube_report.domain.report.schemas import ReportItem


XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

COLUMNS = [
    ("업무구분", 15),
    ("PMS 관리번호", 15),
    ("업무 내용", 50),
    ("계획 완료일", 12),
    ("완료일", 12),
    ("M/H", 8),
    ("M/D", 8),
]

PMS_COLUMN = 2
_INVALID_SHEET_CHARS = re.compile(r"[\[\]:*?/\\]")


def export_file_name(year: int, month: int, team_name: str = "큐브 파트") -> str:
    """예: 202511_큐브파트_업무목록.xlsx"""
    return f"{year}{month:02d}_{team_name.replace(' ', '')}_업무목록.xlsx"


def sheet_title(name: str) -> str:
    """엑셀 시트명 제한(31자, 일부 특수문자 금지) 적용"""
    return _INVALID_SHEET_CHARS.sub("_", name)[:31] or "Sheet"


def task_row(task: ReportItem) -> List:
    man_day = round(task.man_hour / HOURS_PER_WORKING_DAY, 1)
    pms_text = f"#{format_pms_number(task.pms_number)}" if task.pms_number else "-"
    return [
        task.group,
        pms_text,
        task.title,
        "-",  # 계획 완료일 (데이터 없음)
        task.date.effective_end.isoformat(),
        task.man_hour,
        man_day,
    ]


def build_workbook(tasks_by_member: Dict[str, Sequence[ReportItem]]) -> Workbook:
    """담당자별 시트로 구성된 워크북 생성"""
    workbook = Workbook()
    workbook.remove(workbook.active)

    for name, tasks in tasks_by_member.items():
        sheet = workbook.create_sheet(title=sheet_title(name))
        sheet.append([header for header, _ in COLUMNS])

        for index, (_, width) in enumerate(COLUMNS, start=1):
            sheet.column_dimensions[get_column_letter(index)].width = width

        for row_index, task in enumerate(tasks, start=2):
            sheet.append(task_row(task))

            # PMS 관리번호 하이퍼링크
            if task.pms_number and task.pms_link:
                cell = sheet.cell(row=row_index, column=PMS_COLUMN)
                cell.hyperlink = task.pms_link
                cell.hyperlink.tooltip = f"PMS #{format_pms_number(task.pms_number)}"
                cell.style = "Hyperlink"

    if not workbook.sheetnames:
        workbook.create_sheet(title="업무목록").append([header for header, _ in COLUMNS])
    return workbook


def export_monthly_tasks(tasks_by_member: Dict[str, Sequence[ReportItem]]) -> bytes:
    """워크북을 xlsx 바이트로 반환"""
    output = io.BytesIO()
    build_workbook(tasks_by_member).save(output)
    return output.getvalue()
