"""
근태(연차/반차) 판단 및 처리

- 연차: Group='기타'이고, (title에 '연차' 포함 또는 subGroup='연차')
- 반차: Group='기타'이고, (title에 '반차' 포함 또는 subGroup='반차')
"""
from datetime import timedelta
from typing import Dict, Iterable, List, Optional

from cube_report.domain.report.calendar import day_of_week_korean
from cube_report.domain.report.constants import LEAVE_GROUP
from cube_report.domain.report.schemas import LeaveInfo, LeaveType, ReportItem


LEAVE_DEDUCTION_HOURS = {
    LeaveType.FULL_DAY: 8,
    LeaveType.HALF_DAY: 4,
}


def leave_type(item: ReportItem) -> Optional[LeaveType]:
    """항목의 근태 유형 반환 (근태가 아니면 None)"""
    if item.group != LEAVE_GROUP:
        return None

    title = (item.title or "").lower()

    # 반차를 먼저 확인
    if "반차" in title or item.sub_group == "반차":
        return LeaveType.HALF_DAY
    if "연차" in title or item.sub_group == "연차":
        return LeaveType.FULL_DAY
    return None


def is_leave(item: ReportItem) -> bool:
    """연차/반차 항목인지 확인"""
    return leave_type(item) is not None


def leave_deduction(kind: LeaveType) -> int:
    """근태 유형별 공제 공수 (연차 8, 반차 4)"""
    return LEAVE_DEDUCTION_HOURS[kind]


def expand_leave_info(item: ReportItem) -> List[LeaveInfo]:
    """
    항목에서 하루 단위 근태 정보를 추출

    기간으로 입력된 근태(예: 11/3 ~ 11/5 연차)는 주말을 포함해
    날짜별 LeaveInfo로 분리합니다.
    """
    kind = leave_type(item)
    if kind is None:
        return []

    start = item.date.start
    end = item.date.end
    if end is None or end == start:
        return [LeaveInfo(date=start, type=kind, day_of_week=day_of_week_korean(start))]

    result = []
    current = start
    while current <= end:
        result.append(LeaveInfo(date=current, type=kind, day_of_week=day_of_week_korean(current)))
        current += timedelta(days=1)
    return result


def leave_info_by_person(items: Iterable[ReportItem]) -> Dict[str, List[LeaveInfo]]:
    """담당자별 근태 정보 (날짜 오름차순)"""
    result: Dict[str, List[LeaveInfo]] = {}
    for item in items:
        infos = expand_leave_info(item)
        if infos:
            result.setdefault(item.person, []).extend(infos)

    for infos in result.values():
        infos.sort(key=lambda info: info.date)
    return result


def total_leave_deduction(infos: Iterable[LeaveInfo]) -> int:
    """근태 목록의 총 공제 공수"""
    return sum(leave_deduction(info.type) for info in infos)


def format_leave_text(infos: Optional[List[LeaveInfo]]) -> Optional[str]:
    """
    근태 정보를 텍스트로 변환

    예: "11/03(월) 연차, 11/04(화) 연차"
    """
    if not infos:
        return None
    return ", ".join(
        f"{info.date.strftime('%m/%d')}({info.day_of_week}) {info.type.value}" for info in infos
    )
