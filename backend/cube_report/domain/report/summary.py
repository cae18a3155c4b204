"""
공수 집계

인원별/그룹별 공수와 근태를 반영한 작성 완료 여부를 계산합니다.
"""
from datetime import date
from typing import Dict, List, Sequence

from cube_report.domain.report.calendar import WorkCalendar
from cube_report.domain.report.constants import HOURS_PER_WORKING_DAY
from cube_report.domain.report.grouping import collation_key
from cube_report.domain.report.leave import (
    format_leave_text,
    is_leave,
    leave_info_by_person,
    total_leave_deduction,
)
from cube_report.domain.report.members import MemberDirectory
from cube_report.domain.report.schemas import GroupHours, ManHourByPerson, PersonSummary, ReportItem


def _person_sort_key(members: MemberDirectory):
    return lambda name: (members.priority_of(name), collation_key(name))


def create_man_hour_by_person(items: Sequence[ReportItem], members: MemberDirectory) -> List[ManHourByPerson]:
    """
    개인별 공수 및 진행 상황

    담당자별로 항목을 묶고 공수를 합산합니다. 담당자 우선순위 -> 이름순 정렬.
    """
    by_person: Dict[str, List[ReportItem]] = {}
    for item in items:
        by_person.setdefault(item.person, []).append(item)

    key = _person_sort_key(members)
    return [
        ManHourByPerson(
            name=name,
            total_man_hour=sum(item.man_hour for item in by_person[name]),
            reports=by_person[name],
        )
        for name in sorted(by_person, key=key)
    ]


def man_hour_by_person_with_leave(items: Sequence[ReportItem], members: MemberDirectory) -> List[ManHourByPerson]:
    """개인별 공수에 근태 정보 추가"""
    leave_map = leave_info_by_person(items)
    result = []
    for person in create_man_hour_by_person(items, members):
        infos = leave_map.get(person.name)
        result.append(person.model_copy(update={"leave_info": infos or None}))
    return result


def calculate_man_hour_summary(
    items: Sequence[ReportItem],
    members: MemberDirectory,
    calendar: WorkCalendar,
    start: date,
    end: date,
) -> List[PersonSummary]:
    """
    인원별 공수 요약 (근태 반영)

    연차/반차 항목은 공수 합계에서 제외하고,
    기대 공수 = 기간 근무일수 * 8 - 근태 공제 공수 이상이면 작성 완료로 표시합니다.

    Args:
        items: 중복 제거된 업무 항목
        members: 담당자 디렉터리
        calendar: 근무일 계산기
        start: 기대 공수 계산 시작일
        end: 기대 공수 계산 종료일 (포함)
    """
    # 1. 기본 기대 공수
    base_expected = calendar.working_days_count(start, end) * HOURS_PER_WORKING_DAY

    # 2. 근태 정보
    leave_map = leave_info_by_person(items)

    # 3. 인원별 공수 합계 (근태 항목만 있는 인원은 요약에서 제외)
    hours: Dict[str, float] = {}
    for item in items:
        if is_leave(item):
            continue
        hours[item.person] = hours.get(item.person, 0) + item.man_hour

    # 4. 작성 완료 여부 및 정렬
    summaries = []
    for name in sorted(hours, key=_person_sort_key(members)):
        infos = leave_map.get(name, [])
        expected = base_expected - total_leave_deduction(infos)
        summaries.append(
            PersonSummary(
                name=name,
                hours=hours[name],
                is_completed=hours[name] >= expected,
                leave_info=format_leave_text(infos),
            )
        )
    return summaries


def man_hour_by_group(items: Sequence[ReportItem]) -> List[GroupHours]:
    """그룹별 공수 합계 (공수 내림차순)"""
    totals: Dict[str, float] = {}
    for item in items:
        totals[item.group] = totals.get(item.group, 0) + item.man_hour

    ranked = sorted(totals.items(), key=lambda pair: -pair[1])
    return [GroupHours(group=group, hours=value) for group, value in ranked]
