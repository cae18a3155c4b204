"""
업무 그룹화 및 정렬

그룹 -> 서브그룹 -> 항목 순으로 묶고 보고서 표시 순서대로 정렬합니다.
"""
import math
from dataclasses import dataclass, field
from typing import Dict, List, Sequence, Tuple

from cube_report.domain.report.constants import (
    HIGH_PRIORITY_GROUPS,
    LOW_PRIORITY_GROUPS,
    LOWEST_PRIORITY_GROUPS,
    SECOND_PRIORITY_GROUPS,
    SUB_GROUP_ORDER,
)
from cube_report.domain.report.members import MemberDirectory
from cube_report.domain.report.schemas import (
    DisplayItem,
    GroupedTaskList,
    GroupTasks,
    ReportItem,
    SubGroupTasks,
)


@dataclass(frozen=True)
class GroupOrder:
    """그룹/서브그룹 정렬 규칙"""
    high: Sequence[str] = field(default_factory=lambda: tuple(HIGH_PRIORITY_GROUPS))
    second: Sequence[str] = field(default_factory=lambda: tuple(SECOND_PRIORITY_GROUPS))
    low: Sequence[str] = field(default_factory=lambda: tuple(LOW_PRIORITY_GROUPS))
    lowest: Sequence[str] = field(default_factory=lambda: tuple(LOWEST_PRIORITY_GROUPS))
    sub_groups: Sequence[str] = field(default_factory=lambda: tuple(SUB_GROUP_ORDER))

    def group_key(self, group: str) -> Tuple[int, int, tuple]:
        """
        그룹 정렬 키

        1. high  2. second  3. 그 외(가나다순)  4. low  5. lowest
        이름이 지정된 단계 안에서는 목록 순서를 따릅니다.
        """
        for tier, names in ((1, self.high), (2, self.second), (4, self.low), (5, self.lowest)):
            if group in names:
                return tier, list(names).index(group), ()
        return 3, 0, collation_key(group)

    def sub_group_key(self, sub_group: str) -> Tuple[int, int, tuple]:
        """목록에 있는 서브그룹은 목록 순서, 없는 서브그룹은 그 뒤에 가나다순"""
        if sub_group in self.sub_groups:
            return 0, list(self.sub_groups).index(sub_group), ()
        return 1, 0, collation_key(sub_group)


DEFAULT_GROUP_ORDER = GroupOrder()


def _script_rank(char: str) -> int:
    """공백/기호 -> 숫자 -> 한글 -> 한자 -> 라틴 및 기타 문자"""
    code = ord(char)
    if not char.isalnum():
        return 0
    if char.isdigit():
        return 1
    if 0xAC00 <= code <= 0xD7A3 or 0x1100 <= code <= 0x11FF or 0x3130 <= code <= 0x318F:
        return 2
    if 0x4E00 <= code <= 0x9FFF:
        return 3
    return 4


def collation_key(text: str) -> Tuple[Tuple[int, str], ...]:
    """
    한국어 정렬 비교 키

    한글을 라틴 문자보다 앞에 두고, 같은 문자군 안에서는 대소문자 구분 없이 비교합니다.
    (한글 음절은 코드포인트 순서가 가나다순)
    """
    return tuple((_script_rank(char), char.casefold()) for char in text)


def round_half_up(value: float) -> int:
    """사사오입 반올림 (49.5 -> 50)"""
    return int(math.floor(value + 0.5))


def to_display_item(item: ReportItem) -> DisplayItem:
    """진행률이 0보다 클 때만 progress 표시"""
    return DisplayItem(
        title=item.title,
        person=item.person,
        progress=round_half_up(item.progress_rate) if item.progress_rate > 0 else None,
        man_hour=item.man_hour,
        pms_link=item.pms_link,
    )


def group_by_project_and_sub_group(
    items: Sequence[ReportItem],
    members: MemberDirectory,
    order: GroupOrder = DEFAULT_GROUP_ORDER,
) -> List[GroupedTaskList]:
    """
    프로젝트(그룹)와 서브그룹별로 업무를 묶고 정렬

    Args:
        items: 업무 항목
        members: 담당자 디렉터리 (담당자 우선순위 정렬용)
        order: 그룹/서브그룹 정렬 규칙

    Returns:
        [{group, subGroup, items}] 목록
    """
    # 1. 그룹 -> 서브그룹 버킷
    buckets: Dict[str, Dict[str, List[ReportItem]]] = {}
    for item in items:
        buckets.setdefault(item.group, {}).setdefault(item.sub_group, []).append(item)

    # 2. 정렬하며 평탄화
    result = []
    for group in sorted(buckets, key=order.group_key):
        sub_groups = buckets[group]
        for sub_group in sorted(sub_groups, key=order.sub_group_key):
            # 진행률 내림차순 -> 담당자 우선순위 -> 이름 가나다순
            sorted_items = sorted(
                sub_groups[sub_group],
                key=lambda r: (-r.progress_rate, members.priority_of(r.person), collation_key(r.person)),
            )
            result.append(
                GroupedTaskList(
                    group=group,
                    sub_group=sub_group,
                    items=[to_display_item(r) for r in sorted_items],
                )
            )
    return result


def group_tasks_by_group(tasks: Sequence[GroupedTaskList]) -> List[GroupTasks]:
    """같은 그룹의 서브그룹 목록을 하나로 묶기 (입력 순서 유지)"""
    grouped: Dict[str, GroupTasks] = {}
    for task in tasks:
        if task.group not in grouped:
            grouped[task.group] = GroupTasks(group=task.group)
        grouped[task.group].sub_groups.append(SubGroupTasks(sub_group=task.sub_group, items=task.items))
    return list(grouped.values())
