"""중복 업무 제거 및 공수 합산"""
import re
from typing import Dict, Iterable, List

from cube_report.domain.report.schemas import ReportItem


_WHITESPACE = re.compile(r"\s+")


def distinct_key(item: ReportItem) -> str:
    """
    중복 판단 키

    PMS 번호가 있으면 "담당자-PMS번호", 없으면 "담당자-공백 제거한 제목"
    """
    if item.pms_number is not None:
        return f"{item.person}-{format_pms_number(item.pms_number)}"
    return f"{item.person}-{_WHITESPACE.sub('', item.title)}"


def format_pms_number(value) -> str:
    """1234.0 같은 정수형 실수는 1234로 표시"""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def distinct_items(items: Iterable[ReportItem]) -> List[ReportItem]:
    """
    중복 항목을 하나로 합치고 공수를 합산

    같은 키의 항목 중 유효 날짜(end, 없으면 start)가 가장 늦은 항목의 속성을 유지하며
    (같은 날짜면 먼저 나온 항목 유지), 공수는 같은 키 전체의 합계로 덮어씁니다.
    결과 순서는 키가 처음 등장한 순서입니다.
    """
    unique: Dict[str, ReportItem] = {}
    man_hour_sums: Dict[str, float] = {}

    for item in items:
        key = distinct_key(item)
        man_hour_sums[key] = man_hour_sums.get(key, 0) + (item.man_hour or 0)

        existing = unique.get(key)
        if existing is None or item.date.effective_end > existing.date.effective_end:
            unique[key] = item

    return [
        item.model_copy(update={"man_hour": man_hour_sums[key]})
        for key, item in unique.items()
    ]
