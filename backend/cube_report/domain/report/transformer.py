"""
Notion 레코드 변환

Notion 데이터베이스 원본 페이지(dict)를 ReportItem으로 정규화합니다.
호출 위치별로 다른 기본값/진행률 처리 규칙은 TransformPolicy로 명시합니다.
"""
import logging
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Any, Dict, Iterable, List, Optional

from pydantic import ValidationError

from cube_report.domain.report.calendar import parse_date
from cube_report.domain.report.constants import (
    PROP_CUSTOMER,
    PROP_DATE,
    PROP_GROUP,
    PROP_MAN_HOUR,
    PROP_PERSON,
    PROP_PMS_LINK,
    PROP_PMS_NUMBER,
    PROP_PROGRESS,
    PROP_SUB_GROUP,
    PROP_TITLE_CANDIDATES,
    UNASSIGNED_PERSON,
)
from cube_report.domain.report.members import MemberDirectory
from cube_report.domain.report.schemas import DateRange, ReportItem


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TransformPolicy:
    """레코드 변환 규칙"""
    default_group: str
    default_sub_group: str
    rescale_progress: bool  # Progress(0~1)를 0~100으로 변환할지 여부


# 일일/주간/월간 보고서 파이프라인
PRIMARY_POLICY = TransformPolicy(default_group="기타", default_sub_group="일반", rescale_progress=True)

# 월별 업무 목록 조회
LISTING_POLICY = TransformPolicy(default_group="미분류", default_sub_group="미분류", rescale_progress=False)


# ========================================
# 다중 담당자 처리
# ========================================
def _people(raw: Dict[str, Any]) -> List[Dict[str, Any]]:
    person_prop = (raw.get("properties") or {}).get(PROP_PERSON) or {}
    return person_prop.get("people") or []


def expand_multiple_assignees(raws: Iterable[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """
    담당자가 여러 명인 레코드를 담당자별 레코드로 분리

    원본은 변경하지 않고, Person 속성만 단일 담당자로 바꾼 새 dict를 만듭니다.
    담당자가 1명 이하인 레코드는 그대로 반환합니다.
    """
    result = []
    for raw in raws:
        people = _people(raw)
        if len(people) <= 1:
            result.append(raw)
            continue

        properties = raw.get("properties") or {}
        for person in people:
            person_prop = {**properties[PROP_PERSON], "people": [person]}
            result.append({**raw, "properties": {**properties, PROP_PERSON: person_prop}})
    return result


# ========================================
# 속성 추출
# ========================================
def extract_title(properties: Dict[str, Any]) -> str:
    """Name/Title/title 속성의 첫 번째 텍스트"""
    for name in PROP_TITLE_CANDIDATES:
        prop = properties.get(name)
        if not prop:
            continue
        segments = prop.get("title") or []
        if segments:
            first = segments[0]
            return first.get("plain_text") or (first.get("text") or {}).get("content") or ""
        return ""
    return ""


def extract_email(properties: Dict[str, Any]) -> Optional[str]:
    """첫 번째 담당자의 이메일"""
    people = (properties.get(PROP_PERSON) or {}).get("people") or []
    if not people:
        return None
    first = people[0] or {}
    return (first.get("person") or {}).get("email") or first.get("email")


def extract_select(properties: Dict[str, Any], name: str) -> Optional[str]:
    select = (properties.get(name) or {}).get("select")
    if not select:
        return None
    return select.get("name") or None


def extract_number(properties: Dict[str, Any], name: str) -> Optional[float]:
    return (properties.get(name) or {}).get("number")


def extract_pms_link(properties: Dict[str, Any]) -> Optional[str]:
    """PmsLink: formula 문자열 우선, 없으면 url"""
    prop = properties.get(PROP_PMS_LINK) or {}
    formula = prop.get("formula") or {}
    return formula.get("string") or prop.get("url") or None


def extract_date_range(properties: Dict[str, Any]) -> Optional[DateRange]:
    date_value = (properties.get(PROP_DATE) or {}).get("date")
    if not date_value or not date_value.get("start"):
        return None
    end = date_value.get("end")
    return DateRange(
        start=parse_date(date_value["start"]),
        end=parse_date(end) if end else None,
    )


# ========================================
# 변환
# ========================================
def transform_record(
    raw: Dict[str, Any],
    members: MemberDirectory,
    policy: TransformPolicy = PRIMARY_POLICY,
    reference_date: Optional[date] = None,
) -> Optional[ReportItem]:
    """
    Notion 페이지 1건을 ReportItem으로 변환

    Args:
        raw: Notion 페이지 원본
        members: 담당자 디렉터리
        policy: 변환 규칙
        reference_date: isToday/isTomorrow 계산 기준일 (없으면 둘 다 False)

    Returns:
        ReportItem, 제목이나 시작일이 없는 레코드는 None
    """
    properties = raw.get("properties") or {}

    title = extract_title(properties)
    if not title:
        logger.debug("제목 없는 레코드 제외: %s", raw.get("id"))
        return None

    try:
        date_range = extract_date_range(properties)
    except ValueError:
        logger.debug("날짜 형식 오류 레코드 제외: %s", raw.get("id"))
        return None
    if date_range is None:
        logger.debug("날짜 없는 레코드 제외: %s", raw.get("id"))
        return None

    email = extract_email(properties)
    person = members.name_of(email) or UNASSIGNED_PERSON

    progress = extract_number(properties, PROP_PROGRESS) or 0
    if policy.rescale_progress:
        progress = progress * 100

    is_today = False
    is_tomorrow = False
    if reference_date is not None:
        is_today = date_range.contains(reference_date)
        is_tomorrow = date_range.contains(reference_date + timedelta(days=1))

    try:
        return ReportItem(
            id=raw.get("id") or "",
            title=title,
            customer=extract_select(properties, PROP_CUSTOMER),
            group=extract_select(properties, PROP_GROUP) or policy.default_group,
            sub_group=extract_select(properties, PROP_SUB_GROUP) or policy.default_sub_group,
            person=person,
            progress_rate=progress,
            date=date_range,
            is_today=is_today,
            is_tomorrow=is_tomorrow,
            man_hour=extract_number(properties, PROP_MAN_HOUR) or 0,
            pms_number=extract_number(properties, PROP_PMS_NUMBER),
            pms_link=extract_pms_link(properties),
        )
    except ValidationError as e:
        logger.debug("유효하지 않은 레코드 제외: %s (%s)", raw.get("id"), e.errors()[0].get("msg"))
        return None


def transform_records(
    raws: Iterable[Dict[str, Any]],
    members: MemberDirectory,
    policy: TransformPolicy = PRIMARY_POLICY,
    reference_date: Optional[date] = None,
) -> List[ReportItem]:
    """레코드 목록 변환 (변환 실패 레코드 제외)"""
    items = []
    dropped = 0
    for raw in raws:
        item = transform_record(raw, members, policy, reference_date)
        if item is None:
            dropped += 1
            continue
        items.append(item)

    if dropped:
        logger.debug("변환 제외 레코드 %d건", dropped)
    return items
