"""Notion 데이터베이스 쿼리 필터/정렬 빌더"""
from datetime import date
from typing import Any, Dict, List

from cube_report.domain.report.constants import PROP_DATE, PROP_PERSON


Filter = Dict[str, Any]
Sorts = List[Dict[str, str]]

CREATED_TIME_DESC: Sorts = [{"timestamp": "created_time", "direction": "descending"}]
DATE_ASC: Sorts = [{"property": PROP_DATE, "direction": "ascending"}]


def and_(*conditions: Filter) -> Filter:
    return {"and": list(conditions)}


def person_not_empty() -> Filter:
    return {"property": PROP_PERSON, "people": {"is_not_empty": True}}


def date_on_or_after(value: date) -> Filter:
    return {"property": PROP_DATE, "date": {"on_or_after": value.isoformat()}}


def date_on_or_before(value: date) -> Filter:
    return {"property": PROP_DATE, "date": {"on_or_before": value.isoformat()}}


def date_this_week() -> Filter:
    """Notion 서버 기준 이번 주"""
    return {"property": PROP_DATE, "date": {"this_week": {}}}


def date_between(start: date, end: date) -> List[Filter]:
    return [date_on_or_after(start), date_on_or_before(end)]
