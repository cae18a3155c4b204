"""
테스트 공통 fixture

- 고정 시각/공휴일 달력
- 테스트용 담당자 디렉터리
- Notion 원본 페이지 생성 헬퍼
- 메모리 기반 Notion 서비스
"""
from datetime import date, datetime
from itertools import count
from typing import Any, Dict, List, Optional, Sequence
from zoneinfo import ZoneInfo

import pytest

from cube_report.core.exceptions import UpstreamServiceError
from cube_report.domain.report.calendar import WorkCalendar
from cube_report.domain.report.members import Member, MemberDirectory


SEOUL = ZoneInfo("Asia/Seoul")

KIM = "kim@cube.test"
LEE = "lee@cube.test"
PARK = "park@cube.test"


def make_calendar(today: date = date(2025, 11, 12), holidays: Sequence[date] = ()) -> WorkCalendar:
    """today 오전 10시(서울)로 고정된 달력"""
    holiday_set = set(holidays)
    return WorkCalendar(
        holiday_predicate=lambda y, m, d: date(y, m, d) in holiday_set,
        clock=lambda: datetime(today.year, today.month, today.day, 10, 0, tzinfo=SEOUL),
        timezone="Asia/Seoul",
    )


_page_ids = count(1)


def make_page(
    title: Optional[str] = "업무",
    start: Optional[str] = "2025-11-12",
    end: Optional[str] = None,
    people: Sequence[str] = (KIM,),
    group: Optional[str] = "kt cloud",
    sub_group: Optional[str] = "구현",
    progress: Optional[float] = 0.5,
    man_hour: Optional[float] = 4,
    pms_number: Optional[int] = None,
    pms_link: Optional[str] = None,
    pms_url: Optional[str] = None,
    customer: Optional[str] = None,
) -> Dict[str, Any]:
    """Notion 데이터베이스 쿼리 결과와 같은 구조의 페이지"""
    properties: Dict[str, Any] = {
        "Name": {"type": "title", "title": [{"plain_text": title, "text": {"content": title}}] if title else []},
        "Date": {"type": "date", "date": {"start": start, "end": end} if start else None},
        "Person": {"type": "people", "people": [{"object": "user", "person": {"email": email}} for email in people]},
        "Group": {"type": "select", "select": {"name": group} if group else None},
        "SubGroup": {"type": "select", "select": {"name": sub_group} if sub_group else None},
        "Customer": {"type": "select", "select": {"name": customer} if customer else None},
        "Progress": {"type": "number", "number": progress},
        "ManHour": {"type": "number", "number": man_hour},
        "PmsNumber": {"type": "number", "number": pms_number},
        "PmsLink": {"type": "formula", "formula": {"type": "string", "string": pms_link}},
    }
    if pms_url is not None:
        properties["PmsLink"]["url"] = pms_url
    return {"object": "page", "id": f"page-{next(_page_ids)}", "properties": properties}


class FakeNotionService:
    """query_all / create_page / append_batches를 기록하는 메모리 Notion 서비스"""

    def __init__(self, pages: Optional[List[Dict[str, Any]]] = None, responder=None, fail: bool = False):
        self.pages = pages or []
        self.responder = responder
        self.fail = fail
        self.queries: List[Dict[str, Any]] = []
        self.created: List[Dict[str, Any]] = []
        self.appended: List[Dict[str, Any]] = []

    async def query_all(self, filter_dict=None, sorts=None):
        self.queries.append({"filter": filter_dict, "sorts": sorts})
        if self.fail:
            raise UpstreamServiceError("Notion 데이터베이스 조회", "unauthorized")
        if self.responder is not None:
            return self.responder(filter_dict)
        return list(self.pages)

    async def create_page(self, properties, children, icon=None):
        page_id = f"report-{len(self.created) + 1}"
        self.created.append({"id": page_id, "properties": properties, "children": list(children), "icon": icon})
        return {"id": page_id, "url": f"https://www.notion.so/{page_id}"}

    async def append_blocks(self, page_id, children):
        self.appended.append({"page_id": page_id, "children": list(children)})
        return {"results": list(children)}

    async def append_batches(self, page_id, batches):
        appended = 0
        for batch in batches:
            if not batch:
                continue
            await self.append_blocks(page_id, batch)
            appended += len(batch)
        return appended


@pytest.fixture
def members() -> MemberDirectory:
    return MemberDirectory({
        KIM: Member("김철수", 1),
        LEE: Member("이영희", 2),
        PARK: Member("박민수", 3),
    })


@pytest.fixture
def calendar() -> WorkCalendar:
    return make_calendar()
