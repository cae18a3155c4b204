"""
Reports / Monthly Tasks API 엔드포인트 테스트

Notion 서비스는 메모리 구현으로 대체합니다.
"""
from datetime import date
from urllib.parse import quote

import pytest
from fastapi.testclient import TestClient

from cube_report.api.deps import get_monthly_task_service, get_publisher, get_report_service
from cube_report.core.exceptions import ConfigurationError
from cube_report.domain.report.service import MonthlyTaskService, ReportService
from cube_report.main import app
from cube_report.reporting.publisher import ReportPublisher

from conftest import KIM, LEE, FakeNotionService, make_calendar, make_page


API = "/api/v1"


def pages():
    return [
        make_page(title="API 개발", people=[KIM, LEE], start="2025-11-14", progress=0.5, man_hour=4, pms_number=12,
                  pms_link="https://pms.example.com/12"),
        make_page(title="주간 회의", people=[LEE], start="2025-11-13", group="회의", progress=1.0, man_hour=1),
    ]


@pytest.fixture
def notion():
    return FakeNotionService(pages=pages())


@pytest.fixture
def client(notion, members):
    report_service = ReportService(notion, members, make_calendar(date(2025, 11, 14)))
    app.dependency_overrides[get_report_service] = lambda: report_service
    app.dependency_overrides[get_monthly_task_service] = lambda: MonthlyTaskService(notion, members)
    app.dependency_overrides[get_publisher] = lambda: ReportPublisher(notion)
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_health():
    with TestClient(app) as client:
        response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


# ========================================
# Reports
# ========================================
def test_report_types(client):
    response = client.get(f"{API}/reports/types", params={"date": "2025-11-14"})

    assert response.status_code == 200
    assert response.json() == {
        "isHoliday": False,
        "shouldGenerateDaily": True,
        "shouldGenerateWeekly": True,
        "shouldGenerateMonthly": False,
    }


def test_get_reports(client, notion):
    response = client.get(f"{API}/reports", params={"date": "2025-11-14"})

    assert response.status_code == 200
    body = response.json()
    assert body["daily"]["title"] == "큐브 파트 일일업무 보고 (2025-11-14)"
    assert body["weekly"]["title"] == "큐브 파트 주간업무 보고 (11월 3주차)"
    assert body["monthly"] is None
    assert notion.created == []


def test_get_reports_defaults_to_today(client):
    response = client.get(f"{API}/reports")

    assert response.status_code == 200
    assert response.json()["daily"]["date"] == "2025-11-14"


def test_get_reports_on_holiday(client):
    response = client.get(f"{API}/reports", params={"date": "2025-11-15"})

    assert response.status_code == 400
    assert response.json()["detail"] == "휴일에는 보고서를 생성하지 않습니다."


def test_get_reports_upstream_failure(client, notion):
    notion.fail = True

    response = client.get(f"{API}/reports", params={"date": "2025-11-14"})

    assert response.status_code == 500
    assert response.json()["detail"] == "보고서 생성 실패"


def test_create_reports_publishes_pages(client, notion):
    response = client.post(f"{API}/reports", json={"date": "2025-11-14"})

    assert response.status_code == 201
    body = response.json()
    assert body["daily"]["notionPageId"] == "report-1"
    assert body["weekly"]["notionPageUrl"] == "https://www.notion.so/report-2"
    assert [call["properties"]["Tags"]["select"]["name"] for call in notion.created] == ["일간", "주간"]


def test_create_reports_on_holiday(client, notion):
    response = client.post(f"{API}/reports", json={"date": "2025-11-16"})

    assert response.status_code == 400
    assert notion.created == []


def test_configuration_error_returns_500(members):
    def broken():
        raise ConfigurationError("NOTION_API_KEY가 설정되지 않았습니다.")

    app.dependency_overrides[get_report_service] = broken
    try:
        response = TestClient(app).get(f"{API}/reports/types")
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 500
    assert response.json() == {"detail": "보고서 서비스 오류"}


# ========================================
# Monthly Tasks
# ========================================
def test_monthly_tasks(client):
    response = client.get(f"{API}/monthly-tasks", params={"year": 2025, "month": 11})

    assert response.status_code == 200
    body = response.json()
    assert body["total"] == 2
    assert {task["person"] for task in body["tasks"]} == {"김철수", "이영희"}


@pytest.mark.parametrize("params", [{}, {"year": 2025}, {"year": 2025, "month": 13}])
def test_monthly_tasks_invalid_params(client, params):
    response = client.get(f"{API}/monthly-tasks", params=params)
    assert response.status_code == 400


def test_monthly_tasks_upstream_failure(client, notion):
    notion.fail = True

    response = client.get(f"{API}/monthly-tasks", params={"year": 2025, "month": 11})

    assert response.status_code == 500


def test_monthly_tasks_export(client):
    response = client.get(f"{API}/monthly-tasks/export", params={"year": 2025, "month": 11})

    assert response.status_code == 200
    assert response.headers["content-type"] == "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
    assert response.headers["content-disposition"] == (
        f"attachment; filename*=UTF-8''{quote('202511_큐브파트_업무목록.xlsx')}"
    )
    assert response.content[:2] == b"PK"
