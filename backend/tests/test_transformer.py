"""Notion 레코드 변환 및 다중 담당자 분리 테스트"""
import copy
from datetime import date

import pytest

from cube_report.domain.report.grouping import round_half_up
from cube_report.domain.report.transformer import (
    LISTING_POLICY,
    PRIMARY_POLICY,
    expand_multiple_assignees,
    transform_record,
    transform_records,
)

from conftest import KIM, LEE, PARK, make_page


# ========================================
# 다중 담당자 분리
# ========================================
def test_single_assignee_passes_through():
    page = make_page(people=[KIM])
    assert expand_multiple_assignees([page]) == [page]


def test_multiple_assignees_split_without_mutating_input():
    page = make_page(people=[KIM, LEE, PARK])
    original = copy.deepcopy(page)

    expanded = expand_multiple_assignees([page])

    assert len(expanded) == 3
    emails = [e["properties"]["Person"]["people"][0]["person"]["email"] for e in expanded]
    assert emails == [KIM, LEE, PARK]
    assert all(len(e["properties"]["Person"]["people"]) == 1 for e in expanded)
    assert all(e["properties"]["ManHour"]["number"] == 4 for e in expanded)
    assert page == original


# ========================================
# 변환
# ========================================
def test_transform_primary_policy(members):
    page = make_page(title="API 개발", progress=0.5, man_hour=4, pms_number=1234, pms_link="https://pms/1234")

    item = transform_record(page, members, PRIMARY_POLICY, date(2025, 11, 12))

    assert item.title == "API 개발"
    assert item.person == "김철수"
    assert item.group == "kt cloud"
    assert item.sub_group == "구현"
    assert item.progress_rate == 50
    assert item.man_hour == 4
    assert item.pms_number == 1234
    assert item.pms_link == "https://pms/1234"
    assert item.is_today
    assert not item.is_tomorrow


def test_defaults_differ_by_policy(members):
    page = make_page(group=None, sub_group=None, progress=0.5)

    primary = transform_record(page, members, PRIMARY_POLICY, date(2025, 11, 12))
    listing = transform_record(page, members, LISTING_POLICY)

    assert (primary.group, primary.sub_group) == ("기타", "일반")
    assert (listing.group, listing.sub_group) == ("미분류", "미분류")
    assert primary.progress_rate == 50
    assert listing.progress_rate == 0.5
    assert not listing.is_today and not listing.is_tomorrow


def test_progress_rescaled_without_rounding(members):
    nearly_done = transform_record(make_page(progress=0.99999), members)
    fraction = transform_record(make_page(progress=0.285), members)

    assert nearly_done.progress_rate < 100
    assert nearly_done.progress_rate == pytest.approx(99.999)
    assert fraction.progress_rate == 0.285 * 100
    assert round_half_up(fraction.progress_rate) == 28


def test_unknown_or_missing_assignee_is_unassigned(members):
    unknown = transform_record(make_page(people=["someone@else.test"]), members)
    missing = transform_record(make_page(people=[]), members)

    assert unknown.person == "미지정"
    assert missing.person == "미지정"


@pytest.mark.parametrize("reference, is_today, is_tomorrow", [
    (date(2025, 11, 9), False, True),
    (date(2025, 11, 10), True, True),
    (date(2025, 11, 11), True, True),
    (date(2025, 11, 12), True, False),
    (date(2025, 11, 13), False, False),
])
def test_window_flags_for_date_range(members, reference, is_today, is_tomorrow):
    page = make_page(start="2025-11-10", end="2025-11-12")

    item = transform_record(page, members, PRIMARY_POLICY, reference)

    assert item.is_today is is_today
    assert item.is_tomorrow is is_tomorrow


def test_pms_link_prefers_formula_over_url(members):
    both = make_page(pms_link="https://formula", pms_url="https://plain")
    url_only = make_page(pms_link=None, pms_url="https://plain")

    assert transform_record(both, members).pms_link == "https://formula"
    assert transform_record(url_only, members).pms_link == "https://plain"


def test_datetime_start_is_truncated_to_date(members):
    item = transform_record(make_page(start="2025-11-12T09:00:00.000+09:00"), members)
    assert item.date.start == date(2025, 11, 12)


def test_records_without_title_or_date_are_dropped(members):
    pages = [
        make_page(title=None),
        make_page(start=None),
        make_page(start="not-a-date"),
        make_page(man_hour=-1),
        make_page(title="정상"),
    ]

    items = transform_records(pages, members, PRIMARY_POLICY, date(2025, 11, 12))

    assert [item.title for item in items] == ["정상"]
