"""중복 제거 / 그룹화 / 정렬 테스트"""
from datetime import date

from cube_report.domain.report.dedup import distinct_items, distinct_key
from cube_report.domain.report.grouping import (
    GroupOrder,
    collation_key,
    group_by_project_and_sub_group,
    group_tasks_by_group,
    round_half_up,
)
from cube_report.domain.report.schemas import DateRange, ReportItem
from cube_report.domain.report.transformer import expand_multiple_assignees, transform_records

from conftest import KIM, LEE, make_page


def item(title="업무", person="김철수", man_hour=1.0, start=date(2025, 11, 10), end=None,
         pms_number=None, group="kt cloud", sub_group="구현", progress=0.0):
    return ReportItem(
        title=title,
        person=person,
        man_hour=man_hour,
        date=DateRange(start=start, end=end),
        pms_number=pms_number,
        group=group,
        sub_group=sub_group,
        progress_rate=progress,
    )


# ========================================
# 중복 제거
# ========================================
def test_distinct_key_uses_pms_number_or_normalized_title():
    assert distinct_key(item(pms_number=1234)) == "김철수-1234"
    assert distinct_key(item(title="API  개발 \t작업")) == "김철수-API개발작업"


def test_merge_keeps_latest_attributes_and_sums_hours():
    items = [
        item(title="API 개발", man_hour=2, start=date(2025, 11, 10), progress=30),
        item(title="API개발", man_hour=3, start=date(2025, 11, 11), end=date(2025, 11, 12), progress=80),
        item(title="API 개발 ", man_hour=1, start=date(2025, 11, 11), progress=50),
    ]

    result = distinct_items(items)

    assert len(result) == 1
    assert result[0].progress_rate == 80
    assert result[0].man_hour == 6


def test_tie_keeps_first_seen():
    items = [
        item(title="A", progress=10, start=date(2025, 11, 11)),
        item(title="A", progress=90, start=date(2025, 11, 11)),
    ]
    assert distinct_items(items)[0].progress_rate == 10


def test_same_title_different_person_not_merged():
    result = distinct_items([item(person="김철수"), item(person="이영희")])
    assert [r.person for r in result] == ["김철수", "이영희"]


def test_dedup_is_idempotent_and_conserves_hours():
    items = [
        item(title="A", man_hour=1),
        item(title="B", man_hour=2.5),
        item(title="A", man_hour=4, start=date(2025, 11, 12)),
        item(title="C", man_hour=0, pms_number=7),
        item(title="D", man_hour=3, pms_number=7),
    ]

    once = distinct_items(items)
    twice = distinct_items(once)

    assert sum(i.man_hour for i in once) == sum(i.man_hour for i in items)
    assert [(i.title, i.man_hour) for i in twice] == [(i.title, i.man_hour) for i in once]
    # 같은 PMS 번호, 같은 날짜면 먼저 나온 항목 유지
    assert [i.title for i in once] == ["A", "B", "C"]
    assert once[0].man_hour == 5
    assert once[2].man_hour == 3


def test_expansion_keeps_full_hours_per_assignee(members):
    pages = [make_page(title="A", people=[KIM, LEE], man_hour=4, progress=0.5, start="2025-11-10")]

    items = distinct_items(transform_records(expand_multiple_assignees(pages), members, reference_date=date(2025, 11, 10)))

    assert sorted((i.person, i.man_hour, i.progress_rate) for i in items) == [
        ("김철수", 4, 50),
        ("이영희", 4, 50),
    ]


# ========================================
# 그룹화
# ========================================
def test_group_priority_order(members):
    items = [item(group=g) for g in ["기타", "kt cloud", "회의", "일반업무", "자체결함", "DCIM 구현", "가나"]]

    groups = [g.group for g in group_by_project_and_sub_group(items, members)]

    assert groups == ["kt cloud", "DCIM 구현", "가나", "일반업무", "자체결함", "회의", "기타"]


def test_other_groups_sorted_hangul_before_latin(members):
    items = [item(group=g) for g in ["PMS 운영", "일반업무", "abc", "가나"]]

    groups = [g.group for g in group_by_project_and_sub_group(items, members)]

    assert groups == ["가나", "일반업무", "abc", "PMS 운영"]


def test_unlisted_sub_groups_sorted_hangul_before_latin(members):
    items = [item(sub_group=s) for s in ["QA", "검증", "구현", "api"]]

    sub_groups = [g.sub_group for g in group_by_project_and_sub_group(items, members)]

    assert sub_groups == ["구현", "검증", "api", "QA"]


def test_collation_key_order():
    names = ["Zed", "alex", "하늘", "2차", "가람", " 공백"]
    assert sorted(names, key=collation_key) == [" 공백", "2차", "가람", "하늘", "alex", "Zed"]


def test_lowest_tier_follows_configured_order(members):
    order = GroupOrder(lowest=("기타", "회의"))
    items = [item(group=g) for g in ["기타", "kt cloud", "회의", "일반업무"]]

    groups = [g.group for g in group_by_project_and_sub_group(items, members, order)]

    assert groups == ["kt cloud", "일반업무", "기타", "회의"]


def test_sub_group_order(members):
    items = [item(sub_group=s) for s in ["기타", "테스트", "구현", "분석", "가이드"]]

    sub_groups = [g.sub_group for g in group_by_project_and_sub_group(items, members)]

    assert sub_groups == ["분석", "구현", "기타", "가이드", "테스트"]


def test_items_sorted_by_progress_then_member_priority_then_name(members):
    items = [
        item(title="a", person="이영희", progress=50),
        item(title="b", person="김철수", progress=50),
        item(title="c", person="하늘", progress=50),
        item(title="d", person="가람", progress=50),
        item(title="e", person="박민수", progress=90),
        item(title="f", person="guest", progress=50),
    ]

    grouped = group_by_project_and_sub_group(items, members)

    assert [i.person for i in grouped[0].items] == ["박민수", "김철수", "이영희", "가람", "하늘", "guest"]


def test_display_progress_only_when_positive(members):
    items = [item(title="zero", progress=0), item(title="half", progress=49.5), item(title="done", progress=100)]

    display = {i.title: i.progress for i in group_by_project_and_sub_group(items, members)[0].items}

    assert display == {"done": 100, "half": 50, "zero": None}


def test_round_half_up():
    assert round_half_up(0.5) == 1
    assert round_half_up(2.5) == 3
    assert round_half_up(33.33) == 33


def test_group_tasks_by_group(members):
    items = [item(group="kt cloud", sub_group="구현"), item(group="kt cloud", sub_group="분석"), item(group="회의", sub_group="일반")]

    regrouped = group_tasks_by_group(group_by_project_and_sub_group(items, members))

    assert [g.group for g in regrouped] == ["kt cloud", "회의"]
    assert [s.sub_group for s in regrouped[0].sub_groups] == ["분석", "구현"]
