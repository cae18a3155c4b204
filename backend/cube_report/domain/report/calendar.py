"""
날짜 관련 유틸리티

보고서 기간 판단에 사용하는 근무일/휴일/주차 계산을 제공합니다.
휴일 판단 함수와 현재 시각(clock)은 주입 가능하며, 기본값은
한국 공휴일(holidays 패키지)과 설정된 타임존의 현재 시각입니다.
"""
import math
from calendar import monthrange
from datetime import date, datetime, timedelta
from typing import Callable, List, NamedTuple, Optional, Tuple
from zoneinfo import ZoneInfo

import holidays


# (year, month, day) -> 공휴일 여부 (양력 기준)
HolidayPredicate = Callable[[int, int, int], bool]
Clock = Callable[[], datetime]

WEDNESDAY = 2
FRIDAY = 4
KOREAN_WEEKDAYS = ["월", "화", "수", "목", "금", "토", "일"]


class MonthRange(NamedTuple):
    """월의 첫날과 마지막 날"""
    first_day: date
    last_day: date


class WeekSpan(NamedTuple):
    """수요일 기준 주차 (월요일~일요일)"""
    week_number: int
    monday: date
    sunday: date


def make_public_holiday_predicate(country: str = "KR") -> HolidayPredicate:
    """
    holidays 패키지 기반 공휴일 판단 함수 생성

    Args:
        country: ISO 국가 코드

    Returns:
        (year, month, day) -> bool 함수
    """
    calendar = holidays.country_holidays(country)

    def is_public_holiday(year: int, month: int, day: int) -> bool:
        return date(year, month, day) in calendar

    return is_public_holiday


def format_date(d: date) -> str:
    """date를 YYYY-MM-DD 문자열로 변환"""
    return d.isoformat()


def format_short_date(d: date) -> str:
    """date를 YY.MM.DD 문자열로 변환"""
    return d.strftime("%y.%m.%d")


def parse_date(value: str) -> date:
    """YYYY-MM-DD 문자열(또는 ISO datetime 문자열)을 date로 변환"""
    return date.fromisoformat(value[:10])


def day_of_week_korean(d: date) -> str:
    """요일을 한글 한 글자로 반환 (월, 화, ...)"""
    return KOREAN_WEEKDAYS[d.weekday()]


def iso_monday(d: date) -> date:
    """d가 속한 ISO 주의 월요일"""
    return d - timedelta(days=d.weekday())


def most_recent_wednesday(d: date) -> date:
    """d 당일 또는 이전의 가장 가까운 수요일 (월/화/일요일은 직전 수요일)"""
    return d - timedelta(days=(d.weekday() - WEDNESDAY) % 7)


def month_range(d: date) -> MonthRange:
    """d가 속한 달의 첫날과 마지막 날"""
    last = monthrange(d.year, d.month)[1]
    return MonthRange(d.replace(day=1), d.replace(day=last))


def week_of_month_label(d: date) -> str:
    """
    'M월 N주차' 형식의 주차 문자열

    주차는 일요일 시작 주 기준: ceil((일자 + 1일의 요일) / 7)
    (요일은 일요일=0, 월요일=1, ..., 토요일=6)
    """
    first_weekday_sun0 = (d.replace(day=1).weekday() + 1) % 7
    week_number = math.ceil((d.day + first_weekday_sun0) / 7)
    return f"{d.month}월 {week_number}주차"


def weeks_of_month(year: int, month: int) -> List[WeekSpan]:
    """
    수요일 기준으로 해당 월에 속하는 주 목록을 반환

    수요일이 해당 월에 있는 주만 포함하며,
    각 주의 범위는 인접 월로 넘어가더라도 월요일~일요일입니다.
    """
    first_day = date(year, month, 1)
    wednesday = first_day + timedelta(days=(WEDNESDAY - first_day.weekday()) % 7)

    weeks = []
    while wednesday.month == month:
        monday = wednesday - timedelta(days=WEDNESDAY)
        weeks.append(WeekSpan(len(weeks) + 1, monday, monday + timedelta(days=6)))
        wednesday += timedelta(days=7)
    return weeks


class WorkCalendar:
    """근무일/휴일 계산기"""

    def __init__(
        self,
        holiday_predicate: Optional[HolidayPredicate] = None,
        clock: Optional[Clock] = None,
        timezone: str = "Asia/Seoul",
    ):
        """
        Args:
            holiday_predicate: 공휴일 판단 함수 (기본: 한국 공휴일)
            clock: 현재 시각 함수 (테스트에서 고정 시각 주입용)
            timezone: 오늘 날짜 계산에 사용할 타임존
        """
        self.holiday_predicate = holiday_predicate or make_public_holiday_predicate("KR")
        self.tz = ZoneInfo(timezone)
        self.clock = clock or (lambda: datetime.now(self.tz))

    def today(self) -> date:
        """설정된 타임존 기준 오늘 날짜"""
        now = self.clock()
        if now.tzinfo is not None:
            now = now.astimezone(self.tz)
        return now.date()

    def today_str(self) -> str:
        """오늘 날짜를 YYYY-MM-DD 형식으로 반환"""
        return format_date(self.today())

    def is_holiday(self, d: date) -> bool:
        """주말 또는 공휴일 여부"""
        if d.weekday() >= 5:
            return True
        return self.holiday_predicate(d.year, d.month, d.day)

    def last_weekday_of_week(self, d: date) -> date:
        """
        d가 속한 ISO 주의 마지막 평일(휴일 제외)

        금요일부터 월요일까지 거슬러 올라가며 첫 번째 비휴일을 반환합니다.
        해당 주에 평일이 없으면 금요일을 반환합니다.
        """
        friday = iso_monday(d) + timedelta(days=FRIDAY)

        current = friday
        while current.weekday() <= FRIDAY:
            if not self.is_holiday(current):
                return current
            if current.weekday() == 0:
                break
            current -= timedelta(days=1)

        return friday

    def is_last_weekday_of_week(self, d: date) -> bool:
        """d가 해당 주의 마지막 평일인지 확인"""
        return d == self.last_weekday_of_week(d)

    def is_last_week_of_month(self, d: date) -> bool:
        """
        d가 해당 월의 마지막 주인지 확인 (수요일 기준)

        이번 주 수요일과 다음 주 수요일의 월이 다르면 마지막 주입니다.
        """
        wednesday = most_recent_wednesday(d)
        next_wednesday = wednesday + timedelta(days=7)
        return wednesday.month != next_wednesday.month

    def is_last_weekday_of_month(self, d: date) -> bool:
        """d가 해당 월 마지막 주의 마지막 평일인지 확인"""
        if not self.is_last_weekday_of_week(d):
            return False
        return self.is_last_week_of_month(d)

    def current_month_range_by_wednesday(self, d: date) -> MonthRange:
        """
        가장 최근 수요일 기준 현재 월의 첫날과 마지막 날

        월~화요일은 이전 주 수요일, 수~일요일은 이번 주 수요일이 속한 달을 사용합니다.
        """
        return month_range(most_recent_wednesday(d))

    def this_week_monday_to_today(self, d: date) -> Tuple[date, date]:
        """이번 주 월요일부터 d까지의 날짜 범위"""
        return iso_monday(d), d

    def working_days_count(self, start: date, end: date) -> int:
        """기간 내 근무일수 (월~금 중 휴일이 아닌 날짜 수)"""
        count = 0
        current = start
        while current <= end:
            if current.weekday() <= FRIDAY and not self.is_holiday(current):
                count += 1
            current += timedelta(days=1)
        return count
