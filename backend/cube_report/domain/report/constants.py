"""
보고서 관련 상수
"""

# ========================================
# Notion 요청 제한
# https://developers.notion.com/reference/request-limits
# ========================================
NOTION_BLOCK_MAX_LENGTH = 2000
NOTION_MAX_BLOCKS_PER_REQUEST = 100


# ========================================
# Notion 업무 DB 속성명
# ========================================
PROP_TITLE_CANDIDATES = ("Name", "Title", "title")
PROP_DATE = "Date"
PROP_PERSON = "Person"
PROP_GROUP = "Group"
PROP_SUB_GROUP = "SubGroup"
PROP_CUSTOMER = "Customer"
PROP_PROGRESS = "Progress"
PROP_MAN_HOUR = "ManHour"
PROP_PMS_NUMBER = "PmsNumber"
PROP_PMS_LINK = "PmsLink"


# ========================================
# 기본값
# ========================================
UNASSIGNED_PERSON = "미지정"
UNKNOWN_MEMBER_PRIORITY = 999

# 기준 근무 공수 (m/h)
HOURS_PER_WORKING_DAY = 8

# 근태 판단 기준 그룹
LEAVE_GROUP = "기타"

# 회의 그룹 (개인별 표에서 가장 아래로 정렬)
MEETING_GROUP = "회의"


# ========================================
# 그룹/서브그룹 정렬 순서
# ========================================
HIGH_PRIORITY_GROUPS = ["kt cloud", "kt cloud - 상주"]
SECOND_PRIORITY_GROUPS = ["DCIM 구현", "DCIM프로젝트"]
LOW_PRIORITY_GROUPS = ["자체결함", "기술지원팀 요청"]
LOWEST_PRIORITY_GROUPS = ["회의", "기타"]

SUB_GROUP_ORDER = ["분석", "설계/분석", "구현", "결함 처리", "개발 관리", "회의", "일반", "기타"]

# 월별 업무 목록에서 뒤로 보내는 그룹
LISTING_LOW_PRIORITY_GROUPS = ["회의", "기타"]
