"""
담당자 디렉터리

Notion 담당자 이메일을 팀원 이름과 정렬 우선순위로 변환합니다.
우선순위 값이 작을수록 먼저 정렬됩니다.
"""
from dataclasses import dataclass
from typing import Dict, Mapping, Optional

from cube_report.domain.report.constants import UNKNOWN_MEMBER_PRIORITY


@dataclass(frozen=True)
class Member:
    """팀원 정보"""
    name: str
    priority: int = UNKNOWN_MEMBER_PRIORITY


# 기본 담당자 테이블 (MEMBERS 설정으로 대체 가능)
DEFAULT_MEMBERS: Dict[str, Member] = {
    "jihaeng.heo@cube.example.com": Member("허지행", 1),
    "minho.jang@cube.example.com": Member("장민호", 2),
    "dongyeop.lee@cube.example.com": Member("이동엽", 3),
    "sunghwan.jang@cube.example.com": Member("장성환", 4),
    "minyoung.park@cube.example.com": Member("박민영", 6),
}


class MemberDirectory:
    """읽기 전용 이메일 -> 팀원 조회 서비스"""

    def __init__(self, members: Mapping[str, Member]):
        self._by_email: Dict[str, Member] = dict(members)
        self._priority_by_name: Dict[str, int] = {}
        for member in self._by_email.values():
            # 같은 이름이 여러 이메일에 있으면 첫 번째 항목 우선
            self._priority_by_name.setdefault(member.name, member.priority)

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Mapping]) -> "MemberDirectory":
        """{"email": {"name": ..., "priority": ...}} 형식 매핑으로 생성"""
        members = {
            email: Member(
                name=entry["name"],
                priority=entry.get("priority", UNKNOWN_MEMBER_PRIORITY),
            )
            for email, entry in mapping.items()
        }
        return cls(members)

    def __len__(self) -> int:
        return len(self._by_email)

    def is_known(self, email: Optional[str]) -> bool:
        """등록된 이메일인지 확인"""
        return bool(email) and email in self._by_email

    def resolve(self, email: str) -> Member:
        """
        이메일로 팀원 조회

        등록되지 않은 이메일은 로컬 파트(@ 앞부분)를 이름으로 하고
        우선순위 999를 부여합니다.
        """
        member = self._by_email.get(email)
        if member is not None:
            return member
        return Member(name=email.split("@")[0], priority=UNKNOWN_MEMBER_PRIORITY)

    def name_of(self, email: Optional[str]) -> Optional[str]:
        """등록된 이메일이면 팀원 이름, 아니면 None"""
        if not self.is_known(email):
            return None
        return self._by_email[email].name

    def priority_of(self, name: str) -> int:
        """이름으로 우선순위 조회 (미등록 이름은 999)"""
        return self._priority_by_name.get(name, UNKNOWN_MEMBER_PRIORITY)

    def names(self):
        """등록된 팀원 이름 목록 (우선순위 순)"""
        ordered = sorted(self._by_email.values(), key=lambda m: (m.priority, m.name))
        seen = []
        for member in ordered:
            if member.name not in seen:
                seen.append(member.name)
        return seen


def build_member_directory(settings) -> MemberDirectory:
    """설정의 MEMBERS가 비어 있으면 기본 테이블 사용"""
    if settings.MEMBERS:
        return MemberDirectory(
            {email: Member(entry.name, entry.priority) for email, entry in settings.MEMBERS.items()}
        )
    return MemberDirectory(DEFAULT_MEMBERS)
