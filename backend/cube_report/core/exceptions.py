"""보고서 서비스 예외 정의"""
from typing import Optional


class ReportError(Exception):
    """보고서 처리 기본 예외"""


class ConfigurationError(ReportError):
    """필수 설정(외부 시스템 ID, 인증 정보) 누락"""


class UpstreamServiceError(ReportError):
    """Notion 등 외부 서비스 호출 실패"""

    def __init__(self, operation: str, message: str, original: Optional[BaseException] = None):
        super().__init__(f"{operation} 실패: {message}")
        self.operation = operation
        self.original = original
