from pydantic import BaseModel
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Dict, List
from pathlib import Path


class MemberEntry(BaseModel):
    """담당자 설정 항목"""
    name: str
    priority: int = 999


class Settings(BaseSettings):
    """애플리케이션 설정"""

    model_config = SettingsConfigDict(
        env_file=str(Path(__file__).resolve().parent.parent.parent / ".env"),  # backend/.env 경로 명시
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore"  # 정의되지 않은 환경 변수 무시
    )

    # Notion (서비스 생성 시점에 필수값 검증)
    NOTION_API_KEY: str = ""
    NOTION_DATABASE_ID: str = ""
    NOTION_REPORT_DATABASE_ID: str = ""
    NOTION_PAGE_SIZE: int = 100

    # Report
    REPORT_TEAM_NAME: str = "큐브 파트"
    TIMEZONE: str = "Asia/Seoul"
    HOLIDAY_COUNTRY: str = "KR"

    # 담당자 테이블 (JSON: {"email": {"name": "...", "priority": 1}})
    # 비어 있으면 기본 테이블 사용
    MEMBERS: Dict[str, MemberEntry] = {}

    # Application
    APP_NAME: str = "Cube Report"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    CORS_ORIGINS: str = "http://localhost:3000"
    API_PREFIX: str = "/api/v1"

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FILE: str = ""
    LOG_JSON: bool = False

    @property
    def cors_origins_list(self) -> List[str]:
        """CORS origins를 리스트로 반환"""
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]


# 싱글톤 설정 인스턴스
settings = Settings()
