"""
Notion API 서비스 (공식 SDK 사용)

업무 데이터베이스 조회와 보고서 데이터베이스 페이지 생성/블록 추가를 담당합니다.
"""
import logging
from typing import Any, Dict, List, Optional, Sequence

import httpx
from notion_client import AsyncClient
from notion_client.errors import APIResponseError, HTTPResponseError, RequestTimeoutError

from cube_report.core.exceptions import ConfigurationError, UpstreamServiceError


logger = logging.getLogger(__name__)

NOTION_ERRORS = (HTTPResponseError, RequestTimeoutError, httpx.HTTPError)


def _error_message(error: Exception) -> str:
    if isinstance(error, APIResponseError):
        return f"Notion API 오류 ({error.code}): {error}"
    return str(error) or error.__class__.__name__


class NotionApiService:
    """Notion 데이터베이스 조회 및 페이지 생성"""

    def __init__(
        self,
        api_key: str,
        database_id: str,
        report_database_id: str,
        page_size: int = 100,
        client: Optional[AsyncClient] = None,
    ):
        """
        Args:
            api_key: Notion 통합 토큰
            database_id: 업무 데이터베이스 ID
            report_database_id: 보고서 데이터베이스 ID
            page_size: 조회 페이지 크기 (최대 100)
            client: 주입할 AsyncClient (없으면 api_key로 생성)

        Raises:
            ConfigurationError: 필수 설정이 비어 있는 경우
        """
        if not api_key and client is None:
            raise ConfigurationError("NOTION_API_KEY가 환경 변수에 정의되지 않았습니다.")
        if not database_id:
            raise ConfigurationError("NOTION_DATABASE_ID가 환경 변수에 정의되지 않았습니다.")
        if not report_database_id:
            raise ConfigurationError("NOTION_REPORT_DATABASE_ID가 환경 변수에 정의되지 않았습니다.")

        self.database_id = database_id
        self.report_database_id = report_database_id
        self.page_size = min(page_size, 100)
        self.client = client or AsyncClient(auth=api_key)

    @classmethod
    def from_settings(cls, settings) -> "NotionApiService":
        return cls(
            api_key=settings.NOTION_API_KEY,
            database_id=settings.NOTION_DATABASE_ID,
            report_database_id=settings.NOTION_REPORT_DATABASE_ID,
            page_size=settings.NOTION_PAGE_SIZE,
        )

    async def query_database(
        self,
        filter_dict: Optional[Dict[str, Any]] = None,
        sorts: Optional[List[Dict[str, Any]]] = None,
        start_cursor: Optional[str] = None,
    ) -> Dict[str, Any]:
        """업무 데이터베이스 한 페이지 조회"""
        query_params: Dict[str, Any] = {"page_size": self.page_size}
        if filter_dict:
            query_params["filter"] = filter_dict
        if sorts:
            query_params["sorts"] = sorts
        if start_cursor:
            query_params["start_cursor"] = start_cursor

        try:
            return await self.client.databases.query(database_id=self.database_id, **query_params)
        except NOTION_ERRORS as e:
            logger.exception("Notion 데이터베이스 조회 중 오류 발생")
            raise UpstreamServiceError("Notion 데이터베이스 조회", _error_message(e), e) from e

    async def query_all(
        self,
        filter_dict: Optional[Dict[str, Any]] = None,
        sorts: Optional[List[Dict[str, Any]]] = None,
    ) -> List[Dict[str, Any]]:
        """페이지네이션하며 전체 결과 조회"""
        results: List[Dict[str, Any]] = []
        cursor = None
        pages = 0

        while True:
            response = await self.query_database(filter_dict, sorts, cursor)
            results.extend(response.get("results", []))
            pages += 1

            if not response.get("has_more"):
                break
            cursor = response.get("next_cursor")
            if not cursor:
                break

        logger.debug("Notion 조회 완료: %d건 (%d페이지)", len(results), pages)
        return results

    async def create_page(
        self,
        properties: Dict[str, Any],
        children: Sequence[Dict[str, Any]],
        icon: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """보고서 데이터베이스에 페이지 생성"""
        page_data: Dict[str, Any] = {
            "parent": {"database_id": self.report_database_id},
            "properties": properties,
            "children": list(children),
        }
        if icon:
            page_data["icon"] = icon

        try:
            return await self.client.pages.create(**page_data)
        except NOTION_ERRORS as e:
            logger.exception("Notion 페이지 생성 중 오류 발생")
            raise UpstreamServiceError("Notion 페이지 생성", _error_message(e), e) from e

    async def append_blocks(self, page_id: str, children: Sequence[Dict[str, Any]]) -> Dict[str, Any]:
        """기존 페이지에 블록 추가"""
        try:
            return await self.client.blocks.children.append(block_id=page_id, children=list(children))
        except NOTION_ERRORS as e:
            logger.exception("Notion 블록 추가 중 오류 발생")
            raise UpstreamServiceError("Notion 블록 추가", _error_message(e), e) from e

    async def append_batches(self, page_id: str, batches: Sequence[Sequence[Dict[str, Any]]]) -> int:
        """
        블록 묶음을 순서대로 추가

        Returns:
            추가한 블록 수
        """
        appended = 0
        for batch in batches:
            if not batch:
                continue
            await self.append_blocks(page_id, batch)
            appended += len(batch)
        return appended
