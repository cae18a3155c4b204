"""
Notion 보고서 페이지 발행

페이지 생성 요청에는 첫 100개 블록만 포함하고,
나머지 본문과 개인별 공수 블록은 100개 단위로 순서대로 추가합니다.
"""
import logging
from typing import Optional

from cube_report.domain.report.schemas import (
    DailyReport,
    MonthlyReport,
    PublishedPage,
    ReportBundle,
    WeeklyReport,
)
from cube_report.reporting.notion_blocks import chunk_blocks
from cube_report.reporting.page_builder import PageContent, ReportPageBuilder


logger = logging.getLogger(__name__)


class ReportPublisher:
    """보고서를 Notion 보고서 데이터베이스 페이지로 발행"""

    def __init__(self, notion, builder: Optional[ReportPageBuilder] = None):
        """
        Args:
            notion: create_page / append_batches를 제공하는 Notion 서비스
            builder: 페이지 내용 생성기
        """
        self.notion = notion
        self.builder = builder or ReportPageBuilder()

    async def publish(self, content: PageContent) -> PublishedPage:
        """페이지 생성 후 남은 블록을 순서대로 추가"""
        # 1. 첫 번째 청크로 페이지 생성
        body_batches = chunk_blocks(content.blocks)
        initial = body_batches[0] if body_batches else []
        response = await self.notion.create_page(content.properties, initial, content.icon)
        page_id = response["id"]

        # 2. 나머지 본문 블록
        remaining = body_batches[1:]

        # 3. 개인별 공수 블록 (본문과 별도 청크)
        person_batches = chunk_blocks(content.person_blocks)

        appended = await self.notion.append_batches(page_id, remaining + person_batches)
        logger.info(
            "Notion 페이지 생성 완료: %s (블록 %d개, 추가 요청 %d회)",
            content.title, len(initial) + appended, len(remaining) + len(person_batches),
        )
        return PublishedPage(id=page_id, url=response.get("url"))

    async def publish_daily(self, report: DailyReport) -> DailyReport:
        page = await self.publish(self.builder.build_daily(report))
        return report.model_copy(update={"notion_page_id": page.id, "notion_page_url": page.url})

    async def publish_weekly(self, report: WeeklyReport) -> WeeklyReport:
        page = await self.publish(self.builder.build_weekly(report))
        return report.model_copy(update={"notion_page_id": page.id, "notion_page_url": page.url})

    async def publish_monthly(self, report: MonthlyReport) -> MonthlyReport:
        page = await self.publish(self.builder.build_monthly(report))
        return report.model_copy(update={"notion_page_id": page.id, "notion_page_url": page.url})

    async def publish_bundle(self, bundle: ReportBundle) -> ReportBundle:
        """생성된 기간별 보고서를 일일 -> 주간 -> 월간 순서로 발행"""
        update = {}
        if bundle.daily is not None:
            update["daily"] = await self.publish_daily(bundle.daily)
        if bundle.weekly is not None:
            update["weekly"] = await self.publish_weekly(bundle.weekly)
        if bundle.monthly is not None:
            update["monthly"] = await self.publish_monthly(bundle.monthly)
        return bundle.model_copy(update=update)
