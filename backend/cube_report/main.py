"""
Cube Report API

Notion 업무 데이터베이스 기반 일일/주간/월간 보고서 집계 서버
"""
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from cube_report.api.v1.router import api_router
from cube_report.core.config import settings
from cube_report.core.exceptions import ConfigurationError, ReportError
from cube_report.core.logging_config import setup_logging


setup_logging(level=settings.LOG_LEVEL, log_file=settings.LOG_FILE or None, json_output=settings.LOG_JSON)
logger = logging.getLogger(__name__)


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Notion 업무 데이터베이스 기반 팀 업무 보고서 집계 API",
    debug=settings.DEBUG,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ReportError)
async def report_error_handler(request: Request, exc: ReportError):
    """의존성 구성 단계(설정 누락 등)에서 발생한 오류"""
    if isinstance(exc, ConfigurationError):
        logger.error("설정 오류: %s", exc)
    else:
        logger.error("요청 처리 실패 (%s): %s", request.url.path, exc)
    return JSONResponse(status_code=500, content={"detail": "보고서 서비스 오류"})


app.include_router(api_router, prefix=settings.API_PREFIX)


@app.get("/health")
async def health():
    return {"status": "ok", "app": settings.APP_NAME, "version": settings.APP_VERSION}
