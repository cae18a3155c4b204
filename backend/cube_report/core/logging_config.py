"""
로깅 설정

콘솔(stdout) 핸들러와 선택적 파일 핸들러를 구성합니다.
"""
import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional


class JSONFormatter(logging.Formatter):
    """운영 환경용 JSON 로그 포맷터"""

    def format(self, record):
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }
        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)
        if hasattr(record, "report_type"):
            log_entry["report_type"] = record.report_type
        return json.dumps(log_entry, ensure_ascii=False)


PLAIN_FORMAT = "%(asctime)s [%(name)s] %(levelname)s: %(message)s"


def setup_logging(level: str = "INFO", log_file: Optional[str] = None, json_output: bool = False):
    """
    애플리케이션 로깅 설정

    Args:
        level: 로그 레벨 이름
        log_file: 로그 파일 경로 (비어 있으면 파일 로그 생략)
        json_output: JSON 포맷 사용 여부
    """
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    formatter = JSONFormatter() if json_output else logging.Formatter(PLAIN_FORMAT)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)
    handlers = [handler]

    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(path, encoding="utf-8")
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    root.handlers = handlers

    # 외부 라이브러리 로그 억제
    for name in ["uvicorn.access", "httpcore", "httpx", "notion_client"]:
        logging.getLogger(name).setLevel(logging.WARNING)
