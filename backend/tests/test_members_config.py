"""담당자 디렉터리 / 설정 / 로깅 테스트"""
import json
import logging

from cube_report.core.config import MemberEntry, Settings
from cube_report.core.logging_config import JSONFormatter, setup_logging
from cube_report.domain.report.members import DEFAULT_MEMBERS, MemberDirectory, build_member_directory

from conftest import KIM


def test_resolve_known_and_unknown(members):
    assert members.resolve(KIM).name == "김철수"
    unknown = members.resolve("guest@else.test")
    assert (unknown.name, unknown.priority) == ("guest", 999)
    assert members.name_of("guest@else.test") is None
    assert members.name_of(None) is None


def test_priority_and_names(members):
    assert members.priority_of("이영희") == 2
    assert members.priority_of("외부인") == 999
    assert members.names() == ["김철수", "이영희", "박민수"]


def test_from_mapping():
    directory = MemberDirectory.from_mapping({"a@x.test": {"name": "가", "priority": 2}, "b@x.test": {"name": "나"}})

    assert directory.priority_of("가") == 2
    assert directory.priority_of("나") == 999
    assert len(directory) == 2


def test_build_member_directory_from_settings():
    default = build_member_directory(Settings(MEMBERS={}))
    custom = build_member_directory(Settings(MEMBERS={"x@y.test": MemberEntry(name="홍길동", priority=1)}))

    assert len(default) == len(DEFAULT_MEMBERS)
    assert custom.names() == ["홍길동"]


def test_cors_origins_list():
    config = Settings(CORS_ORIGINS="http://a.test, http://b.test,")
    assert config.cors_origins_list == ["http://a.test", "http://b.test"]


def test_json_formatter():
    record = logging.LogRecord("cube_report.test", logging.INFO, __file__, 10, "보고서 %s건", (3,), None)

    entry = json.loads(JSONFormatter().format(record))

    assert entry["level"] == "INFO"
    assert entry["logger"] == "cube_report.test"
    assert entry["message"] == "보고서 3건"
    assert "report_type" not in entry


def test_json_formatter_includes_report_type():
    record = logging.LogRecord("cube_report.test", logging.INFO, __file__, 10, "주간 보고서 생성 시작", (), None)
    record.report_type = "weekly"

    entry = json.loads(JSONFormatter().format(record))

    assert entry["report_type"] == "weekly"


def test_setup_logging_with_file(tmp_path):
    root = logging.getLogger()
    previous_handlers, previous_level = root.handlers[:], root.level
    log_file = tmp_path / "logs" / "app.log"

    try:
        setup_logging(level="DEBUG", log_file=str(log_file))
        logging.getLogger("cube_report.test").info("로그 확인")
        for handler in root.handlers:
            handler.flush()

        assert root.level == logging.DEBUG
        assert logging.getLogger("httpx").level == logging.WARNING
        assert "로그 확인" in log_file.read_text(encoding="utf-8")
    finally:
        for handler in root.handlers:
            if handler not in previous_handlers:
                handler.close()
        root.handlers = previous_handlers
        root.setLevel(previous_level)
