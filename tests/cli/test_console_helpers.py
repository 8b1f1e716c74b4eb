"""
tests/cli/test_console_helpers.py - 콘솔 출력 / 로깅 설정 테스트
"""

import logging
from unittest.mock import patch

import pytest
from rich.logging import RichHandler

from cli.ui.console import (
    SYMBOL_ERROR,
    SYMBOL_INFO,
    SYMBOL_SUCCESS,
    SYMBOL_WARNING,
    console,
    err_console,
    print_error,
    print_info,
    print_report_table,
    print_success,
    print_warning,
    setup_logging,
)
from core.config import LogConfig


@pytest.fixture
def clean_root_logger():
    """루트 logger 핸들러/레벨 복원"""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    root.handlers = [h for h in handlers if not isinstance(h, RichHandler)]
    yield root
    root.handlers = handlers
    root.setLevel(level)


class TestSetupLogging:
    """setup_logging 테스트"""

    def test_adds_single_rich_handler(self, clean_root_logger):
        setup_logging(0, LogConfig())
        setup_logging(0, LogConfig())

        rich_handlers = [h for h in clean_root_logger.handlers if isinstance(h, RichHandler)]
        assert len(rich_handlers) == 1
        assert clean_root_logger.level == logging.INFO

    def test_handler_writes_to_stderr(self, clean_root_logger):
        """로그는 stdout 결과와 분리된 stderr 콘솔로 출력"""
        setup_logging(0, LogConfig())

        handler = next(h for h in clean_root_logger.handlers if isinstance(h, RichHandler))
        assert handler.console is err_console
        assert err_console.stderr is True
        assert console.stderr is False

    def test_verbose_is_debug(self, clean_root_logger):
        setup_logging(1, LogConfig(level="WARNING"))
        assert clean_root_logger.level == logging.DEBUG

    def test_level_from_config(self, clean_root_logger):
        setup_logging(0, LogConfig(level="WARNING"))
        assert clean_root_logger.level == logging.WARNING

    def test_unknown_level_falls_back_to_info(self, clean_root_logger):
        setup_logging(0, LogConfig(level="NOPE"))
        assert clean_root_logger.level == logging.INFO


class TestPrintHelpers:
    """출력 헬퍼 테스트"""

    def test_print_report_table(self):
        with console.capture() as capture:
            print_report_table(["default/s1"], ["ns/s2"])

        output = capture.get()
        assert "default/s1" in output
        assert "encrypted" in output
        assert "ns/s2" in output
        assert "plaintext" in output

    @pytest.mark.parametrize(
        "func,symbol",
        [
            (print_success, SYMBOL_SUCCESS),
            (print_error, SYMBOL_ERROR),
            (print_warning, SYMBOL_WARNING),
            (print_info, SYMBOL_INFO),
        ],
    )
    def test_symbols(self, func, symbol):
        with patch.object(console, "print") as mock_print:
            func("message")

        printed = mock_print.call_args.args[0]
        assert symbol in printed
        assert "message" in printed
