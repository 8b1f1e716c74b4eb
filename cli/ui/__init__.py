# cli/ui - 콘솔 출력 컴포넌트 (rich)
"""
콘솔 출력 모듈
"""

from .console import (
    SYMBOL_ERROR,
    SYMBOL_INFO,
    SYMBOL_SUCCESS,
    SYMBOL_WARNING,
    console,
    err_console,
    get_console,
    print_error,
    print_header,
    print_info,
    print_report_table,
    print_success,
    print_warning,
    setup_logging,
)

__all__ = [
    "SYMBOL_ERROR",
    "SYMBOL_INFO",
    "SYMBOL_SUCCESS",
    "SYMBOL_WARNING",
    "console",
    "err_console",
    "get_console",
    "print_error",
    "print_header",
    "print_info",
    "print_report_table",
    "print_success",
    "print_warning",
    "setup_logging",
]
