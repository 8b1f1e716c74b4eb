"""
cli/ui/console.py - Rich 콘솔 유틸리티

일관된 콘솔 출력과 로깅 핸들러 설정
"""

import logging
import platform

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from core.config import LogConfig

# kubernetes / urllib3 노이즈 로그 제한
logging.getLogger("urllib3.connectionpool").setLevel(logging.WARNING)
logging.getLogger("kubernetes.client.rest").setLevel(logging.WARNING)


def get_console(stderr: bool = False) -> Console:
    """Rich Console 인스턴스를 생성하고 반환합니다.

    Args:
        stderr: True이면 표준 에러로 출력 (로그 전용)
    """
    is_windows = platform.system().lower() == "windows"

    return Console(
        color_system="auto",
        highlight=False,
        soft_wrap=True,
        markup=True,
        emoji=not is_windows,
        stderr=stderr,
    )


# 전역 콘솔 인스턴스
console = get_console()

# 로그 전용 콘솔 (stdout 결과 출력과 분리)
err_console = get_console(stderr=True)


def setup_logging(verbose: int = 0, config: LogConfig | None = None) -> None:
    """루트 logger에 Rich 핸들러 설정

    Args:
        verbose: 0이면 LOG_LEVEL(기본 INFO), 1 이상이면 DEBUG
        config: 로깅 설정 (None이면 환경변수에서 로드)
    """
    config = config or LogConfig.from_env()
    level = logging.DEBUG if verbose else getattr(logging, config.level, logging.INFO)

    root = logging.getLogger()
    root.setLevel(level)

    # 이미 Rich 핸들러가 있으면 레벨만 갱신
    if any(isinstance(h, RichHandler) for h in root.handlers):
        return

    handler = RichHandler(console=err_console, rich_tracebacks=True, show_path=False)
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
    root.addHandler(handler)


# =============================================================================
# 표준 출력 스타일
# =============================================================================

SYMBOL_SUCCESS = "✓"
SYMBOL_ERROR = "✗"
SYMBOL_WARNING = "!"
SYMBOL_INFO = "•"


def print_success(message: str) -> None:
    """성공 메시지 출력 (초록색 체크마크)"""
    console.print(f"[green]{SYMBOL_SUCCESS} {message}[/green]")


def print_error(message: str) -> None:
    """에러 메시지 출력 (빨간색 X)"""
    console.print(f"[red]{SYMBOL_ERROR} {message}[/red]")


def print_warning(message: str) -> None:
    """경고 메시지 출력 (노란색 경고)"""
    console.print(f"[yellow]{SYMBOL_WARNING} {message}[/yellow]")


def print_info(message: str) -> None:
    """정보 메시지 출력 (파란색 정보)"""
    console.print(f"[blue]{SYMBOL_INFO} {message}[/blue]")


def print_header(title: str) -> None:
    """섹션 헤더 출력"""
    console.print()
    console.print(f"[bold underline cyan]{title}[/bold underline cyan]")
    console.print()


def print_report_table(encrypted: list[str], plaintext: list[str]) -> None:
    """Secret별 암호화 상태 테이블 출력

    Args:
        encrypted: 암호화된 Secret ("namespace/name")
        plaintext: 평문 Secret
    """
    table = Table(show_header=True, header_style="bold")
    table.add_column("Secret", style="cyan")
    table.add_column("상태", justify="center")

    for identity in encrypted:
        table.add_row(identity, "[green]encrypted[/green]")
    for identity in plaintext:
        table.add_row(identity, "[red]plaintext[/red]")

    console.print(table)
