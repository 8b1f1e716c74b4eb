"""
reports/secret_encryption/reporter.py - 1회 실행 및 주기 실행

실행 순서:
    1. etcd에서 /registry/secrets prefix 스냅샷 조회 (비어 있으면 기록 없이 종료)
    2. encryption-provider-config에서 기대 세대 번호 결정 (실패 시 기록 없이 실행 실패)
    3. 분석 후 파싱 실패 레코드 로깅
    4. kms-reporter ConfigMap 기록

설정 파싱에 실패하면 보고서를 쓰지 않으므로 이전 보고서가 유지됩니다.
"""

from __future__ import annotations

import logging
import threading
from typing import Any

from analyzers.secrets import AnalysisReport, analyze, resolve_expected_generation
from core.config import settings
from core.exceptions import ReporterError

logger = logging.getLogger(__name__)


class SecretEncryptionReporter:
    """Secret 암호화 상태 보고기

    Args:
        store: get_prefix(prefix) -> list[RawRecord] 를 제공하는 etcd 클라이언트
        config_source: read(namespace) -> str 로 암호화 설정 YAML을 제공
        recorder: record(namespace, report) 로 결과 기록
        provider_name_prefix: KMS 프로바이더 이름 prefix
    """

    def __init__(
        self,
        store: Any,
        config_source: Any,
        recorder: Any,
        provider_name_prefix: str = settings.DEFAULT_PROVIDER_NAME,
        key_prefix: str = settings.SECRET_KEY_PREFIX,
    ):
        self.store = store
        self.config_source = config_source
        self.recorder = recorder
        self.provider_name_prefix = provider_name_prefix
        self.key_prefix = key_prefix

    def analyze(self, namespace: str) -> AnalysisReport | None:
        """스냅샷 조회 및 분석 (기록하지 않음)

        Returns:
            AnalysisReport. etcd에 Secret이 없으면 None
        """
        records = self.store.get_prefix(self.key_prefix)
        if not records:
            logger.warning("No secrets found in etcd")
            return None

        config_text = self.config_source.read(namespace)
        expected_generation = resolve_expected_generation(config_text, self.provider_name_prefix)
        logger.debug(f"기대 세대 번호: {expected_generation}")

        report = analyze(records, expected_generation, self.provider_name_prefix)
        for diagnostic in report.diagnostics:
            logger.warning(f"Failed to parse secret: {diagnostic}")

        logger.info(
            f"분석 완료: 암호화 {len(report.encrypted_identities)}건, "
            f"평문 {len(report.plaintext_identities)}건, 건너뜀 {report.skipped_count}건"
        )
        return report

    def run_once(self, namespace: str) -> AnalysisReport | None:
        """분석 후 결과 기록

        Raises:
            ReporterError: 조회/설정/기록 실패
        """
        report = self.analyze(namespace)
        if report is None:
            return None

        self.recorder.record(namespace, report)
        logger.info("Read etcd successfully")
        return report


def run_periodically(
    reporter: SecretEncryptionReporter,
    namespace: str,
    interval: float,
    stop_event: threading.Event,
) -> int:
    """즉시 1회 실행 후 interval 초마다 반복 (stop_event가 설정될 때까지)

    실행 단위 실패는 로깅만 하고 다음 주기를 계속합니다.

    Returns:
        실행 횟수
    """
    runs = 0
    while not stop_event.is_set():
        runs += 1
        try:
            reporter.run_once(namespace)
        except ReporterError as e:
            logger.error(f"Failed to read etcd: {e}")
        except Exception:
            logger.exception("Failed to read etcd")

        if stop_event.wait(interval):
            break

    logger.info("Received termination signal, shutting down gracefully...")
    return runs
