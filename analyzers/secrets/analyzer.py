"""
analyzers/secrets/analyzer.py - 스냅샷 암호화 상태 집계

etcd 스냅샷의 모든 레코드를 분류하여 AnalysisReport 하나로 집계합니다.
분류 실패 레코드는 report.diagnostics에 남기고 건너뜁니다 (로깅은 호출자 몫).
"""

from __future__ import annotations

from collections.abc import Iterable

from core.exceptions import RecordParseError

from .classifier import classify
from .types import AnalysisReport, ParseDiagnostic, RawRecord


def analyze(
    records: Iterable[RawRecord],
    expected_generation: int,
    provider_name_prefix: str,
) -> AnalysisReport:
    """레코드 배치 분석

    Args:
        records: 입력 순서대로의 etcd 레코드
        expected_generation: 현재 프로바이더 세대 번호 (identity면 -1)
        provider_name_prefix: KMS 프로바이더 이름 prefix

    Returns:
        AnalysisReport. 빈 입력이면 두 목록 모두 비어 있고 all_match_expected_generation=True
    """
    report = AnalysisReport(expected_generation=expected_generation)

    for record in records:
        try:
            result = classify(record.key, record.value, provider_name_prefix)
        except RecordParseError as e:
            report.diagnostics.append(ParseDiagnostic.from_error(e))
            continue

        if result.generation != expected_generation:
            report.all_match_expected_generation = False

        if result.encrypted:
            report.encrypted_identities.append(result.identity)
        else:
            report.plaintext_identities.append(result.identity)

    return report
