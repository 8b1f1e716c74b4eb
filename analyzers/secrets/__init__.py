"""
analyzers/secrets - etcd Secret 저장 암호화 상태 분석

구성:
    - classifier: etcd 키/값 한 쌍 분류
    - provider: 암호화 설정에서 현재 KMS 프로바이더 세대 번호 결정
    - analyzer: 스냅샷 전체를 분류하여 AnalysisReport로 집계

Usage:
    from analyzers.secrets import analyze, resolve_expected_generation

    expected = resolve_expected_generation(config_yaml, "kmsprovider")
    report = analyze(records, expected, "kmsprovider")
"""

from .analyzer import analyze
from .classifier import classify, is_encrypted
from .provider import parse_provider_config, resolve_expected_generation
from .types import (
    IDENTITY_GENERATION,
    AnalysisReport,
    Classification,
    KMSProvider,
    ParseDiagnostic,
    ProviderConfig,
    ProviderEntry,
    RawRecord,
    ResourceRule,
)

__all__ = [
    "IDENTITY_GENERATION",
    "AnalysisReport",
    "Classification",
    "KMSProvider",
    "ParseDiagnostic",
    "ProviderConfig",
    "ProviderEntry",
    "RawRecord",
    "ResourceRule",
    "analyze",
    "classify",
    "is_encrypted",
    "parse_provider_config",
    "resolve_expected_generation",
]
