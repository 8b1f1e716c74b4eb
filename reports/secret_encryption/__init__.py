"""
reports/secret_encryption - Secret 저장 암호화 상태 보고

etcd 스냅샷 조회 → 기대 세대 번호 결정 → 분석 → ConfigMap 기록
"""

from .reporter import SecretEncryptionReporter, run_periodically

__all__ = ["SecretEncryptionReporter", "run_periodically"]
