"""
core/exceptions.py - 통합 예외 계층 구조

kms-reporter 전체에서 사용되는 예외 클래스들을 정의합니다.

예외 계층 구조:
    ReporterError (베이스)
    ├── RecordParseError (레코드 단위, 복구 가능)
    │   ├── InvalidKeyFormatError
    │   ├── InvalidValueFormatError
    │   ├── ProviderPrefixMismatchError
    │   └── GenerationConversionError
    ├── ConfigurationParseError (암호화 설정 파싱 실패, 실행 중단)
    ├── ConfigError (설정 조회/값 오류)
    ├── StoreError (etcd 조회 실패)
    └── RecorderError (결과 저장 실패)

Usage:
    from core.exceptions import RecordParseError

    try:
        classification = classify(key, value, "kmsprovider")
    except RecordParseError as e:
        diagnostics.append(e.kind)
"""

from enum import Enum
from typing import Any, Dict, Optional

# =============================================================================
# 베이스 예외
# =============================================================================


class ReporterError(Exception):
    """kms-reporter 기본 예외 클래스

    Attributes:
        message: 에러 메시지
        cause: 원인 예외 (체이닝용)
        details: 추가 상세 정보
    """

    def __init__(
        self,
        message: str,
        cause: Optional[Exception] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.cause = cause
        self.details = details or {}

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message}: {self.cause}"
        return self.message

    def to_dict(self) -> Dict[str, Any]:
        """예외 정보를 딕셔너리로 반환"""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "cause": str(self.cause) if self.cause else None,
            "details": self.details,
        }


# =============================================================================
# 레코드 파싱 예외
# =============================================================================


class ParseErrorKind(Enum):
    """레코드 파싱 실패 종류"""

    INVALID_KEY = "invalid_key"
    INVALID_VALUE = "invalid_value"
    PROVIDER_MISMATCH = "provider_mismatch"
    GENERATION_CONVERSION = "generation_conversion"


class RecordParseError(ReporterError):
    """etcd 레코드 하나를 분류하지 못한 경우

    배치 전체를 중단하지 않고 해당 레코드만 건너뜁니다.
    """

    kind = ParseErrorKind.INVALID_KEY

    def __init__(self, message: str, key: str, cause: Optional[Exception] = None):
        super().__init__(message, cause)
        self.key = key
        self.details["key"] = key
        self.details["kind"] = self.kind.value


class InvalidKeyFormatError(RecordParseError):
    """키가 /<scheme>/<kind>/<namespace>/<name> 형식이 아님"""

    kind = ParseErrorKind.INVALID_KEY

    def __init__(self, key: str):
        super().__init__(f"invalid key format: {key}", key)


class InvalidValueFormatError(RecordParseError):
    """암호화 값의 콜론 구분 필드가 부족함"""

    kind = ParseErrorKind.INVALID_VALUE

    def __init__(self, key: str, value: str):
        # 암호문 본문은 메시지에 남기지 않음
        super().__init__(f"invalid encrypted value format: {value[:40]}", key)


class ProviderPrefixMismatchError(RecordParseError):
    """프로바이더 필드가 설정된 이름 prefix로 시작하지 않음"""

    kind = ParseErrorKind.PROVIDER_MISMATCH

    def __init__(self, key: str, provider_field: str, prefix: str):
        super().__init__(f"invalid provider format: {provider_field!r} does not start with {prefix!r}", key)
        self.provider_field = provider_field
        self.details["provider_field"] = provider_field


class GenerationConversionError(RecordParseError):
    """프로바이더 이름 뒤의 세대 번호가 정수가 아님"""

    kind = ParseErrorKind.GENERATION_CONVERSION

    def __init__(self, key: str, suffix: str):
        super().__init__(f"failed to convert generation to int: {suffix!r}", key)
        self.suffix = suffix
        self.details["suffix"] = suffix


# =============================================================================
# 설정 / 외부 연동 예외
# =============================================================================


class ConfigurationParseError(ReporterError):
    """암호화 프로바이더 설정 문서 파싱 실패

    현재 실행을 중단시키며, 이전 보고서는 덮어쓰지 않습니다.
    """

    def __init__(self, reason: str = "", cause: Optional[Exception] = None):
        message = "failed to parse configuration"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message, cause)


class ConfigError(ReporterError):
    """설정 관련 예외"""

    def __init__(
        self,
        key: str,
        message: str,
        cause: Optional[Exception] = None,
    ):
        full_message = f"설정 오류 [{key}]: {message}"
        super().__init__(full_message, cause)
        self.config_key = key
        self.details["config_key"] = key


class StoreError(ReporterError):
    """etcd 스냅샷 조회 실패"""

    def __init__(
        self,
        endpoint: str,
        message: str,
        cause: Optional[Exception] = None,
    ):
        full_message = f"etcd 조회 오류 [{endpoint}]: {message}"
        super().__init__(full_message, cause)
        self.endpoint = endpoint
        self.details["endpoint"] = endpoint


class RecorderError(ReporterError):
    """보고서 ConfigMap 저장 실패"""

    def __init__(
        self,
        operation: str,
        message: str,
        status: Optional[int] = None,
        cause: Optional[Exception] = None,
    ):
        full_message = f"failed to {operation} ConfigMap: {message}"
        super().__init__(full_message, cause)
        self.operation = operation
        self.status = status
        self.details.update({"operation": operation, "status": status})


# =============================================================================
# 예외 유틸리티 함수
# =============================================================================


def is_not_found(error: Exception) -> bool:
    """Kubernetes API 404 오류인지 확인

    Args:
        error: 확인할 예외 (kubernetes.client.ApiException 등)

    Returns:
        리소스 없음 오류이면 True
    """
    if isinstance(error, RecorderError):
        return error.status == 404
    return getattr(error, "status", None) == 404
