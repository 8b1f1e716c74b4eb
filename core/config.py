"""
core/config.py - 중앙 설정 관리

애플리케이션 전역 상수와 환경변수 헬퍼를 제공합니다.

Usage:
    from core.config import settings, get_env_int

    interval = get_env_int("KMS_REPORTER_RUN_INTERVAL", settings.DEFAULT_RUN_INTERVAL_SECONDS)
"""

import os
from dataclasses import dataclass, field
from pathlib import Path

from core import __version__

# 환경변수 prefix (click envvar와 공유)
ENV_PREFIX = "KMS_REPORTER_"


@dataclass(frozen=True)
class Settings:
    """전역 설정 (불변)"""

    # etcd 저장 구조
    SECRET_KEY_PREFIX: str = "/registry/secrets"
    ENVELOPE_MARKER: str = "k8s:enc:kms:"

    # 암호화 설정 ConfigMap
    ENCRYPTION_CONFIG_NAME: str = "encryption-provider-config"
    ENCRYPTION_CONFIG_KEY: str = "encryption-provider-config.yaml"

    # 보고서 ConfigMap
    REPORT_CONFIGMAP_NAME: str = "kms-reporter"
    REPORT_ENCRYPTED_KEY: str = "ENCRYPTED"
    REPORT_UNENCRYPTED_KEY: str = "UNENCRYPTED"
    REPORT_LATEST_SEQ_KEY: str = "ENCRYPTED_BY_LATEST_SEQ"
    ALL_SECRETS_PATTERN: str = "ALL_SECRETS"

    # 실행 기본값
    DEFAULT_PROVIDER_NAME: str = "kmsprovider"
    DEFAULT_RUN_INTERVAL_SECONDS: int = 300
    API_TIMEOUT: int = 5

    # identity(무암호화) 프로바이더의 세대 번호
    IDENTITY_GENERATION: int = -1

    TRUE_VALUES: tuple = field(default=("true", "1", "yes", "on"))
    FALSE_VALUES: tuple = field(default=("false", "0", "no", "off"))


settings = Settings()


def get_project_root() -> Path:
    """프로젝트 루트 경로"""
    return Path(__file__).resolve().parent.parent


def get_version() -> str:
    """버전 문자열 반환"""
    return __version__


# =============================================================================
# 환경변수 헬퍼
# =============================================================================


def get_env_str(name: str, default: str | None = None) -> str | None:
    """환경변수 문자열 (빈 문자열은 미설정으로 취급)"""
    value = os.environ.get(name)
    if value is None or value.strip() == "":
        return default
    return value


def get_env_bool(name: str, default: bool = False) -> bool:
    """환경변수를 bool로 변환

    인식할 수 없는 값이면 default를 반환합니다.
    """
    value = os.environ.get(name)
    if value is None:
        return default
    lowered = value.strip().lower()
    if lowered in settings.TRUE_VALUES:
        return True
    if lowered in settings.FALSE_VALUES:
        return False
    return default


def get_env_int(name: str, default: int = 0) -> int:
    """환경변수를 int로 변환 (실패 시 default)"""
    value = os.environ.get(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


@dataclass
class LogConfig:
    """로깅 설정"""

    level: str = "INFO"
    format: str = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"
    date_format: str = "%Y-%m-%d %H:%M:%S"

    @classmethod
    def from_env(cls) -> "LogConfig":
        """LOG_LEVEL / LOG_FORMAT 환경변수에서 로드"""
        default = cls()
        return cls(
            level=(get_env_str("LOG_LEVEL") or default.level).upper(),
            format=get_env_str("LOG_FORMAT") or default.format,
            date_format=default.date_format,
        )
