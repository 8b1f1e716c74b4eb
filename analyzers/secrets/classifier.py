"""
analyzers/secrets/classifier.py - etcd Secret 레코드 분류

샘플:
    key:   /registry/secrets/kube-system/bootstrap-token-ldeus6
    value: k8s:enc:kms:v2:kmsprovider1:<ciphertext>

암호화 여부는 envelope prefix로만 판단합니다 (암호문 검증 없음).
"""

from __future__ import annotations

from core.config import settings
from core.exceptions import (
    GenerationConversionError,
    InvalidKeyFormatError,
    InvalidValueFormatError,
    ProviderPrefixMismatchError,
)

from .types import Classification

ENVELOPE_MARKER = settings.ENVELOPE_MARKER

# key: "", scheme, kind, namespace, name
_MIN_KEY_SEGMENTS = 5
# value: k8s, enc, kms, version, provider, ciphertext
_MIN_VALUE_FIELDS = 6
_PROVIDER_FIELD_INDEX = 4


def is_encrypted(value: str) -> bool:
    """KMS envelope 여부"""
    return value.startswith(ENVELOPE_MARKER)


def parse_identity(key: str) -> str:
    """키에서 "<namespace>/<name>" 추출

    name은 네 번째 세그먼트만 사용하며 이후 세그먼트는 버립니다.
    """
    segments = key.split("/")
    if len(segments) < _MIN_KEY_SEGMENTS:
        raise InvalidKeyFormatError(key)
    return f"{segments[3]}/{segments[4]}"


def parse_generation(key: str, value: str, provider_name_prefix: str) -> int:
    """암호화 값에서 프로바이더 세대 번호 추출"""
    fields = value.split(":")
    if len(fields) < _MIN_VALUE_FIELDS:
        raise InvalidValueFormatError(key, value)

    provider_field = fields[_PROVIDER_FIELD_INDEX]
    if not provider_field.startswith(provider_name_prefix):
        raise ProviderPrefixMismatchError(key, provider_field, provider_name_prefix)

    suffix = provider_field[len(provider_name_prefix) :]
    # 빈 suffix, 부호, 비ASCII 숫자는 모두 변환 실패
    if not (suffix.isascii() and suffix.isdigit()):
        raise GenerationConversionError(key, suffix)
    return int(suffix)


def classify(key: str, value: str, provider_name_prefix: str) -> Classification:
    """etcd 키/값 한 쌍을 분류

    Args:
        key: etcd 키
        value: etcd 값
        provider_name_prefix: KMS 프로바이더 이름 prefix (예: "kmsprovider")

    Returns:
        Classification

    Raises:
        RecordParseError: 키 또는 암호화 값 형식 오류
    """
    encrypted = is_encrypted(value)
    identity = parse_identity(key)

    generation = 0
    if encrypted:
        generation = parse_generation(key, value, provider_name_prefix)

    return Classification(encrypted=encrypted, identity=identity, generation=generation)
