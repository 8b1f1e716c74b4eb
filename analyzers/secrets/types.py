"""
analyzers/secrets/types.py - 암호화 상태 분석 데이터 구조

RawRecord → Classification → AnalysisReport 흐름에서 사용하는 값 타입과
암호화 설정(EncryptionConfiguration) 모델을 정의합니다.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from core.config import settings
from core.exceptions import ParseErrorKind, RecordParseError

# identity(무암호화) 프로바이더만 설정된 경우의 기대 세대 번호
IDENTITY_GENERATION = settings.IDENTITY_GENERATION


# =============================================================================
# etcd 레코드
# =============================================================================


@dataclass(frozen=True)
class RawRecord:
    """etcd 키/값 한 쌍"""

    key: str
    value: str

    @classmethod
    def from_bytes(cls, key: bytes, value: bytes) -> RawRecord:
        """etcd 응답 바이트에서 생성 (암호문은 UTF-8이 아니므로 대체 문자 허용)"""
        return cls(
            key=key.decode("utf-8", errors="replace"),
            value=value.decode("utf-8", errors="replace"),
        )


@dataclass(frozen=True)
class Classification:
    """레코드 분류 결과

    Attributes:
        encrypted: KMS envelope 여부
        identity: "<namespace>/<name>"
        generation: 암호화한 프로바이더 세대 번호 (평문이면 0)
    """

    encrypted: bool
    identity: str
    generation: int = 0


# =============================================================================
# 암호화 설정 (EncryptionConfiguration)
# =============================================================================


@dataclass(frozen=True)
class KMSProvider:
    """kms 프로바이더 항목"""

    name: str
    endpoint: str = ""
    api_version: str = ""


@dataclass(frozen=True)
class ProviderEntry:
    """providers 목록의 항목 하나 (kms 또는 identity)"""

    kms: KMSProvider | None = None
    identity: bool = False

    @property
    def is_kms(self) -> bool:
        return self.kms is not None


@dataclass(frozen=True)
class ResourceRule:
    """resources 목록의 규칙 하나"""

    providers: tuple[ProviderEntry, ...] = ()
    resources: tuple[str, ...] = ()


@dataclass(frozen=True)
class ProviderConfig:
    """암호화 설정 문서"""

    api_version: str = ""
    kind: str = ""
    resources: tuple[ResourceRule, ...] = ()

    def kms_providers(self) -> list[KMSProvider]:
        """문서 순서대로 모든 KMS 프로바이더"""
        return [p.kms for rule in self.resources for p in rule.providers if p.kms is not None]


# =============================================================================
# 분석 결과
# =============================================================================


@dataclass(frozen=True)
class ParseDiagnostic:
    """분류에 실패해 보고서에서 제외된 레코드"""

    key: str
    kind: ParseErrorKind
    message: str

    @classmethod
    def from_error(cls, error: RecordParseError) -> ParseDiagnostic:
        return cls(key=error.key, kind=error.kind, message=error.message)

    def __str__(self) -> str:
        return f"[{self.kind.value}] {self.message}"


@dataclass
class AnalysisReport:
    """스냅샷 1회 분석 결과

    파싱 실패 레코드는 두 목록 어디에도 들어가지 않고 diagnostics에만 남습니다.
    """

    encrypted_identities: list[str] = field(default_factory=list)
    plaintext_identities: list[str] = field(default_factory=list)
    all_match_expected_generation: bool = True
    expected_generation: int = IDENTITY_GENERATION
    diagnostics: list[ParseDiagnostic] = field(default_factory=list)

    @property
    def classified_count(self) -> int:
        return len(self.encrypted_identities) + len(self.plaintext_identities)

    @property
    def skipped_count(self) -> int:
        return len(self.diagnostics)

    @property
    def all_encrypted(self) -> bool:
        """평문 Secret이 하나도 없는지"""
        return not self.plaintext_identities

    def to_dict(self) -> dict:
        """딕셔너리로 변환 (JSON 출력용)"""
        return {
            "encrypted": list(self.encrypted_identities),
            "plaintext": list(self.plaintext_identities),
            "all_match_expected_generation": self.all_match_expected_generation,
            "expected_generation": self.expected_generation,
            "skipped": [{"key": d.key, "kind": d.kind.value, "message": d.message} for d in self.diagnostics],
        }
