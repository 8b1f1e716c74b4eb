"""
analyzers/secrets/provider.py - 현재 KMS 프로바이더 세대 번호 결정

EncryptionConfiguration 문서 예:

    apiVersion: apiserver.config.k8s.io/v1
    kind: EncryptionConfiguration
    resources:
      - resources: [secrets]
        providers:
          - kms:
              apiVersion: v2
              name: kmsprovider2
              endpoint: unix:///opt/kms.sock
          - identity: {}

문서 순서대로 처음 나오는 "<prefix><숫자>" 이름의 KMS 프로바이더가 현재 프로바이더입니다.
"""

from __future__ import annotations

import logging
import re
from typing import Any

import yaml  # type: ignore[import-untyped]

from core.exceptions import ConfigurationParseError

from .types import IDENTITY_GENERATION, KMSProvider, ProviderConfig, ProviderEntry, ResourceRule

logger = logging.getLogger(__name__)


# =============================================================================
# 파싱
# =============================================================================


def _as_list(value: Any, what: str) -> list:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ConfigurationParseError(f"{what} must be a list")
    return value


def _as_str(value: Any, what: str) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ConfigurationParseError(f"{what} must be a string")
    return value


def _parse_provider(raw: Any) -> ProviderEntry:
    if not isinstance(raw, dict):
        raise ConfigurationParseError("provider must be a mapping")

    kms = None
    raw_kms = raw.get("kms")
    if raw_kms is not None:
        if not isinstance(raw_kms, dict):
            raise ConfigurationParseError("kms provider must be a mapping")
        kms = KMSProvider(
            name=_as_str(raw_kms.get("name"), "kms.name"),
            endpoint=_as_str(raw_kms.get("endpoint"), "kms.endpoint"),
            api_version=_as_str(raw_kms.get("apiVersion"), "kms.apiVersion"),
        )

    return ProviderEntry(kms=kms, identity="identity" in raw)


def _parse_rule(raw: Any) -> ResourceRule:
    if not isinstance(raw, dict):
        raise ConfigurationParseError("resource rule must be a mapping")
    providers = tuple(_parse_provider(p) for p in _as_list(raw.get("providers"), "providers"))
    resources = tuple(str(r) for r in _as_list(raw.get("resources"), "resources"))
    return ResourceRule(providers=providers, resources=resources)


def parse_provider_config(text: str) -> ProviderConfig:
    """암호화 설정 YAML 파싱

    Raises:
        ConfigurationParseError: YAML 문법 오류 또는 스키마 불일치
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigurationParseError(cause=e) from e

    # 빈 문서는 프로바이더가 없는 설정
    if data is None:
        return ProviderConfig()
    if not isinstance(data, dict):
        raise ConfigurationParseError("document must be a mapping")

    rules = tuple(_parse_rule(r) for r in _as_list(data.get("resources"), "resources"))
    return ProviderConfig(
        api_version=str(data.get("apiVersion") or ""),
        kind=str(data.get("kind") or ""),
        resources=rules,
    )


# =============================================================================
# 세대 번호 결정
# =============================================================================


def _generation_pattern(provider_name_prefix: str) -> re.Pattern[str]:
    return re.compile(re.escape(provider_name_prefix) + r"([0-9]+)")


def resolve_expected_generation(config: ProviderConfig | str, provider_name_prefix: str) -> int:
    """현재 설정된 KMS 프로바이더의 세대 번호

    Args:
        config: ProviderConfig 또는 YAML 원문
        provider_name_prefix: KMS 프로바이더 이름 prefix

    Returns:
        세대 번호. KMS 프로바이더가 없으면 IDENTITY_GENERATION (-1)

    Raises:
        ConfigurationParseError: YAML 원문 파싱 실패
    """
    if isinstance(config, str):
        config = parse_provider_config(config)

    pattern = _generation_pattern(provider_name_prefix)
    for kms in config.kms_providers():
        match = pattern.search(kms.name)
        if match is None:
            logger.debug("KMS 프로바이더 이름 불일치, 건너뜀: %s", kms.name)
            continue
        return int(match.group(1))

    return IDENTITY_GENERATION
