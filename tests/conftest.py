"""
tests/conftest.py - pytest 공통 픽스처

etcd 레코드 샘플, 암호화 설정 YAML, Kubernetes API 모킹을 제공합니다.

Usage:
    def test_something(sample_records, kms_config_yaml, mock_core_api):
        pass
"""

import os
import sys
from pathlib import Path
from unittest.mock import MagicMock

import pytest

# 프로젝트 루트를 sys.path에 추가
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from analyzers.secrets.types import RawRecord  # noqa: E402

# =============================================================================
# 환경 설정
# =============================================================================


@pytest.fixture(autouse=True)
def setup_test_environment(monkeypatch):
    """KMS_REPORTER_* 환경변수가 테스트에 섞이지 않도록 제거"""
    for name in list(os.environ):
        if name.startswith("KMS_REPORTER_"):
            monkeypatch.delenv(name, raising=False)
    yield


# =============================================================================
# etcd 레코드 픽스처
# =============================================================================


@pytest.fixture
def sample_records():
    """암호화 1건 + 평문 1건"""
    return [
        RawRecord("/registry/secrets/default/s1", "k8s:enc:kms:v2:kmsprovider1:x"),
        RawRecord("/registry/secrets/ns/s2", "plain"),
    ]


@pytest.fixture
def encrypted_records():
    """모두 kmsprovider2로 암호화된 레코드"""
    return [
        RawRecord("/registry/secrets/default/a", "k8s:enc:kms:v2:kmsprovider2:aaa"),
        RawRecord("/registry/secrets/kube-system/b", "k8s:enc:kms:v2:kmsprovider2:bbb"),
    ]


# =============================================================================
# 암호화 설정 픽스처
# =============================================================================


KMS_CONFIG_YAML = """\
apiVersion: apiserver.config.k8s.io/v1
kind: EncryptionConfiguration
resources:
  - resources:
      - secrets
    providers:
      - kms:
          apiVersion: v2
          name: kmsprovider2
          endpoint: unix:///opt/azurekms.socket
      - kms:
          apiVersion: v2
          name: kmsprovider1
          endpoint: unix:///opt/azurekms-old.socket
      - identity: {}
"""

IDENTITY_CONFIG_YAML = """\
apiVersion: apiserver.config.k8s.io/v1
kind: EncryptionConfiguration
resources:
  - resources:
      - secrets
    providers:
      - identity: {}
"""


@pytest.fixture
def kms_config_yaml():
    """kmsprovider2가 현재 프로바이더인 설정"""
    return KMS_CONFIG_YAML


@pytest.fixture
def identity_config_yaml():
    """identity 프로바이더만 있는 설정"""
    return IDENTITY_CONFIG_YAML


# =============================================================================
# Kubernetes API 모킹
# =============================================================================


@pytest.fixture
def mock_core_api():
    """CoreV1Api 모킹"""
    return MagicMock()


def make_api_exception(status: int, reason: str = ""):
    """kubernetes ApiException 생성 헬퍼"""
    from kubernetes.client import ApiException

    return ApiException(status=status, reason=reason or ("Not Found" if status == 404 else "Error"))


@pytest.fixture
def api_exception():
    """ApiException 팩토리"""
    return make_api_exception
