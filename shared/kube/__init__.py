"""
shared/kube - Kubernetes API 연동

- load_core_api: in-cluster / kubeconfig 기반 CoreV1Api 생성
- EncryptionConfigSource: encryption-provider-config ConfigMap 조회
- ConfigMapRecorder: 분석 결과를 kms-reporter ConfigMap에 기록
"""

from .client import EncryptionConfigSource, load_core_api
from .recorder import ConfigMapRecorder, build_configmap_data, format_identity_lists

__all__ = [
    "EncryptionConfigSource",
    "load_core_api",
    "ConfigMapRecorder",
    "build_configmap_data",
    "format_identity_lists",
]
