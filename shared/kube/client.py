"""
shared/kube/client.py - Kubernetes API 클라이언트

- 설정 조회용 클라이언트는 항상 in-cluster 설정을 사용
- 기록용 클라이언트는 kubeconfig가 주어지면 해당 클러스터를 사용
"""

from __future__ import annotations

import logging

from kubernetes import client, config
from kubernetes.client import ApiException

from core.config import settings
from core.exceptions import ConfigError, is_not_found

logger = logging.getLogger(__name__)


def load_core_api(kubeconfig: str | None = None) -> client.CoreV1Api:
    """CoreV1Api 생성

    Args:
        kubeconfig: kubeconfig 파일 경로 (None이면 in-cluster 설정)
    """
    if kubeconfig:
        logger.info(f"kubeconfig 사용: {kubeconfig}")
        api_client = config.new_client_from_config(config_file=kubeconfig)
        return client.CoreV1Api(api_client)

    configuration = client.Configuration()
    config.load_incluster_config(client_configuration=configuration)
    return client.CoreV1Api(client.ApiClient(configuration))


class EncryptionConfigSource:
    """encryption-provider-config ConfigMap에서 암호화 설정 YAML 조회"""

    def __init__(
        self,
        api: client.CoreV1Api,
        name: str = settings.ENCRYPTION_CONFIG_NAME,
        data_key: str = settings.ENCRYPTION_CONFIG_KEY,
        timeout: int = settings.API_TIMEOUT,
    ):
        self.api = api
        self.name = name
        self.data_key = data_key
        self.timeout = timeout

    def read(self, namespace: str) -> str:
        """암호화 설정 원문 반환

        Raises:
            ConfigError: ConfigMap 또는 데이터 키가 없거나 조회 실패
        """
        try:
            cm = self.api.read_namespaced_config_map(self.name, namespace, _request_timeout=self.timeout)
        except ApiException as e:
            if is_not_found(e):
                raise ConfigError(self.name, f"ConfigMap이 {namespace}에 없습니다", cause=e) from e
            raise ConfigError(self.name, "ConfigMap 조회 실패", cause=e) from e

        data = cm.data or {}
        if self.data_key not in data:
            raise ConfigError(self.data_key, f"{self.data_key} not found in ConfigMap data")
        return str(data[self.data_key])
