"""
shared/kube/recorder.py - 분석 결과 ConfigMap 기록

kms-reporter ConfigMap 데이터 형식:
    ENCRYPTED:               "ns/a,ns/b" 또는 "ALL_SECRETS" 또는 ""
    UNENCRYPTED:             "ns/c" 또는 "ALL_SECRETS" 또는 ""
    ENCRYPTED_BY_LATEST_SEQ: "true" / "false" (평문 Secret이 없을 때만)
"""

from __future__ import annotations

import logging

from kubernetes import client
from kubernetes.client import ApiException

from analyzers.secrets.types import AnalysisReport
from core.config import settings
from core.exceptions import RecorderError, is_not_found

logger = logging.getLogger(__name__)


def format_identity_lists(encrypted: list[str], plaintext: list[str]) -> tuple[str, str]:
    """Secret 목록을 ConfigMap 값으로 변환

    한쪽만 비어 있으면 다른 쪽은 ALL_SECRETS로 기록합니다.

    Returns:
        (encrypted 값, unencrypted 값)
    """
    if encrypted and plaintext:
        return ",".join(encrypted), ",".join(plaintext)
    if plaintext:
        return "", settings.ALL_SECRETS_PATTERN
    if encrypted:
        return settings.ALL_SECRETS_PATTERN, ""

    logger.warning("기록할 Secret이 없습니다")
    return "", ""


def build_configmap_data(report: AnalysisReport) -> dict[str, str]:
    """AnalysisReport → ConfigMap data"""
    encrypted_value, unencrypted_value = format_identity_lists(
        report.encrypted_identities, report.plaintext_identities
    )
    data = {
        settings.REPORT_ENCRYPTED_KEY: encrypted_value,
        settings.REPORT_UNENCRYPTED_KEY: unencrypted_value,
    }
    if report.all_encrypted:
        data[settings.REPORT_LATEST_SEQ_KEY] = "true" if report.all_match_expected_generation else "false"
    return data


class ConfigMapRecorder:
    """kms-reporter ConfigMap 생성/갱신"""

    def __init__(
        self,
        api: client.CoreV1Api,
        name: str = settings.REPORT_CONFIGMAP_NAME,
        timeout: int = settings.API_TIMEOUT,
    ):
        self.api = api
        self.name = name
        self.timeout = timeout

    def record(self, namespace: str, report: AnalysisReport) -> None:
        """분석 결과 기록 (없으면 생성, 있으면 갱신)

        Raises:
            RecorderError: Kubernetes API 실패
        """
        data = build_configmap_data(report)

        try:
            existing = self.api.read_namespaced_config_map(self.name, namespace, _request_timeout=self.timeout)
        except ApiException as e:
            if not is_not_found(e):
                raise RecorderError("get", str(e.reason), status=e.status, cause=e) from e
            self._create(namespace, data)
            return

        self._update(existing, namespace, data)

    def _create(self, namespace: str, data: dict[str, str]) -> None:
        body = client.V1ConfigMap(
            metadata=client.V1ObjectMeta(name=self.name, namespace=namespace),
            data=data,
        )
        try:
            self.api.create_namespaced_config_map(namespace, body, _request_timeout=self.timeout)
        except ApiException as e:
            raise RecorderError("create", str(e.reason), status=e.status, cause=e) from e
        logger.info(f"ConfigMap {self.name} created successfully")

    def _update(self, configmap: client.V1ConfigMap, namespace: str, data: dict[str, str]) -> None:
        merged = dict(configmap.data or {})
        merged.update(data)
        # 평문 Secret이 있으면 최신 세대 여부 키 제거
        if settings.REPORT_LATEST_SEQ_KEY not in data:
            merged.pop(settings.REPORT_LATEST_SEQ_KEY, None)
        configmap.data = merged

        try:
            self.api.replace_namespaced_config_map(self.name, namespace, configmap, _request_timeout=self.timeout)
        except ApiException as e:
            raise RecorderError("update", str(e.reason), status=e.status, cause=e) from e
        logger.info(f"ConfigMap {self.name} updated successfully")
