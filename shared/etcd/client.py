"""
shared/etcd/client.py - etcd v3 prefix 조회 클라이언트

etcd의 JSON gRPC gateway(POST /v3/kv/range)를 사용합니다.
키/값은 base64로 인코딩되어 오가며, 클라이언트 인증서(mTLS)로 접속합니다.

Usage:
    client = EtcdClient("etcd-0:2379", cert="client.crt", key="client.key", ca_cert="ca.crt")
    records = client.get_prefix("/registry/secrets")
"""

from __future__ import annotations

import base64
import logging
from typing import Any

import requests

from analyzers.secrets.types import RawRecord
from core.config import settings
from core.exceptions import StoreError

logger = logging.getLogger(__name__)

RANGE_PATH = "/v3/kv/range"


def prefix_range_end(prefix: bytes) -> bytes:
    """prefix 조회용 range_end (마지막 바이트 +1)

    모든 바이트가 0xff이면 b"\\x00" (키 공간 끝까지)을 반환합니다.
    """
    end = bytearray(prefix)
    for i in range(len(end) - 1, -1, -1):
        if end[i] < 0xFF:
            end[i] += 1
            return bytes(end[: i + 1])
    return b"\x00"


def _b64(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


def _normalize_endpoint(endpoint: str) -> str:
    if "://" not in endpoint:
        endpoint = f"https://{endpoint}"
    return endpoint.rstrip("/")


class EtcdClient:
    """etcd v3 JSON gateway 클라이언트"""

    def __init__(
        self,
        endpoint: str,
        cert: str | None = None,
        key: str | None = None,
        ca_cert: str | None = None,
        timeout: int = settings.API_TIMEOUT,
        session: requests.Session | None = None,
    ):
        if not endpoint:
            raise StoreError("-", "etcd endpoint가 설정되지 않았습니다")

        self.endpoint = _normalize_endpoint(endpoint)
        self.timeout = timeout
        self._session = session or requests.Session()
        if cert and key:
            self._session.cert = (cert, key)
        if ca_cert:
            self._session.verify = ca_cert

    def _range(self, body: dict[str, Any]) -> dict[str, Any]:
        url = f"{self.endpoint}{RANGE_PATH}"
        try:
            response = self._session.post(url, json=body, timeout=self.timeout)
            response.raise_for_status()
            data: dict[str, Any] = response.json()
        except requests.RequestException as e:
            raise StoreError(self.endpoint, "range 요청 실패", cause=e) from e
        except ValueError as e:
            raise StoreError(self.endpoint, "응답 JSON 파싱 실패", cause=e) from e
        return data

    def get_prefix(self, prefix: str) -> list[RawRecord]:
        """prefix로 시작하는 모든 키/값 조회 (키 순서)"""
        prefix_bytes = prefix.encode("utf-8")
        data = self._range(
            {
                "key": _b64(prefix_bytes),
                "range_end": _b64(prefix_range_end(prefix_bytes)),
            }
        )

        records = []
        for kv in data.get("kvs", []):
            records.append(
                RawRecord.from_bytes(
                    base64.b64decode(kv.get("key", "")),
                    base64.b64decode(kv.get("value", "")),
                )
            )

        logger.debug(f"etcd prefix 조회 완료: {prefix} ({len(records)}건)")
        return records

    def close(self) -> None:
        self._session.close()

    def __enter__(self) -> EtcdClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
