"""
shared/etcd/snapshot.py - 파일로 저장된 etcd 스냅샷 로드

지원 형식:
    - 평문 목록: [{"key": "/registry/secrets/ns/a", "value": "..."}]
    - etcdctl get --prefix -w json 출력: {"kvs": [{"key": "<base64>", "value": "<base64>"}]}
"""

from __future__ import annotations

import base64
import binascii
import json
from pathlib import Path
from typing import Any

from analyzers.secrets.types import RawRecord
from core.exceptions import ConfigError


def _decode_kvs(kvs: list[dict[str, Any]]) -> list[RawRecord]:
    records = []
    for kv in kvs:
        try:
            key = base64.b64decode(kv.get("key", ""), validate=True)
            value = base64.b64decode(kv.get("value", ""), validate=True)
        except (binascii.Error, TypeError) as e:
            raise ConfigError("snapshot", "kvs 항목 base64 디코딩 실패", cause=e) from e
        records.append(RawRecord.from_bytes(key, value))
    return records


def parse_snapshot(data: Any) -> list[RawRecord]:
    """JSON 객체를 RawRecord 목록으로 변환"""
    if isinstance(data, dict) and "kvs" in data:
        return _decode_kvs(data.get("kvs") or [])

    if not isinstance(data, list):
        raise ConfigError("snapshot", "목록 또는 etcdctl JSON 형식이어야 합니다")

    records = []
    for item in data:
        if not isinstance(item, dict) or "key" not in item:
            raise ConfigError("snapshot", f"잘못된 항목: {item!r}")
        records.append(RawRecord(key=str(item["key"]), value=str(item.get("value", ""))))
    return records


def load_snapshot_file(path: str | Path) -> list[RawRecord]:
    """스냅샷 파일 로드

    Raises:
        ConfigError: 파일 읽기 또는 형식 오류
    """
    try:
        with Path(path).open(encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigError("snapshot", f"스냅샷 파일 로드 실패: {path}", cause=e) from e
    return parse_snapshot(data)
