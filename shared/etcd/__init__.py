"""
shared/etcd - etcd v3 스냅샷 조회

- EtcdClient: JSON gRPC gateway 기반 prefix 조회 (mTLS)
- prefix_range_end: prefix 조회용 range_end 계산
- load_snapshot_file: 파일로 저장된 스냅샷 로드 (오프라인 점검용)
"""

from .client import EtcdClient, prefix_range_end
from .snapshot import load_snapshot_file, parse_snapshot

__all__ = ["EtcdClient", "prefix_range_end", "load_snapshot_file", "parse_snapshot"]
