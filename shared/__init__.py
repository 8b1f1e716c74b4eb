"""공유 유틸리티 - 외부 저장소 연동.

- etcd: etcd v3 스냅샷 조회
- kube: Kubernetes API (암호화 설정 조회, 결과 ConfigMap 기록)

의존성 구조:
    core (인프라)
       ↑
    analyzers (분석)
       ↑
    shared (외부 연동)
       ↑
    reports / cli
"""
