"""reports - 보고서 실행 모듈

분석기와 외부 연동(shared)을 묶어 보고서를 생성/기록합니다.

하위 모듈:
- secret_encryption: etcd Secret 저장 암호화 상태 보고 (kms-reporter ConfigMap)
"""
