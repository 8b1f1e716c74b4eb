# core/__init__.py
"""
core - kms-reporter 인프라

아키텍처:
    core/
    ├── config.py       # 중앙 설정 관리
    └── exceptions.py   # 통합 예외 계층

Usage:
    from core.config import settings
    from core.exceptions import ConfigurationParseError
"""

__version__ = "0.1.0"
