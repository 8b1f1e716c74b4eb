"""
tests/reports/secret_encryption/test_secret_encryption_reporter.py - 1회/주기 실행 테스트
"""

import threading
from unittest.mock import MagicMock

import pytest

from analyzers.secrets.types import RawRecord
from core.exceptions import ConfigError, ConfigurationParseError, RecorderError, StoreError
from reports.secret_encryption.reporter import SecretEncryptionReporter, run_periodically


@pytest.fixture
def store(sample_records):
    mock = MagicMock()
    mock.get_prefix.return_value = sample_records
    return mock


@pytest.fixture
def config_source(kms_config_yaml):
    mock = MagicMock()
    mock.read.return_value = kms_config_yaml
    return mock


@pytest.fixture
def recorder():
    return MagicMock()


@pytest.fixture
def reporter(store, config_source, recorder):
    return SecretEncryptionReporter(store, config_source, recorder, provider_name_prefix="kmsprovider")


class TestRunOnce:
    """SecretEncryptionReporter.run_once 테스트"""

    def test_records_report(self, reporter, store, config_source, recorder):
        report = reporter.run_once("kube-system")

        store.get_prefix.assert_called_once_with("/registry/secrets")
        config_source.read.assert_called_once_with("kube-system")
        recorder.record.assert_called_once_with("kube-system", report)
        assert report.encrypted_identities == ["default/s1"]
        assert report.plaintext_identities == ["ns/s2"]
        # 설정상 현재 세대는 2
        assert report.expected_generation == 2
        assert report.all_match_expected_generation is False

    def test_empty_snapshot_skips_record(self, reporter, store, config_source, recorder, caplog):
        store.get_prefix.return_value = []

        assert reporter.run_once("kube-system") is None

        config_source.read.assert_not_called()
        recorder.record.assert_not_called()
        assert "No secrets found in etcd" in caplog.text

    def test_config_parse_failure_prevents_record(self, reporter, config_source, recorder):
        """설정 파싱 실패 시 이전 보고서를 덮어쓰지 않음"""
        config_source.read.return_value = "resources: ["

        with pytest.raises(ConfigurationParseError):
            reporter.run_once("kube-system")
        recorder.record.assert_not_called()

    def test_config_missing_prevents_record(self, reporter, config_source, recorder):
        config_source.read.side_effect = ConfigError("encryption-provider-config", "missing")

        with pytest.raises(ConfigError):
            reporter.run_once("kube-system")
        recorder.record.assert_not_called()

    def test_store_failure(self, reporter, store, recorder):
        store.get_prefix.side_effect = StoreError("etcd:2379", "down")

        with pytest.raises(StoreError):
            reporter.run_once("kube-system")
        recorder.record.assert_not_called()

    def test_parse_failures_logged(self, reporter, store, caplog):
        store.get_prefix.return_value = [
            RawRecord("invalid-key", "plain"),
            RawRecord("/registry/secrets/ns/a", "k8s:enc:kms:v2:kmsprovider2:x"),
        ]

        report = reporter.run_once("kube-system")

        assert report.encrypted_identities == ["ns/a"]
        assert report.all_match_expected_generation is True
        assert "Failed to parse secret" in caplog.text
        assert "invalid-key" in caplog.text

    def test_analyze_does_not_record(self, reporter, recorder):
        report = reporter.analyze("kube-system")

        assert report is not None
        recorder.record.assert_not_called()


class TestRunPeriodically:
    """run_periodically 테스트"""

    def test_stops_when_event_set(self):
        stop_event = threading.Event()
        reporter = MagicMock()
        calls = []

        def _run_once(namespace):
            calls.append(namespace)
            if len(calls) == 3:
                stop_event.set()

        reporter.run_once.side_effect = _run_once

        runs = run_periodically(reporter, "kube-system", 0.001, stop_event)

        assert runs == 3
        assert calls == ["kube-system"] * 3

    def test_not_started_when_already_stopped(self):
        stop_event = threading.Event()
        stop_event.set()
        reporter = MagicMock()

        assert run_periodically(reporter, "ns", 0.001, stop_event) == 0
        reporter.run_once.assert_not_called()

    def test_failure_does_not_stop_loop(self, caplog):
        stop_event = threading.Event()
        reporter = MagicMock()
        results = [RecorderError("update", "boom"), RuntimeError("unexpected"), None]

        def _run_once(namespace):
            result = results.pop(0)
            if not results:
                stop_event.set()
            if isinstance(result, Exception):
                raise result

        reporter.run_once.side_effect = _run_once

        assert run_periodically(reporter, "ns", 0.001, stop_event) == 3
        assert "failed to update ConfigMap" in caplog.text
        assert "Failed to read etcd" in caplog.text
