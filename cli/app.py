"""
cli/app.py - 메인 CLI 엔트리포인트

Click 기반의 CLI 애플리케이션 진입점입니다.

명령어 구조:
    kms-reporter --version          # 버전 표시
    kms-reporter run ...            # etcd를 주기적으로 점검하고 ConfigMap에 기록
    kms-reporter run --once ...     # 1회 실행 후 종료
    kms-reporter check -s snapshot.json -c encryption-config.yaml
                                    # 파일 기반 오프라인 점검

환경변수:
    run 명령의 모든 옵션은 KMS_REPORTER_<옵션명> 환경변수로도 지정할 수 있습니다.
    예: KMS_REPORTER_ETCD_ENDPOINT, KMS_REPORTER_NAMESPACE, KMS_REPORTER_RUN_INTERVAL

종료 코드 (check):
    0: 모든 Secret이 현재 프로바이더 세대와 일치
    1: 불일치 Secret 존재
    2: 입력 파일 또는 암호화 설정 파싱 실패
"""

from __future__ import annotations

import json
import logging
import signal
import threading

import click
from click import Context

from core.config import ENV_PREFIX, get_version, settings
from core.exceptions import ConfigError, ConfigurationParseError, ReporterError

logger = logging.getLogger(__name__)

VERSION = get_version()


def _env(name: str) -> str:
    return f"{ENV_PREFIX}{name}"


@click.group()
@click.version_option(VERSION, prog_name="kms-reporter")
@click.option("-v", "--verbose", count=True, help="DEBUG 로그 출력")
@click.pass_context
def cli(ctx: Context, verbose: int) -> None:
    """kms-reporter - etcd Secret 저장 암호화(KMS) 상태 점검"""
    from cli.ui import setup_logging

    setup_logging(verbose)

    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose


# =============================================================================
# run
# =============================================================================


def build_reporter(
    etcd_endpoint: str,
    etcd_client_crt: str | None,
    etcd_client_key: str | None,
    etcd_client_ca_crt: str | None,
    kubeconfig: str | None,
    kms_provider_name: str,
):
    """etcd / Kubernetes 클라이언트를 연결한 SecretEncryptionReporter 생성

    암호화 설정은 항상 in-cluster 설정으로 조회하고,
    결과 기록은 kubeconfig가 주어지면 해당 클러스터에 합니다.

    Returns:
        (reporter, etcd_client)
    """
    from reports.secret_encryption import SecretEncryptionReporter
    from shared.etcd import EtcdClient
    from shared.kube import ConfigMapRecorder, EncryptionConfigSource, load_core_api

    etcd_client = EtcdClient(
        etcd_endpoint,
        cert=etcd_client_crt,
        key=etcd_client_key,
        ca_cert=etcd_client_ca_crt,
    )
    logger.info("etcd client created")

    config_api = load_core_api()
    recorder_api = load_core_api(kubeconfig) if kubeconfig else config_api

    reporter = SecretEncryptionReporter(
        store=etcd_client,
        config_source=EncryptionConfigSource(config_api),
        recorder=ConfigMapRecorder(recorder_api),
        provider_name_prefix=kms_provider_name,
    )
    return reporter, etcd_client


def _install_signal_handlers(stop_event: threading.Event) -> None:
    def _handle(signum, frame):
        logger.info(f"signal {signum} received")
        stop_event.set()

    signal.signal(signal.SIGINT, _handle)
    signal.signal(signal.SIGTERM, _handle)


@cli.command("run")
@click.option("--etcd-endpoint", envvar=_env("ETCD_ENDPOINT"), required=True, help="etcd 엔드포인트 (host:port)")
@click.option("--etcd-client-crt", envvar=_env("ETCD_CLIENT_CRT"), default=None, help="etcd 클라이언트 인증서")
@click.option("--etcd-client-key", envvar=_env("ETCD_CLIENT_KEY"), default=None, help="etcd 클라이언트 키")
@click.option("--etcd-client-ca-crt", envvar=_env("ETCD_CLIENT_CA_CRT"), default=None, help="etcd CA 인증서")
@click.option("--namespace", envvar=_env("NAMESPACE"), required=True, help="설정 조회 및 결과 기록 네임스페이스")
@click.option("--kubeconfig", envvar=_env("KUBECONFIG"), default=None, help="결과 기록용 kubeconfig (선택)")
@click.option(
    "--kms-provider-name",
    envvar=_env("KMS_PROVIDER_NAME"),
    default=settings.DEFAULT_PROVIDER_NAME,
    show_default=True,
    help="암호화 설정의 KMS 프로바이더 이름 prefix",
)
@click.option(
    "--run-interval",
    envvar=_env("RUN_INTERVAL"),
    type=click.IntRange(min=1),
    default=settings.DEFAULT_RUN_INTERVAL_SECONDS,
    show_default=True,
    help="실행 주기 (초)",
)
@click.option("--once", is_flag=True, help="1회 실행 후 종료")
def run_command(
    etcd_endpoint: str,
    etcd_client_crt: str | None,
    etcd_client_key: str | None,
    etcd_client_ca_crt: str | None,
    namespace: str,
    kubeconfig: str | None,
    kms_provider_name: str,
    run_interval: int,
    once: bool,
) -> None:
    """etcd Secret 암호화 상태를 점검하고 ConfigMap에 기록

    \b
    Examples:
        kms-reporter run --etcd-endpoint etcd-0:2379 --namespace kube-system
        kms-reporter run --once --etcd-endpoint etcd-0:2379 --namespace kube-system
    """
    from cli.ui import print_error
    from reports.secret_encryption import run_periodically

    try:
        reporter, etcd_client = build_reporter(
            etcd_endpoint,
            etcd_client_crt,
            etcd_client_key,
            etcd_client_ca_crt,
            kubeconfig,
            kms_provider_name,
        )
    except Exception as e:
        logger.debug("client setup failed", exc_info=True)
        print_error(f"Failed to setup kms-reporter: {e}")
        raise SystemExit(1)

    logger.info("Starting kms-reporter")
    try:
        if once:
            try:
                reporter.run_once(namespace)
            except ReporterError as e:
                print_error(str(e))
                raise SystemExit(1)
            return

        stop_event = threading.Event()
        _install_signal_handlers(stop_event)
        run_periodically(reporter, namespace, run_interval, stop_event)
    finally:
        etcd_client.close()


# =============================================================================
# check
# =============================================================================


@cli.command("check")
@click.option(
    "-s",
    "--snapshot",
    "snapshot_path",
    type=click.Path(exists=True, dir_okay=False),
    required=True,
    help="etcd 스냅샷 JSON (목록 또는 etcdctl -w json 출력)",
)
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    required=True,
    help="EncryptionConfiguration YAML",
)
@click.option(
    "--kms-provider-name",
    default=settings.DEFAULT_PROVIDER_NAME,
    show_default=True,
    help="KMS 프로바이더 이름 prefix",
)
@click.option("--json", "as_json", is_flag=True, help="JSON 형식으로 출력")
def check_command(snapshot_path: str, config_path: str, kms_provider_name: str, as_json: bool) -> None:
    """파일로 저장된 스냅샷과 암호화 설정으로 오프라인 점검

    \b
    Examples:
        etcdctl get /registry/secrets --prefix -w json > snapshot.json
        kms-reporter check -s snapshot.json -c encryption-config.yaml
        kms-reporter check -s snapshot.json -c encryption-config.yaml --json
    """
    from analyzers.secrets import analyze, resolve_expected_generation
    from cli.ui import (
        console,
        print_error,
        print_header,
        print_report_table,
        print_success,
        print_warning,
    )
    from shared.etcd import load_snapshot_file
    from shared.kube.recorder import build_configmap_data

    try:
        records = load_snapshot_file(snapshot_path)
        with open(config_path, encoding="utf-8") as f:
            expected = resolve_expected_generation(f.read(), kms_provider_name)
    except (ConfigError, ConfigurationParseError) as e:
        print_error(str(e))
        raise SystemExit(2)

    report = analyze(records, expected, kms_provider_name)

    if as_json:
        output = report.to_dict()
        output["configmap"] = build_configmap_data(report)
        click.echo(json.dumps(output, ensure_ascii=False, indent=2))
    else:
        print_header("Secret 암호화 상태")
        print_report_table(report.encrypted_identities, report.plaintext_identities)
        console.print()
        generation_label = "identity" if expected == settings.IDENTITY_GENERATION else str(expected)
        console.print(f"기대 세대 번호: {generation_label}")
        console.print(f"암호화: {len(report.encrypted_identities)}건 / 평문: {len(report.plaintext_identities)}건")

        for diagnostic in report.diagnostics:
            print_warning(f"건너뜀 {diagnostic.key}: {diagnostic}")

        if report.all_match_expected_generation:
            print_success("모든 Secret이 현재 프로바이더 세대와 일치합니다")
        else:
            print_error("현재 프로바이더 세대와 일치하지 않는 Secret이 있습니다")

    if not report.all_match_expected_generation:
        raise SystemExit(1)


if __name__ == "__main__":
    cli()
