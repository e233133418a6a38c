"""CLI command implementations for the account load generator."""

from __future__ import annotations

import contextlib
import json
import signal
import sys
import threading
from typing import TYPE_CHECKING, Any

import click
from pydantic import ValidationError

from account_loadgen.core.durations import format_duration
from account_loadgen.models.config import Config
from account_loadgen.utils.logger import configure_logging, get_logger

if TYPE_CHECKING:
    from collections.abc import Iterator

    from account_loadgen.services.account_client import AccountServiceClient
    from account_loadgen.services.batch_executor import BatchExecutor
    from account_loadgen.services.bootstrap import AccountBootstrapper

logger = get_logger(__name__)


def _get_config(**overrides: Any) -> Config:
    """Load configuration from the environment; CLI values win over it."""
    values = {key: value for key, value in overrides.items() if value is not None}
    try:
        return Config(**values)
    except ValidationError as exc:
        click.echo(f"[ERROR] Invalid configuration:\n{exc}", err=True)
        sys.exit(2)


def _setup(config: Config) -> None:
    configure_logging(config.log_level, json_output=config.log_format == "json")


def _build_client(config: Config) -> AccountServiceClient:
    from account_loadgen.services.account_client import AccountServiceClient

    return AccountServiceClient(
        config.base_url,
        timeout=config.request_timeout_seconds,
        pool_size=config.max_concurrency,
    )


def _build_executor(config: Config) -> BatchExecutor:
    from account_loadgen.services.batch_executor import BatchExecutor

    return BatchExecutor(
        max_workers=config.max_concurrency,
        deadline_seconds=config.batch_deadline_seconds,
    )


def _build_bootstrapper(
    config: Config,
    client: AccountServiceClient,
    executor: BatchExecutor,
) -> AccountBootstrapper:
    from account_loadgen.services.bootstrap import AccountBootstrapper

    return AccountBootstrapper(
        client,
        executor,
        username_prefix=config.username_prefix,
        email_domain=config.email_domain,
        password=config.password,
        avatar_id=config.avatar_id,
        verification_code=config.verification_code,
        referral_code=config.referral_code,
    )


@contextlib.contextmanager
def _shutdown_signals(stop_event: threading.Event, abort_event: threading.Event) -> Iterator[None]:
    """First SIGINT/SIGTERM stops after the current round, the second also aborts it."""

    def handler(signum: int, _frame: Any) -> None:
        if stop_event.is_set():
            logger.warning("shutdown_abort_requested", signal=signal.Signals(signum).name)
            abort_event.set()
            return
        logger.warning("shutdown_requested", signal=signal.Signals(signum).name)
        stop_event.set()

    if threading.current_thread() is not threading.main_thread():
        yield
        return

    previous = {sig: signal.signal(sig, handler) for sig in (signal.SIGINT, signal.SIGTERM)}
    try:
        yield
    finally:
        for sig, old_handler in previous.items():
            signal.signal(sig, old_handler)


def _print_batch_summary(title: str, stats: dict[str, Any]) -> None:
    """Print a formatted summary of a batch or run."""
    click.echo(f"\n[SUCCESS] {title}")
    for key, value in stats.items():
        if key == "errors" and isinstance(value, list):
            if value:
                click.echo(f"  Errors ({len(value)}):")
                for error in value[:10]:
                    click.echo(f"    - {error}")
                if len(value) > 10:
                    click.echo(f"    ... and {len(value) - 10} more")
        else:
            click.echo(f"  {key}: {value}")


@click.command()
@click.option("--accounts", "account_count", default=None, type=int, help="Accounts to register")
@click.option("--interval", default=None, type=float, help="Seconds to pause between rounds")
@click.option("--rounds", default=None, type=int, help="Rounds to run (0 runs until interrupted)")
@click.option("--concurrency", default=None, type=int, help="Max simultaneous requests")
@click.option("--token", "token_name", default=None, type=str, help="Token whose balance is polled")
@click.option("--report-dir", default=None, type=str, help="Directory for per-round CSV reports")
@click.option("--skip-health-check", is_flag=True, help="Do not wait for the service first")
def run(
    account_count: int | None,
    interval: float | None,
    rounds: int | None,
    concurrency: int | None,
    token_name: str | None,
    report_dir: str | None,
    skip_health_check: bool,
) -> None:
    """Register accounts, then poll their balances round after round."""
    config = _get_config(
        account_count=account_count,
        round_interval_seconds=interval,
        max_rounds=rounds,
        max_concurrency=concurrency,
        token_name=token_name,
        report_dir=report_dir,
    )
    _setup(config)

    from account_loadgen.services.measurement_cycle import MeasurementCycle
    from account_loadgen.services.operations import BalanceLookupOperation
    from account_loadgen.services.report_writer import CsvReportWriter
    from account_loadgen.utils.health_checks import wait_for_service

    if not skip_health_check and not wait_for_service(
        config.base_url, max_attempts=config.max_retry_attempts
    ):
        click.echo(f"[ERROR] Account service at {config.base_url} is unreachable.")
        sys.exit(1)

    stop_event = threading.Event()
    abort_event = threading.Event()
    client = _build_client(config)
    executor = _build_executor(config)

    try:
        with _shutdown_signals(stop_event, abort_event):
            click.echo(f"[INFO] Registering {config.account_count} accounts...")
            bootstrapper = _build_bootstrapper(config, client, executor)
            accounts = bootstrapper.bootstrap(config.account_count, cancel_event=abort_event)
            if not accounts:
                click.echo("[ERROR] No account could be registered.")
                sys.exit(1)

            click.echo(f"[INFO] Polling '{config.token_name}' balances of {len(accounts)} accounts...")
            cycle = MeasurementCycle(
                executor,
                BalanceLookupOperation(client, config.token_name),
                CsvReportWriter(config.report_dir),
                config.round_interval_seconds,
                token_name=config.token_name,
                stop_event=stop_event,
                abort_event=abort_event,
            )
            completed = cycle.run(accounts, max_rounds=config.max_rounds or None)
    finally:
        client.close()

    _print_batch_summary(
        "Load generation stopped",
        {
            "accounts": len(accounts),
            "rounds": completed,
            "report_dir": config.report_dir,
        },
    )


@click.command()
@click.option("--accounts", "account_count", default=None, type=int, help="Accounts to register")
@click.option("--concurrency", default=None, type=int, help="Max simultaneous requests")
@click.option(
    "--output-format",
    default="summary",
    type=click.Choice(["summary", "json"]),
    help="Output format",
)
def register(account_count: int | None, concurrency: int | None, output_format: str) -> None:
    """Register accounts once and report how the batch went."""
    config = _get_config(account_count=account_count, max_concurrency=concurrency)
    _setup(config)

    client = _build_client(config)
    try:
        bootstrapper = _build_bootstrapper(config, client, _build_executor(config))
        accounts = bootstrapper.bootstrap(config.account_count)
    finally:
        client.close()

    batch = bootstrapper.last_result
    if output_format == "json":
        click.echo(
            json.dumps(
                {
                    "requested": config.account_count,
                    "registered": len(accounts),
                    "failed": batch.failure_count if batch else 0,
                    "wall_clock_seconds": batch.wall_clock_seconds if batch else 0.0,
                    "summed_seconds": batch.summed_seconds if batch else 0.0,
                    "accounts": [
                        {"username": account.username, "email": account.email}
                        for account in accounts
                    ],
                },
                indent=2,
            )
        )
        return

    _print_batch_summary(
        "Registration complete",
        {
            "requested": config.account_count,
            "registered": len(accounts),
            "failed": batch.failure_count if batch else 0,
            "wall_clock": format_duration(batch.wall_clock_ns if batch else 0),
            "summed": format_duration(batch.summed_ns if batch else 0),
            "errors": batch.errors() if batch else [],
        },
    )


@click.command()
def check_health() -> None:
    """Check whether the account service answers."""
    config = _get_config()
    _setup(config)

    from account_loadgen.utils.health_checks import check_service_health

    if check_service_health(config.base_url, timeout=config.request_timeout_seconds):
        click.echo(f"[SUCCESS] Account service at {config.base_url} is reachable.")
        return
    click.echo(f"[ERROR] Account service at {config.base_url} is unreachable.")
    sys.exit(1)
