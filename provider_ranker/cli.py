"""
Provider Ranker — CLI entry point.

All commands follow this pattern:
  1. Load ``AppConfig`` via ``load_config()``.
  2. Configure logging.
  3. Validate inputs.
  4. Execute action (store write, one-shot ranking, watch loop).
  5. Report result to stdout.

Install and run::

    pip install -e .
    provider-ranker --help
    provider-ranker validate-config
    provider-ranker load-providers providers.json
    provider-ranker rank --chart
    provider-ranker watch
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import typer

app = typer.Typer(
    name="provider-ranker",
    help="Rank suppliers by weighted price, quality, lead time and capacity.",
    add_completion=False,
)


# ── Helpers ───────────────────────────────────────────────────────────────────

def _load_config_or_exit(config_path: Optional[str] = None):
    """Load AppConfig, printing a friendly error and exiting on failure."""
    from provider_ranker.config import load_config

    try:
        cfg_path = Path(config_path) if config_path else None
        return load_config(cfg_path)
    except FileNotFoundError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)
    except Exception as exc:
        typer.echo(f"[ERROR] Config validation failed: {exc}", err=True)
        raise typer.Exit(code=1)


def _configure_logging(config):
    """Set up logging from config."""
    from provider_ranker.utils.logging import configure_logging
    configure_logging(config.logging)


def _store_from(config, store_path: Optional[str]):
    from provider_ranker.store import build_store

    store_cfg = config.store
    if store_path:
        store_cfg = store_cfg.model_copy(update={"path": store_path})
    return build_store(store_cfg)


_CONFIG_OPTION = typer.Option(None, "--config", help="Path to TOML config file.")
_STORE_OPTION = typer.Option(
    None, "--store-path", help="Override the store path from config."
)


# ── Commands ──────────────────────────────────────────────────────────────────

@app.command("validate-config")
def validate_config(
    config_path: Optional[str] = _CONFIG_OPTION,
    show_full: bool = typer.Option(
        False,
        "--full",
        help="Print full config including all fields.",
    ),
) -> None:
    """Validate the configuration file and print parsed values.

    Exits with code 1 if the config fails validation.
    """
    config = _load_config_or_exit(config_path)

    typer.echo("Configuration validated successfully.")
    typer.echo("")
    typer.echo(f"  Store backend:    {config.store.backend}")
    typer.echo(f"  Store path:       {config.store.path}")
    typer.echo(f"  Store key:        {config.store.key}")
    typer.echo(f"  Poll interval:    {config.watcher.poll_interval_ms} ms")
    typer.echo(f"  Log level:        {config.logging.level}")
    typer.echo(f"  Debug mode:       {config.debug}")

    if show_full:
        typer.echo("")
        typer.echo("Full config (JSON):")
        typer.echo(json.dumps(config.model_dump(), indent=2, default=str))

    typer.echo("")
    typer.echo("[OK] Config valid.")


@app.command("load-providers")
def load_providers(
    providers_file: str = typer.Argument(
        ..., help="JSON file holding an array of provider objects."
    ),
    config_path: Optional[str] = _CONFIG_OPTION,
    store_path: Optional[str] = _STORE_OPTION,
) -> None:
    """Validate a provider file and write it into the store.

    This is the admin side: a running ``watch`` picks the change up on its
    next poll.
    """
    from provider_ranker.models.provider import parse_record_set

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    path = Path(providers_file)
    if not path.exists():
        typer.echo(f"[ERROR] Providers file not found: {path}", err=True)
        raise typer.Exit(code=1)

    try:
        records = parse_record_set(path.read_bytes())
    except ValueError as exc:
        typer.echo(f"[ERROR] Provider file failed validation:\n{exc}", err=True)
        raise typer.Exit(code=1)

    store = _store_from(config, store_path)
    store.write(records)

    typer.echo(f"  Wrote {len(records)} provider(s) under key '{store.key}'.")
    typer.echo("[OK] Providers loaded.")


@app.command("rank")
def rank(
    config_path: Optional[str] = _CONFIG_OPTION,
    store_path: Optional[str] = _STORE_OPTION,
    chart: bool = typer.Option(False, "--chart", help="Also print the breakdown chart."),
) -> None:
    """Score and rank the current store contents once, then exit."""
    from provider_ranker.engine import RankingEngine
    from provider_ranker.presenter import ConsolePresenter
    from provider_ranker.watcher import ChangeWatcher

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    engine = RankingEngine(presenter=ConsolePresenter())
    watcher = ChangeWatcher(
        _store_from(config, store_path),
        engine,
        interval_ms=config.watcher.poll_interval_ms,
    )
    watcher.load_initial()

    if chart:
        engine.show_chart()


@app.command("watch")
def watch(
    config_path: Optional[str] = _CONFIG_OPTION,
    store_path: Optional[str] = _STORE_OPTION,
    interval_ms: Optional[int] = typer.Option(
        None, "--interval-ms", help="Override the poll interval from config."
    ),
    max_ticks: Optional[int] = typer.Option(
        None, "--max-ticks", help="Stop after this many polls (default: run until Ctrl-C)."
    ),
    chart: bool = typer.Option(
        False, "--chart", help="Keep the breakdown chart open and refresh it on change."
    ),
) -> None:
    """Rank the store contents and re-rank whenever they change.

    Blocks until Ctrl-C (or SIGTERM on Linux/macOS).
    """
    from provider_ranker.engine import RankingEngine
    from provider_ranker.presenter import ConsolePresenter
    from provider_ranker.watcher import ChangeWatcher

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    period = interval_ms or config.watcher.poll_interval_ms
    if period <= 0:
        typer.echo(f"[ERROR] --interval-ms must be positive, got {period}.", err=True)
        raise typer.Exit(code=1)

    engine = RankingEngine(presenter=ConsolePresenter())
    watcher = ChangeWatcher(_store_from(config, store_path), engine, interval_ms=period)

    if config.watcher.refresh_on_start:
        watcher.load_initial()
    if chart:
        engine.show_chart()

    typer.echo(f"Watching for provider changes every {period} ms (Ctrl-C to stop).")
    ticks = watcher.run(max_ticks=max_ticks, install_signal_handlers=True)
    typer.echo(f"[OK] Stopped after {ticks} poll(s), {watcher.change_count} change(s).")


if __name__ == "__main__":
    app()
