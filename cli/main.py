from __future__ import annotations

import json
import os
import sys
from pathlib import Path
from typing import Any, Optional

import click

from .config import MissingConfigurationError, get_settings
from .http_client import DashboardClient
from .options import build_window_params, window_options


def _echo_json(payload: Any) -> None:
    click.echo(json.dumps(payload, indent=2, default=str))


def _prepare_client(base_url: Optional[str], token: Optional[str], timeout: Optional[float]) -> DashboardClient:
    try:
        settings = get_settings(base_url=base_url, token=token, timeout=timeout)
    except MissingConfigurationError as exc:
        raise click.ClickException(str(exc)) from exc
    return DashboardClient(settings=settings)


@click.group()
@click.option("--base-url", envvar="API_BASE_URL", help="API base URL (env: API_BASE_URL)")
@click.option("--token", envvar="API_TOKEN", help="API token for Authorization header")
@click.option("--timeout", type=float, default=None, help="Request timeout in seconds (env: API_TIMEOUT_SECONDS)")
@click.pass_context
def cli(ctx: click.Context, base_url: Optional[str], token: Optional[str], timeout: Optional[float]) -> None:
    """Portfolio vs benchmark dashboard API command line wrapper."""

    ctx.obj = {"client": _prepare_client(base_url, token, timeout)}


@cli.command()
@click.pass_context
def windows(ctx: click.Context) -> None:
    """List viewing windows with their lookback and granularity."""

    client: DashboardClient = ctx.obj["client"]
    _echo_json(client.get("/api/v1/windows"))


@cli.command()
@window_options
@click.pass_context
def performance(ctx: click.Context, **window: Any) -> None:
    """Fetch the aggregated portfolio/benchmark series for a window."""

    client: DashboardClient = ctx.obj["client"]
    params = build_window_params(**window)
    _echo_json(client.get("/api/v1/performance", params=params))


@cli.command()
@window_options
@click.pass_context
def summary(ctx: click.Context, **window: Any) -> None:
    """Fetch headline return percentages for a window."""

    client: DashboardClient = ctx.obj["client"]
    params = build_window_params(**window)
    _echo_json(client.get("/api/v1/summary", params=params))


@cli.command()
@click.pass_context
def holdings(ctx: click.Context) -> None:
    """List holdings."""

    client: DashboardClient = ctx.obj["client"]
    _echo_json(client.get("/api/v1/holdings"))


@cli.command("series-meta")
@click.pass_context
def series_meta(ctx: click.Context) -> None:
    """Show base-series metadata (date range, point count, data version)."""

    client: DashboardClient = ctx.obj["client"]
    _echo_json(client.get("/api/v1/series/meta"))


@cli.command()
@click.option("--seed", type=int, default=None, help="New generator seed; keeps the current seed if omitted.")
@click.pass_context
def refresh(ctx: click.Context, seed: Optional[int]) -> None:
    """Regenerate the server's base series."""

    client: DashboardClient = ctx.obj["client"]
    params = {"seed": seed} if seed is not None else None
    _echo_json(client.post("/api/v1/refresh", params=params))


@cli.command()
@click.option("--output", type=click.Path(dir_okay=False, path_type=Path), help="Optional output file path.")
@window_options
@click.pass_context
def export(ctx: click.Context, output: Optional[Path], **window: Any) -> None:
    """Download the aggregated series for a window as CSV."""

    client: DashboardClient = ctx.obj["client"]
    params = build_window_params(**window)
    response = client.get("/api/v1/export/performance", params=params, expect_json=False, stream=True)

    target_path = output or Path(f"performance_{params['window'].lower()}.csv")
    with response, target_path.open("wb") as handle:
        for chunk in response.iter_content(chunk_size=8192):
            if chunk:
                handle.write(chunk)
    click.echo(f"Saved to {target_path}")


def main(argv: Optional[list[str]] = None) -> None:
    argv = argv if argv is not None else sys.argv[1:]
    cli.main(args=argv, prog_name=os.path.basename(sys.argv[0]))


if __name__ == "__main__":
    main()
