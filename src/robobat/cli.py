"""RoboBat dashboard CLI application.

This module provides the command-line interface for the RoboBat
dashboard: serving the web UI, running headless simulations, printing
the remote event log and configuration utilities.
"""

from __future__ import annotations

import logging
import sys
import threading
import webbrowser
from pathlib import Path
from typing import Any, Final

import typer
import uvicorn
import yaml
from pydantic import ValidationError

from robobat.controller import BatteryDashboard
from robobat.notifications.sink import format_threshold
from robobat.settings.user import UserSettings
from robobat.simulation.clock import ManualTicker
from robobat.web.app import create_app

# ── CLI setup ────────────────────────────────────────────────────────────────
app = typer.Typer(help="RoboBat battery dashboard CLI", add_completion=False)
config_app = typer.Typer(help="Config helpers")
app.add_typer(config_app, name="config")

logger: Final = logging.getLogger(__name__)  # Will be "robobat.cli"

CONFIG_OPTION = typer.Option(None, "--config", "-c", exists=True, dir_okay=False)
DEBUG_OPTION = typer.Option(False, "--debug", help="Enable debug logging")
DST_ARGUMENT = typer.Argument(..., help="Output config.yaml")
HOST_OPTION = typer.Option(None, "--host", help="Override bind address")
PORT_OPTION = typer.Option(None, "--port", "-p", help="Override port")
OPEN_OPTION = typer.Option(False, "--open", "-o", help="Open the dashboard in a browser")
TICKS_OPTION = typer.Option(200, "--ticks", "-n", min=0, help="Ticks to simulate")
THRESHOLD_OPTION = typer.Option(None, "--threshold", "-t", help="Override low-battery threshold")
SEED_OPTION = typer.Option(None, "--seed", help="Seed for the temperature random walk")


def _load_config(config: Path | None) -> UserSettings:
    try:
        return UserSettings.load(config)
    except (RuntimeError, FileNotFoundError) as exc:
        typer.secho(str(exc), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc


@app.command()
def run(
    config: Path | None = CONFIG_OPTION,
    host: str | None = HOST_OPTION,
    port: int | None = PORT_OPTION,
    open_browser: bool = OPEN_OPTION,
    debug: bool = DEBUG_OPTION,
) -> None:
    """Serve the dashboard and run the simulation until interrupted."""
    settings = _load_config(config)
    dashboard = BatteryDashboard(config=settings, debug=debug)

    bind_host = host or settings.host
    bind_port = port or settings.port
    url = f"http://{bind_host}:{bind_port}/"
    typer.echo(f"Serving dashboard on {url} - press Ctrl+C to quit")

    if open_browser:
        # Give uvicorn a moment to bind before the browser asks for the page
        threading.Timer(1.0, webbrowser.open_new_tab, args=(url,)).start()

    uvicorn.run(
        create_app(dashboard),
        host=bind_host,
        port=bind_port,
        log_level="debug" if debug else "info",
        log_config=None,
    )


@app.command()
def simulate(
    config: Path | None = CONFIG_OPTION,
    ticks: int = TICKS_OPTION,
    threshold: float | None = THRESHOLD_OPTION,
    seed: int | None = SEED_OPTION,
    debug: bool = DEBUG_OPTION,
) -> None:
    """Run the simulation in virtual time and report what happened."""
    settings = _load_config(config)
    overrides: dict[str, Any] = {}
    if threshold is not None:
        overrides["threshold"] = threshold
    if seed is not None:
        overrides["seed"] = seed
    if overrides:
        settings = settings.model_copy(update=overrides)

    ticker = ManualTicker()
    dashboard = BatteryDashboard(config=settings, ticker=ticker, debug=debug)

    dashboard.start()
    last_id = 0
    for _ in range(ticks):
        ticker.advance(settings.tick_seconds)
        # Report each notification with the tick that raised it
        for note in dashboard.sink.history:
            if note.id > last_id:
                typer.echo(
                    f"tick {dashboard.container.ticks:>4} [{note.level.value}] {note.message}"
                )
                last_id = note.id
    dashboard.stop()

    state = dashboard.container.state
    typer.echo(
        f"After {dashboard.container.ticks} ticks: level {state.level:.1f}% "
        f"voltage {state.voltage:.2f} V temperature {state.temperature:.1f}°C "
        f"status {state.status.value} "
        f"(threshold {format_threshold(dashboard.container.threshold)}%)"
    )


@app.command()
def logs(config: Path | None = CONFIG_OPTION, debug: bool = DEBUG_OPTION) -> None:
    """Fetch the remote event log and print it."""
    dashboard = BatteryDashboard(config=_load_config(config), debug=debug)
    entries = dashboard.load_event_log()
    if entries is None:
        typer.secho("Event log unavailable", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    for entry in entries:
        typer.echo(f"{entry.time}  {entry.status.value:<8} {entry.user:<18} {entry.event}")


# ───────────────────────── config sub-commands ───────────────────────────────
@config_app.command("validate")
def validate_config(file: Path):
    """Validate a YAML config file against the schema."""
    try:
        UserSettings.load(file)
        typer.echo("✅ Config valid")
    except (RuntimeError, FileNotFoundError) as exc:
        typer.secho(str(exc), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc


@config_app.command("wizard")
def wizard(dst: Path = DST_ARGUMENT):
    """Interactive prompt to create a config file."""
    typer.echo("Interactive config builder - press Enter for defaults.")

    while True:
        data: dict[str, Any] = {
            "threshold": typer.prompt("Low-battery threshold (%)", default="20"),
            "tick_seconds": typer.prompt("Seconds per tick", default="1"),
            "theme": typer.prompt("Theme [dark|light]", default="dark"),
            "port": typer.prompt("Web server port", default="8000"),
        }
        try:
            cfg = UserSettings(**data)
            break  # valid → exit loop
        except ValidationError as err:
            typer.secho("\nConfig error(s):", fg=typer.colors.RED, err=True)
            for e in err.errors():
                typer.secho(f"  • {e['loc'][0]} - {e['msg']}", fg=typer.colors.RED, err=True)
            typer.echo("Please re-enter the values.\n")

    dst.write_text(
        yaml.safe_dump(cfg.model_dump(include=set(data)), sort_keys=False), encoding="utf-8"
    )
    typer.secho(f"Config written to {dst}", fg=typer.colors.GREEN)


# ───────────────────────── module entrypoint ────────────────────────────────
def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        sys.exit(0)


if __name__ == "__main__":
    main()
