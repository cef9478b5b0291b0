from pathlib import Path
from unittest.mock import patch

import pytest
import yaml
from typer.testing import CliRunner

from robobat.cli import app
from robobat.eventlog.models import LogEntry, LogStatus

runner = CliRunner()


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    path = tmp_path / "config.yaml"
    path.write_text('threshold: 20\ntick_seconds: 1\nseed: 1\ntimezone: "UTC"\n')
    return path


def test_simulate_full_discharge(config_file: Path) -> None:
    result = runner.invoke(app, ["simulate", "--config", str(config_file)])

    assert result.exit_code == 0, result.output
    assert "tick  160 [warning] Warning! Charge below 20%!" in result.output
    assert "tick  200 [error] Critical shutdown! Battery depleted." in result.output
    assert "After 200 ticks: level 0.0% voltage 10.00 V" in result.output
    assert "status LowBattery (threshold 20%)" in result.output


def test_simulate_threshold_override(config_file: Path) -> None:
    result = runner.invoke(
        app, ["simulate", "--config", str(config_file), "--ticks", "10", "--threshold", "97"]
    )

    assert result.exit_code == 0, result.output
    assert "tick    6 [warning] Warning! Charge below 97%!" in result.output
    assert "Critical shutdown" not in result.output
    assert "After 10 ticks: level 95.0% voltage 12.47 V" in result.output


def test_simulate_threshold_never_hit_exactly(config_file: Path) -> None:
    result = runner.invoke(
        app, ["simulate", "--config", str(config_file), "--ticks", "20", "-t", "97.3"]
    )

    assert result.exit_code == 0, result.output
    assert "Warning!" not in result.output
    assert "status LowBattery" in result.output


def test_simulate_zero_ticks(config_file: Path) -> None:
    result = runner.invoke(app, ["simulate", "--config", str(config_file), "-n", "0"])

    assert result.exit_code == 0, result.output
    assert "After 0 ticks: level 100.0% voltage 12.60 V temperature 35.0°C status Active" in (
        result.output
    )


def test_invalid_config_exits_with_error(tmp_path: Path) -> None:
    bad = tmp_path / "bad.yaml"
    bad.write_text("tick_seconds: -1\n")

    result = runner.invoke(app, ["simulate", "--config", str(bad)])

    assert result.exit_code == 1


def test_config_validate(config_file: Path, tmp_path: Path) -> None:
    ok = runner.invoke(app, ["config", "validate", str(config_file)])
    assert ok.exit_code == 0
    assert "Config valid" in ok.output

    bad = tmp_path / "bad.yaml"
    bad.write_text("theme: purple\n")
    failed = runner.invoke(app, ["config", "validate", str(bad)])
    assert failed.exit_code == 1


def test_config_wizard_writes_file(tmp_path: Path) -> None:
    dst = tmp_path / "out.yaml"

    result = runner.invoke(app, ["config", "wizard", str(dst)], input="25\n2\nlight\n9000\n")

    assert result.exit_code == 0, result.output
    data = yaml.safe_load(dst.read_text())
    assert data == {"threshold": 25.0, "tick_seconds": 2.0, "theme": "light", "port": 9000}


def test_config_wizard_reprompts_on_invalid_values(tmp_path: Path) -> None:
    dst = tmp_path / "out.yaml"

    result = runner.invoke(
        app,
        ["config", "wizard", str(dst)],
        input="20\n1\npurple\n8000\n20\n1\ndark\n8000\n",
    )

    assert result.exit_code == 0, result.output
    assert "Please re-enter the values." in result.output
    assert yaml.safe_load(dst.read_text())["theme"] == "dark"


def test_logs_prints_entries(config_file: Path) -> None:
    entries = [
        LogEntry(time="12:00", event="Module diagnostics Apt. 556", user="Bret", status=LogStatus.OK),
        LogEntry(
            time="11:50", event="Module diagnostics Suite 879", user="Antonette",
            status=LogStatus.WARNING,
        ),
    ]
    with patch("robobat.cli.BatteryDashboard.load_event_log", return_value=entries):
        result = runner.invoke(app, ["logs", "--config", str(config_file)])

    assert result.exit_code == 0, result.output
    assert "Bret" in result.output
    assert "Module diagnostics Suite 879" in result.output


def test_logs_unavailable(config_file: Path) -> None:
    with patch("robobat.cli.BatteryDashboard.load_event_log", return_value=None):
        result = runner.invoke(app, ["logs", "--config", str(config_file)])

    assert result.exit_code == 1


def test_run_serves_app(config_file: Path) -> None:
    with patch("robobat.cli.uvicorn.run") as mock_run:
        result = runner.invoke(app, ["run", "--config", str(config_file), "--port", "8123"])

    assert result.exit_code == 0, result.output
    assert "http://127.0.0.1:8123/" in result.output
    mock_run.assert_called_once()
    _, kwargs = mock_run.call_args
    assert kwargs["host"] == "127.0.0.1"
    assert kwargs["port"] == 8123
