from datetime import timedelta
from pathlib import Path

import pytest
from pydantic import ValidationError

from robobat.settings import ApplicationSettings, UserSettings


def test_defaults() -> None:
    cfg = UserSettings()
    assert cfg.threshold == 20
    assert cfg.tick_seconds == 1.0
    assert cfg.is_dark is True
    assert cfg.log_entries == 6
    assert cfg.log_spacing == timedelta(minutes=10)
    assert cfg.notification_lifetime == timedelta(seconds=5)
    assert cfg.log_api_url == "https://jsonplaceholder.typicode.com/users"


def test_threshold_is_not_range_checked() -> None:
    assert UserSettings(threshold=-10).threshold == -10
    assert UserSettings(threshold=250).threshold == 250


@pytest.mark.parametrize(
    "field, value",
    [("tick_seconds", 0), ("theme", "sepia"), ("port", 0), ("log_entries", 0), ("timezone", "Mars/Olympus")],
)
def test_invalid_values_rejected(field: str, value: object) -> None:
    with pytest.raises(ValidationError):
        UserSettings(**{field: value})


def test_load_yaml_with_env_interpolation(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ROBOBAT_TEST_PORT", "9123")
    path = tmp_path / "config.yaml"
    path.write_text('threshold: 35\ntheme: light\nport: ${ROBOBAT_TEST_PORT}\ntimezone: "UTC"\n')

    cfg = UserSettings.load(path)

    assert cfg.threshold == 35.0
    assert cfg.theme == "light"
    assert cfg.port == 9123
    assert cfg.timezone == "UTC"


def test_load_empty_file_gives_defaults(tmp_path: Path) -> None:
    path = tmp_path / "config.yaml"
    path.write_text("")
    assert UserSettings.load(path) == UserSettings()


def test_load_invalid_config_raises_runtime_error(tmp_path: Path) -> None:
    path = tmp_path / "config.yaml"
    path.write_text("tick_seconds: -1\n")
    with pytest.raises(RuntimeError, match="Invalid configuration"):
        UserSettings.load(path)


def test_load_unparseable_yaml_raises_runtime_error(tmp_path: Path) -> None:
    path = tmp_path / "config.yaml"
    path.write_text("threshold: [unclosed\n")
    with pytest.raises(RuntimeError, match="Unable to read config YAML"):
        UserSettings.load(path)


def test_env_var_pointing_at_missing_file(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("ROBOBAT_CONFIG", str(tmp_path / "missing.yaml"))
    with pytest.raises(FileNotFoundError):
        UserSettings.load()


def test_env_var_config_is_used(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    path = tmp_path / "robobat.yaml"
    path.write_text("threshold: 42\n")
    monkeypatch.setenv("ROBOBAT_CONFIG", str(path))
    assert UserSettings.load().threshold == 42


def test_no_config_anywhere_uses_defaults(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.delenv("ROBOBAT_CONFIG", raising=False)
    monkeypatch.setattr(UserSettings, "DEFAULT_CONFIG_PATHS", [tmp_path / "nope.yaml"])
    assert UserSettings.load() == UserSettings()


def test_application_settings_paths_point_into_package() -> None:
    settings = ApplicationSettings(UserSettings(time_format_sample="%H:%M"))

    assert (settings.paths.templates_dir / "dashboard.html.j2").exists()
    assert (settings.paths.static_dir / "css" / "style.css").exists()
    assert settings.formats.sample == "%H:%M"
    assert settings.formats.log == "%H:%M"
