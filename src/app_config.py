from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Mapping, Optional

try:  # Python 3.11+
    import tomllib
except ModuleNotFoundError:  # pragma: no cover - fallback for older runtimes
    import tomli as tomllib  # type: ignore

from app_config_parser import parse_app_config
from app_config_schema import (
    DEFAULT_CONFIG_FILE,
    DEFAULT_RECORD_FILE,
    NOTIFIER_COMMAND,
    AppConfig,
    AppConfigurationError,
    NotifySettings,
    TimerSettings,
)

__all__ = [
    "AppConfig",
    "AppConfigurationError",
    "NotifySettings",
    "TimerSettings",
    "default_record_path",
    "load_app_config",
    "resolve_config_path",
]


def resolve_config_path(
    config_path: str | None = None,
    *,
    environ: Mapping[str, str] | None = None,
) -> Path:
    env = environ if environ is not None else os.environ
    env_path = env.get("POMO_CONFIG", "").strip() or None
    raw = config_path or env_path
    if raw:
        path = Path(raw).expanduser()
        if not path.is_absolute():
            path = (Path.cwd() / path).resolve()
        return path
    return _xdg_dir(env, "XDG_CONFIG_HOME", Path(".config")) / DEFAULT_CONFIG_FILE


def default_record_path(*, environ: Mapping[str, str] | None = None) -> Path:
    env = environ if environ is not None else os.environ
    return _xdg_dir(env, "XDG_DATA_HOME", Path(".local") / "share") / DEFAULT_RECORD_FILE


def load_app_config(
    config_path: str | None = None,
    *,
    environ: Mapping[str, str] | None = None,
) -> AppConfig:
    """Load `pomo.toml` (optional) and apply `POMO_*` environment overrides."""
    env = environ if environ is not None else os.environ
    path = resolve_config_path(config_path, environ=env)

    raw: Mapping[str, Any] = {}
    source_file: Optional[str] = None
    if path.exists():
        if not path.is_file():
            raise AppConfigurationError(f"Config path is not a file: {path}")
        try:
            with open(path, "rb") as fh:
                raw = tomllib.load(fh)
        except Exception as error:
            raise AppConfigurationError(f"Failed to parse config TOML: {error}") from error
        source_file = str(path)

    if not isinstance(raw, Mapping):
        raise AppConfigurationError("Root config TOML object must be a table.")

    return parse_app_config(
        _apply_environment(raw, env),
        base_dir=path.parent,
        default_record_file=default_record_path(environ=env),
        source_file=source_file,
    )


def _apply_environment(
    raw: Mapping[str, Any],
    env: Mapping[str, str],
) -> dict[str, Any]:
    merged: dict[str, Any] = dict(raw)
    timer = _mutable_section(merged, "timer")
    notify = _mutable_section(merged, "notify")

    record_file = env.get("POMO_FILE", "").strip()
    if record_file:
        # Environment paths are relative to the caller, not to the config file.
        timer["file"] = str((Path.cwd() / Path(record_file).expanduser()).resolve())
    work_time = env.get("POMO_WORK_TIME", "").strip()
    if work_time:
        timer["work_minutes"] = work_time
    break_time = env.get("POMO_BREAK_TIME", "").strip()
    if break_time:
        timer["break_minutes"] = break_time

    callback = env.get("POMO_MSG_CALLBACK", "").strip()
    if callback:
        notify["command"] = callback
        notify["notifier"] = NOTIFIER_COMMAND
    notifier = env.get("POMO_NOTIFIER", "").strip()
    if notifier:
        notify["notifier"] = notifier

    return merged


def _mutable_section(root: dict[str, Any], name: str) -> dict[str, Any]:
    raw = root.get(name)
    if raw is None:
        section: dict[str, Any] = {}
    elif isinstance(raw, Mapping):
        section = dict(raw)
    else:
        raise AppConfigurationError(f"[{name}] must be a table.")
    root[name] = section
    return section


def _xdg_dir(env: Mapping[str, str], variable: str, home_relative: Path) -> Path:
    base = env.get(variable, "").strip()
    if base:
        return Path(base).expanduser()
    return Path.home() / home_relative
