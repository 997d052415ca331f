"""Typed parser for pomo.toml sections into immutable app settings."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping, Optional

from app_config_schema import (
    ALLOWED_NOTIFIERS,
    DEFAULT_BREAK_MINUTES,
    DEFAULT_NOTIFIER,
    DEFAULT_POLL_INTERVAL_SECONDS,
    DEFAULT_WORK_MINUTES,
    NOTIFIER_COMMAND,
    AppConfig,
    AppConfigurationError,
    NotifySettings,
    TimerSettings,
)


def parse_app_config(
    raw: Mapping[str, Any],
    *,
    base_dir: Path,
    default_record_file: Path,
    source_file: Optional[str],
) -> AppConfig:
    """Parse raw TOML mappings into strongly typed application settings."""
    timer = _parse_timer_settings(
        _section(raw, "timer"),
        base_dir=base_dir,
        default_record_file=default_record_file,
    )
    notify = _parse_notify_settings(_section(raw, "notify"))
    return AppConfig(timer=timer, notify=notify, source_file=source_file)


def _parse_timer_settings(
    section: Mapping[str, Any],
    *,
    base_dir: Path,
    default_record_file: Path,
) -> TimerSettings:
    record_file = _as_str(section.get("file", ""), "timer.file")
    return TimerSettings(
        record_file=(
            _resolve_path(base_dir, record_file)
            if record_file
            else str(default_record_file)
        ),
        work_minutes=_as_positive_int(
            section.get("work_minutes", DEFAULT_WORK_MINUTES),
            "timer.work_minutes",
        ),
        break_minutes=_as_positive_int(
            section.get("break_minutes", DEFAULT_BREAK_MINUTES),
            "timer.break_minutes",
        ),
    )


def _parse_notify_settings(section: Mapping[str, Any]) -> NotifySettings:
    notifier = _as_notifier_name(
        section.get("notifier", DEFAULT_NOTIFIER),
        "notify.notifier",
    )
    command = _as_optional_str(section.get("command"), "notify.command")
    if notifier == NOTIFIER_COMMAND and command is None:
        raise AppConfigurationError(
            "notify.command is required when notify.notifier is 'command'."
        )
    return NotifySettings(
        notifier=notifier,
        command=command,
        poll_interval_seconds=_as_positive_int(
            section.get("poll_interval_seconds", DEFAULT_POLL_INTERVAL_SECONDS),
            "notify.poll_interval_seconds",
        ),
    )


def _section(root: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    raw = root.get(name, {})
    if raw is None:
        return {}
    if not isinstance(raw, Mapping):
        raise AppConfigurationError(f"[{name}] must be a table.")
    return raw


def _as_str(value: Any, field: str) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value.strip()
    raise AppConfigurationError(f"{field} must be a string.")


def _as_optional_str(value: Any, field: str) -> Optional[str]:
    text = _as_str(value, field)
    if not text:
        return None
    return text


def _as_int(value: Any, field: str) -> int:
    # bool is an int subclass; `work_minutes = true` is a typo, not a duration.
    if isinstance(value, bool):
        raise AppConfigurationError(f"{field} must be an integer.")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError as error:
            raise AppConfigurationError(f"{field} must be an integer.") from error
    raise AppConfigurationError(f"{field} must be an integer.")


def _as_positive_int(value: Any, field: str) -> int:
    number = _as_int(value, field)
    if number <= 0:
        raise AppConfigurationError(f"{field} must be greater than zero, got: {number}")
    return number


def _as_notifier_name(value: Any, field: str) -> str:
    name = _as_str(value, field).lower()
    if name not in ALLOWED_NOTIFIERS:
        allowed = ", ".join(sorted(ALLOWED_NOTIFIERS))
        raise AppConfigurationError(f"{field} must be one of: {allowed}.")
    return name


def _resolve_path(base_dir: Path, raw: str) -> str:
    if not raw:
        return ""
    path = Path(raw).expanduser()
    if not path.is_absolute():
        path = (base_dir / path).resolve()
    return str(path)
