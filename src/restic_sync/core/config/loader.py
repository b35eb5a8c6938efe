"""Config loading from file, environment and explicit overrides."""

from __future__ import annotations

import json
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from restic_sync.core.contracts.config import SyncConfig
from restic_sync.core.contracts.exceptions import ConfigError
from restic_sync.core.scheduler import validate_cron_expression

ENV_VARS: dict[str, str] = {
    "source": "REST_SYNC_SOURCE",
    "dest": "REST_SYNC_DEST",
    "cron": "REST_SYNC_CRON",
    "prune": "REST_SYNC_PRUNE",
}

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}


def _read_config_file(path: str | Path) -> dict[str, Any]:
    config_path = Path(path).expanduser().resolve()
    try:
        raw_payload: Any = json.loads(config_path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ConfigError(f"failed reading config file: {config_path}") from exc
    except json.JSONDecodeError as exc:
        raise ConfigError(f"invalid JSON in config file: {config_path}") from exc
    if not isinstance(raw_payload, dict):
        raise ConfigError(f"config file must contain a JSON object: {config_path}")
    return raw_payload


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ConfigError(f"{name} must be a boolean value, got {raw!r}")


def _from_environ(environ: Mapping[str, str]) -> dict[str, Any]:
    values: dict[str, Any] = {}
    for field, env_name in ENV_VARS.items():
        raw = environ.get(env_name)
        if raw is None:
            continue
        values[field] = _parse_bool(env_name, raw) if field == "prune" else raw
    return values


def _validate(payload: dict[str, Any]) -> SyncConfig:
    try:
        config = SyncConfig.model_validate(payload)
    except ValidationError as exc:
        raise ConfigError(f"invalid config: {exc}") from exc
    if config.cron is not None:
        validate_cron_expression(config.cron)
    return config


def load_config(path: str | Path) -> SyncConfig:
    """Load and validate config from a JSON file."""
    return _validate(_read_config_file(path))


def resolve_config(
    *,
    config_path: str | Path | None = None,
    overrides: Mapping[str, Any] | None = None,
    environ: Mapping[str, str] | None = None,
) -> SyncConfig:
    """Merge config file, environment variables and explicit overrides, in that order.

    ``None`` values in *overrides* are ignored so unset CLI flags fall through.
    """
    payload: dict[str, Any] = {}
    if config_path is not None:
        payload.update(_read_config_file(config_path))
    payload.update(_from_environ(os.environ if environ is None else environ))
    payload.update({key: value for key, value in (overrides or {}).items() if value is not None})

    missing = [field for field in ("source", "dest") if not payload.get(field)]
    if missing:
        hints = ", ".join(f"--{field} / {ENV_VARS[field]}" for field in missing)
        raise ConfigError(f"missing required setting(s): {hints}")
    return _validate(payload)
