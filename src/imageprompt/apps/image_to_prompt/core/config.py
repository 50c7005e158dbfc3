"""Configuration helpers for the image-to-prompt tool."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional

import tomllib

from imageprompt.errors import FlagError, err_invalid_log_level
from imageprompt.logging_utils import parse_log_level

logger = logging.getLogger(__name__)

_CONFIG_ENV_PREFIX = "IMAGEPROMPT_IMAGE_TO_PROMPT__"


def _find_pyproject(start: Optional[Path] = None) -> Optional[Path]:
    """Locate the closest ``pyproject.toml`` relative to *start*."""

    current = (start or Path.cwd()).resolve()
    for candidate in [current, *current.parents]:
        pyproject = candidate / "pyproject.toml"
        if pyproject.exists():
            return pyproject
    return None


def _coerce_bool(value: object, default: bool) -> bool:
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return bool(value)
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"1", "true", "yes", "on"}:
            return True
        if lowered in {"0", "false", "no", "off"}:
            return False
    return default


@dataclass(frozen=True)
class PromptSettings:
    """Default configuration values sourced from project metadata."""

    default_log_level: str = "warn"
    default_log_as_json: bool = False
    # Where default_log_level came from, for error reporting.
    log_level_source: str = field(default="built-in default", compare=False)


@dataclass(frozen=True)
class PromptConfig:
    """Fully resolved runtime configuration for one invocation."""

    image_path: Path
    log_level: str
    log_as_json: bool

    @property
    def level(self) -> int:
        return parse_log_level(self.log_level)


def _load_pyproject_settings(start: Optional[Path]) -> Dict[str, object]:
    pyproject = _find_pyproject(start)
    if not pyproject:
        return {}

    try:
        with pyproject.open("rb") as handle:
            data = tomllib.load(handle)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        logger.debug("ignoring unreadable %s: %s", pyproject, exc)
        return {}

    tool_cfg = data.get("tool", {}).get("imageprompt", {})
    if not isinstance(tool_cfg, dict):
        return {}

    app_cfg = tool_cfg.get("image_to_prompt")
    return dict(app_cfg) if isinstance(app_cfg, dict) else {}


def _load_env_settings() -> Dict[str, object]:
    values: Dict[str, object] = {}
    for env_key, env_value in os.environ.items():
        if not env_key.startswith(_CONFIG_ENV_PREFIX):
            continue
        key = env_key[len(_CONFIG_ENV_PREFIX) :].lower()
        values[key] = env_value
    return values


def load_settings(start: Optional[Path] = None) -> PromptSettings:
    """Load project defaults, applying environment overrides when present."""

    raw = _load_pyproject_settings(start)
    env = _load_env_settings()

    if env.get("default_log_level"):
        log_level_source = f"environment variable {_CONFIG_ENV_PREFIX}DEFAULT_LOG_LEVEL"
    elif raw.get("default_log_level"):
        log_level_source = "[tool.imageprompt.image_to_prompt] in pyproject.toml"
    else:
        log_level_source = PromptSettings.log_level_source
    raw.update(env)

    log_level = str(
        raw.get("default_log_level") or PromptSettings.default_log_level
    ).strip()
    log_as_json = _coerce_bool(
        raw.get("default_log_as_json"), PromptSettings.default_log_as_json
    )

    return PromptSettings(
        default_log_level=log_level,
        default_log_as_json=log_as_json,
        log_level_source=log_level_source,
    )


def build_runtime_config(
    *,
    settings: PromptSettings,
    image_path: Path,
    log_level: Optional[str] = None,
    log_as_json: Optional[bool] = None,
) -> PromptConfig:
    """Merge explicit overrides onto *settings*.

    Raises ``FlagError`` when the resulting log level is not recognised.
    """

    if log_level is not None:
        level_name = log_level.strip()
        parse_log_level(level_name)
    else:
        level_name = settings.default_log_level.strip()
        try:
            parse_log_level(level_name)
        except FlagError as exc:
            raise err_invalid_log_level(level_name, settings.log_level_source) from exc

    return PromptConfig(
        image_path=Path(image_path).expanduser(),
        log_level=level_name.lower(),
        log_as_json=(
            settings.default_log_as_json if log_as_json is None else bool(log_as_json)
        ),
    )


def load_config(
    *, image_path: Path, start: Optional[Path] = None, **overrides: object
) -> PromptConfig:
    settings = load_settings(start)
    return build_runtime_config(settings=settings, image_path=image_path, **overrides)
