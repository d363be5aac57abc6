"""Settings loading and validation utilities."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml


DEFAULT_SETTINGS_PATH = "config/settings.yaml"


@dataclass(slots=True)
class Settings:
    """Application settings structure.

    Attributes:
        openai: Provider configuration (provider, api_key, organization,
            base_url, timeout, max_retries, default_model).
        observability: Logging configuration dictionary.
        raw: Original full settings dictionary.
    """

    openai: dict[str, Any]
    observability: dict[str, Any]
    raw: dict[str, Any]


def _require_path(data: dict[str, Any], dotted_path: str) -> None:
    current: Any = data
    for key in dotted_path.split("."):
        if not isinstance(current, dict) or key not in current:
            raise ValueError(f"Missing required settings field: {dotted_path}")
        current = current[key]


def validate_settings(settings: Settings) -> None:
    """Validate required settings fields.

    Args:
        settings: Parsed settings object.

    Raises:
        ValueError: If any required field is missing.
    """

    required_paths = [
        "openai",
        "openai.provider",
    ]

    for path in required_paths:
        _require_path(settings.raw, path)

    timeout = settings.openai.get("timeout")
    if timeout is not None and (not isinstance(timeout, (int, float)) or timeout <= 0):
        raise ValueError("Settings field openai.timeout must be a positive number")


def load_settings(path: str = DEFAULT_SETTINGS_PATH) -> Settings:
    """Load YAML settings from a file and validate required fields.

    Args:
        path: Path to the YAML settings file.

    Returns:
        Parsed and validated settings object.

    Raises:
        FileNotFoundError: If the path does not exist.
        ValueError: If YAML is invalid or required fields are missing.
    """

    settings_path = Path(path)
    if not settings_path.exists():
        raise FileNotFoundError(f"Settings file not found: {settings_path}")

    with settings_path.open("r", encoding="utf-8") as fp:
        try:
            parsed = yaml.safe_load(fp)
        except yaml.YAMLError as exc:
            raise ValueError(f"Settings file is not valid YAML: {exc}") from exc

    if not isinstance(parsed, dict):
        raise ValueError("Settings file must contain a YAML mapping at top level")

    settings = Settings(
        openai=parsed.get("openai") or {},
        observability=parsed.get("observability") or {},
        raw=parsed,
    )
    validate_settings(settings)
    return settings
