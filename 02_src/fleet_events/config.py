"""Project-level configuration and path helpers."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Union

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
LOGS_DIR = PROJECT_ROOT / "04_logs"
DEFAULT_LOG_PATH = LOGS_DIR / "fleet_events.log"

DEFAULT_HOURS_BACK = 1
DEFAULT_LEGACY_NEWEST = 1000
DEFAULT_POWERSHELL = "pwsh"

LEGACY_LOG_NAME = "system"
LEGACY_ENTRY_TYPE = "Error"


PathLike = Union[str, Path]


def resolve_log_path(env_value: PathLike | None = None) -> Path:
    """Resolve FLEET_EVENTS_LOG_FILE to an absolute path."""
    if not env_value:
        return DEFAULT_LOG_PATH

    candidate = Path(env_value)
    return candidate if candidate.is_absolute() else PROJECT_ROOT / candidate


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None
    if value < 1:
        raise ValueError(f"{name} must be positive, got {value}")
    return value


def _float_env(name: str) -> float | None:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return None
    try:
        value = float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {value}")
    return value


@dataclass(frozen=True)
class Settings:
    """Runtime settings, usually read from the environment."""

    hours_back: int = DEFAULT_HOURS_BACK
    legacy_newest: int = DEFAULT_LEGACY_NEWEST
    max_concurrency: int = 1
    powershell: str = DEFAULT_POWERSHELL
    command_timeout: float | None = None  # seconds; None leaves it to the remote API

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from FLEET_EVENTS_* environment variables."""
        return cls(
            hours_back=_int_env("FLEET_EVENTS_HOURS_BACK", DEFAULT_HOURS_BACK),
            legacy_newest=_int_env("FLEET_EVENTS_LEGACY_NEWEST", DEFAULT_LEGACY_NEWEST),
            max_concurrency=_int_env("FLEET_EVENTS_MAX_CONCURRENCY", 1),
            powershell=os.getenv("FLEET_EVENTS_POWERSHELL") or DEFAULT_POWERSHELL,
            command_timeout=_float_env("FLEET_EVENTS_COMMAND_TIMEOUT"),
        )
