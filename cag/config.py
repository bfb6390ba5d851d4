"""Environment-driven runtime settings.

The pager has no config file; tracing is toggled through the environment.
Log files default to the platform log directory for ``cag``.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_log_dir

APP_NAME = "cag"
ENVIRONMENT_VARIABLE_ENABLE_TRACING = "ENABLE_TRACING"
ENVIRONMENT_VARIABLE_LOG_DIR = "CAG_LOG_DIR"
LOG_FILENAME = "runlog"
DEFAULT_LOG_DIR = Path(user_log_dir(APP_NAME, appauthor=False))
DEFAULT_BATCH_FACTOR = 4
DEFAULT_STARTUP_TIMEOUT_SECONDS = 1.0
DEFAULT_STYLE = "monokai"


@dataclass(frozen=True)
class PagerConfig:
    """Settings resolved once at startup."""

    tracing_enabled: bool = False
    log_dir: Path = DEFAULT_LOG_DIR
    batch_factor: int = DEFAULT_BATCH_FACTOR
    startup_timeout: float = DEFAULT_STARTUP_TIMEOUT_SECONDS
    style: str = DEFAULT_STYLE
    no_color: bool = False

    @property
    def log_path(self) -> Path:
        return self.log_dir / LOG_FILENAME


def tracing_enabled(environ: Mapping[str, str] | None = None) -> bool:
    """Return whether ``ENABLE_TRACING`` asks for diagnostic logging.

    Only ``1`` and ``true`` (any case) enable it; anything else is off.
    """
    env = os.environ if environ is None else environ
    value = env.get(ENVIRONMENT_VARIABLE_ENABLE_TRACING)
    if value is None:
        return False
    return value == "1" or value.strip().lower() == "true"


def resolve_log_dir(environ: Mapping[str, str] | None = None) -> Path:
    """Return the log directory, honoring ``CAG_LOG_DIR`` when non-empty."""
    env = os.environ if environ is None else environ
    override = env.get(ENVIRONMENT_VARIABLE_LOG_DIR, "").strip()
    if override:
        return Path(override).expanduser()
    return DEFAULT_LOG_DIR


def load_config(
    environ: Mapping[str, str] | None = None,
    *,
    batch_factor: int = DEFAULT_BATCH_FACTOR,
    startup_timeout: float = DEFAULT_STARTUP_TIMEOUT_SECONDS,
    style: str = DEFAULT_STYLE,
    no_color: bool = False,
) -> PagerConfig:
    """Combine environment toggles with CLI-provided values."""
    return PagerConfig(
        tracing_enabled=tracing_enabled(environ),
        log_dir=resolve_log_dir(environ),
        batch_factor=max(1, batch_factor),
        startup_timeout=max(0.0, startup_timeout),
        style=style,
        no_color=no_color,
    )
