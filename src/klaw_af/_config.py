"""Library configuration: default resolution Mode, AFConfig, and initialization."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from klaw_af._logging import configure_logging
from klaw_af.types import Mode

__all__ = [
    'AFConfig',
    'active_config',
    'get_config',
    'init',
]

MODE_ENV_VAR = 'KLAW_AF_MODE'


@dataclass(frozen=True)
class AFConfig:
    """Configuration for klaw-af.

    Attributes:
        mode: Resolution mode given to pipelines created without an explicit mode.
        log_level: Logging level (e.g., "DEBUG", "INFO"). None = silent.
    """

    mode: Mode = Mode.PARALLEL
    log_level: str | None = None


# Global configuration (set by init())
_config: AFConfig | None = None


def _detect_mode() -> Mode:
    """Detect the default resolution mode from the KLAW_AF_MODE environment variable."""
    env_mode = os.environ.get(MODE_ENV_VAR, '').lower()
    if env_mode == 'serial':
        return Mode.SERIAL
    if env_mode == 'parallel':
        return Mode.PARALLEL
    if env_mode:
        logging.warning("Unknown %s value '%s', defaulting to parallel", MODE_ENV_VAR, env_mode)
    return Mode.PARALLEL


def init(
    mode: Mode | str | None = None,
    log_level: str | None = None,
) -> AFConfig:
    """Initialize klaw-af with the specified configuration.

    Args:
        mode: Default resolution mode. Detected from KLAW_AF_MODE if None.
            Can be a Mode enum or its string value ("parallel", "serial").
        log_level: Logging level ("DEBUG", "INFO", etc.). None = silent.

    Returns:
        The AFConfig that was set.

    Example:
        ```python
        from klaw_af import init, Mode

        init(mode=Mode.SERIAL, log_level='DEBUG')
        ```
    """
    global _config  # noqa: PLW0603

    if mode is None:
        resolved_mode = _detect_mode()
    elif isinstance(mode, str):
        resolved_mode = Mode(mode.lower())
    else:
        resolved_mode = mode

    _config = AFConfig(mode=resolved_mode, log_level=log_level)

    if log_level is not None:
        configure_logging(log_level)

    return _config


def get_config() -> AFConfig:
    """Get the current configuration.

    Raises:
        RuntimeError: If init() has not been called.
    """
    if _config is None:
        msg = 'klaw-af not initialized. Call klaw_af.init() first.'
        raise RuntimeError(msg)
    return _config


def active_config() -> AFConfig:
    """Return the initialized configuration, or the environment-detected default."""
    if _config is None:
        return AFConfig(mode=_detect_mode())
    return _config


def _reset() -> None:
    """Forget the configuration set by init()."""
    global _config  # noqa: PLW0603
    _config = None
