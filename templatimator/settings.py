"""Runtime settings loader for the command-line interface.

This module provides ``AppSettings``, which loads and validates the small
set of environment-driven options the CLI honours. It forms the boundary
between the process environment (including an optional project ``.env``
file) and the strongly-typed values consumed by ``templatimator.cli``.

No rendering logic lives here: only configuration loading and validation.

Examples
--------
>>> from templatimator.settings import AppSettings
>>> settings = AppSettings()
>>> settings.log_level in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
True
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from dotenv import load_dotenv

import templatimator.config as _project_config
from templatimator.config import (
    DEFAULT_LIBRARY_PATH,
    DEFAULT_LOG_LEVEL,
    DEFAULT_OUTPUT_FORMAT,
    EXPORT_TYPES,
)
from templatimator.exceptions import ConfigurationError

_VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
_TRUTHY_FLAGS = ("1", "true", "yes", "on")


class AppSettings:
    r"""Environment-backed settings for the CLI.

    Attributes
    ----------
    log_level : str
        Upper-case logging level name.
    library_path : Path
        Location of the JSON snippet library.
    default_format : str
        Output format used when ``--format`` is not given.
    file_logs_enabled : bool
        ``False`` when ``DISABLE_FILE_LOGS`` is set to a truthy value.

    Notes
    -----
    A ``.env`` file at the project root is loaded with ``override=True`` so
    that its values are authoritative during process startup and in tests
    that create a temporary ``.env`` file.
    """

    def __init__(self) -> None:
        """Load settings from the environment and validate them.

        Raises
        ------
        ConfigurationError
            If the log level or default output format is not recognised.
        """
        # Resolve the .env location through the config module so tests can
        # monkeypatch ``templatimator.config.ENV_FILE``.
        env_path = Path(_project_config.ENV_FILE)
        if env_path.exists():
            load_dotenv(env_path, override=True)
        self.log_level: str = os.getenv(
            "TEMPLATIMATOR_LOG_LEVEL", DEFAULT_LOG_LEVEL
        ).upper()
        self.library_path: Path = Path(
            os.getenv("TEMPLATIMATOR_LIBRARY_PATH", str(DEFAULT_LIBRARY_PATH))
        ).expanduser()
        self.default_format: str = os.getenv(
            "TEMPLATIMATOR_DEFAULT_FORMAT", DEFAULT_OUTPUT_FORMAT
        ).lower()
        self.file_logs_enabled: bool = (
            os.getenv("DISABLE_FILE_LOGS", "").strip().lower() not in _TRUTHY_FLAGS
        )
        if self.log_level not in _VALID_LOG_LEVELS:
            raise ConfigurationError(
                f"Invalid TEMPLATIMATOR_LOG_LEVEL: {self.log_level}",
                context={"allowed": list(_VALID_LOG_LEVELS)},
            )
        if self.default_format not in EXPORT_TYPES:
            raise ConfigurationError(
                f"Invalid TEMPLATIMATOR_DEFAULT_FORMAT: {self.default_format}",
                context={"allowed": sorted(EXPORT_TYPES)},
            )
        logging.getLogger(__name__).debug(
            "Loaded settings: level=%s library=%s format=%s",
            self.log_level,
            self.library_path,
            self.default_format,
        )
