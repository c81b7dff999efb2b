# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2026 qfacade

"""
Configuration management.

Defaults forwarded to the wrapped SDK (shot count, optimization level,
simulation method, device) are read from ``QFACADE_*`` environment
variables once and cached. Explicit arguments passed to facade
functions always take precedence over configuration.

Environment Variables
---------------------
QFACADE_DEFAULT_SHOTS
    Shots used when a call does not specify them (default 1024).
QFACADE_OPTIMIZATION_LEVEL
    Default transpiler optimization level (0-3, unset by default).
QFACADE_SEED_TRANSPILER
    Default transpiler seed (unset by default).
QFACADE_SIMULATION_METHOD
    Default Aer simulation method, e.g. ``statevector``.
QFACADE_DEVICE
    Default Aer device, ``CPU`` or ``GPU``.
QFACADE_REQUIRE_AER
    Fail initialization when ``qiskit-aer`` is missing (default false).
QFACADE_LOG_LEVEL
    Logging level used by the CLI (default ``WARNING``).
QFACADE_REDACT_DISABLE
    Disable redaction of secret argument values in error context.
QFACADE_REDACT_PATTERNS
    Comma-separated regex patterns added to the default redaction set.

Examples
--------
>>> from qfacade.config import Config, set_config
>>> set_config(Config(default_shots=4096, optimization_level=1))

>>> from qfacade.config import reset_config
>>> reset_config()  # next get_config() reloads from environment
"""

from __future__ import annotations

import logging
import os
import re
import threading
from dataclasses import dataclass, field
from typing import Any


logger = logging.getLogger(__name__)

__all__ = [
    "Config",
    "RedactionConfig",
    "get_config",
    "set_config",
    "reset_config",
    "load_config",
]

_DEFAULT_REDACT_PATTERNS: tuple[str, ...] = (
    r"TOKEN",
    r"SECRET",
    r"PASSWORD",
    r"API_?KEY",
    r"PRIVATE_KEY",
    r"CREDENTIAL",
)

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass
class RedactionConfig:
    """
    Redaction of sensitive values before they are stored on errors.

    Parameters
    ----------
    enabled : bool
        Whether redaction is applied.
    patterns : list of str
        Case-insensitive regular expressions matched against names.
    replacement : str
        Value substituted for redacted entries.
    """

    enabled: bool = True
    patterns: list[str] = field(default_factory=lambda: list(_DEFAULT_REDACT_PATTERNS))
    replacement: str = "[REDACTED]"

    def __post_init__(self) -> None:
        self._compiled = [re.compile(p, re.IGNORECASE) for p in self.patterns]

    def should_redact(self, name: str) -> bool:
        """Return True if a value stored under ``name`` must be hidden."""
        if not self.enabled:
            return False
        return any(rx.search(name) for rx in self._compiled)

    def redact_mapping(self, values: dict[str, Any]) -> dict[str, Any]:
        """Return a copy of ``values`` with sensitive entries replaced."""
        return {
            k: (self.replacement if self.should_redact(k) else v)
            for k, v in values.items()
        }


@dataclass
class Config:
    """
    Effective facade configuration.

    Parameters
    ----------
    default_shots : int
        Shots for sampling and execution calls without explicit shots.
    optimization_level : int or None
        Transpiler optimization level forwarded verbatim.
    seed_transpiler : int or None
        Transpiler seed forwarded verbatim.
    simulation_method : str or None
        Aer ``method`` option.
    device : str or None
        Aer ``device`` option.
    require_aer : bool
        Treat a missing ``qiskit-aer`` as an initialization failure.
    log_level : str
        Logging level name for the CLI.
    redaction : RedactionConfig
        Redaction settings for error context.
    """

    default_shots: int = 1024
    optimization_level: int | None = None
    seed_transpiler: int | None = None
    simulation_method: str | None = None
    device: str | None = None
    require_aer: bool = False
    log_level: str = "WARNING"
    redaction: RedactionConfig = field(default_factory=RedactionConfig)

    def __post_init__(self) -> None:
        if self.default_shots <= 0:
            raise ValueError(f"default_shots must be positive, got {self.default_shots}")
        if self.optimization_level is not None and not 0 <= self.optimization_level <= 3:
            raise ValueError(
                f"optimization_level must be in 0..3, got {self.optimization_level}"
            )

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-friendly view of the configuration."""
        return {
            "default_shots": self.default_shots,
            "optimization_level": self.optimization_level,
            "seed_transpiler": self.seed_transpiler,
            "simulation_method": self.simulation_method,
            "device": self.device,
            "require_aer": self.require_aer,
            "log_level": self.log_level,
            "redaction": {
                "enabled": self.redaction.enabled,
                "patterns": list(self.redaction.patterns),
            },
        }


def _parse_bool(value: str | None, default: bool = True) -> bool:
    """Parse a boolean environment value; empty or unset gives ``default``."""
    if value is None or not value.strip():
        return default
    return value.strip().lower() in _TRUTHY


def _parse_int(value: str | None, default: int | None = None) -> int | None:
    """Parse an integer environment value; empty or unset gives ``default``."""
    if value is None or not value.strip():
        return default
    try:
        return int(value.strip())
    except ValueError:
        raise ValueError(f"Expected an integer, got {value!r}") from None


def _parse_patterns(value: str | None) -> list[str] | None:
    """Split a comma-separated pattern list, dropping empty items."""
    if not value:
        return None
    items = [p.strip() for p in value.split(",") if p.strip()]
    return items or None


def _parse_str(value: str | None) -> str | None:
    if value is None or not value.strip():
        return None
    return value.strip()


def load_config() -> Config:
    """
    Build a :class:`Config` from the current environment.

    Returns
    -------
    Config
        Fresh configuration; the cache is not touched.

    Raises
    ------
    ValueError
        If a numeric variable cannot be parsed or is out of range.
    """
    env = os.environ

    patterns = list(_DEFAULT_REDACT_PATTERNS)
    for extra in _parse_patterns(env.get("QFACADE_REDACT_PATTERNS")) or ():
        if extra not in patterns:
            patterns.append(extra)
    redaction = RedactionConfig(
        enabled=not _parse_bool(env.get("QFACADE_REDACT_DISABLE"), default=False),
        patterns=patterns,
    )

    cfg = Config(
        default_shots=_parse_int(env.get("QFACADE_DEFAULT_SHOTS"), 1024),
        optimization_level=_parse_int(env.get("QFACADE_OPTIMIZATION_LEVEL")),
        seed_transpiler=_parse_int(env.get("QFACADE_SEED_TRANSPILER")),
        simulation_method=_parse_str(env.get("QFACADE_SIMULATION_METHOD")),
        device=_parse_str(env.get("QFACADE_DEVICE")),
        require_aer=_parse_bool(env.get("QFACADE_REQUIRE_AER"), default=False),
        log_level=(_parse_str(env.get("QFACADE_LOG_LEVEL")) or "WARNING").upper(),
        redaction=redaction,
    )
    logger.debug("Loaded config: %s", cfg.to_dict())
    return cfg


_config: Config | None = None
_config_lock = threading.Lock()


def get_config() -> Config:
    """Return the cached configuration, loading it on first use."""
    global _config
    with _config_lock:
        if _config is None:
            _config = load_config()
        return _config


def set_config(config: Config) -> None:
    """Replace the cached configuration."""
    global _config
    with _config_lock:
        _config = config


def reset_config() -> None:
    """Drop the cached configuration so the next access reloads it."""
    global _config
    with _config_lock:
        _config = None
