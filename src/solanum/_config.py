"""
config - Runtime configuration

This module provides runtime configuration for solanum. Settings are read
once from ``SOLANUM_*`` environment variables at import; the ones that make
sense to flip at runtime are exposed as writable properties.
"""

import logging
import os
import threading
from typing import Optional


logger = logging.getLogger(__name__)

_TRUE_VALUES = ('1', 'true', 'yes', 'on')
_FALSE_VALUES = ('0', 'false', 'no', 'off')


def _get_env(name: str, default: Optional[str] = None) -> Optional[str]:
    """Get environment variable with prefix."""
    full_name = f"SOLANUM_{name}"
    return os.environ.get(full_name, default)


def _get_env_bool(name: str, default: bool = False) -> bool:
    """Get boolean environment variable.

    Unrecognised values are logged and replaced by ``default``.
    """
    value = _get_env(name)
    if value is None:
        return default
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    logger.warning(
        "Ignoring SOLANUM_%s=%r: expected one of %s; using %s",
        name, value, ', '.join(_TRUE_VALUES + _FALSE_VALUES), default,
    )
    return default


class Config:
    """Global configuration for solanum.

    ``enable_statistics`` and ``track_leaks`` seed the node statistics
    collector when :mod:`solanum._node_stats` is imported and are read-only
    afterwards; use :func:`solanum.node_stats_enable` to switch statistics at
    runtime. ``check_invariants`` may be changed at any time and is consulted
    on every queue mutation.
    """

    __slots__ = (
        '_lock',
        '_enable_statistics',
        '_track_leaks',
        '_check_invariants',
        '_initialized',
    )

    def __init__(self) -> None:
        """Initialize configuration (called once at module import)."""
        self._lock = threading.Lock()
        self._initialized = False
        self._init()

    def _init(self) -> None:
        """Perform initialization."""
        if self._initialized:
            return

        self._enable_statistics = _get_env_bool('ENABLE_STATS', False)
        self._track_leaks = _get_env_bool('TRACK_LEAKS', False)
        self._check_invariants = _get_env_bool('CHECK_INVARIANTS', False)

        self._initialized = True

    def reload(self) -> None:
        """Re-read every setting from the environment."""
        with self._lock:
            self._initialized = False
            self._init()

    # Read-only properties (seeded from the environment)

    @property
    def enable_statistics(self) -> bool:
        """True if node statistics were requested via SOLANUM_ENABLE_STATS."""
        return self._enable_statistics

    @property
    def track_leaks(self) -> bool:
        """True if per-node leak records were requested via SOLANUM_TRACK_LEAKS."""
        return self._track_leaks

    # Configurable properties

    @property
    def check_invariants(self) -> bool:
        """Whether queues re-verify their head/tail invariant after each mutation."""
        return self._check_invariants

    @check_invariants.setter
    def check_invariants(self, value: bool) -> None:
        """Enable or disable queue invariant checks.

        Raises:
            TypeError: If value is not a bool
        """
        if not isinstance(value, bool):
            raise TypeError(
                f"check_invariants must be a bool, not {type(value).__name__}"
            )
        with self._lock:
            self._check_invariants = value

    def __repr__(self) -> str:
        """String representation of configuration."""
        return (
            f"Config("
            f"enable_statistics={self.enable_statistics}, "
            f"track_leaks={self.track_leaks}, "
            f"check_invariants={self.check_invariants})"
        )


# Global configuration instance (initialized at module import)
config = Config()
