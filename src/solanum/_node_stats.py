"""
node_stats - Node lifetime statistics

This module provides an opt-in instrumentation layer that counts node
construction and reclamation. Nodes are shared by plain Python references,
so CPython frees a node as soon as its last holder (a stack, a queue slot
or another node's ``next``) lets go of it. The collector observes that
moment through ``weakref.finalize`` and makes "freed on last release"
visible to tests without adding anything to the container API.

Statistics are disabled by default. When disabled, the only cost on node
construction is a single attribute check.
"""

import logging
import threading
import time
import weakref
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from solanum._config import config


logger = logging.getLogger(__name__)

# Longest value repr kept in a leak record
VALUE_REPR_LIMIT = 100


def _safe_repr(value: Any) -> str:
    """Shortened repr of a node value; never raises."""
    try:
        return repr(value)[:VALUE_REPR_LIMIT]
    except Exception:
        return f"<{type(value).__name__} repr failed>"


@dataclass
class NodeRecord:
    """Record of an individual live node (for leak detection)."""
    node_id: int
    kind: str
    value_repr: str
    timestamp: float
    thread_id: int


@dataclass(frozen=True)
class NodeSnapshot:
    """Point-in-time node statistics."""
    created: int
    released: int
    peak_live: int

    @property
    def live(self) -> int:
        """Number of tracked nodes not yet reclaimed."""
        return self.created - self.released


class NodeStats:
    """Thread-safe node lifetime statistics collector."""

    __slots__ = (
        '_lock',
        '_enabled',
        '_track_leaks',
        '_created',
        '_released',
        '_peak_live',
        '_records',
        '_generation',
    )

    def __init__(self):
        """Initialize statistics collector."""
        # Reentrant: a finalizer may fire while track() holds the lock
        self._lock = threading.RLock()
        self._enabled = False
        self._track_leaks = False
        self._created = 0
        self._released = 0
        self._peak_live = 0
        self._records: Dict[int, NodeRecord] = {}
        # Bumped on reset so finalizers of older nodes are ignored
        self._generation = 0

    def enable(self, track_leaks: bool = False) -> None:
        """Enable statistics collection.

        Args:
            track_leaks: If True, keep a record per live node for leak detection
        """
        with self._lock:
            self._enabled = True
            self._track_leaks = track_leaks
        logger.debug("Node statistics enabled (track_leaks=%s)", track_leaks)

    def disable(self) -> None:
        """Disable statistics collection.

        Nodes tracked while enabled are still counted when they are released.
        """
        with self._lock:
            self._enabled = False
        logger.debug("Node statistics disabled")

    def reset(self) -> None:
        """Reset all statistics.

        Nodes created before the reset are no longer counted when released.
        """
        with self._lock:
            self._created = 0
            self._released = 0
            self._peak_live = 0
            self._records.clear()
            self._generation += 1
        logger.debug("Node statistics reset")

    def track(self, node: Any) -> None:
        """Register a freshly constructed node.

        Called by the node constructors; it should not normally be called
        directly by user code.

        Args:
            node: The node being constructed. Must support weak references.
        """
        if not self._enabled:
            return

        node_id = id(node)
        thread_id = threading.get_ident()
        value_repr = _safe_repr(node.value) if self._track_leaks else None

        with self._lock:
            finalizer = weakref.finalize(
                node, self._record_release, node_id, self._generation,
            )
            finalizer.atexit = False

            self._created += 1
            live = self._created - self._released
            if live > self._peak_live:
                self._peak_live = live

            if value_repr is not None:
                self._records[node_id] = NodeRecord(
                    node_id=node_id,
                    kind=type(node).__name__,
                    value_repr=value_repr,
                    timestamp=time.time(),
                    thread_id=thread_id,
                )

    def _record_release(self, node_id: int, generation: int) -> None:
        """Record that a tracked node has been reclaimed."""
        with self._lock:
            if generation != self._generation:
                return
            self._released += 1
            self._records.pop(node_id, None)

    def snapshot(self) -> NodeSnapshot:
        """Get current statistics snapshot.

        Returns:
            NodeSnapshot with current statistics
        """
        with self._lock:
            return NodeSnapshot(
                created=self._created,
                released=self._released,
                peak_live=self._peak_live,
            )

    def get_live_records(self) -> List[NodeRecord]:
        """Get records of nodes that haven't been released.

        Returns:
            List of NodeRecords; empty unless leak tracking is on
        """
        with self._lock:
            return list(self._records.values())

    @property
    def enabled(self) -> bool:
        """Check if statistics collection is enabled."""
        return self._enabled

    @property
    def track_leaks(self) -> bool:
        """Check if per-node leak records are kept."""
        return self._track_leaks


# Global statistics instance
_global_stats = NodeStats()

if config.enable_statistics:
    _global_stats.enable(track_leaks=config.track_leaks)


def get_node_stats() -> NodeStats:
    """Get the global statistics collector."""
    return _global_stats


def track_node(node: Any) -> None:
    """Register a node with the global collector (no-op while disabled)."""
    if _global_stats._enabled:
        _global_stats.track(node)


# Statistics API
def node_stats_enable(track_leaks: bool = False) -> None:
    """Enable node statistics.

    Args:
        track_leaks: If True, keep a record per live node for leak detection
    """
    _global_stats.enable(track_leaks)


def node_stats_disable() -> None:
    """Disable node statistics."""
    _global_stats.disable()


def node_stats_reset() -> None:
    """Reset node statistics."""
    _global_stats.reset()


def node_stats_snapshot() -> NodeSnapshot:
    """Get node statistics snapshot.

    Returns:
        NodeSnapshot with current stats
    """
    return _global_stats.snapshot()


def node_stats_leaked() -> List[NodeRecord]:
    """Get nodes that are still alive.

    Note: Must have enabled statistics with track_leaks=True

    Returns:
        List of NodeRecords for unreleased nodes
    """
    return _global_stats.get_live_records()


def node_stats_log(
    logger: Optional[logging.Logger] = None,
    level: int = logging.INFO,
) -> NodeSnapshot:
    """Log a one-line summary of the current statistics.

    Args:
        logger: Logger to write to (default: this module's logger)
        level: Logging level for the summary line

    Returns:
        The snapshot that was logged
    """
    if logger is None:
        logger = logging.getLogger(__name__)
    snap = _global_stats.snapshot()
    logger.log(
        level,
        "Nodes: created=%d released=%d live=%d peak_live=%d",
        snap.created, snap.released, snap.live, snap.peak_live,
    )
    return snap
