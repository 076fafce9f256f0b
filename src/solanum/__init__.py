"""
solanum - Linear data structures over shared singly-linked nodes

This package provides a persistent LIFO stack whose versions share their
tails, and a FIFO queue with O(1) enqueue and dequeue. Nodes are shared by
reference and reclaimed as soon as their last holder lets go of them.
"""

__version__ = "0.1.0"

# Tier 0: Configuration & Instrumentation
from solanum._config import config

from solanum._node_stats import (
    NodeRecord,
    NodeSnapshot,
    NodeStats,
    get_node_stats,
    node_stats_disable,
    node_stats_enable,
    node_stats_leaked,
    node_stats_log,
    node_stats_reset,
    node_stats_snapshot,
)

# Tier 1: Node substrate errors
from solanum._node import (
    ChainError,
    LinkError,
)

# Tier 2: Public API
from solanum._stack import Stack

from solanum._queue import Queue

__all__ = [
    # Version
    "__version__",
    # Tier 0: config
    "config",
    # Tier 0: node_stats
    "NodeRecord",
    "NodeSnapshot",
    "NodeStats",
    "get_node_stats",
    "node_stats_disable",
    "node_stats_enable",
    "node_stats_leaked",
    "node_stats_log",
    "node_stats_reset",
    "node_stats_snapshot",
    # Tier 1: node
    "ChainError",
    "LinkError",
    # Tier 2: Public API
    "Stack",
    "Queue",
]
