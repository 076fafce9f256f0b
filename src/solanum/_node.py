"""
node - Singly-linked nodes shared by reference

This module provides the two node flavours the containers are built from:

- ImmutableNode: value and next are fixed at construction. Any number of
  stacks (or other nodes) may hold the same node, which is how a pushed
  stack shares its tail with every earlier version of itself.
- MutableNode: next may be set once after construction, which is what a
  queue needs to append behind its current tail in O(1).

Nodes are reclaimed by CPython as soon as their last holder drops them.
"""

from typing import Generic, Iterator, List, Optional, TypeVar

from solanum._node_stats import track_node


T = TypeVar('T')


class LinkError(Exception):
    """Exception raised when appending after a node that already has a successor."""
    pass


class ChainError(Exception):
    """Exception raised when a container's chain invariant is found broken."""
    pass


class _NodeBase(Generic[T]):
    """Behaviour shared by both node flavours."""

    __slots__ = ()

    def is_tail(self) -> bool:
        """True if this node has no successor."""
        return self.next is None

    def __eq__(self, other: object) -> bool:
        """Structural equality over the whole chain.

        Walks both chains in step instead of recursing, so arbitrarily long
        chains compare without hitting the recursion limit. Shared nodes are
        compared by value like any other, so a shared suffix and a fresh
        copy of it always give the same answer.
        """
        if not isinstance(other, type(self)):
            return NotImplemented
        a: Optional[_NodeBase[T]] = self
        b: Optional[_NodeBase[T]] = other
        while a is not None and b is not None:
            if a.value != b.value:
                return False
            a = a.next
            b = b.next
        return a is None and b is None

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        """String representation (the successor is summarised, not expanded)."""
        if self.next is None:
            tail = "None"
        else:
            tail = f"<{type(self.next).__name__} value={self.next.value!r}>"
        return f"{type(self).__name__}(value={self.value!r}, next={tail})"


class ImmutableNode(_NodeBase[T]):
    """Node whose value and successor never change after construction.

    Example:
        >>> tail = ImmutableNode.new(1)
        >>> head = ImmutableNode.new_with_next(2, tail)
        >>> head.next is tail
        True
    """

    __slots__ = ('value', 'next', '__weakref__')

    def __init__(self, value: T, next: Optional['ImmutableNode[T]'] = None):
        """Initialize node.

        Args:
            value: The value stored in this node
            next: Node that follows this one, or None for a tail node
        """
        object.__setattr__(self, 'value', value)
        object.__setattr__(self, 'next', next)
        track_node(self)

    @classmethod
    def new(cls, value: T) -> 'ImmutableNode[T]':
        """Create a tail node."""
        return cls(value)

    @classmethod
    def new_with_next(cls, value: T, next_node: 'ImmutableNode[T]') -> 'ImmutableNode[T]':
        """Create a node in front of ``next_node``.

        The caller keeps its own reference to ``next_node``; the new node
        becomes one more holder of it.
        """
        return cls(value, next_node)

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")


class MutableNode(_NodeBase[T]):
    """Node whose successor can be linked once after construction."""

    __slots__ = ('value', 'next', '__weakref__')

    def __init__(self, value: T, next: Optional['MutableNode[T]'] = None):
        """Initialize node.

        Args:
            value: The value stored in this node
            next: Node that follows this one, or None for a tail node
        """
        self.value = value
        self.next = next
        track_node(self)

    @classmethod
    def new(cls, value: T) -> 'MutableNode[T]':
        """Create a tail node."""
        return cls(value)

    @classmethod
    def new_with_next(cls, value: T, next_node: Optional['MutableNode[T]']) -> 'MutableNode[T]':
        """Create a node in front of ``next_node``."""
        return cls(value, next_node)

    def append(self, node: 'MutableNode[T]') -> None:
        """Link ``node`` directly after this node.

        Args:
            node: The node to become this node's successor

        Raises:
            LinkError: If this node already has a successor
        """
        if self.next is not None:
            raise LinkError(
                f"cannot append after node holding {self.value!r}: "
                f"it is already followed by {self.next.value!r}"
            )
        self.next = node


def iter_nodes(head: Optional[_NodeBase[T]]) -> Iterator[_NodeBase[T]]:
    """Yield every node from ``head`` to the end of its chain."""
    node = head
    while node is not None:
        yield node
        node = node.next


def chain_values(head: Optional[_NodeBase[T]]) -> List[T]:
    """Return the values from ``head`` to the end of its chain."""
    return [node.value for node in iter_nodes(head)]


def chain_length(head: Optional[_NodeBase[T]]) -> int:
    """Return the number of nodes from ``head`` to the end of its chain."""
    size = 0
    for _ in iter_nodes(head):
        size += 1
    return size
