"""
Queue - FIFO queue over singly-linked mutable nodes

The queue keeps two references into one chain: the head, where values
leave, and the tail, where values arrive. Enqueueing links a fresh node
behind the current tail; that link is the only mutation any node ever sees.
"""

import logging
from typing import Generic, Iterable, List, Optional, TypeVar

from solanum._config import config
from solanum._node import ChainError, MutableNode, chain_length, chain_values


logger = logging.getLogger(__name__)

T = TypeVar('T')


__all__ = ['Queue']


class Queue(Generic[T]):
    """FIFO queue with O(1) enqueue and dequeue.

    Example:
        >>> from solanum import Queue
        >>> q = Queue.empty()
        >>> q.enqueue(1)
        >>> q.enqueue(2)
        >>> q.dequeue()
        1
        >>> q.dequeue()
        2
        >>> q.dequeue() is None
        True

    The queue is the single writer of its tail node, so it offers no way
    to share its chain with another queue.

    Thread Safety:
        None. Guard with an external lock if several threads need it.
    """

    __slots__ = ('_head', '_tail')

    def __init__(self) -> None:
        """Initialize an empty queue."""
        self._head: Optional[MutableNode[T]] = None
        self._tail: Optional[MutableNode[T]] = None

    @classmethod
    def empty(cls) -> 'Queue[T]':
        """Create an empty queue."""
        return cls()

    @classmethod
    def new(cls, value: T) -> 'Queue[T]':
        """Create a queue holding a single value."""
        queue = cls()
        queue.enqueue(value)
        return queue

    @classmethod
    def from_values(cls, values: Iterable[T]) -> 'Queue[T]':
        """Create a queue by enqueueing each value in order."""
        queue = cls()
        for value in values:
            queue.enqueue(value)
        return queue

    def is_empty(self) -> bool:
        """Check if the queue is empty."""
        return self._head is None

    def size(self) -> int:
        """Count the values in the queue.

        Complexity: O(n)
        """
        return chain_length(self._head)

    def peek(self) -> Optional[T]:
        """Return the front value without removing it.

        Returns:
            The oldest value, or None if the queue is empty.
        """
        if self._head is None:
            return None
        return self._head.value

    def enqueue(self, value: T) -> None:
        """Add a value at the back of the queue.

        Complexity: O(1)
        """
        node = MutableNode.new(value)
        if self._tail is None:
            self._head = node
        else:
            self._tail.append(node)
        self._tail = node

        if config.check_invariants:
            self._check_invariants()

    def dequeue(self) -> Optional[T]:
        """Remove and return the front value.

        Returns:
            The oldest value, or None if the queue is already empty.

        Raises:
            ChainError: If invariant checks are on and the chain is broken.
                The queue is left untouched.

        Complexity: O(1)
        """
        head = self._head
        if head is None:
            return None

        if config.check_invariants:
            self._check_invariants()

        if head is self._tail:
            self._head = None
            self._tail = None
        else:
            self._head = head.next
        return head.value

    def to_list(self) -> List[T]:
        """Return all values from the front of the queue to the back."""
        return chain_values(self._head)

    def _check_invariants(self) -> None:
        """Verify that head and tail describe one well-formed chain.

        Raises:
            ChainError: If the head does not reach the tail, or the tail
                has a successor.
        """
        head, tail = self._head, self._tail
        problem = None

        if (head is None) != (tail is None):
            problem = "exactly one of head and tail is set"
        elif tail is not None:
            if tail.next is not None:
                problem = "tail node has a successor"
            else:
                node = head
                while node is not None and node is not tail:
                    node = node.next
                if node is None:
                    problem = "tail is not reachable from head"

        if problem is not None:
            logger.error("Queue invariant violated: %s", problem)
            raise ChainError(f"Queue invariant violated: {problem}")

    def __repr__(self) -> str:
        """String representation."""
        return f"Queue({self.to_list()!r})"
