"""
Stack - Persistent LIFO stack over shared immutable nodes

push() puts a fresh node in front of the current head and pop() moves the
head one node along. Neither touches an existing node, so any other stack
that already holds one of those nodes keeps seeing its own, unchanged chain.
"""

from typing import Generic, Iterable, List, Optional, TypeVar

from solanum._node import ImmutableNode, chain_length, chain_values


T = TypeVar('T')


__all__ = ['Stack']


class Stack(Generic[T]):
    """Persistent LIFO stack with structural sharing.

    Example:
        >>> from solanum import Stack
        >>> stack = Stack.empty()
        >>> stack.push(100)
        >>> stack.push(200)
        >>> stack.pop()
        200
        >>> stack.push(300)
        >>> stack.size()
        2
        >>> stack.peek()
        300
        >>> stack.to_list()
        [300, 100]

    Sharing:
        copy() returns a second stack that starts at the same head node.
        Pushing or popping on either one only reassigns that stack's own
        head, so the two never observe each other's changes.

    Thread Safety:
        None. A stack is meant to be used from one thread at a time.
    """

    __slots__ = ('_head',)

    def __init__(self) -> None:
        """Initialize an empty stack."""
        self._head: Optional[ImmutableNode[T]] = None

    @classmethod
    def empty(cls) -> 'Stack[T]':
        """Create an empty stack."""
        return cls()

    @classmethod
    def new(cls, value: T) -> 'Stack[T]':
        """Create a stack holding a single value."""
        stack = cls()
        stack._head = ImmutableNode.new(value)
        return stack

    @classmethod
    def from_values(cls, values: Iterable[T]) -> 'Stack[T]':
        """Create a stack by pushing each value in order.

        The last value becomes the top of the stack.
        """
        stack = cls()
        for value in values:
            stack.push(value)
        return stack

    @classmethod
    def _from_head(cls, head: Optional[ImmutableNode[T]]) -> 'Stack[T]':
        stack = cls()
        stack._head = head
        return stack

    def is_empty(self) -> bool:
        """Check if the stack is empty."""
        return self._head is None

    def size(self) -> int:
        """Count the values on the stack.

        Complexity: O(n)
        """
        return chain_length(self._head)

    def peek(self) -> Optional[T]:
        """Return the top value without removing it.

        Returns:
            The top value, or None if the stack is empty.
        """
        if self._head is None:
            return None
        return self._head.value

    def push(self, value: T) -> None:
        """Put a value on top of the stack.

        The previous head is not copied; it becomes the successor of the
        new head node.

        Complexity: O(1)
        """
        if self._head is None:
            self._head = ImmutableNode.new(value)
        else:
            self._head = ImmutableNode.new_with_next(value, self._head)

    def pop(self) -> Optional[T]:
        """Remove and return the top value.

        The old head node is released by this stack. It survives only if
        some other holder (another stack or node) still refers to it.

        Returns:
            The top value, or None if the stack is already empty.

        Complexity: O(1)
        """
        head = self._head
        if head is None:
            return None
        self._head = head.next
        return head.value

    def to_list(self) -> List[T]:
        """Return all values from the top of the stack to the bottom."""
        return chain_values(self._head)

    def copy(self) -> 'Stack[T]':
        """Return a stack that shares this stack's nodes.

        Complexity: O(1)
        """
        return self._from_head(self._head)

    __copy__ = copy

    def __repr__(self) -> str:
        """String representation."""
        return f"Stack({self.to_list()!r})"
