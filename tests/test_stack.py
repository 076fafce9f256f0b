"""Tests for the persistent Stack."""

import copy
import sys
import weakref

import pytest

from solanum import Stack
from solanum._node import ImmutableNode, iter_nodes


class TestStackCreate:
    """Construction."""

    def test_create_stack_with_empty(self):
        """empty() has no head."""
        stack = Stack.empty()
        assert stack.is_empty()
        assert stack.size() == 0
        assert stack._head is None

    def test_default_constructor_is_empty(self):
        """Stack() is the same as Stack.empty()."""
        assert Stack().is_empty()

    def test_create_stack_with_new(self):
        """new() holds one tail node."""
        stack = Stack.new(1)
        assert not stack.is_empty()
        assert stack.size() == 1
        assert stack._head.value == 1
        assert stack._head.next is None

    def test_from_values(self):
        """from_values() pushes in order, last value on top."""
        stack = Stack.from_values([1, 2, 3])
        assert stack.to_list() == [3, 2, 1]
        assert stack.peek() == 3


class TestStackPeek:
    """peek() never changes the stack."""

    def test_peek_empty_stack(self):
        """peek on empty returns None."""
        assert Stack.empty().peek() is None

    def test_peek_filled_stack_multiple_times(self):
        """Repeated peeks return the same value and leave the stack alone."""
        stack = Stack.from_values([1, 2])
        for _ in range(3):
            assert stack.peek() == 2
        assert stack.size() == 2
        assert stack.to_list() == [2, 1]

    @pytest.mark.skipif(not hasattr(sys, 'getrefcount'), reason="needs sys.getrefcount")
    def test_reference_on_peek_is_unchanged(self):
        """peek does not add or drop holders of the head node."""
        node = ImmutableNode.new(100)
        before = sys.getrefcount(node)

        stack = Stack._from_head(node)
        held = sys.getrefcount(node)
        assert stack.peek() == 100
        after_peek = sys.getrefcount(node)

        del stack
        after_drop = sys.getrefcount(node)

        assert held == before + 1
        assert after_peek == held
        assert after_drop == before


class TestStackSize:
    """size() walks the chain."""

    def test_size_of_filled_stack(self):
        """size equals the chain length."""
        head = ImmutableNode(100, ImmutableNode(200, ImmutableNode(300)))
        assert Stack._from_head(head).size() == 3

    def test_list_filled_stack(self):
        """to_list walks head to tail."""
        head = ImmutableNode(1, ImmutableNode(2, ImmutableNode(3)))
        assert Stack._from_head(head).to_list() == [1, 2, 3]

    def test_list_empty_stack(self):
        """to_list of an empty stack is an empty list."""
        assert Stack.empty().to_list() == []


class TestStackPush:
    """push() conses onto the head."""

    def test_push_once_to_empty_stack(self):
        """Pushing onto empty gives one element."""
        stack = Stack.empty()
        stack.push(1)
        assert stack.size() == 1
        assert stack.to_list() == [1]

    def test_push_once_to_filled_stack(self):
        """Pushing onto a filled stack reuses the old head as successor."""
        stack = Stack.new(1)
        old_head = stack._head
        stack.push(2)
        assert stack.to_list() == [2, 1]
        assert stack._head.next is old_head

    def test_push_many_times(self):
        """Each push grows the stack by one, newest first."""
        stack = Stack.empty()
        expected = []
        for value in (1, 2, 3):
            stack.push(value)
            expected.insert(0, value)
            assert stack.size() == len(expected)
            assert stack.to_list() == expected

    @pytest.mark.parametrize("values", [[], [7], list(range(50)), ["a", None, "c"]])
    def test_reverse_order_law(self, values):
        """to_list is the reverse of push order and size is the count."""
        stack = Stack.empty()
        for value in values:
            stack.push(value)
        assert stack.to_list() == list(reversed(values))
        assert stack.size() == len(values)


class TestStackPop:
    """pop() moves the head along."""

    def test_pop_on_empty_stack(self):
        """pop on empty returns None, any number of times."""
        stack = Stack.empty()
        for _ in range(3):
            assert stack.pop() is None
            assert stack.size() == 0

    def test_pop_on_stack_with_one_element(self):
        """Popping the only value empties the stack."""
        stack = Stack.new(1)
        assert stack.pop() == 1
        assert stack.is_empty()

    def test_pop_on_stack_with_several_elements(self):
        """Values come back newest first, then None."""
        stack = Stack.from_values([100, 200, 300])
        assert stack.pop() == 300
        assert stack.size() == 2
        assert stack.pop() == 200
        assert stack.size() == 1
        assert stack.pop() == 100
        assert stack.size() == 0
        assert stack.pop() is None
        assert stack.pop() is None

    def test_push_pop_round_trip(self):
        """pop right after push returns the value and restores the stack."""
        stack = Stack.from_values([1, 2, 3])
        before = stack.to_list()
        stack.push(42)
        assert stack.pop() == 42
        assert stack.to_list() == before
        assert stack.size() == len(before)

    def test_scenario(self):
        """push 100, push 200, pop, push 300."""
        stack = Stack.empty()
        stack.push(100)
        stack.push(200)
        stack.pop()
        stack.push(300)
        assert stack.size() == 2
        assert stack.peek() == 300
        assert stack.to_list() == [300, 100]

    def test_reference_on_pop(self):
        """A popped node survives while the caller still holds it."""
        node = ImmutableNode.new(100)
        ref = weakref.ref(node)
        stack = Stack._from_head(node)

        assert stack.pop() == 100
        assert stack.is_empty()
        assert ref() is node

        del node
        assert ref() is None

    def test_popped_node_released(self):
        """A popped node nobody else holds is freed immediately."""
        stack = Stack.from_values([1, 2])
        ref = weakref.ref(stack._head)
        stack.pop()
        assert ref() is None
        assert stack.to_list() == [1]


class TestStackSharing:
    """Structural sharing between stacks."""

    def test_copy_shares_head(self):
        """copy() shares the head node instead of duplicating it."""
        a = Stack.from_values([1, 2, 3])
        b = a.copy()
        assert b._head is a._head
        assert copy.copy(a)._head is a._head

    def test_pop_from_a_leaves_b(self):
        """Popping one stack does not affect the other."""
        a = Stack.from_values([1, 2, 3])
        b = a.copy()
        assert a.pop() == 3
        assert a.pop() == 2
        assert b.to_list() == [3, 2, 1]
        assert a.to_list() == [1]

    def test_pop_from_b_leaves_a(self):
        """Sharing is symmetric."""
        a = Stack.from_values([1, 2, 3])
        b = a.copy()
        b.pop()
        assert a.to_list() == [3, 2, 1]
        assert b.to_list() == [2, 1]

    def test_push_diverges(self):
        """Pushes on each side build separate heads over a common tail."""
        a = Stack.from_values([1, 2])
        b = a.copy()
        a.push("a")
        b.push("b")
        assert a.to_list() == ["a", 2, 1]
        assert b.to_list() == ["b", 2, 1]
        assert a._head.next is b._head.next

    def test_shared_node_survives_other_owner(self):
        """A node held by a second stack outlives the first stack."""
        a = Stack.from_values([1, 2])
        b = a.copy()
        ref = weakref.ref(a._head)
        del a
        assert ref() is not None
        assert b.peek() == 2

        b.pop()
        assert ref() is None

    def test_dropping_stack_frees_chain(self):
        """Once the only stack goes away its nodes are reclaimed."""
        stack = Stack.from_values(range(5))
        refs = [weakref.ref(n) for n in iter_nodes(stack._head)]
        del stack
        assert all(r() is None for r in refs)


class TestStackRepr:
    """String representation."""

    def test_repr(self):
        """repr lists values top first."""
        assert repr(Stack.from_values([1, 2])) == "Stack([2, 1])"
        assert repr(Stack.empty()) == "Stack([])"
