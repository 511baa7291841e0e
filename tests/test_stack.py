import pytest

from sofiacore.stack import Stack, StackUnderflowError


def test_new_stack_is_empty():
    assert len(Stack()) == 0


def test_pop_returns_values_in_reverse_order():
    stack = Stack()
    for value in (3, 1, 4, 1, 5):
        stack.push(value)
    assert [stack.pop() for _ in range(5)] == [5, 1, 4, 1, 3]


def test_length_tracks_push_and_pop():
    stack = Stack()
    stack.push(10)
    stack.push(20)
    assert len(stack) == 2
    stack.pop()
    assert len(stack) == 1


def test_pop_on_empty_raises():
    with pytest.raises(StackUnderflowError):
        Stack().pop()


def test_underflow_after_draining():
    stack = Stack()
    stack.push(7)
    assert stack.pop() == 7
    with pytest.raises(IndexError):
        stack.pop()


def test_push_after_empty_works_again():
    stack = Stack()
    stack.push(1)
    stack.pop()
    stack.push(99)
    assert len(stack) == 1
    assert stack.pop() == 99