"""A last-in, first-out stack of pixel indices."""

from __future__ import annotations


class StackUnderflowError(IndexError):
    """Raised when popping from an empty stack."""


class Stack:
    """A simple LIFO stack of integer values."""

    __slots__ = ("_data",)

    def __init__(self) -> None:
        self._data: list[int] = []

    def push(self, value: int) -> None:
        """Push a value onto the stack."""
        self._data.append(int(value))

    def pop(self) -> int:
        """Remove and return the most recently pushed value."""
        if not self._data:
            raise StackUnderflowError("Stack underflow error.")
        return self._data.pop()

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"Stack({self._data!r})"