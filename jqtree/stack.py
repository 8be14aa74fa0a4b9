"""Stacks whose popped entries stay reachable until a saved point is restored."""

from __future__ import annotations

from typing import Any, NamedTuple


class _Block(NamedTuple):
    value: Any
    next: int


class Stack:
    """Value stack of the interpreter.

    Entries below the saved limit are never overwritten, so popping and
    pushing after :meth:`save` leaves the saved state intact for
    :meth:`restore`.
    """

    __slots__ = ("_data", "_index", "_limit")

    def __init__(self) -> None:
        self._data: list[_Block] = []
        self._index = -1
        self._limit = -1

    def push(self, v: Any) -> None:
        """Push a value."""
        block = _Block(v, self._index)
        self._index = max(self._index, self._limit) + 1
        if self._index < len(self._data):
            self._data[self._index] = block
        else:
            self._data.append(block)

    def pop(self) -> Any:
        """Remove and return the top value."""
        if self._index < 0:
            raise IndexError("Stack is empty")
        block = self._data[self._index]
        self._index = block.next
        return block.value

    def top(self) -> Any:
        """Return the top value without removing it."""
        if self._index < 0:
            raise IndexError("Stack is empty")
        return self._data[self._index].value

    def empty(self) -> bool:
        """Whether the stack has no values."""
        return self._index < 0

    def save(self) -> tuple[int, int]:
        """Protect the current entries and return a position for :meth:`restore`."""
        saved = (self._index, self._limit)
        if self._index > self._limit:
            self._limit = self._index
        return saved

    def restore(self, index: int, limit: int) -> None:
        """Return to a position obtained from :meth:`save`."""
        self._index, self._limit = index, limit


class ScopeStack:
    """Stack of scopes of the interpreter, with the same save and restore rules."""

    __slots__ = ("_data", "_index", "_limit")

    def __init__(self) -> None:
        self._data: list[_Block] = []
        self._index = -1
        self._limit = -1

    def push(self, v: Any) -> None:
        """Push a scope."""
        block = _Block(v, self._index)
        self._index = max(self._index, self._limit) + 1
        if self._index < len(self._data):
            self._data[self._index] = block
        else:
            self._data.append(block)

    def pop(self) -> Any:
        """Remove and return the top scope."""
        if self._index < 0:
            raise IndexError("ScopeStack is empty")
        block = self._data[self._index]
        self._index = block.next
        return block.value

    def empty(self) -> bool:
        """Whether the stack has no scopes."""
        return self._index < 0

    def save(self) -> tuple[int, int]:
        """Protect the current entries and return a position for :meth:`restore`."""
        saved = (self._index, self._limit)
        if self._index > self._limit:
            self._limit = self._index
        return saved

    def restore(self, index: int, limit: int) -> None:
        """Return to a position obtained from :meth:`save`."""
        self._index, self._limit = index, limit