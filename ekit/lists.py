"""Index-addressable lists: array-backed, doubly linked, and a thread-safe wrapper."""

import abc
import threading

from ekit.errors import IndexOutOfRangeError
from ekit.slices import delete as _delete_at
from ekit.slices import shrink_capacity


class List(abc.ABC):
    """An ordered collection addressed by integer index.

    Out-of-range indexes raise IndexOutOfRangeError. ``add`` accepts an index
    equal to the length, which appends.
    """

    @abc.abstractmethod
    def get(self, index):
        """Return the item at ``index``."""

    @abc.abstractmethod
    def append(self, *args):
        """Append every argument, in order."""

    @abc.abstractmethod
    def add(self, index, value):
        """Insert ``value`` before position ``index``."""

    @abc.abstractmethod
    def set(self, index, value):
        """Replace the item at ``index``."""

    @abc.abstractmethod
    def delete(self, index):
        """Remove and return the item at ``index``."""

    @abc.abstractmethod
    def __len__(self):
        """Return the number of items."""

    @abc.abstractmethod
    def cap(self):
        """Return the current capacity."""

    @abc.abstractmethod
    def as_list(self):
        """Return a new Python list holding the items."""

    def for_each(self, fn):
        """Call ``fn(index, value)`` for every item; an exception from ``fn`` stops the walk."""
        for index, value in enumerate(self):
            fn(index, value)

    def __iter__(self):
        return iter(self.as_list())

    def __repr__(self):
        return f"{type(self).__name__}({self.as_list()!r})"


def _check_index(length, index, upper):
    if not 0 <= index < upper:
        raise IndexOutOfRangeError(length, index)


class ArrayList(List):
    """A list backed by a Python list, with an explicit capacity that shrinks on delete.

    Shrink policy after a delete: capacities above 2048 that are at most half
    full shrink to 5/8; capacities in (64, 2048] at most a quarter full shrink
    to half; capacities of 64 or less never shrink.
    """

    def __init__(self, capacity=0):
        self._items = []
        self._capacity = max(capacity, 0)

    @classmethod
    def of(cls, values):
        """Build a list holding ``values``; its capacity equals its length."""
        items = list(values) if values is not None else []
        array = cls(len(items))
        array._items = items
        return array

    def _grow_to(self, needed):
        if needed > self._capacity:
            self._capacity = max(needed, self._capacity * 2)

    def get(self, index):
        _check_index(len(self._items), index, len(self._items))
        return self._items[index]

    def append(self, *args):
        self._grow_to(len(self._items) + len(args))
        self._items.extend(args)

    def add(self, index, value):
        _check_index(len(self._items), index, len(self._items) + 1)
        self._grow_to(len(self._items) + 1)
        self._items.insert(index, value)

    def set(self, index, value):
        _check_index(len(self._items), index, len(self._items))
        self._items[index] = value

    def delete(self, index):
        remaining, removed = _delete_at(self._items, index)
        self._items = remaining
        self._capacity = shrink_capacity(self._capacity, len(remaining))
        return removed

    def __len__(self):
        return len(self._items)

    def cap(self):
        return self._capacity

    def for_each(self, fn):
        for index, value in enumerate(self._items):
            fn(index, value)

    def as_list(self):
        return list(self._items)

    def __iter__(self):
        return iter(self._items)


class _Node:
    __slots__ = ("prev", "next", "value")

    def __init__(self, value=None):
        self.prev = self
        self.next = self
        self.value = value


class LinkedList(List):
    """A circular doubly linked list with a sentinel node; its capacity equals its length."""

    def __init__(self, values=None):
        self._sentinel = _Node()
        self._length = 0
        if values is not None:
            self.append(*values)

    def _find_node(self, index):
        if index <= self._length // 2:
            node = self._sentinel.next
            for _ in range(index):
                node = node.next
        else:
            node = self._sentinel
            for _ in range(self._length - index):
                node = node.prev
        return node

    def _node_at(self, index):
        _check_index(self._length, index, self._length)
        return self._find_node(index)

    def _insert_before(self, successor, value):
        node = _Node(value)
        node.prev, node.next = successor.prev, successor
        successor.prev.next = node
        successor.prev = node
        self._length += 1

    def get(self, index):
        return self._node_at(index).value

    def append(self, *args):
        for value in args:
            self._insert_before(self._sentinel, value)

    def add(self, index, value):
        _check_index(self._length, index, self._length + 1)
        successor = self._sentinel if index == self._length else self._find_node(index)
        self._insert_before(successor, value)

    def set(self, index, value):
        self._node_at(index).value = value

    def delete(self, index):
        node = self._node_at(index)
        node.prev.next = node.next
        node.next.prev = node.prev
        node.prev = node.next = None
        self._length -= 1
        return node.value

    def __len__(self):
        return self._length

    def cap(self):
        return self._length

    def for_each(self, fn):
        for index, value in enumerate(self):
            fn(index, value)

    def __iter__(self):
        node = self._sentinel.next
        while node is not self._sentinel:
            yield node.value
            node = node.next

    def as_list(self):
        return list(self)


class ConcurrentList(List):
    """Wraps another List so that every operation runs under a lock."""

    def __init__(self, inner):
        self._inner = inner
        self._lock = threading.RLock()

    def get(self, index):
        with self._lock:
            return self._inner.get(index)

    def append(self, *args):
        with self._lock:
            self._inner.append(*args)

    def add(self, index, value):
        with self._lock:
            self._inner.add(index, value)

    def set(self, index, value):
        with self._lock:
            self._inner.set(index, value)

    def delete(self, index):
        with self._lock:
            return self._inner.delete(index)

    def __len__(self):
        with self._lock:
            return len(self._inner)

    def cap(self):
        with self._lock:
            return self._inner.cap()

    def for_each(self, fn):
        with self._lock:
            self._inner.for_each(fn)

    def as_list(self):
        with self._lock:
            return self._inner.as_list()

    def __iter__(self):
        return iter(self.as_list())