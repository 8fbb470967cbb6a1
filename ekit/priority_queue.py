"""A binary min-heap priority queue, bounded or unbounded."""

_EMPTY_MESSAGE = "ekit: 队列为空"
_FULL_MESSAGE = "ekit: 超出最大容量限制"


class EmptyQueueError(Exception):
    """Raised when reading from an empty queue."""


class OutOfCapacityError(Exception):
    """Raised when enqueuing into a full bounded queue."""


class PriorityQueue:
    """Min-heap ordered by ``compare(a, b)``, which returns <0, 0 or >0.

    A capacity <= 0 makes the queue unbounded; otherwise it holds at most
    ``capacity`` items.
    """

    def __init__(self, capacity, compare):
        self._capacity = capacity if capacity >= 1 else 0
        self._compare = compare
        # Slot 0 is unused so that children of i sit at 2i and 2i+1.
        self._data = [None]

    def __len__(self):
        return len(self._data) - 1

    def cap(self):
        """Return the bound, or 0 for an unbounded queue."""
        return self._capacity

    def is_boundless(self):
        return self._capacity <= 0

    def _is_full(self):
        return self._capacity > 0 and len(self) == self._capacity

    def peek(self):
        """Return the smallest item without removing it."""
        if not len(self):
            raise EmptyQueueError(_EMPTY_MESSAGE)
        return self._data[1]

    def enqueue(self, item):
        if self._is_full():
            raise OutOfCapacityError(_FULL_MESSAGE)
        data = self._data
        data.append(item)
        node = len(data) - 1
        parent = node // 2
        while parent > 0 and self._compare(data[node], data[parent]) < 0:
            data[parent], data[node] = data[node], data[parent]
            node, parent = parent, parent // 2

    def dequeue(self):
        """Remove and return the smallest item."""
        if not len(self):
            raise EmptyQueueError(_EMPTY_MESSAGE)
        data = self._data
        top = data[1]
        data[1] = data[-1]
        data.pop()
        self._sift_down(1)
        return top

    def _sift_down(self, i):
        data = self._data
        n = len(data) - 1
        while True:
            smallest = i
            left, right = 2 * i, 2 * i + 1
            if left <= n and self._compare(data[left], data[smallest]) < 0:
                smallest = left
            if right <= n and self._compare(data[right], data[smallest]) < 0:
                smallest = right
            if smallest == i:
                return
            data[i], data[smallest] = data[smallest], data[i]
            i = smallest