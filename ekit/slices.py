"""Helpers shared by the list-like containers: deletion and shrink policy."""

from ekit.errors import IndexOutOfRangeError

_SMALL_CAPACITY = 64
_LARGE_CAPACITY = 2048
_LARGE_FACTOR = 0.625


def delete(values, index):
    """Return ``(remaining, removed)`` without the item at ``index``.

    The input sequence is left untouched. Raises IndexOutOfRangeError when
    ``index`` is outside ``[0, len(values))``.
    """
    length = len(values)
    if index < 0 or index >= length:
        raise IndexOutOfRangeError(length, index)
    removed = values[index]
    remaining = [value for position, value in enumerate(values) if position != index]
    return remaining, removed


def shrink_capacity(capacity, length):
    """Return the capacity a buffer should have after shrinking.

    - capacity <= 64: never shrink;
    - capacity > 2048 and at most half full: shrink to 5/8;
    - capacity in (64, 2048] and at most a quarter full: shrink to half.

    The capacity is returned unchanged when no rule applies. An empty buffer
    above the small threshold always shrinks.
    """
    if capacity <= _SMALL_CAPACITY:
        return capacity
    if length <= 0:
        if capacity > _LARGE_CAPACITY:
            return int(capacity * _LARGE_FACTOR)
        return capacity // 2
    ratio = capacity // length
    if capacity > _LARGE_CAPACITY and ratio >= 2:
        return int(capacity * _LARGE_FACTOR)
    if capacity <= _LARGE_CAPACITY and ratio >= 4:
        return capacity // 2
    return capacity