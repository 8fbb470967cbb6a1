"""Errors shared by the containers of this package."""


class IndexOutOfRangeError(IndexError):
    """Raised when an index falls outside ``[0, length)`` (or ``[0, length]`` for inserts)."""

    def __init__(self, length, index):
        self.length = length
        self.index = index
        super().__init__(f"ekit: 下标超出范围，长度 {length}, 下标 {index}")