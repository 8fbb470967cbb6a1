"""Generic lists, a priority queue, an on-demand task pool and an option helper."""

__version__ = "0.1.0"

__all__ = ["errors", "lists", "option", "pool", "priority_queue", "slices"]