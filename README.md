# ekit

A small toolkit of general-purpose building blocks:

- `ekit.lists`: the abstract `List` with three implementations:
  `ArrayList` (backed by a Python list, with an explicit capacity that
  shrinks after deletes), `LinkedList` (circular, doubly linked, with a
  sentinel node) and `ConcurrentList` (wraps any `List` so every operation
  runs under a lock).
- `ekit.priority_queue`: `PriorityQueue`, a min-heap that is bounded or
  unbounded and ordered by a comparison function.
- `ekit.pool`: `OnDemandBlockTaskPool`, a blocking task pool whose worker
  threads grow from an initial count up to a core count and then a maximum,
  and retire when they run out of work.
- `ekit.option`: `apply`, which calls option functions on an object in order.
- `ekit.slices`: `delete` and `shrink_capacity`, the helpers behind
  `ArrayList`.
- `ekit.errors`: `IndexOutOfRangeError`.

## Install

```
pip install .
```

For the test suite:

```
pip install ".[test]"
pytest
```

## Lists

```python
from ekit.lists import ArrayList, LinkedList, ConcurrentList

items = ArrayList.of([1, 2, 3])
items.add(0, 100)          # [100, 1, 2, 3]
items.delete(1)            # returns 1
print(items.as_list())     # [100, 2, 3]

safe = ConcurrentList(LinkedList([1, 2, 3]))
safe.append(4, 5)
print(len(safe))           # 5
safe.for_each(lambda index, value: print(index, value))
```

Every list supports `get`, `append(*values)`, `add(index, value)` (an index
equal to the length appends), `set`, `delete` (returns the removed item),
`len()`, `cap()`, `for_each(fn)`, `as_list()` (always a new list) and
iteration. An index out of range raises `ekit.errors.IndexOutOfRangeError`,
which is a subclass of `IndexError`.

`ArrayList(capacity)` starts empty with the given capacity. After a delete,
a capacity above 2048 that is at most half used shrinks to 5/8, a capacity
in (64, 2048] at most a quarter used shrinks to half, and a capacity of 64
or less is kept. `LinkedList.cap()` equals its length.

## Priority queue

```python
from ekit.priority_queue import PriorityQueue

def compare(a, b):
    return (a > b) - (a < b)

queue = PriorityQueue(0, compare)   # capacity 0 or less means unbounded
for value in (6, 5, 4):
    queue.enqueue(value)
print(queue.peek())                 # 4
print(queue.dequeue())              # 4
print(len(queue))                   # 2
```

`peek` and `dequeue` on an empty queue raise `EmptyQueueError`; `enqueue`
on a full bounded queue raises `OutOfCapacityError`.

## Task pool

A task is a callable taking one argument: a `threading.Event` that is set
when the pool is stopped with `shutdown_now`.

```python
from ekit.pool import OnDemandBlockTaskPool, with_core_workers, with_max_idle_time

pool = OnDemandBlockTaskPool(2, 100, with_core_workers(4), with_max_idle_time(1.0))
pool.start()
pool.submit(lambda stop: print("hello, world"))
done = pool.shutdown()   # finishes queued tasks, then sets the event
done.wait()
print(pool.state())      # PoolState.STOPPED
```

- Options: `with_core_workers(n)`, `with_max_workers(n)`,
  `with_max_idle_time(seconds)` and `with_queue_backlog_rate(rate)` (extra
  workers start only once the queue is at least that full; 0 to 1).
  Invalid settings raise `InvalidArgumentError`.
- `submit(task, timeout=None)` blocks while the queue is full and raises
  `SubmitTimeoutError` when `timeout` seconds pass. Tasks may be submitted
  before `start`.
- `shutdown_now()` returns the tasks that never started.
- Calls made in the wrong state raise `TaskPoolNotRunningError`,
  `TaskPoolStartedError`, `TaskPoolClosingError` or `TaskPoolStoppedError`;
  a `None` or non-callable task raises `InvalidTaskError`. All derive from
  `TaskPoolError`.
- An exception raised inside a task is caught and logged at debug level;
  it does not stop the worker.
- `num_workers()` reports the number of live worker threads.

## Options

```python
from ekit.option import apply

class User:
    name = ""
    age = 0

def with_name(name):
    def option(user):
        user.name = name
    return option

user = User()
apply(user, with_name("Tom"))
```

An option that raises stops the chain and the exception propagates.

## Not included

The package has no helper for copying fields from one object to another.