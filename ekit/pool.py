"""A task pool that grows and shrinks its worker threads on demand.

A task is any callable taking one argument: a ``threading.Event`` that is
set when the pool is shut down with ``shutdown_now``. Long tasks may watch
it to stop early.
"""

import enum
import logging
import threading
import time
import traceback
from collections import deque

from ekit.option import apply

_log = logging.getLogger(__name__)

DEFAULT_MAX_IDLE_TIME = 10.0


class PoolState(enum.Enum):
    """Life-cycle states of a task pool."""

    CREATED = 1
    RUNNING = 2
    CLOSING = 3
    STOPPED = 4


class TaskPoolError(Exception):
    """Base class of every error raised by the task pool."""

    default_message = "ekit: TaskPool错误"

    def __init__(self, message=None):
        super().__init__(message or self.default_message)


class InvalidArgumentError(TaskPoolError, ValueError):
    """Raised when the pool is configured with invalid values."""

    default_message = "ekit: 参数非法"

    def __init__(self, detail=None):
        message = self.default_message if detail is None else f"{self.default_message}：{detail}"
        super().__init__(message)


class TaskPoolNotRunningError(TaskPoolError):
    default_message = "ekit: TaskPool未运行"


class TaskPoolClosingError(TaskPoolError):
    default_message = "ekit：TaskPool关闭中"


class TaskPoolStoppedError(TaskPoolError):
    default_message = "ekit: TaskPool已停止"


class TaskPoolStartedError(TaskPoolError):
    default_message = "ekit：TaskPool已运行"


class InvalidTaskError(TaskPoolError, TypeError):
    default_message = "ekit: Task非法"


class TaskPanicError(TaskPoolError):
    """Describes an exception that escaped from a task."""

    default_message = "ekit: Task运行时异常"


class SubmitTimeoutError(TaskPoolError, TimeoutError):
    """Raised when a task could not be queued before the timeout expired."""

    default_message = "ekit: 提交任务超时"


def with_queue_backlog_rate(rate):
    """Option: spawn extra workers only once the queue is at least ``rate`` full."""

    def option(pool):
        pool._backlog_rate = rate

    return option


def with_core_workers(n):
    """Option: number of workers kept alive while there is steady work."""

    def option(pool):
        pool._core_workers = n

    return option


def with_max_workers(n):
    """Option: upper bound on the number of workers."""

    def option(pool):
        pool._max_workers = n

    return option


def with_max_idle_time(seconds):
    """Option: how long a surplus worker waits for work before exiting."""

    def option(pool):
        pool._max_idle_time = seconds

    return option


class OnDemandBlockTaskPool:
    """A bounded task queue served by between ``init`` and ``max`` worker threads.

    Submitting blocks while the queue is full. Workers above the initial count
    are created when the queue backs up and retire when they run out of work.
    """

    def __init__(self, init_workers, queue_size, *args):
        if init_workers < 1:
            raise InvalidArgumentError("initGo应该大于0")
        if queue_size < 0:
            raise InvalidArgumentError("queueSize应该大于等于0")

        self._init_workers = init_workers
        self._core_workers = init_workers
        self._max_workers = init_workers
        self._max_idle_time = DEFAULT_MAX_IDLE_TIME
        self._backlog_rate = 0.0

        apply(self, *args)

        if self._core_workers != self._init_workers and self._max_workers == self._init_workers:
            self._max_workers = self._core_workers
        elif self._core_workers == self._init_workers and self._max_workers != self._init_workers:
            self._core_workers = self._max_workers
        if not self._init_workers <= self._core_workers <= self._max_workers:
            raise InvalidArgumentError("需要满足initGo <= coreGo <= maxGo条件")
        if not 0.0 <= self._backlog_rate <= 1.0:
            raise InvalidArgumentError("queueBacklogRate合法范围为[0,1.0]")

        self._queue_size = queue_size
        self._queue = deque()
        self._cond = threading.Condition()
        self._state = PoolState.CREATED
        self._closed = False
        self._waiting = 0
        self._running = 0
        self._total = 0
        self._idle = set()
        self._next_id = 0
        self._stop = threading.Event()
        self._done = threading.Event()

    # -- public API -------------------------------------------------------

    def submit(self, task, timeout=None):
        """Queue ``task``, blocking while the queue is full.

        ``timeout`` is in seconds; None waits indefinitely. Tasks may be
        submitted before ``start``; they run once the pool starts.
        """
        if task is None or not callable(task):
            raise InvalidTaskError()
        deadline = None if timeout is None else time.monotonic() + timeout
        with self._cond:
            while True:
                if self._state is PoolState.CLOSING:
                    raise TaskPoolClosingError()
                if self._state is PoolState.STOPPED:
                    raise TaskPoolStoppedError()
                if len(self._queue) < self._queue_size + self._waiting:
                    self._queue.append(task)
                    self._cond.notify_all()
                    if self._state is PoolState.RUNNING and self._may_spawn():
                        self._spawn()
                    return
                if deadline is None:
                    self._cond.wait()
                    continue
                remaining = deadline - time.monotonic()
                if remaining <= 0:
                    raise SubmitTimeoutError()
                self._cond.wait(remaining)

    def start(self):
        """Start the workers; tasks already queued may raise the count above the initial one."""
        with self._cond:
            if self._state is PoolState.CLOSING:
                raise TaskPoolClosingError()
            if self._state is PoolState.STOPPED:
                raise TaskPoolStoppedError()
            if self._state is PoolState.RUNNING:
                raise TaskPoolStartedError()
            count = self._init_workers
            allowed = self._max_workers - self._init_workers
            needed = len(self._queue) - self._init_workers
            if needed > 0:
                count += min(needed, allowed)
            for _ in range(count):
                self._spawn()
            self._state = PoolState.RUNNING

    def shutdown(self):
        """Refuse new tasks, finish the queued ones, and return an Event set when done."""
        with self._cond:
            if self._state is PoolState.CREATED:
                raise TaskPoolNotRunningError()
            if self._state is PoolState.STOPPED:
                raise TaskPoolStoppedError()
            if self._state is PoolState.CLOSING:
                raise TaskPoolClosingError()
            self._state = PoolState.CLOSING
            self._closed = True
            self._cond.notify_all()
            return self._done

    def shutdown_now(self):
        """Stop at once and return the tasks that never started.

        Running tasks are not interrupted, but their stop event is set.
        """
        with self._cond:
            if self._state is PoolState.CREATED:
                raise TaskPoolNotRunningError()
            if self._state is PoolState.CLOSING:
                raise TaskPoolClosingError()
            if self._state is PoolState.STOPPED:
                raise TaskPoolStoppedError()
            self._state = PoolState.STOPPED
            self._closed = True
            self._stop.set()
            remaining = list(self._queue)
            self._queue.clear()
            self._cond.notify_all()
            return remaining

    def state(self):
        """Return the current PoolState."""
        with self._cond:
            return self._state

    def num_workers(self):
        """Return the number of live worker threads."""
        with self._cond:
            return self._total

    # -- internals (called with the lock held unless noted) ---------------

    def _backlog(self):
        return max(0, len(self._queue) - self._waiting)

    def _may_spawn(self):
        if self._total >= self._max_workers:
            return False
        if self._queue_size == 0:
            return True
        rate = self._backlog() / self._queue_size
        return not (rate == 0 or rate < self._backlog_rate)

    def _spawn(self):
        self._total += 1
        self._next_id += 1
        worker_id = self._next_id
        thread = threading.Thread(
            target=self._work, args=(worker_id,), name=f"ekit-pool-{worker_id}", daemon=True
        )
        thread.start()

    def _retire(self, worker_id):
        self._total -= 1
        self._idle.discard(worker_id)
        self._finish_closing_if_drained()
        self._cond.notify_all()

    def _finish_closing_if_drained(self):
        if self._state is PoolState.CLOSING and not self._queue and self._running == 0:
            self._state = PoolState.STOPPED
            self._done.set()

    def _next_task(self, worker_id, deadline):
        self._waiting += 1
        try:
            while True:
                if self._stop.is_set():
                    self._retire(worker_id)
                    return None
                if self._queue:
                    task = self._queue.popleft()
                    self._idle.discard(worker_id)
                    self._running += 1
                    self._cond.notify_all()
                    return task
                if self._closed:
                    self._retire(worker_id)
                    return None
                if deadline is None:
                    self._cond.wait()
                    continue
                remaining = deadline - time.monotonic()
                if remaining <= 0:
                    self._retire(worker_id)
                    return None
                self._cond.wait(remaining)
        finally:
            self._waiting -= 1

    def _run(self, task):
        """Run ``task`` outside the lock; exceptions are contained."""
        try:
            task(self._stop)
        except Exception as exc:
            error = TaskPanicError(f"{TaskPanicError.default_message}：{exc!r}")
            _log.debug("%s\n%s", error, traceback.format_exc())

    def _work(self, worker_id):
        deadline = None
        while True:
            with self._cond:
                task = self._next_task(worker_id, deadline)
                if task is None:
                    return
            self._run(task)
            with self._cond:
                self._running -= 1
                backlog = self._backlog()
                if self._core_workers < self._total and (backlog == 0 or backlog < self._total):
                    self._retire(worker_id)
                    return
                if self._init_workers < self._total - len(self._idle):
                    deadline = time.monotonic() + self._max_idle_time
                    self._idle.add(worker_id)
                else:
                    deadline = None
                self._finish_closing_if_drained()