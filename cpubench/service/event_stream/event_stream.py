"""
Broadcast channel for benchmark completion events.

One producer (the orchestrator worker thread), any number of subscribers.
Each subscriber owns a bounded queue; publishing never blocks, and a full
queue drops the event for that subscriber only.
"""
import queue
import threading
from typing import Iterator, List, Optional

from cpubench.models.benchmark_event import BenchmarkEvent
from cpubench.util.log_config import setup_logger

DEFAULT_QUEUE_SIZE = 64
ITER_POLL_INTERVAL = 0.1  # seconds

logger = setup_logger(__name__)

_CLOSED = object()


class Subscription:

    def __init__(self, stream: 'EventStream', maxsize: int):
        self._stream = stream
        self._queue: queue.Queue = queue.Queue(maxsize=maxsize)
        self._closed = False
        self.dropped = 0

    @property
    def closed(self) -> bool:
        return self._closed

    def _offer(self, event) -> None:
        try:
            self._queue.put_nowait(event)
        except queue.Full:
            self.dropped += 1
            logger.debug(f"Subscriber queue full, dropped event ({self.dropped} so far)")

    def get(self, timeout: Optional[float] = None) -> Optional[BenchmarkEvent]:
        """
        Next event, or None on timeout or once the subscription is closed.

        Without a timeout this polls, so a close() that could not queue its
        marker (queue full) still ends the wait once the queue is drained.
        """
        if timeout is not None:
            try:
                item = self._queue.get(timeout=timeout)
            except queue.Empty:
                return None
            return None if item is _CLOSED else item

        while True:
            try:
                item = self._queue.get(timeout=ITER_POLL_INTERVAL)
            except queue.Empty:
                if self._closed:
                    return None
                continue
            return None if item is _CLOSED else item

    def drain(self) -> List[BenchmarkEvent]:
        """Everything currently queued, without waiting."""
        events = []
        while True:
            try:
                item = self._queue.get_nowait()
            except queue.Empty:
                return events
            if item is not _CLOSED:
                events.append(item)

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._stream._remove(self)
        if not self._queue.full():
            self._queue.put_nowait(_CLOSED)

    def __iter__(self) -> Iterator[BenchmarkEvent]:
        while True:
            item = self.get()
            if item is None:
                return
            yield item

    def __enter__(self) -> 'Subscription':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()


class EventStream:

    def __init__(self, default_maxsize: int = DEFAULT_QUEUE_SIZE):
        self.default_maxsize = default_maxsize
        self._subscribers: List[Subscription] = []
        self._lock = threading.Lock()

    def subscribe(self, maxsize: Optional[int] = None) -> Subscription:
        """
        Start receiving events published from now on.

        Args:
            maxsize: Queue bound for this subscriber; defaults to the stream's
        """
        size = self.default_maxsize if maxsize is None else maxsize
        if size <= 0:
            raise ValueError(f"Subscription maxsize must be positive, got {size}")
        subscription = Subscription(self, size)
        with self._lock:
            self._subscribers.append(subscription)
        return subscription

    def publish(self, event: BenchmarkEvent) -> None:
        with self._lock:
            subscribers = list(self._subscribers)
        for subscription in subscribers:
            subscription._offer(event)

    def close(self) -> None:
        """Close every subscription; iterators over them stop."""
        with self._lock:
            subscribers = list(self._subscribers)
        for subscription in subscribers:
            subscription.close()

    @property
    def subscriber_count(self) -> int:
        with self._lock:
            return len(self._subscribers)

    def _remove(self, subscription: Subscription) -> None:
        with self._lock:
            if subscription in self._subscribers:
                self._subscribers.remove(subscription)
