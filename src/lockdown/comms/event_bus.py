"""EventBus — in-process pub/sub for simulation notifications.

The engine publishes discrete events here (escapes, captures, deliveries,
power loss) and a telemetry batch once per tick.  Scoring, audio and the
renderer subscribe; none of them can reach back into simulation state
through the bus.
"""

from __future__ import annotations

import queue
import threading


class EventBus:
    """Thread-safe pub/sub pushing events into bounded subscriber queues."""

    def __init__(self, maxsize: int = 100) -> None:
        self._lock = threading.Lock()
        self._maxsize = maxsize
        self._subscribers: list[tuple[queue.Queue, str | None]] = []

    def subscribe(self, _filter: str | None = None) -> queue.Queue:
        """Subscribe to events. Returns a Queue that receives matching events.

        With ``_filter`` set, only events of that type are delivered.
        """
        q: queue.Queue = queue.Queue(maxsize=self._maxsize)
        with self._lock:
            self._subscribers.append((q, _filter))
        return q

    def unsubscribe(self, q: queue.Queue) -> None:
        with self._lock:
            self._subscribers = [(s, f) for s, f in self._subscribers if s is not q]

    @property
    def subscriber_count(self) -> int:
        with self._lock:
            return len(self._subscribers)

    def publish(self, event_type: str, data: dict | list | None = None) -> None:
        msg: dict = {"type": event_type}
        if data is not None:
            msg["data"] = data
        with self._lock:
            for q, _filter in self._subscribers:
                if _filter is not None and _filter != event_type:
                    continue
                try:
                    q.put_nowait(msg)
                except queue.Full:
                    # Full: drop the oldest message and retry once.
                    try:
                        q.get_nowait()
                    except queue.Empty:
                        pass
                    try:
                        q.put_nowait(msg)
                    except queue.Full:
                        pass
