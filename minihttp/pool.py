# minihttp/pool.py
from __future__ import annotations

import itertools
import logging
import socket
import threading
import time
from typing import Optional, Tuple

from .engine import Engine

logger = logging.getLogger(__name__)


class ConnectionPool:
    """One thread per accepted connection, plus a registry of the live ones.

    Without ``max_connections`` there is no cap on concurrent connections.
    With it, ``spawn`` blocks the caller (the accept loop) until a slot frees up.
    """

    def __init__(self, engine: Engine, max_connections: Optional[int] = None) -> None:
        self.engine = engine

        self._slots: Optional[threading.BoundedSemaphore] = None
        if max_connections is not None:
            self._slots = threading.BoundedSemaphore(max_connections)

        self._tasks: set[threading.Thread] = set()
        self._lock = threading.Lock()
        self._ids = itertools.count()

    def spawn(self, conn: socket.socket, addr: Tuple,
              stop_event: Optional[threading.Event] = None,
              poll_timeout: float = 1.0) -> Optional[threading.Thread]:
        """Start a task for conn. Returns None if stop_event fired while waiting for a slot."""
        if not self._admit(stop_event, poll_timeout):
            try:
                conn.close()
            except OSError:
                pass
            return None

        t = threading.Thread(
            target=self._run,
            args=(conn, addr),
            name=f"conn-{next(self._ids)}",
            daemon=True,
        )
        with self._lock:
            self._tasks.add(t)
        try:
            t.start()
        except RuntimeError:
            self._release(t)
            try:
                conn.close()
            except OSError:
                pass
            raise
        return t

    def _admit(self, stop_event: Optional[threading.Event], poll_timeout: float) -> bool:
        if self._slots is None:
            return True
        if stop_event is None:
            return self._slots.acquire()
        while not stop_event.is_set():
            if self._slots.acquire(timeout=poll_timeout):
                return True
        return False

    def active(self) -> list[threading.Thread]:
        with self._lock:
            return list(self._tasks)

    def join(self, timeout: Optional[float] = None) -> bool:
        """Wait for in-flight connections; True when none are left."""
        deadline = None if timeout is None else time.monotonic() + timeout
        for t in self.active():
            remaining = None if deadline is None else max(0.0, deadline - time.monotonic())
            t.join(remaining)
        return not self.active()

    def _run(self, conn: socket.socket, addr: Tuple) -> None:
        try:
            self.engine.handle_connection(conn, addr)
        except Exception:
            # handle_connection already isolates parse and handler errors
            logger.exception("Unhandled exception in %s", threading.current_thread().name)
        finally:
            self._release(threading.current_thread())

    def _release(self, t: threading.Thread) -> None:
        with self._lock:
            self._tasks.discard(t)
        if self._slots is not None:
            self._slots.release()
