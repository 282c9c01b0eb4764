import logging
import socket
import threading
from typing import Optional, Tuple

from .config import Config
from .engine import Handler, HTTPEngine
from .pool import ConnectionPool

logger = logging.getLogger(__name__)


class Server:
    def __init__(self, config: Config, handler: Handler) -> None:
        self.config = config
        self.handler = handler

        # Created on listen()
        self._listen_sock: Optional[socket.socket] = None
        self.pool: Optional[ConnectionPool] = None

        self._stop_event = threading.Event()
        self.ready = threading.Event()

    @property
    def address(self) -> Optional[Tuple]:
        if self._listen_sock is None:
            return None
        return self._listen_sock.getsockname()[:2]

    def listen(self) -> None:
        self._stop_event.clear()

        self._listen_sock = self._create_listen_socket()
        self.pool = ConnectionPool(HTTPEngine(self.config, self.handler),
                                   self.config.max_connections)

        host, port = self.address
        logger.info("Listening on %s:%s", host, port)
        self.ready.set()

        try:
            self._accept_loop()
        finally:
            self._cleanup()

    def stop(self) -> None:
        self._stop_event.set()

        # unblock accept() immediately
        if self._listen_sock is not None:
            try:
                self._listen_sock.close()
            except OSError:
                pass

    def _cleanup(self) -> None:
        if self._listen_sock is not None:
            try:
                self._listen_sock.close()
            except OSError:
                pass
        self._listen_sock = None
        self.ready.clear()
        logger.info("Stopped listening")

    def _create_listen_socket(self) -> socket.socket:
        sock = socket.socket(self.config.family, socket.SOCK_STREAM)
        try:
            sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            sock.bind((self.config.address, self.config.port))
            sock.listen(self.config.backlog)
            sock.settimeout(self.config.accept_timeout)
        except OSError:
            sock.close()
            raise
        return sock

    def _accept_loop(self) -> None:
        """
        Accept connections and hand each one to its own task.
        accept() errors end the loop and reach the caller, except after stop().
        """
        assert self._listen_sock is not None
        assert self.pool is not None

        while not self._stop_event.is_set():
            try:
                conn, addr = self._listen_sock.accept()
            except socket.timeout:
                continue
            except OSError:
                if self._stop_event.is_set():
                    break
                raise

            logger.debug("Accepted connection from %s:%s", addr[0], addr[1])

            try:
                conn.settimeout(self.config.recv_timeout)
            except OSError:
                conn.close()
                continue

            # The task owns conn from here and closes it on every path.
            try:
                self.pool.spawn(conn, addr, self._stop_event, self.config.accept_timeout)
            except Exception:
                logger.exception("Could not start a task for %s:%s", addr[0], addr[1])
                try:
                    conn.close()
                except OSError:
                    pass
