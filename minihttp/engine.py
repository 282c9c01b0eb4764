import logging
import socket
from typing import Callable, Tuple

from .config import Config
from .context import Context
from .errors import ParseError

logger = logging.getLogger(__name__)

Handler = Callable[[Context], None]


class Engine:
    def handle_connection(self, conn: socket.socket, addr: Tuple) -> None:
        try:
            self.process(conn, addr)
        finally:
            try:
                conn.close()
            except OSError:
                pass

    def process(self, conn: socket.socket, addr: Tuple) -> None:
        raise NotImplementedError


class HTTPEngine(Engine):
    def __init__(self, config: Config, handler: Handler) -> None:
        self.config = config
        self.handler = handler

    def process(self, conn: socket.socket, addr: Tuple) -> None:
        # makefile() keeps its own reference on the socket, both must be closed
        # before conn.close() releases the descriptor.
        reader = conn.makefile("rb")
        writer = conn.makefile("wb")
        try:
            self._serve(reader, writer, addr)
        finally:
            for stream in (writer, reader):
                try:
                    stream.close()
                except OSError:
                    pass

    def _serve(self, reader, writer, addr: Tuple) -> None:
        try:
            context = Context.parse(reader, writer)
        except ParseError as e:
            logger.warning("Dropping %s: %s", _peer(addr), e)
            return
        except OSError as e:
            logger.warning("Read from %s failed: %s", _peer(addr), e)
            return

        logger.debug("Request from %s\n%s", _peer(addr), context.describe())

        try:
            self.handler(context)
            writer.flush()
        except OSError as e:
            logger.warning("Write to %s failed: %s", _peer(addr), e)
        except Exception:
            logger.exception("Handler failed for %s %s from %s",
                             context.method.as_string(), context.uri, _peer(addr))


def _peer(addr: Tuple) -> str:
    return f"{addr[0]}:{addr[1]}" if addr else "?"
