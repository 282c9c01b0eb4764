import argparse
import logging

from minihttp.config import Config
from minihttp.handler import echo, hello
from minihttp.server import Server

HANDLERS = {"hello": hello, "echo": echo}


def main():
    parser = argparse.ArgumentParser(description="A minimal http server")
    parser.add_argument("--host", "-H", type=str, default="127.0.0.1", help="address to listen on")
    parser.add_argument("--port", "-p", type=int, default=8080, help="port to listen on")
    parser.add_argument("--max-connections", "-m", type=int, default=None,
                        help="cap on concurrent connections (default: unbounded)")
    parser.add_argument("--handler", choices=sorted(HANDLERS), default="hello", help="sample handler to serve")
    parser.add_argument("--debug", "-D", action="store_true", help="enable debug logging")

    args = parser.parse_args()
    config = Config(address=args.host, port=args.port, max_connections=args.max_connections, debug=args.debug)
    logging.basicConfig(
        level=logging.DEBUG if config.debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(threadName)s %(name)s: %(message)s",
    )

    server = Server(config, HANDLERS[args.handler])
    try:
        server.listen()
    except KeyboardInterrupt:
        server.stop()

if __name__ == "__main__":
    main()
