class HTTPError(Exception):
    """Base class for everything raised while serving a request."""


class ParseError(HTTPError):
    pass


class MethodNotValid(ParseError):
    def __init__(self, token: str) -> None:
        super().__init__(f"method not valid: {token!r}")
        self.token = token


class VersionNotValid(ParseError):
    def __init__(self, token: str) -> None:
        super().__init__(f"version not valid: {token!r}")
        self.token = token


class MalformedRequestLine(ParseError):
    def __init__(self, line: str) -> None:
        super().__init__(f"malformed request line: {line!r}")
        self.line = line


class MalformedHeaderLine(ParseError):
    def __init__(self, line: str) -> None:
        super().__init__(f"malformed header line: {line!r}")
        self.line = line


class PeerDisconnected(HTTPError, ConnectionError):
    """The peer closed the stream before the request head was complete."""
