"""
Request context: parses one request head off a byte stream and writes the
response back to it.

Reads are unbounded. Neither the request line nor the header block has a size
limit, so a client can make the parser buffer arbitrary amounts of data.
Wrap the reader in a bounded one if that matters for a deployment.
"""
from dataclasses import dataclass, field
from typing import BinaryIO, Dict, Optional, Union

from .errors import MalformedHeaderLine, MalformedRequestLine, PeerDisconnected
from .models import Method, Status, Version

ENCODING = "iso-8859-1"


@dataclass
class Context:
    method: Method
    uri: str
    version: Version
    # Shared with the connection task, which alone is responsible for closing.
    reader: BinaryIO = field(repr=False)
    writer: BinaryIO = field(repr=False)
    headers: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def parse(cls, reader: BinaryIO, writer: BinaryIO) -> "Context":
        request_line = _read_line(reader)
        parts = request_line.split(" ")
        if len(parts) != 3 or not all(parts):
            raise MalformedRequestLine(request_line)

        method_token, uri, version_token = parts
        method = Method.from_string(method_token)
        version = Version.from_string(version_token)

        headers: Dict[str, str] = {}
        while True:
            raw = reader.readline()
            if raw == b"\r\n":
                break
            line = _decode_line(raw)
            key, sep, value = line.partition(":")
            if not sep:
                raise MalformedHeaderLine(line)
            if value.startswith(" "):
                value = value[1:]
            headers[key] = value

        return cls(method=method, uri=uri, version=version, headers=headers,
                   reader=reader, writer=writer)

    @property
    def body_reader(self) -> BinaryIO:
        return self.reader

    @property
    def response(self) -> BinaryIO:
        return self.writer

    def respond(self, status: Status, headers: Optional[Dict[str, str]] = None,
                body: Union[bytes, str] = b"") -> None:
        if isinstance(body, str):
            body = body.encode("utf-8")

        head = f"{self.version.as_string()} {status.as_number()} {status.as_string()}\r\n"
        if headers:
            # Header lines end in a bare LF; clients already depend on it.
            head += "".join(f"{k}: {v}\n" for k, v in headers.items())
        head += "\r\n"

        self.writer.write(head.encode(ENCODING))
        self.writer.write(body)
        self.writer.flush()

    def describe(self) -> str:
        lines = [
            f"method: {self.method.as_string()}",
            f"uri: {self.uri}",
            f"version: {self.version.as_string()}",
        ]
        lines.extend(f"{k}: {v}" for k, v in self.headers.items())
        return "\n".join(lines)


def _read_line(reader: BinaryIO) -> str:
    return _decode_line(reader.readline())


def _decode_line(raw: bytes) -> str:
    if not raw.endswith(b"\n"):
        raise PeerDisconnected("stream ended before the request head was complete")
    raw = raw[:-1]
    if raw.endswith(b"\r"):
        raw = raw[:-1]
    return raw.decode(ENCODING)
