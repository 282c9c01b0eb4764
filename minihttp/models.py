from enum import Enum

from .errors import MethodNotValid, VersionNotValid


class Method(Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    OPTION = "OPTION"
    DELETE = "DELETE"

    @classmethod
    def from_string(cls, token: str) -> "Method":
        try:
            return cls(token)
        except ValueError:
            raise MethodNotValid(token) from None

    def as_string(self) -> str:
        return self.value


class Version(Enum):
    # HTTP/2 is only recognised as a token, framing stays line based 1.x
    HTTP_1_1 = "HTTP/1.1"
    HTTP_2 = "HTTP/2"

    @classmethod
    def from_string(cls, token: str) -> "Version":
        try:
            return cls(token)
        except ValueError:
            raise VersionNotValid(token) from None

    def as_string(self) -> str:
        return self.value


class Status(Enum):
    OK = (200, "OK")
    BAD_REQUEST = (400, "Bad Request")
    NOT_FOUND = (404, "Not Found")
    INTERNAL_SERVER_ERROR = (500, "Internal Server Error")

    def __init__(self, code: int, reason: str) -> None:
        self.code = code
        self.reason = reason

    def as_number(self) -> int:
        return self.code

    def as_string(self) -> str:
        return self.reason
