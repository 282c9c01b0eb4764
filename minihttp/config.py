import ipaddress
import socket
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Config:
    address: str = "127.0.0.1"
    port: int = 8080
    backlog: int = 128
    accept_timeout: float = 1.0
    # No per-connection deadline unless one is set: a silent client holds its task open.
    recv_timeout: Optional[float] = None
    # None keeps acceptance unbounded.
    max_connections: Optional[int] = None
    debug: bool = False

    def __post_init__(self) -> None:
        try:
            ipaddress.ip_address(self.address)
        except ValueError:
            raise ValueError(f"address must be a textual IPv4/IPv6 address, got {self.address!r}") from None
        if not 0 <= self.port <= 0xFFFF:
            raise ValueError(f"port out of range: {self.port}")
        if self.max_connections is not None and self.max_connections < 1:
            raise ValueError("max_connections must be positive")

    @property
    def family(self) -> socket.AddressFamily:
        if ipaddress.ip_address(self.address).version == 6:
            return socket.AF_INET6
        return socket.AF_INET
