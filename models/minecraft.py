from dataclasses import dataclass

DEFAULT_PORT = 25565


@dataclass(frozen=True)
class ServerAddress:
    host: str
    port: int = DEFAULT_PORT

    def __post_init__(self) -> None:
        if not self.host:
            msg = "host must not be empty"
            raise ValueError(msg)
        if not 0 <= self.port <= 0xFFFF:
            msg = f"port out of range: {self.port}"
            raise ValueError(msg)

    def __str__(self) -> str:
        return f"{self.host}:{self.port}"

    @classmethod
    def parse(cls, address: str, default_port: int = DEFAULT_PORT) -> "ServerAddress":
        host, _, port = address.strip().rpartition(":")
        if not host:
            return cls(port, default_port)
        if not port.isdigit():
            msg = f"invalid port in address: {address}"
            raise ValueError(msg)
        return cls(host, int(port))
