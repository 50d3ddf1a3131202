class StatusPingError(Exception):
    pass


class ServerConnectionError(StatusPingError, ConnectionError):
    """无法与服务器建立 TCP 连接（拒绝连接、DNS 解析失败等）"""


class PacketWriteError(StatusPingError):
    pass


class PacketReadError(StatusPingError):
    pass


class ProtocolError(StatusPingError):
    pass


class MalformedVarIntError(ProtocolError):
    pass


class StatusDecodeError(StatusPingError):
    pass


class StatusSchemaError(StatusDecodeError):
    def __init__(self, field: str, reason: str) -> None:
        super().__init__(f"{field}: {reason}")
        self.field = field
        self.reason = reason


class PingTimeoutError(StatusPingError, TimeoutError):
    pass
