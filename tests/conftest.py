import contextlib
import json
import socket
import threading
from collections.abc import Callable, Iterator

import pytest

# 导入即注册指令
import func.admin.help  # noqa: F401
import func.tool.mcping  # noqa: F401
from func.tool.mcping.packet import build_handshake_packet, build_status_request_packet
from func.tool.mcping.varint import encode_varint
from models.minecraft import ServerAddress

STATUS = {
    "version": {"protocol": 5, "name": "1.7.10"},
    "description": "A Minecraft Server",
    "players": {"online": 3, "max": 20},
}


def status_frame(status: dict | bytes, packet_id: int = 0x00) -> bytes:
    body = status if isinstance(status, bytes) else json.dumps(status).encode("utf8")
    data = encode_varint(packet_id) + encode_varint(len(body)) + body
    return encode_varint(len(data)) + data


def recv_exact(conn: socket.socket, size: int) -> bytes:
    data = b""
    while len(data) < size:
        chunk = conn.recv(size - len(data))
        if not chunk:
            break
        data += chunk
    return data


class MockServer:
    def __init__(self, handler: Callable[["MockServer", socket.socket], None]) -> None:
        self.handler = handler
        self.received = b""
        self.stop = threading.Event()
        self.sock = socket.create_server(("127.0.0.1", 0))
        self.sock.settimeout(5)
        self.thread = threading.Thread(target=self._serve, daemon=True)

    @property
    def address(self) -> ServerAddress:
        return ServerAddress("127.0.0.1", self.sock.getsockname()[1])

    @property
    def expected_request(self) -> bytes:
        return build_handshake_packet(self.address.host, self.address.port) + build_status_request_packet()

    def read_request(self, conn: socket.socket) -> None:
        self.received = recv_exact(conn, len(self.expected_request))

    def _serve(self) -> None:
        try:
            conn, _ = self.sock.accept()
        except OSError:
            return
        with conn:
            self.handler(self, conn)

    def start(self) -> "MockServer":
        self.thread.start()
        return self

    def close(self) -> None:
        self.stop.set()
        # shutdown 会唤醒阻塞在 accept 上的线程
        with contextlib.suppress(OSError):
            self.sock.shutdown(socket.SHUT_RDWR)
        self.thread.join(timeout=5)
        self.sock.close()


@pytest.fixture
def mock_server() -> Iterator[Callable[..., MockServer]]:
    servers: list[MockServer] = []

    def start(handler: Callable[[MockServer, socket.socket], None]) -> MockServer:
        server = MockServer(handler).start()
        servers.append(server)
        return server

    yield start
    for server in servers:
        server.close()


def reply_with(frame: bytes) -> Callable[[MockServer, socket.socket], None]:
    def handler(server: MockServer, conn: socket.socket) -> None:
        server.read_request(conn)
        if server.received == server.expected_request:
            conn.sendall(frame)

    return handler


def close_after_handshake(server: MockServer, conn: socket.socket) -> None:
    server.read_request(conn)


def never_respond(server: MockServer, conn: socket.socket) -> None:
    server.read_request(conn)
    server.stop.wait(10)
