import io
import socket
import time

from loguru import logger

from models.minecraft import ServerAddress

from .exceptions import (
    PacketReadError,
    PacketWriteError,
    PingTimeoutError,
    ProtocolError,
    ServerConnectionError,
)
from .packet import STATUS_RESPONSE_PACKET_ID, build_handshake_packet, build_status_request_packet
from .status import StatusResponse, decode_status
from .varint import decode_varint

# 状态响应的 JSON 最长 32767 个字符，每个字符最多 4 字节，再留出余量
MAX_FRAME_LENGTH = 2 * 1024 * 1024


class _Connection:
    """带有统一截止时间的 socket 读写封装"""

    def __init__(self, sock: socket.socket, deadline: float) -> None:
        self._sock = sock
        self._deadline = deadline

    def _arm(self, stage: str) -> None:
        remaining = self._deadline - time.monotonic()
        if remaining <= 0:
            msg = f"deadline exceeded before {stage}"
            raise PingTimeoutError(msg)
        self._sock.settimeout(remaining)

    def write(self, data: bytes) -> None:
        self._arm("write")
        try:
            self._sock.sendall(data)
        except TimeoutError as e:
            msg = "timed out while sending packets"
            raise PingTimeoutError(msg) from e
        except OSError as e:
            msg = f"failed to send packets: {e}"
            raise PacketWriteError(msg) from e

    def read(self, size: int) -> bytes:
        """读取 size 个字节，对端提前关闭时返回已读到的部分"""
        chunks = []
        received = 0
        while received < size:
            self._arm("read")
            try:
                chunk = self._sock.recv(size - received)
            except TimeoutError as e:
                msg = "timed out while waiting for the status response"
                raise PingTimeoutError(msg) from e
            except OSError as e:
                msg = f"failed to read the status response: {e}"
                raise PacketReadError(msg) from e
            if not chunk:
                break
            chunks.append(chunk)
            received += len(chunk)
        return b"".join(chunks)


class StatusPing:
    def __init__(self, address: ServerAddress, timeout: float = 5) -> None:
        self._address = address
        self._timeout = timeout

    def _connect(self, deadline: float) -> socket.socket:
        remaining = deadline - time.monotonic()
        if remaining <= 0:
            msg = f"deadline exceeded before connecting to {self._address}"
            raise PingTimeoutError(msg)
        try:
            return socket.create_connection((self._address.host, self._address.port), timeout=remaining)
        except TimeoutError as e:
            msg = f"timed out connecting to {self._address}"
            raise PingTimeoutError(msg) from e
        except OSError as e:
            msg = f"cannot connect to {self._address}: {e}"
            raise ServerConnectionError(msg) from e

    def _read_frame(self, connection: _Connection) -> bytes:
        frame_length, _ = decode_varint(connection)
        logger.debug(f"[Func.mcping] Response frame is {frame_length} bytes long")
        if frame_length > MAX_FRAME_LENGTH:
            msg = f"response frame too large: {frame_length} bytes"
            raise ProtocolError(msg)
        if frame_length == 0:
            msg = "response frame is empty"
            raise ProtocolError(msg)

        packet_id, id_width = decode_varint(connection)
        if packet_id != STATUS_RESPONSE_PACKET_ID:
            msg = f"unexpected packet id 0x{packet_id:02x} in status response"
            raise ProtocolError(msg)
        if frame_length < id_width:
            msg = f"frame length {frame_length} is shorter than its packet id"
            raise ProtocolError(msg)

        remaining = frame_length - id_width
        payload = connection.read(remaining)
        if len(payload) < remaining:
            msg = f"connection closed after {len(payload)} of {remaining} payload bytes"
            raise PacketReadError(msg)
        return payload

    @staticmethod
    def _unpack_string(payload: bytes) -> bytes:
        buffer = io.BytesIO(payload)
        try:
            length, width = decode_varint(buffer)
        except PacketReadError as e:
            msg = "status response payload is empty"
            raise ProtocolError(msg) from e
        if width + length != len(payload):
            msg = f"JSON length {length} does not match the {len(payload) - width} bytes left in the frame"
            raise ProtocolError(msg)
        return buffer.read(length)

    def get_status(self) -> StatusResponse:
        deadline = time.monotonic() + self._timeout
        logger.debug(f"[Func.mcping] Connecting to {self._address}")
        with self._connect(deadline) as sock:
            connection = _Connection(sock, deadline)
            # 握手包和状态请求包需要在读取之前全部发出
            connection.write(build_handshake_packet(self._address.host, self._address.port))
            connection.write(build_status_request_packet())
            logger.debug("[Func.mcping] Handshake sent, waiting for status response")
            payload = self._read_frame(connection)

        return decode_status(self._unpack_string(payload))


def fetch_status(address: ServerAddress, timeout: float = 5) -> StatusResponse:
    return StatusPing(address, timeout).get_status()
