import struct

from .varint import encode_varint

# 1.7.10 实际使用的是 5
PROTOCOL_VERSION = 5
HANDSHAKE_PACKET_ID = 0x00
STATUS_REQUEST_PACKET_ID = 0x00
STATUS_RESPONSE_PACKET_ID = 0x00
# 1 为 status，2 为 login
NEXT_STATE_STATUS = 1


def build_packet(packet_id: int, payload: bytes = b"") -> bytes:
    data = encode_varint(packet_id) + payload
    return encode_varint(len(data)) + data


def build_handshake_packet(host: str, port: int, protocol_version: int = PROTOCOL_VERSION) -> bytes:
    if not 0 <= port <= 0xFFFF:
        msg = f"port out of range: {port}"
        raise ValueError(msg)

    host_bytes = host.encode("utf8")
    payload = (
        encode_varint(protocol_version)
        + encode_varint(len(host_bytes))
        + host_bytes
        + struct.pack(">H", port)
        + encode_varint(NEXT_STATE_STATUS)
    )
    return build_packet(HANDSHAKE_PACKET_ID, payload)


def build_status_request_packet() -> bytes:
    return build_packet(STATUS_REQUEST_PACKET_ID)
