import pytest

from func.tool.mcping.packet import build_handshake_packet, build_packet, build_status_request_packet


def test_handshake_layout():
    packet = build_handshake_packet("localhost", 25565)
    assert packet == (
        b"\x0f"  # 长度
        b"\x00"  # 包 ID
        b"\x05"  # 协议版本
        b"\x09localhost"
        b"\x63\xdd"  # 端口，大端序
        b"\x01"  # 下一个状态：status
    )


def test_handshake_is_deterministic():
    assert build_handshake_packet("mc.example.com", 25570) == build_handshake_packet("mc.example.com", 25570)


def test_handshake_host_length_counts_utf8_bytes():
    packet = build_handshake_packet("é.example", 1)
    assert packet[3] == len("é.example".encode("utf8"))


def test_handshake_long_host_uses_multibyte_length():
    host = "a" * 200
    packet = build_handshake_packet(host, 25565)
    # 长度前缀 (2 字节) + 包 ID + 协议版本 + 主机名长度 (2 字节) + 主机名 + 端口 + 状态
    assert len(packet) == 2 + 1 + 1 + 2 + 200 + 2 + 1
    assert packet[4:6] == b"\xc8\x01"


@pytest.mark.parametrize("port", [-1, 65536])
def test_handshake_rejects_bad_port(port: int):
    with pytest.raises(ValueError, match="port"):
        build_handshake_packet("localhost", port)


def test_status_request():
    assert build_status_request_packet() == b"\x01\x00"


def test_build_packet_prefixes_length():
    assert build_packet(0x01, b"\x00" * 8) == b"\x09\x01" + b"\x00" * 8
