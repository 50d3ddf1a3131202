from typing import Protocol

from .exceptions import MalformedVarIntError, PacketReadError, ProtocolError

# 64 位数值需要 10 个字节，超过即视为格式错误
VARINT_MAX_BYTES = 10


class Readable(Protocol):
    def read(self, size: int, /) -> bytes: ...


def encode_varint(value: int) -> bytes:
    if value < 0:
        msg = f"VarInt value must be non-negative, got {value}"
        raise ValueError(msg)

    ordinal = bytearray()
    while True:
        byte = value & 0x7F
        value >>= 7
        if value:
            ordinal.append(byte | 0x80)
        else:
            ordinal.append(byte)
            return bytes(ordinal)


def decode_varint(stream: Readable) -> tuple[int, int]:
    """
    从流中逐字节读取一个 VarInt

    返回值:
        (数值, 消耗的字节数)
    """
    value = 0
    for i in range(VARINT_MAX_BYTES):
        ordinal = stream.read(1)
        if not ordinal:
            if i == 0:
                msg = "stream ended before VarInt"
                raise PacketReadError(msg)
            msg = f"stream ended inside VarInt after {i} bytes"
            raise ProtocolError(msg)

        byte = ordinal[0]
        value |= (byte & 0x7F) << 7 * i

        if not byte & 0x80:
            return value, i + 1

    msg = f"VarInt is longer than {VARINT_MAX_BYTES} bytes"
    raise MalformedVarIntError(msg)
