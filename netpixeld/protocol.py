"""Wire format shared by the client and the server.

Every frame on the wire is laid out as::

    [length: u32 BE][header: 8 bytes][payload]

where ``length`` counts the header and the payload, and the header holds
``version`` (u8), ``type`` (u8), ``sequence`` (u16 BE) and
``payload_length`` (u32 BE).
"""

from __future__ import annotations

import struct
from dataclasses import dataclass
from enum import IntEnum

PROTOCOL_VERSION = 1

HEADER_FORMAT = struct.Struct(">BBHI")
HEADER_SIZE = HEADER_FORMAT.size
LENGTH_PREFIX = struct.Struct(">I")
LENGTH_PREFIX_SIZE = LENGTH_PREFIX.size

_POSITION_FORMAT = struct.Struct("@Bff")


class ProtocolError(ValueError):
    """Raised when data cannot be encoded to or decoded from the wire format."""


class MessageType(IntEnum):
    """Kinds of message carried in a packet header."""

    ASSIGN_CLIENT_ID = 0
    INPUT = 1
    POSITION_UPDATE = 2
    CUSTOM_EVENT = 3


def _message_type(value: int) -> MessageType | int:
    try:
        return MessageType(value)
    except ValueError:
        return value


@dataclass(frozen=True)
class PacketHeader:
    """Fixed-size header that precedes every payload."""

    version: int
    type: MessageType | int
    sequence: int = 0
    payload_length: int = 0

    def pack(self) -> bytes:
        """Return the eight header bytes in network order."""
        try:
            return HEADER_FORMAT.pack(
                self.version, int(self.type), self.sequence, self.payload_length
            )
        except struct.error as exc:
            raise ProtocolError(f"header field out of range: {exc}") from exc


@dataclass(frozen=True)
class Packet:
    """A header together with its payload bytes."""

    header: PacketHeader
    payload: bytes = b""


@dataclass(frozen=True)
class AssignClientIdPayload:
    """Payload telling a client which identifier the server gave it."""

    client_id: int

    def to_bytes(self) -> bytes:
        """Return the one-byte wire form of the payload."""
        if not 0 <= self.client_id <= 0xFF:
            raise ProtocolError(f"client id out of range: {self.client_id}")
        return bytes((self.client_id,))


@dataclass(frozen=True)
class PositionPayload:
    """Position of one entity in the world."""

    id: int
    x: float
    y: float

    def to_bytes(self) -> bytes:
        """Return the native-layout bytes of the payload."""
        try:
            return _POSITION_FORMAT.pack(self.id, self.x, self.y)
        except struct.error as exc:
            raise ProtocolError(f"position field out of range: {exc}") from exc

    @classmethod
    def from_bytes(cls, data: bytes) -> PositionPayload:
        """Decode a payload produced by :meth:`to_bytes`."""
        if len(data) < _POSITION_FORMAT.size:
            raise ProtocolError("position payload too small")
        entity_id, x, y = _POSITION_FORMAT.unpack_from(data)
        return cls(entity_id, x, y)


def encode_packet(packet: Packet) -> bytes:
    """Frame a packet as length prefix, header and payload."""
    payload = bytes(packet.payload)
    total = HEADER_SIZE + len(payload)
    try:
        prefix = LENGTH_PREFIX.pack(total)
    except struct.error as exc:
        raise ProtocolError("packet too large") from exc
    return prefix + packet.header.pack() + payload


def decode_header(data: bytes) -> PacketHeader:
    """Decode the header held in the first eight bytes of ``data``."""
    if len(data) < HEADER_SIZE:
        raise ProtocolError(
            f"header needs {HEADER_SIZE} bytes, got {len(data)}"
        )
    version, type_value, sequence, payload_length = HEADER_FORMAT.unpack_from(data)
    return PacketHeader(version, _message_type(type_value), sequence, payload_length)


def deserialize_client_id(payload: bytes) -> AssignClientIdPayload:
    """Decode an assign-client-id payload."""
    if len(payload) < 1:
        raise ProtocolError("[deserialize_client_id][ERROR]: payload too small")
    return AssignClientIdPayload(payload[0])