"""Encoding of annotation processor options for the kapt `apoptions` plugin option.

kapt reads the option value with `java.io.ObjectInputStream`: an int entry
count followed by `writeUTF` key/value pairs, wrapped in object stream block
data records and base64 encoded without line breaks.
"""

from __future__ import annotations

import base64
import binascii
import struct
from collections.abc import Mapping

_STREAM_MAGIC = 0xACED
_STREAM_VERSION = 5
_TC_BLOCKDATA = 0x77
_TC_BLOCKDATALONG = 0x7A
_MAX_BLOCK_SIZE = 1024
_MAX_UTF_LENGTH = 0xFFFF


def encode_kapt_options(options: Mapping[str, str]) -> str:
    """Serialize annotation processor options the way kapt expects them."""
    payload = bytearray(struct.pack(">i", len(options)))
    for key, value in options.items():
        payload += _write_utf(key)
        payload += _write_utf(value)
    return base64.b64encode(_frame_block_data(bytes(payload))).decode("ascii")


def decode_kapt_options(encoded: str) -> dict[str, str]:
    """Inverse of `encode_kapt_options`.

    Raises:
      ValueError: If `encoded` is not a valid kapt option payload.
    """
    try:
        raw = base64.b64decode(encoded, validate=True)
    except binascii.Error as exc:
        raise ValueError(f"Invalid base64 in kapt options: {exc}") from exc
    data = _unframe_block_data(raw)
    try:
        (count,) = struct.unpack_from(">i", data, 0)
        offset = 4
        options: dict[str, str] = {}
        for _ in range(count):
            key, offset = _read_utf(data, offset)
            value, offset = _read_utf(data, offset)
            options[key] = value
    except struct.error as exc:
        raise ValueError("Truncated kapt options payload.") from exc
    if offset != len(data):
        raise ValueError("Unexpected trailing bytes in kapt options payload.")
    return options


def _write_utf(text: str) -> bytes:
    encoded = _to_modified_utf8(text)
    if len(encoded) > _MAX_UTF_LENGTH:
        raise ValueError(f"kapt option text is too long to encode ({len(encoded)} bytes).")
    return struct.pack(">H", len(encoded)) + encoded


def _read_utf(data: bytes, offset: int) -> tuple[str, int]:
    (length,) = struct.unpack_from(">H", data, offset)
    start = offset + 2
    end = start + length
    if end > len(data):
        raise ValueError("Truncated string in kapt options payload.")
    return _from_modified_utf8(data[start:end]), end


def _to_modified_utf8(text: str) -> bytes:
    utf16 = text.encode("utf-16-be", "surrogatepass")
    units = struct.unpack(f">{len(utf16) // 2}H", utf16)
    encoded = bytearray()
    for unit in units:
        if 0x0001 <= unit <= 0x007F:
            encoded.append(unit)
        elif unit <= 0x07FF:
            encoded += bytes((0xC0 | (unit >> 6), 0x80 | (unit & 0x3F)))
        else:
            encoded += bytes(
                (0xE0 | (unit >> 12), 0x80 | ((unit >> 6) & 0x3F), 0x80 | (unit & 0x3F))
            )
    return bytes(encoded)


def _from_modified_utf8(encoded: bytes) -> str:
    units: list[int] = []
    index = 0
    while index < len(encoded):
        first = encoded[index]
        if first < 0x80:
            units.append(first)
            index += 1
        elif first >> 5 == 0b110 and index + 1 < len(encoded):
            units.append(((first & 0x1F) << 6) | (encoded[index + 1] & 0x3F))
            index += 2
        elif first >> 4 == 0b1110 and index + 2 < len(encoded):
            units.append(
                ((first & 0x0F) << 12)
                | ((encoded[index + 1] & 0x3F) << 6)
                | (encoded[index + 2] & 0x3F)
            )
            index += 3
        else:
            raise ValueError(f"Malformed modified UTF-8 byte 0x{first:02x}.")
    return struct.pack(f">{len(units)}H", *units).decode("utf-16-be", "surrogatepass")


def _frame_block_data(payload: bytes) -> bytes:
    stream = bytearray(struct.pack(">HH", _STREAM_MAGIC, _STREAM_VERSION))
    for start in range(0, len(payload), _MAX_BLOCK_SIZE):
        block = payload[start : start + _MAX_BLOCK_SIZE]
        if len(block) <= 0xFF:
            stream += struct.pack(">BB", _TC_BLOCKDATA, len(block))
        else:
            stream += struct.pack(">Bi", _TC_BLOCKDATALONG, len(block))
        stream += block
    return bytes(stream)


def _unframe_block_data(raw: bytes) -> bytes:
    if len(raw) < 4 or struct.unpack_from(">HH", raw, 0) != (_STREAM_MAGIC, _STREAM_VERSION):
        raise ValueError("kapt options payload is not an object stream.")
    data = bytearray()
    offset = 4
    while offset < len(raw):
        tag = raw[offset]
        if tag == _TC_BLOCKDATA and offset + 1 < len(raw):
            length = raw[offset + 1]
            offset += 2
        elif tag == _TC_BLOCKDATALONG and offset + 4 < len(raw):
            (length,) = struct.unpack_from(">i", raw, offset + 1)
            if length < 0:
                raise ValueError("Negative block data length.")
            offset += 5
        else:
            raise ValueError(f"Unexpected object stream record 0x{tag:02x}.")
        if offset + length > len(raw):
            raise ValueError("Truncated block data record.")
        data += raw[offset : offset + length]
        offset += length
    return bytes(data)
