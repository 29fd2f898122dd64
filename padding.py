"""SHA-256 message padding.

The padded message is

    message || 0x80 || 0x00 * z || be64(bit length of message)

with the smallest `z` that makes the total a multiple of 64 bytes (512 bits).
"""

from __future__ import annotations


def pad_message(message: bytes) -> bytes:
    """Pad the input message according to the SHA-256 specification.

    The result length is a multiple of 64 bytes (512 bits) and at least
    9 bytes longer than `message`.
    """
    ml_bits = len(message) * 8

    # Bits used by the message, the 0x80 marker and the 64-bit length field.
    used_bits = ml_bits + 8 + 64
    zero_bits = (512 - used_bits % 512) % 512

    padded = bytearray(message)
    padded.append(0x80)
    padded.extend(b"\x00" * (zero_bits // 8))

    # Append 64-bit big-endian length in bits.
    padded.extend(ml_bits.to_bytes(8, byteorder="big"))
    return bytes(padded)
