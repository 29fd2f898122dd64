"""SHA-256 compression.

This module holds everything that runs *after* padding: the round constants,
the message schedule expansion and the 64-round compression loop.

Given the current working state words `(a, b, c, d, e, f, g, h)`, the round
constant `k`, and the message schedule word `w`, one round computes:

    S1   = (e >>> 6) ^ (e >>> 11) ^ (e >>> 25)
    ch   = (e & f) ^ (~e & g)
    temp1 = h + S1 + ch + k + w

    S0   = (a >>> 2) ^ (a >>> 13) ^ (a >>> 22)
    maj  = (a & b) ^ (a & c) ^ (b & c)
    temp2 = S0 + maj

    a' = temp1 + temp2
    e' = d + temp1

    b' = a
    c' = b
    d' = c
    f' = e
    g' = f
    h' = g

All additions are performed modulo 2**32, as in SHA-256.
"""

from __future__ import annotations

from typing import List, Sequence, Tuple


MASK32 = 0xFFFFFFFF
BLOCK_SIZE = 64

State = Tuple[int, int, int, int, int, int, int, int]

# Initial hash values (first 32 bits of the fractional parts of the
# square roots of the first 8 primes 2..19), as per FIPS 180-4.
H0: State = (
    0x6A09E667,
    0xBB67AE85,
    0x3C6EF372,
    0xA54FF53A,
    0x510E527F,
    0x9B05688C,
    0x1F83D9AB,
    0x5BE0CD19,
)

# Standard SHA-256 round constants k[0..63] from FIPS 180-4.
K_VALUES: Tuple[int, ...] = (
    0x428A2F98, 0x71374491, 0xB5C0FBCF, 0xE9B5DBA5,
    0x3956C25B, 0x59F111F1, 0x923F82A4, 0xAB1C5ED5,
    0xD807AA98, 0x12835B01, 0x243185BE, 0x550C7DC3,
    0x72BE5D74, 0x80DEB1FE, 0x9BDC06A7, 0xC19BF174,
    0xE49B69C1, 0xEFBE4786, 0x0FC19DC6, 0x240CA1CC,
    0x2DE92C6F, 0x4A7484AA, 0x5CB0A9DC, 0x76F988DA,
    0x983E5152, 0xA831C66D, 0xB00327C8, 0xBF597FC7,
    0xC6E00BF3, 0xD5A79147, 0x06CA6351, 0x14292967,
    0x27B70A85, 0x2E1B2138, 0x4D2C6DFC, 0x53380D13,
    0x650A7354, 0x766A0ABB, 0x81C2C92E, 0x92722C85,
    0xA2BFE8A1, 0xA81A664B, 0xC24B8B70, 0xC76C51A3,
    0xD192E819, 0xD6990624, 0xF40E3585, 0x106AA070,
    0x19A4C116, 0x1E376C08, 0x2748774C, 0x34B0BCB5,
    0x391C0CB3, 0x4ED8AA4A, 0x5B9CCA4F, 0x682E6FF3,
    0x748F82EE, 0x78A5636F, 0x84C87814, 0x8CC70208,
    0x90BEFFFA, 0xA4506CEB, 0xBEF9A3F7, 0xC67178F2,
)


class MalformedInput(ValueError):
    """Raised when the compressor is handed data that was not padded."""


def _rotr(x: int, n: int) -> int:
    """Right-rotate a 32-bit word `x` by `n` bits."""
    x &= MASK32
    return ((x >> n) | (x << (32 - n))) & MASK32


def _shr(x: int, n: int) -> int:
    """Right-shift a 32-bit word `x` by `n` bits."""
    x &= MASK32
    return x >> n


def small_sigma0(x: int) -> int:
    """SHA-256 function σ0 used in the message schedule."""
    return (_rotr(x, 7) ^ _rotr(x, 18) ^ _shr(x, 3)) & MASK32


def small_sigma1(x: int) -> int:
    """SHA-256 function σ1 used in the message schedule."""
    return (_rotr(x, 17) ^ _rotr(x, 19) ^ _shr(x, 10)) & MASK32


def big_sigma0(x: int) -> int:
    """SHA-256 function Σ0 applied to `a` in every round."""
    return (_rotr(x, 2) ^ _rotr(x, 13) ^ _rotr(x, 22)) & MASK32


def big_sigma1(x: int) -> int:
    """SHA-256 function Σ1 applied to `e` in every round."""
    return (_rotr(x, 6) ^ _rotr(x, 11) ^ _rotr(x, 25)) & MASK32


def ch(x: int, y: int, z: int) -> int:
    """Choice: bits of `y` where `x` is set, bits of `z` elsewhere."""
    return ((x & y) ^ (~x & z)) & MASK32


def maj(x: int, y: int, z: int) -> int:
    """Majority vote of the bits of `x`, `y` and `z`."""
    return ((x & y) ^ (x & z) ^ (y & z)) & MASK32


def build_message_schedule(block: bytes) -> List[int]:
    """Given a 512-bit block, build the 64-word message schedule w[0..63]."""
    if len(block) != BLOCK_SIZE:
        raise MalformedInput(f"Expected 64-byte block, got {len(block)}")

    w: List[int] = [0] * 64

    # First 16 words come directly from the block (big-endian).
    for i in range(16):
        w[i] = int.from_bytes(block[4 * i : 4 * (i + 1)], byteorder="big")

    # Extend to 64 words using the SHA-256 recurrence.
    for i in range(16, 64):
        s0 = small_sigma0(w[i - 15])
        s1 = small_sigma1(w[i - 2])
        w[i] = (w[i - 16] + s0 + w[i - 7] + s1) & MASK32

    return w


def compression(
    a: int,
    b: int,
    c: int,
    d: int,
    e: int,
    f: int,
    g: int,
    h: int,
    w: int,
    k: int,
) -> State:
    """Perform one SHA-256 compression round.

    Parameters
    ----------
    a, b, c, d, e, f, g, h : int
        32-bit words representing the current working state.
    w : int
        Message schedule word `w[i]`.
    k : int
        Round constant `k[i]`.

    Returns
    -------
    (a_new, b_new, c_new, d_new, e_new, f_new, g_new, h_new) : tuple[int, ...]
        Updated working state after one compression round.
    """
    temp1 = (h + big_sigma1(e) + ch(e, f, g) + k + w) & MASK32
    temp2 = (big_sigma0(a) + maj(a, b, c)) & MASK32

    return (
        (temp1 + temp2) & MASK32,
        a,
        b,
        c,
        (d + temp1) & MASK32,
        e,
        f,
        g,
    )


def compress64(
    a: int,
    b: int,
    c: int,
    d: int,
    e: int,
    f: int,
    g: int,
    h: int,
    ws: Sequence[int],
) -> State:
    """Run the full 64-round SHA-256 compression loop for one block.

    Parameters
    ----------
    a, b, c, d, e, f, g, h : int
        Initial working state words (the current hash value).
    ws : Sequence[int]
        The 64-word message schedule `w[0..63]` for this block.

    Returns
    -------
    (a, b, c, d, e, f, g, h) : tuple[int, ...]
        Final working state words after 64 rounds.
    """
    if len(ws) != 64:
        raise MalformedInput(
            f"compress64 expects 64 message schedule words, got {len(ws)}"
        )

    for i in range(64):
        a, b, c, d, e, f, g, h = compression(a, b, c, d, e, f, g, h, ws[i], K_VALUES[i])

    return a, b, c, d, e, f, g, h


def compress_block(state: State, block: bytes) -> State:
    """Fold one 64-byte block into the chaining value `state`.

    H_{i+1}[j] = (H_i[j] + working[j]) mod 2^32
    """
    ws = build_message_schedule(block)
    work_out = compress64(*state, ws)
    return tuple((s + w) & MASK32 for s, w in zip(state, work_out))


def state_to_digest(state: State) -> bytes:
    """Convert the final hash state into the 32-byte SHA-256 digest."""
    return b"".join(word.to_bytes(4, byteorder="big") for word in state)


def split_into_blocks(padded: bytes) -> List[bytes]:
    """Split a padded message into 512-bit (64-byte) blocks.

    The input must already be padded so that its length is a positive
    multiple of 64.
    """
    if len(padded) == 0 or len(padded) % BLOCK_SIZE != 0:
        raise MalformedInput(
            "Padded message length must be a positive multiple of 64 bytes, "
            f"got {len(padded)}"
        )
    return [bytes(padded[i : i + BLOCK_SIZE]) for i in range(0, len(padded), BLOCK_SIZE)]


def digest(padded: bytes) -> bytes:
    """Compress an already padded message into its 32-byte digest.

    `padded` must be a positive multiple of 64 bytes long; anything else is
    rejected with `MalformedInput` rather than padded here.
    """
    state = H0
    for block in split_into_blocks(padded):
        state = compress_block(state, block)

    return state_to_digest(state)
