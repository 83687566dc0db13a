"""The BLAKE hash function (SHA-3 finalist) in its 224, 256, 384 and 512 bit forms."""

from __future__ import annotations

import copy
import struct
from dataclasses import dataclass
from typing import ClassVar

__all__ = ["BlakeHash", "Blake224", "Blake256", "Blake384", "Blake512"]

# One 0x80 byte followed by zeros; enough to pad any block.
_PADDING = b"\x80" + bytes(128)

_SIGMA = (
    (0, 1, 2, 3, 4, 5, 6, 7, 8, 9, 10, 11, 12, 13, 14, 15),
    (14, 10, 4, 8, 9, 15, 13, 6, 1, 12, 0, 2, 11, 7, 5, 3),
    (11, 8, 12, 0, 5, 2, 15, 13, 10, 14, 3, 6, 7, 1, 9, 4),
    (7, 9, 3, 1, 13, 12, 11, 14, 2, 6, 5, 10, 4, 0, 15, 8),
    (9, 0, 5, 7, 2, 4, 10, 15, 14, 1, 11, 12, 6, 8, 3, 13),
    (2, 12, 6, 10, 0, 11, 8, 3, 4, 13, 7, 5, 15, 14, 1, 9),
    (12, 5, 1, 15, 14, 13, 4, 10, 0, 7, 6, 3, 9, 2, 8, 11),
    (13, 11, 7, 14, 12, 1, 3, 9, 5, 0, 15, 4, 8, 6, 2, 10),
    (6, 15, 14, 9, 11, 3, 0, 8, 12, 2, 13, 7, 1, 4, 10, 5),
    (10, 2, 8, 4, 7, 6, 1, 5, 15, 11, 9, 14, 3, 12, 13, 0),
)

# State indices for the four column steps, then the four diagonal steps.
_LANES = (
    (0, 4, 8, 12),
    (1, 5, 9, 13),
    (2, 6, 10, 14),
    (3, 7, 11, 15),
    (0, 5, 10, 15),
    (1, 6, 11, 12),
    (2, 7, 8, 13),
    (3, 4, 9, 14),
)

_BLAKE256_U = (
    0x243F6A88, 0x85A308D3, 0x13198A2E, 0x03707344,
    0xA4093822, 0x299F31D0, 0x082EFA98, 0xEC4E6C89,
    0x452821E6, 0x38D01377, 0xBE5466CF, 0x34E90C6C,
    0xC0AC29B7, 0xC97C50DD, 0x3F84D5B5, 0xB5470917,
)

_BLAKE512_U = (
    0x243F6A8885A308D3, 0x13198A2E03707344, 0xA4093822299F31D0, 0x082EFA98EC4E6C89,
    0x452821E638D01377, 0xBE5466CF34E90C6C, 0xC0AC29B7C97C50DD, 0x3F84D5B5B5470917,
    0x9216D5D98979FB1B, 0xD1310BA698DFB5AC, 0x2FFD72DBD01ADFB7, 0xB8E1AFED6A267E96,
    0xBA7C9045F12C7F99, 0x24A19947B3916CF7, 0x0801F2E2858EFC16, 0x636920D871574E69,
)

_BLAKE224_IV = (
    0xC1059ED8, 0x367CD507, 0x3070DD17, 0xF70E5939,
    0xFFC00B31, 0x68581511, 0x64F98FA7, 0xBEFA4FA4,
)

_BLAKE256_IV = (
    0x6A09E667, 0xBB67AE85, 0x3C6EF372, 0xA54FF53A,
    0x510E527F, 0x9B05688C, 0x1F83D9AB, 0x5BE0CD19,
)

_BLAKE384_IV = (
    0xCBBB9D5DC1059ED8, 0x629A292A367CD507, 0x9159015A3070DD17, 0x152FECD8F70E5939,
    0x67332667FFC00B31, 0x8EB44A8768581511, 0xDB0C2E0D64F98FA7, 0x47B5481DBEFA4FA4,
)

_BLAKE512_IV = (
    0x6A09E667F3BCC908, 0xBB67AE8584CAA73B, 0x3C6EF372FE94F82B, 0xA54FF53A5F1D36F1,
    0x510E527FADE682D1, 0x9B05688C2B3E6C1F, 0x1F83D9ABFB41BD6B, 0x5BE0CD19137E2179,
)


@dataclass(frozen=True)
class _Core:
    """Word size and round parameters shared by a pair of BLAKE variants."""

    bits: int
    rounds: int
    rotations: tuple[int, int, int, int]
    constants: tuple[int, ...]
    fmt: str

    @property
    def mask(self) -> int:
        return (1 << self.bits) - 1

    @property
    def word_bytes(self) -> int:
        return self.bits // 8

    @property
    def block_size(self) -> int:
        return self.word_bytes * 16


_CORE32 = _Core(32, 14, (16, 12, 8, 7), _BLAKE256_U, "I")
_CORE64 = _Core(64, 16, (32, 25, 16, 11), _BLAKE512_U, "Q")


def _compress(core: _Core, h: tuple[int, ...], block: bytes, t0: int, t1: int) -> tuple[int, ...]:
    """Run the compression function on one block with counter words ``t0``, ``t1``."""
    mask = core.mask
    bits = core.bits
    u = core.constants
    r1, r2, r3, r4 = core.rotations
    m = struct.unpack(f">16{core.fmt}", block)

    def rotr(x: int, n: int) -> int:
        return ((x >> n) | (x << (bits - n))) & mask

    v = [*h, *u[:4], t0 ^ u[4], t0 ^ u[5], t1 ^ u[6], t1 ^ u[7]]
    for rnd in range(core.rounds):
        sigma = _SIGMA[rnd % 10]
        for (a, b, c, d), s0, s1 in zip(_LANES, sigma[0::2], sigma[1::2]):
            v[a] = (v[a] + v[b] + (m[s0] ^ u[s1])) & mask
            v[d] = rotr(v[d] ^ v[a], r1)
            v[c] = (v[c] + v[d]) & mask
            v[b] = rotr(v[b] ^ v[c], r2)
            v[a] = (v[a] + v[b] + (m[s1] ^ u[s0])) & mask
            v[d] = rotr(v[d] ^ v[a], r3)
            v[c] = (v[c] + v[d]) & mask
            v[b] = rotr(v[b] ^ v[c], r4)
    return tuple(hw ^ lo ^ hi for hw, lo, hi in zip(h, v[:8], v[8:]))


class BlakeHash:
    """BLAKE hash; subclasses fix the word size, output length and initial value."""

    digest_size: ClassVar[int] = 0
    name: ClassVar[str] = "blake"
    _core: ClassVar[_Core]
    _iv: ClassVar[tuple[int, ...]] = ()
    _full: ClassVar[bool] = False

    def __init__(self, data=b"") -> None:
        if not self.digest_size:
            raise TypeError("use one of Blake224, Blake256, Blake384 or Blake512")
        self.reset()
        self.update(data)

    @property
    def block_size(self) -> int:
        """Size in bytes of the blocks the message is cut into."""
        return self._core.block_size

    def reset(self) -> None:
        """Return to the state of a fresh hash."""
        self._h = self._iv
        self._buffer = b""
        self._count = 0

    def _split(self, count: int) -> tuple[int, int]:
        core = self._core
        count &= (1 << (2 * core.bits)) - 1
        return count & core.mask, count >> core.bits

    def update(self, data) -> None:
        """Feed more message bytes."""
        buf = self._buffer + memoryview(data).tobytes()
        blk = self.block_size
        full = len(buf) - len(buf) % blk
        h, count = self._h, self._count
        for start in range(0, full, blk):
            count += blk * 8
            t0, t1 = self._split(count)
            h = _compress(self._core, h, buf[start:start + blk], t0, t1)
        self._h = h
        self._count = count
        self._buffer = buf[full:]

    def digest(self) -> bytes:
        """Return the digest of everything fed so far, leaving the state intact."""
        core = self._core
        blk = core.block_size
        wb = core.word_bytes
        tail = self._buffer
        pos = len(tail)
        t0, t1 = self._split(self._count + pos * 8)
        msglen = t1.to_bytes(wb, "big") + t0.to_bytes(wb, "big")

        footer = 1 + 2 * wb
        magic = (1 if self._full else 0) | (0x80 if pos + footer == blk else 0)

        h = self._h
        extra = pos + footer > blk
        if extra:
            h = _compress(core, h, tail + _PADDING[: blk - pos], t0, t1)
            tail = b""
        if not tail:
            # A block holding only padding carries no counter.
            t0 = t1 = 0
        start = int(extra)
        padding = _PADDING[start:start + blk - footer - len(tail)]
        h = _compress(core, h, tail + padding + bytes([magic]) + msglen, t0, t1)
        return struct.pack(f">8{core.fmt}", *h)[: self.digest_size]

    def hexdigest(self) -> str:
        """Return the digest as a string of hex digits."""
        return self.digest().hex()

    def copy(self) -> "BlakeHash":
        """Return an independent copy of this hash state."""
        return copy.copy(self)

    def __repr__(self) -> str:
        return f"<{type(self).__name__}>"


class Blake224(BlakeHash):
    """BLAKE with 32-bit words and a 224-bit digest."""

    digest_size = 28
    name = "blake224"
    _core = _CORE32
    _iv = _BLAKE224_IV
    _full = False


class Blake256(BlakeHash):
    """BLAKE with 32-bit words and a 256-bit digest."""

    digest_size = 32
    name = "blake256"
    _core = _CORE32
    _iv = _BLAKE256_IV
    _full = True


class Blake384(BlakeHash):
    """BLAKE with 64-bit words and a 384-bit digest."""

    digest_size = 48
    name = "blake384"
    _core = _CORE64
    _iv = _BLAKE384_IV
    _full = False


class Blake512(BlakeHash):
    """BLAKE with 64-bit words and a 512-bit digest."""

    digest_size = 64
    name = "blake512"
    _core = _CORE64
    _iv = _BLAKE512_IV
    _full = True