"""The ChaCha block function and the per-stream state it advances."""

from __future__ import annotations

import struct

__all__ = ["ChaChaState", "init_chacha_x"]

BLOCK = 64
BUFBLOCKS = 4
BUFSZ = BLOCK * BUFBLOCKS

_M32 = 0xFFFFFFFF
_M64 = (1 << 64) - 1

# "expand 32-byte k"
_CONSTANTS = (0x61707865, 0x3320646E, 0x79622D32, 0x6B206574)

_COLUMNS = ((0, 4, 8, 12), (1, 5, 9, 13), (2, 6, 10, 14), (3, 7, 11, 15))
_DIAGONALS = ((0, 5, 10, 15), (1, 6, 11, 12), (2, 7, 8, 13), (3, 4, 9, 14))

Words4 = tuple[int, int, int, int]


def _rotl(x: int, n: int) -> int:
    return ((x << n) | (x >> (32 - n))) & _M32


def _quarter(s: list[int], a: int, b: int, c: int, d: int) -> None:
    s[a] = (s[a] + s[b]) & _M32
    s[d] = _rotl(s[d] ^ s[a], 16)
    s[c] = (s[c] + s[d]) & _M32
    s[b] = _rotl(s[b] ^ s[c], 12)
    s[a] = (s[a] + s[b]) & _M32
    s[d] = _rotl(s[d] ^ s[a], 8)
    s[c] = (s[c] + s[d]) & _M32
    s[b] = _rotl(s[b] ^ s[c], 7)


def _rounds(words: tuple[int, ...], drounds: int) -> list[int]:
    s = list(words)
    for _ in range(drounds):
        for lane in _COLUMNS:
            _quarter(s, *lane)
        for lane in _DIAGONALS:
            _quarter(s, *lane)
    return s


def _words(data: bytes) -> Words4:
    return struct.unpack("<4I", data)


def _check_drounds(drounds: int) -> None:
    if drounds < 0:
        raise ValueError("drounds must not be negative")


class ChaChaState:
    """Key, nonce and block position of one ChaCha stream.

    ``drounds`` arguments count double rounds: 10 for ChaCha20.
    """

    __slots__ = ("_b", "_c", "_d")

    def __init__(self, key: bytes, nonce: bytes) -> None:
        key = bytes(key)
        nonce = bytes(nonce)
        if len(key) != 32:
            raise ValueError(f"key must be 32 bytes, got {len(key)}")
        if len(nonce) < 8:
            raise ValueError(f"nonce must be at least 8 bytes, got {len(nonce)}")
        first = struct.unpack("<I", nonce[0:4])[0] if len(nonce) == 12 else 0
        tail = struct.unpack("<2I", nonce[-8:])
        self._b = _words(key[:16])
        self._c = _words(key[16:])
        self._d: Words4 = (0, first, *tail)

    @classmethod
    def _from_words(cls, b: Words4, c: Words4, d: Words4) -> "ChaChaState":
        state = cls.__new__(cls)
        state._b, state._c, state._d = tuple(b), tuple(c), tuple(d)
        return state

    @property
    def _pos(self) -> int:
        return (self._d[1] << 32) | self._d[0]

    def _d_at(self, pos: int) -> Words4:
        pos &= _M64
        return (pos & _M32, pos >> 32, self._d[2], self._d[3])

    def _block(self, drounds: int, d: Words4) -> bytes:
        initial = (*_CONSTANTS, *self._b, *self._c, *d)
        mixed = _rounds(initial, drounds)
        return struct.pack(
            "<16I", *((x + y) & _M32 for x, y in zip(mixed, initial))
        )

    def refill(self, drounds: int) -> bytes:
        """Return one 64-byte keystream block and advance the position."""
        _check_drounds(drounds)
        out = self._block(drounds, self._d)
        self._d = self._d_at(self._pos + 1)
        return out

    def refill4(self, drounds: int) -> bytes:
        """Return four keystream blocks (256 bytes) and advance the position."""
        _check_drounds(drounds)
        pos = self._pos
        out = b"".join(
            self._block(drounds, self._d_at(pos + i)) for i in range(BUFBLOCKS)
        )
        self._d = self._d_at(pos + BUFBLOCKS)
        return out

    def refill_rounds(self, drounds: int) -> tuple[Words4, Words4, Words4, Words4]:
        """Return the four rows after the rounds, without the final addition.

        The position is left unchanged.
        """
        _check_drounds(drounds)
        s = _rounds((*_CONSTANTS, *self._b, *self._c, *self._d), drounds)
        return tuple(s[0:4]), tuple(s[4:8]), tuple(s[8:12]), tuple(s[12:16])

    def seek64(self, blockct: int) -> None:
        """Set the 64-bit block counter used by the next refill."""
        if not 0 <= blockct <= _M64:
            raise ValueError("block count must fit in 64 bits")
        self._d = self._d_at(blockct)

    def seek32(self, blockct: int) -> None:
        """Set the 32-bit block counter used by the next refill."""
        if not 0 <= blockct <= _M32:
            raise ValueError("block count must fit in 32 bits")
        self._d = (blockct, *self._d[1:])

    def set_stream_param(self, param: int, value: int) -> None:
        """Set one 64-bit half of the counter/nonce row (0 is the counter half)."""
        if param not in (0, 1):
            raise ValueError("param must be 0 or 1")
        if not 0 <= value <= _M64:
            raise ValueError("value must fit in 64 bits")
        d = list(self._d)
        d[2 * param] = value & _M32
        d[2 * param + 1] = value >> 32
        self._d = tuple(d)

    def get_stream_param(self, param: int) -> int:
        """Return one 64-bit half of the counter/nonce row."""
        if param not in (0, 1):
            raise ValueError("param must be 0 or 1")
        return (self._d[2 * param + 1] << 32) | self._d[2 * param]

    def stream32_eq(self, other: "ChaChaState") -> bool:
        """Whether ``other`` is the same stream, ignoring the 32-bit position."""
        return (
            self._b == other._b
            and self._c == other._c
            and self._d[1:] == other._d[1:]
        )

    def stream64_eq(self, other: "ChaChaState") -> bool:
        """Whether ``other`` is the same stream, ignoring the 64-bit position."""
        return (
            self._b == other._b
            and self._c == other._c
            and self._d[2:] == other._d[2:]
        )

    def copy(self) -> "ChaChaState":
        """Return an independent copy of this state."""
        return self._from_words(self._b, self._c, self._d)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ChaChaState):
            return NotImplemented
        return (self._b, self._c, self._d) == (other._b, other._c, other._d)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"<ChaChaState position={self._pos}>"


def init_chacha_x(key: bytes, nonce: bytes, rounds: int) -> ChaChaState:
    """Derive the extended-nonce (XChaCha) stream state from a 24-byte nonce."""
    key = bytes(key)
    nonce = bytes(nonce)
    if len(key) != 32:
        raise ValueError(f"key must be 32 bytes, got {len(key)}")
    if len(nonce) != 24:
        raise ValueError(f"nonce must be 24 bytes, got {len(nonce)}")
    setup = ChaChaState._from_words(_words(key[:16]), _words(key[16:]), _words(nonce[:16]))
    a, _, _, d = setup.refill_rounds(rounds)
    tail = struct.unpack("<2I", nonce[16:24])
    return ChaChaState._from_words(a, d, (0, 0, *tail))