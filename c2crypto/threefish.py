"""The Threefish tweakable block cipher in its 256, 512 and 1024 bit forms."""

from __future__ import annotations

import struct
from typing import ClassVar, Sequence

__all__ = ["Threefish", "Threefish256", "Threefish512", "Threefish1024"]

_MASK = (1 << 64) - 1

# Key schedule parity constant.
_C240 = 0x1BD11BDAA9FC1A22

_R_256 = (
    (14, 16),
    (52, 57),
    (23, 40),
    (5, 37),
    (25, 33),
    (46, 12),
    (58, 22),
    (32, 32),
)

_R_512 = (
    (46, 36, 19, 37),
    (33, 27, 14, 42),
    (17, 49, 36, 39),
    (44, 9, 54, 56),
    (39, 30, 34, 24),
    (13, 50, 10, 17),
    (25, 29, 39, 43),
    (8, 35, 56, 22),
)

_R_1024 = (
    (24, 13, 8, 47, 8, 17, 22, 37),
    (38, 19, 10, 55, 49, 18, 23, 52),
    (33, 4, 51, 13, 34, 41, 59, 17),
    (5, 20, 48, 41, 47, 28, 16, 25),
    (41, 9, 37, 31, 12, 47, 44, 30),
    (16, 34, 56, 51, 4, 53, 42, 41),
    (31, 44, 47, 46, 19, 42, 44, 25),
    (9, 48, 35, 52, 23, 31, 37, 20),
)

_P_256 = (0, 3, 2, 1)
_P_512 = (6, 1, 0, 7, 2, 5, 4, 3)
_P_1024 = (0, 15, 2, 11, 6, 13, 4, 9, 14, 1, 8, 5, 10, 3, 12, 7)


def _rotl(x: int, r: int) -> int:
    return ((x << r) | (x >> (64 - r))) & _MASK


def _rotr(x: int, r: int) -> int:
    return ((x >> r) | (x << (64 - r))) & _MASK


def _mix(r: int, x0: int, x1: int) -> tuple[int, int]:
    y0 = (x0 + x1) & _MASK
    return y0, _rotl(x1, r) ^ y0


def _inv_mix(r: int, y0: int, y1: int) -> tuple[int, int]:
    x1 = _rotr(y0 ^ y1, r)
    return (y0 - x1) & _MASK, x1


def _pairs(values: Sequence[int]):
    return zip(values[0::2], values[1::2])


class Threefish:
    """Threefish block cipher keyed with a key and a 128-bit tweak.

    Subclasses fix the block size; the key is as long as one block.
    """

    rounds: ClassVar[int] = 0
    words: ClassVar[int] = 0
    rotations: ClassVar[tuple[tuple[int, ...], ...]] = ()
    permutation: ClassVar[tuple[int, ...]] = ()

    def __init__(self, key: bytes, tweak0: int = 0, tweak1: int = 0) -> None:
        if not self.words:
            raise TypeError("use one of Threefish256, Threefish512 or Threefish1024")
        key = bytes(key)
        if len(key) != self.block_size:
            raise ValueError(
                f"key must be {self.block_size} bytes, got {len(key)}"
            )
        for tweak in (tweak0, tweak1):
            if not 0 <= tweak <= _MASK:
                raise ValueError("tweak words must fit in 64 bits")

        n = self.words
        k = list(self._unpack(key))
        parity = _C240
        for word in k:
            parity ^= word
        k.append(parity)

        t = (tweak0, tweak1, tweak0 ^ tweak1)
        schedule = []
        for s in range(self.rounds // 4 + 1):
            sub = [k[(s + i) % (n + 1)] for i in range(n)]
            sub[n - 3] = (sub[n - 3] + t[s % 3]) & _MASK
            sub[n - 2] = (sub[n - 2] + t[(s + 1) % 3]) & _MASK
            sub[n - 1] = (sub[n - 1] + s) & _MASK
            schedule.append(tuple(sub))
        self._subkeys: tuple[tuple[int, ...], ...] = tuple(schedule)

    @property
    def block_size(self) -> int:
        """Block (and key) size in bytes."""
        return self.words * 8

    def _unpack(self, data: bytes) -> tuple[int, ...]:
        return struct.unpack(f"<{self.words}Q", data)

    def _pack(self, words: Sequence[int]) -> bytes:
        return struct.pack(f"<{self.words}Q", *words)

    def _check_block(self, block: bytes) -> bytes:
        block = bytes(block)
        if len(block) != self.block_size:
            raise ValueError(
                f"block must be {self.block_size} bytes, got {len(block)}"
            )
        return block

    def encrypt_block(self, block: bytes) -> bytes:
        """Encrypt one block and return the ciphertext."""
        v = list(self._unpack(self._check_block(block)))
        perm = self.permutation
        for rnd in range(self.rounds):
            if rnd % 4 == 0:
                v = [(x + k) & _MASK for x, k in zip(v, self._subkeys[rnd // 4])]
            out = [0] * self.words
            for (x0, x1), r, (p0, p1) in zip(
                _pairs(v), self.rotations[rnd % 8], _pairs(perm)
            ):
                out[p0], out[p1] = _mix(r, x0, x1)
            v = out
        final = self._subkeys[self.rounds // 4]
        return self._pack([(x + k) & _MASK for x, k in zip(v, final)])

    def decrypt_block(self, block: bytes) -> bytes:
        """Decrypt one block and return the plaintext."""
        v = self._unpack(self._check_block(block))
        final = self._subkeys[self.rounds // 4]
        v = [(x - k) & _MASK for x, k in zip(v, final)]
        perm = self.permutation
        for rnd in reversed(range(self.rounds)):
            out: list[int] = []
            for r, (p0, p1) in zip(self.rotations[rnd % 8], _pairs(perm)):
                out.extend(_inv_mix(r, v[p0], v[p1]))
            if rnd % 4 == 0:
                out = [(x - k) & _MASK for x, k in zip(out, self._subkeys[rnd // 4])]
            v = out
        return self._pack(v)


class Threefish256(Threefish):
    """Threefish with 256-bit blocks and keys, 72 rounds."""

    rounds = 72
    words = 4
    rotations = _R_256
    permutation = _P_256


class Threefish512(Threefish):
    """Threefish with 512-bit blocks and keys, 72 rounds."""

    rounds = 72
    words = 8
    rotations = _R_512
    permutation = _P_512


class Threefish1024(Threefish):
    """Threefish with 1024-bit blocks and keys, 80 rounds."""

    rounds = 80
    words = 16
    rotations = _R_1024
    permutation = _P_1024