"""The Grøstl permutations P and Q, compression and output transform.

A state is a byte string holding an 8-row matrix stored column by column:
byte ``k`` sits in row ``k % 8`` of column ``k // 8``. Eight columns give
the 512-bit state used by the short variants, sixteen the 1024-bit state
used by the long ones.
"""

from __future__ import annotations

from functools import reduce
from operator import xor

__all__ = ["permute_p", "permute_q", "compress", "output_transform"]

_ROWS = 8

# Rounds per column count.
_ROUNDS = {8: 10, 16: 14}

# Left rotation of each row in ShiftBytes, keyed by (columns, is_q).
_SHIFTS = {
    (8, False): (0, 1, 2, 3, 4, 5, 6, 7),
    (8, True): (1, 3, 5, 7, 0, 2, 4, 6),
    (16, False): (0, 1, 2, 3, 4, 5, 6, 11),
    (16, True): (1, 3, 5, 11, 0, 2, 4, 6),
}

# First row of the circulant MixBytes matrix.
_CIRC = (2, 2, 3, 4, 5, 3, 5, 7)


def _gmul(a: int, b: int) -> int:
    """Multiply in GF(2^8) modulo x^8 + x^4 + x^3 + x + 1."""
    product = 0
    while b:
        if b & 1:
            product ^= a
        a <<= 1
        if a & 0x100:
            a ^= 0x11B
        b >>= 1
    return product


def _ginv(a: int) -> int:
    result = 1
    for _ in range(254):
        result = _gmul(result, a)
    return result if a else 0


def _rotl8(x: int, n: int) -> int:
    return ((x << n) | (x >> (8 - n))) & 0xFF


def _build_sbox() -> bytes:
    table = []
    for x in range(256):
        b = _ginv(x)
        table.append(b ^ _rotl8(b, 1) ^ _rotl8(b, 2) ^ _rotl8(b, 3) ^ _rotl8(b, 4) ^ 0x63)
    return bytes(table)


_SBOX = _build_sbox()

_MUL = {k: bytes(_gmul(k, x) for x in range(256)) for k in set(_CIRC)}

# For each output row, the multiplication table applied to each input row.
_MIX_ROWS = tuple(
    tuple(_MUL[_CIRC[(k - i) % _ROWS]] for k in range(_ROWS)) for i in range(_ROWS)
)


def _check(state, columns: int | None) -> bytes:
    data = memoryview(state).tobytes()
    if len(data) % _ROWS or len(data) // _ROWS not in _ROUNDS:
        raise ValueError(f"state must be 64 or 128 bytes, got {len(data)}")
    if columns is not None and len(data) != columns * _ROWS:
        if columns not in _ROUNDS:
            raise ValueError(f"columns must be 8 or 16, got {columns}")
        raise ValueError(
            f"state of {len(data)} bytes does not have {columns} columns"
        )
    return data


def _mix_column(col) -> list[int]:
    return [
        reduce(xor, (table[x] for table, x in zip(tables, col)), 0)
        for tables in _MIX_ROWS
    ]


def _permute(state, columns: int | None, q: bool) -> bytes:
    a = list(_check(state, columns))
    cols = len(a) // _ROWS
    shifts = _SHIFTS[(cols, q)]
    for rnd in range(_ROUNDS[cols]):
        # AddRoundConstant
        if q:
            a = [x ^ 0xFF for x in a]
            for j in range(cols):
                a[_ROWS * j + 7] ^= (j << 4) ^ rnd
        else:
            for j in range(cols):
                a[_ROWS * j] ^= (j << 4) ^ rnd
        # SubBytes and ShiftBytes
        shifted = [
            _SBOX[a[_ROWS * ((j + shift) % cols) + row]]
            for j in range(cols)
            for row, shift in enumerate(shifts)
        ]
        # MixBytes
        a = [
            byte
            for start in range(0, len(shifted), _ROWS)
            for byte in _mix_column(shifted[start:start + _ROWS])
        ]
    return bytes(a)


def _xor_bytes(*parts: bytes) -> bytes:
    size = len(parts[0])
    value = reduce(xor, (int.from_bytes(p, "big") for p in parts), 0)
    return value.to_bytes(size, "big")


def permute_p(state, columns: int | None = None) -> bytes:
    """Apply the permutation P to a 64- or 128-byte state."""
    return _permute(state, columns, q=False)


def permute_q(state, columns: int | None = None) -> bytes:
    """Apply the permutation Q to a 64- or 128-byte state."""
    return _permute(state, columns, q=True)


def compress(cv, block) -> bytes:
    """Return the chaining value after absorbing one message block.

    Computes ``P(cv ^ block) ^ Q(block) ^ cv``.
    """
    h = _check(cv, None)
    m = _check(block, None)
    if len(h) != len(m):
        raise ValueError("chaining value and block must have the same size")
    return _xor_bytes(permute_p(_xor_bytes(h, m)), permute_q(m), h)


def output_transform(cv) -> bytes:
    """Return ``P(cv) ^ cv``; the digest is the tail of this value."""
    h = _check(cv, None)
    return _xor_bytes(permute_p(h), h)