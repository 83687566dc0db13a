"""The Skein hash function built on the Threefish block cipher."""

from __future__ import annotations

import copy
from typing import ClassVar

from c2crypto.threefish import Threefish, Threefish256, Threefish512, Threefish1024

__all__ = ["SkeinHash", "Skein256", "Skein512", "Skein1024"]

_VERSION = 1
_ID_STRING_LE = 0x33414853
_SCHEMA_VER = (_VERSION << 32) | _ID_STRING_LE
_CFG_TREE_INFO_SEQUENTIAL = 0
_T1_FLAG_FIRST = 1 << 62
_T1_FLAG_FINAL = 1 << 63
_T1_BLK_TYPE_CFG = 4 << 56
_T1_BLK_TYPE_MSG = 48 << 56
_T1_BLK_TYPE_OUT = 63 << 56
_CFG_STR_LEN = 4 * 8


def _as_bytes(data) -> bytes:
    return memoryview(data).tobytes()


class SkeinHash:
    """Skein hash with a chosen output length in bytes.

    Subclasses fix the internal state size; ``digest_size`` defaults to it.
    """

    cipher: ClassVar[type[Threefish]]
    state_size: ClassVar[int] = 0
    name: ClassVar[str] = "skein"

    def __init__(self, data=b"", digest_size: int | None = None) -> None:
        if not self.state_size:
            raise TypeError("use one of Skein256, Skein512 or Skein1024")
        if digest_size is None:
            digest_size = self.state_size
        if not isinstance(digest_size, int) or digest_size <= 0:
            raise ValueError("digest_size must be a positive integer")
        self.digest_size = digest_size
        self.reset()
        self.update(data)

    @property
    def block_size(self) -> int:
        """Size in bytes of the blocks the message is cut into."""
        return self.state_size

    def _process(self, x: bytes, t0: int, t1: int, block: bytes, add: int) -> tuple[bytes, int, int]:
        t0 += add
        encrypted = self.cipher(x, t0, t1).encrypt_block(block)
        mixed = int.from_bytes(encrypted, "little") ^ int.from_bytes(block, "little")
        return mixed.to_bytes(self.state_size, "little"), t0, t1 & ~_T1_FLAG_FIRST

    def reset(self) -> None:
        """Return to the state of a fresh hash with the same output length."""
        n = self.state_size
        cfg = (
            _SCHEMA_VER.to_bytes(8, "little")
            + (self.digest_size * 8).to_bytes(8, "little")
            + _CFG_TREE_INFO_SEQUENTIAL.to_bytes(8, "little")
        ).ljust(n, b"\0")
        x, _, _ = self._process(
            bytes(n),
            0,
            _T1_FLAG_FIRST | _T1_BLK_TYPE_CFG | _T1_FLAG_FINAL,
            cfg,
            _CFG_STR_LEN,
        )
        self._x = x
        self._t0 = 0
        self._t1 = _T1_FLAG_FIRST | _T1_BLK_TYPE_MSG
        self._buffer = b""

    def update(self, data) -> None:
        """Feed more message bytes."""
        buf = self._buffer + _as_bytes(data)
        n = self.state_size
        # The last full block is held back: it may turn out to be the final one.
        full = max(0, (len(buf) - 1) // n) * n
        x, t0, t1 = self._x, self._t0, self._t1
        for start in range(0, full, n):
            x, t0, t1 = self._process(x, t0, t1, buf[start:start + n], n)
        self._x, self._t0, self._t1 = x, t0, t1
        self._buffer = buf[full:]

    def digest(self) -> bytes:
        """Return the digest of everything fed so far, leaving the state intact."""
        n = self.state_size
        pos = len(self._buffer)
        x, _, _ = self._process(
            self._x,
            self._t0,
            self._t1 | _T1_FLAG_FINAL,
            self._buffer.ljust(n, b"\0"),
            pos,
        )
        chunks = []
        for counter, start in enumerate(range(0, self.digest_size, n)):
            block = counter.to_bytes(8, "little").ljust(n, b"\0")
            out, _, _ = self._process(
                x, 0, _T1_FLAG_FIRST | _T1_BLK_TYPE_OUT | _T1_FLAG_FINAL, block, 8
            )
            chunks.append(out[: min(n, self.digest_size - start)])
        return b"".join(chunks)

    def hexdigest(self) -> str:
        """Return the digest as a string of hex digits."""
        return self.digest().hex()

    def copy(self) -> "SkeinHash":
        """Return an independent copy of this hash state."""
        return copy.copy(self)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} digest_size={self.digest_size}>"


class Skein256(SkeinHash):
    """Skein with a 256-bit internal state."""

    cipher = Threefish256
    state_size = 32
    name = "skein256"


class Skein512(SkeinHash):
    """Skein with a 512-bit internal state."""

    cipher = Threefish512
    state_size = 64
    name = "skein512"


class Skein1024(SkeinHash):
    """Skein with a 1024-bit internal state."""

    cipher = Threefish1024
    state_size = 128
    name = "skein1024"