"""The Grøstl hash function in its 224, 256, 384 and 512 bit forms."""

from __future__ import annotations

import copy
from typing import ClassVar

from c2crypto.groestl_core import compress, output_transform

__all__ = ["GroestlHash", "Groestl224", "Groestl256", "Groestl384", "Groestl512"]

_LENGTH_FIELD = 8


class GroestlHash:
    """Grøstl hash; subclasses fix the output length and the state size."""

    digest_size: ClassVar[int] = 0
    block_size: ClassVar[int] = 0
    name: ClassVar[str] = "groestl"

    def __init__(self, data=b"") -> None:
        if not self.digest_size:
            raise TypeError(
                "use one of Groestl224, Groestl256, Groestl384 or Groestl512"
            )
        self.reset()
        self.update(data)

    def reset(self) -> None:
        """Return to the state of a fresh hash."""
        # The initial value holds the output length in bits, big-endian, at the end.
        bits = (self.digest_size * 8).to_bytes(_LENGTH_FIELD, "big")
        self._cv = bytes(self.block_size - _LENGTH_FIELD) + bits
        self._buffer = b""
        self._blocks = 0

    def update(self, data) -> None:
        """Feed more message bytes."""
        buf = self._buffer + memoryview(data).tobytes()
        blk = self.block_size
        full = len(buf) - len(buf) % blk
        cv = self._cv
        for start in range(0, full, blk):
            cv = compress(cv, buf[start:start + blk])
        self._cv = cv
        self._blocks += full // blk
        self._buffer = buf[full:]

    def digest(self) -> bytes:
        """Return the digest of everything fed so far, leaving the state intact."""
        blk = self.block_size
        tail = self._buffer
        remaining = blk - len(tail)
        count = self._blocks + 1 + (1 if remaining <= _LENGTH_FIELD else 0)
        padded = tail + b"\x80"
        zeros = (blk - _LENGTH_FIELD - len(padded)) % blk
        padded += bytes(zeros) + (count & ((1 << 64) - 1)).to_bytes(_LENGTH_FIELD, "big")
        cv = self._cv
        for start in range(0, len(padded), blk):
            cv = compress(cv, padded[start:start + blk])
        return output_transform(cv)[-self.digest_size:]

    def hexdigest(self) -> str:
        """Return the digest as a string of hex digits."""
        return self.digest().hex()

    def copy(self) -> "GroestlHash":
        """Return an independent copy of this hash state."""
        return copy.copy(self)

    def __repr__(self) -> str:
        return f"<{type(self).__name__}>"


class Groestl224(GroestlHash):
    """Grøstl with a 512-bit state and a 224-bit digest."""

    digest_size = 28
    block_size = 64
    name = "groestl224"


class Groestl256(GroestlHash):
    """Grøstl with a 512-bit state and a 256-bit digest."""

    digest_size = 32
    block_size = 64
    name = "groestl256"


class Groestl384(GroestlHash):
    """Grøstl with a 1024-bit state and a 384-bit digest."""

    digest_size = 48
    block_size = 128
    name = "groestl384"


class Groestl512(GroestlHash):
    """Grøstl with a 1024-bit state and a 512-bit digest."""

    digest_size = 64
    block_size = 128
    name = "groestl512"