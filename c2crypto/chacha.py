"""ChaCha stream ciphers: the original, IETF and extended-nonce variants."""

from __future__ import annotations

from typing import ClassVar

from c2crypto.chacha_core import BLOCK, BUFSZ, ChaChaState, init_chacha_x

__all__ = [
    "KeystreamExhausted",
    "ChaChaCipher",
    "ChaCha8",
    "ChaCha12",
    "ChaCha20",
    "Ietf",
    "XChaCha8",
    "XChaCha12",
    "XChaCha20",
]

_M64 = (1 << 64) - 1
_BIG_LEN = 0
_SMALL_LEN = 1 << 32
_KEY_SIZE = 32


class KeystreamExhausted(ValueError):
    """Raised when a request would run past the end of the keystream."""


def _xor(data: bytes, stream: bytes) -> bytes:
    n = len(data)
    if not n:
        return b""
    mixed = int.from_bytes(data, "little") ^ int.from_bytes(stream[:n], "little")
    return mixed.to_bytes(n, "little")


class ChaChaCipher:
    """A seekable ChaCha keystream; subclasses fix the nonce size and rounds.

    Encryption and decryption are the same operation: ``apply_keystream``.
    """

    nonce_size: ClassVar[int] = 0
    double_rounds: ClassVar[int] = 0
    extended: ClassVar[bool] = False
    key_size: ClassVar[int] = _KEY_SIZE

    def __init__(self, key, nonce) -> None:
        if not self.double_rounds:
            raise TypeError("use one of the concrete ChaCha cipher classes")
        key = memoryview(key).tobytes()
        nonce = memoryview(nonce).tobytes()
        if len(key) != _KEY_SIZE:
            raise ValueError(f"key must be {_KEY_SIZE} bytes, got {len(key)}")
        if len(nonce) != self.nonce_size:
            raise ValueError(
                f"nonce must be {self.nonce_size} bytes, got {len(nonce)}"
            )
        if self.extended:
            self._state = init_chacha_x(key, nonce, self.double_rounds)
            self._len = _BIG_LEN
            self._fresh = True
        else:
            self._state = ChaChaState(key, nonce)
            small = self.nonce_size == 12
            self._len = _SMALL_LEN if small else _BIG_LEN
            self._fresh = not small
        self._out = bytes(BLOCK)
        self._have = 0

    @property
    def _small_counter(self) -> bool:
        return self.nonce_size == 12

    def _apply(self, data, wide: bool) -> bytes:
        data = memoryview(data).tobytes()
        drounds = self.double_rounds

        # After a seek into the middle of a block, fetch that block first.
        if self._have < 0:
            self._out = self._state.refill(drounds)
            self._have += BLOCK
            self._len = (self._len - 1) & _M64

        have = self._have
        ready = min(have, len(data))
        datalen = len(data) - ready
        blocks_needed = -(-datalen // BLOCK)
        remaining = self._len - blocks_needed
        if remaining < 0 and not self._fresh:
            raise KeystreamExhausted("keystream position would wrap the block counter")
        self._len = remaining & _M64
        self._fresh = self._fresh and blocks_needed == 0

        pieces = [self._out[BLOCK - have:BLOCK - have + ready]]
        have -= ready
        rest = datalen

        if wide:
            wide_len = rest - rest % BUFSZ
            for _ in range(wide_len // BUFSZ):
                pieces.append(self._state.refill4(drounds))
            rest -= wide_len

        while rest:
            self._out = self._state.refill(drounds)
            take = min(rest, BLOCK)
            pieces.append(self._out[:take])
            have = BLOCK - take
            rest -= take

        self._have = have
        return _xor(data, b"".join(pieces))

    def apply_keystream(self, data) -> bytes:
        """XOR ``data`` with the next bytes of keystream and return the result."""
        return self._apply(data, wide=True)

    def apply_keystream_narrow(self, data) -> bytes:
        """Like ``apply_keystream`` but producing keystream one block at a time."""
        return self._apply(data, wide=False)

    def seek(self, pos: int) -> None:
        """Move to byte offset ``pos`` in the keystream."""
        if not isinstance(pos, int) or pos < 0:
            raise ValueError("position must be a non-negative integer")
        if pos > _M64:
            raise KeystreamExhausted("position does not fit in 64 bits")
        blockct, offset = divmod(pos, BLOCK)
        if self._small_counter:
            if not (blockct < _SMALL_LEN or (blockct == _SMALL_LEN and offset == 0)):
                raise KeystreamExhausted("position is past the end of the keystream")
            self._len = _SMALL_LEN - blockct
            self._have = -offset
            self._state.seek32(blockct & 0xFFFFFFFF)
        else:
            self._len = (_BIG_LEN - blockct) & _M64
            self._fresh = blockct == 0
            self._have = -offset
            self._state.seek64(blockct)

    def __repr__(self) -> str:
        return f"<{type(self).__name__}>"


class Ietf(ChaChaCipher):
    """ChaCha20 with a 96-bit nonce and 32-bit block counter (RFC 7539)."""

    nonce_size = 12
    double_rounds = 10


class ChaCha8(ChaChaCipher):
    """ChaCha with 8 rounds and a 64-bit nonce."""

    nonce_size = 8
    double_rounds = 4


class ChaCha12(ChaChaCipher):
    """ChaCha with 12 rounds and a 64-bit nonce."""

    nonce_size = 8
    double_rounds = 6


class ChaCha20(ChaChaCipher):
    """ChaCha with 20 rounds and a 64-bit nonce."""

    nonce_size = 8
    double_rounds = 10


class XChaCha8(ChaChaCipher):
    """Extended-nonce ChaCha with 8 rounds and a 64-bit block counter."""

    nonce_size = 24
    double_rounds = 4
    extended = True


class XChaCha12(ChaChaCipher):
    """Extended-nonce ChaCha with 12 rounds and a 64-bit block counter."""

    nonce_size = 24
    double_rounds = 6
    extended = True


class XChaCha20(ChaChaCipher):
    """Extended-nonce ChaCha with 20 rounds and a 64-bit block counter."""

    nonce_size = 24
    double_rounds = 10
    extended = True