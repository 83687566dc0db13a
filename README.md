# c2crypto

This package provides cryptographic primitives in pure Python. It has no third-party dependencies.

- **Threefish** block ciphers (`c2crypto.threefish`): `Threefish256`, `Threefish512` and `Threefish1024`. Each takes a key and two 64-bit tweak words.
- **Skein** hashes (`c2crypto.skein`): `Skein256`, `Skein512` and `Skein1024`. The digest size is configurable.
- **JH** hashes (`c2crypto.jh`): `Jh224`, `Jh256`, `Jh384` and `Jh512`.
- **BLAKE** hashes (`c2crypto.blake`): `Blake224`, `Blake256`, `Blake384` and `Blake512`.
- **Grøstl** hashes (`c2crypto.groestl`): `Groestl224`, `Groestl256`, `Groestl384` and `Groestl512`. The building blocks are in `c2crypto.groestl_core`:
  - `permute_p` and `permute_q` are the two permutations.
  - `compress` is the compression function.
  - `output_transform` is the output transform.
- **ChaCha** stream ciphers with seeking (`c2crypto.chacha`): `ChaCha8`, `ChaCha12`, `ChaCha20`, `Ietf` (96-bit nonce, 32-bit block counter), `XChaCha8`, `XChaCha12` and `XChaCha20`. The block function and per-stream state are in `c2crypto.chacha_core`, as `ChaChaState` and `init_chacha_x`.

The code is written for clarity, not speed.

## Installation

```
pip install c2crypto
```

## Hashing

The hash classes follow the `hashlib` style. Each one has these methods:

- `update(data)`
- `digest()`
- `hexdigest()`
- `copy()`
- `reset()`, which returns the object to its fresh state.

Calling `digest()` does not change the state, so you can keep feeding data afterwards.

```python
from c2crypto.blake import Blake256
from c2crypto.jh import Jh512
from c2crypto.groestl import Groestl256
from c2crypto.skein import Skein512

h = Blake256(b"hello ")
h.update(b"world")
print(h.hexdigest())

print(Jh512(b"data").hexdigest())
print(Groestl256(b"data").hexdigest())

# Skein takes any positive digest size in bytes.
# The default is the internal state size.
print(Skein512(b"data", digest_size=32).hexdigest())
```

## Threefish

```python
from c2crypto.threefish import Threefish256

key = bytes(range(32))
cipher = Threefish256(key, 0x0706050403020100, 0x0F0E0D0C0B0A0908)
ciphertext = cipher.encrypt_block(bytes(32))
assert cipher.decrypt_block(ciphertext) == bytes(32)
```

The key and each block must be exactly one block long. Any other length raises `ValueError`.

## ChaCha

`apply_keystream` XORs the next keystream bytes into the data and returns the result. Encryption and decryption are the same call. `seek` moves to a byte offset in the keystream.

```python
from c2crypto.chacha import ChaCha20

key = bytes(range(32))
nonce = bytes(8)

cipher = ChaCha20(key, nonce)
ciphertext = cipher.apply_keystream(b"The quick brown fox jumps over the lazy dog.")
cipher.seek(0)
plaintext = cipher.apply_keystream(ciphertext)
```

The IETF variant has a 32-bit block counter, so its keystream has an end. `KeystreamExhausted` is raised in two cases:

- a read would run past the end of the keystream;
- a seek goes beyond the end.

`KeystreamExhausted` is a subclass of `ValueError`.

## What this package does not do

This is a library only. It has no command-line tool. It does not offer:

- authenticated encryption;
- key derivation;
- constant-time guarantees.

## Running the tests

```
pip install -e ".[test]"
pytest
```