import pytest

from c2crypto.groestl import (
    GroestlHash,
    Groestl224,
    Groestl256,
    Groestl384,
    Groestl512,
)


def test_groestl256_empty_message():
    assert (
        Groestl256().hexdigest()
        == "1a52d11d550039be16107f9c58db9ebcc417f16f736adb2502567119f0083467"
    )


@pytest.mark.parametrize(
    "cls,size,block", [(Groestl224, 28, 64), (Groestl256, 32, 64), (Groestl384, 48, 128), (Groestl512, 64, 128)]
)
def test_sizes(cls, size, block):
    h = cls(b"abc")
    assert len(h.digest()) == size
    assert h.digest_size == size
    assert h.block_size == block


@pytest.mark.parametrize("length", [0, 1, 55, 56, 57, 63, 64, 65, 119, 120, 128, 130])
def test_incremental_matches_one_shot(length):
    message = bytes((i * 7 + 3) & 0xFF for i in range(length))
    for fresh in (Groestl224(), Groestl256(), Groestl384(), Groestl512()):
        whole = type(fresh)(message).digest()
        h = fresh.copy()
        for start in range(0, length, 13):
            h.update(message[start:start + 13])
        assert h.digest() == whole


def test_digest_does_not_change_state():
    hashes = (Groestl224(b"hello"), Groestl256(b"hello"), Groestl384(b"hello"), Groestl512(b"hello"))
    for h in hashes:
        first = h.digest()
        assert h.digest() == first
        h.update(b" world")
        assert h.digest() == type(h)(b"hello world").digest()


def test_copy_is_independent():
    hashes = (Groestl224(b"prefix"), Groestl256(b"prefix"), Groestl384(b"prefix"), Groestl512(b"prefix"))
    for h in hashes:
        before = h.digest()
        c = h.copy()
        c.update(b"more")
        assert h.digest() == before
        assert c.digest() == type(h)(b"prefixmore").digest()


def test_reset():
    data = b"some data"
    for h in (Groestl224(data), Groestl256(data), Groestl384(data), Groestl512(data)):
        h.reset()
        assert h.digest() == type(h)().digest()


def test_hexdigest_matches_digest():
    h = Groestl512(b"abc")
    assert h.hexdigest() == h.digest().hex()


def test_accepts_buffer_types():
    expected = Groestl256(b"buffer").digest()
    assert Groestl256(bytearray(b"buffer")).digest() == expected
    assert Groestl256(memoryview(b"buffer")).digest() == expected


def test_truncated_variants_use_own_initial_value():
    short = Groestl224(b"abc").digest()
    long = Groestl256(b"abc").digest()
    assert len(short) == 28
    assert short != long[-28:]


def test_different_messages_give_different_digests():
    assert Groestl256(b"a").digest() != Groestl256(b"b").digest()
    assert len(Groestl256(b"a").digest()) == 32


def test_base_class_refuses():
    with pytest.raises(TypeError):
        GroestlHash()