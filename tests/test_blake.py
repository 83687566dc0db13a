import pytest

from c2crypto.blake import BlakeHash, Blake224, Blake256, Blake384, Blake512


def test_blake256_one_zero_byte():
    assert Blake256(b"\x00").hexdigest() == (
        "0ce8d4ef4dd7cd8d62dfded9d4edb0a774ae6a41929a74da23109e8f11139c87"
    )


def test_blake256_72_zero_bytes():
    assert Blake256(bytes(72)).hexdigest() == (
        "d419bad32d504fb7d44d460c42c5593fe544fa4c135dec31e21bd9abdcc22d41"
    )


def test_blake512_one_zero_byte():
    assert Blake512(b"\x00").hexdigest() == (
        "97961587f6d970faba6d2478045de6d1fabd09b61ae50932054d52bc29d31be4"
        "ff9102b9f69e2bbdb83be13d4b9c06091e5fa0b48bd081b634058be0ec49beb3"
    )


def test_blake512_144_zero_bytes():
    assert Blake512(bytes(144)).hexdigest() == (
        "313717d608e9cf758dcb1eb0f0c3cf9fc150b2d500fb33f51c52afc99d358a2f"
        "1374b8a38bba7974e7f6ef79cab16f22ce1e649d6e01ad9589c213045d545dde"
    )


def test_blake224_one_zero_byte():
    assert Blake224(b"\x00").hexdigest() == (
        "4504cb0314fb2a4f7a692e696e487912fe3f2468fe312c73a5278ec5"
    )


def test_blake384_one_zero_byte():
    assert Blake384(b"\x00").hexdigest() == (
        "10281f67e135e90ae8e882251a355510a719367ad70227b1"
        "37343e1bc122015c29391e8545b5272d13a7c2879da3d807"
    )


def test_digest_length():
    cases = (
        (Blake224(b"abc"), 28),
        (Blake256(b"abc"), 32),
        (Blake384(b"abc"), 48),
        (Blake512(b"abc"), 64),
    )
    for h, size in cases:
        assert len(h.digest()) == size
        assert h.digest_size == size


@pytest.mark.parametrize("length", [0, 1, 54, 55, 56, 63, 64, 65, 111, 112, 127, 128, 129, 200])
def test_bytewise_update_matches_one_shot(length):
    message = bytes(range(256))[:length]
    for fresh in (Blake224(), Blake256(), Blake384(), Blake512()):
        h = fresh.copy()
        for i in range(length):
            h.update(message[i:i + 1])
        assert h.digest() == type(fresh)(message).digest()


def test_distinct_lengths_give_distinct_digests():
    for fresh in (Blake224(), Blake256(), Blake384(), Blake512()):
        digests = set()
        for n in range(0, 260):
            h = fresh.copy()
            h.update(bytes(n))
            digests.add(h.digest())
        assert len(digests) == 260


def test_digest_does_not_change_state():
    for h in (Blake224(b"hello"), Blake256(b"hello"), Blake384(b"hello"), Blake512(b"hello")):
        first = h.digest()
        assert h.digest() == first
        h.update(b" world")
        assert h.digest() == type(h)(b"hello world").digest()


def test_copy_is_independent():
    for h in (Blake224(b"prefix"), Blake256(b"prefix"), Blake384(b"prefix"), Blake512(b"prefix")):
        before = h.digest()
        other = h.copy()
        other.update(b"suffix")
        assert h.digest() == before
        assert other.digest() == type(h)(b"prefixsuffix").digest()


def test_reset_returns_to_fresh_state():
    data = bytes(300)
    for h in (Blake224(data), Blake256(data), Blake384(data), Blake512(data)):
        h.reset()
        assert h.digest() == type(h)().digest()


def test_hexdigest_matches_digest():
    for h in (Blake224(b"data"), Blake256(b"data"), Blake384(b"data"), Blake512(b"data")):
        assert h.hexdigest() == h.digest().hex()


def test_accepts_bytearray_and_memoryview():
    expected = Blake256(b"xyz").digest()
    assert Blake256(bytearray(b"xyz")).digest() == expected
    assert Blake256(memoryview(b"xyz")).digest() == expected


def test_variants_differ_on_same_input():
    assert Blake224(b"abc").digest() != Blake256(b"abc").digest()[:28]
    assert Blake384(b"abc").digest() != Blake512(b"abc").digest()[:48]


def test_block_sizes():
    assert Blake256().block_size == 64
    assert Blake512().block_size == 128


def test_base_class_cannot_be_used():
    with pytest.raises(TypeError):
        BlakeHash()


def test_str_input_rejected():
    with pytest.raises(TypeError):
        Blake256("text")