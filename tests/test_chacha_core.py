import pytest

from c2crypto.chacha_core import ChaChaState, init_chacha_x

KEY_A = bytes.fromhex("fa44478c59ca70538e3549096ce8b523232c50d9e8e8d10c203ef6c8d07098a5")
RFC_KEY = bytes(range(32))
RFC_NONCE = bytes.fromhex("000000090000004a00000000")
RFC_BLOCK1 = bytes.fromhex(
    "10f1e7e4d13b5915500fdd1fa32071c4c7d1f4c733c068030422aa9ac3d46c4e"
    "d2826446079faa0914c2d705d98b02a2b5129cd1de164eb9cbd083e8a2503c4e"
)


def test_stream_eq():
    nonce = bytes.fromhex("8d3a0d6d7827c00701020304")
    a = ChaChaState(KEY_A, nonce)
    b = a.copy()
    assert a == b
    assert a.stream32_eq(b)
    assert a.stream64_eq(b)
    a.refill(0)
    assert a != b
    assert a.stream32_eq(b)
    assert a.stream64_eq(b)


def test_rfc7539_second_block():
    state = ChaChaState(RFC_KEY, RFC_NONCE)
    state.refill(10)
    assert state.refill(10) == RFC_BLOCK1


def test_rfc7539_seek32():
    state = ChaChaState(RFC_KEY, RFC_NONCE)
    state.seek32(1)
    assert state.refill(10) == RFC_BLOCK1


def test_chacha20_counter_crosses_32_bits():
    expected = bytes.fromhex(
        "1546a547ff77c5c964e44fd039e913c6395c8f19d43efaa880750f6687b4e6e2d8f42f63546da2d133b5aa2f1ef3f218b6c72943089e4012"
        "210c2cbed0e8e93498a6825fc8ff7a504f26db33b6cbe36299436244c9b2eff88302c55933911b7d5dea75f2b6d4761ba44bb6f814c9879d"
        "2ba2ac8b178fa1104a368694872339738ffb960e33db39efb8eaef885b910eea078e7a1feb3f8185dafd1455b704d76da3a0ce4760741841"
        "217bba1e4ece760eaf68617133431feb806c061173af6b8b2a23be90c5d145cc258e3c119aab2800f0c7bc1959dae75481712cab731b7dfd"
        "783fa3a228f9968aaea68f36a92f43c9b523337a55b97bcaf5f5774447bf41e8"
    )
    offset = 0x3FFFFFFF70
    state = ChaChaState(KEY_A, bytes.fromhex("8d3a0d6d7827c007"))
    state.seek64(offset // 64)
    stream = state.refill4(10) + state.refill4(10)
    start = offset % 64
    assert stream[start:start + 256] == expected


def test_chacha12_first_bytes():
    key = bytes.fromhex("27fc120b013b829f1faeefd1ab417e8662f43e0d73f98de866e346353180fdb7")
    state = ChaChaState(key, bytes.fromhex("db4b4a41d8df18aa"))
    expected = bytes.fromhex(
        "5f3c8c190a78ab7fe808cae9cbcb0a9837c893492d963a1c2eda6c1558b02c83fc02a44cbbb7e6204d51d1c2430e9c0b58f2937bf593840c"
        "850bda9051a1f051ddf09d2a03ebf09f01bdba9da0b6da791b2e645641047d11ebf85087d4de5c015fddd044"
    )
    assert (state.refill(6) + state.refill(6))[:100] == expected


def test_chacha8_first_bytes():
    key = bytes.fromhex("641aeaeb08036b617a42cf14e8c5d2d115f8d7cb6ea5e28b9bfaf83e038426a7")
    state = ChaChaState(key, bytes.fromhex("a14a1168271d459b"))
    expected = bytes.fromhex(
        "1721c044a8a6453522dddb3143d0be3512633ca3c79bf8ccc3594cb2c2f310f7bd544f55ce0db38123412d6c45207d5cf9af0c6c680cce1f"
        "7e43388d1b0346b7133c59fd6af4a5a568aa334ccdc38af5ace201df84d0a3ca225494ca6209345fcf30132e"
    )
    assert (state.refill(4) + state.refill(4))[:100] == expected


def test_xchacha20_first_bytes():
    key = bytes.fromhex("82f411a074f656c66e7dbddb0a2c1b22760b9b2105f4ffdbb1d4b1e824e21def")
    nonce = bytes.fromhex("3b07ca6e729eb44a510b7a1be51847838a804f8b106b38bd")
    state = init_chacha_x(key, nonce, 10)
    expected = bytes.fromhex(
        "201863970b8e081f4122addfdf32f6c03e48d9bc4e34a59654f49248b9be59d3eaa106ac3376e7e7d9d1251f2cbf61ef27000f3d19afb76b"
        "9c247151e7bc26467583f520518eccd2055ccd6cc8a195953d82a10c2065916778db35da2be44415d2f5efb0"
    )
    assert (state.refill(10) + state.refill(10))[:100] == expected


def test_refill4_matches_four_refills():
    wide = ChaChaState(KEY_A, bytes(8))
    narrow = wide.copy()
    out = wide.refill4(10)
    assert out == b"".join(narrow.refill(10) for _ in range(4))
    assert wide == narrow


def test_refill_advances_counter():
    state = ChaChaState(KEY_A, bytes(8))
    state.seek64(41)
    state.refill(10)
    assert state.get_stream_param(0) == 42


def test_refill_rounds_leaves_position():
    state = ChaChaState(KEY_A, bytes(8))
    before = state.copy()
    rows = state.refill_rounds(10)
    assert len(rows) == 4 and all(len(r) == 4 for r in rows)
    assert state == before


def test_stream_param_round_trip():
    state = ChaChaState(KEY_A, bytes(8))
    state.set_stream_param(1, 0x0123456789ABCDEF)
    state.set_stream_param(0, 7)
    assert state.get_stream_param(1) == 0x0123456789ABCDEF
    assert state.get_stream_param(0) == 7


def test_ietf_nonce_layout():
    state = ChaChaState(RFC_KEY, RFC_NONCE)
    assert state.get_stream_param(0) == 0x09000000 << 32
    state.seek32(5)
    assert state.get_stream_param(0) == (0x09000000 << 32) | 5


def test_stream64_eq_detects_other_nonce():
    a = ChaChaState(KEY_A, bytes(8))
    b = ChaChaState(KEY_A, bytes(7) + b"\x01")
    assert not a.stream64_eq(b)
    assert not a.stream32_eq(b)


def test_seek64_counter_wraps():
    state = ChaChaState(KEY_A, bytes(8))
    state.seek64((1 << 64) - 1)
    state.refill(1)
    assert state.get_stream_param(0) == 0


@pytest.mark.parametrize("key,nonce", [(bytes(31), bytes(8)), (bytes(32), bytes(7))])
def test_bad_sizes(key, nonce):
    with pytest.raises(ValueError):
        ChaChaState(key, nonce)


def test_bad_seek_and_param():
    state = ChaChaState(KEY_A, bytes(8))
    with pytest.raises(ValueError):
        state.seek32(1 << 32)
    with pytest.raises(ValueError):
        state.get_stream_param(2)


def test_xchacha_bad_nonce():
    with pytest.raises(ValueError):
        init_chacha_x(bytes(32), bytes(12), 10)