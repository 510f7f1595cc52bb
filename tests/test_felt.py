import pytest

from fringe_core.errors import InvalidFieldElement
from fringe_core.felt import B64, B64D, FELT_BYTES, STARK_PRIME, Felt


def test_bytes_roundtrip_is_fixed_width_big_endian():
    f = Felt(0x0102)
    data = f.to_bytes_be()
    assert len(data) == FELT_BYTES
    assert data[-2:] == b"\x01\x02"
    assert data[:-2] == b"\x00" * 30
    assert Felt.from_bytes_be(data) == f


def test_from_bytes_rejects_wrong_length_and_noncanonical():
    with pytest.raises(InvalidFieldElement):
        Felt.from_bytes_be(b"\x01" * 31)
    with pytest.raises(InvalidFieldElement):
        Felt.from_bytes_be(STARK_PRIME.to_bytes(32, "big"))
    assert Felt.from_bytes_be((STARK_PRIME - 1).to_bytes(32, "big")).value == STARK_PRIME - 1


def test_range_and_type_checks():
    for bad in (-1, STARK_PRIME, True, "1", 1.0):
        with pytest.raises(InvalidFieldElement):
            Felt(bad)


def test_hex_and_parse():
    f = Felt(255)
    assert f.to_hex() == "0x" + "00" * 31 + "ff"
    assert Felt.from_hex("0xff") == f
    assert Felt.from_hex("FF") == f
    assert Felt.parse(" 255 ") == f
    assert Felt.parse("0xFF") == f
    for bad in ("", "0x", "-3", "12a", "0xzz", "0x" + "1" * 65):
        with pytest.raises(InvalidFieldElement):
            Felt.parse(bad)


def test_felt_is_hashable_value_type():
    assert {Felt(1), Felt(1), Felt(2)} == {Felt(1), Felt(2)}
    assert int(Felt(7)) == 7


def test_b64_strict():
    assert B64D(B64(b"abc")) == b"abc"
    with pytest.raises(ValueError):
        B64D("not base64!")


@pytest.mark.parametrize("text", ["0x1_0", "1_0", "+5", "0x 10", "\u0661\u0662", "\u00b2"])
def test_parse_accepts_only_ascii_digits(text):
    with pytest.raises(InvalidFieldElement):
        Felt.parse(text)


@pytest.mark.parametrize("text", ["0x1_0", " 0x10", "0x 10", "12\n", "\u0661\u0662", "+5"])
def test_from_hex_is_strict(text):
    with pytest.raises(InvalidFieldElement):
        Felt.from_hex(text)
