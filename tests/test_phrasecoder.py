import pytest

from qrbyte import galois
from qrbyte import phrasecoder
from qrbyte import qrtables
from qrbyte.qrtables import CapacityError


def test_count_width():
    assert phrasecoder.encode(version=1).size_bits == 8
    assert phrasecoder.encode(version=9).size_bits == 8
    assert phrasecoder.encode(version=10).size_bits == 16
    assert phrasecoder.encode(version=40).size_bits == 16


def test_invalid_version():
    with pytest.raises(ValueError):
        phrasecoder.encode(version=41)


def test_encode_hello():
    pc = phrasecoder.encode(version=1)
    ph = pc.encode_phrase(b"HELLO",16)

    assert list(ph) == [0x40,0x54,0x84,0x54,0xc4,0xc4,0xf0,
                        0xec,0x11,0xec,0x11,0xec,0x11,0xec,0x11,0xec]


def test_encode_sixteen_bit_count():
    pc = phrasecoder.encode(version=10)
    ph = pc.encode_phrase(b"A",216)

    assert list(ph[0:4]) == [0x40,0x00,0x14,0x10]
    assert list(ph[4:6]) == [0xec,0x11]
    assert len(ph) == 216


def test_encode_full_version_has_no_padding():
    pc = phrasecoder.encode(version=1)
    ph = pc.encode_phrase(b"\xff" * 14,16)

    assert len(ph) == 16
    # last nibble is the terminator
    assert ph[-1] == 0xf0
    assert 0xec not in ph


def test_encode_empty():
    pc = phrasecoder.encode(version=1)
    ph = pc.encode_phrase(b"",16)

    assert list(ph[0:2]) == [0x40,0x00]
    assert list(ph[2:4]) == [0xec,0x11]


def test_encode_too_long():
    pc = phrasecoder.encode(version=1)

    with pytest.raises(CapacityError):
        pc.encode_phrase(b"x" * 15,16)


def test_string_is_utf8():
    pc = phrasecoder.encode(version=1)

    assert pc.encode_phrase("pé",16) == pc.encode_phrase("pé".encode("UTF-8"),16)
    assert pc.encode_phrase(bytearray(b"ab"),16) == pc.encode_phrase(b"ab",16)


def test_bad_phrase_type():
    with pytest.raises(TypeError):
        phrasecoder.to_bytes(12345)


def test_split_blocks_short_first():
    vi = qrtables.get_version_info(13)
    data = bytes(n % 256 for n in range(vi.get_data_codewords()))
    cwds = phrasecoder.split_blocks(data,vi)

    assert [len(blk) for blk in cwds] == [37] * 8 + [38]
    assert b"".join(cwds) == data


def test_interleave():
    cwds = [bytearray([1,2]),bytearray([3,4,5])]
    ewds = [bytearray([6,7]),bytearray([8,9])]

    assert list(phrasecoder.interleave(cwds,ewds)) == [1,3,2,4,5,6,8,7,9]


def test_build_codewords_single_block():
    res = phrasecoder.build_codewords(b"HELLO",1)
    data = phrasecoder.encode(version=1).encode_phrase(b"HELLO",16)

    assert len(res) == 26
    assert res[0:16] == data
    assert res[16:] == galois.rs_encode(data,10)


def test_build_codewords_multiple_blocks():
    payload = bytes(range(100))
    res = phrasecoder.build_codewords(payload,6)
    vi = qrtables.get_version_info(6)
    data = phrasecoder.encode(version=6).encode_phrase(payload,vi.get_data_codewords())

    # 4 blocks of 27 data codewords
    assert len(res) == vi.total_codewords
    assert list(res[0:4]) == [data[0],data[27],data[54],data[81]]
    assert res[4] == data[1]

    ecc = galois.rs_encode(data[27:54],16)
    assert res[108 + 1] == ecc[0]
    assert res[108 + 5] == ecc[1]


@pytest.mark.parametrize("version", [1,2,7,10,13,27,40])
def test_build_codewords_length(version):
    payload = b"z" * qrtables.capacity_tab_[version]
    res = phrasecoder.build_codewords(payload,version)

    assert len(res) == qrtables.total_codewords_tab_[version]


def test_build_codewords_deterministic():
    assert phrasecoder.build_codewords(b"same",3) == phrasecoder.build_codewords(b"same",3)
