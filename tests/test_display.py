import struct

import pytest

from umkatools.display import (
    bpp16_to_rgb888,
    bpp24_to_rgb888,
    bpp32_to_rgb888,
    to_rgb888,
)


def test_bpp32_is_a_copy():
    data = bytes(range(32))
    assert bpp32_to_rgb888(data + b"extra", 4, 2) == data


def test_bpp24_pads_fourth_byte():
    data = bytes(range(1, 19))
    out = bpp24_to_rgb888(data, 3, 2)
    assert len(out) == 24
    for channel in range(3):
        assert out[channel::4] == data[channel::3]
    assert set(out[3::4]) == {0}


def test_bpp16_red_lands_in_third_byte():
    out = bpp16_to_rgb888(struct.pack("<H", 0xF800), 1, 1, 2)
    assert out[:2] == b"\x00\x00"
    assert out[2] == 0xF8
    assert out[3] == 0


def test_bpp16_green_lands_in_second_byte():
    out = bpp16_to_rgb888(struct.pack("<H", 0x07E0), 1, 1, 2)
    assert out[1] == 0xFC
    assert out[0] == out[2] == 0


def test_bpp16_black_stays_black():
    assert bpp16_to_rgb888(bytes(8), 2, 2, 4) == bytes(16)


def test_bpp16_uses_pitch_as_row_stride():
    pixels = struct.pack("<2H", 0x001F, 0x001F)
    wide = bpp16_to_rgb888(pixels, 1, 2, 4)
    tight = bpp16_to_rgb888(pixels, 1, 2, 2)
    assert len(wide) == 16
    assert wide[0:4] == wide[8:12] == tight[0:4] == tight[4:8]
    assert wide[4:8] == bytes(4)


@pytest.mark.parametrize("bpp, pitch", [(16, 4), (24, 6), (32, 8)])
def test_dispatch_matches_direct(bpp, pitch):
    data = bytes(range(2 * 2 * (bpp // 8)))
    direct = {
        16: lambda: bpp16_to_rgb888(data, 2, 2, pitch),
        24: lambda: bpp24_to_rgb888(data, 2, 2),
        32: lambda: bpp32_to_rgb888(data, 2, 2),
    }[bpp]()
    assert to_rgb888(data, 2, 2, bpp, pitch) == direct


def test_unsupported_depth():
    with pytest.raises(ValueError):
        to_rgb888(bytes(4), 1, 1, 8, 1)


def test_short_buffer():
    with pytest.raises(ValueError):
        bpp24_to_rgb888(bytes(5), 1, 2)