import pytest

from wsucrypt.utils import concat16, int_to_words, rotate_left, rotate_right, split16, words_to_int


@pytest.mark.parametrize(
    "value, width, left, right",
    [
        (0x8000, 16, 0x0001, 0x4000),
        (0x0001, 16, 0x0002, 0x8000),
        (0xFFFF, 16, 0xFFFF, 0xFFFF),
        (0x1234, 16, 0x2468, 0x091A),
        (0x8000000000000000, 64, 0x1, 0x4000000000000000),
        (0x0123456789ABCDEF, 64, 0x02468ACF13579BDE, 0x8091A2B3C4D5E6F7),
    ],
)
def test_rotate_one_step(value, width, left, right):
    assert rotate_left(value, 1, width) == left
    assert rotate_right(value, 1, width) == right


def test_rotations_are_inverse():
    for v in (0, 1, 0x7FFF, 0xA5A5, 0xFFFF):
        for steps in range(1, 16):
            assert rotate_right(rotate_left(v, steps, 16), steps, 16) == v


def test_rotation_stays_in_width():
    assert rotate_left(0xFFFF, 3, 16) <= 0xFFFF
    assert rotate_right(0xFFFFFFFFFFFFFFFF, 7, 64) == 0xFFFFFFFFFFFFFFFF


def test_word_helpers():
    assert concat16(0x12, 0x34) == 0x1234
    assert split16(0xABCD) == (0xAB, 0xCD)
    assert words_to_int((0x0123, 0x4567, 0x89AB, 0xCDEF)) == 0x0123456789ABCDEF
    assert int_to_words(0x0123456789ABCDEF) == (0x0123, 0x4567, 0x89AB, 0xCDEF)
