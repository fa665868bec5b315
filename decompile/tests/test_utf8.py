import pytest

from decompile.utf8 import is_continuation, lead_length, probe


def test_probe_euro_sign():
    assert probe(b"\xe2\x82\xac", 0) == 3


def test_probe_truncated_sequence():
    assert probe(b"\xe2\x82", 0) == 0


def test_probe_ascii():
    for c in range(0x80):
        assert probe(bytes((c,)), 0) == 1


def test_probe_offset():
    assert probe(b"ab\xc3\xa9", 2) == 2
    assert probe(b"ab\xc3\xa9", 3) == 0


@pytest.mark.parametrize(
    "lead,length",
    [
        (0x7F, 1),
        (0x80, 0),
        (0xBF, 0),
        (0xC0, 2),
        (0xDF, 2),
        (0xE0, 3),
        (0xEF, 3),
        (0xF0, 4),
        (0xF7, 4),
        (0xF8, 5),
        (0xFB, 5),
        (0xFC, 6),
        (0xFD, 6),
        (0xFE, 0),
        (0xFF, 0),
    ],
)
def test_lead_length_boundaries(lead, length):
    assert lead_length(lead) == length


def test_lone_continuation_bytes_rejected():
    for c in range(0x80, 0xC0):
        assert probe(bytes((c, 0x80)), 0) == 0


def test_probe_bad_continuation():
    assert probe(b"\xe2\x41\xac", 0) == 0
    assert probe(b"\xe2\x82\xc0", 0) == 0


def test_probe_long_forms():
    assert probe(b"\xf8\x80\x80\x80\x80", 0) == 5
    assert probe(b"\xfc\x80\x80\x80\x80\x80", 0) == 6
    assert probe(b"\xfc\x80\x80\x80\x80", 0) == 0


def test_lead_length_masks_to_byte():
    assert lead_length(0x1E2) == 3


def test_is_continuation():
    assert is_continuation(0x80)
    assert is_continuation(0xBF)
    assert not is_continuation(0x7F)
    assert not is_continuation(0xC0)
