# Lead byte ranges of a UTF-8 style sequence, including the obsolete
# 5 and 6 byte forms.
_LEAD_LENGTHS = (
    (0xC0, 0xE0, 2),
    (0xE0, 0xF0, 3),
    (0xF0, 0xF8, 4),
    (0xF8, 0xFC, 5),
    (0xFC, 0xFE, 6),
)


def lead_length(c: int) -> int:
    """Expected sequence length for lead byte `c`, 0 if it cannot start one."""
    c &= 0xFF
    if c < 0x80:
        return 1
    for low, high, length in _LEAD_LENGTHS:
        if low <= c < high:
            return length
    return 0


def is_continuation(c: int) -> bool:
    return (c & 0xC0) == 0x80


def probe(buff: bytes, start: int) -> int:
    """Length of the multi-byte text sequence starting at `start`.

    Returns 0 when the byte there is not a lead byte, when the buffer ends
    before the sequence does, or when a continuation byte is malformed.
    """
    length = lead_length(buff[start])
    if length == 0:
        return 0

    # Out of range.
    if length > len(buff) - start:
        return 0

    for i in range(start + 1, start + length):
        if not is_continuation(buff[i]):
            return 0

    return length
