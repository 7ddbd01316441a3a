"""
UTF-8 codepoint decoding over byte buffers.
Lenient: a malformed leading byte decodes as a single byte.
"""


def char_length(lead):
    """Returns the sequence length (1-4) implied by a UTF-8 leading byte."""
    if lead & 0x80 == 0:
        return 1
    if lead & 0xE0 == 0xC0:
        return 2
    if lead & 0xF0 == 0xE0:
        return 3
    if lead & 0xF8 == 0xF0:
        return 4
    return 1


def decode_codepoint(buf, pos):
    """
    Decode the codepoint starting at buf[pos].

    Returns (codepoint, byte_length). A sequence truncated by the end of
    the buffer is shortened to what remains so callers never step past
    len(buf).
    """
    lead = buf[pos]
    length = char_length(lead)
    remaining = len(buf) - pos
    if length > remaining:
        length = remaining

    if length == 1:
        return lead, 1
    if length == 2:
        return ((lead & 0x1F) << 6) | (buf[pos + 1] & 0x3F), 2
    if length == 3:
        return (((lead & 0x0F) << 12) | ((buf[pos + 1] & 0x3F) << 6) |
                (buf[pos + 2] & 0x3F)), 3
    return (((lead & 0x07) << 18) | ((buf[pos + 1] & 0x3F) << 12) |
            ((buf[pos + 2] & 0x3F) << 6) | (buf[pos + 3] & 0x3F)), 4


def iter_codepoints(buf, start=0):
    """Yields (offset, codepoint, byte_length) from start to the end of buf."""
    pos = start
    n = len(buf)
    while pos < n:
        code, length = decode_codepoint(buf, pos)
        yield pos, code, length
        pos += length
