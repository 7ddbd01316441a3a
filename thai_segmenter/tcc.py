"""
Thai Character Cluster (TCC) boundaries.

Rules after Theeramunkong et al. 2000, simplified to the cases the
segmenter relies on: a cluster never separates a consonant from its
leading vowel, its dependent vowels or its tone marks.
"""

import numpy as np

from .thai_chars import (
    is_combining_mark,
    is_consonant,
    is_follow_vowel,
    is_leading_vowel,
)
from .utf8 import decode_codepoint


def cluster_length(buf, start):
    """
    Returns the byte length of the cluster starting at buf[start].

    Leading vowel: + consonant [+ consonant] [+ marks]*
    Consonant:     [+ consonant] [+ marks | follow vowels]*
    Anything else is a cluster of one codepoint.
    """
    n = len(buf)
    if start >= n:
        return 0

    code, length = decode_codepoint(buf, start)
    i = start + length

    if is_leading_vowel(code):
        if i >= n:
            return i - start
        code, length = decode_codepoint(buf, i)
        if not is_consonant(code):
            # Leading vowel standing alone
            return i - start
        i += length
        if i < n:
            code, length = decode_codepoint(buf, i)
            if is_consonant(code):
                i += length
        while i < n:
            code, length = decode_codepoint(buf, i)
            if not is_combining_mark(code):
                break
            i += length
        return i - start

    if is_consonant(code):
        if i < n:
            code, length = decode_codepoint(buf, i)
            if is_consonant(code):
                i += length
        while i < n:
            code, length = decode_codepoint(buf, i)
            if not (is_combining_mark(code) or is_follow_vowel(code)):
                break
            i += length
        return i - start

    return length


def tcc_positions(text):
    """
    Byte offsets at which each cluster of text ends, ascending.

    The last offset equals the byte length of the text; empty text gives
    an empty array.
    """
    buf = text.encode('utf-8') if isinstance(text, str) else text
    n = len(buf)
    positions = []
    pos = 0
    while pos < n:
        pos += cluster_length(buf, pos)
        positions.append(pos)
    return np.array(positions, dtype=np.int64)


def next_boundary(positions, pos, default):
    """First boundary strictly greater than pos, or default if none is left."""
    idx = np.searchsorted(positions, pos, side='right')
    if idx >= len(positions):
        return default
    return int(positions[idx])


def tcc_segment(text):
    """Split text into its clusters. Returns str pieces for str input."""
    if isinstance(text, str):
        buf = text.encode('utf-8')
        return [piece.decode('utf-8') for piece in tcc_segment(buf)]
    clusters = []
    start = 0
    for end in tcc_positions(text).tolist():
        clusters.append(text[start:end])
        start = end
    return clusters
