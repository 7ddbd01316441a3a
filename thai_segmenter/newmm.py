"""
New Maximum Matching (newmm) word segmentation.

Dictionary-driven maximal matching over UTF-8 bytes, with a one-word
lookahead to avoid stranding unknown Thai clusters and TCC-bounded
fallback for text the dictionary does not cover.
"""

import logging

from .dictionary import Dictionary
from .errors import AllocationFailure, SegmentationError, TokenLimitExceeded
from .index import WordIndex
from .tcc import next_boundary, tcc_positions
from .thai_chars import continues_run, is_non_thai, is_thai, run_class
from .utf8 import decode_codepoint

logger = logging.getLogger(__name__)


def _resolve_index(dictionary):
    if isinstance(dictionary, WordIndex):
        return dictionary
    if isinstance(dictionary, Dictionary):
        if dictionary.closed:
            raise SegmentationError("Dictionary handle has been freed")
        return dictionary.index
    raise SegmentationError(
        f"Expected a Dictionary or WordIndex, got {type(dictionary).__name__}")


def _non_thai_run_end(buf, pos, code, length):
    """End offset of the run of same-class non-Thai characters at pos."""
    kind = run_class(code)
    end = pos + length
    if kind is None:
        return end
    n = len(buf)
    while end < n:
        code, length = decode_codepoint(buf, end)
        if not continues_run(kind, code):
            break
        end += length
    return end


def _match_length(index, buf, pos):
    """
    Length of the dictionary word to take at pos, 0 if none matches.

    Takes the longest match, unless it is followed by a Thai character
    that starts no dictionary word; then the shortest alternative that
    does lead into a dictionary word wins.
    """
    candidates = index.prefixes_at(buf, pos)
    if not candidates:
        return 0

    n = len(buf)
    best = max(candidates)
    end = pos + best
    if end >= n or index.has_prefix_at(buf, end):
        return best

    code, _ = decode_codepoint(buf, end)
    if not is_thai(code):
        return best

    for length in candidates:
        alt_end = pos + length
        if length < best and alt_end < n and index.has_prefix_at(buf, alt_end):
            return length
    return best


def segment_bytes(buf, index, max_tokens=None):
    """
    Segment UTF-8 bytes against a word index.

    Returns byte tokens whose concatenation is buf. Raises
    TokenLimitExceeded when max_tokens is set and would be exceeded.
    """
    n = len(buf)
    if n == 0:
        return []

    positions = tcc_positions(buf)
    tokens = []
    pos = 0
    try:
        while pos < n:
            length = _match_length(index, buf, pos)
            if length:
                end = pos + length
            else:
                code, clen = decode_codepoint(buf, pos)
                if is_non_thai(code):
                    end = _non_thai_run_end(buf, pos, code, clen)
                else:
                    # Unknown Thai: take the whole cluster
                    end = next_boundary(positions, pos, n)

            if max_tokens is not None and len(tokens) >= max_tokens:
                logger.debug("Token ceiling %d hit at byte %d of %d",
                             max_tokens, pos, n)
                raise TokenLimitExceeded(max_tokens, tokens, pos)

            tokens.append(buf[pos:end])
            pos = end
    except MemoryError as e:
        raise AllocationFailure(
            f"Out of memory after {len(tokens)} tokens") from e

    return tokens


class NewMMSegmenter:
    """
    Reusable segmenter bound to one dictionary.

    The dictionary is only read, so one instance (or one Dictionary
    shared by several instances) can serve many threads at once.
    """

    def __init__(self, dictionary, max_tokens=None):
        if max_tokens is not None and max_tokens < 1:
            raise ValueError("max_tokens must be a positive integer or None")
        self.dictionary = dictionary
        self.max_tokens = max_tokens

    def segment(self, text):
        """
        Segment str or UTF-8 bytes. Tokens come back in the input's type.
        """
        index = _resolve_index(self.dictionary)
        if isinstance(text, str):
            try:
                tokens = segment_bytes(text.encode('utf-8'), index,
                                       self.max_tokens)
            except TokenLimitExceeded as e:
                e.tokens = [token.decode('utf-8') for token in e.tokens]
                raise
            return [token.decode('utf-8') for token in tokens]
        if isinstance(text, (bytes, bytearray, memoryview)):
            return segment_bytes(bytes(text), index, self.max_tokens)
        raise SegmentationError(
            f"Expected str or bytes, got {type(text).__name__}")


def segment(text, dictionary, max_tokens=None):
    """Segment text with an already loaded dictionary handle."""
    return NewMMSegmenter(dictionary, max_tokens=max_tokens).segment(text)
