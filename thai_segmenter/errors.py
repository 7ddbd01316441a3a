class ThaiSegmenterError(Exception):
    """Base class for errors raised by thai_segmenter."""


class LoadError(ThaiSegmenterError):
    """A word list could not be opened or read."""

    def __init__(self, source, reason=None):
        self.source = source
        self.reason = reason
        msg = f"Could not load dictionary from {source!r}"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)


class AllocationFailure(ThaiSegmenterError):
    """Memory ran out while growing the trie or the token list."""


class SegmentationError(ThaiSegmenterError):
    """The segmenter was given an unusable dictionary handle or input."""


class TokenLimitExceeded(SegmentationError):
    """
    More tokens were produced than the configured ceiling allows.

    The tokens emitted before the ceiling was hit are kept on the exception
    together with the offset reached (in bytes of the UTF-8 text), so the
    caller can decide what to do with the rest of the text.
    """

    def __init__(self, limit, tokens, offset):
        self.limit = limit
        self.tokens = tokens
        self.offset = offset
        super().__init__(
            f"Token limit of {limit} exceeded at byte offset {offset}")
