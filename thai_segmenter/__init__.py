"""
Thai word segmentation: dictionary maximal matching (newmm) constrained
by Thai Character Cluster boundaries.
"""

__version__ = "0.1.0"

from .dictionary import (
    DEFAULT_WORDS,
    Dictionary,
    DictionaryCache,
    free_dictionary,
    load_dictionary,
)
from .errors import (
    AllocationFailure,
    LoadError,
    SegmentationError,
    ThaiSegmenterError,
    TokenLimitExceeded,
)
from .index import WordIndex
from .newmm import NewMMSegmenter, segment
from .tcc import tcc_positions, tcc_segment
from .tokenize import word_tokenize
from .trie import Trie

__all__ = [
    "AllocationFailure",
    "DEFAULT_WORDS",
    "Dictionary",
    "DictionaryCache",
    "LoadError",
    "NewMMSegmenter",
    "SegmentationError",
    "ThaiSegmenterError",
    "TokenLimitExceeded",
    "Trie",
    "WordIndex",
    "free_dictionary",
    "load_dictionary",
    "segment",
    "tcc_positions",
    "tcc_segment",
    "word_tokenize",
    "__version__",
]
