"""
Prefix tree over Unicode codepoints, queried with UTF-8 byte offsets.
"""

import logging
import threading

from .errors import AllocationFailure, LoadError, SegmentationError
from .index import WordIndex
from .utf8 import decode_codepoint, iter_codepoints

logger = logging.getLogger(__name__)

# Stripped from both ends of a word before insertion
WORD_TRIM = b' \t\r\n'
LINE_END = b'\r\n'


class TrieNode:
    __slots__ = ['children', 'is_word']

    def __init__(self):
        self.children = None
        self.is_word = False

    def get_child(self, code):
        if self.children is None:
            return None
        return self.children.get(code)

    def get_or_create_child(self, code):
        if self.children is None:
            self.children = {}
        child = self.children.get(code)
        if child is None:
            child = TrieNode()
            self.children[code] = child
        return child


def _as_bytes(word):
    if isinstance(word, str):
        return word.encode('utf-8')
    return bytes(word)


class Trie(WordIndex):
    """
    Dictionary trie keyed by codepoint.

    Built once (bulk_load or insert), then read-only while segmenting.
    Insertions take a writer lock so a handle shared between threads can
    still be extended safely; lookups never lock.
    """

    def __init__(self, words=None):
        self.root = TrieNode()
        self.word_count = 0
        self._write_lock = threading.Lock()
        if words is not None:
            for word in words:
                self.insert(word)

    def __len__(self):
        return self.word_count

    def __contains__(self, word):
        return self.contains(word)

    @property
    def destroyed(self):
        return self.root is None

    def _check_alive(self):
        if self.root is None:
            raise SegmentationError("Trie has been destroyed")

    def insert(self, word):
        """
        Add a word (str or UTF-8 bytes). Surrounding spaces, tabs and line
        terminators are trimmed; words that end up empty are ignored.

        Returns True if the word was new.
        """
        self._check_alive()
        data = _as_bytes(word).strip(WORD_TRIM)
        if not data:
            return False

        try:
            with self._write_lock:
                node = self.root
                for _, code, _ in iter_codepoints(data):
                    node = node.get_or_create_child(code)
                if node.is_word:
                    return False
                node.is_word = True
                self.word_count += 1
                return True
        except MemoryError as e:
            raise AllocationFailure(f"Out of memory inserting {data!r}") from e

    def bulk_load(self, lines, source=None):
        """
        Insert one word per line from an iterable of lines (str or bytes).

        Trailing line terminators are dropped and blank lines skipped.
        Returns the number of non-empty lines processed. A source that fails
        while being read raises LoadError.
        """
        self._check_alive()
        count = 0
        try:
            for line in lines:
                line = _as_bytes(line).rstrip(LINE_END)
                if line:
                    self.insert(line)
                    count += 1
        except OSError as e:
            raise LoadError(source or getattr(lines, 'name', repr(lines)), e) from e
        logger.debug("Loaded %d lines, %d distinct words", count, self.word_count)
        return count

    def _walk(self, data):
        node = self.root
        for _, code, _ in iter_codepoints(data):
            node = node.get_child(code)
            if node is None:
                return None
        return node

    def contains(self, word):
        self._check_alive()
        data = _as_bytes(word).strip(WORD_TRIM)
        if not data:
            return False
        node = self._walk(data)
        return node is not None and node.is_word

    def prefixes_at(self, text, offset=0):
        """
        Byte lengths of every dictionary word that starts at text[offset],
        shortest first. Stops at the first codepoint without a child edge.
        """
        self._check_alive()
        lengths = []
        node = self.root
        pos = offset
        n = len(text)
        while pos < n:
            code, length = decode_codepoint(text, pos)
            node = node.get_child(code)
            if node is None:
                break
            pos += length
            if node.is_word:
                lengths.append(pos - offset)
        return lengths

    def has_prefix_at(self, text, offset=0):
        """True as soon as one dictionary word starts at text[offset]."""
        self._check_alive()
        node = self.root
        pos = offset
        n = len(text)
        while pos < n:
            code, length = decode_codepoint(text, pos)
            node = node.get_child(code)
            if node is None:
                return False
            if node.is_word:
                return True
            pos += length
        return False

    def prefixes(self, text, offset=0):
        """
        Matched words starting at offset. For str input the offset counts
        characters and str words are returned; for bytes it counts bytes.
        """
        if isinstance(text, str):
            data = text[offset:].encode('utf-8')
            return [data[:length].decode('utf-8')
                    for length in self.prefixes_at(data)]
        return [text[offset:offset + length]
                for length in self.prefixes_at(text, offset)]

    def destroy(self):
        """Drop every node. The trie is unusable afterwards."""
        with self._write_lock:
            self.root = None
            self.word_count = 0
