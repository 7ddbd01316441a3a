"""
Abstract word index consulted by the segmenter.

The segmenter only needs prefix queries, so any structure that can answer
"which dictionary words start at this byte offset" (a trie, a double-array
trie, an automaton) can stand behind a Dictionary handle.
"""

from abc import ABC, abstractmethod


class WordIndex(ABC):

    @abstractmethod
    def prefixes_at(self, text, offset=0):
        """
        Returns the byte lengths of every indexed word that is a prefix of
        text[offset:], shortest first.
        """

    @abstractmethod
    def destroy(self):
        """Releases the index. It must not be queried afterwards."""

    def has_prefix_at(self, text, offset=0):
        return bool(self.prefixes_at(text, offset))
