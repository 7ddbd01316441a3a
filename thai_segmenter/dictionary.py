"""
Dictionary handles: loading word lists into an index, releasing them,
and a caller-owned cache of loaded handles keyed by source path.
"""

import logging
import os
import threading

from .errors import AllocationFailure, LoadError
from .trie import Trie

logger = logging.getLogger(__name__)

# Common Thai function words. Enough for smoke tests, not for real text.
DEFAULT_WORDS = (
    "ไป", "มา", "ใน", "ที่", "และ", "หรือ", "คือ", "เป็น", "มี", "ได้",
    "จะ", "ไม่", "ของ", "กับ", "ก็", "ให้", "ถ้า", "แล้ว", "เมื่อ", "ซึ่ง",
    "นี้", "นั้น", "อยู่", "เพื่อ", "การ", "ความ", "จาก", "โดย", "อย่าง", "ถึง",
    "ว่า", "เอง", "ทุก", "แต่", "ตาม", "นัก", "ยัง", "ผล", "ผู้", "คน",
    "วัน", "ปี", "เดือน", "ครั้ง", "ตัว", "สิ่ง", "งาน", "ข้อ", "รับ",
)


class Dictionary:
    """
    Shareable handle to a loaded word index.

    Free it with free() (or use it as a context manager) once no caller
    needs it; a freed handle is rejected by the segmenter.
    """

    def __init__(self, index, source=None, fallback=False):
        self._index = index
        self.source = source
        # True when the requested source failed and DEFAULT_WORDS was used
        self.fallback = fallback

    @property
    def index(self):
        return self._index

    @property
    def closed(self):
        return self._index is None

    def __len__(self):
        return 0 if self._index is None else len(self._index)

    def __repr__(self):
        state = "freed" if self.closed else f"{len(self)} words"
        return f"<Dictionary source={self.source!r} {state}>"

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.free()
        return False

    def free(self):
        if self._index is not None:
            self._index.destroy()
            self._index = None


def read_word_list(path):
    """Read a UTF-8 word list, one word per line. Returns raw byte lines."""
    try:
        with open(path, 'rb') as f:
            return f.readlines()
    except OSError as e:
        raise LoadError(os.fspath(path), e.strerror or str(e)) from e


def _is_path(source):
    return isinstance(source, (str, bytes, os.PathLike))


def load_dictionary(source=None):
    """
    Build a Dictionary from a word list.

    source may be None (built-in DEFAULT_WORDS), a path to a word list, or
    an iterable of words/lines. A path that cannot be read is logged and
    replaced by DEFAULT_WORDS so segmentation stays available.
    """
    trie = Trie()
    fallback = False
    try:
        if source is None:
            trie.bulk_load(DEFAULT_WORDS)
        elif _is_path(source):
            try:
                count = trie.bulk_load(read_word_list(source), source=source)
                logger.info("Loaded %d words (%d lines) from %s",
                            trie.word_count, count, os.fspath(source))
            except LoadError as e:
                logger.warning("%s; falling back to the default word list", e)
                trie.bulk_load(DEFAULT_WORDS)
                fallback = True
        else:
            trie.bulk_load(source)
    except AllocationFailure:
        trie.destroy()
        raise
    except MemoryError as e:
        trie.destroy()
        raise AllocationFailure(f"Out of memory loading {source!r}") from e

    return Dictionary(trie, source=source, fallback=fallback)


def free_dictionary(handle):
    """Release a handle returned by load_dictionary."""
    if handle is not None:
        handle.free()


class DictionaryCache:
    """
    Loaded dictionaries keyed by resolved source path.

    Owned by whoever creates it; entries only go away through clear() or
    discard(). Safe to share between threads.
    """

    def __init__(self, loader=load_dictionary):
        self._loader = loader
        self._entries = {}
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    @staticmethod
    def key_for(source):
        if source is None:
            return None
        if not _is_path(source):
            raise TypeError(
                f"Only word list paths can be cached, got {type(source).__name__}")
        return os.path.realpath(os.fsdecode(source))

    def __len__(self):
        return len(self._entries)

    def __contains__(self, source):
        return self.key_for(source) in self._entries

    def get(self, source=None):
        """Return the cached handle for source, loading it on first use."""
        key = self.key_for(source)
        with self._lock:
            handle = self._entries.get(key)
            if handle is not None and not handle.closed:
                self.hits += 1
                logger.debug("Dictionary cache hit for %s", key)
                return handle
            self.misses += 1
            logger.debug("Dictionary cache miss for %s", key)
            handle = self._loader(source)
            self._entries[key] = handle
            return handle

    def discard(self, source=None):
        key = self.key_for(source)
        with self._lock:
            handle = self._entries.pop(key, None)
        free_dictionary(handle)

    def clear(self):
        with self._lock:
            entries = list(self._entries.values())
            self._entries.clear()
        for handle in entries:
            handle.free()
