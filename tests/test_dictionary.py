"""
Unit tests for dictionary handles and the dictionary cache.
"""
import os
import shutil
import sys
import tempfile
import unittest
from unittest import mock

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from thai_segmenter.dictionary import (
    DEFAULT_WORDS,
    DictionaryCache,
    free_dictionary,
    load_dictionary,
    read_word_list,
)
from thai_segmenter.errors import AllocationFailure, LoadError
from thai_segmenter.newmm import NewMMSegmenter
from thai_segmenter.trie import TrieNode


class TempDirTestCase(unittest.TestCase):

    def setUp(self):
        self.tmpdir = tempfile.mkdtemp()

    def tearDown(self):
        shutil.rmtree(self.tmpdir)

    def write_words(self, name, content):
        path = os.path.join(self.tmpdir, name)
        with open(path, 'w', encoding='utf-8', newline='') as f:
            f.write(content)
        return path


class TestLoadDictionary(TempDirTestCase):

    def test_default_words(self):
        with load_dictionary() as dictionary:
            self.assertEqual(len(dictionary), len(set(DEFAULT_WORDS)))
            self.assertFalse(dictionary.fallback)
            self.assertIn('ไป', dictionary.index)

    def test_from_file(self):
        path = self.write_words('words.txt', 'ฉัน\r\nไป\n\nโรงเรียน\n')
        with load_dictionary(path) as dictionary:
            self.assertEqual(len(dictionary), 3)
            self.assertEqual(dictionary.source, path)
            self.assertIn('โรงเรียน', dictionary.index)

    def test_from_iterable(self):
        with load_dictionary(['ตา', 'ตาก', 'ตา']) as dictionary:
            self.assertEqual(len(dictionary), 2)

    def test_missing_file_falls_back_to_defaults(self):
        missing = os.path.join(self.tmpdir, 'missing.txt')
        with self.assertLogs('thai_segmenter.dictionary', level='WARNING'):
            dictionary = load_dictionary(missing)
        self.assertTrue(dictionary.fallback)
        self.assertEqual(len(dictionary), len(set(DEFAULT_WORDS)))
        dictionary.free()

    def test_read_word_list_missing_raises(self):
        with self.assertRaises(LoadError) as ctx:
            read_word_list(os.path.join(self.tmpdir, 'missing.txt'))
        self.assertIn('missing.txt', str(ctx.exception))

    def test_free(self):
        dictionary = load_dictionary(['ไป'])
        free_dictionary(dictionary)
        self.assertTrue(dictionary.closed)
        self.assertEqual(len(dictionary), 0)
        # Freeing twice is harmless
        dictionary.free()
        free_dictionary(None)

    def test_context_manager_frees(self):
        with load_dictionary(['ไป']) as dictionary:
            self.assertFalse(dictionary.closed)
        self.assertTrue(dictionary.closed)


class TestDictionaryCache(TempDirTestCase):

    def setUp(self):
        super().setUp()
        self.path = self.write_words('words.txt', 'ฉัน\nไป\n')
        self.cache = DictionaryCache()

    def tearDown(self):
        self.cache.clear()
        super().tearDown()

    def test_reuses_loaded_dictionary(self):
        first = self.cache.get(self.path)
        second = self.cache.get(self.path)
        self.assertIs(first, second)
        self.assertEqual(self.cache.misses, 1)
        self.assertEqual(self.cache.hits, 1)
        self.assertIn(self.path, self.cache)

    def test_key_is_resolved_path(self):
        relative = os.path.relpath(self.path)
        self.assertIs(self.cache.get(self.path), self.cache.get(relative))
        self.assertEqual(len(self.cache), 1)

    def test_different_sources_are_separate(self):
        other = self.write_words('other.txt', 'มา\n')
        self.assertIsNot(self.cache.get(self.path), self.cache.get(other))
        self.assertIsNot(self.cache.get(None), self.cache.get(self.path))
        self.assertEqual(len(self.cache), 3)

    def test_clear_frees_handles(self):
        handle = self.cache.get(self.path)
        self.cache.clear()
        self.assertTrue(handle.closed)
        self.assertEqual(len(self.cache), 0)
        self.assertIsNot(self.cache.get(self.path), handle)

    def test_discard(self):
        handle = self.cache.get(self.path)
        self.cache.discard(self.path)
        self.assertTrue(handle.closed)
        self.assertNotIn(self.path, self.cache)

    def test_reloads_handle_freed_elsewhere(self):
        handle = self.cache.get(self.path)
        handle.free()
        self.assertFalse(self.cache.get(self.path).closed)

    def test_only_paths_are_cached(self):
        with self.assertRaises(TypeError):
            self.cache.get(['ไป'])


class TestAllocationFailure(unittest.TestCase):
    """Running out of memory aborts the load without touching other handles."""

    def setUp(self):
        self.shared = load_dictionary(['ฉัน', 'ไป', 'โรงเรียน'])

    def tearDown(self):
        self.shared.free()

    def assert_shared_still_works(self):
        self.assertEqual(NewMMSegmenter(self.shared).segment('ฉันไปโรงเรียน'),
                         ['ฉัน', 'ไป', 'โรงเรียน'])

    def test_out_of_memory_reading_word_list(self):
        with mock.patch('thai_segmenter.dictionary.read_word_list',
                        side_effect=MemoryError):
            with self.assertRaises(AllocationFailure):
                load_dictionary('/tmp/words.txt')
        self.assert_shared_still_works()

    def test_out_of_memory_growing_trie(self):
        with mock.patch.object(TrieNode, 'get_or_create_child',
                               side_effect=MemoryError):
            with self.assertRaises(AllocationFailure):
                load_dictionary(['ตา', 'ตาก'])
        self.assert_shared_still_works()

    def test_out_of_memory_in_word_source(self):
        def words():
            yield 'ตา'
            raise MemoryError

        with self.assertRaises(AllocationFailure):
            load_dictionary(words())
        self.assert_shared_still_works()

    def test_failed_insert_keeps_dictionary_usable(self):
        with mock.patch.object(TrieNode, 'get_or_create_child',
                               side_effect=MemoryError):
            with self.assertRaises(AllocationFailure):
                self.shared.index.insert('ใหม่')
        self.assertEqual(len(self.shared), 3)
        self.assert_shared_still_works()


if __name__ == '__main__':
    unittest.main()
