"""
Word tokenization front end with a PyThaiNLP-style signature.
"""

import os
from typing import List, Optional

from .dictionary import Dictionary, free_dictionary, load_dictionary
from .newmm import NewMMSegmenter

SUPPORTED_ENGINES = ("newmm",)


def default_dict_path() -> Optional[str]:
    """
    Path of the bundled word list, or None to use the built-in defaults.

    The list ships inside the package as data/thai_words.txt.
    """
    module_dir = os.path.dirname(os.path.abspath(__file__))
    dict_path = os.path.join(module_dir, "data", "thai_words.txt")
    if os.path.exists(dict_path):
        return dict_path

    return None


def _strip_whitespace(tokens):
    return [token for token in tokens if not token.isspace()]


def word_tokenize(
    text: str,
    engine: str = "newmm",
    custom_dict=None,
    keep_whitespace: bool = True,
    cache=None,
    max_tokens: Optional[int] = None,
) -> List[str]:
    """
    Segment Thai text into words.

    Args:
        text: Text to tokenize.
        engine: Only "newmm" is supported.
        custom_dict: Path to a word list (one word per line), an iterable of
            words, or a loaded Dictionary. Defaults to the bundled word list.
        keep_whitespace: Drop whitespace-only tokens when False.
        cache: Optional DictionaryCache; path dictionaries are then loaded
            once and reused across calls instead of reloaded every time.
        max_tokens: Optional ceiling on the number of tokens.

    Raises:
        ValueError: unsupported engine.
        TypeError: text is not a str.
        FileNotFoundError: custom_dict is a path that does not exist.

    Examples:
        >>> word_tokenize("ไป ABC 123")
        ['ไป', ' ', 'ABC', ' ', '123']
    """
    if engine not in SUPPORTED_ENGINES:
        raise ValueError(
            f"Unsupported engine '{engine}'. Currently only 'newmm' is supported."
        )

    if not isinstance(text, str):
        raise TypeError(f"text must be a string, got {type(text)}")

    if not text:
        return []

    if isinstance(custom_dict, Dictionary):
        tokens = NewMMSegmenter(custom_dict, max_tokens=max_tokens).segment(text)
    else:
        if custom_dict is None:
            source = default_dict_path()
        elif isinstance(custom_dict, (str, bytes, os.PathLike)):
            if not os.path.exists(custom_dict):
                raise FileNotFoundError(f"Dictionary file not found: {custom_dict}")
            source = custom_dict
        else:
            source = list(custom_dict)

        if cache is not None and not isinstance(source, list):
            tokens = NewMMSegmenter(cache.get(source), max_tokens=max_tokens).segment(text)
        else:
            dictionary = load_dictionary(source)
            try:
                tokens = NewMMSegmenter(dictionary, max_tokens=max_tokens).segment(text)
            finally:
                free_dictionary(dictionary)

    if not keep_whitespace:
        tokens = _strip_whitespace(tokens)
    return tokens


def segment(
    text: Optional[str],
    custom_dict=None,
    keep_whitespace: bool = True,
) -> List[str]:
    """
    newmm segmentation; None or empty text gives an empty list.

    >>> segment(None)
    []
    """
    if text is None or text == "":
        return []
    return word_tokenize(
        text,
        engine="newmm",
        custom_dict=custom_dict,
        keep_whitespace=keep_whitespace,
    )
