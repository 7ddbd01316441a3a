"""
Thai character classes used by the cluster scanner and the segmenter.
"""

# Character code constants
THAI_START = 0x0E00
THAI_END = 0x0E7F

CONSONANT_START = 0x0E01  # ko kai
CONSONANT_END = 0x0E2E    # ho nokhuk

FOLLOW_VOWEL_START = 0x0E30  # sara a
FOLLOW_VOWEL_END = 0x0E33    # sara am

MAI_HAN_AKAT = 0x0E31
ABOVE_VOWEL_START = 0x0E34  # sara i
ABOVE_VOWEL_END = 0x0E37    # sara uee
BELOW_VOWEL_START = 0x0E38  # sara u
BELOW_VOWEL_END = 0x0E39    # sara uu

LEADING_VOWEL_START = 0x0E40  # sara e
LEADING_VOWEL_END = 0x0E44    # sara ai maimalai

MAITAIKHU = 0x0E47
TONE_START = 0x0E48  # mai ek
TONE_END = 0x0E4B    # mai chattawa
SIGN_START = 0x0E4C  # thanthakhat
SIGN_END = 0x0E4E    # yamakkan

SPACE = 0x20
TAB = 0x09
DOT = 0x2E
COMMA = 0x2C


def is_thai(code):
    return THAI_START <= code <= THAI_END


def is_consonant(code):
    return CONSONANT_START <= code <= CONSONANT_END


def is_leading_vowel(code):
    return LEADING_VOWEL_START <= code <= LEADING_VOWEL_END


def is_follow_vowel(code):
    return FOLLOW_VOWEL_START <= code <= FOLLOW_VOWEL_END


def is_above_vowel(code):
    return code == MAI_HAN_AKAT or ABOVE_VOWEL_START <= code <= ABOVE_VOWEL_END


def is_below_vowel(code):
    return BELOW_VOWEL_START <= code <= BELOW_VOWEL_END


def is_tone(code):
    return TONE_START <= code <= TONE_END


def is_sign(code):
    return code == MAITAIKHU or SIGN_START <= code <= SIGN_END


def is_combining_mark(code):
    """Tone marks, signs, and above/below vowels: marks that attach to a base."""
    return (is_tone(code) or is_sign(code) or
            is_above_vowel(code) or is_below_vowel(code))


# Non-Thai run classes. Only ASCII letters and digits form runs.
RUN_LETTER = 'letter'
RUN_DIGIT = 'digit'
RUN_SPACE = 'space'


def is_ascii_letter(code):
    return 0x61 <= code <= 0x7A or 0x41 <= code <= 0x5A


def is_ascii_digit(code):
    return 0x30 <= code <= 0x39


def is_space(code):
    return code == SPACE or code == TAB


def is_non_thai(code):
    """Everything outside the Thai block, including ASCII whitespace and CR/LF."""
    return not is_thai(code)


def run_class(code):
    """Returns the non-Thai run class of a codepoint, or None if it stands alone."""
    if is_ascii_letter(code):
        return RUN_LETTER
    if is_ascii_digit(code):
        return RUN_DIGIT
    if is_space(code):
        return RUN_SPACE
    return None


def continues_run(kind, code):
    """True if code extends a run of the given class."""
    if kind == RUN_LETTER:
        return is_ascii_letter(code)
    if kind == RUN_DIGIT:
        return is_ascii_digit(code) or code == DOT or code == COMMA
    if kind == RUN_SPACE:
        return is_space(code)
    return False
