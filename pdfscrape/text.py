import re
from .utils import logger

"""
Readability heuristics and text cleanup shared by every scanner
"""

_LETTER = re.compile(r'[a-zA-Z]')
_WORD_RUN = re.compile(r'[a-zA-Z]{2,}')
_WHITESPACE = re.compile(r'[ \t\r\n]+')
_CONTROL = re.compile(r'[\x00-\x08\x0B\x0C\x0E-\x1F\x7F]')
# Control chars plus latin1 high bytes and U+FFFD left behind by lossy decoding
_BINARY = re.compile(r'[\x00-\x08\x0B\x0C\x0E-\x1F\x7F-\xFF\ufffd]')

TRUNCATION_NOTE = '\n\n[Text truncated from original length of {length} characters]'


def is_readable(text: str, min_length: int = 4, min_letter_ratio: float = 0.3) -> bool:
    """
    Heuristic noise filter: enough ASCII letters, and at least one run of two or more.
    Not a language detector.
    """
    if not text or len(text) < min_length:
        return False
    letter_ratio = len(_LETTER.findall(text)) / len(text)
    return letter_ratio > min_letter_ratio and _WORD_RUN.search(text) is not None


def normalize_text(text: str) -> str:
    """Drop control characters, collapse whitespace runs to one space, trim."""
    if not text:
        return ''
    try:
        text = _CONTROL.sub('', text)
        return _WHITESPACE.sub(' ', text).strip()
    except Exception as e:
        logger.warning(f'Text cleanup failed, keeping input as-is: {e}')
        return text


def strip_binary(text: str) -> str:
    if not text:
        return ''
    try:
        return _BINARY.sub('', text)
    except Exception as e:
        logger.warning(f'Binary strip failed, keeping input as-is: {e}')
        return text


def truncate_text(text: str, max_length: int) -> str:
    """
    Cap text at max_length characters, the appended note included.
    The note states the original length.
    """
    try:
        if len(text) <= max_length:
            return text
        note = TRUNCATION_NOTE.format(length=len(text))
        keep = max(max_length - len(note), 0)
        return text[:keep].rstrip() + note
    except Exception as e:
        logger.warning(f'Truncation failed, keeping input as-is: {e}')
        return text
