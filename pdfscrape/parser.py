import re
from typing import Dict, List, Optional, Union
from .config import ExtractionConfig, DEFAULT_CONFIG, LITERAL_SCAN_LIMIT
from .result import FailureReason
from .text import is_readable, normalize_text, strip_binary
from .utils import PDFSignatureError, logger

"""
PDFScrape Parser

Lexical scanners over raw PDF bytes. No xref, object or filter handling:
each scanner looks for text-showing literals (or, failing that, printable
runs) and returns what it found as one string, '' meaning nothing.
"""

BytesLike = Union[bytes, bytearray]

PDF_MAGIC = b'%PDF-'

_LITERAL_ESCAPES = {'n': '\n', 'r': '\r', 't': '\t', '(': '(', ')': ')', '\\': '\\'}
_ESCAPE = re.compile(r'\\([nrt()\\])')

# Literal body: anything but unescaped parens
_LITERAL_BODY = r'((?:[^\\()]|\\.)+)'
_BT_LITERAL = re.compile(r'BT[^(\r\n]*\(' + _LITERAL_BODY + r'\)', re.DOTALL)
_ANY_LITERAL = re.compile(r'\(' + _LITERAL_BODY + r'\)', re.DOTALL)

_PAREN_TOKEN = re.compile(rb'\\.|[()]', re.DOTALL)

_PRINTABLE_RUN = re.compile(rb'[\x20-\x7E\t\n\r]+')
_RUN_WHITESPACE = str.maketrans('\t\n\r', '   ')


# Utility Funcs
def unescape_literal(literal: str) -> str:
    """Resolve \\n \\r \\t \\( \\) \\\\ in one pass; other backslashes are kept."""
    return _ESCAPE.sub(lambda m: _LITERAL_ESCAPES[m.group(1)], literal)

def paren_pairs(data: BytesLike, start: int = 0, end: Optional[int] = None) -> Dict[int, int]:
    """
    Map each unescaped '(' in data[start:end] to the index of its closing ')'.
    Unbalanced parens are left out. One pass over the span.
    """
    end = len(data) if end is None else min(end, len(data))
    pairs = {}
    stack = []
    for match in _PAREN_TOKEN.finditer(data, start, end):
        index = match.start()
        if data[index] == 0x28:
            stack.append(index)
        elif data[index] == 0x29 and stack:
            pairs[stack.pop()] = index
    return pairs

def find_closing_paren(data: BytesLike, open_index: int,
                       limit: int = LITERAL_SCAN_LIMIT, end: Optional[int] = None) -> int:
    """
    Index of the ')' closing the '(' at open_index, or -1.
    Nested parens change depth, backslash-escaped ones do not.
    Gives up after `limit` bytes or at `end`.
    """
    end = len(data) if end is None else min(end, len(data))
    stop = min(end, open_index + 1 + limit)
    return paren_pairs(data, open_index, stop).get(open_index, -1)

def _block_literals(data: BytesLike, start: int, end: int, limit: int) -> List[str]:
    texts = []
    pos = start
    # A '(' without a close inside the limit is noise; inner literals still count
    for open_index, close_index in sorted(paren_pairs(data, start, end).items()):
        if open_index < pos or close_index - open_index > limit:
            continue
        try:
            text = unescape_literal(data[open_index + 1:close_index].decode('utf-8'))
        except UnicodeDecodeError:
            logger.debug(f'Skipping undecodable literal at offset {open_index}')
        else:
            if text.strip():
                texts.append(text)
        pos = close_index + 1
    return texts

def _printable_count(run: bytes) -> int:
    return len(run) - run.count(b'\t') - run.count(b'\n') - run.count(b'\r')


# Core Funcs
def validate_signature(data: Optional[BytesLike]) -> None:
    if data is None or len(data) == 0:
        raise PDFSignatureError(FailureReason.EMPTY_BUFFER)
    if len(data) < len(PDF_MAGIC):
        raise PDFSignatureError(FailureReason.BUFFER_TOO_SMALL,
                                f'Buffer too small to be a valid PDF: {len(data)} bytes')
    signature = bytes(data[:len(PDF_MAGIC)])
    if signature != PDF_MAGIC:
        raise PDFSignatureError(FailureReason.INVALID_SIGNATURE,
                                f'Invalid PDF signature: {signature!r}')

def extract_structured(data: BytesLike, config: ExtractionConfig = DEFAULT_CONFIG) -> str:
    """
    Literals inside BT ... ET text objects. Every non-blank literal is kept.
    A BT without a following ET ends the scan; the first ET closes a block.
    """
    texts = []
    pos = 0
    while pos < len(data):
        bt = data.find(b'BT', pos)
        if bt == -1:
            break
        et = data.find(b'ET', bt + 2)
        if et == -1:
            logger.debug(f'Dangling BT at offset {bt}, stopping structured scan')
            break
        texts.extend(_block_literals(data, bt, et + 2, config.literal_scan_limit))
        pos = et + 2
    return ' '.join(texts)

def extract_patterns(data: BytesLike, config: ExtractionConfig = DEFAULT_CONFIG) -> str:
    """
    Regex pass over the leading window of the file decoded as UTF-8:
    BT-anchored literals first, then any parenthesized literal. Noisy, so
    every candidate must pass the readability check. Output is in file order.
    """
    window = data[:config.pattern_window_bytes].decode('utf-8', errors='replace')
    found = {}
    seen = set()
    for pattern in (_BT_LITERAL, _ANY_LITERAL):
        for match in pattern.finditer(window):
            start = match.start(1)
            if start in seen:
                continue
            seen.add(start)
            try:
                text = unescape_literal(match.group(1))
                if text.strip() and is_readable(text, config.min_readable_length,
                                                config.min_letter_ratio):
                    found[start] = text
            except Exception as e:
                logger.debug(f'Skipping literal at offset {start}: {e}')
                continue
    return strip_binary(' '.join(found[k] for k in sorted(found)))

def extract_raw(data: BytesLike, config: ExtractionConfig = DEFAULT_CONFIG) -> str:
    """
    Last resort: printable ASCII runs (tab/LF/CR count as spaces) read as latin1.
    A run is tested when a non-printable byte ends it, at end of buffer, or
    once it grows to raw_max_run_length. A letter-free stretch longer than
    raw_min_run_length splits it into pieces. Each piece must beat both length thresholds and read as text.
    """
    pieces = []
    max_run = config.raw_max_run_length
    interval = config.raw_compact_interval
    next_compact = interval
    noise = re.compile(rb'[^A-Za-z]{%d,}' % (config.raw_min_run_length + 1))
    for match in _PRINTABLE_RUN.finditer(data):
        run = match.group(0)
        for offset in range(0, len(run), max_run):
            for piece in noise.split(run[offset:offset + max_run]):
                if len(piece) <= config.raw_min_run_length or _printable_count(piece) <= config.raw_min_printable:
                    continue
                text = piece.decode('latin-1').translate(_RUN_WHITESPACE)
                if is_readable(text, config.min_readable_length, config.min_letter_ratio):
                    pieces.append(text)
        if match.end() >= next_compact:
            compacted = normalize_text(' '.join(pieces))
            pieces = [compacted] if compacted else []
            next_compact = (match.end() // interval + 1) * interval
            logger.debug(f'Raw scan passed byte {match.end()}, accumulator at {len(compacted)} chars')
    return ' '.join(pieces)
