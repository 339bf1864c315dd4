import logging
from typing import Optional, Union
from .config import ExtractionConfig, DEFAULT_CONFIG
from .parser import (
    BytesLike,
    validate_signature,
    extract_structured,
    extract_patterns,
    extract_raw,
)
from .result import ExtractionSuccess, ExtractionFailure, FailureReason
from .text import normalize_text, truncate_text
from .utils import PDFSignatureError, logger as default_logger

"""
Best-effort PDF text extraction: signature gate, then scanners from most to
least precise until one yields text. Always returns a result, never raises.
"""

ExtractionResult = Union[ExtractionSuccess, ExtractionFailure]
Logger = Union[logging.Logger, logging.LoggerAdapter]

STRATEGIES = (
    ('structured', extract_structured),
    ('pattern', extract_patterns),
    ('raw', extract_raw),
)


def _describe(exc: BaseException) -> str:
    return f'{type(exc).__name__}: {exc}'

def _as_bytes(data) -> BytesLike:
    if isinstance(data, (bytes, bytearray)):
        return data
    if isinstance(data, memoryview):
        return data.tobytes()
    raise TypeError(f'Expected a bytes-like buffer, got {type(data).__name__}')

def parse(data: Optional[BytesLike], config: Optional[ExtractionConfig] = None,
          logger: Optional[Logger] = None) -> ExtractionResult:
    config = config or DEFAULT_CONFIG
    log = logger or default_logger
    try:
        data = None if data is None else _as_bytes(data)
        try:
            validate_signature(data)
        except PDFSignatureError as e:
            log.warning(f'Rejected input: {e}')
            return ExtractionFailure(e.reason)
        log.debug(f'Extracting text from {len(data)} byte buffer')

        errors = []
        for name, strategy in STRATEGIES:
            log.debug(f'Trying {name} extraction')
            try:
                text = strategy(data, config)
            except Exception as e:
                log.warning(f'{name.capitalize()} extraction failed: {_describe(e)}')
                errors.append(e)
                continue
            text = normalize_text(text)
            if text:
                log.debug(f'{name.capitalize()} extraction produced {len(text)} chars')
                break
            log.debug(f'{name.capitalize()} extraction produced no text')
        else:
            if errors:
                return ExtractionFailure(FailureReason.INTERNAL_ERROR, _describe(errors[0]))
            log.warning('No text extracted after trying all strategies')
            return ExtractionFailure(FailureReason.NO_EXTRACTABLE_TEXT)

        original_length = len(text)
        text = truncate_text(text, config.max_text_length)
        truncated = original_length > config.max_text_length
        if truncated:
            log.info(f'Truncated extracted text from {original_length} to {len(text)} chars')
        log.info(f'Extracted {original_length} chars using {name} extraction')
        return ExtractionSuccess(text=text, strategy=name,
                                 original_length=original_length, truncated=truncated)
    except Exception as e:
        log.exception(f'Unhandled error in PDF parsing: {_describe(e)}')
        return ExtractionFailure(FailureReason.INTERNAL_ERROR, _describe(e))

def extract_file(pdf_path: str, config: Optional[ExtractionConfig] = None,
                 logger: Optional[Logger] = None) -> ExtractionResult:
    log = logger or default_logger
    try:
        with open(pdf_path, 'rb') as f:
            data = f.read()
    except OSError as e:
        log.error(f'Could not read {pdf_path}: {e}')
        return ExtractionFailure(FailureReason.UNREADABLE_FILE, _describe(e))
    except Exception as e:
        log.error(f'Unexpected error reading {pdf_path!r}: {_describe(e)}')
        return ExtractionFailure(FailureReason.INTERNAL_ERROR, _describe(e))
    return parse(data, config=config, logger=log)
