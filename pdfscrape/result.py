import enum
from dataclasses import dataclass
from typing import Optional

"""
Extraction outcomes handed back to callers. Never raised, always returned.
"""

class FailureReason(enum.Enum):
    EMPTY_BUFFER = 'empty_buffer'
    BUFFER_TOO_SMALL = 'buffer_too_small'
    INVALID_SIGNATURE = 'invalid_signature'
    NO_EXTRACTABLE_TEXT = 'no_extractable_text'
    INTERNAL_ERROR = 'internal_error'
    UNREADABLE_FILE = 'unreadable_file'

    @property
    def message(self) -> str:
        return _MESSAGES[self]


_MESSAGES = {
    FailureReason.EMPTY_BUFFER: 'No content to parse: empty buffer provided.',
    FailureReason.BUFFER_TOO_SMALL: 'The file is too small to be a valid PDF.',
    FailureReason.INVALID_SIGNATURE: (
        'This does not appear to be a valid PDF file. '
        'The file may be corrupted or in an unsupported format.'
    ),
    FailureReason.NO_EXTRACTABLE_TEXT: (
        'No text content could be extracted from this PDF. '
        'The file may be scanned images or protected.'
    ),
    FailureReason.INTERNAL_ERROR: (
        'Failed to parse PDF. The document may be encrypted, damaged, '
        'or in an unsupported format.'
    ),
    FailureReason.UNREADABLE_FILE: 'The file could not be read.',
}


@dataclass(frozen=True)
class ExtractionSuccess:
    text: str
    strategy: str
    original_length: int
    truncated: bool = False

    ok = True


@dataclass(frozen=True)
class ExtractionFailure:
    reason: FailureReason
    # Exception summary for logs; never shown to users
    detail: Optional[str] = None

    ok = False

    @property
    def message(self) -> str:
        return self.reason.message
