"""Tunable thresholds for the extraction heuristics"""
import os
import dataclasses
from dataclasses import dataclass
from typing import Optional, Mapping
from dotenv import load_dotenv, find_dotenv

ENV_PREFIX = 'PDFSCRAPE_'

# Final output cap, truncation note included
MAX_TEXT_LENGTH = 200_000
# Window decoded by the regex pattern scanner
PATTERN_WINDOW_BYTES = 2 * 1024 * 1024
# How far past a '(' to look for its matching ')'
LITERAL_SCAN_LIMIT = 10_000
RAW_COMPACT_INTERVAL = 500_000


@dataclass(frozen=True)
class ExtractionConfig:
    max_text_length: int = MAX_TEXT_LENGTH
    min_readable_length: int = 4
    min_letter_ratio: float = 0.3
    literal_scan_limit: int = LITERAL_SCAN_LIMIT
    pattern_window_bytes: int = PATTERN_WINDOW_BYTES
    raw_min_run_length: int = 20
    raw_min_printable: int = 15
    raw_max_run_length: int = 4096
    raw_compact_interval: int = RAW_COMPACT_INTERVAL

    def __post_init__(self):
        for f in dataclasses.fields(self):
            if f.type in (int, 'int') and getattr(self, f.name) <= 0:
                raise ValueError(f'{f.name} must be positive, got {getattr(self, f.name)}')
        if not 0 <= self.min_letter_ratio < 1:
            raise ValueError(f'min_letter_ratio must be in [0, 1), got {self.min_letter_ratio}')
        if self.raw_max_run_length <= self.raw_min_run_length:
            raise ValueError('raw_max_run_length must exceed raw_min_run_length')

    def replace(self, **changes) -> 'ExtractionConfig':
        return dataclasses.replace(self, **changes)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None,
                 prefix: str = ENV_PREFIX, dotenv: bool = True) -> 'ExtractionConfig':
        """
        Build a config from PDFSCRAPE_* variables, e.g. PDFSCRAPE_MAX_TEXT_LENGTH=100000.
        A .env file in the working directory is loaded first unless dotenv=False.
        """
        if environ is None:
            if dotenv:
                load_dotenv(find_dotenv(usecwd=True))
            environ = os.environ
        overrides = {}
        for f in dataclasses.fields(cls):
            key = prefix + f.name.upper()
            raw = environ.get(key)
            if raw is None or not raw.strip():
                continue
            cast = float if f.type in (float, 'float') else int
            try:
                overrides[f.name] = cast(raw.strip())
            except ValueError:
                raise ValueError(f'Invalid value for {key}: {raw!r}') from None
        return cls(**overrides)


DEFAULT_CONFIG = ExtractionConfig()
