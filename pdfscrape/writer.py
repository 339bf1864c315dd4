from typing import Union
from .result import ExtractionSuccess, ExtractionFailure

"""
Render extraction results as plain text files
"""

def format_result(result: Union[ExtractionSuccess, ExtractionFailure]) -> str:
    if result.ok:
        return result.text
    return f'[Extraction failed: {result.message}]'

def format_document(name: str, result: Union[ExtractionSuccess, ExtractionFailure]) -> str:
    """
    One document section for concatenated output: a '# name' heading, then the text.
    Successful results also note the strategy that produced them.
    """
    header = f'# {name}\n'
    if result.ok:
        header += f'({result.strategy} extraction, {result.original_length} characters)\n'
    return header + '\n' + format_result(result)
