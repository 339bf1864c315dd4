import sys
import logging

"""
Common exceptions and logger configuration go here
"""

class PDFParseError(Exception):
    """Utilized when PDF parsing fails."""
    pass

class PDFSignatureError(PDFParseError):
    """Raised when a buffer cannot be a PDF; carries the FailureReason."""
    def __init__(self, reason, message: str = ''):
        super().__init__(message or reason.message)
        self.reason = reason

# Shared logger
logger = logging.getLogger('pdfscrape')

# Ensure logger has console handler
if not logger.handlers:
    handler = logging.StreamHandler(sys.stdout)
    formatter = logging.Formatter('[%(asctime)s] %(levelname)s: %(message)s')
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    logger.setLevel(logging.INFO)
