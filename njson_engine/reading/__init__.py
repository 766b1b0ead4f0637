# ==============================================
# TOPIC 1: READING & PARSING
# ==============================================
#
# This package turns a source (path, buffer or stream) into
# decoded records plus a list of per-line parse errors.
#
# Modules:
# --------
# - line_reader.py   → Lazy raw-line iteration over a source
# - record_parser.py → Strict per-line JSON decode, error accumulation
# - type_detector.py → JSON type names and string format detection
#
# ==============================================

from .line_reader import LineReader
from .record_parser import ParseError, ParsedRecord, ParseResult, RecordParser
from .type_detector import TypeDetector

__all__ = [
    "LineReader",
    "ParseError",
    "ParsedRecord",
    "ParseResult",
    "RecordParser",
    "TypeDetector",
]
