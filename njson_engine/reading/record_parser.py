# ==============================================
# RecordParser
# ==============================================
#
# PURPOSE:
#   Decode each non-blank raw line into a JSON value and
#   accumulate per-line errors without aborting the stream.
#
# PROCESS (per line, 1-based line numbers):
# -----------------------------------------
#   1. Blank / whitespace-only line → skipped, counted nowhere
#   2. Strict JSON decode (no NaN / Infinity constants; nesting
#      beyond the interpreter's recursion limit is a line error)
#   3. Success → ParsedRecord(line_number, original, record)
#   4. Failure → ParseError(line_number, preview, message)
#      In fail-fast mode the first failure raises DecodeError.
#
# DATA CLASSES:
# -------------
# - ParseError    → one malformed line
# - ParsedRecord  → one decoded line
# - ParseResult   → records + errors + total_lines
#
# ==============================================

import json
import logging
import re
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List

from njson_engine.errors import DecodeError
from njson_engine.logging_utils import log_event

logger = logging.getLogger(__name__)

ELLIPSIS = "..."

# Human-facing error vocabulary
_MESSAGE_REWRITES = [
    (re.compile(r"error", re.IGNORECASE), "ISSUE"),
    (re.compile(r"failed", re.IGNORECASE), "BLOCKED"),
    (re.compile(r"invalid", re.IGNORECASE), "INCORRECT"),
    (re.compile(r"cannot", re.IGNORECASE), "UNABLE"),
]


def format_error_message(message: str) -> str:
    """Rewrite a decoder message into the engine's error vocabulary."""
    for pattern, replacement in _MESSAGE_REWRITES:
        message = pattern.sub(replacement, message)
    return message


def preview_line(line: str, limit: int = 50) -> str:
    if len(line) <= limit:
        return line
    return line[:limit] + ELLIPSIS


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Invalid constant {name}")


def decode_line(line: str) -> Any:
    """Strict JSON decode of one line."""
    return json.loads(line, parse_constant=_reject_constant)


@dataclass
class ParseError:
    """A line that could not be decoded."""

    line_number: int
    raw_content: str  # Truncated preview of the original line
    message: str      # Normalized, human-facing message
    detail: str = ""  # Decoder message as produced

    def to_dict(self) -> Dict[str, Any]:
        return {
            "line_number": self.line_number,
            "raw_content": self.raw_content,
            "message": self.message,
            "detail": self.detail,
        }


@dataclass
class ParsedRecord:
    """A decoded line, tagged with its position in the source."""

    line_number: int
    original: str
    record: Any


@dataclass
class ParseResult:
    """Everything one pass over the source produced."""

    records: List[ParsedRecord] = field(default_factory=list)
    errors: List[ParseError] = field(default_factory=list)
    total_lines: int = 0

    @property
    def valid_count(self) -> int:
        return len(self.records)

    @property
    def error_count(self) -> int:
        return len(self.errors)

    @property
    def success_rate(self) -> float:
        """
        valid / (valid + errors), defined as 1.0 when nothing was parsed.
        """
        attempted = self.valid_count + self.error_count
        if attempted == 0:
            return 1.0
        return self.valid_count / attempted

    @property
    def values(self) -> List[Any]:
        """The decoded records, in source order."""
        return [parsed.record for parsed in self.records]


class RecordParser:
    """
    Decodes raw lines into records, collecting errors as data.
    """

    def __init__(self, preview_length: int = 50, fail_fast: bool = False):
        self.preview_length = preview_length
        self.fail_fast = fail_fast

    def parse(self, lines: Iterable[str]) -> ParseResult:
        """
        Parse every line of a source.

        Args:
            lines: Raw lines, typically from a LineReader

        Returns:
            ParseResult with decoded records, errors and line count

        Raises:
            DecodeError: on the first malformed line when fail_fast is set
            SourceUnavailable: propagated from the line source
        """
        result = ParseResult()

        for line_number, line in enumerate(lines, start=1):
            result.total_lines = line_number

            if not line.strip():
                continue

            try:
                record = decode_line(line)
            except (ValueError, RecursionError) as exc:
                error = self._build_error(line_number, line, exc)
                log_event(logger, logging.DEBUG, "line_rejected", line_number=line_number, detail=error.detail)
                if self.fail_fast:
                    raise DecodeError(error) from exc
                result.errors.append(error)
                continue

            result.records.append(ParsedRecord(line_number=line_number, original=line, record=record))

        log_event(
            logger,
            logging.INFO,
            "parse_finished",
            total_lines=result.total_lines,
            valid_count=result.valid_count,
            error_count=result.error_count,
        )
        return result

    def _build_error(self, line_number: int, line: str, exc: Exception) -> ParseError:
        if isinstance(exc, json.JSONDecodeError):
            detail = f"{exc.msg} at column {exc.colno}"
        elif isinstance(exc, RecursionError):
            detail = "Nesting too deep to decode"
        else:
            detail = str(exc)
        return ParseError(
            line_number=line_number,
            raw_content=preview_line(line, self.preview_length),
            message=format_error_message(detail),
            detail=detail,
        )
