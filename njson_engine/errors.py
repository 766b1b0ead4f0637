# ==============================================
# Error Taxonomy
# ==============================================
#
# Every invocation-fatal condition is an NJSONError subclass.
# The processor catches these and turns them into a
# {"success": False, "error": {...}} result; per-line decode
# problems are plain data (ParseError) and only become a
# DecodeError when the caller asked for fail-fast parsing.
#
# - SourceUnavailable  → source path / handle cannot be opened
# - DecodeError        → first malformed line in fail-fast mode
# - UnknownTransform   → unsupported transform kind
# - UnknownAnalysis    → unsupported analysis kind
# - SchemaError        → unreadable or malformed schema descriptor
# - InvalidOperation   → transform operation is not callable
# - DestinationUnavailable → transform output cannot be written
#
# ==============================================

from typing import Any, Dict, Optional


class NJSONError(Exception):
    """Base class for errors that abort a whole engine call."""

    code = "njson_error"

    def __init__(self, message: str, **details: Any):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> Dict[str, Any]:
        payload = {
            "code": self.code,
            "type": type(self).__name__,
            "message": self.message,
        }
        if self.details:
            payload["details"] = dict(self.details)
        return payload


class SourceUnavailable(NJSONError):
    code = "source_unavailable"


class DecodeError(NJSONError):
    """Raised for the first malformed line when fail-fast parsing is on."""

    code = "decode_error"

    def __init__(self, parse_error):
        super().__init__(
            f"Line {parse_error.line_number}: {parse_error.message}",
            line_number=parse_error.line_number,
        )
        self.parse_error = parse_error

    def to_dict(self) -> Dict[str, Any]:
        payload = super().to_dict()
        payload["details"] = self.parse_error.to_dict()
        return payload


class UnknownTransform(NJSONError):
    code = "unknown_transform"

    def __init__(self, kind: Optional[str]):
        super().__init__(f"Unknown transform type: {kind}", kind=kind)


class UnknownAnalysis(NJSONError):
    code = "unknown_analysis"

    def __init__(self, kind: Optional[str]):
        super().__init__(f"Unknown analysis type: {kind}", kind=kind)


class SchemaError(NJSONError):
    code = "schema_error"


class InvalidOperation(NJSONError):
    """The transform operation handed in is not callable."""

    code = "invalid_operation"


class DestinationUnavailable(NJSONError):
    code = "destination_unavailable"
