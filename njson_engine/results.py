# ==============================================
# ResultAssembler
# ==============================================
#
# PURPOSE:
#   Package parse output, validation findings, transform summaries
#   and analysis reports into the plain-dict shapes callers receive.
#   Every result carries an explicit "success" flag; failure results
#   carry the error and nothing else.
#
# VERBOSITY:
#   include_records=False → "records" holds the record count
#   include_errors=False  → "errors" holds the error count
#
# ANNOTATIONS:
#   Caller-supplied metadata (version strings, alignment constants,
#   ...) is injected at construction and attached as "meta" to every
#   result, untouched.
#
# ==============================================

from typing import Any, Dict, Mapping, Optional

from njson_engine.errors import NJSONError
from njson_engine.options import ProcessingOptions
from njson_engine.reading.record_parser import ParseResult
from njson_engine.validation.validator import ValidationOutcome


class ResultAssembler:

    def __init__(self, annotations: Optional[Mapping[str, Any]] = None):
        self.annotations = dict(annotations) if annotations else None

    # ======================================
    # Shared pieces
    # ======================================
    def _finish(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        if self.annotations is not None:
            payload["meta"] = dict(self.annotations)
        return payload

    @staticmethod
    def _counts(parsed: ParseResult) -> Dict[str, Any]:
        return {
            "total_lines": parsed.total_lines,
            "valid_count": parsed.valid_count,
            "error_count": parsed.error_count,
            "success_rate": parsed.success_rate,
        }

    @staticmethod
    def _errors(parsed: ParseResult, options: ProcessingOptions) -> Any:
        if options.include_errors:
            return [error.to_dict() for error in parsed.errors]
        return parsed.error_count

    # ======================================
    # Result shapes
    # ======================================
    def failure(self, error: NJSONError) -> Dict[str, Any]:
        return self._finish({"success": False, "error": error.to_dict()})

    def processing_result(self, parsed: ParseResult, options: ProcessingOptions, source: str = "") -> Dict[str, Any]:
        payload = {"success": True, "source": source}
        payload.update(self._counts(parsed))
        payload["records"] = parsed.values if options.include_records else parsed.valid_count
        payload["errors"] = self._errors(parsed, options)
        return self._finish(payload)

    def validation_report(
        self,
        parsed: ParseResult,
        options: ProcessingOptions,
        outcome: Optional[ValidationOutcome] = None,
        statistics: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """
        valid is True only when no line failed to decode and the schema
        (if any) produced no findings.
        """
        schema_valid = outcome.valid if outcome is not None else True
        payload = {
            "success": True,
            "valid": parsed.error_count == 0 and schema_valid,
        }
        payload.update(self._counts(parsed))
        payload["errors"] = self._errors(parsed, options)
        payload["statistics"] = dict(statistics or {})
        if outcome is not None:
            payload["schema_validation"] = outcome.to_dict()
        return self._finish(payload)

    def transform_summary(
        self,
        parsed: ParseResult,
        options: ProcessingOptions,
        transform_type: str,
        output_records: int,
        destination: Optional[str] = None,
        output: Optional[str] = None,
    ) -> Dict[str, Any]:
        payload = {
            "success": True,
            "input_records": parsed.valid_count,
            "output_records": output_records,
            "transform_type": transform_type,
            "domain_tagging": options.domain_tagging,
            "destination": destination,
            "error_count": parsed.error_count,
            "errors": self._errors(parsed, options),
        }
        if output is not None:
            payload["output"] = output
        return self._finish(payload)

    def analysis_result(
        self,
        parsed: ParseResult,
        options: ProcessingOptions,
        analysis_type: str,
        report: Dict[str, Any],
    ) -> Dict[str, Any]:
        payload = {
            "success": True,
            "analysis_type": analysis_type,
            "results": report,
            "framework_translation": options.framework_translation,
        }
        payload.update(self._counts(parsed))
        payload["errors"] = self._errors(parsed, options)
        return self._finish(payload)
