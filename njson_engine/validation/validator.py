# ==============================================
# Validator
# ==============================================
#
# PURPOSE:
#   Check decoded records against a SchemaDescriptor and return
#   structured findings. Purely structural: a field's declared
#   type is compared against the JSON type of its value, nested
#   values are not inspected further.
#
# FINDINGS:
# ---------
#   - MISSING_REQUIRED_FIELD → required field absent from the record
#   - TYPE_MISMATCH          → declared type != runtime type
#
#   Validation never raises; it always returns a report.
#
# ==============================================

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Optional

from njson_engine.reading.type_detector import TypeDetector
from .schema import SchemaDescriptor


class FindingKind(Enum):
    MISSING_REQUIRED_FIELD = "missing_required_field"
    TYPE_MISMATCH = "type_mismatch"


@dataclass
class ValidationFinding:
    """One structural problem with one record."""

    kind: FindingKind
    record_index: int  # 0-based position in the decoded record sequence
    field_name: str
    expected_type: Optional[str] = None
    actual_type: Optional[str] = None
    line_number: Optional[int] = None

    @property
    def message(self) -> str:
        if self.kind is FindingKind.MISSING_REQUIRED_FIELD:
            return f"Record {self.record_index}: Missing required field '{self.field_name}'"
        return (
            f"Record {self.record_index}: Field '{self.field_name}' "
            f"expected {self.expected_type}, got {self.actual_type}"
        )

    def to_dict(self) -> Dict[str, Any]:
        payload = {
            "kind": self.kind.value,
            "record_index": self.record_index,
            "field": self.field_name,
            "message": self.message,
        }
        if self.kind is FindingKind.TYPE_MISMATCH:
            payload["expected_type"] = self.expected_type
            payload["actual_type"] = self.actual_type
        if self.line_number is not None:
            payload["line_number"] = self.line_number
        return payload


@dataclass
class ValidationOutcome:
    findings: List[ValidationFinding] = field(default_factory=list)
    records_checked: int = 0

    @property
    def valid(self) -> bool:
        return not self.findings

    def to_dict(self) -> Dict[str, Any]:
        return {
            "valid": self.valid,
            "records_checked": self.records_checked,
            "finding_count": len(self.findings),
            "findings": [finding.to_dict() for finding in self.findings],
        }


class Validator:
    """Applies one SchemaDescriptor to any number of records."""

    def __init__(self, schema: SchemaDescriptor, type_detector: TypeDetector = None):
        self.schema = schema
        self.type_detector = type_detector or TypeDetector()

    def validate_record(self, record: Any, record_index: int, line_number: Optional[int] = None) -> List[ValidationFinding]:
        # Non-object records carry no fields
        fields = record if isinstance(record, Mapping) else {}
        findings = []

        for name in self.schema.required:
            if name not in fields:
                findings.append(ValidationFinding(
                    kind=FindingKind.MISSING_REQUIRED_FIELD,
                    record_index=record_index,
                    field_name=name,
                    line_number=line_number,
                ))

        for name, expected in self.schema.properties.items():
            if expected is None or name not in fields:
                continue
            actual = self.type_detector.detect(fields[name])
            if actual != expected:
                findings.append(ValidationFinding(
                    kind=FindingKind.TYPE_MISMATCH,
                    record_index=record_index,
                    field_name=name,
                    expected_type=expected,
                    actual_type=actual,
                    line_number=line_number,
                ))

        return findings

    def validate_records(self, records: Iterable[Any], line_numbers: Optional[List[int]] = None) -> ValidationOutcome:
        """
        Validate a record sequence.

        Args:
            records: Decoded records, in source order
            line_numbers: Optional source line numbers, parallel to records

        Returns:
            ValidationOutcome with every finding, in record order
        """
        outcome = ValidationOutcome()
        for index, record in enumerate(records):
            line_number = line_numbers[index] if line_numbers else None
            outcome.findings.extend(self.validate_record(record, index, line_number))
            outcome.records_checked += 1
        return outcome
