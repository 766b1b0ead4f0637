# ==============================================
# Reports (Data Classes)
# ==============================================
#
# PURPOSE:
#   Data classes that represent the OUTPUT of analysis. One report
#   type per analysis kind; every report serializes with to_dict()
#   so the Result Assembler can hand it to the caller as plain JSON.
#
# ENUMS:
# ------
# - AnalysisKind(Enum): STRUCTURE, PATTERNS, STATISTICS, ANOMALIES
#
# CLASSES:
# --------
# - SchemaBucket       → one inferred schema + how many records had it
# - StructureReport    → unique_schemas, schema_distribution
# - PatternReport      → common_fields, data_types, value_patterns
# - SizeDistribution   → min / max / average / median serialized size
# - StatisticsReport   → total_records, average_fields, sizes, frequency
# - RecordAnomaly      → one record's missing / extra fields
# - AnomalyReport      → anomaly_count, first N anomalies
#
# ==============================================

from enum import Enum
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from njson_engine.errors import UnknownAnalysis


class AnalysisKind(Enum):
    """
    The four supported analyses.
    """
    STRUCTURE = "structure"
    PATTERNS = "patterns"
    STATISTICS = "statistics"
    ANOMALIES = "anomalies"

    @classmethod
    def resolve(cls, kind: Union["AnalysisKind", str, None]) -> "AnalysisKind":
        if isinstance(kind, cls):
            return kind
        try:
            return cls(str(kind).strip().lower())
        except ValueError:
            raise UnknownAnalysis(kind) from None


@dataclass
class SchemaBucket:
    schema: Dict[str, str]  # field_name → type name, as first seen
    count: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {"schema": dict(self.schema), "count": self.count}


@dataclass
class StructureReport:
    """Records grouped by inferred schema, in first-seen order."""

    schema_distribution: List[SchemaBucket] = field(default_factory=list)
    kind = AnalysisKind.STRUCTURE

    @property
    def unique_schemas(self) -> int:
        return len(self.schema_distribution)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "unique_schemas": self.unique_schemas,
            "schema_distribution": [bucket.to_dict() for bucket in self.schema_distribution],
        }


@dataclass
class PatternReport:
    common_fields: Dict[str, int] = field(default_factory=dict)
    # field_name → occurrence count
    data_types: Dict[str, str] = field(default_factory=dict)
    # field_name → type on the most recent record carrying it
    value_patterns: Dict[str, Dict[str, int]] = field(default_factory=dict)
    # field_name → {format: count}, string values only
    kind = AnalysisKind.PATTERNS

    def to_dict(self) -> Dict[str, Any]:
        return {
            "common_fields": dict(self.common_fields),
            "value_patterns": {name: dict(counts) for name, counts in self.value_patterns.items()},
            "data_types": dict(self.data_types),
        }


@dataclass
class SizeDistribution:
    """
    Serialized record sizes in bytes. All values are None for an empty
    record set; median is the upper median (index n // 2 of the sorted sizes).
    """

    min: Optional[int] = None
    max: Optional[int] = None
    average: Optional[float] = None
    median: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "min": self.min,
            "max": self.max,
            "average": self.average,
            "median": self.median,
        }


@dataclass
class StatisticsReport:
    total_records: int = 0
    average_fields: Optional[float] = None  # None when total_records == 0
    size_distribution: SizeDistribution = field(default_factory=SizeDistribution)
    field_frequency: Dict[str, int] = field(default_factory=dict)
    kind = AnalysisKind.STATISTICS

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_records": self.total_records,
            "average_fields": self.average_fields,
            "size_distribution": self.size_distribution.to_dict(),
            "field_frequency": dict(self.field_frequency),
        }


@dataclass
class RecordAnomaly:
    record_index: int  # 0-based position in the decoded record sequence
    missing_fields: List[str] = field(default_factory=list)
    extra_fields: List[str] = field(default_factory=list)
    line_number: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        payload = {
            "record_index": self.record_index,
            "missing_fields": list(self.missing_fields),
            "extra_fields": list(self.extra_fields),
        }
        if self.line_number is not None:
            payload["line_number"] = self.line_number
        return payload


@dataclass
class AnomalyReport:
    anomaly_count: int = 0
    anomalies: List[RecordAnomaly] = field(default_factory=list)  # first N only
    common_fields: List[str] = field(default_factory=list)
    rare_fields: List[str] = field(default_factory=list)
    kind = AnalysisKind.ANOMALIES

    def to_dict(self) -> Dict[str, Any]:
        return {
            "anomaly_count": self.anomaly_count,
            "anomalies": [anomaly.to_dict() for anomaly in self.anomalies],
            "common_fields": list(self.common_fields),
            "rare_fields": list(self.rare_fields),
        }


AnalysisReport = Union[StructureReport, PatternReport, StatisticsReport, AnomalyReport]
