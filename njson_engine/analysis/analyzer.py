# ==============================================
# Analyzer
# ==============================================
#
# PURPOSE:
#   Produce structural reports over a fully materialized record
#   sequence. Reads evidence from FieldAnalyzer, applies the
#   anomaly thresholds, and returns one report per call.
#
# ANALYSES:
# ---------
#   - structure  → infer field→type schema per record, bucket
#                  records by canonical (key-order independent)
#                  schema serialization, first-seen order
#   - patterns   → field occurrence counts, last-seen type per
#                  field, recognized string formats per field
#   - statistics → record count, mean field count, serialized
#                  size distribution (upper median), frequency
#   - anomalies  → per record: common fields it lacks, and rare
#                  fields it carries; first N anomalous records
#
#   RULES (anomalies):
#     common field: presence >  common_field_ratio * total
#     rare field:   presence <= rare_field_ratio   * total
#
# ==============================================

import json
import logging
from typing import Any, Dict, List, Mapping, Optional, Union

from njson_engine.config import AnomalyThresholds
from njson_engine.logging_utils import log_event
from njson_engine.reading.type_detector import TypeDetector
from .field_analyzer import FieldAnalyzer, record_fields
from .reports import (
    AnalysisKind,
    AnalysisReport,
    AnomalyReport,
    PatternReport,
    RecordAnomaly,
    SchemaBucket,
    SizeDistribution,
    StatisticsReport,
    StructureReport,
)

logger = logging.getLogger(__name__)

ROOT_VALUE_KEY = "$value"


def infer_schema(record: Any, type_detector: Optional[TypeDetector] = None) -> Dict[str, str]:
    """
    Field → type name for one record.

    Non-object records get a single-entry schema keyed by "$value".
    """
    type_detector = type_detector or TypeDetector()
    if isinstance(record, Mapping):
        return {key: type_detector.detect(value) for key, value in record.items()}
    return {ROOT_VALUE_KEY: type_detector.detect(record)}


def canonical_schema(schema: Dict[str, str]) -> str:
    """Grouping key for a schema; independent of key order."""
    return json.dumps(schema, sort_keys=True, separators=(",", ":"))


def serialized_size(record: Any) -> int:
    """Byte length of the compact UTF-8 JSON serialization."""
    return len(json.dumps(record, ensure_ascii=False, separators=(",", ":")).encode("utf-8"))


class Analyzer:
    """
    Runs one of the four analyses over decoded records.
    """

    def __init__(self, thresholds: AnomalyThresholds = None, type_detector: TypeDetector = None):
        """
        Args:
            thresholds: Optional AnomalyThresholds. Defaults: >50% common,
                        <=10% rare, 10 anomalies reported.
            type_detector: Optional TypeDetector instance
        """
        self.thresholds = thresholds or AnomalyThresholds()
        self.type_detector = type_detector or TypeDetector()

    def analyze(
        self,
        kind: Union[AnalysisKind, str],
        records: List[Any],
        line_numbers: Optional[List[int]] = None,
    ) -> AnalysisReport:
        """
        Run the requested analysis.

        Args:
            kind: Analysis kind (enum or its string name)
            records: Decoded records, in source order
            line_numbers: Optional source line numbers, parallel to records

        Returns:
            The report matching the analysis kind

        Raises:
            UnknownAnalysis: kind is not recognized
        """
        kind = AnalysisKind.resolve(kind)

        if kind is AnalysisKind.STRUCTURE:
            report = self.analyze_structure(records)
        elif kind is AnalysisKind.PATTERNS:
            report = self.analyze_patterns(records)
        elif kind is AnalysisKind.STATISTICS:
            report = self.analyze_statistics(records)
        else:
            report = self.analyze_anomalies(records, line_numbers)

        log_event(logger, logging.INFO, "analysis_finished", kind=kind.value, records=len(records))
        return report

    def analyze_structure(self, records: List[Any]) -> StructureReport:
        buckets: Dict[str, SchemaBucket] = {}
        for record in records:
            schema = infer_schema(record, self.type_detector)
            key = canonical_schema(schema)
            if key not in buckets:
                buckets[key] = SchemaBucket(schema=schema)
            buckets[key].count += 1
        return StructureReport(schema_distribution=list(buckets.values()))

    def analyze_patterns(self, records: List[Any]) -> PatternReport:
        observer = self._observe(records)
        return PatternReport(
            common_fields=observer.field_frequency(),
            data_types=observer.data_types(),
            value_patterns=observer.value_patterns(),
        )

    def analyze_statistics(self, records: List[Any]) -> StatisticsReport:
        observer = self._observe(records)
        total = len(records)

        if total == 0:
            return StatisticsReport(total_records=0, field_frequency=observer.field_frequency())

        field_total = sum(len(record_fields(record)) for record in records)
        return StatisticsReport(
            total_records=total,
            average_fields=field_total / total,
            size_distribution=self._size_distribution(records),
            field_frequency=observer.field_frequency(),
        )

    def analyze_anomalies(self, records: List[Any], line_numbers: Optional[List[int]] = None) -> AnomalyReport:
        observer = self._observe(records)
        frequency = observer.field_frequency()
        total = len(records)

        common_limit = total * self.thresholds.common_field_ratio
        rare_limit = total * self.thresholds.rare_field_ratio
        common = [name for name, count in frequency.items() if count > common_limit]
        rare = {name for name, count in frequency.items() if count <= rare_limit}

        report = AnomalyReport(common_fields=common, rare_fields=[n for n in frequency if n in rare])
        for index, record in enumerate(records):
            present = record_fields(record)
            present_set = set(present)
            missing = [name for name in common if name not in present_set]
            extra = [name for name in present if name in rare]
            if not missing and not extra:
                continue

            report.anomaly_count += 1
            if len(report.anomalies) < self.thresholds.max_reported:
                report.anomalies.append(RecordAnomaly(
                    record_index=index,
                    missing_fields=missing,
                    extra_fields=extra,
                    line_number=line_numbers[index] if line_numbers else None,
                ))

        return report

    def _observe(self, records: List[Any]) -> FieldAnalyzer:
        observer = FieldAnalyzer(self.type_detector)
        observer.analyze_batch(records)
        return observer

    @staticmethod
    def _size_distribution(records: List[Any]) -> SizeDistribution:
        sizes = sorted(serialized_size(record) for record in records)
        return SizeDistribution(
            min=sizes[0],
            max=sizes[-1],
            average=sum(sizes) / len(sizes),
            median=sizes[len(sizes) // 2],
        )
