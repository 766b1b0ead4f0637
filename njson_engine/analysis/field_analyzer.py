# ==============================================
# FieldAnalyzer
# ==============================================
#
# PURPOSE:
#   Observe a sequence of decoded records and accumulate
#   per-field statistics (FieldStats). This is the observation
#   engine that the Analyzer's reports are built on.
#
# CLASS: FieldAnalyzer
# --------------------
#   Stateful for the duration of one analysis call.
#
#   Attributes:
#   -----------
#   - stats: dict[str, FieldStats]  → Field stats, in first-seen order
#   - total_records: int            → Records observed
#
#   Methods:
#   --------
#   - analyze_batch(records) -> None
#   - field_frequency() -> dict[str, int]
#   - data_types() -> dict[str, str]        (last-write-wins)
#   - value_patterns() -> dict[str, dict]
#
#   Only top-level keys of object records are observed; other
#   JSON values count as records with no fields.
#
# ==============================================

from typing import Any, Dict, List, Mapping

from njson_engine.reading.type_detector import TypeDetector
from .field_stats import FieldStats


def record_fields(record: Any) -> List[str]:
    """Top-level field names of a record; empty for non-object values."""
    if isinstance(record, Mapping):
        return list(record.keys())
    return []


class FieldAnalyzer:
    """
    Observes decoded records and accumulates field statistics.
    """

    def __init__(self, type_detector: TypeDetector = None):
        self.type_detector = type_detector or TypeDetector()
        self.stats: Dict[str, FieldStats] = {}
        self.total_records: int = 0

    def analyze_batch(self, records: List[Any]) -> None:
        """
        Analyze a batch of records and accumulate statistics.

        Args:
            records: Decoded records, in source order
        """
        for record in records:
            if isinstance(record, Mapping):
                self._analyze_single_record(record)
            self.total_records += 1

    def _analyze_single_record(self, record: Mapping) -> None:
        for key, value in record.items():
            detected_type = self.type_detector.detect(value)
            detected_format = self.type_detector.detect_format(value)

            if key not in self.stats:
                self.stats[key] = FieldStats(name=key)

            self.stats[key].update(detected_type, detected_format)

    def field_frequency(self) -> Dict[str, int]:
        return {name: s.presence_count for name, s in self.stats.items()}

    def data_types(self) -> Dict[str, str]:
        return {name: s.last_type for name, s in self.stats.items()}

    def value_patterns(self) -> Dict[str, Dict[str, int]]:
        return {name: dict(s.format_counts) for name, s in self.stats.items() if s.format_counts}
