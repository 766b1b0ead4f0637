# ==============================================
# TOPIC 4: ANALYSIS
# ==============================================
#
# This package observes decoded records and produces structural
# reports: schema distribution, field / pattern frequency,
# statistical summaries and anomaly detection.
#
# Two-step process:
#   Step 1 (Observation): FieldAnalyzer builds FieldStats per field
#   Step 2 (Reporting):   Analyzer turns stats into a report
#
# Modules:
# --------
# - field_stats.py    → Statistics for one field
# - field_analyzer.py → Observe records, accumulate stats per field
# - reports.py        → AnalysisKind and the report data classes
# - analyzer.py       → The four analyses
# - translation.py    → Cosmetic word substitution over reports
#
# ==============================================

from .analyzer import Analyzer, canonical_schema, infer_schema, serialized_size
from .field_analyzer import FieldAnalyzer
from .field_stats import FieldStats
from .reports import (
    AnalysisKind,
    AnomalyReport,
    PatternReport,
    RecordAnomaly,
    SchemaBucket,
    SizeDistribution,
    StatisticsReport,
    StructureReport,
)
from .translation import apply_translation, translate_text

__all__ = [
    "AnalysisKind",
    "Analyzer",
    "AnomalyReport",
    "FieldAnalyzer",
    "FieldStats",
    "PatternReport",
    "RecordAnomaly",
    "SchemaBucket",
    "SizeDistribution",
    "StatisticsReport",
    "StructureReport",
    "apply_translation",
    "canonical_schema",
    "infer_schema",
    "serialized_size",
    "translate_text",
]
