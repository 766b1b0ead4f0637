# ==============================================
# Tests for Analyzer Module
# ==============================================

import pytest

from njson_engine.config import AnomalyThresholds
from njson_engine.errors import UnknownAnalysis
from njson_engine.analysis import (
    AnalysisKind,
    Analyzer,
    FieldAnalyzer,
    PatternReport,
    apply_translation,
    canonical_schema,
    infer_schema,
    serialized_size,
    translate_text,
)


class TestFieldAnalyzer:

    def test_presence_frequency(self, sample_records):
        analyzer = FieldAnalyzer()
        analyzer.analyze_batch(sample_records)

        assert analyzer.total_records == 3
        assert analyzer.field_frequency() == {
            "username": 3, "age": 2, "city": 2, "score": 1, "tags": 1,
        }

    def test_type_drift_keeps_last_type(self):
        analyzer = FieldAnalyzer()
        analyzer.analyze_batch([{"v": 1}, {"v": 2}, {"v": "3"}, {"v": None}])

        assert analyzer.data_types() == {"v": "null"}
        assert analyzer.stats["v"].presence_count == 4

    def test_non_object_records_count_without_fields(self):
        analyzer = FieldAnalyzer()
        analyzer.analyze_batch([{"a": 1}, 5, "x"])
        assert analyzer.total_records == 3
        assert list(analyzer.stats) == ["a"]


class TestSchemaInference:

    def test_infer_schema(self):
        assert infer_schema({"a": 1, "b": "x", "c": None}) == {"a": "number", "b": "string", "c": "null"}
        assert infer_schema([1]) == {"$value": "array"}

    def test_key_order_does_not_matter(self):
        first = infer_schema({"a": 1, "b": "x"})
        second = infer_schema({"b": "y", "a": 2})
        assert canonical_schema(first) == canonical_schema(second)


class TestStructureAnalysis:

    def test_distribution_in_first_seen_order(self):
        records = [{"a": 1, "b": "x"}, {"b": "y", "a": 2}, {"a": "z"}]
        report = Analyzer().analyze("structure", records).to_dict()

        assert report["unique_schemas"] == 2
        assert report["schema_distribution"] == [
            {"schema": {"a": "number", "b": "string"}, "count": 2},
            {"schema": {"a": "string"}, "count": 1},
        ]

    def test_empty_input(self):
        assert Analyzer().analyze("structure", []).to_dict() == {"unique_schemas": 0, "schema_distribution": []}


class TestPatternAnalysis:

    def test_common_fields_and_last_write_wins_types(self):
        records = [{"a": 1}, {"a": "x", "b": None}, {"b": True}]
        report = Analyzer().analyze(AnalysisKind.PATTERNS, records)

        assert isinstance(report, PatternReport)
        assert report.common_fields == {"a": 2, "b": 2}
        assert report.data_types == {"a": "string", "b": "boolean"}

    def test_value_patterns(self):
        records = [
            {"ip": "10.0.0.1", "id": "473af720-92e2-4c52-9825-db272121d36d", "n": "bob"},
            {"ip": "10.0.0.2", "id": 7},
        ]
        report = Analyzer().analyze("patterns", records).to_dict()
        assert report["value_patterns"] == {"ip": {"ip": 2}, "id": {"uuid": 1}}


class TestStatisticsAnalysis:

    def test_basic_statistics(self):
        records = [{"a": 1}, {"a": 1, "b": 2}]
        report = Analyzer().analyze("statistics", records).to_dict()

        assert report["total_records"] == 2
        assert report["average_fields"] == 1.5
        assert report["size_distribution"] == {"min": 7, "max": 13, "average": 10.0, "median": 13}
        assert report["field_frequency"] == {"a": 2, "b": 1}

    def test_upper_median(self):
        # '{"s":""}' is 8 bytes, so these serialize to 40, 10, 30, 20 bytes
        records = [{"s": "x" * k} for k in (32, 2, 22, 12)]
        assert [serialized_size(r) for r in records] == [40, 10, 30, 20]

        sizes = Analyzer().analyze("statistics", records).to_dict()["size_distribution"]
        assert sizes["median"] == 30
        assert sizes["min"] == 10
        assert sizes["max"] == 40
        assert sizes["average"] == 25.0

    def test_sizes_are_utf8_bytes(self):
        assert serialized_size({"s": "é"}) == len('{"s":"é"}'.encode("utf-8"))

    def test_empty_input_has_no_averages(self):
        report = Analyzer().analyze("statistics", []).to_dict()
        assert report["total_records"] == 0
        assert report["average_fields"] is None
        assert report["size_distribution"] == {"min": None, "max": None, "average": None, "median": None}


class TestAnomalyAnalysis:

    def test_rare_field_at_ten_percent_is_extra(self):
        records = [{"id": i, "name": f"n{i}"} for i in range(10)]
        records[3]["rare"] = True
        report = Analyzer().analyze("anomalies", records).to_dict()

        assert report["anomaly_count"] == 1
        assert report["anomalies"] == [{"record_index": 3, "missing_fields": [], "extra_fields": ["rare"]}]

    def test_stricter_rare_ratio_excludes_boundary(self):
        records = [{"id": i} for i in range(10)]
        records[0]["rare"] = True
        analyzer = Analyzer(AnomalyThresholds(rare_field_ratio=0.05))
        assert analyzer.analyze("anomalies", records).anomaly_count == 0

    def test_missing_common_field(self):
        records = [{"id": i, "name": "x"} for i in range(9)] + [{"id": 9}]
        report = Analyzer().analyze("anomalies", records)

        assert report.common_fields == ["id", "name"]
        assert report.anomaly_count == 1
        assert report.anomalies[0].record_index == 9
        assert report.anomalies[0].missing_fields == ["name"]
        assert report.anomalies[0].extra_fields == []

    def test_half_presence_is_not_common(self):
        records = [{"a": 1, "b": 1}, {"a": 1, "b": 1}, {"a": 1}, {"a": 1}]
        report = Analyzer().analyze("anomalies", records)
        assert report.common_fields == ["a"]
        assert report.anomaly_count == 0

    def test_only_first_ten_reported(self):
        records = [{"k": 1, f"u{i}": i} for i in range(15)] + [{"k": 1} for _ in range(5)]
        report = Analyzer().analyze("anomalies", records, line_numbers=list(range(1, 21)))

        assert report.anomaly_count == 15
        assert [a.record_index for a in report.anomalies] == list(range(10))
        assert report.anomalies[0].line_number == 1


class TestAnalyzerDispatch:

    def test_unknown_kind(self):
        with pytest.raises(UnknownAnalysis):
            Analyzer().analyze("vibes", [])


class TestTranslation:

    def test_translate_text(self):
        assert translate_text("Error: operation failed, warning") == "issue detected: operation blocked, attention required"
        assert translate_text("Successful") == "completed"

    def test_apply_translation_keeps_report(self):
        report = {"error_count": 1}
        translated = apply_translation(report)

        assert translated["error_count"] == 1
        assert translated["summary"] == '{"issue detected_count": 1}'
        assert translated["communication_style"] == "professional"
        assert report == {"error_count": 1}
