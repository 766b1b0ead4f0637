# ==============================================
# Tests for Reading Module
# ==============================================

import io
import json

import pytest

from njson_engine.errors import DecodeError, SourceUnavailable
from njson_engine.reading import LineReader, RecordParser, TypeDetector
from njson_engine.reading.record_parser import format_error_message, preview_line


class TestLineReader:

    def test_reads_file_lazily_per_line(self, write_ndjson):
        path = write_ndjson(['{"a": 1}', '{"b": 2}'])
        assert list(LineReader(path)) == ['{"a": 1}', '{"b": 2}']

    def test_file_source_is_restartable(self, write_ndjson):
        reader = LineReader(str(write_ndjson(['{"a": 1}'])))
        assert list(reader) == list(reader) == ['{"a": 1}']

    def test_strips_crlf_only(self, tmp_path):
        path = tmp_path / "crlf.ndjson"
        path.write_bytes(b'{"a":1}\r\n  {"b":2}  \n')
        assert list(LineReader(path)) == ['{"a":1}', '  {"b":2}  ']

    def test_bytes_buffer(self):
        assert list(LineReader(b'{"a":1}\n{"b":2}')) == ['{"a":1}', '{"b":2}']

    def test_text_buffer(self):
        assert list(LineReader.from_text('1\n2\n')) == ["1", "2"]

    def test_stream_source(self):
        assert list(LineReader(io.StringIO('x\ny\n'))) == ["x", "y"]

    def test_missing_path_raises_source_unavailable(self, tmp_path):
        reader = LineReader(tmp_path / "nope.ndjson")
        with pytest.raises(SourceUnavailable):
            list(reader)

    def test_none_source(self):
        with pytest.raises(SourceUnavailable):
            LineReader(None)

    def test_str_with_line_breaks_is_text(self):
        reader = LineReader('{"a":1}\nbad\n{"b":2}')
        assert not reader.is_path
        assert list(reader) == ['{"a":1}', "bad", '{"b":2}']

    def test_str_naming_no_file_is_text(self):
        assert list(LineReader('{"a":1}')) == ['{"a":1}']

    def test_undecodable_byte_in_file_is_replaced(self, tmp_path):
        path = tmp_path / "latin.ndjson"
        path.write_bytes(b'{"a":1}\n{"b":"\xff"}\n{"c":3}\n')
        assert list(LineReader(path)) == ['{"a":1}', '{"b":"\ufffd"}', '{"c":3}']

    def test_undecodable_byte_in_byte_stream_is_replaced(self):
        reader = LineReader([b'{"a":1}\n', b'{"b":"\xff"}\n'])
        assert list(reader) == ['{"a":1}', '{"b":"\ufffd"}']

    def test_undecodable_byte_in_buffer_is_replaced(self):
        assert list(LineReader(b'{"b":"\xff"}')) == ['{"b":"\ufffd"}']


class TestRecordParser:

    def test_well_formed_input(self):
        lines = ['{"a": 1}', '{"b": [1, 2]}', '"text"', '42']
        result = RecordParser().parse(lines)

        assert result.valid_count == 4
        assert result.error_count == 0
        assert result.errors == []
        assert result.values == [{"a": 1}, {"b": [1, 2]}, "text", 42]

    def test_malformed_line_is_accumulated(self):
        result = RecordParser().parse(['{"a":1}', 'bad', '{"b":2}'])

        assert result.valid_count == 2
        assert result.error_count == 1
        assert result.total_lines == 3
        assert result.errors[0].line_number == 2
        assert result.errors[0].raw_content == "bad"
        assert result.values == [{"a": 1}, {"b": 2}]

    def test_records_keep_line_numbers(self):
        result = RecordParser().parse(['{"a":1}', '', 'oops', '{"b":2}'])
        assert [p.line_number for p in result.records] == [1, 4]
        assert result.records[1].original == '{"b":2}'

    def test_blank_lines_are_skipped_and_uncounted(self):
        result = RecordParser().parse(['{"a":1}', '', '   ', '\t', '{"b":2}'])

        assert result.total_lines == 5
        assert result.valid_count == 2
        assert result.error_count == 0
        assert result.valid_count + result.error_count <= result.total_lines

    def test_error_line_numbers_strictly_increase(self):
        result = RecordParser().parse(['x', '{"ok":1}', '{', '', '[1,'])
        numbers = [e.line_number for e in result.errors]
        assert numbers == [1, 3, 5]

    def test_non_standard_constants_rejected(self):
        result = RecordParser().parse(['{"a": NaN}', '[Infinity]'])
        assert result.error_count == 2
        assert "INCORRECT" in result.errors[0].message

    def test_deep_nesting_is_a_line_error(self):
        result = RecordParser().parse(['{"a":1}', "[" * 100000, '{"b":2}'])

        assert result.valid_count == 2
        assert result.error_count == 1
        assert result.errors[0].line_number == 2
        assert result.errors[0].message == "Nesting too deep to decode"
        assert result.errors[0].raw_content == "[" * 50 + "..."

    def test_deep_nesting_stops_fail_fast(self):
        with pytest.raises(DecodeError) as ctx:
            RecordParser(fail_fast=True).parse(["[" * 100000])
        assert ctx.value.parse_error.line_number == 1

    def test_trailing_comma_rejected(self):
        result = RecordParser().parse(['{"a": 1,}'])
        assert result.error_count == 1

    def test_preview_is_truncated(self):
        line = '{"payload": "' + "x" * 100
        error = RecordParser(preview_length=50).parse([line]).errors[0]
        assert error.raw_content == line[:50] + "..."

    def test_fail_fast_stops_at_first_error(self):
        parser = RecordParser(fail_fast=True)
        with pytest.raises(DecodeError) as ctx:
            parser.parse(['{"a":1}', 'bad', 'also bad'])

        assert ctx.value.parse_error.line_number == 2

    def test_success_rate(self):
        assert RecordParser().parse(['1', 'x', '2', 'y']).success_rate == 0.5
        assert RecordParser().parse([]).success_rate == 1.0
        assert RecordParser().parse(['', ' ']).success_rate == 1.0

    def test_reparse_of_serialized_record_is_equal(self):
        original = {"a": [1, 2.5, None], "b": {"c": "ü", "d": True}}
        parsed = RecordParser().parse([json.dumps(original)]).values[0]
        again = RecordParser().parse([json.dumps(parsed)]).values[0]
        assert again == original


class TestErrorFormatting:

    def test_vocabulary_rewrite(self):
        message = "Error: parsing failed, invalid token, cannot continue"
        assert format_error_message(message) == "ISSUE: parsing BLOCKED, INCORRECT token, UNABLE continue"

    def test_short_preview_untouched(self):
        assert preview_line("short", 50) == "short"


class TestTypeDetector:

    @pytest.mark.parametrize("value, expected", [
        (None, "null"),
        (True, "boolean"),
        (3, "number"),
        (2.5, "number"),
        ("x", "string"),
        ([1], "array"),
        ({"a": 1}, "object"),
    ])
    def test_detect(self, value, expected):
        assert TypeDetector.detect(value) == expected

    @pytest.mark.parametrize("value, expected", [
        ("192.168.1.1", "ip"),
        ("473af720-92e2-4c52-9825-db272121d36d", "uuid"),
        ("2026-02-14T05:44:25", "datetime"),
        ("2024-01-02", "datetime"),
        ("john@example.com", "email"),
        ("https://example.com/a.jpg", "url"),
        ("plain words", None),
        (42, None),
    ])
    def test_detect_format(self, value, expected):
        assert TypeDetector.detect_format(value) == expected
