# ==============================================
# NJSONProcessor - Orchestrator
# ==============================================
#
# PURPOSE:
#   This is the MAIN CLASS that ties the topics together behind
#   four entry points. Collaborators interact with this class (or
#   the module-level helpers) only. Everything else is internal.
#
# HOW IT CONNECTS THE TOPICS:
#
#   ┌──────────────────────────────────────────────────────────┐
#   │                     NJSONProcessor                       │
#   │                                                          │
#   │  ┌──────────────────────────────────────────────┐        │
#   │  │ TOPIC 1: READING                             │        │
#   │  │  LineReader → RecordParser → ParseResult     │        │
#   │  └──────────────┬───────────────────────────────┘        │
#   │                 │ records + errors (shared artifact)     │
#   │       ┌─────────┼──────────────┐                         │
#   │       ▼         ▼              ▼                         │
#   │  TOPIC 2:   TOPIC 3:       TOPIC 4:                      │
#   │  Validator  TransformEngine Analyzer                     │
#   │       └─────────┼──────────────┘                         │
#   │                 ▼                                        │
#   │          ResultAssembler  → dict with "success"          │
#   └──────────────────────────────────────────────────────────┘
#
#   Public Methods:
#   ---------------
#   - parse(source, options) -> dict
#   - validate(source, schema=None, options) -> dict
#   - transform(source, destination, kind, operation, options) -> dict
#   - analyze(source, kind, options) -> dict
#   - status() -> dict
#
#   Each call reads its source once, in a single pass, and keeps no
#   state afterwards. NJSONError conditions come back as
#   {"success": False, "error": {...}}; exceptions raised by caller
#   callables propagate unchanged.
#
# ==============================================

import logging
from typing import Any, Callable, Mapping, Optional, Union

from njson_engine import __version__
from njson_engine.analysis.analyzer import Analyzer
from njson_engine.analysis.reports import AnalysisKind
from njson_engine.analysis.translation import apply_translation
from njson_engine.config import EngineConfig, get_config
from njson_engine.errors import NJSONError
from njson_engine.logging_utils import log_event
from njson_engine.options import OptionsLike, ProcessingOptions, coerce_options
from njson_engine.reading.line_reader import LineReader, Source
from njson_engine.reading.record_parser import ParseResult, RecordParser
from njson_engine.results import ResultAssembler
from njson_engine.transform.domain_tagger import ChoiceSource, DomainTagger
from njson_engine.transform.engine import TransformEngine, TransformKind
from njson_engine.validation.schema import SchemaDescriptor
from njson_engine.validation.validator import Validator

logger = logging.getLogger(__name__)

CAPABILITIES = [
    "parse",
    "validate",
    "transform",
    "analyze",
    "domain_tagging",
    "framework_translation",
]


class NJSONProcessor:
    """
    Streaming NDJSON engine: parse, validate, transform and analyze.
    """

    def __init__(
        self,
        config: Optional[EngineConfig] = None,
        rng: Optional[ChoiceSource] = None,
        annotations: Optional[Mapping[str, Any]] = None,
    ):
        """
        Args:
            config: Engine configuration. If None, loads from environment.
            rng: Randomness source for domain tagging (anything with .choice)
            annotations: Caller metadata attached as "meta" to every result
        """
        self._config = config or get_config()
        self._assembler = ResultAssembler(annotations)
        self._rng = rng

    # ======================================
    # Entry points
    # ======================================
    def parse(self, source: Source, options: OptionsLike = None) -> dict:
        """
        Parse a source into records and per-line errors.

        Returns:
            ProcessingResult dict: records (or count), total_lines,
            valid_count, error_count, success_rate, errors (or count)
        """
        opts = coerce_options(options)
        try:
            reader = self._reader(source)
            parsed = self._read(reader, opts)
        except NJSONError as exc:
            return self._fail("parse", exc)
        return self._assembler.processing_result(parsed, opts, source=reader.description)

    def validate(
        self,
        source: Source,
        schema: Union[SchemaDescriptor, Mapping[str, Any], str, None] = None,
        options: OptionsLike = None,
    ) -> dict:
        """
        Check that every line decodes and, if a schema is given, that
        every record satisfies it.

        Args:
            source: Path, buffer or stream
            schema: SchemaDescriptor, decoded schema mapping, or schema file path

        Returns:
            ValidationReport dict
        """
        opts = coerce_options(options)
        try:
            descriptor = SchemaDescriptor.load(schema) if schema is not None else None
            parsed = self._read(self._reader(source), opts)
        except NJSONError as exc:
            return self._fail("validate", exc)

        records = parsed.values
        analyzer = self._analyzer()
        statistics = {
            "total_records": len(records),
            "unique_schemas": analyzer.analyze_structure(records).unique_schemas,
            "data_types": analyzer.analyze_patterns(records).data_types,
        }

        outcome = None
        if descriptor is not None:
            outcome = Validator(descriptor).validate_records(
                records, [p.line_number for p in parsed.records]
            )
            log_event(logger, logging.INFO, "validation_finished", findings=len(outcome.findings))

        return self._assembler.validation_report(parsed, opts, outcome, statistics)

    def transform(
        self,
        source: Source,
        destination: Any,
        kind: Union[TransformKind, str],
        operation: Callable[..., Any],
        options: OptionsLike = None,
    ) -> dict:
        """
        Apply filter / map / reduce / aggregate and write the result.

        Args:
            source: Path, buffer or stream
            destination: Output path or writable text handle; None returns
                         the serialized output in the summary instead
            kind: "filter", "map", "reduce" or "aggregate"
            operation: Caller callable (predicate, mapper, reducer, key fn)

        Returns:
            TransformSummary dict
        """
        opts = coerce_options(options)
        try:
            resolved = TransformKind.resolve(kind)
            parsed = self._read(self._reader(source), opts)
            engine = TransformEngine(DomainTagger(self._rng))
            output = engine.apply(resolved, parsed.values, operation, domain_tagging=opts.domain_tagging)
            text = engine.serialize(output, pretty=opts.pretty, indent=self._config.output.indent)
            written_to = engine.write(text, destination) if destination is not None else None
        except NJSONError as exc:
            return self._fail("transform", exc)

        return self._assembler.transform_summary(
            parsed,
            opts,
            transform_type=resolved.value,
            output_records=output.output_records,
            destination=written_to,
            output=text if destination is None else None,
        )

    def analyze(self, source: Source, kind: Union[AnalysisKind, str], options: OptionsLike = None) -> dict:
        """
        Run a structure / patterns / statistics / anomalies analysis.

        Returns:
            AnalysisResult dict with the report under "results"
        """
        opts = coerce_options(options)
        try:
            resolved = AnalysisKind.resolve(kind)
            parsed = self._read(self._reader(source), opts)
        except NJSONError as exc:
            return self._fail("analyze", exc)

        report = self._analyzer().analyze(
            resolved, parsed.values, [p.line_number for p in parsed.records]
        ).to_dict()
        if opts.framework_translation:
            report = apply_translation(report)

        return self._assembler.analysis_result(parsed, opts, resolved.value, report)

    def status(self) -> dict:
        return {
            "processor": {
                "name": "NJSONProcessor",
                "version": __version__,
                "status": "ACTIVE",
            },
            "config": {
                "preview_length": self._config.parser.preview_length,
                "fail_fast": self._config.parser.fail_fast,
                "common_field_ratio": self._config.anomalies.common_field_ratio,
                "rare_field_ratio": self._config.anomalies.rare_field_ratio,
                "max_reported_anomalies": self._config.anomalies.max_reported,
            },
            "capabilities": list(CAPABILITIES),
        }

    # ======================================
    # Internal helpers
    # ======================================
    def _reader(self, source: Source) -> LineReader:
        return LineReader(source, encoding=self._config.parser.encoding)

    def _read(self, reader: LineReader, options: ProcessingOptions) -> ParseResult:
        fail_fast = self._config.parser.fail_fast if options.fail_fast is None else options.fail_fast
        parser = RecordParser(preview_length=self._config.parser.preview_length, fail_fast=fail_fast)
        log_event(logger, logging.DEBUG, "read_started", source=reader.description, fail_fast=fail_fast)
        return parser.parse(reader)

    def _analyzer(self) -> Analyzer:
        return Analyzer(self._config.anomalies)

    def _fail(self, operation: str, error: NJSONError) -> dict:
        log_event(logger, logging.WARNING, "call_failed", operation=operation, code=error.code, message=error.message)
        return self._assembler.failure(error)


# ==============================================
# Module-level entry points
# ==============================================
# Each call builds a fresh processor; nothing is shared across calls
# except the read-only configuration.

def parse(source: Source, options: OptionsLike = None, **kwargs: Any) -> dict:
    return NJSONProcessor(**kwargs).parse(source, options)


def validate(source: Source, schema: Any = None, options: OptionsLike = None, **kwargs: Any) -> dict:
    return NJSONProcessor(**kwargs).validate(source, schema, options)


def transform(
    source: Source,
    destination: Any,
    kind: Union[TransformKind, str],
    operation: Callable[..., Any],
    options: OptionsLike = None,
    **kwargs: Any,
) -> dict:
    return NJSONProcessor(**kwargs).transform(source, destination, kind, operation, options)


def analyze(source: Source, kind: Union[AnalysisKind, str], options: OptionsLike = None, **kwargs: Any) -> dict:
    return NJSONProcessor(**kwargs).analyze(source, kind, options)
