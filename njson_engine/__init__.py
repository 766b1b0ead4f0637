# ==============================================
# NJSON Engine
# ==============================================
#
# Streaming processor for newline-delimited JSON:
# parse, validate, transform and analyze one source per call.
#
# Package Structure (4 Topics + Orchestrator):
#
# njson_engine/
# ├── reading/          # Topic 1: Raw lines → decoded records + errors
# ├── validation/       # Topic 2: Schema descriptor checks
# ├── transform/        # Topic 3: filter / map / reduce / aggregate
# ├── analysis/         # Topic 4: Structure, patterns, statistics, anomalies
# ├── results.py        # Result assembly
# ├── options.py        # Per-call options
# ├── config.py         # Configuration management
# ├── errors.py         # Error taxonomy
# └── processor.py      # Final orchestrator class + entry points
#
# ==============================================

__version__ = "0.1.0"

from njson_engine.errors import (
    DecodeError,
    DestinationUnavailable,
    InvalidOperation,
    NJSONError,
    SchemaError,
    SourceUnavailable,
    UnknownAnalysis,
    UnknownTransform,
)
from njson_engine.options import ProcessingOptions
from njson_engine.processor import NJSONProcessor, analyze, parse, transform, validate

__all__ = [
    "DecodeError",
    "DestinationUnavailable",
    "InvalidOperation",
    "NJSONError",
    "NJSONProcessor",
    "ProcessingOptions",
    "SchemaError",
    "SourceUnavailable",
    "UnknownAnalysis",
    "UnknownTransform",
    "analyze",
    "parse",
    "transform",
    "validate",
]
