# ==============================================
# Configuration Management
# ==============================================
#
# PURPOSE:
#   Load and validate engine configuration from environment
#   variables / .env file. Provides typed config objects
#   to all other modules.
#
# CLASSES:
# --------
# - ParserConfig (dataclass)
#     preview_length: int    (default 50)
#     fail_fast: bool        (default False)
#     encoding: str          (default "utf-8")
#
# - AnomalyThresholds (dataclass)
#     common_field_ratio: float  (default 0.5, strict ">")
#     rare_field_ratio: float    (default 0.1, inclusive "<=")
#     max_reported: int          (default 10)
#
# - OutputConfig (dataclass)
#     indent: int            (default 2)
#
# - EngineConfig (dataclass)
#     parser: ParserConfig
#     anomalies: AnomalyThresholds
#     output: OutputConfig
#     log_level: str         (default "WARNING")
#
# FUNCTION:
# ---------
# - get_config() -> EngineConfig
#     Load .env using python-dotenv, construct EngineConfig.
#     Returns the same singleton on repeated calls.
#
# USAGE:
# ------
#   from njson_engine.config import get_config
#   config = get_config()
#   print(config.parser.preview_length)
#   print(config.anomalies.rare_field_ratio)
#
# ==============================================

import os
from dataclasses import dataclass, field
from typing import Optional
from pathlib import Path

from dotenv import load_dotenv


_TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass
class ParserConfig:
    """Line parsing configuration."""
    preview_length: int = 50
    fail_fast: bool = False
    encoding: str = "utf-8"


@dataclass
class AnomalyThresholds:
    """
    Thresholds that control anomaly detection.

    A field is "common" when it appears in MORE than common_field_ratio of
    records, and "rare" when it appears in AT MOST rare_field_ratio of them.
    """

    common_field_ratio: float = 0.5
    rare_field_ratio: float = 0.1
    max_reported: int = 10


@dataclass
class OutputConfig:
    """Serialization settings for documents written by transforms."""
    indent: int = 2


@dataclass
class EngineConfig:
    """Main engine configuration."""
    parser: ParserConfig = field(default_factory=ParserConfig)
    anomalies: AnomalyThresholds = field(default_factory=AnomalyThresholds)
    output: OutputConfig = field(default_factory=OutputConfig)
    log_level: str = "WARNING"


# Singleton instance
_config_instance: Optional[EngineConfig] = None


def to_bool(value) -> bool:
    """Interpret "true" / "false" style strings; other values by truthiness."""
    if isinstance(value, str):
        return value.strip().lower() in _TRUE_VALUES
    return bool(value)


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return to_bool(raw)


def get_config() -> EngineConfig:
    """
    Load configuration from environment variables / .env file.
    Returns the same singleton instance on repeated calls.

    Returns:
        EngineConfig: Engine configuration
    """
    global _config_instance

    if _config_instance is not None:
        return _config_instance

    # Load .env file from project root
    env_path = Path(__file__).parent.parent / ".env"
    load_dotenv(dotenv_path=env_path)

    parser_config = ParserConfig(
        preview_length=int(os.getenv("NJSON_PREVIEW_LENGTH", "50")),
        fail_fast=_env_bool("NJSON_FAIL_FAST", False),
        encoding=os.getenv("NJSON_ENCODING", "utf-8"),
    )

    anomaly_thresholds = AnomalyThresholds(
        common_field_ratio=float(os.getenv("NJSON_COMMON_FIELD_RATIO", "0.5")),
        rare_field_ratio=float(os.getenv("NJSON_RARE_FIELD_RATIO", "0.1")),
        max_reported=int(os.getenv("NJSON_MAX_REPORTED_ANOMALIES", "10")),
    )

    output_config = OutputConfig(
        indent=int(os.getenv("NJSON_OUTPUT_INDENT", "2")),
    )

    _config_instance = EngineConfig(
        parser=parser_config,
        anomalies=anomaly_thresholds,
        output=output_config,
        log_level=os.getenv("NJSON_LOG_LEVEL", "WARNING").upper(),
    )

    return _config_instance
