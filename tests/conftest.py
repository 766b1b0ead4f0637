# ==============================================
# Pytest Configuration and Fixtures
# ==============================================
#
# Shared fixtures for all tests.
#
# - sample_records   → small mixed-shape record list
# - write_ndjson     → write lines to a tmp_path NDJSON file
# - engine_config    → EngineConfig with defaults (ignores env / .env)
# - FixedChoice      → deterministic stand-in for random.Random
# ==============================================

import json

import pytest

from njson_engine.config import EngineConfig


class FixedChoice:
    """Returns the given values in order, regardless of the sequence offered."""

    def __init__(self, values):
        self._values = iter(values)

    def choice(self, seq):
        return next(self._values)


@pytest.fixture
def sample_records():
    return [
        {"username": "alice", "age": 30, "city": "NYC"},
        {"username": "bob", "age": 25, "city": "SF"},
        {"username": "carol", "score": 88.5, "tags": ["python"]},
    ]


@pytest.fixture
def write_ndjson(tmp_path):
    def _write(lines, name="records.ndjson"):
        path = tmp_path / name
        text = "\n".join(
            line if isinstance(line, str) else json.dumps(line) for line in lines
        )
        path.write_text(text + "\n", encoding="utf-8")
        return path
    return _write


@pytest.fixture
def engine_config():
    return EngineConfig()


@pytest.fixture
def fixed_choice():
    return FixedChoice
