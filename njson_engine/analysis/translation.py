"""Framework translation: a cosmetic word-substitution pass over reports.

Kept apart from the analyses themselves; it only ever sees the serialized
report text.
"""

import json
import re
from typing import Any, Dict, List, Tuple

TRANSLATIONS: List[Tuple[str, str]] = [
    ("error", "issue detected"),
    ("warning", "attention required"),
    ("successful", "completed"),
    ("failed", "blocked"),
]

_COMPILED = [(re.compile(word, re.IGNORECASE), replacement) for word, replacement in TRANSLATIONS]


def translate_text(text: str) -> str:
    for pattern, replacement in _COMPILED:
        text = pattern.sub(replacement, text)
    return text


def apply_translation(report: Dict[str, Any]) -> Dict[str, Any]:
    """Return a copy of the report with a translated textual summary attached."""
    translated = dict(report)
    translated["summary"] = translate_text(json.dumps(report, sort_keys=True, default=str))
    translated["communication_style"] = "professional"
    translated["direct_response"] = True
    return translated
