# ==============================================
# TOPIC 3: TRANSFORMATION
# ==============================================
#
# Modules:
# --------
# - engine.py        → TransformEngine, TransformKind, TransformOutput
# - operations.py    → Ready-made predicates / mappers / key functions
# - domain_tagger.py → Cosmetic random domain labels
#
# ==============================================

from .domain_tagger import DOMAIN_KEY, DOMAIN_LABELS, DomainTagger
from .engine import TransformEngine, TransformKind, TransformOutput
from .operations import by_field, count_by_field, field_equals, has_field, pick_fields

__all__ = [
    "DOMAIN_KEY",
    "DOMAIN_LABELS",
    "DomainTagger",
    "TransformEngine",
    "TransformKind",
    "TransformOutput",
    "by_field",
    "count_by_field",
    "field_equals",
    "has_field",
    "pick_fields",
]
