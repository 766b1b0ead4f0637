# ==============================================
# TOPIC 2: VALIDATION
# ==============================================
#
# Modules:
# --------
# - schema.py    → SchemaDescriptor (properties + required)
# - validator.py → Validator, ValidationFinding, ValidationOutcome
#
# ==============================================

from .schema import SchemaDescriptor
from .validator import FindingKind, ValidationFinding, ValidationOutcome, Validator

__all__ = [
    "FindingKind",
    "SchemaDescriptor",
    "ValidationFinding",
    "ValidationOutcome",
    "Validator",
]
