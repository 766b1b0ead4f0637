# ==============================================
# FieldStats
# ==============================================
#
# PURPOSE:
#   Data class that holds all observed statistics for a single
#   top-level field. This is the evidence the pattern, statistics
#   and anomaly analyses read from.
#
# CLASS: FieldStats (dataclass)
# -----------------------------
#   Attributes:
#   -----------
#   - name: str                     → Field name
#   - presence_count: int           → How many records contain this field
#   - last_type: str | None         → Type seen on the most recent record
#   - format_counts: dict[str, int] → Recognized string formats {"uuid": 10}
#
#   Methods:
#   --------
#   - update(detected_type, detected_format) -> None
#
# ==============================================

from dataclasses import dataclass, field
from typing import Dict, Optional


@dataclass
class FieldStats:
    """
    Holds observed statistics for a single field across many records.
    """

    name: str

    presence_count: int = 0  # How many records carried the field

    # --- Last observation (patterns report is last-write-wins) ---
    last_type: Optional[str] = None

    # --- String formats (ip, uuid, datetime, email, url) ---
    format_counts: Dict[str, int] = field(default_factory=dict)

    def update(self, detected_type: str, detected_format: Optional[str] = None) -> None:
        """
        Update statistics based on a newly observed value.

        Args:
            detected_type: JSON type name of the value
            detected_format: Recognized string format, if any
        """
        self.presence_count += 1
        self.last_type = detected_type

        if detected_format:
            self.format_counts[detected_format] = self.format_counts.get(detected_format, 0) + 1
