import random
from typing import Any, Dict, List, Optional, Protocol, Sequence


DOMAIN_LABELS = (
    "music",
    "science",
    "philosophy",
    "art",
    "technology",
    "history",
    "psychology",
    "literature",
    "mathematics",
)

DOMAIN_KEY = "_domain"


class ChoiceSource(Protocol):
    def choice(self, seq: Sequence[Any]) -> Any: ...


class DomainTagger:
    """
    Annotates transform output with a random domain label.

    Cosmetic metadata only. The randomness source is injectable so tests
    can pin the sequence; by default a fresh, unseeded Random is used.
    """

    def __init__(self, rng: Optional[ChoiceSource] = None, labels: Sequence[str] = DOMAIN_LABELS):
        self.rng = rng or random.Random()
        self.labels = tuple(labels)

    def tag(self, value: Any) -> Dict[str, Any]:
        label = self.rng.choice(self.labels)
        if isinstance(value, dict):
            tagged = dict(value)
        else:
            tagged = {"value": value}
        tagged[DOMAIN_KEY] = label
        return tagged

    def tag_all(self, values: List[Any]) -> List[Dict[str, Any]]:
        return [self.tag(value) for value in values]
