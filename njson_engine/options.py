# ==============================================
# ProcessingOptions
# ==============================================
#
# PURPOSE:
#   Per-call switches handed in by the collaborator.
#   Accepts the camelCase keys used on the wire
#   (failFast, includeRecords, ...) as well as snake_case.
#
# ==============================================

from dataclasses import dataclass, fields
from typing import Any, Dict, Mapping, Optional, Union

from njson_engine.config import to_bool


_ALIASES = {
    "failFast": "fail_fast",
    "includeRecords": "include_records",
    "includeErrors": "include_errors",
    "domainTagging": "domain_tagging",
    "frameworkTranslation": "framework_translation",
}


@dataclass
class ProcessingOptions:
    """Options recognized by every engine entry point."""

    fail_fast: Optional[bool] = None  # None → fall back to ParserConfig.fail_fast
    include_records: bool = True
    include_errors: bool = True
    domain_tagging: bool = False
    framework_translation: bool = False
    pretty: bool = False

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "ProcessingOptions":
        """
        Build options from a plain mapping.

        Unknown keys are ignored.

        Args:
            data: Mapping with camelCase or snake_case option names

        Returns:
            A ProcessingOptions instance
        """
        if not data:
            return cls()

        known = {f.name for f in fields(cls)}
        kwargs = {}
        for key, value in data.items():
            name = _ALIASES.get(key, key)
            if name in known:
                kwargs[name] = value if value is None else to_bool(value)
        return cls(**kwargs)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "failFast": self.fail_fast,
            "includeRecords": self.include_records,
            "includeErrors": self.include_errors,
            "domainTagging": self.domain_tagging,
            "frameworkTranslation": self.framework_translation,
            "pretty": self.pretty,
        }


OptionsLike = Union[ProcessingOptions, Mapping[str, Any], None]


def coerce_options(options: OptionsLike) -> ProcessingOptions:
    if isinstance(options, ProcessingOptions):
        return options
    return ProcessingOptions.from_dict(options)
