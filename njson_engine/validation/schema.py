# ==============================================
# SchemaDescriptor
# ==============================================
#
# PURPOSE:
#   The narrow, recognized-options schema a caller hands to the
#   validator. Only two keys are understood:
#
#     {
#       "properties": {"<field>": {"type": "<json type>"}, ...},
#       "required":   ["<field>", ...]
#     }
#
#   Any other key is ignored. Type names are limited to
#   string, number, boolean, object, array, null.
#
# ==============================================

import json
import os
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Union

from njson_engine.errors import SchemaError
from njson_engine.reading.type_detector import TypeDetector


@dataclass
class SchemaDescriptor:
    """Declared per-field types plus the list of required fields."""

    properties: Dict[str, Optional[str]] = field(default_factory=dict)
    # field_name → declared type name (None when no type was declared)
    required: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SchemaDescriptor":
        """
        Build a descriptor from a decoded schema document.

        Args:
            data: Mapping with "properties" and optional "required"

        Returns:
            A SchemaDescriptor

        Raises:
            SchemaError: if the document shape or a type name is not recognized
        """
        if not isinstance(data, Mapping):
            raise SchemaError("Schema must be a JSON object")

        raw_properties = data.get("properties") or {}
        if not isinstance(raw_properties, Mapping):
            raise SchemaError("Schema 'properties' must be an object")

        properties: Dict[str, Optional[str]] = {}
        for name, spec in raw_properties.items():
            if not isinstance(spec, Mapping):
                raise SchemaError(f"Schema property '{name}' must be an object")
            type_name = spec.get("type")
            if type_name is not None and type_name not in TypeDetector.TYPE_NAMES:
                raise SchemaError(
                    f"Schema property '{name}' has unrecognized type '{type_name}'",
                    field=name,
                    allowed=list(TypeDetector.TYPE_NAMES),
                )
            properties[name] = type_name

        raw_required = data.get("required") or []
        if not isinstance(raw_required, list) or not all(isinstance(r, str) for r in raw_required):
            raise SchemaError("Schema 'required' must be a list of field names")

        # Keep declaration order, drop duplicates
        required = list(dict.fromkeys(raw_required))
        return cls(properties=properties, required=required)

    @classmethod
    def load(cls, schema: Union["SchemaDescriptor", Mapping[str, Any], str, "os.PathLike[str]"]) -> "SchemaDescriptor":
        """Accept a descriptor, a decoded mapping, or a path to a schema JSON file."""
        if isinstance(schema, SchemaDescriptor):
            return schema
        if isinstance(schema, Mapping):
            return cls.from_dict(schema)
        if isinstance(schema, (str, os.PathLike)):
            path = os.fspath(schema)
            try:
                with open(path, "r", encoding="utf-8") as f:
                    data = json.load(f)
            except OSError as exc:
                raise SchemaError(f"Cannot read schema '{path}': {exc.strerror or exc}", path=path) from exc
            except ValueError as exc:
                raise SchemaError(f"Schema '{path}' is not valid JSON: {exc}", path=path) from exc
            return cls.from_dict(data)
        raise SchemaError(f"Unsupported schema type: {type(schema).__name__}")
