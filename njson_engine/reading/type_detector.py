import re
import ipaddress
from datetime import datetime
from typing import Any, Optional


class TypeDetector:
    """
    Maps decoded JSON values onto JSON type names, and recognizes a few
    well-known string formats for pattern analysis.
    """

    TYPE_NAMES = ("string", "number", "boolean", "object", "array", "null")

    UUID_PATTERN = re.compile(
        r'^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$',
        re.IGNORECASE
    )

    EMAIL_PATTERN = re.compile(r'^[^@\s]+@[^@\s]+\.[A-Za-z]{2,}$')

    URL_PATTERN = re.compile(r'^[a-z][a-z0-9+.-]*://\S+$', re.IGNORECASE)

    DATETIME_FORMATS = [
        "%Y-%m-%dT%H:%M:%SZ",
        "%Y-%m-%dT%H:%M:%S.%fZ",
        "%Y-%m-%dT%H:%M:%S",
        "%Y-%m-%dT%H:%M:%S.%f",
        "%Y-%m-%d %H:%M:%S",
        "%Y-%m-%d",
        "%d/%m/%Y",
        "%m/%d/%Y",
        "%Y/%m/%d",
    ]

    @classmethod
    def detect(cls, value: Any) -> str:
        if value is None:
            return "null"

        # bool is an int subclass, check it first
        if isinstance(value, bool):
            return "boolean"

        if isinstance(value, (int, float)):
            return "number"

        if isinstance(value, str):
            return "string"

        if isinstance(value, list):
            return "array"

        if isinstance(value, dict):
            return "object"

        return "string"

    @classmethod
    def detect_format(cls, value: Any) -> Optional[str]:
        """Return the recognized format of a string value, or None."""
        if not isinstance(value, str):
            return None

        value_stripped = value.strip()
        if not value_stripped:
            return None

        if cls._is_ip_address(value_stripped):
            return "ip"

        if cls._is_uuid(value_stripped):
            return "uuid"

        if cls._is_datetime(value_stripped):
            return "datetime"

        if cls.EMAIL_PATTERN.match(value_stripped):
            return "email"

        if cls.URL_PATTERN.match(value_stripped):
            return "url"

        return None

    @classmethod
    def _is_ip_address(cls, value: str) -> bool:
        try:
            ipaddress.ip_address(value)
            return True
        except ValueError:
            return False

    @classmethod
    def _is_uuid(cls, value: str) -> bool:
        return bool(cls.UUID_PATTERN.match(value))

    @classmethod
    def _is_datetime(cls, value: str) -> bool:
        return cls._parse_datetime(value) is not None

    @classmethod
    def _parse_datetime(cls, value: str) -> Optional[datetime]:
        for fmt in cls.DATETIME_FORMATS:
            try:
                return datetime.strptime(value, fmt)
            except ValueError:
                continue
        return None
