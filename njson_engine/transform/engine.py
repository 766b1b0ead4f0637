# ==============================================
# TransformEngine
# ==============================================
#
# PURPOSE:
#   Apply one named operation to a full decoded record sequence,
#   using a caller-supplied Python callable. Callables are passed
#   as values; the engine never evaluates expression strings.
#
# OPERATIONS:
# -----------
#   - filter    → keep records where operation(record) is truthy
#   - map       → replace each record with operation(record)
#   - reduce    → fold with operation(acc, record), seed {}
#   - aggregate → group by operation(record), ordered by first-seen
#                 key: [{"group": key, "count": n, "records": [...]}]
#
# OUTPUT:
# -------
#   Sequence results serialize as one compact JSON document per
#   line, newline-joined. Scalar (reduce) results serialize as one
#   document, indented when the caller asks for pretty output.
#
# ==============================================

import json
import logging
import os
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Union

from njson_engine.errors import DestinationUnavailable, InvalidOperation, UnknownTransform
from njson_engine.logging_utils import log_event
from .domain_tagger import DomainTagger

logger = logging.getLogger(__name__)


class TransformKind(Enum):
    FILTER = "filter"
    MAP = "map"
    REDUCE = "reduce"
    AGGREGATE = "aggregate"

    @classmethod
    def resolve(cls, kind: Union["TransformKind", str, None]) -> "TransformKind":
        if isinstance(kind, cls):
            return kind
        try:
            return cls(str(kind).strip().lower())
        except ValueError:
            raise UnknownTransform(kind) from None


@dataclass
class TransformOutput:
    """Result of one transform, before serialization."""

    kind: TransformKind
    value: Any
    is_sequence: bool

    @property
    def output_records(self) -> int:
        return len(self.value) if self.is_sequence else 1


def _group_token(key: Any) -> Any:
    try:
        hash(key)
        return ("hashable", key)
    except TypeError:
        return ("canonical", json.dumps(key, sort_keys=True, default=str))


class TransformEngine:
    """
    Runs filter / map / reduce / aggregate over decoded records.
    """

    def __init__(self, tagger: Optional[DomainTagger] = None):
        self.tagger = tagger or DomainTagger()

    def apply(
        self,
        kind: Union[TransformKind, str],
        records: List[Any],
        operation: Callable[..., Any],
        domain_tagging: bool = False,
    ) -> TransformOutput:
        """
        Apply a transform to the records.

        Args:
            kind: Operation kind (enum or its string name)
            records: Decoded records, in source order
            operation: Predicate / mapper / reducer / key function
            domain_tagging: Annotate each result with a domain label

        Returns:
            TransformOutput

        Raises:
            UnknownTransform: kind is not one of filter/map/reduce/aggregate
            InvalidOperation: operation is not callable
        """
        kind = TransformKind.resolve(kind)
        if not callable(operation):
            raise InvalidOperation(
                f"Transform operation must be callable, got {type(operation).__name__}",
                kind=kind.value,
            )

        if kind is TransformKind.FILTER:
            output = TransformOutput(kind, [r for r in records if operation(r)], True)
        elif kind is TransformKind.MAP:
            output = TransformOutput(kind, [operation(r) for r in records], True)
        elif kind is TransformKind.REDUCE:
            acc: Any = {}
            for record in records:
                acc = operation(acc, record)
            output = TransformOutput(kind, acc, False)
        else:
            output = TransformOutput(kind, self._aggregate(records, operation), True)

        if domain_tagging:
            if output.is_sequence:
                output.value = self.tagger.tag_all(output.value)
            else:
                output.value = self.tagger.tag(output.value)

        log_event(
            logger,
            logging.INFO,
            "transform_applied",
            kind=kind.value,
            input_records=len(records),
            output_records=output.output_records,
            domain_tagging=domain_tagging,
        )
        return output

    def _aggregate(self, records: List[Any], key_fn: Callable[[Any], Any]) -> List[Dict[str, Any]]:
        groups: Dict[Any, Dict[str, Any]] = {}
        for record in records:
            key = key_fn(record)
            token = _group_token(key)
            if token not in groups:
                # dict keeps first-seen order
                groups[token] = {"group": key, "count": 0, "records": []}
            groups[token]["records"].append(record)
            groups[token]["count"] += 1
        return list(groups.values())

    @staticmethod
    def serialize(output: TransformOutput, pretty: bool = False, indent: int = 2) -> str:
        if output.is_sequence:
            return "\n".join(
                json.dumps(item, ensure_ascii=False, separators=(",", ":"))
                for item in output.value
            )
        if pretty:
            return json.dumps(output.value, ensure_ascii=False, indent=indent)
        return json.dumps(output.value, ensure_ascii=False, separators=(",", ":"))

    @staticmethod
    def write(text: str, destination: Any) -> str:
        """
        Write serialized output to a path or a writable text handle.

        Returns:
            A printable description of the destination
        """
        if hasattr(destination, "write"):
            destination.write(text)
            return getattr(destination, "name", "<stream>")

        path = os.fspath(destination)
        try:
            with open(path, "w", encoding="utf-8", newline="\n") as f:
                f.write(text)
        except OSError as exc:
            raise DestinationUnavailable(
                f"Cannot write destination '{path}': {exc.strerror or exc}",
                path=path,
            ) from exc
        log_event(logger, logging.DEBUG, "transform_written", path=path, chars=len(text))
        return path
