# ==============================================
# LineReader
# ==============================================
#
# PURPOSE:
#   Turn a source handle into a lazy sequence of raw lines.
#   File-backed sources are read one line at a time and are
#   never loaded into memory as a whole.
#
# SOURCE KINDS:
# -------------
#   - os.PathLike           → filesystem path, re-opened per iteration
#   - str                   → path when it names an existing file and
#                             holds no line break, otherwise NDJSON text
#   - bytes / bytearray     → in-memory UTF-8 buffer
#   - file object / iterable of str or bytes → streamed once, as given
#   - LineReader.from_text(text)    → in-memory text buffer
#
# Each yielded line has its trailing "\n" / "\r\n" removed and
# is otherwise untouched, so error previews show what was there.
# Undecodable bytes become U+FFFD, so a bad byte affects only the
# line that carries it.
#
# ==============================================

import io
import logging
import os
from typing import Iterable, Iterator, Optional, Union

from njson_engine.errors import SourceUnavailable
from njson_engine.logging_utils import log_event

logger = logging.getLogger(__name__)

Source = Union[str, "os.PathLike[str]", bytes, bytearray, Iterable[str]]


def _strip_line_ending(line: str) -> str:
    if line.endswith("\n"):
        line = line[:-1]
    if line.endswith("\r"):
        line = line[:-1]
    return line


def _names_file(text: str) -> bool:
    if "\n" in text or "\r" in text:
        return False
    return os.path.exists(text)


class LineReader:
    """
    Lazily yields raw lines from a path, buffer or stream.
    """

    def __init__(self, source: Source, encoding: str = "utf-8"):
        if source is None:
            raise SourceUnavailable("No source given")
        self.source = source
        self.encoding = encoding
        self._text: Optional[str] = None

        if isinstance(source, (bytes, bytearray)):
            self._text = bytes(source).decode(encoding, errors="replace")
        elif isinstance(source, str) and not _names_file(source):
            self._text = source

    @classmethod
    def from_text(cls, text: str) -> "LineReader":
        """Build a reader over in-memory text, even if it looks like a path."""
        return cls(text.encode("utf-8"), encoding="utf-8")

    @property
    def is_path(self) -> bool:
        return self._text is None and isinstance(self.source, (str, os.PathLike))

    @property
    def description(self) -> str:
        if self.is_path:
            return os.fspath(self.source)
        if self._text is not None:
            return "<memory>"
        return getattr(self.source, "name", "<stream>")

    def __iter__(self) -> Iterator[str]:
        if self._text is not None:
            yield from self._iter_stream(io.StringIO(self._text, newline="\n"))
        elif self.is_path:
            yield from self._iter_path(os.fspath(self.source))
        else:
            yield from self._iter_stream(self.source)

    def _iter_path(self, path: str) -> Iterator[str]:
        try:
            handle = open(path, "r", encoding=self.encoding, errors="replace", newline="\n")
        except OSError as exc:
            log_event(logger, logging.WARNING, "source_unavailable", path=path, reason=str(exc))
            raise SourceUnavailable(f"Cannot open source '{path}': {exc.strerror or exc}", path=path) from exc

        log_event(logger, logging.DEBUG, "source_opened", path=path)
        with handle:
            for line in handle:
                yield _strip_line_ending(line)

    def _iter_stream(self, stream: Iterable[str]) -> Iterator[str]:
        try:
            iterator = iter(stream)
        except TypeError as exc:
            raise SourceUnavailable(f"Unsupported source type: {type(stream).__name__}") from exc

        for line in iterator:
            if isinstance(line, (bytes, bytearray)):
                line = bytes(line).decode(self.encoding, errors="replace")
            yield _strip_line_ending(line)
