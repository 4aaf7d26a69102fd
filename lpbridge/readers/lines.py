"""Forward-only line access over solver output streams."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path
from typing import IO

from lpbridge.errors import ChannelError


class LineReader:
    """Iterate a byte (or text) stream one line at a time.

    Lines are produced lazily with their terminator removed. The reader is
    single-pass: a consumed line cannot be read again. A failure to read or
    decode a line raises ``ChannelError`` from ``next()`` for that line.
    """

    def __init__(self, stream: IO[bytes] | IO[str], encoding: str = "utf-8") -> None:
        self._stream = stream
        self._encoding = encoding
        self.line_number = 0

    @classmethod
    def from_path(cls, path: str | Path, encoding: str = "utf-8") -> "LineReader":
        try:
            stream = Path(path).open("rb")
        except OSError as exc:
            raise ChannelError(f"could not open solution file '{path}': {exc}") from exc
        return cls(stream, encoding=encoding)

    def __iter__(self) -> Iterator[str]:
        return self

    def __next__(self) -> str:
        try:
            raw = self._stream.readline()
        except OSError as exc:
            raise ChannelError(f"could not read line {self.line_number + 1}: {exc}") from exc
        if not raw:
            raise StopIteration

        self.line_number += 1
        if isinstance(raw, bytes):
            try:
                raw = raw.decode(self._encoding)
            except UnicodeDecodeError as exc:
                raise ChannelError(f"could not decode line {self.line_number}: {exc}") from exc
        return raw.rstrip("\r\n")

    def close(self) -> None:
        self._stream.close()

    def __enter__(self) -> "LineReader":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
