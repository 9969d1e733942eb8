from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Sequence
from pathlib import Path
from typing import Optional, overload

logger = logging.getLogger(__name__)


class LineStore(Sequence[str]):
    """Verbatim lines of a CDDB data file, terminators removed, in file order."""

    __slots__ = ("_lines",)

    def __init__(self, lines: Iterable[str] = ()) -> None:
        self._lines: tuple[str, ...] = tuple(lines)

    @classmethod
    def load(
        cls,
        path: Path | str,
        encoding: Optional[str] = None,
        errors: Optional[str] = None,
    ) -> "LineStore":
        path = Path(path)
        with path.open("r", encoding=encoding, errors=errors) as fh:
            lines = [line[:-1] if line.endswith("\n") else line for line in fh]
        logger.debug("Loaded %d line(s) from %s", len(lines), path)
        return cls(lines)

    def with_prefix_stripped(self, keyword: str) -> Iterator[str]:
        size = len(keyword)
        for line in self._lines:
            if line.startswith(keyword):
                yield line[size:]

    @overload
    def __getitem__(self, index: int) -> str: ...

    @overload
    def __getitem__(self, index: slice) -> tuple[str, ...]: ...

    def __getitem__(self, index):
        return self._lines[index]

    def __len__(self) -> int:
        return len(self._lines)

    def __iter__(self) -> Iterator[str]:
        return iter(self._lines)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, LineStore):
            return self._lines == other._lines
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._lines)

    def __repr__(self) -> str:
        return f"LineStore({len(self._lines)} lines)"
