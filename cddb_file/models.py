from __future__ import annotations

from dataclasses import dataclass
from typing import Dict


@dataclass(frozen=True, slots=True)
class Track:
    number: int
    title: str = ""
    extended_text: str = ""
    length_seconds: int = 0

    def __str__(self) -> str:
        return self.title

    def to_record(self) -> Dict[str, object]:
        return {
            "number": self.number,
            "title": self.title,
            "extended_text": self.extended_text,
            "length_seconds": self.length_seconds,
        }


class CddbFileError(Exception):
    """Base class for errors raised while interpreting a CDDB data file."""


class FormatError(CddbFileError, ValueError):
    """Raised when a data file breaks a structural assumption of the CDDB format."""
