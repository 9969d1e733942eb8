from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import yaml
from pydantic import BaseModel, Field, field_validator


class ParserSettings(BaseModel):
    encoding: Optional[str] = None
    errors: Optional[str] = None


class LibrarySettings(BaseModel):
    roots: List[Path] = Field(default_factory=list)
    exclude_patterns: List[str] = Field(default_factory=list)
    categories: List[str] = Field(default_factory=list)

    @field_validator("roots", mode="before")
    @classmethod
    def _expand_roots(cls, values: List[str]) -> List[Path]:
        return [Path(v).expanduser().resolve() for v in values]


class OutputSettings(BaseModel):
    json_indent: int = 2
    show_extended: bool = True


class Settings(BaseModel):
    parser: ParserSettings = ParserSettings()
    library: LibrarySettings = LibrarySettings()
    output: OutputSettings = OutputSettings()

    @classmethod
    def load(cls, path: Path) -> "Settings":
        with path.open("r", encoding="utf-8") as fh:
            raw = yaml.safe_load(fh)
        return cls.model_validate(raw or {})


def find_config(explicit_path: Optional[Path]) -> Optional[Path]:
    if explicit_path:
        return explicit_path
    cwd = Path.cwd()
    for candidate in (cwd / "cddb.yaml", cwd / "cddb.yml"):
        if candidate.exists():
            return candidate
    return None
