from __future__ import annotations

import fnmatch
import logging
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .config import LibrarySettings, ParserSettings
from .disc import Disc

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class DiscFile:
    path: Path
    category: Optional[str] = None

    @property
    def disc_id(self) -> str:
        return self.path.name

    def label(self) -> str:
        if self.category:
            return f"{self.category}/{self.disc_id}"
        return self.disc_id

    def open(self, settings: Optional[ParserSettings] = None) -> Disc:
        settings = settings or ParserSettings()
        return Disc.from_path(self.path, encoding=settings.encoding, errors=settings.errors)


class FreedbScanner:
    """Walks freedb-style <root>/<category>/<discid> trees."""

    def __init__(self, settings: LibrarySettings) -> None:
        self.settings = settings
        self._categories = {name.lower() for name in self.settings.categories}

    def iter_disc_files(self) -> Iterator[DiscFile]:
        for root in self.settings.roots:
            if not root.exists():
                logger.warning("Library root %s does not exist", root)
                continue
            for file_path in sorted(root.rglob("*")):
                if not file_path.is_file():
                    continue
                rel = file_path.relative_to(root)
                category = rel.parts[0] if len(rel.parts) > 1 else None
                if not self._should_include(rel, category):
                    continue
                yield DiscFile(path=file_path, category=category)

    def iter_discs(
        self, parser_settings: Optional[ParserSettings] = None
    ) -> Iterator[tuple[DiscFile, Disc]]:
        for disc_file in self.iter_disc_files():
            try:
                disc = disc_file.open(parser_settings)
            except (OSError, UnicodeDecodeError) as exc:
                logger.warning("Skipping unreadable file %s: %s", disc_file.path, exc)
                continue
            yield disc_file, disc

    def _should_include(self, rel: Path, category: Optional[str]) -> bool:
        if any(part.startswith(".") for part in rel.parts):
            return False
        if self._categories and (category or "").lower() not in self._categories:
            return False
        for pattern in self.settings.exclude_patterns:
            if fnmatch.fnmatch(str(rel), pattern) or fnmatch.fnmatch(rel.name, pattern):
                return False
        return True
