from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from ..config import LibrarySettings, Settings
from ..models import CddbFileError
from ..scanner import FreedbScanner

logger = logging.getLogger(__name__)


def run(settings: Settings, roots: Optional[list[Path]] = None) -> int:
    library = settings.library
    if roots:
        library = LibrarySettings(
            roots=[str(root) for root in roots],
            exclude_patterns=library.exclude_patterns,
            categories=library.categories,
        )
    scanner = FreedbScanner(library)
    parsed = 0
    failed = 0
    for disc_file, disc in scanner.iter_discs(settings.parser):
        try:
            count = disc.track_count
            line = f"{disc_file.label()}: {disc.artist} - {disc.title} ({count} tracks)"
        except CddbFileError as exc:
            failed += 1
            logger.warning("Malformed data file %s: %s", disc_file.path, exc)
            continue
        parsed += 1
        print(line)
    print(f"Scan complete: {parsed} disc(s) parsed, {failed} malformed.")
    return parsed
