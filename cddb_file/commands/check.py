from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from ..config import Settings
from ..disc import Disc
from ..models import CddbFileError
from .output import error, ok

logger = logging.getLogger(__name__)

TEXT_FIELDS = (
    "id",
    "all_ids",
    "artist",
    "title",
    "year",
    "genre",
    "extended_text",
    "revision",
    "submitted_by",
)


@dataclass(slots=True)
class CheckReport:
    ok: bool
    checks: list[str]


def check_disc(disc: Disc) -> str:
    """Touch every accessor; returns a short summary or raises."""
    for name in TEXT_FIELDS:
        getattr(disc, name)
    tracks = disc.tracks()
    total = sum(track.length_seconds for track in tracks)
    length = disc.length_seconds
    if total > length:
        logger.warning(
            "Track lengths of %s add up to %ds, more than the disc length %ds",
            disc.source,
            total,
            length,
        )
    return f"{len(tracks)} tracks, {length}s"


def run(settings: Settings, paths: list[Path]) -> CheckReport:
    checks: list[str] = []
    all_ok = True
    for path in paths:
        try:
            disc = Disc.from_path(
                path, encoding=settings.parser.encoding, errors=settings.parser.errors
            )
            summary = check_disc(disc)
        except (OSError, UnicodeDecodeError, CddbFileError) as exc:
            all_ok = False
            checks.append(error(str(path), str(exc)))
            continue
        checks.append(ok(str(path), summary))
    return CheckReport(ok=all_ok, checks=checks)
