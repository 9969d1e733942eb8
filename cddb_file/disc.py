"""
Disc parser for CDDB/freedb data files.

Fields are looked up lazily by keyword prefix in the underlying LineStore.
A logical field may be continued over several physical lines sharing the
same keyword; those are joined back together without a separator.

Track lengths are never stored in the file. They are derived from the frame
offset comments at the top of the file (75 frames per second) with the disc
length as the final boundary.
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Dict, List, Optional

from .lines import LineStore
from .models import FormatError, Track

logger = logging.getLogger(__name__)

FRAMES_PER_SECOND = 75
TITLE_SEPARATOR = " / "
# Offset comments start on the fourth line (after "# xmcd", "#", "# Track frame offsets:").
OFFSETS_FIRST_LINE = 3

DISCID = "DISCID="
DTITLE = "DTITLE="
DYEAR = "DYEAR="
DGENRE = "DGENRE="
EXTD = "EXTD="
TTITLE = "TTITLE"
EXTT = "EXTT"
REVISION = "# Revision: "
SUBMITTED_VIA = "# Submitted via: "
DISC_LENGTH = "# Disc length: "
SECONDS_SUFFIX = " seconds"


class Disc:
    """One CDDB disc record, read-only once loaded."""

    def __init__(self, lines: LineStore, source: Optional[Path] = None) -> None:
        self.lines = lines
        self.source = source
        self._lock = threading.Lock()
        self._artist_title: Optional[tuple[str, str]] = None
        self._highest_track_index: Optional[int] = None

    @classmethod
    def from_path(
        cls,
        path: Path | str,
        encoding: Optional[str] = None,
        errors: Optional[str] = None,
    ) -> "Disc":
        path = Path(path)
        return cls(LineStore.load(path, encoding=encoding, errors=errors), source=path)

    def __repr__(self) -> str:
        where = f" {self.source}" if self.source else ""
        return f"<Disc{where} id={self.id!r}>"

    # -- generic lookups -------------------------------------------------

    def field(self, keyword: str) -> str:
        return "".join(self.lines.with_prefix_stripped(keyword))

    def multi_field(self, keyword_prefix: str) -> List[str]:
        return [
            self.field(f"{keyword_prefix}{index}=")
            for index in range(self.highest_track_index + 1)
        ]

    # -- single-value fields ---------------------------------------------

    @property
    def all_ids(self) -> List[str]:
        return [value for value in self.field(DISCID).split(",") if value]

    @property
    def id(self) -> Optional[str]:
        ids = self.all_ids
        return ids[0] if ids else None

    @property
    def year(self) -> str:
        return self.field(DYEAR)

    @property
    def genre(self) -> str:
        return self.field(DGENRE)

    @property
    def extended_text(self) -> str:
        return self.field(EXTD)

    @property
    def revision(self) -> str:
        return self.field(REVISION)

    @property
    def submitted_by(self) -> str:
        return self.field(SUBMITTED_VIA)

    @property
    def length_seconds(self) -> int:
        raw = self.field(DISC_LENGTH)
        value = raw.replace(SECONDS_SUFFIX, "", 1).strip()
        if not _is_ascii_number(value):
            raise FormatError(f"Disc length is not a number of seconds: {raw!r}")
        return int(value)

    # -- artist / title --------------------------------------------------

    def _split_title(self) -> tuple[str, str]:
        pair = self._artist_title
        if pair is not None:
            return pair
        with self._lock:
            if self._artist_title is None:
                artist, _, title = self.field(DTITLE).partition(TITLE_SEPARATOR)
                # Eponymous discs may omit the title half entirely.
                self._artist_title = (artist, title or artist)
            return self._artist_title

    @property
    def artist(self) -> str:
        return self._split_title()[0]

    @property
    def title(self) -> str:
        return self._split_title()[1]

    # -- tracks ----------------------------------------------------------

    @property
    def highest_track_index(self) -> int:
        cached = self._highest_track_index
        if cached is not None:
            return cached
        with self._lock:
            if self._highest_track_index is None:
                self._highest_track_index = self._find_highest_track_index()
                logger.debug(
                    "Highest TTITLE index for %s is %d",
                    self.source or "<lines>",
                    self._highest_track_index,
                )
            return self._highest_track_index

    def _find_highest_track_index(self) -> int:
        highest: Optional[int] = None
        for rest in self.lines.with_prefix_stripped(TTITLE):
            digits, sep, _ = rest.partition("=")
            if not sep or not _is_ascii_number(digits):
                continue
            index = int(digits)
            if highest is None or index > highest:
                highest = index
        if highest is None:
            raise FormatError("No TTITLE<n>= lines found")
        return highest

    @property
    def track_count(self) -> int:
        return self.highest_track_index + 1

    @property
    def frame_offsets(self) -> List[int]:
        count = self.track_count
        offsets: List[int] = []
        for index in range(OFFSETS_FIRST_LINE, OFFSETS_FIRST_LINE + count):
            if index >= len(self.lines):
                raise FormatError(
                    f"Expected {count} frame offset line(s) from line {OFFSETS_FIRST_LINE}, "
                    f"file ends at line {len(self.lines)}"
                )
            offsets.append(_parse_offset_line(self.lines[index], index))
        return offsets

    def _track_boundaries(self) -> List[int]:
        offsets = self.frame_offsets
        end = self.length_seconds * FRAMES_PER_SECOND
        if offsets[-1] > end:
            logger.debug(
                "Last frame offset %d of %s is past the disc end at frame %d",
                offsets[-1],
                self.source or "<lines>",
                end,
            )
        return offsets + [end]

    def tracks(self) -> List[Track]:
        titles = self.multi_field(TTITLE)
        extended = self.multi_field(EXTT)
        bounds = self._track_boundaries()
        return [
            Track(
                number=index + 1,
                title=titles[index],
                extended_text=extended[index],
                length_seconds=(bounds[index + 1] - bounds[index]) // FRAMES_PER_SECOND,
            )
            for index in range(self.track_count)
        ]

    def to_record(self) -> Dict[str, object]:
        return {
            "ids": self.all_ids,
            "artist": self.artist,
            "title": self.title,
            "year": self.year,
            "genre": self.genre,
            "extended_text": self.extended_text,
            "revision": self.revision,
            "submitted_by": self.submitted_by,
            "length_seconds": self.length_seconds,
            "tracks": [track.to_record() for track in self.tracks()],
        }


def _is_ascii_number(value: str) -> bool:
    return value.isascii() and value.isdigit()


def _parse_offset_line(line: str, index: int) -> int:
    if not line.startswith("#"):
        raise FormatError(f"Line {index} is not a frame offset comment: {line!r}")
    body = line[1:]
    value = body.strip()
    if not body[:1].isspace() or not _is_ascii_number(value):
        raise FormatError(f"Line {index} is not a frame offset comment: {line!r}")
    return int(value)
